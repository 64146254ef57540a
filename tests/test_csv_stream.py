"""
tests/test_csv_stream.py

Pytest unit tests for CSV preview, header and row streaming.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from app.parsers.csv_stream import SourceUnavailableError, iter_rows, preview, read_headers


def test_preview_is_bounded_and_repeatable(write_csv) -> None:
    lines = ["sku,name"] + [f"{index},item {index}" for index in range(25)]
    path = write_csv("many.csv", "\n".join(lines) + "\n")

    first = preview(path)
    second = preview(path)

    assert len(first) == 10
    assert first == second
    assert first[0] == {"sku": "0", "name": "item 0"}
    assert len(preview(path, max_rows=3)) == 3
    assert preview(path, max_rows=0) == []


def test_preview_of_short_file_returns_every_row(products_csv: Path) -> None:
    rows = preview(products_csv, max_rows=50)

    assert [row["Brand Name"] for row in rows] == ["Acme", "Globex", "Initech"]


def test_read_headers_keeps_file_order_and_strips_bom(write_csv) -> None:
    path = write_csv("bom.csv", "\ufeffBrand,Price,Size\nAcme,1,2\n")

    assert read_headers(path) == ["Brand", "Price", "Size"]


def test_read_headers_of_empty_file(write_csv) -> None:
    path = write_csv("empty.csv", "")

    assert read_headers(path) == []
    assert list(iter_rows(path)) == []


def test_iter_rows_numbers_data_rows_from_one(products_csv: Path) -> None:
    rows = list(iter_rows(products_csv))

    assert [row.row_number for row in rows] == [1, 2, 3]
    assert all(row.error is None for row in rows)
    assert rows[2].values == {"Brand Name": "Initech", "Description": "Pale ale", "Unit Price": "7"}


def test_iter_rows_flags_malformed_rows_and_continues(write_csv) -> None:
    path = write_csv("ragged.csv", "a,b\n1,2\n3\n4,5,6\n\n7,8\n")

    rows = list(iter_rows(path))

    assert [row.row_number for row in rows] == [1, 2, 3, 4]
    assert rows[1].error == "Row has 1 columns, expected 2."
    assert rows[1].values == {"a": "3", "b": None}
    assert rows[2].error == "Row has 3 columns, expected 2."
    assert rows[3].error is None


def test_quoted_fields_keep_commas_and_newlines(write_csv) -> None:
    path = write_csv("quoted.csv", 'brand,description\nAcme,"dry, red\nwine"\n')

    [row] = list(iter_rows(path))

    assert row.values["description"] == "dry, red\nwine"


def test_missing_file_is_unavailable(tmp_path: Path) -> None:
    missing = tmp_path / "nope.csv"

    with pytest.raises(SourceUnavailableError) as exc_info:
        preview(missing)
    assert exc_info.value.path == str(missing)

    with pytest.raises(SourceUnavailableError):
        read_headers(missing)

    with pytest.raises(SourceUnavailableError):
        list(iter_rows(missing))


def test_undecodable_bytes_are_unavailable(tmp_path: Path) -> None:
    path = tmp_path / "latin1.csv"
    path.write_bytes("brand\ncafé\n".encode("latin-1"))

    with pytest.raises(SourceUnavailableError):
        list(iter_rows(path))
