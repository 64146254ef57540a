"""
tests/test_ingestion_pipeline.py

Pytest unit tests for IngestionPipeline against an in-memory store.

Coverage
--------
- Clean three-row file
- Uncoercible cells stored as null without failing the row
- Unreadable source file
- Malformed rows and persistence failures counted per row
- Error list cap
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from pathlib import Path
from types import SimpleNamespace

import pytest

from app.domain.ingestion import MappingSpec, TypedRecord
from app.parsers.csv_stream import SourceUnavailableError
from app.services.ingestion_pipeline import IngestionPipeline
from db.repositories.errors import RecordPersistenceError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


class FakeStore:
    def __init__(self, *, failing_calls: Sequence[int] = ()) -> None:
        self.records: list[TypedRecord] = []
        self.statuses: list[str] = []
        self._calls = 0
        self._failing_calls = set(failing_calls)

    def create_record(self, record: TypedRecord) -> None:
        self._calls += 1
        if self._calls in self._failing_calls:
            raise RecordPersistenceError("Failed to persist record: disk full")
        self.records.append(record)

    def update_file_status(self, file_id: uuid.UUID, status: str) -> None:
        self.statuses.append(status)

    def find_mappings_by_ids(self, mapping_ids):
        return []

    def find_file_by_id(self, file_id):
        return None


PRODUCT_MAPPINGS = [
    MappingSpec(csv_column_name="Brand Name", db_field_name="brand", data_type="string"),
    MappingSpec(csv_column_name="Description", db_field_name="description", data_type="text"),
    MappingSpec(csv_column_name="Unit Price", db_field_name="price", data_type="decimal"),
]


def _source(path: Path) -> SimpleNamespace:
    return SimpleNamespace(id=uuid.uuid4(), file_path=str(path))


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


def test_three_clean_rows(products_csv: Path) -> None:
    store = FakeStore()
    source = _source(products_csv)

    result = IngestionPipeline(store).run(source, PRODUCT_MAPPINGS)

    assert (result.total, result.processed, result.failed) == (3, 3, 0)
    assert result.errors == []
    assert store.statuses == ["processing", "completed"]
    assert [record.values for record in store.records] == [
        {"brand": "Acme", "description": "Dry red wine", "price": 12.5},
        {"brand": "Globex", "description": "Sparkling water", "price": 3.2},
        {"brand": "Initech", "description": "Pale ale", "price": 7.0},
    ]
    assert all(record.file_id == source.id for record in store.records)


def test_uncoercible_cell_is_stored_as_null(write_csv) -> None:
    path = write_csv("bad_price.csv", "Brand Name,Description,Unit Price\nAcme,Wine,not-a-number\n")
    store = FakeStore()

    result = IngestionPipeline(store).run(_source(path), PRODUCT_MAPPINGS)

    assert (result.total, result.processed, result.failed) == (1, 1, 0)
    assert store.records[0].values["price"] is None
    assert store.records[0].values["brand"] == "Acme"


def test_unreadable_source_marks_error_and_raises(tmp_path: Path) -> None:
    store = FakeStore()

    with pytest.raises(SourceUnavailableError):
        IngestionPipeline(store).run(_source(tmp_path / "gone.csv"), PRODUCT_MAPPINGS)

    assert store.statuses == ["processing", "error"]
    assert store.records == []


def test_malformed_rows_fail_without_stopping(write_csv) -> None:
    path = write_csv(
        "ragged.csv",
        "Brand Name,Description,Unit Price\nAcme,Wine,1\nBroken\nGlobex,Water,2\n",
    )
    store = FakeStore()

    result = IngestionPipeline(store).run(_source(path), PRODUCT_MAPPINGS)

    assert (result.total, result.processed, result.failed) == (3, 2, 1)
    assert result.errors[0].row == 2
    assert result.errors[0].error == "Row has 1 columns, expected 3."
    assert store.statuses[-1] == "completed"


def test_persistence_failure_is_row_scoped(products_csv: Path) -> None:
    store = FakeStore(failing_calls=[2])

    result = IngestionPipeline(store).run(_source(products_csv), PRODUCT_MAPPINGS)

    assert (result.total, result.processed, result.failed) == (3, 2, 1)
    assert result.to_dict()["errors"] == [
        {"row": 2, "error": "Failed to persist record: disk full"},
    ]
    assert [record.values["brand"] for record in store.records] == ["Acme", "Initech"]


def test_every_failed_row_is_reported(write_csv) -> None:
    path = write_csv("short_rows.csv", "a,b\n" + "x\n" * 600)
    store = FakeStore()
    pipeline = IngestionPipeline(store, log_row_errors=False)

    result = pipeline.run(
        _source(path),
        [MappingSpec(csv_column_name="a", db_field_name="brand", data_type="string")],
    )

    assert result.failed == 600
    assert len(result.errors) == result.failed
    assert [error.row for error in result.errors] == list(range(1, 601))
    assert len(result.to_dict()["errors"]) == 600


def test_unmapped_columns_are_ignored(products_csv: Path) -> None:
    store = FakeStore()

    IngestionPipeline(store).run(
        _source(products_csv),
        [MappingSpec(csv_column_name="Brand Name", db_field_name="brand", data_type="string")],
    )

    assert [record.values for record in store.records] == [
        {"brand": "Acme"},
        {"brand": "Globex"},
        {"brand": "Initech"},
    ]
