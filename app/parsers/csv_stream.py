"""
app/parsers/csv_stream.py

Streaming access to stored CSV files: preview, headers and row iteration.

Each call opens the file afresh, so previews are repeatable and row
iteration is a single forward pass owned by the caller.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from itertools import islice
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_ROWS = 10
CSV_ENCODING = "utf-8-sig"


class SourceUnavailableError(RuntimeError):
    """
    Raised when a CSV source cannot be opened or read.
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"CSV source unavailable: {path}: {reason}")
        self.path = str(path)
        self.reason = reason


@dataclass(frozen=True)
class CSVRow:
    """
    One data row keyed by header.

    ``error`` is set when the row's column count does not match the header;
    ``values`` then holds what could be aligned, with missing cells as None.
    """

    row_number: int
    values: dict[str, str | None]
    error: str | None = None


def read_headers(path: str | Path) -> list[str]:
    """
    Return the header names in file order; empty list for an empty file.
    """

    try:
        with open(path, encoding=CSV_ENCODING, newline="") as handle:
            reader = csv.reader(handle)
            return next(reader, [])
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        logger.error("Unable to read CSV headers path=%s error=%s", path, exc)
        raise SourceUnavailableError(path, str(exc)) from exc


def preview(path: str | Path, max_rows: int = DEFAULT_PREVIEW_ROWS) -> list[dict[str, str | None]]:
    """
    Return at most ``max_rows`` leading data rows.
    """

    limit = max(0, max_rows)
    return [row.values for row in islice(iter_rows(path), limit)]


def iter_rows(path: str | Path) -> Iterator[CSVRow]:
    """
    Yield data rows lazily, numbered from 1.

    Malformed rows are yielded with ``error`` set and iteration continues.
    Open/read/decode failures raise ``SourceUnavailableError``.
    """

    try:
        handle = open(path, encoding=CSV_ENCODING, newline="")
    except OSError as exc:
        logger.error("Unable to open CSV source path=%s error=%s", path, exc)
        raise SourceUnavailableError(path, str(exc)) from exc

    with handle:
        reader = csv.reader(handle)
        try:
            headers = next(reader, None)
            if not headers:
                return

            width = len(headers)
            row_number = 0
            for cells in reader:
                if not cells:
                    continue
                row_number += 1
                yield _build_row(row_number, headers, width, cells)
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            logger.error("CSV source became unreadable path=%s error=%s", path, exc)
            raise SourceUnavailableError(path, str(exc)) from exc


def _build_row(row_number: int, headers: list[str], width: int, cells: list[str]) -> CSVRow:
    values: dict[str, str | None] = {}
    for index, header in enumerate(headers):
        values[header] = cells[index] if index < len(cells) else None

    if len(cells) == width:
        return CSVRow(row_number=row_number, values=values)
    return CSVRow(
        row_number=row_number,
        values=values,
        error=f"Row has {len(cells)} columns, expected {width}.",
    )
