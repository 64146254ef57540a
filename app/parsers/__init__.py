"""
app/parsers package marker.
"""

from app.parsers.csv_stream import CSVRow, SourceUnavailableError, iter_rows, preview, read_headers

__all__ = [
    "CSVRow",
    "SourceUnavailableError",
    "iter_rows",
    "preview",
    "read_headers",
]
