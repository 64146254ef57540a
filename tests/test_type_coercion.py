"""
tests/test_type_coercion.py

Pytest unit tests for cell-level type coercion.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.validators.type_coercion import (
    CoercionResult,
    DataType,
    coerce_value,
    get_coercer,
    resolve_data_type,
)

ALL_TAGS = ["string", "text", "integer", "int", "decimal", "float", "number", "boolean", "bool", "date", "mystery"]


@pytest.mark.parametrize("tag", ALL_TAGS)
@pytest.mark.parametrize("raw", ["", None])
def test_empty_input_is_null_and_valid(tag: str, raw: str | None) -> None:
    assert coerce_value(raw, tag) == CoercionResult(value=None, valid=True)


@pytest.mark.parametrize("tag", ["integer", "decimal"])
def test_non_numeric_text_is_invalid(tag: str) -> None:
    assert tuple(coerce_value("not-a-number", tag)) == (None, False)


def test_integer_takes_leading_literal() -> None:
    assert tuple(coerce_value("42abc", "int")) == (42, True)
    assert tuple(coerce_value(" -7", "integer")) == (-7, True)
    assert tuple(coerce_value("12.9", "integer")) == (12, True)


def test_decimal_takes_leading_literal() -> None:
    assert tuple(coerce_value("12.50", "decimal")) == (12.5, True)
    assert tuple(coerce_value("3.2kg", "float")) == (3.2, True)
    assert tuple(coerce_value(".5", "number")) == (0.5, True)
    assert tuple(coerce_value("1e3", "decimal")) == (1000.0, True)


def test_boolean_words() -> None:
    assert tuple(coerce_value("TRUE", "boolean")) == (True, True)
    assert tuple(coerce_value("y", "bool")) == (True, True)
    assert tuple(coerce_value("No", "boolean")) == (False, True)
    assert tuple(coerce_value("0", "boolean")) == (False, True)
    assert tuple(coerce_value("maybe", "boolean")) == (None, False)


def test_date_accepts_iso_and_common_formats() -> None:
    value, valid = coerce_value("2024-03-15T10:30:00Z", "date")
    assert valid
    assert value == datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)

    value, valid = coerce_value("03/15/2024", "date")
    assert valid
    assert (value.year, value.month, value.day) == (2024, 3, 15)

    assert tuple(coerce_value("sometime soon", "date")) == (None, False)


def test_string_and_unknown_tags_never_fail() -> None:
    assert tuple(coerce_value("  padded ", "text")) == ("  padded ", True)
    assert tuple(coerce_value("anything", "geo_point")) == ("anything", True)


def test_tags_resolve_case_insensitively() -> None:
    assert resolve_data_type(" Decimal ") is DataType.DECIMAL
    assert resolve_data_type("INT") is DataType.INTEGER
    assert resolve_data_type("") is DataType.UNKNOWN
    assert resolve_data_type(None) is DataType.UNKNOWN
    assert get_coercer(DataType.UNKNOWN) is get_coercer(DataType.STRING)
