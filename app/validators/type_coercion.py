"""
app/validators/type_coercion.py

Cell-level type coercion for mapped CSV values.

Every coercer takes the raw cell text (or None) and returns a
``CoercionResult``. Empty or absent input always yields ``(None, valid)``:
"no data supplied" is not the same as "data supplied but malformed".
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d.%m.%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
    "%b %d %Y",
    "%B %d %Y",
    "%d %b %Y",
    "%d %B %Y",
)

TRUE_VALUES = frozenset({"true", "yes", "1", "y"})
FALSE_VALUES = frozenset({"false", "no", "0", "n"})

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")
_LEADING_DECIMAL = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class DataType(str, Enum):
    """
    Closed set of target type families.
    """

    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    UNKNOWN = "unknown"


TYPE_SYNONYMS: dict[str, DataType] = {
    "string": DataType.STRING,
    "text": DataType.STRING,
    "integer": DataType.INTEGER,
    "int": DataType.INTEGER,
    "decimal": DataType.DECIMAL,
    "float": DataType.DECIMAL,
    "number": DataType.DECIMAL,
    "boolean": DataType.BOOLEAN,
    "bool": DataType.BOOLEAN,
    "date": DataType.DATE,
}


@dataclass(frozen=True)
class CoercionResult:
    """
    Outcome of coercing one cell.
    """

    value: Any
    valid: bool

    def __iter__(self):
        # Allows `value, valid = coerce_value(...)`.
        yield self.value
        yield self.valid


Coercer = Callable[[str | None], CoercionResult]

_NULL_VALID = CoercionResult(value=None, valid=True)
_NULL_INVALID = CoercionResult(value=None, valid=False)


def resolve_data_type(type_tag: str | None) -> DataType:
    """
    Map a user-supplied type tag onto its type family (case-insensitive).
    """

    if not type_tag:
        return DataType.UNKNOWN
    return TYPE_SYNONYMS.get(type_tag.strip().lower(), DataType.UNKNOWN)


def _is_empty(raw: str | None) -> bool:
    return raw is None or raw == ""


def coerce_string(raw: str | None) -> CoercionResult:
    if _is_empty(raw):
        return _NULL_VALID
    return CoercionResult(value=str(raw), valid=True)


def coerce_integer(raw: str | None) -> CoercionResult:
    if _is_empty(raw):
        return _NULL_VALID
    match = _LEADING_INTEGER.match(str(raw))
    if match is None:
        return _NULL_INVALID
    return CoercionResult(value=int(match.group(1)), valid=True)


def coerce_decimal(raw: str | None) -> CoercionResult:
    if _is_empty(raw):
        return _NULL_VALID
    match = _LEADING_DECIMAL.match(str(raw))
    if match is None:
        return _NULL_INVALID
    return CoercionResult(value=float(match.group(1)), valid=True)


def coerce_boolean(raw: str | None) -> CoercionResult:
    if _is_empty(raw):
        return _NULL_VALID
    lowered = str(raw).strip().lower()
    if lowered in TRUE_VALUES:
        return CoercionResult(value=True, valid=True)
    if lowered in FALSE_VALUES:
        return CoercionResult(value=False, valid=True)
    return _NULL_INVALID


def coerce_date(raw: str | None) -> CoercionResult:
    if _is_empty(raw):
        return _NULL_VALID

    text = str(raw).strip()
    normalized = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        parsed = None

    if parsed is None:
        for fmt in DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return _NULL_INVALID
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return CoercionResult(value=parsed, valid=True)


_COERCERS: dict[DataType, Coercer] = {
    DataType.STRING: coerce_string,
    DataType.INTEGER: coerce_integer,
    DataType.DECIMAL: coerce_decimal,
    DataType.BOOLEAN: coerce_boolean,
    DataType.DATE: coerce_date,
    DataType.UNKNOWN: coerce_string,
}


def get_coercer(data_type: DataType) -> Coercer:
    return _COERCERS[data_type]


def coerce_value(raw: str | None, type_tag: str | None) -> CoercionResult:
    """
    Coerce one raw cell according to a type tag.

    Unrecognized tags fall back to string coercion and are never invalid.
    """

    return get_coercer(resolve_data_type(type_tag))(raw)
