"""
app/domain/field_catalog.py

Static registry of persistable target fields.

The catalog mirrors the columns of ``db.models.record.Record``; adding a
field means adding a column and a migration, not a data operation.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TargetField:
    """
    One persistable record field and its declared type tag.
    """

    name: str
    data_type: str


TARGET_FIELDS: tuple[TargetField, ...] = (
    TargetField(name="brand", data_type="string"),
    TargetField(name="description", data_type="text"),
    TargetField(name="price", data_type="decimal"),
    TargetField(name="size", data_type="string"),
    TargetField(name="volume", data_type="decimal"),
    TargetField(name="classification", data_type="string"),
    TargetField(name="purchase_price", data_type="decimal"),
    TargetField(name="vendor_number", data_type="integer"),
    TargetField(name="vendor_name", data_type="string"),
)

_FIELDS_BY_NAME: dict[str, TargetField] = {field.name: field for field in TARGET_FIELDS}


def get_available_fields() -> tuple[TargetField, ...]:
    return TARGET_FIELDS


def is_known_field(name: str | None) -> bool:
    return name is not None and name in _FIELDS_BY_NAME


def get_field(name: str) -> TargetField | None:
    return _FIELDS_BY_NAME.get(name)
