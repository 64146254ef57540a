"""
app/mappers/schema_mapper.py

Header-to-field mapping engine: suggestions, column maps and row mapping.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from app.domain.field_catalog import TargetField, get_available_fields
from app.domain.ingestion import ColumnMappingLike, CoercionIssue, SuggestedMapping
from app.validators.type_coercion import Coercer, DataType, get_coercer, resolve_data_type


def normalize_header(header: str) -> str:
    """
    Normalize a column or field name for flexible matching.
    """

    return "".join(ch for ch in header.strip().lower() if ch.isalnum())


@dataclass(frozen=True)
class ResolvedColumn:
    """
    Target of one source column, with its coercer resolved up front.
    """

    field_name: str
    type_tag: str
    data_type: DataType
    coercer: Coercer


@dataclass(frozen=True)
class MappedRow:
    """
    Coerced field values for one CSV row.
    """

    values: dict[str, Any]
    issues: list[CoercionIssue] = field(default_factory=list)


class SchemaMapper:
    """
    Resolves CSV headers into target field mappings.
    """

    def __init__(self, *, fields: Sequence[TargetField] | None = None) -> None:
        self._fields = tuple(fields if fields is not None else get_available_fields())
        self._normalized_fields: tuple[tuple[str, TargetField], ...] = tuple(
            (normalize_header(target.name), target) for target in self._fields
        )

    def suggest(self, headers: Sequence[str]) -> list[SuggestedMapping]:
        """
        Propose a target field for each header by normalized substring containment.

        The first catalog field (in catalog order) whose normalized name contains,
        or is contained in, the normalized header wins. This is a heuristic:
        "Unit Price" may just as well land on ``price`` as on nothing, and
        ``price`` also sits inside ``purchase_price``.
        """

        suggestions: list[SuggestedMapping] = []
        for header in headers:
            matched = self._find_containment_match(normalize_header(header))
            suggestions.append(
                SuggestedMapping(
                    csv_column_name=header,
                    db_field_name=matched.name if matched else None,
                    data_type=matched.data_type if matched else None,
                )
            )
        return suggestions

    def build_column_map(self, mappings: Iterable[ColumnMappingLike]) -> dict[str, ResolvedColumn]:
        """
        Build source column -> target mapping.

        A later entry for the same source column overwrites an earlier one, in
        the order the mappings were supplied.
        """

        column_map: dict[str, ResolvedColumn] = {}
        for mapping in mappings:
            data_type = resolve_data_type(mapping.data_type)
            column_map[mapping.csv_column_name] = ResolvedColumn(
                field_name=mapping.db_field_name,
                type_tag=mapping.data_type,
                data_type=data_type,
                coercer=get_coercer(data_type),
            )
        return column_map

    def map_row(
        self,
        *,
        raw_row: Mapping[str, str | None],
        column_map: Mapping[str, ResolvedColumn],
    ) -> MappedRow:
        """
        Coerce the mapped cells of one row; unmapped columns are ignored.

        Cells are visited in row order, so when two columns target the same
        field the one further right wins.
        """

        values: dict[str, Any] = {}
        issues: list[CoercionIssue] = []
        for column, raw_value in raw_row.items():
            resolved = column_map.get(column)
            if resolved is None:
                continue
            result = resolved.coercer(raw_value)
            if not result.valid:
                issues.append(
                    CoercionIssue(
                        column=column,
                        field_name=resolved.field_name,
                        data_type=resolved.type_tag,
                        value=raw_value,
                    )
                )
            values[resolved.field_name] = result.value
        return MappedRow(values=values, issues=issues)

    def _find_containment_match(self, normalized_header: str) -> TargetField | None:
        if not normalized_header:
            return None
        for normalized_field, target in self._normalized_fields:
            if normalized_field in normalized_header or normalized_header in normalized_field:
                return target
        return None
