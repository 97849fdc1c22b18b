from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Sequence

from chartcore.coercion import is_missing
from chartcore.columns import (
    ColumnKind,
    ColumnMismatchError,
    ColumnType,
    count_kinds,
    first_column_of_kind,
    second_column_of_kind,
    third_column_of_kind,
)


logger = logging.getLogger(__name__)

MAX_PIE_CATEGORIES = 8


@dataclass(frozen=True)
class ChartSuggestion:
    chart_type: str
    x_axis: Optional[str]
    y_axis: Optional[str]
    z_axis: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _header_at(headers: Sequence[str], idx: Optional[int]) -> Optional[str]:
    if idx is None or idx >= len(headers):
        return None
    return headers[idx]


def _distinct_categories(rows: Sequence[Sequence[Any]], idx: int) -> int:
    values = set()
    for row in rows:
        cell = row[idx] if idx < len(row) else None
        if is_missing(cell):
            continue
        values.add(str(cell))
    return len(values)


def suggest_chart_type(
    column_types: Sequence[ColumnType],
    headers: Sequence[str],
    rows: Optional[Sequence[Sequence[Any]]] = None,
) -> ChartSuggestion:
    """Propose a chart type and axis bindings from column type metadata.

    Rules are evaluated in order and the first match wins. When `rows` is
    given, the pie rule counts distinct values in the string column; without
    rows it falls back to counting string-typed column names, which always
    allows the pie.
    """
    if len(column_types) != len(headers):
        raise ColumnMismatchError(
            f"{len(column_types)} column types for {len(headers)} headers"
        )

    counts = count_kinds(column_types)
    numeric = counts[ColumnKind.NUMERIC]
    string = counts[ColumnKind.STRING]
    date = counts[ColumnKind.DATE]

    def first(kind: ColumnKind) -> Optional[str]:
        return _header_at(headers, first_column_of_kind(column_types, kind))

    if numeric >= 3:
        return ChartSuggestion(
            chart_type="scatter3d",
            x_axis=first(ColumnKind.NUMERIC),
            y_axis=_header_at(headers, second_column_of_kind(column_types, ColumnKind.NUMERIC)),
            z_axis=_header_at(headers, third_column_of_kind(column_types, ColumnKind.NUMERIC)),
        )
    if numeric >= 2:
        return ChartSuggestion(
            chart_type="scatter",
            x_axis=first(ColumnKind.NUMERIC),
            y_axis=_header_at(headers, second_column_of_kind(column_types, ColumnKind.NUMERIC)),
        )
    # The pie check sits inside the string + numeric rule; as a later rule the
    # bar suggestion would always shadow it.
    if numeric == 1 and string >= 1:
        if string == 1:
            if rows is not None:
                categories = _distinct_categories(rows, first_column_of_kind(column_types, ColumnKind.STRING) or 0)
            else:
                categories = len({col.name for col in column_types if col.type == ColumnKind.STRING})
            logger.debug("pie candidate with %d categories", categories)
            if categories <= MAX_PIE_CATEGORIES:
                return ChartSuggestion(chart_type="pie", x_axis=first(ColumnKind.STRING), y_axis=first(ColumnKind.NUMERIC))
        return ChartSuggestion(chart_type="bar", x_axis=first(ColumnKind.STRING), y_axis=first(ColumnKind.NUMERIC))
    if date >= 1 and numeric >= 1:
        return ChartSuggestion(chart_type="line", x_axis=first(ColumnKind.DATE), y_axis=first(ColumnKind.NUMERIC))

    return ChartSuggestion(
        chart_type="scatter",
        x_axis=headers[0] if headers else None,
        y_axis=headers[1] if len(headers) > 1 else (headers[0] if headers else None),
    )
