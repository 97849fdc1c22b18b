from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from chartcore.coercion import coerce_rows, coerce_saved_rows
from chartcore.columns import ColumnType, as_column_types
from chartcore.config import ChartConfig, normalize_chart_config
from chartcore.layout import build_layout
from chartcore.theme import ColorResolver
from chartcore.traces import build_trace


logger = logging.getLogger(__name__)


def _figure(config: ChartConfig, processed, is_dark_mode: bool, colors: Optional[ColorResolver]) -> Dict[str, Any]:
    trace = build_trace(config, processed, is_dark_mode)
    layout = build_layout(config, is_dark_mode, colors)
    return {"data": [trace], "layout": layout}


def build_chart(
    chart_config: Mapping[str, Any] | ChartConfig,
    column_types: Sequence[ColumnType | Mapping[str, Any]],
    rows: Sequence[Sequence[Any]],
    is_dark_mode: bool = False,
    colors: Optional[ColorResolver] = None,
) -> Dict[str, Any]:
    """Trace + layout for freshly uploaded rows, coerced by their column types."""
    config = normalize_chart_config(chart_config)
    processed = coerce_rows(rows, as_column_types(column_types))
    logger.debug("building %s chart from %d rows", config.chart_type, len(processed))
    return _figure(config, processed, is_dark_mode, colors)


def prepare_chart_data(
    chart_config: Mapping[str, Any] | ChartConfig,
    data_sample: Mapping[str, Any],
    is_dark_mode: bool = False,
    rows: Optional[Sequence[Sequence[Any]]] = None,
    colors: Optional[ColorResolver] = None,
) -> Dict[str, Any]:
    """Trace + layout for a saved analysis.

    Saved analyses keep only the headers, so cells are coerced heuristically.
    `rows` replaces the stored sample rows when the full sheet was re-fetched.
    """
    config = normalize_chart_config(chart_config)
    headers = list(data_sample.get("headers") or [])
    source_rows = rows if rows is not None else (data_sample.get("rows") or [])
    processed = coerce_saved_rows(source_rows, headers)
    logger.debug("replaying %s chart from %d rows", config.chart_type, len(processed))
    return _figure(config, processed, is_dark_mode, colors)
