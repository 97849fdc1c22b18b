from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from numbers import Number
from typing import Any, Dict, List, Optional, Sequence, Tuple

from chartcore.coercion import ProcessedRow
from chartcore.config import ChartConfig, ChartOptions


logger = logging.getLogger(__name__)

LARGE_DATASET_THRESHOLD = 1000
LARGE_DATASET_MARKER_SIZE = 3
DEFAULT_MARKER_SIZE = 8
DEFAULT_3D_MARKER_SIZE = 5
DEFAULT_COLORSCALE = "Viridis"

SCHEME_COLORS = {
    "viridis": "#440154",
    "plasma": "#9c179e",
    "warm": "#d13b40",
    "cool": "#3b518a",
}
DEFAULT_COLOR_LIGHT = "#3182CE"
DEFAULT_COLOR_DARK = "#63B3ED"

Trace = Dict[str, Any]


def is_3d_chart(chart_type: str) -> bool:
    return "3d" in chart_type or chart_type in {"surface", "mesh3d"}


def color_for_scheme(scheme: Optional[str], is_dark_mode: bool = False) -> str:
    if scheme in SCHEME_COLORS:
        return SCHEME_COLORS[scheme]  # type: ignore[index]
    if scheme not in (None, "", "default"):
        logger.debug("unknown color scheme %r, using theme default", scheme)
    return DEFAULT_COLOR_DARK if is_dark_mode else DEFAULT_COLOR_LIGHT


def _colorscale(options: ChartOptions) -> str:
    scheme = options.color_scheme
    return scheme if scheme and scheme != "default" else DEFAULT_COLORSCALE


def column_values(rows: Sequence[ProcessedRow], column: Optional[str]) -> List[Any]:
    return [row.get(column) if column is not None else None for row in rows]


# ---------------- 2D ----------------
def build_2d_trace(chart_type: str, rows: Sequence[ProcessedRow], x_axis: str, y_axis: str, options: ChartOptions, is_dark_mode: bool = False) -> Trace:
    large = len(rows) > LARGE_DATASET_THRESHOLD
    marker_size = options.marker_size or (LARGE_DATASET_MARKER_SIZE if large else DEFAULT_MARKER_SIZE)
    color = color_for_scheme(options.color_scheme, is_dark_mode)

    if chart_type == "pie":
        return {
            "labels": column_values(rows, x_axis),
            "values": column_values(rows, y_axis),
            "type": "pie",
            "marker": {"colors": [color]},
        }

    mode = "markers"
    if chart_type == "line":
        mode = "lines+markers"
    elif chart_type == "bar":
        mode = "none"

    trace_type = chart_type.replace("gl", "", 1) if "gl" in chart_type else chart_type
    if large and chart_type == "scatter":
        logger.debug("%d rows, switching scatter to scattergl", len(rows))
        trace_type = "scattergl"

    return {
        "x": column_values(rows, x_axis),
        "y": column_values(rows, y_axis),
        "type": trace_type,
        "mode": mode,
        "marker": {"size": marker_size, "color": color},
    }


# ---------------- 3D ----------------
def _date_key(value: date) -> Tuple[int, int, int]:
    if not isinstance(value, datetime):
        return (value.toordinal(), 0, 0)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    seconds = value.hour * 3600 + value.minute * 60 + value.second
    return (value.toordinal(), seconds, value.microsecond)


def _sort_key(value: Any) -> Tuple[int, Any]:
    if isinstance(value, Number) and not isinstance(value, bool):
        return (0, float(value))  # type: ignore[arg-type]
    # Calendar parts, not epoch nanoseconds: years outside 1677-2262 must sort too.
    if isinstance(value, (datetime, date)):
        return (1, _date_key(value))
    return (2, str(value))


def build_surface_grid(
    rows: Sequence[ProcessedRow], x_axis: str, y_axis: str, z_axis: Optional[str]
) -> Tuple[List[Any], List[Any], List[List[Any]]]:
    """Bin scattered (x, y, z) samples onto an exact-match grid.

    Returns (distinct x, distinct y, z) where z has one row per distinct y
    and one column per distinct x. Combinations with no sample are 0.
    """
    x_values = sorted({row.get(x_axis) for row in rows if row.get(x_axis) is not None}, key=_sort_key)
    y_values = sorted({row.get(y_axis) for row in rows if row.get(y_axis) is not None}, key=_sort_key)
    x_index = {v: i for i, v in enumerate(x_values)}
    y_index = {v: i for i, v in enumerate(y_values)}

    grid: List[List[Any]] = [[None] * len(x_values) for _ in y_values]
    for row in rows:
        x, y = row.get(x_axis), row.get(y_axis)
        z = row.get(z_axis) if z_axis is not None else None
        if x is None or y is None or z is None:
            continue
        grid[y_index[y]][x_index[x]] = z

    for grid_row in grid:
        for j, cell in enumerate(grid_row):
            if cell is None:
                grid_row[j] = 0
    return x_values, y_values, grid


def build_3d_trace(
    chart_type: str,
    rows: Sequence[ProcessedRow],
    x_axis: str,
    y_axis: str,
    z_axis: Optional[str],
    options: ChartOptions,
    is_dark_mode: bool = False,
) -> Trace:
    if chart_type == "surface":
        x_values, y_values, grid = build_surface_grid(rows, x_axis, y_axis, z_axis)
        return {
            "type": "surface",
            "x": x_values,
            "y": y_values,
            "z": grid,
            "colorscale": _colorscale(options),
            "showscale": True,
            "contours": {
                "z": {
                    "show": True,
                    "usecolormap": True,
                    "highlightcolor": "#ffffff",
                    "project": {"z": True},
                }
            },
        }

    color = color_for_scheme(options.color_scheme, is_dark_mode)
    base: Trace = {
        "x": column_values(rows, x_axis),
        "y": column_values(rows, y_axis),
        "z": column_values(rows, z_axis) if z_axis else [0] * len(rows),
        "mode": "markers",
        "marker": {
            "size": options.marker_size or DEFAULT_3D_MARKER_SIZE,
            "color": color,
            "opacity": 0.8,
            "line": {
                "width": 0.5,
                "color": "rgba(255,255,255,0.5)" if is_dark_mode else "rgba(0,0,0,0.5)",
            },
        },
    }

    if chart_type == "scatter3d":
        return {**base, "type": "scatter3d"}
    if chart_type == "mesh3d":
        return {
            **base,
            "type": "mesh3d",
            "intensity": column_values(rows, z_axis),
            "colorscale": _colorscale(options),
            "opacity": 0.8,
            "delaunayaxis": "z",
        }
    if chart_type == "line3d":
        return {
            **base,
            "type": "scatter3d",
            "mode": "lines",
            "line": {"width": 6, "color": color, "opacity": 0.7},
        }
    return base


def build_trace(config: ChartConfig, rows: Sequence[ProcessedRow], is_dark_mode: bool = False) -> Trace:
    """Renderer-ready trace for `config`; `{}` when there is nothing to plot."""
    if not rows or not config.x_axis or not config.y_axis:
        logger.debug("no rows or axes selected, returning empty trace")
        return {}
    options = config.additional_options
    if is_3d_chart(config.chart_type):
        return build_3d_trace(config.chart_type, rows, config.x_axis, config.y_axis, config.z_axis, options, is_dark_mode)
    return build_2d_trace(config.chart_type, rows, config.x_axis, config.y_axis, options, is_dark_mode)
