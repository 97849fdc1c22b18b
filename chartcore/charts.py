from __future__ import annotations

import copy
from typing import Any, Dict, List

import plotly.graph_objects as go


CHART_TYPE_OPTIONS: List[Dict[str, str]] = [
    {"label": "Scatter Plot", "value": "scatter"},
    {"label": "Bar Chart", "value": "bar"},
    {"label": "Line Chart", "value": "line"},
    {"label": "Pie Chart", "value": "pie"},
    {"label": "3D Scatter", "value": "scatter3d"},
    {"label": "3D Surface", "value": "surface"},
    {"label": "3D Mesh", "value": "mesh3d"},
    {"label": "3D Line", "value": "line3d"},
]

COLOR_SCHEME_OPTIONS: List[Dict[str, str]] = [
    {"label": "Default", "value": "default"},
    {"label": "Viridis", "value": "viridis"},
    {"label": "Plasma", "value": "plasma"},
    {"label": "Warm", "value": "warm"},
    {"label": "Cool", "value": "cool"},
]

# Browser renderers fall back to scatter for unregistered trace types.
_RENDER_TYPES = {"line": "scatter"}


def to_figure(prepared: Dict[str, Any]) -> go.Figure:
    """Convert prepared {data, layout} into a plotly Figure (invalid props are dropped)."""
    data = []
    for trace in prepared.get("data", []):
        if not trace:
            continue
        trace = copy.deepcopy(trace)
        trace["type"] = _RENDER_TYPES.get(trace.get("type", "scatter"), trace.get("type", "scatter"))
        data.append(trace)
    return go.Figure(data=data, layout=copy.deepcopy(prepared.get("layout", {})), skip_invalid=True)
