from __future__ import annotations

from typing import Any, Dict, Optional

from chartcore.config import ChartConfig
from chartcore.theme import GRID_COLOR_VAR, TITLE_COLOR_VAR, ColorResolver, theme_resolver
from chartcore.traces import is_3d_chart


Layout = Dict[str, Any]

TITLE_SEPARATOR = " v/s "

# Camera presets per 3D chart type (eye, aspect ratio z).
DEFAULT_CAMERA_EYE = (1.75, 1.75, 1.25)
DEFAULT_ASPECT_Z = 0.85
CAMERA_EYES = {
    "mesh3d": (1.9, 1.9, 1.6),
    "line3d": (1.8, 1.8, 1.4),
}
ASPECT_Z = {"mesh3d": 0.9}

DEFAULT_MARGIN = {"l": 80, "r": 80, "b": 80, "t": 80, "pad": 4}
SURFACE_MARGIN = {"l": 50, "r": 50, "b": 50, "t": 90}


def build_title(x_axis: Optional[str], y_axis: Optional[str], z_axis: Optional[str] = None) -> str:
    parts = [str(x_axis), str(y_axis)]
    if z_axis:
        parts.append(z_axis)
    return TITLE_SEPARATOR.join(parts)


def _vector(values) -> Dict[str, float]:
    x, y, z = values
    return {"x": x, "y": y, "z": z}


def _axis_title(text: str, color: str, standoff: Optional[int] = None) -> Dict[str, Any]:
    title: Dict[str, Any] = {"text": text, "font": {"size": 16, "color": color}}
    if standoff is not None:
        title["standoff"] = standoff
    return title


def _scene_axis(text: str, title_color: str, grid_color: str) -> Dict[str, Any]:
    return {
        "title": _axis_title(text, title_color),
        "gridcolor": grid_color,
        "backgroundcolor": "transparent",
        "showbackground": True,
        "zerolinecolor": title_color,
    }


def build_scene(chart_type: str, x_axis: str, y_axis: str, z_axis: Optional[str], title_color: str, grid_color: str) -> Dict[str, Any]:
    scene: Dict[str, Any] = {
        "xaxis": _scene_axis(x_axis, title_color, grid_color),
        "yaxis": _scene_axis(y_axis, title_color, grid_color),
        "zaxis": _scene_axis(z_axis or "", title_color, grid_color),
        "camera": {
            "eye": _vector(CAMERA_EYES.get(chart_type, DEFAULT_CAMERA_EYE)),
            "center": _vector((0, 0, 0)),
            "up": _vector((0, 0, 1)),
        },
        "aspectmode": "cube",
        "aspectratio": _vector((1, 1, ASPECT_Z.get(chart_type, DEFAULT_ASPECT_Z))),
    }
    if chart_type == "surface":
        scene["dragmode"] = "orbit"
    return scene


def build_layout(config: ChartConfig, is_dark_mode: bool = False, colors: Optional[ColorResolver] = None) -> Layout:
    colors = colors or theme_resolver(is_dark_mode)
    title_color = colors(TITLE_COLOR_VAR)
    grid_color = colors(GRID_COLOR_VAR)
    x_axis, y_axis, z_axis = config.x_axis, config.y_axis, config.z_axis

    layout: Layout = {
        "title": {
            "text": build_title(x_axis, y_axis, z_axis),
            "font": {"size": 22, "color": title_color},
            "pad": {"t": 10},
            "xref": "paper",
            "x": 0.5,
        },
        "paper_bgcolor": "transparent",
        "plot_bgcolor": "transparent",
        "font": {"color": title_color},
        "xaxis": {"title": _axis_title(str(x_axis), title_color, standoff=20), "gridcolor": grid_color},
        "yaxis": {"title": _axis_title(str(y_axis), title_color, standoff=20), "gridcolor": grid_color},
        "margin": dict(DEFAULT_MARGIN),
        "showlegend": config.additional_options.show_legend,
        "autosize": True,
    }

    if is_3d_chart(config.chart_type):
        layout["scene"] = build_scene(config.chart_type, str(x_axis), str(y_axis), z_axis, title_color, grid_color)
        if config.chart_type == "surface":
            layout["margin"] = dict(SURFACE_MARGIN)
    return layout
