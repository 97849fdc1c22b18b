from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


CHART_TYPES = ("scatter", "bar", "line", "pie", "scatter3d", "surface", "mesh3d", "line3d")
COLOR_SCHEMES = ("default", "viridis", "plasma", "warm", "cool")


@dataclass(frozen=True)
class ChartOptions:
    color_scheme: str = "default"
    marker_size: Optional[int] = None
    show_legend: bool = True


@dataclass(frozen=True)
class ChartConfig:
    chart_type: str = "scatter"
    x_axis: Optional[str] = None
    y_axis: Optional[str] = None
    z_axis: Optional[str] = None
    additional_options: ChartOptions = field(default_factory=ChartOptions)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _pick(raw: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return default


def _as_axis(value: object) -> Optional[str]:
    # "None" is what the axis pickers submit for an unset optional axis.
    if value is None:
        return None
    s = str(value).strip()
    if not s or s == "None":
        return None
    return s


def _as_marker_size(value: object) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        size = int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return size if size > 0 else None


def normalize_options(raw: Optional[dict]) -> ChartOptions:
    raw = raw or {}
    scheme = _pick(raw, "colorScheme", "color_scheme", default="default")
    scheme = str(scheme).strip().lower() if scheme else "default"
    show_legend = _pick(raw, "showLegend", "show_legend", default=True)
    return ChartOptions(
        color_scheme=scheme,
        marker_size=_as_marker_size(_pick(raw, "markerSize", "marker_size")),
        show_legend=bool(show_legend) if show_legend is not None else True,
    )


def normalize_chart_config(raw: dict | ChartConfig) -> ChartConfig:
    """Build a ChartConfig from a saved/posted mapping (camelCase or snake_case)."""
    if isinstance(raw, ChartConfig):
        return raw
    chart_type = _pick(raw, "chartType", "chart_type", default="scatter")
    chart_type = str(chart_type).strip() if chart_type else "scatter"
    options = _pick(raw, "additionalOptions", "additional_options")
    return ChartConfig(
        chart_type=chart_type or "scatter",
        x_axis=_as_axis(_pick(raw, "xAxis", "x_axis")),
        y_axis=_as_axis(_pick(raw, "yAxis", "y_axis")),
        z_axis=_as_axis(_pick(raw, "zAxis", "z_axis")),
        additional_options=options if isinstance(options, ChartOptions) else normalize_options(options),
    )
