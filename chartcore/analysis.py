from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from chartcore.columns import ColumnKind, ColumnType, as_column_types
from chartcore.config import ChartConfig, normalize_chart_config
from chartcore.layout import build_title


SAMPLE_ROW_COUNT = 3


class AnalysisPayloadError(ValueError):
    pass


def _is_numeric(column_types: Sequence[ColumnType], header: Optional[str]) -> bool:
    return any(col.name == header and col.type == ColumnKind.NUMERIC for col in column_types)


def numeric_warning(chart_config: Mapping[str, Any] | ChartConfig, column_types: Sequence[ColumnType | Mapping[str, Any]]) -> bool:
    """True when the selected value axes are not numeric for this chart type."""
    config = normalize_chart_config(chart_config)
    types = as_column_types(column_types)
    if config.chart_type != "pie" and not _is_numeric(types, config.y_axis):
        return True
    return bool("3d" in config.chart_type and config.z_axis and not _is_numeric(types, config.z_axis))


def default_download_format(chart_type: str) -> str:
    if "3d" in chart_type:
        return "glb"
    if chart_type == "pie":
        return "png"
    return "svg"


def default_analysis_name(chart_config: Mapping[str, Any] | ChartConfig) -> str:
    config = normalize_chart_config(chart_config)
    return f"Analysis - {build_title(config.x_axis, config.y_axis, config.z_axis)}"


def build_analysis_payload(
    name: str,
    chart_config: Mapping[str, Any] | ChartConfig,
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    *,
    file_name: str = "",
    sheet_name: str = "",
    sheet_index: int = 0,
    data_set_id: str = "",
    ai_insights: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Body for saving an analysis: config, title and a small data sample."""
    config = normalize_chart_config(chart_config)
    if not (name or "").strip():
        raise AnalysisPayloadError("Please add name for analysis.")
    if not config.x_axis or not config.y_axis:
        raise AnalysisPayloadError("Please select axes before saving analysis")

    options = config.additional_options
    payload: Dict[str, Any] = {
        "name": name.strip(),
        "fileName": file_name,
        "sheetName": sheet_name,
        "sheetIndex": sheet_index,
        "chartConfig": {
            "chartType": config.chart_type,
            "xAxis": config.x_axis,
            "yAxis": config.y_axis,
            "zAxis": config.z_axis or "",
            "title": build_title(config.x_axis, config.y_axis, config.z_axis),
            "additionalOptions": {
                "colorScheme": options.color_scheme,
                "markerSize": options.marker_size,
                "showLegend": options.show_legend,
            },
        },
        "dataSample": {
            "headers": list(headers),
            "rows": [list(r) for r in rows[:SAMPLE_ROW_COUNT]],
            "totalRows": len(rows),
        },
        "dataSetId": data_set_id,
    }
    if ai_insights:
        payload["aiInsights"] = ai_insights
    return payload
