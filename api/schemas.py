from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


ColumnTypeName = Literal["numeric", "string", "date", "boolean"]


class ColumnTypeModel(BaseModel):
    name: str
    type: ColumnTypeName


class ChartOptionsModel(BaseModel):
    color_scheme: str = "default"
    marker_size: Optional[int] = None
    show_legend: bool = True


class ChartConfigModel(BaseModel):
    chart_type: str = "scatter"
    x_axis: Optional[str] = None
    y_axis: Optional[str] = None
    z_axis: Optional[str] = None
    additional_options: ChartOptionsModel = Field(default_factory=ChartOptionsModel)


class SuggestRequest(BaseModel):
    column_types: List[ColumnTypeModel]
    headers: List[str]
    rows: Optional[List[List[Any]]] = None


class PrepareRequest(BaseModel):
    chart_config: ChartConfigModel
    column_types: List[ColumnTypeModel]
    rows: List[List[Any]] = Field(default_factory=list)
    dark_mode: bool = False


class DataSampleModel(BaseModel):
    headers: List[str] = Field(default_factory=list)
    rows: List[List[Any]] = Field(default_factory=list)
    total_rows: Optional[int] = None


class RenderAnalysisRequest(BaseModel):
    chart_config: Dict[str, Any]
    data_sample: DataSampleModel = Field(default_factory=DataSampleModel)
    rows: Optional[List[List[Any]]] = None
    dark_mode: bool = False


class AnalysisPayloadRequest(BaseModel):
    name: str = ""
    chart_config: ChartConfigModel
    headers: List[str]
    rows: List[List[Any]] = Field(default_factory=list)
    file_name: str = ""
    sheet_name: str = ""
    sheet_index: int = 0
    data_set_id: str = ""
