from __future__ import annotations

import logging
import math
import os

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import AnalysisPayloadRequest, PrepareRequest, RenderAnalysisRequest, SuggestRequest
from chartcore.analysis import AnalysisPayloadError, build_analysis_payload, default_download_format, numeric_warning
from chartcore.charts import CHART_TYPE_OPTIONS, COLOR_SCHEME_OPTIONS
from chartcore.columns import ColumnMismatchError, ColumnType, as_column_types
from chartcore.prepare import build_chart, prepare_chart_data
from chartcore.suggest import suggest_chart_type


DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
CORS_ORIGINS = [o.strip() for o in os.environ.get("SHEETPLOT_CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",") if o.strip()]

app = FastAPI(title="Sheetplot Chart API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _column_types(models) -> list[ColumnType]:
    return as_column_types(m.model_dump() for m in models)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/chart-types")
def meta_chart_types():
    return _json({"chart_types": CHART_TYPE_OPTIONS})


@app.get("/meta/color-schemes")
def meta_color_schemes():
    return _json({"color_schemes": COLOR_SCHEME_OPTIONS})


@app.post("/suggest")
def suggest(req: SuggestRequest):
    try:
        suggestion = suggest_chart_type(_column_types(req.column_types), req.headers, req.rows)
        return _json(suggestion.as_dict())
    except ColumnMismatchError as exc:
        return _error(exc, status_code=422)
    except Exception as exc:
        logger.exception("suggest failed")
        return _error(exc)


@app.post("/prepare")
def prepare(req: PrepareRequest):
    try:
        config = req.chart_config.model_dump()
        column_types = _column_types(req.column_types)
        prepared = build_chart(config, column_types, req.rows, is_dark_mode=req.dark_mode)
        prepared["warnings"] = {"numeric": numeric_warning(config, column_types)}
        prepared["download_format"] = default_download_format(req.chart_config.chart_type)
        return _json(prepared)
    except Exception as exc:
        logger.exception("prepare failed")
        return _error(exc)


@app.post("/analyses/render")
def render_analysis(req: RenderAnalysisRequest):
    try:
        prepared = prepare_chart_data(
            req.chart_config,
            req.data_sample.model_dump(),
            is_dark_mode=req.dark_mode,
            rows=req.rows,
        )
        return _json(prepared)
    except Exception as exc:
        logger.exception("render_analysis failed")
        return _error(exc)


@app.post("/analyses/payload")
def analysis_payload(req: AnalysisPayloadRequest):
    try:
        payload = build_analysis_payload(
            req.name,
            req.chart_config.model_dump(),
            req.headers,
            req.rows,
            file_name=req.file_name,
            sheet_name=req.sheet_name,
            sheet_index=req.sheet_index,
            data_set_id=req.data_set_id,
        )
        return _json(payload)
    except AnalysisPayloadError as exc:
        return _error(exc, status_code=422)
    except Exception as exc:
        logger.exception("analysis_payload failed")
        return _error(exc)
