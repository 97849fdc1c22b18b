"""Spreadsheet loading: CSV/XLSX -> headers, raw rows and column types."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union

import pandas as pd

from chartcore.coercion import FALSE_TOKENS, TRUE_TOKENS
from chartcore.columns import ColumnKind, ColumnType


logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = {".xlsx", ".xls"}
CSV_EXTENSIONS = {".csv"}
# "1"/"0" columns are numbers, not flags.
BOOLEAN_WORDS = (TRUE_TOKENS | FALSE_TOKENS) - {"1", "0"}

Source = Union[str, Path, bytes, BinaryIO]


class UnsupportedFileError(ValueError):
    pass


@dataclass(frozen=True)
class Sheet:
    name: str
    headers: List[str] = field(default_factory=list)
    rows: List[List[Any]] = field(default_factory=list)
    column_types: List[ColumnType] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "headers": self.headers,
            "rows": self.rows,
            "columnTypes": [c.as_dict() for c in self.column_types],
        }


def infer_column_type(series: pd.Series) -> ColumnKind:
    non_null = series.dropna()
    if non_null.empty:
        return ColumnKind.STRING
    if pd.api.types.is_bool_dtype(series):
        return ColumnKind.BOOLEAN
    if pd.api.types.is_numeric_dtype(series):
        return ColumnKind.NUMERIC
    if pd.api.types.is_datetime64_any_dtype(series):
        return ColumnKind.DATE

    values = non_null.astype(str).str.strip()
    values = values[values != ""]
    if values.empty:
        return ColumnKind.STRING
    if pd.to_numeric(values, errors="coerce").notna().all():
        return ColumnKind.NUMERIC
    if values.str.lower().isin(BOOLEAN_WORDS).all():
        return ColumnKind.BOOLEAN
    if pd.to_datetime(values, errors="coerce", format="mixed").notna().all():
        return ColumnKind.DATE
    return ColumnKind.STRING


def infer_column_types(frame: pd.DataFrame) -> List[ColumnType]:
    return [ColumnType(name=str(col), type=infer_column_type(frame.iloc[:, idx])) for idx, col in enumerate(frame.columns)]


def sheet_from_frame(name: str, frame: pd.DataFrame) -> Sheet:
    frame = frame.dropna(axis=1, how="all").dropna(axis=0, how="all")
    frame = frame.loc[:, ~frame.columns.duplicated()]
    column_types = infer_column_types(frame)
    rows = frame.astype(object).where(frame.notna(), None).values.tolist()
    logger.debug("sheet %r: %d rows x %d columns", name, len(rows), len(column_types))
    return Sheet(
        name=str(name),
        headers=[str(c) for c in frame.columns],
        rows=rows,
        column_types=column_types,
    )


def load_workbook(source: Source, filename: Optional[str] = None) -> List[Sheet]:
    """Read every sheet of a CSV or Excel file."""
    name = filename or (str(source) if isinstance(source, (str, Path)) else "")
    ext = Path(name).suffix.lower()
    if isinstance(source, bytes):
        source = io.BytesIO(source)

    if ext in CSV_EXTENSIONS:
        frames = {Path(name).stem or "Sheet1": pd.read_csv(source)}
    elif ext in EXCEL_EXTENSIONS:
        frames = pd.read_excel(source, sheet_name=None)
    else:
        raise UnsupportedFileError(f"Unsupported file type: {ext or name!r}")

    return [sheet_from_frame(sheet_name, frame) for sheet_name, frame in frames.items()]
