"""Cell coercion for raw spreadsheet rows.

Two independent paths live here and must stay separate:

- `coerce_rows` trusts the column type tags produced at upload time.
- `coerce_saved_rows` has no tags (saved analyses only keep headers) and
  guesses: number first, then date, else the raw value.

They disagree on ambiguous cells such as ``"2024"``.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from chartcore.columns import ColumnKind, ColumnType


TRUE_TOKENS = frozenset({"true", "yes", "1", "y"})
FALSE_TOKENS = frozenset({"false", "no", "0", "n"})

_FLOAT_TEXT = re.compile(r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))\s*$")

RELATIVE_DATE_WORDS = frozenset({"now", "today", "tomorrow", "yesterday"})
_HAS_DIGIT = re.compile(r"\d")
ProcessedRow = Dict[str, Any]


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def _is_bool(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, np.number)) and not _is_bool(value)


def parse_float(value: Any) -> Optional[float]:
    """Parse `value` as a float; None when it is not a number."""
    if _is_bool(value) or isinstance(value, (datetime, date)):
        return None
    if _is_number(value):
        out = float(value)
        return None if math.isnan(out) else out
    match = _FLOAT_TEXT.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def parse_date(value: str) -> Optional[pd.Timestamp]:
    """Parse an absolute date string; None for anything else.

    Strings without a digit ("May", "Q1 sales") and relative words such as
    "now" are rejected, so parsing never depends on the clock.
    """
    if not _HAS_DIGIT.search(value) or value.strip().lower() in RELATIVE_DATE_WORDS:
        return None
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts


def _coerce_boolean(value: Any) -> Optional[bool]:
    if _is_bool(value):
        return bool(value)
    if isinstance(value, str):
        lowered = value.lower()
        if lowered in TRUE_TOKENS:
            return True
        if lowered in FALSE_TOKENS:
            return False
        return None
    if _is_number(value):
        return bool(value != 0)
    return None


def coerce_cell(value: Any, kind: ColumnKind) -> Any:
    if is_missing(value):
        return None

    if kind == ColumnKind.NUMERIC:
        if isinstance(value, str) and value == "":
            return None
        parsed = parse_float(value)
        return value if parsed is None else parsed

    if kind == ColumnKind.BOOLEAN:
        return _coerce_boolean(value)

    if kind == ColumnKind.DATE:
        if isinstance(value, (datetime, date)):
            return value
        if isinstance(value, str) and value.strip() != "":
            parsed_date = parse_date(value)
            return value if parsed_date is None else parsed_date
        return value

    if _is_bool(value):
        return "true" if value else "false"
    return value if isinstance(value, str) else str(value)


def coerce_rows(rows: Sequence[Sequence[Any]], column_types: Sequence[ColumnType]) -> List[ProcessedRow]:
    out: List[ProcessedRow] = []
    for row in rows:
        processed: ProcessedRow = {}
        for idx, col in enumerate(column_types):
            raw = row[idx] if idx < len(row) else None
            processed[col.name] = coerce_cell(raw, col.type)
        out.append(processed)
    return out


def coerce_saved_cell(value: Any) -> Any:
    if is_missing(value):
        return None
    if not _is_bool(value):
        parsed = parse_float(value)
        if parsed is not None and math.isfinite(parsed):
            return parsed
    if isinstance(value, (datetime, date)):
        return pd.Timestamp(value)
    if isinstance(value, str):
        parsed_date = parse_date(value)
        if parsed_date is not None:
            return parsed_date
    return value


def coerce_saved_rows(rows: Sequence[Sequence[Any]], headers: Sequence[str]) -> List[ProcessedRow]:
    out: List[ProcessedRow] = []
    for row in rows:
        out.append({header: coerce_saved_cell(row[idx] if idx < len(row) else None) for idx, header in enumerate(headers)})
    return out
