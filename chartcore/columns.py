from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence


class ColumnKind(str, Enum):
    NUMERIC = "numeric"
    STRING = "string"
    DATE = "date"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class ColumnType:
    name: str
    type: ColumnKind

    @classmethod
    def from_dict(cls, raw: dict) -> "ColumnType":
        return cls(name=str(raw.get("name", "")), type=ColumnKind(str(raw.get("type", "string")).lower()))

    def as_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.type.value}


class ColumnMismatchError(ValueError):
    """Column metadata does not line up with the headers or row cells."""


def as_column_types(values: Iterable[object]) -> List[ColumnType]:
    out: List[ColumnType] = []
    for v in values:
        out.append(v if isinstance(v, ColumnType) else ColumnType.from_dict(v))  # type: ignore[arg-type]
    return out


def count_kinds(column_types: Sequence[ColumnType]) -> Dict[ColumnKind, int]:
    counts = Counter(col.type for col in column_types)
    return {kind: counts.get(kind, 0) for kind in ColumnKind}


def _nth_column_of_kind(column_types: Sequence[ColumnType], kind: ColumnKind, n: int) -> Optional[int]:
    seen = 0
    for idx, col in enumerate(column_types):
        if col.type == kind:
            seen += 1
            if seen == n:
                return idx
    return None


def first_column_of_kind(column_types: Sequence[ColumnType], kind: ColumnKind) -> Optional[int]:
    return _nth_column_of_kind(column_types, kind, 1)


def second_column_of_kind(column_types: Sequence[ColumnType], kind: ColumnKind) -> Optional[int]:
    """Index of the 2nd column of `kind`, else the 1st."""
    idx = _nth_column_of_kind(column_types, kind, 2)
    if idx is None:
        return first_column_of_kind(column_types, kind)
    return idx


def third_column_of_kind(column_types: Sequence[ColumnType], kind: ColumnKind) -> Optional[int]:
    """Index of the 3rd column of `kind`, else whatever the 2nd lookup returns."""
    idx = _nth_column_of_kind(column_types, kind, 3)
    if idx is None:
        return second_column_of_kind(column_types, kind)
    return idx
