"""Data structures passed between pipeline stages.

RawTable and ParsedTable are transient, created per ingestion call.
Dataset is the only value handed to callers for persistence.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field


@dataclass
class RawTable:
    """Reader output before normalization: rows may be ragged."""

    headers: List[str]
    rows: List[List[Any]]
    raw_byte_size: int


@dataclass(frozen=True)
class ParsedTable:
    """Canonical grid: every row has exactly ``column_count`` cells."""

    headers: Tuple[str, ...]
    rows: Tuple[Tuple[Any, ...], ...]
    file_size_bytes: int = 0
    source_file_name: str = ""

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def column(self, index: int) -> List[Any]:
        return [row[index] for row in self.rows]

    def to_frame(self) -> pd.DataFrame:
        """Object-dtype frame with positional columns (headers may repeat)."""
        return pd.DataFrame(
            list(self.rows), columns=range(self.column_count), dtype=object
        )


@dataclass
class NumericProfile:
    column: str
    count: int
    mean: float
    median: Union[int, float]
    min: Union[int, float]
    max: Union[int, float]
    missing: int
    kind: str = field(default="numeric", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CategoricalProfile:
    column: str
    count: int
    unique_count: int
    missing: int
    top_values: List[Any] = field(default_factory=list)
    kind: str = field(default="categorical", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


ColumnProfile = Union[NumericProfile, CategoricalProfile]


@dataclass
class QualityReport:
    """Findings in rule order, with one suggestion per finding."""

    issues: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    def add(self, issue: str, suggestion: str) -> None:
        self.issues.append(issue)
        self.suggestions.append(suggestion)

    def to_dict(self) -> Dict[str, List[str]]:
        return {"issues": list(self.issues), "suggestions": list(self.suggestions)}


class ColumnSchema(BaseModel):
    """Schema entry for one dataset column."""

    name: str
    type: str = "string"
    nullable: bool = True
    unique: bool = False
    sample_values: List[Any] = Field(default_factory=list)


class Dataset(BaseModel):
    """Assembled dataset handed to the storage collaborator."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    columns: List[ColumnSchema]
    rows: List[Dict[str, Any]]
    row_count: int
    column_count: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source_file_name: str = ""
    file_size_bytes: int = 0
    source_format: Optional[str] = None

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]
