"""Cell value model shared by readers, validator and statistics.

Cells are plain Python values restricted to a closed set of kinds:

    Missing  -> None
    Number   -> int / float (never bool)
    Text     -> str
    Boolean  -> bool

``to_cell`` folds whatever a reader hands back (numpy scalars, NaN,
datetimes) into that set.
"""

from __future__ import annotations

import datetime as _dt
import math
import re
from enum import Enum
from typing import Any, Optional, Union

import numpy as np

Number = Union[int, float]

_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


class CellKind(str, Enum):
    MISSING = "missing"
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"


def kind_of(value: Any) -> CellKind:
    """Runtime kind of a normalized cell."""
    if value is None:
        return CellKind.MISSING
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return CellKind.BOOLEAN
    if isinstance(value, (int, float)):
        return CellKind.NUMBER
    return CellKind.TEXT


def is_missing(value: Any) -> bool:
    return value is None or value == ""


def to_cell(value: Any) -> Any:
    """Convert a raw reader value into a cell of the closed variant."""
    if value is None:
        return None
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return value
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    try:
        # pandas.NaT and friends
        if value != value:
            return None
    except (TypeError, ValueError):
        pass
    return str(value)


def coerce_number(value: Any) -> Optional[Number]:
    """Return the numeric value of a cell, or None when it is not coercible.

    Numbers pass through, text is accepted when its stripped content is a
    plain decimal or scientific literal. Booleans, NaN/inf spellings and
    grouped thousands are rejected.
    """
    kind = kind_of(value)
    if kind is CellKind.NUMBER:
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value
    if kind is not CellKind.TEXT:
        return None
    text = value.strip()
    if not _NUMBER_PATTERN.match(text):
        return None
    if _INTEGER_PATTERN.match(text):
        return int(text)
    number = float(text)
    return number if math.isfinite(number) else None


__all__ = ["CellKind", "kind_of", "is_missing", "to_cell", "coerce_number"]
