"""Statistics engine: one ColumnProfile per ParsedTable column."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

import pandas as pd

from .cells import coerce_number, is_missing, kind_of
from .config import resolve_config
from .logging_utils import get_logger
from .models import CategoricalProfile, ColumnProfile, NumericProfile, ParsedTable

logger = get_logger(__name__)


def round_half_away(value: float, places: int = 2) -> float:
    """Round on the exact binary value, ties away from zero.

    ROUND_HALF_UP in ``decimal`` rounds ties away from zero, unlike the
    built-in ``round`` which rounds ties to even.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


class StatisticsEngine:
    """Numeric or categorical summary for every column of a table."""

    def __init__(self, top_values_limit: int = 5):
        self.top_values_limit = top_values_limit

    def summarize(self, table: ParsedTable) -> List[ColumnProfile]:
        profiles = [
            self._profile_column(header, table.column(index), table.row_count)
            for index, header in enumerate(table.headers)
        ]
        logger.info(f"Summarized {len(profiles)} columns")
        return profiles

    def _profile_column(
        self, header: str, values: List[Any], row_count: int
    ) -> ColumnProfile:
        present = [v for v in values if not is_missing(v)]

        numbers = [coerce_number(v) for v in present]
        if present and all(n is not None for n in numbers):
            profile: ColumnProfile = self._numeric_profile(header, numbers, row_count)
        else:
            profile = self._categorical_profile(header, present, row_count)

        logger.debug(f"Column '{header}': {profile.kind}, count={profile.count}")
        return profile

    def _numeric_profile(
        self, header: str, numbers: List[Any], row_count: int
    ) -> NumericProfile:
        """Get numeric statistics; median is the upper middle element."""

        ordered = sorted(numbers)
        mean = float(pd.Series(numbers, dtype=float).mean())

        return NumericProfile(
            column=header,
            count=len(numbers),
            mean=round_half_away(mean, 2),
            median=ordered[len(ordered) // 2],
            min=min(numbers),
            max=max(numbers),
            missing=row_count - len(numbers),
        )

    def _categorical_profile(
        self, header: str, present: List[Any], row_count: int
    ) -> CategoricalProfile:
        """Get categorical statistics; top values keep first-seen order."""

        # Keyed by kind so 1, "1" and True stay distinct
        distinct: Dict[Any, Any] = {}
        for v in present:
            distinct.setdefault((kind_of(v), v), v)

        return CategoricalProfile(
            column=header,
            count=len(present),
            unique_count=len(distinct),
            missing=row_count - len(present),
            top_values=list(distinct.values())[: self.top_values_limit],
        )


def summarize_columns(
    table: ParsedTable, config: Optional[Dict[str, Any]] = None
) -> List[ColumnProfile]:
    """Compute one profile per header, in header order."""
    cfg = resolve_config(config)
    return StatisticsEngine(int(cfg["top_values_limit"])).summarize(table)
