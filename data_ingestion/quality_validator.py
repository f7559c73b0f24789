from typing import Any, Dict, List, Optional

import pandas as pd

from .cells import CellKind, is_missing, kind_of
from .config import resolve_config
from .logging_utils import get_logger
from .models import ParsedTable, QualityReport

logger = get_logger(__name__)

EMPTY_COLUMNS_SUGGESTION = (
    "Consider removing empty columns or filling with default values"
)
HIGH_MISSING_SUGGESTION = (
    "Consider data imputation or column removal for high missing value columns"
)
MIXED_TYPES_SUGGESTION = "Ensure consistent data types within columns"


class QualityValidator:
    """Heuristic data-quality checks over a ParsedTable.

    Rules run in a fixed order (empty columns, high missing ratio, mixed
    types). Each rule that fires adds one issue naming every offending
    column, paired with one suggestion.
    """

    def __init__(self, high_missing_threshold: float = 20.0):
        self.high_missing_threshold = float(high_missing_threshold)

    def validate(self, table: ParsedTable) -> QualityReport:
        """Run all rules and collect the findings."""

        report = QualityReport()
        if table.column_count == 0:
            return report

        missing_mask = self._missing_mask(table)

        empty_columns = self._empty_columns(table, missing_mask)
        if empty_columns:
            report.add(
                f"Empty columns detected: {', '.join(empty_columns)}",
                EMPTY_COLUMNS_SUGGESTION,
            )

        high_missing = self._high_missing_columns(table, missing_mask)
        if high_missing:
            report.add(
                f"High missing values in: {', '.join(high_missing)}",
                HIGH_MISSING_SUGGESTION,
            )

        mixed = self._mixed_type_columns(table)
        if mixed:
            report.add(
                f"Mixed data types in: {', '.join(mixed)}", MIXED_TYPES_SUGGESTION
            )

        logger.info(f"Quality validation found {len(report.issues)} issue(s)")
        return report

    def missing_percentages(self, table: ParsedTable) -> List[float]:
        """Percentage of missing cells per column (0 for an empty table)."""

        if table.column_count == 0:
            return []
        if table.row_count == 0:
            return [0.0] * table.column_count
        counts = self._missing_mask(table).sum(axis=0)
        return [float(c) * 100 / table.row_count for c in counts.tolist()]

    def _missing_mask(self, table: ParsedTable) -> pd.DataFrame:
        return table.to_frame().map(is_missing).astype(bool)

    def _empty_columns(
        self, table: ParsedTable, missing_mask: pd.DataFrame
    ) -> List[str]:
        # Vacuously true for every column when there are no rows
        all_missing = missing_mask.all(axis=0).tolist()
        return [h for h, empty in zip(table.headers, all_missing) if empty]

    def _high_missing_columns(
        self, table: ParsedTable, missing_mask: pd.DataFrame
    ) -> List[str]:
        if table.row_count == 0:
            return []
        columns = []
        for header, count in zip(table.headers, missing_mask.sum(axis=0).tolist()):
            pct = count * 100 / table.row_count
            logger.debug(f"Column '{header}': missing={pct:.2f}%")
            if pct > self.high_missing_threshold:
                columns.append(header)
        return columns

    def _mixed_type_columns(self, table: ParsedTable) -> List[str]:
        columns = []
        for index, header in enumerate(table.headers):
            kinds = {
                kind_of(v) for v in table.column(index) if not is_missing(v)
            }
            kinds.discard(CellKind.MISSING)
            if len(kinds) > 1:
                logger.debug(
                    f"Column '{header}' mixes {sorted(k.value for k in kinds)}"
                )
                columns.append(header)
        return columns


def validate_quality(
    table: ParsedTable, config: Optional[Dict[str, Any]] = None
) -> QualityReport:
    """Profile a ParsedTable for data-quality issues."""
    cfg = resolve_config(config)
    return QualityValidator(cfg["high_missing_threshold"]).validate(table)
