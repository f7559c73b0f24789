"""Tabular normalizer: RawTable -> ParsedTable.

Ragged rows are tolerated: short rows are padded with the missing marker
(None), long rows are truncated to the header length.
"""

from typing import Any, List, Sequence

from .logging_utils import get_logger
from .models import ParsedTable, RawTable

logger = get_logger(__name__)


def _fit_row(row: Sequence[Any], width: int) -> tuple:
    if len(row) >= width:
        return tuple(row[:width])
    return tuple(row) + (None,) * (width - len(row))


def normalize_table(raw: RawTable, source_file_name: str = "") -> ParsedTable:
    """Build a ParsedTable whose rows all have exactly len(headers) cells."""
    headers: List[str] = [str(h) for h in raw.headers]
    width = len(headers)

    padded = sum(1 for r in raw.rows if len(r) < width)
    truncated = sum(1 for r in raw.rows if len(r) > width)
    if padded or truncated:
        logger.debug(
            f"Row length fix-up for '{source_file_name}': "
            f"{padded} padded, {truncated} truncated"
        )

    table = ParsedTable(
        headers=tuple(headers),
        rows=tuple(_fit_row(r, width) for r in raw.rows),
        file_size_bytes=raw.raw_byte_size,
        source_file_name=source_file_name,
    )
    logger.info(
        f"Normalized table: {table.row_count} rows, {table.column_count} columns"
    )
    return table
