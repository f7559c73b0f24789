"""Dataset assembler: ParsedTable -> Dataset.

The schema is intentionally left at its defaults (every column ``string``,
nullable, not unique, no samples). Inferred statistics types are not
written into the schema.

Rows are keyed by header name, so when headers repeat the right-most
column wins for that key.
"""

import hashlib
import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

from .logging_utils import get_logger
from .models import ColumnSchema, Dataset, ParsedTable

logger = get_logger(__name__)

DATASET_ID_PREFIX = "ds_"


def derive_dataset_id(table: ParsedTable) -> str:
    """Content-derived id: same file name and cells give the same id."""
    payload = json.dumps(
        {
            "file": table.source_file_name,
            "headers": list(table.headers),
            "rows": [list(r) for r in table.rows],
        },
        sort_keys=True,
        default=str,
    )
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return f"{DATASET_ID_PREFIX}{digest[:16]}"


def _row_mapping(headers: List[str], row: tuple) -> Dict[str, Any]:
    record: Dict[str, Any] = {}
    for header, value in zip(headers, row):
        record[header] = value
    return record


def assemble_dataset(
    table: ParsedTable,
    dataset_id: Optional[str] = None,
    name: Optional[str] = None,
    *,
    source_format: Optional[str] = None,
) -> Dataset:
    """Build the externally visible Dataset for ``table``."""
    headers = list(table.headers)

    duplicates = sorted(h for h, n in Counter(headers).items() if n > 1)
    if duplicates:
        logger.warning(
            f"Duplicate column names {duplicates}: row values for these keys "
            "come from the last column with that name"
        )

    if dataset_id is None:
        dataset_id = derive_dataset_id(table)
    if name is None:
        name = Path(table.source_file_name).stem or dataset_id

    dataset = Dataset(
        id=dataset_id,
        name=name,
        columns=[ColumnSchema(name=h) for h in headers],
        rows=[_row_mapping(headers, r) for r in table.rows],
        row_count=table.row_count,
        column_count=table.column_count,
        source_file_name=table.source_file_name,
        file_size_bytes=table.file_size_bytes,
        source_format=source_format,
    )
    logger.info(
        f"Assembled dataset '{dataset.name}' ({dataset.id}): "
        f"{dataset.row_count} rows, {dataset.column_count} columns"
    )
    return dataset
