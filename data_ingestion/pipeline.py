from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .assembler import assemble_dataset
from .column_stats import summarize_columns
from .config import resolve_config
from .logging_utils import get_logger
from .models import ColumnProfile, Dataset, ParsedTable, QualityReport
from .normalizer import normalize_table
from .quality_validator import validate_quality
from .readers import Source, read_source

logger = get_logger(__name__)


@dataclass
class IngestionResult:
    dataset: Dataset
    quality_report: QualityReport
    column_profiles: List[ColumnProfile]
    table: ParsedTable

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready payload: dataset, quality findings and column stats."""
        return {
            "dataset": self.dataset.model_dump(mode="json"),
            "quality": self.quality_report.to_dict(),
            "columns": [p.to_dict() for p in self.column_profiles],
        }


def _profile(
    table: ParsedTable, cfg: Dict[str, Any]
) -> Tuple[QualityReport, List[ColumnProfile]]:
    """Run validator and statistics engine over the same table."""
    if cfg["profile_concurrently"]:
        # Read-only fan-out over an immutable table
        with ThreadPoolExecutor(max_workers=2) as pool:
            report_future = pool.submit(validate_quality, table, cfg)
            stats_future = pool.submit(summarize_columns, table, cfg)
            return report_future.result(), stats_future.result()
    return validate_quality(table, cfg), summarize_columns(table, cfg)


def analyze_source(
    source: Source,
    declared_format: Any,
    file_name: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
) -> Tuple[ParsedTable, QualityReport, List[ColumnProfile]]:
    """Read and profile a source without assembling a Dataset."""
    cfg = resolve_config(config)
    raw, _fmt, name = read_source(source, declared_format, file_name, cfg)
    table = normalize_table(raw, name)
    report, profiles = _profile(table, cfg)
    return table, report, profiles


def ingest(
    source: Source,
    declared_format: Any,
    file_name: Optional[str] = None,
    *,
    dataset_id: Optional[str] = None,
    name: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> IngestionResult:
    """Primary entry point: read -> normalize -> {validate, summarize} -> assemble.

    Parameters
    ----------
    source : path, bytes or readable file object
        Raw source content.
    declared_format : str or SourceFormat
        'spreadsheet', 'delimited' or 'sql' (aliases 'excel', 'csv' accepted).
    file_name : str, optional
        Provenance name; defaults to the path's file name.
    dataset_id : str, optional
        Caller-assigned id; a content-derived id is used when omitted.
    name : str, optional
        Dataset display name; defaults to the file name stem.
    config : dict, optional
        Overrides for DEFAULT_CONFIG.

    Returns
    -------
    IngestionResult

    Raises
    ------
    FormatError
        Source missing, unreadable or malformed.
    UnsupportedFormatError
        ``declared_format`` is not a known format.
    """
    cfg = resolve_config(config)

    raw, fmt, source_name = read_source(source, declared_format, file_name, cfg)
    table = normalize_table(raw, source_name)
    report, profiles = _profile(table, cfg)
    dataset = assemble_dataset(
        table, dataset_id, name, source_format=fmt.value
    )

    logger.info(
        f"Ingested '{source_name}' as {fmt.value}: {dataset.row_count} rows, "
        f"{len(report.issues)} quality issue(s)"
    )
    return IngestionResult(
        dataset=dataset,
        quality_report=report,
        column_profiles=profiles,
        table=table,
    )
