"""Tabular ingestion package: format readers, normalization, quality checks,
column statistics and dataset assembly.

Public entry points:
    ingest(source, declared_format, file_name=None, *, dataset_id=None, name=None, config=None)
    analyze_source(source, declared_format, file_name=None, *, config=None)
    validate_quality(parsed_table)   -> QualityReport
    summarize_columns(parsed_table)  -> list of column profiles

Formats:
    spreadsheet  -> first worksheet of an Excel workbook
    delimited    -> comma-separated text
    sql          -> statement lines of a SQL script (never executed)
"""

from .assembler import assemble_dataset, derive_dataset_id
from .column_stats import summarize_columns
from .errors import FormatError, IngestionError, UnsupportedFormatError
from .models import (
    CategoricalProfile,
    ColumnSchema,
    Dataset,
    NumericProfile,
    ParsedTable,
    QualityReport,
)
from .normalizer import normalize_table
from .pipeline import IngestionResult, analyze_source, ingest
from .quality_validator import validate_quality
from .readers import SourceFormat, detect_format, read_source

__all__ = [
    "ingest",
    "analyze_source",
    "IngestionResult",
    "validate_quality",
    "summarize_columns",
    "normalize_table",
    "assemble_dataset",
    "derive_dataset_id",
    "read_source",
    "detect_format",
    "SourceFormat",
    "ParsedTable",
    "QualityReport",
    "NumericProfile",
    "CategoricalProfile",
    "ColumnSchema",
    "Dataset",
    "IngestionError",
    "FormatError",
    "UnsupportedFormatError",
]
