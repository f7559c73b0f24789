"""Command-line interface for the ingestion pipeline.

Usage (examples):
    python -m data_ingestion.cli path/to/file.csv
    python -m data_ingestion.cli path/to/book.xlsx --name "Q3 sales"
    python -m data_ingestion.cli path/to/script.sql --json --output result.json

The CLI prints a concise human-readable summary by default; use --json for the full payload.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import IngestionError
from .formatting import format_file_size, format_number
from .logging_utils import setup_logging
from .pipeline import IngestionResult, ingest
from .readers import detect_format

EXIT_SUCCESS = 0
EXIT_INGESTION_ERROR = 1


def _describe_profile(p: Dict[str, Any]) -> str:
    if p["kind"] == "numeric":
        return (
            f"numeric count={p['count']} mean={p['mean']} median={p['median']} "
            f"min={p['min']} max={p['max']} missing={p['missing']}"
        )
    top = ", ".join(str(v) for v in p["top_values"])
    return (
        f"categorical count={p['count']} unique={p['unique_count']} "
        f"missing={p['missing']} top=[{top}]"
    )


def _summarize(result: IngestionResult) -> str:
    dataset = result.dataset
    cols = dataset.column_names
    preview_cols = cols[:8]
    more = "" if len(cols) <= 8 else f" (+{len(cols)-8} more)"
    lines = [
        f"Dataset: {dataset.name}  Id: {dataset.id}",
        f"Rows: {format_number(dataset.row_count)}  Columns: {dataset.column_count}  "
        f"Size: {format_file_size(dataset.file_size_bytes)}",
        f"Columns: {', '.join(preview_cols)}{more}",
    ]
    report = result.quality_report
    if report.has_issues:
        lines.append("Quality issues:")
        for issue, suggestion in zip(report.issues, report.suggestions):
            lines.append(f"  - {issue}")
            lines.append(f"    -> {suggestion}")
    else:
        lines.append("Quality issues: none")
    for p in [p.to_dict() for p in result.column_profiles[:3]]:
        lines.append(f"  - {p['column']}: {_describe_profile(p)}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Ingest and profile a spreadsheet, CSV or SQL script file."
    )
    parser.add_argument("file", help="Path to input .xlsx, .csv or .sql file")
    parser.add_argument(
        "--format",
        dest="declared_format",
        help="spreadsheet, delimited or sql (default: guessed from extension)",
    )
    parser.add_argument("--name", help="Dataset name (default: file name stem)")
    parser.add_argument("--id", dest="dataset_id", help="Dataset id to assign")
    parser.add_argument(
        "--delimiter", default=",", help="Field delimiter for CSV input (default: ,)"
    )
    parser.add_argument(
        "--encoding", default="utf-8-sig", help="Text encoding (default: utf-8-sig)"
    )
    parser.add_argument(
        "--concurrent",
        action="store_true",
        help="Run quality checks and statistics on separate threads",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print full JSON payload to stdout (in addition to summary)",
    )
    parser.add_argument(
        "--output",
        help="Optional path to write full JSON payload (pretty-printed)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    path = Path(args.file)
    config = {
        "delimiter": args.delimiter,
        "encoding": args.encoding,
        "profile_concurrently": args.concurrent,
    }
    try:
        declared = args.declared_format or detect_format(path)
        result = ingest(
            path,
            declared,
            dataset_id=args.dataset_id,
            name=args.name,
            config=config,
        )
    except IngestionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INGESTION_ERROR

    print(_summarize(result))

    payload = result.to_dict()
    if args.json:
        print("\n=== JSON Payload ===")
        print(json.dumps(payload, indent=2, default=str))

    if args.output:
        out_path = Path(args.output)
        out_path.write_text(
            json.dumps(payload, indent=2, default=str), encoding="utf-8"
        )
        print(f"\nSaved JSON payload to {out_path}")
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
