"""Format readers: turn raw source content into a RawTable.

Three adapters are provided:
  - spreadsheet (first worksheet of an xlsx workbook, native cell types kept)
  - delimited   (comma-separated text, every cell is text)
  - sql         (one row per non-blank, non-comment script line)

Readers never execute anything and never mutate the caller's source.
"""

from __future__ import annotations

import csv
import io
import os
import zipfile
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from .cells import to_cell
from .errors import FormatError, UnsupportedFormatError
from .logging_utils import get_logger
from .models import RawTable

logger = get_logger(__name__)

Source = Union[str, bytes, bytearray, os.PathLike, io.IOBase, Any]

SQL_HEADERS = ["SQL_Statement", "Line_Number"]
SQL_COMMENT_PREFIX = "--"


class SourceFormat(str, Enum):
    SPREADSHEET = "spreadsheet"
    DELIMITED = "delimited"
    SQL = "sql"


_FORMAT_ALIASES: Dict[str, SourceFormat] = {
    "spreadsheet": SourceFormat.SPREADSHEET,
    "excel": SourceFormat.SPREADSHEET,
    "xlsx": SourceFormat.SPREADSHEET,
    "delimited": SourceFormat.DELIMITED,
    "csv": SourceFormat.DELIMITED,
    "txt": SourceFormat.DELIMITED,
    "sql": SourceFormat.SQL,
}

_EXTENSION_FORMATS: Dict[str, SourceFormat] = {
    ".xlsx": SourceFormat.SPREADSHEET,
    ".xlsm": SourceFormat.SPREADSHEET,
    ".csv": SourceFormat.DELIMITED,
    ".txt": SourceFormat.DELIMITED,
    ".sql": SourceFormat.SQL,
}


def resolve_format(
    declared_format: Any, source_file_name: Optional[str] = None
) -> SourceFormat:
    """Map a declared format tag (enum member, value or alias) to SourceFormat."""
    if isinstance(declared_format, SourceFormat):
        return declared_format
    if isinstance(declared_format, str):
        fmt = _FORMAT_ALIASES.get(declared_format.strip().lower())
        if fmt is not None:
            return fmt
    raise UnsupportedFormatError(declared_format, source_file_name)


def detect_format(file_name: Union[str, os.PathLike]) -> SourceFormat:
    """Guess the format from a file extension."""
    ext = Path(file_name).suffix.lower()
    fmt = _EXTENSION_FORMATS.get(ext)
    if fmt is None:
        raise UnsupportedFormatError(ext or str(file_name), str(file_name))
    return fmt


# ---------------------------------------------------------------------------
# Source access
# ---------------------------------------------------------------------------


def _read_bytes(
    source: Source, source_file_name: str, encoding: str = "utf-8"
) -> bytes:
    """Read the whole source into memory.

    File objects are read to the end but never closed or rewound. Text
    read from a file object is encoded with ``encoding`` so the reader
    decodes it back to the same characters.
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)) and not hasattr(source, "read"):
        path = Path(source)
        if not path.is_file():
            raise FormatError(f"File not found: {path}", source_file_name)
        try:
            return path.read_bytes()
        except OSError as e:
            raise FormatError(f"Failed to read file: {e}", source_file_name) from e
    if hasattr(source, "read"):
        try:
            data = source.read()
        except (OSError, ValueError) as e:
            # ValueError: I/O operation on a closed file
            raise FormatError(f"Failed to read source: {e}", source_file_name) from e
        if isinstance(data, str):
            try:
                return data.encode(encoding)
            except UnicodeEncodeError as e:
                raise FormatError(
                    f"Could not encode text source as {encoding}: {e.reason}",
                    source_file_name,
                ) from e
            except LookupError as e:
                raise FormatError(
                    f"Unknown encoding: {encoding}", source_file_name
                ) from e
        return bytes(data)
    raise FormatError(
        f"Unsupported source type: {type(source).__name__}", source_file_name
    )


def _decode(data: bytes, encoding: str, source_file_name: str) -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        line_number = data[: e.start].count(b"\n") + 1
        raise FormatError(
            f"Could not decode source as {encoding}: {e.reason}",
            source_file_name,
            line_number=line_number,
        ) from e
    except LookupError as e:
        raise FormatError(f"Unknown encoding: {encoding}", source_file_name) from e


# ---------------------------------------------------------------------------
# Spreadsheet
# ---------------------------------------------------------------------------


def _build_headers(row: List[Any]) -> List[str]:
    cells = [to_cell(v) for v in row]
    while cells and (cells[-1] is None or str(cells[-1]).strip() == ""):
        cells.pop()
    headers: List[str] = []
    for i, val in enumerate(cells):
        if val is None or str(val).strip() == "":
            headers.append(f"Column_{i+1}")
        else:
            headers.append(str(val).strip())
    return headers


def read_spreadsheet(data: bytes, source_file_name: str = "") -> RawTable:
    """Read the first worksheet; row 0 holds the headers."""
    try:
        with pd.ExcelFile(io.BytesIO(data)) as workbook:
            sheet_names = workbook.sheet_names
            if not sheet_names:
                raise FormatError("Workbook contains no worksheets", source_file_name)
            # Only blank cells are missing; text such as "NA" stays text
            df_raw = workbook.parse(
                sheet_names[0],
                header=None,
                dtype=object,
                keep_default_na=False,
                na_values=[""],
            )
    except (
        ValueError,
        KeyError,
        TypeError,
        OSError,
        ImportError,
        # malformed workbook XML (ElementTree ParseError, lxml XMLSyntaxError)
        SyntaxError,
        zipfile.BadZipFile,
        InvalidFileException,
    ) as e:
        raise FormatError(f"Unreadable workbook: {e}", source_file_name) from e

    grid = df_raw.values.tolist()
    if not grid:
        logger.info(f"Worksheet '{sheet_names[0]}' is empty")
        return RawTable(headers=[], rows=[], raw_byte_size=len(data))

    headers = _build_headers(grid[0])
    rows = [[to_cell(v) for v in r] for r in grid[1:]]
    logger.info(
        f"Read worksheet '{sheet_names[0]}': {len(rows)} rows, {len(headers)} columns"
    )
    return RawTable(headers=headers, rows=rows, raw_byte_size=len(data))


# ---------------------------------------------------------------------------
# Delimited text
# ---------------------------------------------------------------------------


def read_delimited(
    data: bytes,
    source_file_name: str = "",
    *,
    encoding: str = "utf-8-sig",
    delimiter: str = ",",
) -> RawTable:
    """Parse comma-separated text; empty lines are skipped, row 0 is headers."""
    text = _decode(data, encoding, source_file_name)
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
    records: List[List[str]] = []
    try:
        for record in reader:
            if not record:
                continue
            records.append(record)
    except csv.Error as e:
        raise FormatError(
            f"Malformed delimited text: {e}",
            source_file_name,
            line_number=reader.line_num,
        ) from e

    if not records:
        return RawTable(headers=[], rows=[], raw_byte_size=len(data))

    headers, rows = records[0], records[1:]
    logger.info(f"Parsed delimited text: {len(rows)} rows, {len(headers)} columns")
    return RawTable(headers=list(headers), rows=[list(r) for r in rows], raw_byte_size=len(data))


# ---------------------------------------------------------------------------
# SQL script
# ---------------------------------------------------------------------------


def read_sql_script(
    data: bytes, source_file_name: str = "", *, encoding: str = "utf-8-sig"
) -> RawTable:
    """Extract statement lines; no SQL grammar is checked."""
    text = _decode(data, encoding, source_file_name)
    statements: List[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith(SQL_COMMENT_PREFIX):
            continue
        statements.append(stripped)

    rows: List[List[Any]] = [[stmt, n] for n, stmt in enumerate(statements, start=1)]
    logger.info(f"Extracted {len(rows)} SQL lines")
    return RawTable(headers=list(SQL_HEADERS), rows=rows, raw_byte_size=len(data))


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _source_name(source: Source, file_name: Optional[str]) -> str:
    if file_name:
        return str(file_name)
    if isinstance(source, (str, os.PathLike)) and not hasattr(source, "read"):
        return Path(source).name
    return str(getattr(source, "name", "") or "")


def read_source(
    source: Source,
    declared_format: Any,
    file_name: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Tuple[RawTable, SourceFormat, str]:
    """Read ``source`` with the reader for ``declared_format``.

    ``source`` may be a path, raw bytes, or a readable file object. Text
    content must be passed as bytes or a file object; a plain ``str`` is
    treated as a path.

    Returns
    -------
    (raw_table, resolved_format, source_file_name)
    """
    cfg = config or {}
    name = _source_name(source, file_name)
    fmt = resolve_format(declared_format, name)
    encoding = cfg.get("encoding", "utf-8-sig")
    data = _read_bytes(source, name, encoding)
    logger.debug(f"Read {len(data)} bytes from '{name}' as {fmt.value}")

    if fmt is SourceFormat.SPREADSHEET:
        raw = read_spreadsheet(data, name)
    elif fmt is SourceFormat.DELIMITED:
        raw = read_delimited(
            data,
            name,
            encoding=encoding,
            delimiter=cfg.get("delimiter", ","),
        )
    else:
        raw = read_sql_script(data, name, encoding=encoding)
    return raw, fmt, name


__all__ = [
    "SourceFormat",
    "SQL_HEADERS",
    "resolve_format",
    "detect_format",
    "read_spreadsheet",
    "read_delimited",
    "read_sql_script",
    "read_source",
]
