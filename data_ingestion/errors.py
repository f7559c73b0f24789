"""Exceptions raised by the ingestion pipeline."""

from typing import Optional


class IngestionError(Exception):
    """Base class for ingestion failures."""

    def __init__(self, reason: str, source_file_name: Optional[str] = None):
        self.reason = reason
        self.source_file_name = source_file_name
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.source_file_name:
            return f"{self.source_file_name}: {self.reason}"
        return self.reason


class FormatError(IngestionError):
    """Raised when a source is missing, unreadable or malformed."""

    def __init__(
        self,
        reason: str,
        source_file_name: Optional[str] = None,
        line_number: Optional[int] = None,
    ):
        self.line_number = line_number
        super().__init__(reason, source_file_name)

    def __str__(self) -> str:
        message = super().__str__()
        if self.line_number is not None:
            return f"{message} (line {self.line_number})"
        return message


class UnsupportedFormatError(IngestionError):
    """Raised when the declared format is not one of the known kinds."""

    def __init__(self, declared_format: object, source_file_name: Optional[str] = None):
        self.declared_format = declared_format
        super().__init__(
            f"Unsupported format: {declared_format!r}. "
            "Supported formats: spreadsheet, delimited, sql",
            source_file_name,
        )
