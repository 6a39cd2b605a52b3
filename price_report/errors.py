"""Exceptions raised while building price reports."""

from __future__ import annotations

from typing import Any

import orjson

MAX_RECORD_CHARS = 500


class PriceReportError(Exception):
    """Base class for every fatal error the report tool raises."""


class UsageError(PriceReportError):
    """Exception raised for wrong or missing command-line arguments."""


class InputFileError(PriceReportError):
    """Exception raised when the input file cannot be read."""


class ParseError(PriceReportError):
    """Exception raised when the input is not well-formed JSON."""


class StructureError(PriceReportError):
    """Exception raised when the document is not an array."""


class MalformedRecordError(PriceReportError):
    """Exception raised for a card record with missing or mistyped fields.

    Attributes:
        record: The record's fields other than the ones already consumed.
        missing: Names of required fields that were absent.
    """

    def __init__(self, message: str, record: dict[str, Any], missing: tuple[str, ...] = ()) -> None:
        """Store the residual record next to the message."""
        super().__init__(message)
        self.record = record
        self.missing = missing

    def __str__(self) -> str:
        """Render the message with the residual record, truncated for readability."""
        residual = orjson.dumps(self.record, default=str, option=orjson.OPT_SORT_KEYS).decode()
        if len(residual) > MAX_RECORD_CHARS:
            residual = f"{residual[:MAX_RECORD_CHARS]}..."
        return f"{self.args[0]}. Remaining fields: {residual}"


class NumericFormatError(PriceReportError):
    """Exception raised when text cannot be parsed as the expected number."""


class DownloadError(PriceReportError):
    """Exception raised when bulk data cannot be downloaded."""
