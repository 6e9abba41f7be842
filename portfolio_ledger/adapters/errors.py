"""Project-native typed exceptions for reconciliation input failures."""

from __future__ import annotations


class LedgerInputError(Exception):
    """Base exception for input adapter failures.

    Attributes:
        source_path: Path of the input file that failed, when known.
    """

    def __init__(self, message: str, source_path: str | None = None):
        super().__init__(message)
        self.source_path = source_path


class LedgerInputFileError(LedgerInputError, OSError):
    """Input file is unreadable or structurally malformed."""


class LedgerInputRowError(LedgerInputError, ValueError):
    """One input row violates the expected record contract.

    Attributes:
        row_number: One-based data row number within the source file.
    """

    def __init__(self, message: str, source_path: str | None = None, row_number: int | None = None):
        super().__init__(message=message, source_path=source_path)
        self.row_number = row_number
