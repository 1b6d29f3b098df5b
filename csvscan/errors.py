from __future__ import annotations


class CsvScanError(Exception):
    """Base class for every error raised by csvscan."""


class ConfigurationError(CsvScanError, ValueError):
    """Delimiter or quote is not a single character, or both are the same."""


class InvalidInputError(CsvScanError, TypeError):
    """The value handed to parse() is not text."""


class UnterminatedQuoteError(CsvScanError, ValueError):
    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"unterminated quoted field at position {position}")
