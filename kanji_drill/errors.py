"""Errors that prevent a drill session from starting."""
from __future__ import annotations


class LoadError(Exception):
    """The vocabulary could not be turned into a deck."""


class SourceNotFoundError(LoadError):
    def __init__(self, path):
        super().__init__(f"Vocabulary file not found: {path}")
        self.path = path


class SourceParseError(LoadError):
    """The vocabulary file is unreadable or is not a JSON object."""


class MalformedEntryError(LoadError):
    def __init__(self, symbol: str, field: str, reason: str):
        super().__init__(f"Entry {symbol!r}: field '{field}' {reason}")
        self.symbol = symbol
        self.field = field


class EmptySourceError(LoadError):
    def __init__(self, message: str = "Vocabulary contains no entries"):
        super().__init__(message)
