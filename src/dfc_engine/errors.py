"""
Conversion Errors

Exception hierarchy shared by the engine, the I/O layer and the CLI.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class ConversionError(Exception):
    """Base class for every error raised while converting a sheet."""
    pass


class InvalidArgumentError(ConversionError, ValueError):
    """Raised when a value is outside the documented domain of a function."""
    pass


class InputNotFoundError(ConversionError, FileNotFoundError):
    """Raised when an input path (workbook or saved config) does not exist."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(f"Input file not found: {self.path}")


class ReaderError(ConversionError):
    """Raised when a workbook cannot be read (unsupported, corrupt, missing sheet)."""

    def __init__(self, message: str, path: Optional[str | Path] = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message} ({self.path})"
        super().__init__(message)


class InvalidConfigError(ConversionError):
    """Raised when a saved configuration is malformed or misses required fields."""

    def __init__(self, message: str, path: Optional[str | Path] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class InvalidDelimiterError(ConversionError, ValueError):
    """Raised when a delimiter is not exactly one character."""

    def __init__(self, delimiter: object):
        self.delimiter = delimiter
        super().__init__(f"Delimiter must be a single character, got {delimiter!r}")


class InvalidColumnIndexError(ConversionError, IndexError):
    """Raised when a column position falls outside the grid width."""

    def __init__(self, position: object, width: int):
        self.position = position
        self.width = width
        super().__init__(
            f"Column position {position!r} is out of range for a grid of width {width}"
        )


class WriteError(ConversionError):
    """Raised when the output cannot be written."""

    def __init__(self, message: str, path: Optional[str | Path] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)
