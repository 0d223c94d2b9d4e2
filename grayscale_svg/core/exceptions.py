from __future__ import annotations

"""Exception classes for grayscale conversion.

Only :class:`MalformedDocumentError` aborts a conversion call. Problems with
individual colour values or unsupported constructs are absorbed at the
smallest scope and reported through diagnostics instead.
"""

from typing import Optional


class GrayscaleError(Exception):
    """Base exception for all grayscale-conversion errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.cause = cause


class MalformedDocumentError(GrayscaleError):
    """Raised when the input text is not well-formed markup.

    ``line`` and ``column`` are filled in when the parser reports a position.
    """

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[int] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        base = super().__str__()
        if self.line is not None:
            return f"{base} (line {self.line}, column {self.column or 0})"
        return base


class InvalidOptionsError(GrayscaleError, ValueError):
    """Raised for an unknown grayscale method or an out-of-range strength."""
    pass


class BatchConversionError(GrayscaleError):
    """Raised when a batch run cannot start (e.g. missing input directory)."""

    def __init__(self, message: str, path: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause)
        self.path = path
