"""Error types raised by tidychart.

Every error derives from TidyChartError and from the builtin exception a
caller would naturally catch (ValueError or LookupError), so

    try:
        table = parse_csv(text)
    except ValueError:
        ...

keeps working for callers that do not know about tidychart's own types.
"""

from __future__ import annotations

from typing import Any, Optional


class TidyChartError(Exception):
    """Base class for all tidychart errors."""


class ParseError(TidyChartError, ValueError):
    """Malformed CSV input.

    Attributes:
        line: 1-based line number in the source text, or None when the
            input as a whole is unusable (e.g. no header line).
    """

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class EncodingResolutionError(TidyChartError, ValueError):
    """An encoded column is absent or holds a non-numeric value on a numeric channel."""

    def __init__(self, message: str, column: Optional[str] = None) -> None:
        self.column = column
        super().__init__(message)


class DomainError(TidyChartError, ValueError):
    """Invalid scale domain or a value outside what a scale can represent."""


class ArgumentError(TidyChartError, ValueError):
    """An argument is outside the range an operation accepts."""


class UnknownKeyError(TidyChartError, LookupError):
    """A discrete scale was queried with a key that is not in its domain."""

    def __init__(self, key: Any, message: Optional[str] = None) -> None:
        self.key = key
        super().__init__(message or f"unknown key {key!r}")
