"""Exceptions raised while converting values to ESTree nodes."""

from __future__ import annotations

from typing import Any


class ConversionError(RuntimeError):
    """Base class for conversion failures.

    `cause` holds the value that could not be converted so callers can
    inspect it programmatically.
    """

    def __init__(self, message: str, cause: Any = None):
        super().__init__(message)
        self.cause = cause


class UnsupportedValueError(ConversionError, TypeError):
    """Raised when no conversion rule (or fallback) accepts a value."""


class CircularReferenceError(ConversionError, ValueError):
    """Raised when a value contains itself while references are tracked."""


__all__ = ["ConversionError", "UnsupportedValueError", "CircularReferenceError"]
