"""Python value to ESTree expression conversion."""

from .core import MAX_SAFE_INTEGER, ConvertOptions, Converter, convert
from .errors import CircularReferenceError, ConversionError, UnsupportedValueError
from .nodes import Node
from .plain import is_plain_object
from .values import (
    HOLE,
    UNDEFINED,
    BigInt,
    BoxedBoolean,
    BoxedNumber,
    BoxedString,
    Symbol,
    URLSearchParams,
)

__all__ = [
    "MAX_SAFE_INTEGER",
    "ConvertOptions",
    "Converter",
    "convert",
    "ConversionError",
    "UnsupportedValueError",
    "CircularReferenceError",
    "Node",
    "is_plain_object",
    "HOLE",
    "UNDEFINED",
    "BigInt",
    "BoxedBoolean",
    "BoxedNumber",
    "BoxedString",
    "Symbol",
    "URLSearchParams",
]
