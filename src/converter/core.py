"""
Conversion of Python runtime values into ESTree expression nodes.

The converter is a single ordered decision tree: every value is matched
against the rules below, top to bottom, and the first rule that accepts it
builds the node (converting children first). The resulting tree, rendered by
any ESTree code generator, evaluates back to an equivalent JavaScript value.

Values that no rule accepts are handed to the configured `fallback`, or
rejected with `UnsupportedValueError`. When `preserve_references` is enabled
the converter tracks composite values by identity so shared values reuse one
node and self-containing values raise `CircularReferenceError` instead of
recursing forever.
"""

from __future__ import annotations

import dataclasses
import math
import re
from array import array
from collections.abc import Mapping, Set as AbstractSet
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
from urllib.parse import ParseResult, SplitResult

from .errors import CircularReferenceError, UnsupportedValueError
from .nodes import (
    Node,
    array_expression,
    bigint_literal,
    identifier,
    literal,
    negation,
    new_expression,
    object_expression,
    property_node,
    regex_literal,
    static_call,
)
from .plain import is_plain_object, own_fields
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

# Number.MAX_SAFE_INTEGER; larger integers lose precision as JS numbers.
MAX_SAFE_INTEGER = 2**53 - 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)

_REGEX_FLAGS = ((re.IGNORECASE, "i"), (re.MULTILINE, "m"), (re.DOTALL, "s"))

# `(?i)` or `(?i-m:...)` groups that are not escaped.
_INLINE_FLAGS = re.compile(r"(?<!\\)\(\?[aiLmsux-]+[:)]")

_LINE_TERMINATORS = {"\n": "\\n", "\r": "\\r", "\u2028": "\\u2028", "\u2029": "\\u2029"}

_INTEGER_ARRAYS = {
    (True, 1): "Int8Array",
    (True, 2): "Int16Array",
    (True, 4): "Int32Array",
    (True, 8): "BigInt64Array",
    (False, 1): "Uint8Array",
    (False, 2): "Uint16Array",
    (False, 4): "Uint32Array",
    (False, 8): "BigUint64Array",
}


@dataclass(frozen=True)
class ConvertOptions:
    """Switches controlling how non-primitive values are converted."""

    instance_as_object: bool = False
    preserve_references: bool = False
    fallback: Optional[Callable[[Any], Node]] = None


class Converter:
    """Recursive value to ESTree converter for a single traversal."""

    def __init__(self, options: Optional[ConvertOptions] = None):
        self.options = options or ConvertOptions()
        self.diagnostics: List[str] = []
        # id -> value currently being converted (an ancestor of the cursor).
        self._in_progress: Optional[Dict[int, Any]] = (
            {} if self.options.preserve_references else None
        )
        # id -> (value, node); the value is held so its id stays unique.
        self._converted: Dict[int, Tuple[Any, Node]] = {}

    def _note(self, message: str) -> None:
        self.diagnostics.append(message)

    def convert(self, value: Any) -> Node:
        """Convert `value` as a fresh traversal; earlier calls leave no state."""
        self.diagnostics = []
        self._in_progress = {} if self.options.preserve_references else None
        self._converted = {}
        return self._convert(value)

    # ---------------------------------------------------------------- primitives

    def _convert(self, value: Any) -> Node:
        if value is UNDEFINED:
            return identifier("undefined")
        if value is None:
            return literal(None)
        if isinstance(value, float) and value == math.inf:
            return identifier("Infinity")
        if isinstance(value, float) and math.isnan(value):
            return identifier("NaN")
        if isinstance(value, bool):
            return literal(value)
        if _is_bigint(value):
            if value >= 0:
                return bigint_literal(value)
            return negation(self._convert(BigInt(-value)))
        if isinstance(value, (int, float)):
            return self._convert_number(value)
        if isinstance(value, str):
            return literal(value)
        if isinstance(value, Symbol):
            return self._convert_symbol(value)
        return self._convert_tracked(value)

    def _convert_number(self, value) -> Node:
        if value < 0:
            return negation(self._convert(-value))
        if isinstance(value, float) and math.copysign(1.0, value) < 0:
            self._note("Negative zero has no literal form; emitted as 0.")
            return literal(0.0)
        return literal(value)

    def _convert_symbol(self, value: Symbol) -> Node:
        key = Symbol.key_for(value)
        if not key:
            raise UnsupportedValueError(
                f"Only global symbols are supported, got: {value}", value
            )
        return static_call("Symbol", "for", [self._convert(key)])

    # ---------------------------------------------------------------- composites

    def _convert_tracked(self, value: Any) -> Node:
        if self._in_progress is None:
            return self._convert_object(value)

        key = id(value)
        if key in self._in_progress:
            raise CircularReferenceError(f"Found circular reference: {value}", value)
        previous = self._converted.get(key)
        if previous is not None:
            return previous[1]

        self._in_progress[key] = value
        try:
            node = self._convert_object(value)
        finally:
            del self._in_progress[key]
        self._converted[key] = (value, node)
        return node

    def _convert_object(self, value: Any) -> Node:
        # URL parse results are namedtuples; match them before sequences.
        if isinstance(value, (SplitResult, ParseResult)):
            return new_expression("URL", [self._convert(value.geturl())])
        if isinstance(value, (list, tuple)):
            return array_expression(
                [None if item is HOLE else self._convert(item) for item in value]
            )
        if isinstance(value, (BoxedBoolean, BoxedNumber, BoxedString)):
            return new_expression(value.constructor_name, [self._convert(value.value_of())])
        if isinstance(value, re.Pattern):
            return self._convert_pattern(value)
        if isinstance(value, date):
            return new_expression("Date", [self._convert(self._epoch_millis(value))])
        if isinstance(value, (bytes, bytearray, memoryview)):
            return static_call("Buffer", "from", [self._array_of(bytes(value))])
        if isinstance(value, array):
            node = self._convert_typed_array(value)
            if node is not None:
                return node
        if isinstance(value, Mapping) and not is_plain_object(value):
            entries = [
                array_expression([self._convert(key), self._convert(item)])
                for key, item in value.items()
            ]
            return new_expression("Map", [array_expression(entries)])
        if isinstance(value, AbstractSet):
            return new_expression("Set", [self._array_of(value)])
        if isinstance(value, URLSearchParams):
            return new_expression("URLSearchParams", [self._convert(str(value))])
        if self.options.instance_as_object or is_plain_object(value):
            return object_expression(
                [
                    property_node(self._convert(key), self._convert(item))
                    for key, item in own_fields(value)
                ]
            )
        if self.options.fallback is not None:
            return self.options.fallback(value)
        raise UnsupportedValueError(f"Unsupported value: {value}", value)

    def _array_of(self, items: Iterable[Any]) -> Node:
        return array_expression([self._convert(item) for item in items])

    def _convert_pattern(self, value: "re.Pattern") -> Node:
        if not isinstance(value.pattern, str):
            raise UnsupportedValueError(
                f"Only str regular expressions are supported, got: {value}", value
            )
        if value.flags & re.VERBOSE:
            raise UnsupportedValueError(
                f"Verbose regular expressions are not supported, got: {value}", value
            )
        if _INLINE_FLAGS.search(value.pattern):
            raise UnsupportedValueError(
                f"Inline regular expression flags are not supported, got: {value}", value
            )
        if value.flags & re.ASCII:
            self._note(f"ASCII-only matching has no JavaScript flag; dropped for {value}.")
        flags = "".join(flag for bit, flag in _REGEX_FLAGS if value.flags & bit)
        return regex_literal(value, _regex_source(value.pattern), flags)

    def _epoch_millis(self, value: date) -> int:
        if not isinstance(value, datetime):
            return (value - _EPOCH.date()).days * 86_400_000
        if value.utcoffset() is None:
            self._note(f"Naive datetime {value.isoformat()} interpreted as UTC.")
            value = value.replace(tzinfo=timezone.utc)
        return (value - _EPOCH) // _MILLISECOND

    def _convert_typed_array(self, value: array) -> Optional[Node]:
        code = value.typecode
        if code == "f":
            name = "Float32Array"
        elif code == "d":
            name = "Float64Array"
        elif code in "bhilq" or code in "BHILQ":
            name = _INTEGER_ARRAYS.get((code.islower(), value.itemsize))
        else:
            return None
        if name is None:
            return None
        items: Iterable[Any] = value
        if name.startswith("Big"):
            items = (BigInt(item) for item in value)
        return new_expression(name, [self._array_of(items)])


def _regex_source(pattern: str) -> str:
    """Escape `pattern` the way `RegExp.prototype.source` does."""
    if not pattern:
        return "(?:)"

    def escape(match: "re.Match") -> str:
        if match.group(1):
            return match.group(1)
        if match.group(0) == "/":
            return "\\/"
        return _LINE_TERMINATORS[match.group(2)]

    return re.sub(r"(\\[^\n\r\u2028\u2029])|/|\\?([\n\r\u2028\u2029])", escape, pattern)


def _is_bigint(value: Any) -> bool:
    if isinstance(value, BigInt):
        return True
    return isinstance(value, int) and abs(value) > MAX_SAFE_INTEGER


def convert(value: Any, options: Optional[ConvertOptions] = None, **overrides: Any) -> Node:
    """
    Convert `value` into an ESTree expression node.

    Args:
        value: Any Python value; see the module docstring for the rules.
        options: Conversion switches. Keyword `overrides` (`instance_as_object`,
            `preserve_references`, `fallback`) replace individual fields.

    Returns:
        The ESTree node as a JSON-compatible dict.

    Raises:
        UnsupportedValueError: If no rule or fallback accepts a value.
        CircularReferenceError: If `preserve_references` is set and a value
            contains itself.
    """
    if options is None:
        options = ConvertOptions(**overrides)
    elif overrides:
        options = dataclasses.replace(options, **overrides)
    return Converter(options).convert(value)


__all__ = ["MAX_SAFE_INTEGER", "ConvertOptions", "Converter", "convert"]
