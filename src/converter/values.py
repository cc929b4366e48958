"""
Python stand-ins for JavaScript values that have no native Python form.

`UNDEFINED` and `HOLE` are sentinels, `Symbol` mirrors the global symbol
registry (`Symbol.for`), `BigInt` tags an integer as a bigint, and the boxed
primitives model `new Boolean(...)`, `new Number(...)` and `new String(...)`.
`URLSearchParams` keeps ordered query pairs and serialises them the way the
browser class does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode


class _Sentinel:
    __slots__ = ("_name",)

    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name


UNDEFINED = _Sentinel("UNDEFINED")
"""The JavaScript `undefined` value."""

HOLE = _Sentinel("HOLE")
"""Marks an absent index in an array (`[1, , 3]`)."""


class Symbol:
    """A JavaScript symbol. Use `Symbol.for_` for registry-backed symbols."""

    _registry: ClassVar[Dict[str, "Symbol"]] = {}

    __slots__ = ("description",)

    def __init__(self, description: Optional[str] = None):
        self.description = description

    @classmethod
    def for_(cls, key: str) -> "Symbol":
        key = str(key)
        symbol = cls._registry.get(key)
        if symbol is None:
            symbol = cls(key)
            cls._registry[key] = symbol
        return symbol

    @classmethod
    def key_for(cls, symbol: "Symbol") -> Optional[str]:
        if symbol.description is None:
            return None
        if cls._registry.get(symbol.description) is symbol:
            return symbol.description
        return None

    def __str__(self) -> str:
        return f"Symbol({self.description or ''})"

    def __repr__(self) -> str:
        return f"<{self}>"


class BigInt(int):
    """An integer that must be emitted as a bigint literal (`10n`)."""

    def __repr__(self) -> str:
        return f"BigInt({int(self)})"


@dataclass(frozen=True)
class _BoxedPrimitive:
    value: object

    constructor_name: ClassVar[str] = ""

    def value_of(self):
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BoxedBoolean(_BoxedPrimitive):
    value: bool

    constructor_name: ClassVar[str] = "Boolean"


@dataclass(frozen=True)
class BoxedNumber(_BoxedPrimitive):
    value: Union[int, float]

    constructor_name: ClassVar[str] = "Number"


@dataclass(frozen=True)
class BoxedString(_BoxedPrimitive):
    value: str

    constructor_name: ClassVar[str] = "String"


QueryInit = Union[str, Mapping[str, str], Iterable[Tuple[str, str]], None]


class URLSearchParams:
    """Ordered list of query parameters, serialised as form-encoded text."""

    def __init__(self, init: QueryInit = None):
        self._pairs: List[Tuple[str, str]] = []
        if init is None:
            return
        if isinstance(init, str):
            self._pairs = parse_qsl(init.lstrip("?"), keep_blank_values=True)
        elif isinstance(init, Mapping):
            self._pairs = [(str(key), str(value)) for key, value in init.items()]
        else:
            self._pairs = [(str(key), str(value)) for key, value in init]

    def append(self, name: str, value: str) -> None:
        self._pairs.append((str(name), str(value)))

    def get(self, name: str) -> Optional[str]:
        for key, value in self._pairs:
            if key == name:
                return value
        return None

    def items(self) -> List[Tuple[str, str]]:
        return list(self._pairs)

    def __str__(self) -> str:
        return urlencode(self._pairs)

    def __repr__(self) -> str:
        return f"URLSearchParams({str(self)!r})"


__all__ = [
    "UNDEFINED",
    "HOLE",
    "Symbol",
    "BigInt",
    "BoxedBoolean",
    "BoxedNumber",
    "BoxedString",
    "URLSearchParams",
]
