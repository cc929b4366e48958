"""Detection of plain data records and extraction of their own fields."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Iterator, Tuple


def is_plain_object(value: Any) -> bool:
    """
    Return True when `value` is a bare record rather than a class instance.

    Only an exact `dict` with string keys, or a `SimpleNamespace`, qualifies.
    Subclasses carry behaviour of their own and are not treated as plain data.
    """
    if type(value) is dict:
        return all(isinstance(key, str) for key in value)
    return type(value) is SimpleNamespace


def own_fields(value: Any) -> Iterator[Tuple[str, Any]]:
    """Yield the string-keyed fields stored on `value` itself, in order."""
    if isinstance(value, dict):
        items = value.items()
    elif hasattr(value, "__dict__"):
        items = vars(value).items()
    else:
        items = _slot_items(value)
    for key, item in items:
        if isinstance(key, str):
            yield key, item


def _slot_items(value: Any) -> Iterator[Tuple[str, Any]]:
    seen = set()
    for klass in reversed(type(value).__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in seen or name in ("__dict__", "__weakref__"):
                continue
            seen.add(name)
            try:
                yield name, getattr(value, name)
            except AttributeError:
                # Declared but never assigned.
                continue


__all__ = ["is_plain_object", "own_fields"]
