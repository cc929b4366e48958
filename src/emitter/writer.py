"""
Render ESTree expression nodes to JavaScript source text.

`generate` covers the expression subset produced by the converter (plus the
ordinary variants of those nodes, such as computed members and optional
calls) and prints it on a single line. `emit_module` wraps the expression in
a module-level statement ready for writing to disk.
"""

from __future__ import annotations

import io
import json
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Member objects that can be followed by `.name` or `(...)` without parentheses.
_PRIMARY = {"Identifier", "MemberExpression", "CallExpression", "ArrayExpression"}


class EmitError(RuntimeError):
    """Raised when a node cannot be rendered as JavaScript."""

    def __init__(self, message: str, node: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.node = node


@dataclass(frozen=True)
class EmitOptions:
    declaration: str = "export"  # "export", "const" or "none"
    name: str = "value"
    trailing_newline: bool = True


@dataclass(frozen=True)
class EmitResult:
    source: str
    expression: str


class Writer:
    """Visitor turning ESTree expression nodes into source strings."""

    def generate(self, node: Optional[Dict[str, Any]]) -> str:
        if not isinstance(node, dict):
            raise EmitError(f"Expected an ESTree node, got: {node!r}")
        handler = getattr(self, f"_emit_{node.get('type')}", None)
        if handler is None:
            raise EmitError(f"Unsupported expression node: {node.get('type')}", node)
        return handler(node)

    def _emit_Identifier(self, node: Dict[str, Any]) -> str:
        return node["name"]

    def _emit_Literal(self, node: Dict[str, Any]) -> str:
        regex = node.get("regex")
        if regex is not None:
            return f"/{regex['pattern']}/{regex['flags']}"
        if node.get("bigint") is not None:
            return f"{node['bigint']}n"
        value = node.get("value")
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return _format_number(value)
        if isinstance(value, str):
            return _quote(value)
        raise EmitError(f"Unsupported literal value: {value!r}", node)

    def _emit_UnaryExpression(self, node: Dict[str, Any]) -> str:
        operator = node["operator"]
        argument_node = node["argument"]
        argument = self.generate(argument_node)
        if argument_node.get("type") == "UnaryExpression":
            argument = f"({argument})"
        if operator.isalpha():
            return f"{operator} {argument}"
        return f"{operator}{argument}"

    def _emit_ArrayExpression(self, node: Dict[str, Any]) -> str:
        elements = node.get("elements", [])
        parts = ["" if element is None else self.generate(element) for element in elements]
        inner = ", ".join(parts)
        if elements and elements[-1] is None:
            # `[1, ,]` has two slots; without the comma the hole would vanish.
            inner += ","
        return f"[{inner}]"

    def _emit_ObjectExpression(self, node: Dict[str, Any]) -> str:
        properties = node.get("properties", [])
        if not properties:
            return "{}"
        parts: List[str] = []
        for prop in properties:
            if prop.get("type") != "Property" or prop.get("kind", "init") != "init":
                raise EmitError("Only plain object properties are supported.", prop)
            key = self._emit_property_key(prop)
            parts.append(f"{key}: {self.generate(prop['value'])}")
        return "{ " + ", ".join(parts) + " }"

    def _emit_property_key(self, prop: Dict[str, Any]) -> str:
        key = prop["key"]
        if prop.get("computed"):
            return f"[{self.generate(key)}]"
        if key.get("type") == "Literal" and isinstance(key.get("value"), str):
            if _IDENTIFIER.match(key["value"]):
                return key["value"]
        return self.generate(key)

    def _emit_MemberExpression(self, node: Dict[str, Any]) -> str:
        target = self._emit_callee(node["object"])
        dot = "?." if node.get("optional") else "."
        if node.get("computed"):
            prefix = "?." if node.get("optional") else ""
            return f"{target}{prefix}[{self.generate(node['property'])}]"
        return f"{target}{dot}{self.generate(node['property'])}"

    def _emit_CallExpression(self, node: Dict[str, Any]) -> str:
        callee = self._emit_callee(node["callee"])
        call = "?.(" if node.get("optional") else "("
        return f"{callee}{call}{self._emit_arguments(node)})"

    def _emit_NewExpression(self, node: Dict[str, Any]) -> str:
        callee = self._emit_callee(node["callee"])
        return f"new {callee}({self._emit_arguments(node)})"

    def _emit_callee(self, node: Dict[str, Any]) -> str:
        source = self.generate(node)
        if node.get("type") in _PRIMARY:
            return source
        if node.get("type") == "Literal" and isinstance(node.get("value"), str):
            return source
        return f"({source})"

    def _emit_arguments(self, node: Dict[str, Any]) -> str:
        return ", ".join(self.generate(argument) for argument in node.get("arguments", []))


def _format_number(value) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _quote(value: str) -> str:
    text = json.dumps(value, ensure_ascii=False)
    # Valid in JSON but line terminators in older JavaScript engines.
    return text.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")


def generate(node: Dict[str, Any]) -> str:
    """
    Render an ESTree expression node to JavaScript source.

    Raises:
        EmitError: If the tree contains a node type outside the supported set.
    """
    return Writer().generate(node)


def emit_module(node: Dict[str, Any], options: Optional[EmitOptions] = None) -> EmitResult:
    """
    Render the given expression node as a module-level statement.
    """
    options = options or EmitOptions()
    expression = generate(node)

    buffer = io.StringIO()
    if options.declaration == "export":
        buffer.write(f"export default {expression};")
    elif options.declaration == "const":
        if not _IDENTIFIER.match(options.name):
            raise EmitError(f"Invalid binding name: {options.name!r}")
        buffer.write(f"const {options.name} = {expression};")
    elif options.declaration == "none":
        buffer.write(expression)
    else:
        raise EmitError(f"Unknown declaration style: {options.declaration!r}")
    if options.trailing_newline:
        buffer.write("\n")

    return EmitResult(source=buffer.getvalue(), expression=expression)


__all__ = ["EmitError", "EmitOptions", "EmitResult", "Writer", "generate", "emit_module"]
