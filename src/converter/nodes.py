"""
Builders for the ESTree expression nodes produced by the converter.

Nodes are plain ESTree dicts, the same representation `esprima` returns from
`toDict()`, so they can be dumped to JSON or handed to any ESTree consumer.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

Node = Dict[str, Any]


def identifier(name: str) -> Node:
    return {"type": "Identifier", "name": name}


def literal(value: Any) -> Node:
    return {"type": "Literal", "value": value}


def bigint_literal(value: int) -> Node:
    return {"type": "Literal", "value": int(value), "bigint": str(int(value))}


def regex_literal(value: re.Pattern, pattern: str, flags: str) -> Node:
    return {
        "type": "Literal",
        "value": value,
        "regex": {"pattern": pattern, "flags": flags},
    }


def negation(argument: Node) -> Node:
    return {
        "type": "UnaryExpression",
        "operator": "-",
        "prefix": True,
        "argument": argument,
    }


def array_expression(elements: List[Optional[Node]]) -> Node:
    return {"type": "ArrayExpression", "elements": elements}


def property_node(key: Node, value: Node) -> Node:
    return {
        "type": "Property",
        "method": False,
        "shorthand": False,
        "computed": False,
        "kind": "init",
        "key": key,
        "value": value,
    }


def object_expression(properties: List[Node]) -> Node:
    return {"type": "ObjectExpression", "properties": properties}


def new_expression(constructor: str, arguments: List[Node]) -> Node:
    return {
        "type": "NewExpression",
        "callee": identifier(constructor),
        "arguments": arguments,
    }


def member_expression(object_name: str, property_name: str) -> Node:
    return {
        "type": "MemberExpression",
        "computed": False,
        "optional": False,
        "object": identifier(object_name),
        "property": identifier(property_name),
    }


def static_call(object_name: str, method: str, arguments: List[Node]) -> Node:
    """Build `object_name.method(...arguments)`, e.g. `Buffer.from([...])`."""
    return {
        "type": "CallExpression",
        "optional": False,
        "callee": member_expression(object_name, method),
        "arguments": arguments,
    }


__all__ = [
    "Node",
    "identifier",
    "literal",
    "bigint_literal",
    "regex_literal",
    "negation",
    "array_expression",
    "property_node",
    "object_expression",
    "new_expression",
    "member_expression",
    "static_call",
]
