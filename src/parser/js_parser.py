"""
Read emitted JavaScript back with the Python `esprima` port.

The converter never parses anything itself; `parse_expression` lets callers
(and the CLI `--verify` switch) confirm that a generated expression is
syntactically valid and inspect its ESTree shape.
"""

from __future__ import annotations

from typing import Any, Dict

import esprima


class ExpressionParseError(ValueError):
    """Raised when source text is not exactly one JavaScript expression."""


def parse_expression(source: str, *, source_name: str = "<input>") -> Dict[str, Any]:
    """
    Parse `source` as exactly one JavaScript expression.

    The text is wrapped in parentheses so object literals are read as
    expressions rather than blocks.

    Raises:
        ExpressionParseError: If the text does not parse, or holds anything
            other than a single expression.
    """
    try:
        program = esprima.parseScript(f"({source}\n)", tolerant=False)
    except esprima.Error as exc:
        raise ExpressionParseError(f"{source_name}: {exc}") from exc

    raw_ast = program.toDict() if hasattr(program, "toDict") else program
    body = raw_ast.get("body", [])
    if len(body) != 1 or body[0].get("type") != "ExpressionStatement":
        raise ExpressionParseError(f"{source_name}: expected a single expression")
    expression = body[0]["expression"]
    if expression.get("type") == "SequenceExpression":
        raise ExpressionParseError(f"{source_name}: expected a single expression")
    return expression


__all__ = ["ExpressionParseError", "parse_expression"]
