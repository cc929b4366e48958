"""Interfaces for reading JavaScript source back into ESTree nodes."""

from .js_parser import ExpressionParseError, parse_expression

__all__ = ["ExpressionParseError", "parse_expression"]
