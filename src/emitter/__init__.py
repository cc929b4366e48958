"""Utilities for emitting JavaScript source code from ESTree nodes."""

from .writer import EmitError, EmitOptions, EmitResult, Writer, emit_module, generate

__all__ = ["EmitError", "EmitOptions", "EmitResult", "Writer", "emit_module", "generate"]
