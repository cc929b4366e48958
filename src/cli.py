"""
Command-line interface for converting data files to JavaScript expressions.
"""

from __future__ import annotations

import argparse
import ast
import json
import re
import sys
from pathlib import Path
from typing import Any, List

from converter import ConversionError, Converter, ConvertOptions
from emitter import EmitError, EmitOptions, emit_module
from parser import ExpressionParseError, parse_expression


def _print_diagnostics(messages: List[str]) -> None:
    if not messages:
        return
    for message in messages:
        sys.stderr.write(message + "\n")


def _load_value(source: str, input_format: str) -> Any:
    if input_format == "json":
        return json.loads(source)
    return ast.literal_eval(source)


def _json_default(value: Any) -> Any:
    # ESTree JSON writes regex literal values as null; `regex` carries the data.
    if isinstance(value, re.Pattern):
        return None
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def convert_command(args: argparse.Namespace) -> int:
    input_path = Path(args.input).resolve()
    if not input_path.exists():
        sys.stderr.write(f"ERROR: Input file not found: {input_path}\n")
        return 1

    try:
        source = input_path.read_text(encoding="utf-8")
    except OSError as exc:
        sys.stderr.write(f"ERROR: Failed to read {input_path}: {exc}\n")
        return 1

    try:
        value = _load_value(source, args.input_format)
    except (ValueError, SyntaxError, TypeError) as exc:
        sys.stderr.write(f"ERROR: Failed to load {args.input_format} value: {exc}\n")
        return 1

    converter = Converter(ConvertOptions(preserve_references=True))
    try:
        node = converter.convert(value)
    except ConversionError as exc:
        sys.stderr.write(f"ERROR: Conversion failed: {exc}\n")
        return 1

    diagnostics = [f"INFO {input_path}: {message}" for message in converter.diagnostics]

    if args.format == "json":
        output = json.dumps(node, default=_json_default, ensure_ascii=False, indent=2) + "\n"
    else:
        emit_options = EmitOptions(declaration=args.declaration, name=args.name)
        try:
            emit_result = emit_module(node, emit_options)
        except EmitError as exc:
            sys.stderr.write(f"ERROR: Emit failed: {exc}\n")
            return 1
        if args.verify:
            try:
                parse_expression(emit_result.expression, source_name=str(input_path))
            except ExpressionParseError as exc:
                sys.stderr.write(f"ERROR: Verification failed: {exc}\n")
                return 1
            diagnostics.append(f"INFO {input_path}: output parsed back successfully.")
        output = emit_result.source

    if args.out:
        output_path = Path(args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    _print_diagnostics(diagnostics)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="value2estree", description="Convert Python or JSON data to JavaScript"
    )
    subparsers = parser.add_subparsers(dest="command")

    convert_parser = subparsers.add_parser(
        "convert", help="Convert a data file to a JavaScript expression"
    )
    convert_parser.add_argument("input", help="Path to the data file")
    convert_parser.add_argument(
        "--out",
        help="Output file path (defaults to standard output)",
    )
    convert_parser.add_argument(
        "--input-format",
        choices=["python", "json"],
        default="python",
        help="Read the input as a Python literal or as JSON.",
    )
    convert_parser.add_argument(
        "--format",
        choices=["js", "json"],
        default="js",
        help="Write JavaScript source or the ESTree node as JSON.",
    )
    convert_parser.add_argument(
        "--declaration",
        choices=["export", "const", "none"],
        default="export",
        help="Wrap the expression in `export default` or `const NAME =`.",
    )
    convert_parser.add_argument(
        "--name",
        default="value",
        help="Binding name used with --declaration const.",
    )
    convert_parser.add_argument(
        "--verify",
        action="store_true",
        help="Parse the generated JavaScript back with esprima.",
    )
    convert_parser.set_defaults(func=convert_command)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
