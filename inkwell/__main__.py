"""CLI entry point for Inkwell."""

import argparse
import json
import logging
import os
import sys
from typing import Any

from . import (
    DEFAULT_DELIMITER,
    ContextError,
    ExitCode,
    InkwellError,
    OutputWriteError,
    TemplateLoadError,
    ValidationError,
    render,
    scan_template,
)

DELIMITER_ENV = "INKWELL_DELIMITER"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="inkwell",
        description="Inkwell - template rendering with conditional blocks",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    default_delimiter = os.environ.get(DELIMITER_ENV, DEFAULT_DELIMITER)

    # Render command
    render_parser = subparsers.add_parser("render", help="Render a template")
    render_parser.add_argument("template", help="Path to template file, or - for stdin")
    render_parser.add_argument("--data", "-d", help="JSON data context")
    render_parser.add_argument("--data-file", "-f", help="Path to JSON data file")
    render_parser.add_argument(
        "--delimiter",
        default=default_delimiter,
        help=f"Marker delimiter (default: ${DELIMITER_ENV} or {DEFAULT_DELIMITER!r})",
    )
    render_parser.add_argument("--output", "-o", help="Write output to file instead of stdout")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Check directive balance")
    validate_parser.add_argument("template", help="Path to template file, or - for stdin")
    validate_parser.add_argument("--delimiter", default=default_delimiter, help="Marker delimiter")

    # List command
    list_parser = subparsers.add_parser("list", help="List variables and conditions")
    list_parser.add_argument("template", help="Path to template file, or - for stdin")
    list_parser.add_argument("--delimiter", default=default_delimiter, help="Marker delimiter")
    list_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "render":
            return cmd_render(args)
        elif args.command == "validate":
            return cmd_validate(args)
        elif args.command == "list":
            return cmd_list(args)
    except InkwellError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        return ExitCode.RUNTIME_ERROR

    return 0


def load_template(path: str) -> str:
    """Read template text from a file, or stdin for "-"."""
    if path == "-":
        return sys.stdin.read()
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise TemplateLoadError(f"Cannot read template {path}: {e.strerror}") from e


def load_context(data: str | None, data_file: str | None) -> dict[str, Any]:
    """Parse the data context from inline JSON or a JSON file."""
    if data is None and data_file is None:
        return {}

    source = "--data"
    try:
        if data is not None:
            context = json.loads(data)
        else:
            source = data_file
            with open(data_file, encoding="utf-8") as f:
                context = json.load(f)
    except OSError as e:
        raise ContextError(f"Cannot read data file {data_file}: {e.strerror}") from e
    except json.JSONDecodeError as e:
        raise ContextError(f"Invalid JSON in {source}: {e}") from e

    if not isinstance(context, dict):
        raise ContextError(f"Data in {source} must be a JSON object, got {type(context).__name__}")
    return context


def cmd_render(args) -> int:
    """Render a template."""
    template = load_template(args.template)
    context = load_context(args.data, args.data_file)

    output = render(template, context, delimiter=args.delimiter)

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(output)
        except OSError as e:
            raise OutputWriteError(f"Cannot write output {args.output}: {e.strerror}") from e
    else:
        sys.stdout.write(output)
    return 0


def cmd_validate(args) -> int:
    """Validate directive balance."""
    template = load_template(args.template)
    report = scan_template(template, delimiter=args.delimiter)

    if not report.valid:
        for problem in report.problems:
            print(f"  {problem}", file=sys.stderr)
        raise ValidationError(
            f"{len(report.problems)} problem(s) in {args.template}",
            problems=report.problems,
        )

    print(f"Valid: {args.template}")
    print(f"  Conditions: {len(report.conditions)}")
    print(f"  Variables: {len(report.variables)}")
    return 0


def cmd_list(args) -> int:
    """List variables and conditions referenced by a template."""
    template = load_template(args.template)
    report = scan_template(template, delimiter=args.delimiter)

    if args.format == "json":
        output = {
            "variables": report.variables,
            "conditions": report.conditions,
            "problems": report.problems,
        }
        print(json.dumps(output, indent=2))

    else:  # text
        print("Variables:")
        for path in report.variables:
            print(f"  {path}")
        print()
        print("Conditions:")
        for condition in report.conditions:
            print(f"  {condition}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
