"""CLI entry point for cc-hook."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from cc_hook.schema import EVENT_SCHEMAS, format_validation_errors, get_event_schema, get_schema_as_json


def cmd_events(args: argparse.Namespace) -> int:
    """List the lifecycle events hooks can be written for."""
    for name in EVENT_SCHEMAS:
        print(name)
    return 0


def cmd_schema(args: argparse.Namespace) -> int:
    """Print an event's input (or output) JSON Schema."""
    try:
        print(get_schema_as_json(args.event, output=args.output))
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a JSON payload against an event's input (or output) schema."""
    try:
        schema = get_event_schema(args.event)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1

    try:
        text = Path(args.file).read_text(encoding="utf-8") if args.file else sys.stdin.read()
    except OSError as e:
        print(f"Error: could not read {args.file}: {e}", file=sys.stderr)
        return 1

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        print(f"Error: not valid JSON: {e}", file=sys.stderr)
        return 1

    adapter = schema.output_adapter if args.output else schema.input_adapter
    try:
        adapter.validate_python(payload)
    except ValidationError as e:
        for line in format_validation_errors(e):
            print(line)
        return 1

    print("OK")
    return 0


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="cc-hook",
        description="Inspect and check Claude Code hook payloads.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # events command
    subparsers.add_parser("events", help="List hook event names")

    # schema command
    schema_parser = subparsers.add_parser("schema", help="Print an event's JSON Schema")
    schema_parser.add_argument("event", help="Event name, e.g. PreToolUse, or 'generic'")
    schema_parser.add_argument(
        "--output", action="store_true", help="Show the output schema instead of the input schema"
    )

    # validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a hook payload")
    validate_parser.add_argument("event", help="Event name, e.g. PreToolUse, or 'generic'")
    validate_parser.add_argument(
        "--output", action="store_true", help="Validate as hook output instead of input"
    )
    validate_parser.add_argument("file", nargs="?", help="JSON file (default: stdin)")

    args = parser.parse_args()

    if args.command == "events":
        return cmd_events(args)
    elif args.command == "schema":
        return cmd_schema(args)
    elif args.command == "validate":
        return cmd_validate(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
