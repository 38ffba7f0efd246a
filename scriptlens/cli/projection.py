"""CLI commands for plain-text projection, offset mapping and block ids."""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from scriptlens.document.blocks import assign_block_ids
from scriptlens.document.schema import DocumentSchemaError
from scriptlens.projection.mapping import map_offset_to_position, map_span_to_range
from scriptlens.projection.plaintext import project_plain_text

from .io import load_document_file

__all__ = ["register_commands"]


def register_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add projection-related subcommands to the main CLI parser."""

    project_parser = subparsers.add_parser(
        "project",
        description="Flatten a document into plain text.",
        help="Flatten a document into plain text.",
    )
    project_parser.add_argument("document", type=Path, help="Editor JSON/YAML document.")
    project_parser.add_argument(
        "--positions",
        action="store_true",
        help="Emit JSON with the position map instead of raw text.",
    )
    project_parser.set_defaults(func=project_cli, command="project")

    map_parser = subparsers.add_parser(
        "map",
        description="Map a plain-text offset back to a document position.",
        help="Map a plain-text offset back to a document position.",
    )
    map_parser.add_argument("document", type=Path, help="Editor JSON/YAML document.")
    map_parser.add_argument("offset", type=int, help="Offset into the projected text.")
    map_parser.add_argument(
        "--length",
        type=int,
        default=None,
        help="Span length; when given a JSON range is printed.",
    )
    map_parser.set_defaults(func=map_cli, command="map")

    block_parser = subparsers.add_parser(
        "block-ids",
        description="Assign unique block ids to a document.",
        help="Assign unique block ids to a document.",
    )
    block_parser.add_argument("document", type=Path, help="Editor JSON/YAML document.")
    block_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the updated document here instead of stdout.",
    )
    block_parser.set_defaults(func=block_ids_cli, command="block-ids")


def project_cli(args: argparse.Namespace) -> int:
    try:
        document = load_document_file(args.document)
    except (FileNotFoundError, ValueError, DocumentSchemaError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    result = project_plain_text(document)
    if args.positions:
        payload = {
            "text": result.text,
            "positions": [asdict(entry) for entry in result.positions],
        }
        print(json.dumps(payload, indent=2))
    else:
        print(result.text)
    return 0


def map_cli(args: argparse.Namespace) -> int:
    try:
        document = load_document_file(args.document)
    except (FileNotFoundError, ValueError, DocumentSchemaError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    if args.offset < 0:
        print("error: offset must be non-negative", file=sys.stderr)
        return 1

    positions = project_plain_text(document).positions
    if args.length is None:
        print(map_offset_to_position(args.offset, positions))
    else:
        span = map_span_to_range(args.offset, args.length, positions)
        print(json.dumps({"from": span.start, "to": span.end}))
    return 0


def block_ids_cli(args: argparse.Namespace) -> int:
    try:
        document = load_document_file(args.document)
    except (FileNotFoundError, ValueError, DocumentSchemaError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    rendered = json.dumps(assign_block_ids(document).to_mapping(), indent=2)
    if args.output is None:
        print(rendered)
    else:
        output = Path(args.output).expanduser()
        output.write_text(rendered + "\n", encoding="utf-8")
        print(f"Wrote {output}")
    return 0
