"""CLI commands for surrounding context and image prompt sections."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from scriptlens.context.config import load_context_config
from scriptlens.context.formatting import build_full_prompt, format_context
from scriptlens.context.selection import selection_info
from scriptlens.context.walker import extract_context_with_pronouns
from scriptlens.document.schema import DocumentSchemaError

from .io import load_document_file, load_registry_file

__all__ = ["register_commands"]


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("document", type=Path, help="Editor JSON/YAML screenplay document.")
    parser.add_argument(
        "--registry",
        type=Path,
        default=None,
        help="YAML/JSON file with characters, props and note documents.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Context limits YAML (default: config/context.yaml when present).",
    )
    parser.add_argument("--from", dest="start", type=int, required=True, help="Selection start position.")
    parser.add_argument("--to", dest="end", type=int, default=None, help="Selection end position.")


def register_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add context-related subcommands to the main CLI parser."""

    context_parser = subparsers.add_parser(
        "context",
        description="Render the narrative context preceding a selection.",
        help="Render the narrative context preceding a selection.",
    )
    _add_common_arguments(context_parser)
    context_parser.set_defaults(func=context_cli, command="context")

    prompt_parser = subparsers.add_parser(
        "prompt",
        description="Build an image prompt for a selection.",
        help="Build an image prompt for a selection.",
    )
    _add_common_arguments(prompt_parser)
    prompt_parser.add_argument(
        "--no-context",
        action="store_true",
        help="Skip the character/prop description section.",
    )
    prompt_parser.set_defaults(func=prompt_cli, command="prompt")


def context_cli(args: argparse.Namespace) -> int:
    try:
        document = load_document_file(args.document)
        registry = load_registry_file(args.registry)
        limits = load_context_config(args.config)
    except (FileNotFoundError, ValueError, DocumentSchemaError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    end = args.start if args.end is None else args.end
    selection = selection_info(document, args.start, end)
    context = extract_context_with_pronouns(
        args.start,
        document,
        selection.selected_text,
        registry.characters,
        registry.notes,
        limits=limits,
    )
    print(format_context(context))
    return 0


def prompt_cli(args: argparse.Namespace) -> int:
    try:
        document = load_document_file(args.document)
        registry = load_registry_file(args.registry)
        limits = load_context_config(args.config)
    except (FileNotFoundError, ValueError, DocumentSchemaError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    end = args.start if args.end is None else args.end
    selection = selection_info(document, args.start, end)
    if not selection.has_selection:
        print("error: selection is empty", file=sys.stderr)
        return 1

    full_prompt = build_full_prompt(
        selection.selected_text,
        selection.mentions,
        registry.characters,
        registry.props,
        registry.notes,
        include_context=not args.no_context,
        limits=limits,
    )
    print(full_prompt.prompt)
    if full_prompt.context_section:
        print()
        print(full_prompt.context_section)
    return 0
