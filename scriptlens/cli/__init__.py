from __future__ import annotations

import argparse

from .context import register_commands as register_context_commands
from .projection import register_commands as register_projection_commands

__all__ = ["register_commands"]


def register_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add every scriptlens subcommand to the main CLI parser."""
    register_projection_commands(subparsers)
    register_context_commands(subparsers)
