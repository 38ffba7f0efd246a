"""File loading helpers shared by the CLI commands."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml

from scriptlens.context import Character, Prop
from scriptlens.document import DocumentNode
from scriptlens.document.schema import load_document

__all__ = ["Registry", "load_document_file", "load_registry_file", "read_structured_file"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Registry:
    """Characters, props and note documents loaded for one CLI invocation."""

    characters: tuple[Character, ...] = ()
    props: tuple[Prop, ...] = ()
    notes: dict[str, DocumentNode | None] = field(default_factory=dict)


def read_structured_file(path: Path) -> Any:
    """Read JSON (``.json``) or YAML (anything else) from ``path``."""

    resolved = Path(path).expanduser()
    if not resolved.exists():
        raise FileNotFoundError(f"Input file '{resolved}' does not exist")
    raw = resolved.read_text(encoding="utf-8")
    if resolved.suffix.lower() == ".json":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in '{resolved}': {exc}") from exc
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in '{resolved}': {exc}") from exc


def load_document_file(path: Path) -> DocumentNode:
    payload = read_structured_file(path)
    if not isinstance(payload, Mapping):
        raise ValueError(f"Document '{path}' must contain a mapping")
    return load_document(payload)


def load_registry_file(path: Path | None) -> Registry:
    """Load the project registry; a missing path yields an empty registry."""

    if path is None:
        return Registry()

    payload = read_structured_file(path) or {}
    if not isinstance(payload, Mapping):
        raise ValueError("Registry file must contain a mapping")

    characters = tuple(_load_entries(payload.get("characters"), Character, "character"))
    props = tuple(_load_entries(payload.get("props"), Prop, "prop"))

    notes: dict[str, DocumentNode | None] = {}
    raw_notes = payload.get("notes") or {}
    if not isinstance(raw_notes, Mapping):
        raise ValueError("Registry 'notes' must be a mapping of note ids to documents")
    for note_id, content in raw_notes.items():
        notes[str(note_id)] = load_document(content) if content else None

    logger.debug(
        "Loaded registry with %d characters, %d props, %d notes",
        len(characters),
        len(props),
        len(notes),
    )
    return Registry(characters=characters, props=props, notes=notes)


def _load_entries(values: Any, model: type, label: str) -> list[Any]:
    if values is None:
        return []
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise ValueError(f"Registry '{label}s' must be a list")

    entries: list[Any] = []
    for raw in values:
        if not isinstance(raw, Mapping) or not raw.get("id") or not raw.get("name"):
            logger.warning("Skipping malformed %s entry: %r", label, raw)
            continue
        entries.append(model.from_mapping(raw))
    return entries
