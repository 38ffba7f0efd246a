"""Gather scene, character and action context ahead of a cursor."""
from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Any, Mapping, Sequence

from scriptlens.document import DocumentNode, coerce_node
from scriptlens.document.walk import iter_nodes_between, measure
from scriptlens.projection.plaintext import content_to_plain_text

from . import Character, CharacterContextInfo, NoteLookup, SurroundingScriptContext
from .config import ContextLimits
from .introductions import match_known_character, parse_character_introduction
from .pronouns import detect_pronouns, resolve_pronouns
from .visual import truncate

__all__ = [
    "element_text",
    "extract_context",
    "extract_context_with_pronouns",
    "normalize_character_name",
    "note_excerpt",
]

logger = logging.getLogger(__name__)

_PARENTHETICAL_PATTERN = re.compile(r"\s*\(.*?\)\s*")

SCREENPLAY_ELEMENT = "screenplayElement"


def normalize_character_name(header: str) -> str:
    """Upper-case a dialogue header and drop parentheticals such as ``(V.O.)``."""

    return _PARENTHETICAL_PATTERN.sub("", header.upper()).strip()


def element_text(node: DocumentNode) -> str:
    """Concatenate the text of ``node``, rendering mentions by label or id."""

    parts: list[str] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_text:
            parts.append(current.text or "")
        elif current.type == "mention":
            parts.append(str(current.attrs.get("label") or current.attrs.get("id") or ""))
        else:
            stack.extend(reversed(current.children))
    return "".join(parts)


def note_excerpt(
    character: Character | None,
    notes: NoteLookup | None,
    limit: int,
) -> str | None:
    """Return the character's note as text, truncated to ``limit`` characters."""

    if character is None or not character.note_document_id or not notes:
        return None
    note = coerce_node(notes.get(character.note_document_id))
    if note is None:
        return None
    return truncate(content_to_plain_text(note), limit) or None


def extract_context(
    cursor: int,
    tree: DocumentNode | Mapping[str, Any] | None,
    characters: Sequence[Character] = (),
    notes: NoteLookup | None = None,
    *,
    limits: ContextLimits | None = None,
) -> SurroundingScriptContext:
    """Collect the scene heading, characters and recent action before ``cursor``.

    Screenplay elements are visited in document order; elements that end after
    the cursor are ignored. Characters keep the order in which they were first
    established.
    """

    root = coerce_node(tree)
    if root is None or cursor <= 0:
        return SurroundingScriptContext()

    limits = limits or ContextLimits()
    sizes = measure(root)

    scene_heading: str | None = None
    established: dict[str, CharacterContextInfo] = {}
    action_lines: list[str] = []

    for node, position in iter_nodes_between(root, 0, cursor):
        if position + sizes[id(node)] > cursor:
            continue
        if node.type != SCREENPLAY_ELEMENT:
            continue

        text = element_text(node).strip()
        if not text:
            continue

        element_type = node.attrs.get("elementType")
        if element_type == "scene-heading":
            if scene_heading is None:
                scene_heading = text
                logger.debug("Scene heading at %d: %s", position, text)
        elif element_type == "character":
            if len(established) >= limits.max_characters:
                continue
            name = normalize_character_name(text)
            if not name or name in established:
                continue
            known = match_known_character(name, characters)
            established[name] = CharacterContextInfo(
                name=name,
                id=known.id if known else None,
                note_content=note_excerpt(known, notes, limits.note_excerpt_chars),
            )
        elif element_type == "action":
            _merge_introduction(text, established, characters, notes, limits)
            action_lines.insert(0, text)
            del action_lines[limits.max_action_lines :]

    return SurroundingScriptContext(
        scene_heading=scene_heading,
        recent_characters=tuple(established.values()),
        preceding_action="\n".join(action_lines),
    )


def _merge_introduction(
    text: str,
    established: dict[str, CharacterContextInfo],
    characters: Sequence[Character],
    notes: NoteLookup | None,
    limits: ContextLimits,
) -> None:
    introduction = parse_character_introduction(text, characters)
    if introduction is None:
        return

    existing = established.get(introduction.name)
    if existing is not None:
        if not existing.introduction_text:
            established[introduction.name] = replace(existing, introduction_text=introduction.description)
        return

    if len(established) >= limits.max_characters:
        logger.debug("Character cap reached; skipping introduction of %s", introduction.name)
        return

    known = None
    if introduction.character_id:
        known = next((item for item in characters if item.id == introduction.character_id), None)
    established[introduction.name] = CharacterContextInfo(
        name=introduction.name,
        id=introduction.character_id,
        introduction_text=introduction.description,
        note_content=note_excerpt(known, notes, limits.note_excerpt_chars),
    )


def extract_context_with_pronouns(
    cursor: int,
    tree: DocumentNode | Mapping[str, Any] | None,
    selected_text: str,
    characters: Sequence[Character] = (),
    notes: NoteLookup | None = None,
    *,
    limits: ContextLimits | None = None,
) -> SurroundingScriptContext:
    """Extract context and resolve the pronouns used in ``selected_text``."""

    context = extract_context(cursor, tree, characters, notes, limits=limits)
    pronouns = detect_pronouns(selected_text)
    if not pronouns or not context.recent_characters:
        return context
    return replace(context, resolved_pronouns=resolve_pronouns(pronouns, context.recent_characters))
