"""Render extracted context into prompt sections for image generation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from scriptlens.document import coerce_node
from scriptlens.projection.plaintext import content_to_plain_text

from . import Character, ExtractedMention, NoteLookup, Prop, SurroundingScriptContext
from .config import ContextLimits
from .visual import extract_visual_description, truncate

__all__ = [
    "FullPrompt",
    "build_full_prompt",
    "build_prompt_context",
    "format_context",
]

CHARACTER_SECTION_HEADER = (
    "CHARACTER VISUAL DESCRIPTIONS (draw these characters, NOT the reference image characters):"
)
MENTION_SECTION_HEADER = "CHARACTER/PROP VISUAL DESCRIPTIONS (use these for the image):"


@dataclass(frozen=True, slots=True)
class FullPrompt:
    prompt: str
    context_section: str


def format_context(context: SurroundingScriptContext) -> str:
    """Render ``context`` as labelled lines; empty sections are omitted."""

    lines: list[str] = []

    if context.scene_heading:
        lines.append(f"SCENE LOCATION: {context.scene_heading}")

    if context.recent_characters:
        lines.append("")
        lines.append(CHARACTER_SECTION_HEADER)
        for character in context.recent_characters:
            if character.introduction_text:
                lines.append(f"- {character.name}: {character.introduction_text}")
            elif character.note_content:
                lines.append(f"- {character.name} appearance: {character.note_content}")
            else:
                lines.append(f"- {character.name}")

    if context.resolved_pronouns:
        lines.append("")
        lines.append("PRONOUN KEY:")
        for resolved in context.resolved_pronouns:
            line = f'- "{resolved.pronoun}" = {resolved.resolved_to}'
            if resolved.description:
                line += f" ({resolved.description})"
            lines.append(line)

    if context.preceding_action:
        lines.append("")
        lines.append("PRECEDING ACTION (for context):")
        lines.append(context.preceding_action)

    return "\n".join(lines)


def _note_text(note_document_id: str | None, notes: NoteLookup | None) -> str:
    if not note_document_id or not notes:
        return ""
    note = coerce_node(notes.get(note_document_id))
    if note is None:
        return ""
    return content_to_plain_text(note)


def build_prompt_context(
    mentions: Sequence[ExtractedMention],
    characters: Sequence[Character],
    props: Sequence[Prop],
    notes: NoteLookup | None = None,
    *,
    limits: ContextLimits | None = None,
) -> str:
    """Describe each mentioned character and prop for an image prompt."""

    if not mentions:
        return ""

    limits = limits or ContextLimits()
    characters_by_id = {character.id: character for character in reversed(characters)}
    props_by_id = {prop.id: prop for prop in reversed(props)}

    lines: list[str] = []
    for mention in mentions:
        if mention.type == "character":
            character = characters_by_id.get(mention.id)
            if character is None:
                continue
            note = _note_text(character.note_document_id, notes)
            if note:
                visual = extract_visual_description(
                    note,
                    limit=limits.visual_excerpt_chars,
                    max_sentences=limits.max_visual_sentences,
                )
                lines.append(f"- {character.name} (CHARACTER VISUAL): {visual}")
            else:
                lines.append(
                    f"- {character.name}: (No character notes available - add visual description to character document)"
                )
        elif mention.type == "prop":
            prop = props_by_id.get(mention.id)
            if prop is None:
                continue
            note = _note_text(prop.note_document_id, notes)
            if note:
                lines.append(f"- {prop.name} (PROP): {truncate(note, limits.note_excerpt_chars)}")
            else:
                lines.append(f"- {prop.name} (PROP): (No prop notes available)")

    if not lines:
        return ""
    return MENTION_SECTION_HEADER + "\n" + "\n".join(lines)


def build_full_prompt(
    selected_text: str,
    mentions: Sequence[ExtractedMention],
    characters: Sequence[Character],
    props: Sequence[Prop],
    notes: NoteLookup | None = None,
    *,
    include_context: bool = True,
    limits: ContextLimits | None = None,
) -> FullPrompt:
    context_section = (
        build_prompt_context(mentions, characters, props, notes, limits=limits) if include_context else ""
    )
    return FullPrompt(prompt=selected_text, context_section=context_section)
