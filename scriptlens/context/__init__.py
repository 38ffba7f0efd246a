"""Core data models for narrative context extraction."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from scriptlens.document import DocumentNode

__all__ = [
    "Character",
    "CharacterContextInfo",
    "CharacterIntroduction",
    "ExtractedMention",
    "NoteLookup",
    "Prop",
    "ResolvedPronoun",
    "SelectionInfo",
    "SurroundingScriptContext",
]

# Note-document id -> note tree (None when the note has no content yet).
NoteLookup = Mapping[str, Optional[DocumentNode]]


@dataclass(frozen=True, slots=True)
class Character:
    """A character from the project registry."""

    id: str
    name: str
    color: str = "#fbbf24"
    note_document_id: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Character":
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            color=str(payload.get("color") or "#fbbf24"),
            note_document_id=_optional_str(payload.get("noteDocumentId", payload.get("note_document_id"))),
        )


@dataclass(frozen=True, slots=True)
class Prop:
    """A prop from the project registry."""

    id: str
    name: str
    icon: str = "Box"
    note_document_id: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Prop":
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            icon=str(payload.get("icon") or "Box"),
            note_document_id=_optional_str(payload.get("noteDocumentId", payload.get("note_document_id"))),
        )


@dataclass(frozen=True, slots=True)
class ExtractedMention:
    """A character or prop mention found inside a selection."""

    type: str
    id: str
    label: str


@dataclass(frozen=True, slots=True)
class CharacterIntroduction:
    """A character introduced in an action line, e.g. ``AVA KLINE, 30s, ...``."""

    name: str
    description: str
    character_id: str | None = None


@dataclass(frozen=True, slots=True)
class CharacterContextInfo:
    """A character established before the cursor."""

    name: str
    id: str | None = None
    introduction_text: str | None = None
    note_content: str | None = None


@dataclass(frozen=True, slots=True)
class ResolvedPronoun:
    pronoun: str
    resolved_to: str
    character_id: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class SurroundingScriptContext:
    """Narrative context gathered ahead of a cursor position."""

    scene_heading: str | None = None
    recent_characters: tuple[CharacterContextInfo, ...] = ()
    preceding_action: str = ""
    resolved_pronouns: tuple[ResolvedPronoun, ...] = ()


@dataclass(frozen=True, slots=True)
class SelectionInfo:
    has_selection: bool
    selected_text: str
    mentions: tuple[ExtractedMention, ...]
    has_mentions: bool


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    token = str(value).strip()
    return token or None
