"""Data models for the plain-text projection of document trees."""
from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "PlainTextResult",
    "TextPosition",
    "TextRange",
]


@dataclass(frozen=True, slots=True)
class TextPosition:
    """Correlates a flattened-text offset with a document position."""

    offset: int
    doc_position: int
    # Only set for mention entries: characters the label occupies in the text.
    mention_text_length: int | None = None

    @property
    def is_mention(self) -> bool:
        return bool(self.mention_text_length)


@dataclass(frozen=True, slots=True)
class PlainTextResult:
    """Flattened text plus the position map used to translate offsets back."""

    text: str
    positions: tuple[TextPosition, ...] = ()


@dataclass(frozen=True, slots=True)
class TextRange:
    """A document range produced from a flattened-text span."""

    start: int
    end: int
