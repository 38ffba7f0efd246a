"""Isolate the appearance-related portion of character and prop notes."""
from __future__ import annotations

import re

__all__ = ["extract_visual_description", "truncate"]

_HEADER_WORDS = r"(?:appearance|physical description|looks?|visual|description|physical)"

# Markdown heading, bold label, then plain label.
_SECTION_PATTERNS = (
    re.compile(
        rf"(?:^|\n)#+?\s*{_HEADER_WORDS}\s*\n([\s\S]*?)(?=\n#+|\n\n\n|\Z)",
        re.IGNORECASE,
    ),
    re.compile(
        rf"(?:^|\n)\*\*{_HEADER_WORDS}\*\*:?\s*([\s\S]*?)(?=\n\*\*|\n\n\n|\Z)",
        re.IGNORECASE,
    ),
    re.compile(
        rf"(?:^|\n){_HEADER_WORDS}:?\s*([\s\S]*?)(?=\n[A-Z]|\n\n\n|\Z)",
        re.IGNORECASE,
    ),
)

_PHYSICAL_KEYWORDS = re.compile(
    r"\b(tall|short|slim|stocky|muscular|age|years? old|\d+s?|hair|eyes?|skin|wears?|wearing"
    r"|dressed|built|height|weight|face|scar|tattoo|beard|glasses)\b",
    re.IGNORECASE,
)
_SENTENCE_SPLIT = re.compile(r"[.!?]+")

_MIN_SECTION_LENGTH = 20
_MIN_SENTENCE_LENGTH = 10


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to ``limit`` characters, marking the cut with an ellipsis."""

    if len(text) > limit:
        return text[:limit] + "..."
    return text


def extract_visual_description(note_text: str, *, limit: int = 400, max_sentences: int = 3) -> str:
    """Return the part of ``note_text`` most likely to describe appearance."""

    if not note_text:
        return ""

    for pattern in _SECTION_PATTERNS:
        match = pattern.search(note_text)
        if not match or not match.group(1):
            continue
        extracted = match.group(1).strip()
        if len(extracted) > _MIN_SECTION_LENGTH:
            return truncate(extracted, limit)

    sentences = [
        sentence.strip()
        for sentence in _SENTENCE_SPLIT.split(note_text)
        if _PHYSICAL_KEYWORDS.search(sentence)
    ]
    physical = [sentence for sentence in sentences if len(sentence) > _MIN_SENTENCE_LENGTH]
    if physical:
        return ". ".join(physical[:max_sentences]) + "."

    return truncate(note_text, limit)
