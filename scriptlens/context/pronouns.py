"""Pronoun detection and most-recent-character resolution."""
from __future__ import annotations

import re
from typing import Sequence

from . import CharacterContextInfo, ResolvedPronoun

__all__ = ["PRONOUNS", "detect_pronouns", "resolve_pronouns"]

_FEMALE = ("she", "her", "hers", "herself")
_MALE = ("he", "him", "his", "himself")
_NEUTRAL = ("they", "them", "their", "theirs", "themselves")
PRONOUNS = frozenset(_FEMALE + _MALE + _NEUTRAL)

# ASCII word boundaries, matching the editor's tokenisation.
_WORD_BOUNDARY = re.compile(r"\b", re.ASCII)


def detect_pronouns(text: str) -> tuple[str, ...]:
    """Return the distinct pronouns in ``text``, capitalised, in order of appearance."""

    if not text:
        return ()

    found: list[str] = []
    seen: set[str] = set()
    for token in _WORD_BOUNDARY.split(text.lower()):
        word = token.strip()
        if word not in PRONOUNS or word in seen:
            continue
        seen.add(word)
        found.append(word[0].upper() + word[1:])
    return tuple(found)


def resolve_pronouns(
    pronouns: Sequence[str],
    recent_characters: Sequence[CharacterContextInfo],
) -> tuple[ResolvedPronoun, ...]:
    """Resolve every pronoun to the first character in ``recent_characters``.

    Gender is not tracked, so no antecedent disambiguation is attempted.
    """

    if not pronouns or not recent_characters:
        return ()

    character = recent_characters[0]
    description = character.introduction_text or character.note_content
    return tuple(
        ResolvedPronoun(
            pronoun=pronoun,
            resolved_to=character.name,
            character_id=character.id,
            description=description,
        )
        for pronoun in pronouns
    )
