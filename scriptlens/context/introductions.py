"""Character introduction heuristics for screenplay action lines."""
from __future__ import annotations

import re
from typing import Sequence

from . import Character, CharacterIntroduction

__all__ = ["is_all_caps", "match_known_character", "parse_character_introduction"]

# "AVA KLINE, 30s, blood on her sleeve." or "MARCUS (40s), a grizzled veteran."
# at the start of the text or after a period/newline.
_INTRODUCTION_PATTERN = re.compile(
    r"(?:^|[.\n]\s*)([A-Z][A-Z\s'\-]+?)(?:\s*\(([^)]+)\))?,\s*([^.]+(?:\.[^.]*)?)"
)
_NON_LETTER_PATTERN = re.compile(r"[^a-zA-Z]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def is_all_caps(value: str) -> bool:
    letters = _NON_LETTER_PATTERN.sub("", value)
    return bool(letters) and letters == letters.upper()


def match_known_character(name: str, known_characters: Sequence[Character]) -> Character | None:
    """Reconcile ``name`` against the registry.

    Rules are tried in order across the whole registry: exact match, ``name``
    contains a registered name, a registered name contains ``name``. Within a
    rule the first registry entry wins.
    """

    candidate = _WHITESPACE_PATTERN.sub(" ", name).upper()
    rules = (
        lambda registered: registered == candidate,
        lambda registered: registered in candidate,
        lambda registered: candidate in registered,
    )
    for rule in rules:
        for character in known_characters:
            if rule(character.name.upper()):
                return character
    return None


def parse_character_introduction(
    action_text: str,
    known_characters: Sequence[Character] = (),
) -> CharacterIntroduction | None:
    """Return the first character introduction found in ``action_text``."""

    if not action_text:
        return None

    for match in _INTRODUCTION_PATTERN.finditer(action_text):
        raw_name = match.group(1).strip()
        if not is_all_caps(raw_name):
            continue

        name = _WHITESPACE_PATTERN.sub(" ", raw_name)
        parenthetical = (match.group(2) or "").strip()
        trailing = match.group(3).strip()
        description = f"{parenthetical}, {trailing}" if parenthetical else trailing

        known = match_known_character(name, known_characters)
        return CharacterIntroduction(
            name=name,
            description=description,
            character_id=known.id if known else None,
        )
    return None
