"""Tests for pronoun detection and resolution."""
from __future__ import annotations

from scriptlens.context import CharacterContextInfo, ResolvedPronoun
from scriptlens.context.pronouns import detect_pronouns, resolve_pronouns


def test_detect_pronouns_in_first_occurrence_order() -> None:
    pronouns = detect_pronouns("She turns to him. She smiles; THEY wait for hers.")

    assert pronouns == ("She", "Him", "They", "Hers")


def test_detect_pronouns_ignores_partial_words() -> None:
    assert detect_pronouns("Shelter there, the hermit sighed.") == ()
    assert detect_pronouns("") == ()


def test_detect_pronouns_uses_ascii_word_boundaries() -> None:
    # Accented letters are not word characters, so "her" stands alone here.
    assert detect_pronouns("Zo\u00ebher coat") == ("Her",)
    assert detect_pronouns("caf\u00e9 she") == ("She",)


def test_resolve_pronouns_uses_most_recent_character() -> None:
    resolved = resolve_pronouns(detect_pronouns("She turns."), [CharacterContextInfo(name="AVA")])

    assert resolved == (ResolvedPronoun(pronoun="She", resolved_to="AVA"),)


def test_resolve_pronouns_carries_id_and_description() -> None:
    characters = [
        CharacterContextInfo(name="AVA", id="c1", introduction_text="30s, tired.", note_content="Tall."),
        CharacterContextInfo(name="BEN", id="c2"),
    ]

    resolved = resolve_pronouns(["He", "Her"], characters)

    assert [item.resolved_to for item in resolved] == ["AVA", "AVA"]
    assert all(item.character_id == "c1" for item in resolved)
    assert all(item.description == "30s, tired." for item in resolved)


def test_resolve_pronouns_falls_back_to_note_content() -> None:
    resolved = resolve_pronouns(["They"], [CharacterContextInfo(name="AVA", note_content="Tall.")])

    assert resolved[0].description == "Tall."


def test_resolve_pronouns_requires_both_inputs() -> None:
    assert resolve_pronouns([], [CharacterContextInfo(name="AVA")]) == ()
    assert resolve_pronouns(["She"], []) == ()
