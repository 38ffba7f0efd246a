"""Tests for mapping flattened-text offsets back to document positions."""
from __future__ import annotations

from scriptlens.context.selection import text_between
from scriptlens.document import DocumentNode
from scriptlens.projection import TextPosition, TextRange
from scriptlens.projection.mapping import map_offset_to_position, map_span_to_range
from scriptlens.projection.plaintext import project_plain_text
from tests.builders import doc, element, heading, mention, paragraph, text


def test_offsets_round_trip_in_documents_without_mentions() -> None:
    tree = DocumentNode.from_mapping(
        doc(
            element("scene-heading", "INT. HOUSE"),
            paragraph(text("She walks "), text("in.")),
            heading("Title"),
        )
    )
    result = project_plain_text(tree)

    for offset, character in enumerate(result.text):
        if character == "\n":
            continue
        position = map_offset_to_position(offset, result.positions)
        assert text_between(tree, position, position + 1) == character


def test_offset_inside_mention_maps_to_the_mention() -> None:
    result = project_plain_text(
        doc(paragraph(text("Hello "), mention("BADGER"), text(", she said.")))
    )
    mention_entry = result.positions[1]

    for offset in range(7, 12):
        assert map_offset_to_position(offset, result.positions) == mention_entry.doc_position


def test_offset_inside_mention_between_blocks() -> None:
    result = project_plain_text(
        doc(paragraph(text("Hello ")), mention("BADGER"), paragraph(text(", she said.")))
    )
    mention_entry = next(entry for entry in result.positions if entry.is_mention)

    assert result.text == "Hello \nBADGER, she said."
    assert map_offset_to_position(10, result.positions) == mention_entry.doc_position


def test_offsets_before_a_mention_are_not_adjusted() -> None:
    result = project_plain_text(
        doc(paragraph(text("Hello "), mention("BADGER"), text(", she said.")))
    )

    assert map_offset_to_position(0, result.positions) == 1
    assert map_offset_to_position(3, result.positions) == 4
    assert map_offset_to_position(6, result.positions) == 7


def test_mention_adjustment_formula() -> None:
    positions = (
        TextPosition(offset=0, doc_position=1),
        TextPosition(offset=3, doc_position=4, mention_text_length=4),
        TextPosition(offset=7, doc_position=5),
    )

    # Two label characters past the mention: 3 characters of inflation removed.
    assert map_offset_to_position(12, positions) == 5 + (12 - 7 - 3)
    assert map_offset_to_position(8, positions) == 5


def test_fallback_without_entries() -> None:
    assert map_offset_to_position(5, ()) == 5
    assert map_offset_to_position(-3, ()) == 0

    mention_only = (TextPosition(offset=0, doc_position=2, mention_text_length=3),)
    assert map_offset_to_position(5, mention_only) == 3


def test_map_span_to_range_covers_the_finding() -> None:
    result = project_plain_text(
        doc(paragraph(text("Hello "), mention("BADGER"), text(", she said.")))
    )

    assert map_span_to_range(0, 5, result.positions) == TextRange(start=1, end=6)
    assert map_span_to_range(2, -4, result.positions) == TextRange(start=3, end=3)
