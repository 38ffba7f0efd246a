"""Translate flattened-text offsets back into document positions."""
from __future__ import annotations

from typing import Sequence

from . import TextPosition, TextRange

__all__ = ["map_offset_to_position", "map_span_to_range"]


def map_offset_to_position(offset: int, positions: Sequence[TextPosition]) -> int:
    """Return the document position for a flattened-text ``offset``.

    Mention labels take several characters of text but a single slot in the
    tree, so every mention that ends at or before ``offset`` contributes
    ``label length - 1`` to the adjustment. An offset strictly inside a label
    resolves to the mention itself.
    """

    mention_adjustment = 0
    for entry in positions:
        if not entry.mention_text_length:
            continue
        mention_end = entry.offset + entry.mention_text_length
        if offset >= mention_end:
            mention_adjustment += entry.mention_text_length - 1
        elif entry.offset < offset < mention_end:
            return entry.doc_position

    for entry in reversed(positions):
        if entry.offset > offset or entry.mention_text_length:
            continue
        delta = offset - entry.offset - mention_adjustment
        return entry.doc_position + max(0, delta)

    return max(0, offset - mention_adjustment)


def map_span_to_range(offset: int, length: int, positions: Sequence[TextPosition]) -> TextRange:
    """Map a finding reported as ``offset``/``length`` onto a document range."""

    start = map_offset_to_position(offset, positions)
    end = map_offset_to_position(offset + max(0, length), positions)
    return TextRange(start=start, end=max(start, end))
