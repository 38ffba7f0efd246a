"""Flatten document trees into plain text with a position map.

The projection must stay byte-identical to the one used by the diagnostics
engine: findings are computed against one copy of the text and applied back to
the tree through the other.
"""
from __future__ import annotations

from typing import Any, Mapping

from scriptlens.document import BLOCK_NODE_TYPES, DocumentNode, coerce_node

from . import PlainTextResult, TextPosition

__all__ = ["content_to_plain_text", "mention_text", "project_plain_text"]

_ENTER = 0
_LEAVE = 1


def mention_text(node: DocumentNode) -> str:
    """Return the flattened-text stand-in for a mention node."""

    return str(node.attrs.get("label") or node.attrs.get("id") or "mention")


def project_plain_text(tree: DocumentNode | Mapping[str, Any] | None) -> PlainTextResult:
    """Project ``tree`` into text and record where each text segment starts."""

    root = coerce_node(tree)
    if root is None:
        return PlainTextResult(text="")

    positions: list[TextPosition] = []
    parts: list[str] = []
    length = 0
    ends_with_newline = False
    doc_pos = 0

    stack: list[tuple[int, DocumentNode]] = [(_ENTER, root)]
    while stack:
        phase, node = stack.pop()
        structural = node.type not in ("", "doc", "text")

        if phase == _ENTER:
            if structural:
                doc_pos += 1

            if node.is_text and node.text:
                positions.append(TextPosition(offset=length, doc_position=doc_pos))
                parts.append(node.text)
                length += len(node.text)
                ends_with_newline = node.text.endswith("\n")
                doc_pos += len(node.text)
            elif node.type == "mention":
                label = mention_text(node)
                positions.append(
                    TextPosition(offset=length, doc_position=doc_pos, mention_text_length=len(label))
                )
                parts.append(label)
                length += len(label)
                ends_with_newline = label.endswith("\n")
                # Atomic in the tree regardless of how long the label is.
                doc_pos += 1
                stack.append((_LEAVE, node))
                continue
            stack.append((_LEAVE, node))
            if not node.is_text and node.type != "mention":
                for child in reversed(node.children):
                    stack.append((_ENTER, child))
            continue

        if structural and node.content is not None:
            doc_pos += 1

        if node.type in BLOCK_NODE_TYPES and length > 0 and not ends_with_newline:
            positions.append(TextPosition(offset=length, doc_position=doc_pos))
            parts.append("\n")
            length += 1
            ends_with_newline = True

    return PlainTextResult(text="".join(parts).rstrip(), positions=tuple(positions))


def content_to_plain_text(tree: DocumentNode | Mapping[str, Any] | None) -> str:
    """Return only the projected text of ``tree``."""

    return project_plain_text(tree).text
