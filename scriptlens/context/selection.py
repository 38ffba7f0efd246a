"""Selection helpers: selected text and the mentions it contains."""
from __future__ import annotations

from typing import Any, Mapping

from scriptlens.document import DocumentNode, coerce_node
from scriptlens.document.walk import iter_nodes_between
from scriptlens.projection.plaintext import mention_text

from . import ExtractedMention, SelectionInfo

__all__ = ["extract_mentions", "selection_info", "text_between"]


def _leaf_text(node: DocumentNode) -> str:
    if node.type == "mention":
        return mention_text(node)
    if node.type == "hardBreak":
        return "\n"
    return ""


def text_between(
    tree: DocumentNode | Mapping[str, Any] | None,
    start: int,
    end: int,
    *,
    block_separator: str = "\n",
) -> str:
    """Return the text between two document positions.

    Consecutive text blocks are joined with ``block_separator``.
    """

    root = coerce_node(tree)
    if root is None or end <= start:
        return ""

    parts: list[str] = []
    first = True
    for node, position in iter_nodes_between(root, start, end):
        if node.is_text:
            text = node.text or ""
            node_text = text[max(start, position) - position : end - position]
        elif node.is_leaf:
            node_text = _leaf_text(node)
        else:
            node_text = ""

        if node.is_textblock and block_separator:
            if first:
                first = False
            else:
                parts.append(block_separator)
        parts.append(node_text)
    return "".join(parts)


def extract_mentions(
    tree: DocumentNode | Mapping[str, Any] | None,
    start: int,
    end: int,
) -> tuple[ExtractedMention, ...]:
    """Collect the distinct mentions between two positions in document order."""

    root = coerce_node(tree)
    if root is None or end <= start:
        return ()

    mentions: list[ExtractedMention] = []
    seen: set[str] = set()
    for node, _ in iter_nodes_between(root, start, end):
        if node.type != "mention":
            continue
        mention_id = node.attrs.get("id")
        if not mention_id or mention_id in seen:
            continue
        seen.add(mention_id)
        mentions.append(
            ExtractedMention(
                type=str(node.attrs.get("type") or "character"),
                id=str(mention_id),
                label=str(node.attrs.get("label") or ""),
            )
        )
    return tuple(mentions)


def selection_info(
    tree: DocumentNode | Mapping[str, Any] | None,
    start: int,
    end: int,
) -> SelectionInfo:
    selected = text_between(tree, start, end)
    mentions = extract_mentions(tree, start, end)
    return SelectionInfo(
        has_selection=bool(selected),
        selected_text=selected,
        mentions=mentions,
        has_mentions=bool(mentions),
    )
