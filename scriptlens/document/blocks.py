"""Stable block identifiers used for citations and block lookup."""
from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Callable

from . import DocumentNode
from .walk import content_size, iter_nodes_between

__all__ = [
    "BLOCK_ID_ATTRIBUTE",
    "IDENTIFIED_NODE_TYPES",
    "assign_block_ids",
    "block_id_at",
    "find_block",
]

BLOCK_ID_ATTRIBUTE = "blockId"
IDENTIFIED_NODE_TYPES = frozenset(
    {"paragraph", "heading", "blockquote", "codeBlock", "listItem", "bulletList", "orderedList"}
)


def _default_id() -> str:
    return str(uuid.uuid4())


def assign_block_ids(
    root: DocumentNode,
    *,
    generate_id: Callable[[], str] | None = None,
    attribute: str = BLOCK_ID_ATTRIBUTE,
) -> DocumentNode:
    """Return a copy of ``root`` where every identified block has a unique id.

    Blocks keep an existing id unless an earlier block in document order
    already claimed it; missing and duplicate ids are regenerated.
    """

    make_id = generate_id or _default_id
    seen: set[str] = set()

    # Document order pre-pass so the first occurrence of an id keeps it.
    assignments: dict[int, str] = {}
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in IDENTIFIED_NODE_TYPES:
            current = node.attrs.get(attribute)
            if not current or str(current) in seen:
                assignments[id(node)] = ""
            else:
                seen.add(str(current))
        stack.extend(reversed(node.children))

    for key in assignments:
        new_id = make_id()
        while new_id in seen:
            new_id = make_id()
        seen.add(new_id)
        assignments[key] = new_id

    if not assignments:
        return root
    return _rebuild(root, assignments, attribute)


def _rebuild(root: DocumentNode, assignments: dict[int, str], attribute: str) -> DocumentNode:
    rebuilt: dict[int, DocumentNode] = {}
    order: list[DocumentNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(node.children)

    for node in reversed(order):
        updates: dict[str, object] = {}
        if node.content is not None:
            updates["content"] = tuple(rebuilt[id(child)] for child in node.content)
        if id(node) in assignments:
            updates["attrs"] = {**node.attrs, attribute: assignments[id(node)]}
        rebuilt[id(node)] = replace(node, **updates) if updates else node
    return rebuilt[id(root)]


def block_id_at(root: DocumentNode, position: int, *, attribute: str = BLOCK_ID_ATTRIBUTE) -> str | None:
    """Return the id of the outermost identified block containing ``position``."""

    for node, _ in iter_nodes_between(root, position, position):
        value = node.attrs.get(attribute)
        if value:
            return str(value)
    return None


def find_block(
    root: DocumentNode,
    block_id: str,
    *,
    attribute: str = BLOCK_ID_ATTRIBUTE,
) -> tuple[DocumentNode, int] | None:
    """Locate a block by id, returning the node and its position."""

    if not block_id:
        return None
    for node, position in iter_nodes_between(root, 0, content_size(root)):
        if node.attrs.get(attribute) == block_id:
            return node, position
    return None

