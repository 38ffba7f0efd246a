"""Editor-style position arithmetic over document trees."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from . import DocumentNode

__all__ = ["content_size", "iter_nodes_between", "measure", "node_size"]


def measure(root: DocumentNode) -> dict[int, int]:
    """Return the position size of every node under ``root`` keyed by ``id()``."""

    order: list[DocumentNode] = []
    stack = [root]
    while stack:
        current = stack.pop()
        order.append(current)
        stack.extend(current.children)

    sizes: dict[int, int] = {}
    for current in reversed(order):
        if current.is_text:
            sizes[id(current)] = len(current.text or "")
        elif current.is_leaf:
            sizes[id(current)] = 1
        else:
            sizes[id(current)] = 2 + sum(sizes[id(child)] for child in current.children)
    return sizes


def node_size(node: DocumentNode) -> int:
    """Return how many position slots ``node`` occupies in its parent."""

    return measure(node)[id(node)]


def content_size(node: DocumentNode) -> int:
    """Return the size of ``node``'s content, excluding its own boundaries."""

    sizes = measure(node)
    return sum(sizes[id(child)] for child in node.children)


@dataclass(slots=True)
class _Frame:
    children: tuple[DocumentNode, ...]
    base: int
    range_from: int
    range_to: int
    index: int = 0
    pos: int = 0


def iter_nodes_between(
    root: DocumentNode,
    start: int,
    end: int,
) -> Iterator[tuple[DocumentNode, int]]:
    """Yield ``(node, position)`` for descendants overlapping ``[start, end)``.

    Positions are absolute and count from the start of the root's content.
    Nodes come out in document order, parents before their children. A child
    is visited when it begins before ``end`` and ends after ``start``.
    """

    sizes = measure(root)
    stack = [_Frame(children=root.children, base=0, range_from=start, range_to=end)]
    while stack:
        frame = stack[-1]
        if frame.index >= len(frame.children) or frame.pos >= frame.range_to:
            stack.pop()
            continue
        child = frame.children[frame.index]
        child_start = frame.pos
        child_end = child_start + sizes[id(child)]
        frame.index += 1
        frame.pos = child_end
        if child_end <= frame.range_from:
            continue

        yield child, frame.base + child_start

        if child.is_leaf or not child.children:
            continue
        inner_start = child_start + 1
        inner_size = sizes[id(child)] - 2
        stack.append(
            _Frame(
                children=child.children,
                base=frame.base + inner_start,
                range_from=max(0, frame.range_from - inner_start),
                range_to=min(inner_size, frame.range_to - inner_start),
            )
        )
