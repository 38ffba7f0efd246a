"""Core document tree model shared by the projection and context toolkits."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

__all__ = [
    "ATOMIC_NODE_TYPES",
    "BLOCK_NODE_TYPES",
    "DocumentNode",
    "coerce_node",
]

# Block types that terminate with a newline in the flattened projection.
BLOCK_NODE_TYPES = frozenset(
    {"paragraph", "heading", "blockquote", "codeBlock", "listItem", "screenplayElement"}
)

# Containers that still occupy an opening and closing slot when empty.
_CONTAINER_NODE_TYPES = BLOCK_NODE_TYPES | {"doc", "bulletList", "orderedList"}

ATOMIC_NODE_TYPES = frozenset({"mention", "hardBreak", "horizontalRule", "image", "assetImage"})


@dataclass(frozen=True, slots=True)
class DocumentNode:
    """A tagged node of the editor document tree."""

    type: str
    attrs: Mapping[str, Any] = field(default_factory=dict)
    content: tuple["DocumentNode", ...] | None = None
    text: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "DocumentNode":
        """Build a node tree from editor JSON content."""

        node_type = str(payload.get("type") or "")
        attrs = payload.get("attrs") or {}
        raw_content = payload.get("content")
        content: tuple[DocumentNode, ...] | None = None
        if isinstance(raw_content, Sequence) and not isinstance(raw_content, (str, bytes)):
            content = tuple(cls.from_mapping(child) for child in raw_content)
        text = payload.get("text")
        return cls(
            type=node_type,
            attrs=dict(attrs),
            content=content,
            text=str(text) if text is not None else None,
        )

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type}
        if self.attrs:
            payload["attrs"] = dict(self.attrs)
        if self.content is not None:
            payload["content"] = [child.to_mapping() for child in self.content]
        if self.text is not None:
            payload["text"] = self.text
        return payload

    @property
    def children(self) -> tuple["DocumentNode", ...]:
        return self.content or ()

    @property
    def is_text(self) -> bool:
        return self.type == "text"

    @property
    def is_leaf(self) -> bool:
        """True for nodes that cannot hold children (text and atoms)."""

        if self.is_text:
            return True
        if self.type in ATOMIC_NODE_TYPES:
            return True
        return self.content is None and self.type not in _CONTAINER_NODE_TYPES

    @property
    def is_textblock(self) -> bool:
        return self.type in {"paragraph", "heading", "codeBlock", "screenplayElement"}


def coerce_node(value: DocumentNode | Mapping[str, Any] | None) -> DocumentNode | None:
    """Accept either a node or raw editor JSON."""

    if value is None or isinstance(value, DocumentNode):
        return value
    return DocumentNode.from_mapping(value)
