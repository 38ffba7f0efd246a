"""Tests for editor-style position arithmetic."""
from __future__ import annotations

from scriptlens.document import DocumentNode
from scriptlens.document.walk import content_size, iter_nodes_between, node_size
from tests.builders import doc, mention, paragraph, text


def _tree(payload: dict) -> DocumentNode:
    return DocumentNode.from_mapping(payload)


def test_node_size_follows_editor_numbering() -> None:
    assert node_size(_tree(paragraph(text("Hi")))) == 4
    assert node_size(_tree(mention("BADGER"))) == 1
    assert node_size(_tree({"type": "paragraph"})) == 2
    assert node_size(_tree(paragraph(text("Hi "), mention("AVA")))) == 6


def test_content_size_excludes_root_boundaries() -> None:
    root = _tree(doc(paragraph(text("ab")), paragraph(text("cd"))))

    assert content_size(root) == 8


def test_iter_nodes_between_yields_document_order() -> None:
    root = _tree(doc(paragraph(text("ab")), paragraph(text("cd"))))

    visited = [(node.type, position) for node, position in iter_nodes_between(root, 0, 8)]

    assert visited == [("paragraph", 0), ("text", 1), ("paragraph", 4), ("text", 5)]


def test_iter_nodes_between_skips_nodes_outside_range() -> None:
    root = _tree(doc(paragraph(text("ab")), paragraph(text("cd"))))

    visited = [(node.type, position) for node, position in iter_nodes_between(root, 5, 6)]

    assert visited == [("paragraph", 4), ("text", 5)]


def test_iter_nodes_between_empty_range_at_start_visits_nothing() -> None:
    root = _tree(doc(paragraph(text("ab"))))

    assert list(iter_nodes_between(root, 0, 0)) == []


def test_iter_nodes_between_handles_deep_nesting() -> None:
    node = DocumentNode(type="text", text="deep")
    for _ in range(3000):
        node = DocumentNode(type="blockquote", content=(node,))
    root = DocumentNode(type="doc", content=(node,))

    visited = list(iter_nodes_between(root, 0, content_size(root)))

    assert len(visited) == 3001
    assert visited[-1][0].text == "deep"
    assert visited[-1][1] == 3000
