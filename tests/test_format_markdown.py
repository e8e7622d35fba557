"""Tests for the indented Markdown outline codec."""

from __future__ import annotations

import pytest

from mindmap_core.errors import DepthExceededError
from mindmap_core.formats import markdown
from mindmap_core.models import MindMapTree


def test_parse_simple_outline() -> None:
    tree = markdown.parse("Root\n  A\n    A1\n  B\n")
    assert tree.content == "Root"
    assert [c.content for c in tree.children] == ["A", "B"]
    assert [c.content for c in tree.children[0].children] == ["A1"]


def test_irregular_indentation_is_normalised() -> None:
    text = "Root\n    Child (4sp)\n  Child2 (2sp)\n       Child2.1 (7sp)"
    tree = markdown.parse(text)
    assert [c.content for c in tree.children] == ["Child (4sp)", "Child2 (2sp)"]
    assert tree.children[0].children == []
    assert [c.content for c in tree.children[1].children] == ["Child2.1 (7sp)"]
    assert markdown.serialize(tree) == "Root\n  Child (4sp)\n  Child2 (2sp)\n    Child2.1 (7sp)"


def test_tabs_count_as_one_level() -> None:
    tree = markdown.parse("Root\n\tA\n\t\tB")
    assert tree.children[0].content == "A"
    assert tree.children[0].children[0].content == "B"


def test_blank_lines_ignored() -> None:
    tree = markdown.parse("\n\nRoot\n\n  A\n   \n  B\n")
    assert [c.content for c in tree.children] == ["A", "B"]


@pytest.mark.parametrize("text", ["", "   \n\n"])
def test_empty_input_gives_root(text: str) -> None:
    tree = markdown.parse(text)
    assert tree.content == "Root"
    assert tree.children == []


def test_indented_first_line_is_still_root() -> None:
    tree = markdown.parse("    Root\nA")
    assert tree.content == "Root"
    assert tree.children[0].content == "A"


def test_every_node_gets_unique_id() -> None:
    tree = markdown.parse("R\n  A\n  A")
    ids = {tree.id, *(c.id for c in tree.children)}
    assert len(ids) == 3


def test_serialize_flattens_multiline_content() -> None:
    tree = MindMapTree(
        id="r",
        content="Root",
        children=[MindMapTree(id="a", content="  first\nsecond  ")],
    )
    assert markdown.serialize(tree) == "Root\n  first second"


def test_serialize_includes_collapsed_children() -> None:
    tree = MindMapTree(
        id="r",
        content="R",
        children=[MindMapTree(id="a", content="A", collapsed=True, children=[MindMapTree(id="b", content="B")])],
    )
    assert markdown.serialize(tree) == "R\n  A\n    B"


def test_round_trip_structure() -> None:
    text = "Root\n  A\n    A1\n    A2\n  B"
    assert markdown.serialize(markdown.parse(text)) == text


def test_depth_guard(monkeypatch) -> None:
    monkeypatch.setattr("mindmap_core.config.settings.max_depth", 2)
    with pytest.raises(DepthExceededError):
        markdown.parse("R\n  a\n    b\n      c")


def test_serialize_depth_guard(monkeypatch) -> None:
    monkeypatch.setattr("mindmap_core.config.settings.max_depth", 1)
    tree = MindMapTree(
        id="r", content="R", children=[MindMapTree(id="a", content="A", children=[MindMapTree(id="b", content="B")])]
    )
    with pytest.raises(DepthExceededError):
        markdown.serialize(tree)
