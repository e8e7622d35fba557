"""Tests for the D2 export."""

from __future__ import annotations

import pytest

from mindmap_core.errors import UnsupportedOperationError
from mindmap_core.formats import d2
from mindmap_core.models import MindMapTree, NodeMetadata, NodeStyle


def test_container_for_several_children() -> None:
    tree = MindMapTree(
        id="r",
        content="Root",
        children=[MindMapTree(id="a", content="A"), MindMapTree(id="b", content="B")],
    )
    assert d2.serialize(tree) == (
        "direction: right\n"
        "\n"
        'r: "Root" {\n'
        '  a: "A"\n'
        '  b: "B"\n'
        "}\n"
    )


def test_single_child_chain_uses_dotted_keys() -> None:
    tree = MindMapTree(
        id="r",
        content="Root",
        children=[MindMapTree(id="a", content="A", children=[MindMapTree(id="b", content="B")])],
    )
    assert d2.serialize(tree).splitlines()[2:] == ['r: "Root"', 'r.a: "A"', 'r.a.b: "B"']


def test_chain_into_container() -> None:
    tree = MindMapTree(
        id="r",
        content="Root",
        children=[
            MindMapTree(
                id="a",
                content="A",
                children=[MindMapTree(id="x", content="X"), MindMapTree(id="y", content="Y")],
            )
        ],
    )
    assert d2.serialize(tree).splitlines()[2:] == [
        'r: "Root"',
        'r.a: "A" {',
        '  x: "X"',
        '  y: "Y"',
        "}",
    ]


def test_style_block() -> None:
    tree = MindMapTree(
        id="r",
        content="Root",
        style=NodeStyle(color="#ff0000", background_color="#00ff00"),
        icon="idea",
        link="https://example.com",
        metadata=NodeMetadata(description='Say "hi"'),
    )
    assert d2.serialize(tree).splitlines()[2:] == [
        'r: "Root" {',
        '  style.stroke: "#ff0000"',
        '  style.fill: "#00ff00"',
        '  icon: "idea"',
        '  link: "https://example.com"',
        '  tooltip: "Say \\"hi\\""',
        "}",
    ]


def test_unsafe_link_dropped() -> None:
    tree = MindMapTree(id="r", content="R", link="javascript:alert(1)")
    assert "link" not in d2.serialize(tree)


def test_label_escaping() -> None:
    tree = MindMapTree(id="r", content='a "b" \\ c\nd ${x}')
    line = d2.serialize(tree).splitlines()[2]
    assert line == 'r: "a \\"b\\" \\\\ c\\nd \\${x}"'


def test_keys_sanitised_and_unique() -> None:
    tree = MindMapTree(
        id="node-1",
        content="Root",
        children=[
            MindMapTree(id="a-b", content="1"),
            MindMapTree(id="a_b", content="2"),
            MindMapTree(id="9lives", content="3"),
            MindMapTree(id="ünï", content="4"),
        ],
    )
    lines = d2.serialize(tree).splitlines()
    assert lines[2] == 'node_1: "Root" {'
    assert lines[3:7] == ['  a_b: "1"', '  a_b_2: "2"', '  n_9lives: "3"', '  _n_: "4"']


def test_import_unsupported() -> None:
    with pytest.raises(UnsupportedOperationError, match="D2 import is not supported"):
        d2.parse("a -> b")
