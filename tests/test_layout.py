"""Tests for the deterministic auto-layout."""

from __future__ import annotations

from mindmap_core.graph import MindMapEdge, MindMapNode, MindMapNodeData, auto_layout
from mindmap_core.models import Position


def _nodes(*ids: str) -> list[MindMapNode]:
    return [MindMapNode(id=i, position=Position(0, 0), data=MindMapNodeData(label=i)) for i in ids]


def _edges(*pairs: tuple[str, str]) -> list[MindMapEdge]:
    return [MindMapEdge(id=f"{s}-{t}", source=s, target=t) for s, t in pairs]


def _positions(nodes: list[MindMapNode]) -> dict[str, tuple[float, float]]:
    return {n.id: (n.position.x, n.position.y) for n in nodes}


class TestAutoLayout:
    def test_root_at_anchor(self) -> None:
        laid = auto_layout(_nodes("r", "a"), _edges(("r", "a")))
        assert _positions(laid)["r"] == (400, 300)

    def test_two_children_on_opposite_sides(self) -> None:
        laid = _positions(auto_layout(_nodes("r", "a", "b"), _edges(("r", "a"), ("r", "b"))))
        assert laid["a"] == (650, 300)
        assert laid["b"] == (150, 300)

    def test_sides_alternate_and_stack(self) -> None:
        laid = _positions(
            auto_layout(
                _nodes("r", "a", "b", "c"),
                _edges(("r", "a"), ("r", "b"), ("r", "c")),
            )
        )
        assert laid["a"] == (650, 250)
        assert laid["c"] == (650, 350)
        assert laid["b"] == (150, 300)

    def test_parent_centred_on_leaves(self) -> None:
        laid = _positions(
            auto_layout(
                _nodes("r", "a", "g1", "g2"),
                _edges(("r", "a"), ("a", "g1"), ("a", "g2")),
            )
        )
        assert laid["a"] == (650, 300)
        assert laid["g1"] == (900, 250)
        assert laid["g2"] == (900, 350)

    def test_deterministic(self) -> None:
        nodes = _nodes("r", "a", "b", "a1", "a2", "b1")
        edges = _edges(("r", "a"), ("r", "b"), ("a", "a1"), ("a", "a2"), ("b", "b1"))
        assert auto_layout(nodes, edges) == auto_layout(nodes, edges)

    def test_input_not_mutated(self) -> None:
        nodes = _nodes("r", "a")
        auto_layout(nodes, _edges(("r", "a")))
        assert all(n.position == Position(0, 0) for n in nodes)

    def test_cycle_returns_input_unchanged(self) -> None:
        nodes = _nodes("A", "B")
        laid = auto_layout(nodes, _edges(("A", "B"), ("B", "A")))
        assert laid == nodes

    def test_several_roots_return_input_unchanged(self) -> None:
        nodes = _nodes("A", "B")
        assert auto_layout(nodes, []) == nodes

    def test_anchor_from_settings(self, monkeypatch) -> None:
        monkeypatch.setattr("mindmap_core.config.settings.layout_root_x", 0.0)
        monkeypatch.setattr("mindmap_core.config.settings.layout_root_y", 0.0)
        laid = _positions(auto_layout(_nodes("r", "a"), _edges(("r", "a"))))
        assert laid["r"] == (0, 0)
        assert laid["a"] == (250, 0)
