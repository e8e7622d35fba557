"""Utilities for rendering mind maps in the terminal."""

from __future__ import annotations

from typing import List

from mindmap_core.icons import icon_emoji
from mindmap_core.models import MindMapTree, iter_nodes
from mindmap_core.stats import TreeStats


def _label(node: MindMapTree) -> str:
    text = " ".join(node.content.splitlines()).strip() or "(empty)"
    glyph = icon_emoji(node.icon)
    return f"{glyph} {text}" if glyph else text


def _hidden_count(node: MindMapTree) -> int:
    return sum(1 for _ in iter_nodes(node)) - 1


def render_tree(tree: MindMapTree, show_collapsed: bool = False) -> str:
    """Render a mind map as an ASCII tree.

    Args:
        tree: Root of the map.
        show_collapsed: Also draw the children of collapsed nodes.  By
            default they are summarised as ``[+N]`` after the node.

    Returns:
        String representation of the tree.
    """
    lines: List[str] = []

    def _render_node(node: MindMapTree, prefix: str, is_last: bool, is_root: bool) -> None:
        label = _label(node)
        folded = node.collapsed and node.children and not show_collapsed
        if folded:
            label += f" [+{_hidden_count(node)}]"

        if is_root:
            lines.append(label)
            child_prefix = ""
        else:
            connector = "└── " if is_last else "├── "
            lines.append(f"{prefix}{connector}{label}")
            child_prefix = prefix + ("    " if is_last else "│   ")

        if folded:
            return
        count = len(node.children)
        for i, child in enumerate(node.children):
            _render_node(child, child_prefix, i == count - 1, False)

    _render_node(tree, "", True, True)
    return "\n".join(lines)


def render_list(tree: MindMapTree) -> str:
    """One node per line: depth, id and label."""
    return "\n".join(
        f"  {'  ' * depth}[{depth}] {_label(node)} ({node.id})" for node, depth in iter_nodes(tree)
    )


def render_stats(stats: TreeStats) -> str:
    lines = [
        f"Nodes      : {stats.total_nodes}",
        f"Max depth  : {stats.max_depth}",
        f"Leaves     : {stats.leaf_count}",
        f"Collapsed  : {stats.collapsed_count}",
        f"Links      : {stats.link_count}",
        f"Characters : {stats.total_characters}",
        f"Words      : {stats.total_words}",
        "By level   : " + ", ".join(f"{lvl}: {n}" for lvl, n in stats.nodes_by_level.items()),
    ]
    if stats.icon_distribution:
        lines.append(
            "Icons      : "
            + ", ".join(f"{icon} x{n}" for icon, n in stats.icon_distribution.items())
        )
    if stats.cloud_distribution:
        lines.append(
            "Clouds     : "
            + ", ".join(f"{color} x{n}" for color, n in stats.cloud_distribution.items())
        )
    return "\n".join(lines)
