"""Bulleted outline exports for note-taking apps (Notion and Obsidian).

The root becomes a ``#`` heading and every descendant a ``-`` bullet,
indented one step per level below the root's children.  Notion indents
with two spaces and Obsidian with tabs.  Neither can be imported.
"""

from __future__ import annotations

from mindmap_core.errors import UnsupportedOperationError
from mindmap_core.formats._common import check_depth, indent, single_line
from mindmap_core.models import MindMapTree, iter_nodes


def _outline(tree: MindMapTree, unit: str, format_name: str) -> str:
    lines = [f"# {single_line(tree.content)}", ""]
    for node, depth in iter_nodes(tree):
        check_depth(depth, format_name)
        if depth == 0:
            continue
        lines.append(f"{indent(depth - 1, unit)}- {single_line(node.content)}")
    return "\n".join(lines) + "\n"


def serialize_notion(tree: MindMapTree) -> str:
    return _outline(tree, "  ", "Notion")


def serialize_obsidian(tree: MindMapTree) -> str:
    return _outline(tree, "\t", "Obsidian")


def parse_notion(text: str) -> MindMapTree:
    raise UnsupportedOperationError("Notion")


def parse_obsidian(text: str) -> MindMapTree:
    raise UnsupportedOperationError("Obsidian")
