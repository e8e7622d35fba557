"""Indented-outline Markdown codec.

One node per line; hierarchy comes from indentation only.  The first
non-blank line is the root.  A line's level is its leading whitespace
width (tabs count as two spaces) divided by two, and the serializer
writes two spaces per level, so irregular source indentation is
normalised to consecutive levels on the way back out.
"""

from __future__ import annotations

from typing import List, Tuple

from mindmap_core.config import settings
from mindmap_core.errors import DepthExceededError
from mindmap_core.formats._common import check_depth, finish_tree, indent, single_line
from mindmap_core.models import MindMapTree, generate_id, iter_nodes

FORMAT_NAME = "Markdown"
DEFAULT_ROOT = "Root"


def _indent_level(line: str) -> int:
    width = 0
    for ch in line:
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += 2
        else:
            break
    return width // 2


def parse(text: str) -> MindMapTree:
    """Parse an indented outline.

    Blank lines are ignored and empty input yields a lone ``"Root"`` node.

    Raises:
        DepthExceededError: more open ancestors than ``settings.max_depth``.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return MindMapTree(id=generate_id(), content=DEFAULT_ROOT)

    root = MindMapTree(id=generate_id(), content=lines[0].strip())
    # (node, level); the root sits below every real level.
    stack: List[Tuple[MindMapTree, int]] = [(root, -1)]

    for line in lines[1:]:
        level = _indent_level(line)
        node = MindMapTree(id=generate_id(), content=line.strip())

        while len(stack) > 1 and stack[-1][1] >= level:
            stack.pop()

        stack[-1][0].children.append(node)
        stack.append((node, level))
        if len(stack) - 1 > settings.max_depth:
            raise DepthExceededError(FORMAT_NAME, settings.max_depth)

    return finish_tree(root, FORMAT_NAME)


def serialize(tree: MindMapTree) -> str:
    """Write *tree* depth-first, two spaces per level, one node per line."""
    lines = []
    for node, depth in iter_nodes(tree):
        check_depth(depth, FORMAT_NAME)
        lines.append(f"{indent(depth)}{single_line(node.content)}")
    return "\n".join(lines)
