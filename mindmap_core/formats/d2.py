"""D2 diagram export.

Every node becomes a shape keyed by its (sanitised) id and labelled with
its content.  A node with several children is written as a ``{ }``
container holding them; a lone child is declared with a dotted key
(``parent.child``) next to its parent instead.  Import is not supported.
"""

from __future__ import annotations

import re

from mindmap_core.errors import UnsupportedOperationError
from mindmap_core.formats._common import check_depth, indent
from mindmap_core.models import MindMapTree
from mindmap_core.sanitize import is_safe_url

FORMAT_NAME = "D2"

_KEY_UNSAFE = re.compile(r"[^A-Za-z0-9_]")
_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "$": "\\$",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def quote(text: str) -> str:
    """Double-quoted D2 string with escapes, safe for any content."""
    return '"' + "".join(_STRING_ESCAPES.get(ch, ch) for ch in str(text)) + '"'


class _KeyAllocator:
    """Hands out unique shape keys derived from node ids."""

    def __init__(self) -> None:
        self._used: set[str] = set()

    def key_for(self, node_id: str) -> str:
        base = _KEY_UNSAFE.sub("_", node_id) or "node"
        if base[0].isdigit():
            base = f"n_{base}"
        key = base
        suffix = 2
        while key in self._used:
            key = f"{base}_{suffix}"
            suffix += 1
        self._used.add(key)
        return key


def _style_lines(node: MindMapTree) -> list[str]:
    lines = []
    if node.style is not None:
        if node.style.color:
            lines.append(f"style.stroke: {quote(node.style.color)}")
        if node.style.background_color:
            lines.append(f"style.fill: {quote(node.style.background_color)}")
    if node.icon:
        lines.append(f"icon: {quote(node.icon)}")
    if node.link and is_safe_url(node.link):
        lines.append(f"link: {quote(node.link)}")
    if node.metadata is not None and node.metadata.description:
        lines.append(f"tooltip: {quote(node.metadata.description)}")
    return lines


def _emit(
    node: MindMapTree,
    prefix: str,
    level: int,
    depth: int,
    keys: _KeyAllocator,
    lines: list[str],
) -> None:
    check_depth(depth, FORMAT_NAME)
    pad = indent(level)
    key = keys.key_for(node.id)
    styles = _style_lines(node)
    container = len(node.children) > 1

    declaration = f"{pad}{prefix}{key}: {quote(node.content)}"
    if not styles and not container:
        lines.append(declaration)
    else:
        lines.append(declaration + " {")
        lines.extend(f"{pad}  {line}" for line in styles)
        if container:
            for child in node.children:
                _emit(child, "", level + 1, depth + 1, keys, lines)
        lines.append(f"{pad}}}")

    if len(node.children) == 1:
        _emit(node.children[0], f"{prefix}{key}.", level, depth + 1, keys, lines)


def serialize(tree: MindMapTree) -> str:
    """Render *tree* as a D2 script laid out left to right."""
    lines = ["direction: right", ""]
    _emit(tree, "", 0, 0, _KeyAllocator(), lines)
    return "\n".join(lines) + "\n"


def parse(text: str) -> MindMapTree:
    raise UnsupportedOperationError(FORMAT_NAME)
