"""OPML codec.

Serialization writes only the *children* of the given tree as top-level
outlines; the tree's own root is not written.  Parsing takes the first
top-level outline as the root, so a round trip promotes the original
root's first child to be the new root.  Outline tools treat the document
title as the root, which is why this asymmetry is kept.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from mindmap_core.config import settings
from mindmap_core.errors import FormatError
from mindmap_core.formats._common import (
    check_depth,
    escape_xml,
    escape_xml_text,
    finish_tree,
    indent,
)
from mindmap_core.models import MindMapTree, NodeMetadata, generate_id

FORMAT_NAME = "OPML"
DEFAULT_ROOT = "Root"


def _outline_text(element: ET.Element) -> str:
    for name in ("text", "title", "TEXT"):
        value = element.get(name)
        if value:
            return value
    return "Untitled"


def _read_outline(element: ET.Element) -> MindMapTree:
    note = element.get("_note")
    return MindMapTree(
        id=generate_id(),
        content=_outline_text(element),
        metadata=NodeMetadata(notes=note) if note else None,
    )


def parse(text: str) -> MindMapTree:
    """Parse an OPML document.

    The first ``<outline>`` directly under ``<body>`` becomes the root;
    an empty body yields a lone ``"Root"`` node.

    Raises:
        FormatError: malformed XML or no ``<body>`` element.
        DepthExceededError: nesting beyond ``settings.max_depth``.
    """
    try:
        document = ET.fromstring(text)
    except ET.ParseError as exc:
        raise FormatError(FORMAT_NAME, f"malformed XML ({exc})") from exc

    body = document if document.tag == "body" else document.find(".//body")
    if body is None:
        raise FormatError(FORMAT_NAME, "no body element found")

    first = body.find("outline")
    if first is None:
        return MindMapTree(id=generate_id(), content=DEFAULT_ROOT)

    root = _read_outline(first)
    stack = [(first, root, 0)]
    while stack:
        element, node, depth = stack.pop()
        check_depth(depth, FORMAT_NAME)
        for child_element in element.findall("outline"):
            child = _read_outline(child_element)
            node.children.append(child)
            stack.append((child_element, child, depth + 1))

    return finish_tree(root, FORMAT_NAME)


def _outline_lines(node: MindMapTree, depth: int, lines: list[str]) -> None:
    check_depth(depth, FORMAT_NAME)
    pad = indent(depth + 2)
    attrs = f'text="{escape_xml(node.content)}"'
    if node.metadata and node.metadata.notes:
        attrs += f' _note="{escape_xml(node.metadata.notes)}"'

    if not node.children:
        lines.append(f"{pad}<outline {attrs}/>")
        return
    lines.append(f"{pad}<outline {attrs}>")
    for child in node.children:
        _outline_lines(child, depth + 1, lines)
    lines.append(f"{pad}</outline>")


def serialize(tree: MindMapTree) -> str:
    """Serialize the children of *tree* as top-level outlines."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<opml version="2.0">',
        "  <head>",
        f"    <title>{escape_xml_text(settings.opml_title)}</title>",
        "  </head>",
        "  <body>",
    ]
    for child in tree.children:
        _outline_lines(child, 0, lines)
    lines.extend(["  </body>", "</opml>"])
    return "\n".join(lines) + "\n"
