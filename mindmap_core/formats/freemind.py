"""FreeMind ``.mm`` codec.

A FreeMind document is a ``<map>`` holding one root ``<node>``; nodes nest
and carry ``<icon>``, ``<edge>``, ``<font>``, ``<cloud>`` and
``<richcontent>`` children.  Node ids are written to the ``ID`` attribute
so they stay stable across a round trip.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Optional

from mindmap_core.errors import FormatError
from mindmap_core.formats._common import (
    check_depth,
    escape_xml,
    escape_xml_text,
    finish_tree,
    indent,
    xml_safe_chars,
)
from mindmap_core.models import (
    EDGE_STYLES,
    CloudStyle,
    EdgeStyle,
    MindMapTree,
    NodeMetadata,
    NodeStyle,
    generate_id,
)
from mindmap_core.sanitize import sanitize, strip_html

logger = logging.getLogger(__name__)

FORMAT_NAME = "FreeMind"
MAP_VERSION = "1.0.1"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _int_attr(element: ET.Element, name: str) -> Optional[int]:
    raw = element.get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r on FreeMind node", name, raw)
        return None


def _bool_attr(element: ET.Element, name: str) -> Optional[bool]:
    raw = element.get(name)
    return None if raw is None else raw == "true"


def _rich_markup(element: ET.Element) -> str:
    """Inner markup of a ``<richcontent>``'s HTML body, namespaces dropped."""
    body = next((e for e in element.iter() if _local(e.tag) == "body"), element)
    for child in body.iter():
        child.tag = _local(child.tag)
    # ElementTree hands back the leading text decoded; re-escape it like the
    # serialized children so escaped notes stay text.
    parts = [escape_xml_text(body.text or "")]
    parts.extend(ET.tostring(child, encoding="unicode") for child in body)
    return "".join(parts).strip()


def _read_node(element: ET.Element) -> MindMapTree:
    """Convert one ``<node>`` element, ignoring its ``<node>`` children."""
    style = NodeStyle(
        color=element.get("COLOR"),
        background_color=element.get("BACKGROUND_COLOR"),
    )
    icon = None
    edge_style = None
    cloud = None
    notes = None
    rich_text = None

    for child in element:
        tag = _local(child.tag)
        if tag == "icon" and icon is None:
            icon = child.get("BUILTIN")
        elif tag == "edge":
            edge_kind = child.get("STYLE")
            if edge_kind is not None and edge_kind not in EDGE_STYLES:
                logger.warning("Unknown FreeMind edge style %r dropped", edge_kind)
                edge_kind = None
            edge_style = EdgeStyle(
                color=child.get("COLOR"),
                width=_int_attr(child, "WIDTH"),
                style=edge_kind,
            )
        elif tag == "font":
            style.font_name = child.get("NAME")
            style.font_size = _int_attr(child, "SIZE")
            style.bold = _bool_attr(child, "BOLD")
            style.italic = _bool_attr(child, "ITALIC")
        elif tag == "cloud":
            cloud = CloudStyle(color=child.get("COLOR"))
        elif tag == "richcontent":
            kind = (child.get("TYPE") or "").upper()
            if kind == "NOTE":
                notes = sanitize(_rich_markup(child)) or None
            elif kind == "NODE":
                rich_text = strip_html(_rich_markup(child)).strip()

    content = element.get("TEXT")
    if content is None:
        content = rich_text or "Untitled"

    return MindMapTree(
        id=element.get("ID") or generate_id(),
        content=content,
        collapsed=element.get("FOLDED") == "true",
        style=None if style.is_empty() else style,
        metadata=NodeMetadata(notes=notes) if notes else None,
        icon=icon,
        cloud=cloud,
        edge_style=edge_style,
        link=element.get("LINK"),
        created=_int_attr(element, "CREATED"),
        modified=_int_attr(element, "MODIFIED"),
    )


def parse(text: str) -> MindMapTree:
    """Parse a FreeMind XML document.

    Raises:
        FormatError: malformed XML or no ``<map><node>`` root.
        DepthExceededError: nesting beyond ``settings.max_depth``.
    """
    try:
        document = ET.fromstring(text)
    except ET.ParseError as exc:
        raise FormatError(FORMAT_NAME, f"malformed XML ({exc})") from exc

    map_element = document if _local(document.tag) == "map" else document.find(".//map")
    root_element = None
    if map_element is not None:
        root_element = next((c for c in map_element if _local(c.tag) == "node"), None)
    if root_element is None:
        raise FormatError(FORMAT_NAME, "no root node found")

    root = _read_node(root_element)
    stack = [(root_element, root, 0)]
    while stack:
        element, node, depth = stack.pop()
        check_depth(depth, FORMAT_NAME)
        for child_element in element:
            if _local(child_element.tag) != "node":
                continue
            child = _read_node(child_element)
            node.children.append(child)
            stack.append((child_element, child, depth + 1))

    return finish_tree(root, FORMAT_NAME)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _attributes(pairs: list[tuple[str, object]]) -> str:
    return " ".join(f'{name}="{escape_xml(value)}"' for name, value in pairs if value is not None)


def _node_lines(node: MindMapTree, depth: int, lines: list[str]) -> None:
    check_depth(depth, FORMAT_NAME)
    pad = indent(depth + 1)
    style = node.style or NodeStyle()

    attrs = _attributes(
        [
            ("TEXT", node.content),
            ("ID", node.id),
            ("COLOR", style.color or None),
            ("BACKGROUND_COLOR", style.background_color or None),
            ("FOLDED", "true" if node.collapsed else None),
            ("LINK", node.link or None),
            ("CREATED", node.created),
            ("MODIFIED", node.modified),
        ]
    )

    inner: list[str] = []
    if node.icon:
        inner.append(f'{pad}  <icon BUILTIN="{escape_xml(node.icon)}"/>')
    if node.edge_style is not None:
        edge_attrs = _attributes(
            [
                ("COLOR", node.edge_style.color or None),
                ("WIDTH", node.edge_style.width),
                ("STYLE", node.edge_style.style or None),
            ]
        )
        if edge_attrs:
            inner.append(f"{pad}  <edge {edge_attrs}/>")
    font_attrs = _attributes(
        [
            ("NAME", style.font_name or None),
            ("SIZE", style.font_size),
            ("BOLD", None if style.bold is None else str(style.bold).lower()),
            ("ITALIC", None if style.italic is None else str(style.italic).lower()),
        ]
    )
    if font_attrs:
        inner.append(f"{pad}  <font {font_attrs}/>")
    if node.cloud is not None:
        cloud_attrs = _attributes([("COLOR", node.cloud.color or None)])
        inner.append(f"{pad}  <cloud {cloud_attrs}/>" if cloud_attrs else f"{pad}  <cloud/>")
    notes = node.metadata.notes if node.metadata else None
    if notes:
        inner.append(
            f'{pad}  <richcontent TYPE="NOTE"><html><head/><body>'
            f"{xml_safe_chars(sanitize(notes))}</body></html></richcontent>"
        )

    if not inner and not node.children:
        lines.append(f"{pad}<node {attrs}/>")
        return

    lines.append(f"{pad}<node {attrs}>")
    lines.extend(inner)
    for child in node.children:
        _node_lines(child, depth + 1, lines)
    lines.append(f"{pad}</node>")


def serialize(tree: MindMapTree) -> str:
    """Serialize *tree* to a FreeMind XML document."""
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', f'<map version="{MAP_VERSION}">']
    _node_lines(tree, 0, lines)
    lines.append("</map>")
    return "\n".join(lines) + "\n"
