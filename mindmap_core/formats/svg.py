"""SVG export.

The tree is drawn top-down: every visible subtree gets a horizontal band
wide enough for all of its leaves, and a parent is centred over its band.
Children of collapsed nodes are not drawn.  Import is not supported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mindmap_core.errors import UnsupportedOperationError
from mindmap_core.formats._common import check_depth, escape_xml, escape_xml_text
from mindmap_core.icons import icon_emoji
from mindmap_core.models import MindMapTree, NodeStyle
from mindmap_core.sanitize import is_safe_url

FORMAT_NAME = "SVG"


@dataclass(frozen=True)
class SvgLayout:
    node_width: float = 120
    node_height: float = 40
    horizontal_spacing: float = 80
    vertical_spacing: float = 60
    edge_color: str = "#666666"
    edge_width: int = 2
    font_size: int = 14
    font_family: str = "Arial, sans-serif"
    padding: float = 20
    cloud_margin: float = 10


DEFAULT_LAYOUT = SvgLayout()


@dataclass
class _Placed:
    node: MindMapTree
    x: float
    y: float
    parent: Optional["_Placed"] = None


def _num(value: float) -> str:
    rounded = round(value, 2)
    return str(int(rounded)) if rounded == int(rounded) else str(rounded)


def _visible_children(node: MindMapTree) -> list[MindMapTree]:
    return [] if node.collapsed else node.children


def _band_widths(tree: MindMapTree, layout: SvgLayout) -> dict[int, float]:
    """Width of every visible subtree, keyed by node object id."""
    widths: dict[int, float] = {}

    def visit(node: MindMapTree, depth: int) -> float:
        check_depth(depth, FORMAT_NAME)
        children = _visible_children(node)
        span = sum(visit(child, depth + 1) for child in children)
        span += layout.horizontal_spacing * max(len(children) - 1, 0)
        widths[id(node)] = max(layout.node_width, span)
        return widths[id(node)]

    visit(tree, 0)
    return widths


def _place(tree: MindMapTree, layout: SvgLayout) -> list[_Placed]:
    widths = _band_widths(tree, layout)
    placed: list[_Placed] = []

    def visit(node: MindMapTree, left: float, depth: int, parent: Optional[_Placed]) -> None:
        band = widths[id(node)]
        item = _Placed(
            node=node,
            x=left + (band - layout.node_width) / 2,
            y=depth * (layout.node_height + layout.vertical_spacing),
            parent=parent,
        )
        placed.append(item)
        children = _visible_children(node)
        span = sum(widths[id(c)] for c in children)
        span += layout.horizontal_spacing * max(len(children) - 1, 0)
        cursor = left + (band - span) / 2
        for child in children:
            visit(child, cursor, depth + 1, item)
            cursor += widths[id(child)] + layout.horizontal_spacing

    visit(tree, 0.0, 0, None)
    return placed


def _edge(item: _Placed, layout: SvgLayout, offset: float) -> str:
    parent = item.parent
    edge = item.node.edge_style
    color = (edge.color if edge else None) or layout.edge_color
    width = (edge.width if edge else None) or layout.edge_width
    return (
        f'    <line x1="{_num(parent.x + layout.node_width / 2 + offset)}" '
        f'y1="{_num(parent.y + layout.node_height + offset)}" '
        f'x2="{_num(item.x + layout.node_width / 2 + offset)}" y2="{_num(item.y + offset)}" '
        f'stroke="{escape_xml(color)}" stroke-width="{escape_xml(width)}"/>'
    )


def _node(item: _Placed, layout: SvgLayout, offset: float) -> list[str]:
    node = item.node
    style = node.style or NodeStyle()
    x = item.x + offset
    y = item.y + offset
    lines: list[str] = []

    if node.cloud is not None:
        margin = layout.cloud_margin
        lines.append(
            f'    <rect class="cloud" x="{_num(x - margin)}" y="{_num(y - margin)}" '
            f'width="{_num(layout.node_width + 2 * margin)}" '
            f'height="{_num(layout.node_height + 2 * margin)}" rx="10" ry="10" '
            f'fill="{escape_xml(node.cloud.color or "#e0e0e0")}" opacity="0.3"/>'
        )

    text_color = style.color or "#333333"
    lines.append(
        f'    <rect x="{_num(x)}" y="{_num(y)}" width="{_num(layout.node_width)}" '
        f'height="{_num(layout.node_height)}" rx="5" ry="5" '
        f'fill="{escape_xml(style.background_color or "#ffffff")}" '
        f'stroke="{escape_xml(text_color)}" stroke-width="1"/>'
    )

    if node.icon:
        glyph = icon_emoji(node.icon) or node.icon
        lines.append(
            f'    <text x="{_num(x + 10)}" y="{_num(y + layout.node_height / 2)}" '
            f'font-size="12" dominant-baseline="middle">{escape_xml_text(glyph)}</text>'
        )

    text = (
        f'<text x="{_num(x + layout.node_width / 2)}" y="{_num(y + layout.node_height / 2)}" '
        f'class="node-text" font-weight="{"bold" if style.bold else "normal"}" '
        f'font-style="{"italic" if style.italic else "normal"}" '
        f'font-size="{escape_xml(style.font_size or layout.font_size)}" '
        f'fill="{escape_xml(text_color)}">{escape_xml_text(node.content)}</text>'
    )
    if node.link and is_safe_url(node.link):
        text = (
            f'<a href="{escape_xml(node.link)}" target="_blank" '
            f'rel="noopener noreferrer" class="node-link">{text}</a>'
        )
    lines.append(f"    {text}")
    return lines


def serialize(tree: MindMapTree, layout: SvgLayout = DEFAULT_LAYOUT) -> str:
    """Render *tree* as a standalone SVG document."""
    placed = _place(tree, layout)
    # Leave room for cloud halos at the edges.
    offset = layout.padding + layout.cloud_margin
    width = max(p.x for p in placed) + layout.node_width + 2 * offset
    height = max(p.y for p in placed) + layout.node_height + 2 * offset

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {_num(width)} {_num(height)}" '
        f'width="{_num(width)}" height="{_num(height)}">',
        "  <defs>",
        '    <style type="text/css"><![CDATA[',
        f"      .node-text {{ font-family: {layout.font_family}; fill: #333333; "
        "text-anchor: middle; dominant-baseline: middle; }",
        "      .node-link { cursor: pointer; }",
        "    ]]></style>",
        "  </defs>",
        '  <g class="edges">',
    ]
    lines.extend(_edge(item, layout, offset) for item in placed if item.parent is not None)
    lines.append("  </g>")
    lines.append('  <g class="nodes">')
    for item in placed:
        lines.extend(_node(item, layout, offset))
    lines.append("  </g>")
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def parse(text: str) -> MindMapTree:
    raise UnsupportedOperationError(FORMAT_NAME)
