"""Conversion between the canonical tree and the canvas graph."""

from __future__ import annotations

import copy
import logging
from collections import deque
from typing import Optional, Sequence

from mindmap_core.config import settings
from mindmap_core.errors import DepthExceededError
from mindmap_core.graph.layout import auto_layout as _auto_layout
from mindmap_core.graph.models import (
    GraphPayload,
    MindMapEdge,
    MindMapNode,
    MindMapNodeData,
)
from mindmap_core.models import EdgeStyle, MindMapTree, NodeStyle, Position

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _node_data(node: MindMapTree, is_root: bool) -> MindMapNodeData:
    style = node.style or NodeStyle()
    return MindMapNodeData(
        label=node.content,
        collapsed=node.collapsed,
        color=style.color,
        font_size=style.font_size,
        background_color=style.background_color,
        bold=style.bold,
        italic=style.italic,
        font_name=style.font_name,
        icon=node.icon,
        link=node.link,
        metadata=copy.deepcopy(node.metadata),
        cloud=copy.deepcopy(node.cloud),
        is_root=is_root,
    )


def _edge_render_style(edge_style: Optional[EdgeStyle]) -> Optional[dict]:
    if edge_style is None or not (edge_style.color or edge_style.width or edge_style.style):
        return None
    style: dict = {}
    if edge_style.color:
        style["stroke"] = edge_style.color
    if edge_style.width:
        style["strokeWidth"] = edge_style.width
    if edge_style.style == "linear":
        style["strokeDasharray"] = "0"
    return style


def _tree_node(node: MindMapNode) -> MindMapTree:
    data = node.data
    style = NodeStyle(
        color=data.color,
        font_size=data.font_size,
        background_color=data.background_color,
        bold=data.bold,
        italic=data.italic,
        font_name=data.font_name,
    )
    return MindMapTree(
        id=node.id,
        content=data.label,
        position=Position(x=node.position.x, y=node.position.y),
        collapsed=data.collapsed,
        style=None if style.is_empty() else style,
        metadata=copy.deepcopy(data.metadata),
        icon=data.icon,
        cloud=copy.deepcopy(data.cloud),
        link=data.link,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def tree_to_graph(tree: MindMapTree, auto_layout: bool = False) -> GraphPayload:
    """Flatten *tree* into canvas nodes and parent -> child edges.

    Children of collapsed nodes are not visited: they contribute neither
    nodes nor edges, although they stay in the tree.  Nodes without a
    stored position are placed at ``(depth * h_spacing, n * v_spacing)``
    where ``n`` counts the nodes emitted so far.

    Args:
        tree: Root of the tree to project.
        auto_layout: Run :func:`~mindmap_core.graph.layout.auto_layout`
            over the result, replacing every position.

    Raises:
        DepthExceededError: the tree nests deeper than ``settings.max_depth``.
    """
    nodes: list[MindMapNode] = []
    edges: list[MindMapEdge] = []
    visited: set[int] = set()

    stack: list[tuple[MindMapTree, Optional[str], int]] = [(tree, None, 0)]
    while stack:
        node, parent_id, depth = stack.pop()
        if id(node) in visited:
            logger.warning("Node %r reached twice while projecting; skipped", node.id)
            continue
        visited.add(id(node))
        if depth > settings.max_depth:
            raise DepthExceededError("graph", settings.max_depth)

        if node.position is not None:
            position = Position(x=node.position.x, y=node.position.y)
        else:
            position = Position(
                x=depth * settings.layout_horizontal_spacing,
                y=len(nodes) * settings.layout_vertical_spacing,
            )
        nodes.append(
            MindMapNode(
                id=node.id,
                position=position,
                data=_node_data(node, is_root=parent_id is None),
            )
        )

        if parent_id is not None:
            edges.append(
                MindMapEdge(
                    id=f"{parent_id}-{node.id}",
                    source=parent_id,
                    target=node.id,
                    style=_edge_render_style(node.edge_style),
                )
            )

        if not node.collapsed:
            for child in reversed(node.children):
                stack.append((child, node.id, depth + 1))

    if auto_layout:
        nodes = _auto_layout(nodes, edges)
    return GraphPayload(nodes=nodes, edges=edges)


def graph_to_tree(
    nodes: Sequence[MindMapNode], edges: Sequence[MindMapEdge]
) -> Optional[MindMapTree]:
    """Rebuild a tree from a canvas graph.

    Returns ``None`` rather than guessing when the graph is not a single
    tree: no nodes, no root or several roots, a node with two parents,
    nodes unreachable from the root (a cycle), or nesting deeper than
    ``settings.max_depth``.  Edges naming unknown nodes are ignored.
    Child order follows edge order.
    """
    if not nodes:
        return None

    node_map = {n.id: n for n in nodes}
    if len(node_map) != len(nodes):
        logger.warning("Graph has duplicate node ids; no tree built")
        return None

    parent_of: dict[str, str] = {}
    children_of: dict[str, list[str]] = {}
    for edge in edges:
        if edge.source not in node_map or edge.target not in node_map:
            logger.debug("Ignoring edge %r with an unknown endpoint", edge.id)
            continue
        existing = parent_of.get(edge.target)
        if existing == edge.source:
            continue
        if existing is not None:
            logger.warning("Node %r has more than one parent; no tree built", edge.target)
            return None
        parent_of[edge.target] = edge.source
        children_of.setdefault(edge.source, []).append(edge.target)

    roots = [n for n in nodes if n.id not in parent_of]
    if len(roots) != 1:
        logger.warning("Graph has %d root candidates; expected exactly one", len(roots))
        return None

    root = _tree_node(roots[0])
    built = {root.id: root}
    depths = {root.id: 0}
    queue = deque([root.id])
    while queue:
        parent_id = queue.popleft()
        parent = built[parent_id]
        for child_id in children_of.get(parent_id, ()):
            if depths[parent_id] + 1 > settings.max_depth:
                logger.warning("Graph nesting exceeds %d levels; no tree built", settings.max_depth)
                return None
            child = _tree_node(node_map[child_id])
            parent.children.append(child)
            built[child_id] = child
            depths[child_id] = depths[parent_id] + 1
            queue.append(child_id)

    if len(built) != len(node_map):
        logger.warning(
            "%d node(s) unreachable from root %r; no tree built",
            len(node_map) - len(built),
            root.id,
        )
        return None
    return root
