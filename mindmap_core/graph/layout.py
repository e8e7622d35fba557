"""Deterministic radial auto-layout for canvas graphs.

The root goes to a fixed anchor.  Its direct children alternate between
the right and the left of the anchor so both halves of the map carry a
similar load; deeper nodes continue outwards on their branch's side.
Every subtree gets vertical room proportional to its leaf count, with
each node centered on its own subtree.
"""

from __future__ import annotations

import dataclasses
from collections import deque
from typing import Sequence

from mindmap_core.config import settings
from mindmap_core.graph.models import MindMapEdge, MindMapNode
from mindmap_core.models import Position


def _spanning_children(root_id: str, children_of: dict[str, list[str]]) -> dict[str, list[str]]:
    """Breadth-first spanning tree: each node keeps its first parent only."""
    tree: dict[str, list[str]] = {root_id: []}
    queue = deque([root_id])
    while queue:
        parent = queue.popleft()
        for child in children_of.get(parent, ()):
            if child in tree:
                continue
            tree[parent].append(child)
            tree[child] = []
            queue.append(child)
    return tree


def _leaf_counts(root_id: str, tree: dict[str, list[str]]) -> dict[str, int]:
    order: list[str] = []
    stack = [root_id]
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(tree[node])
    counts: dict[str, int] = {}
    for node in reversed(order):
        kids = tree[node]
        counts[node] = sum(counts[k] for k in kids) if kids else 1
    return counts


def auto_layout(
    nodes: Sequence[MindMapNode], edges: Sequence[MindMapEdge]
) -> list[MindMapNode]:
    """Return copies of *nodes* with layout positions.

    The root is the unique node without an incoming edge.  When there is
    no such node, or more than one, the nodes come back unchanged.  Nodes
    unreachable from the root keep their positions.  The input is never
    mutated and the output depends only on the graph's structure.
    """
    result = list(nodes)
    ids = {n.id for n in result}

    children_of: dict[str, list[str]] = {}
    has_parent: set[str] = set()
    for edge in edges:
        if edge.source not in ids or edge.target not in ids:
            continue
        has_parent.add(edge.target)
        kids = children_of.setdefault(edge.source, [])
        if edge.target not in kids:
            kids.append(edge.target)

    roots = [n for n in result if n.id not in has_parent]
    if len(roots) != 1:
        return result

    root_id = roots[0].id
    tree = _spanning_children(root_id, children_of)
    leaves = _leaf_counts(root_id, tree)

    h_spacing = settings.layout_horizontal_spacing
    v_spacing = settings.layout_vertical_spacing
    anchor_x, anchor_y = settings.layout_anchor
    positions: dict[str, Position] = {root_id: Position(x=anchor_x, y=anchor_y)}

    first_level = tree[root_id]
    sides = ((1, first_level[0::2]), (-1, first_level[1::2]))

    # (node, direction, x, first slot y)
    stack: list[tuple[str, int, float, float]] = []
    for direction, branch in sides:
        total = sum(leaves[child] for child in branch)
        slot_y = anchor_y - (total - 1) * v_spacing / 2
        for child in branch:
            stack.append((child, direction, anchor_x + direction * h_spacing, slot_y))
            slot_y += leaves[child] * v_spacing

    while stack:
        node_id, direction, x, first_slot = stack.pop()
        positions[node_id] = Position(
            x=x, y=first_slot + (leaves[node_id] - 1) * v_spacing / 2
        )
        slot_y = first_slot
        for child in tree[node_id]:
            stack.append((child, direction, x + direction * h_spacing, slot_y))
            slot_y += leaves[child] * v_spacing

    return [
        dataclasses.replace(n, position=positions[n.id]) if n.id in positions else n
        for n in result
    ]
