"""Graph projection package: tree <-> canvas graph, plus auto-layout."""

from mindmap_core.graph.layout import auto_layout
from mindmap_core.graph.models import (
    GraphPayload,
    MindMapEdge,
    MindMapNode,
    MindMapNodeData,
)
from mindmap_core.graph.projector import graph_to_tree, tree_to_graph

__all__ = [
    "auto_layout",
    "graph_to_tree",
    "tree_to_graph",
    "GraphPayload",
    "MindMapEdge",
    "MindMapNode",
    "MindMapNodeData",
]
