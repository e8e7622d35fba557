"""Mind-map document core.

Three entry points: tree <-> graph projection (:mod:`mindmap_core.graph`),
format parse/serialize (:mod:`mindmap_core.formats`) and HTML sanitizing
(:mod:`mindmap_core.sanitize`).
"""

from mindmap_core.errors import (
    DepthExceededError,
    FormatError,
    InvalidTreeError,
    MindMapError,
    UnsupportedOperationError,
)
from mindmap_core.formats import CODECS, codec_for_path, get_codec, parse, serialize
from mindmap_core.graph import auto_layout, graph_to_tree, tree_to_graph
from mindmap_core.models import (
    CloudStyle,
    EdgeStyle,
    FileAttachment,
    MindMapTree,
    NodeMetadata,
    NodeStyle,
    Position,
    generate_id,
    iter_nodes,
    validate_tree,
)
from mindmap_core.sanitize import is_safe_url, sanitize, sanitize_with_links, strip_html
from mindmap_core.stats import TreeStats, tree_stats

__all__ = [
    "CODECS",
    "CloudStyle",
    "DepthExceededError",
    "EdgeStyle",
    "FileAttachment",
    "FormatError",
    "InvalidTreeError",
    "MindMapError",
    "MindMapTree",
    "NodeMetadata",
    "NodeStyle",
    "Position",
    "TreeStats",
    "UnsupportedOperationError",
    "auto_layout",
    "codec_for_path",
    "generate_id",
    "get_codec",
    "graph_to_tree",
    "is_safe_url",
    "iter_nodes",
    "parse",
    "sanitize",
    "sanitize_with_links",
    "serialize",
    "strip_html",
    "tree_stats",
    "tree_to_graph",
    "validate_tree",
]
