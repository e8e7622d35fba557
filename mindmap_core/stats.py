"""Summary statistics over a mind-map tree."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from mindmap_core.config import settings
from mindmap_core.errors import DepthExceededError
from mindmap_core.models import MindMapTree, has_link, iter_nodes


@dataclass
class TreeStats:
    total_nodes: int = 0
    max_depth: int = 0
    nodes_by_level: dict[int, int] = field(default_factory=dict)
    leaf_count: int = 0
    collapsed_count: int = 0
    link_count: int = 0
    total_characters: int = 0
    total_words: int = 0
    icon_distribution: dict[str, int] = field(default_factory=dict)
    cloud_distribution: dict[str, int] = field(default_factory=dict)


def tree_stats(tree: MindMapTree) -> TreeStats:
    """Count nodes, levels, words and decorations across the whole tree.

    Collapsed subtrees are counted too; collapsing only hides nodes.
    """
    levels: Counter[int] = Counter()
    icons: Counter[str] = Counter()
    clouds: Counter[str] = Counter()
    stats = TreeStats()

    for node, depth in iter_nodes(tree):
        if depth > settings.max_depth:
            raise DepthExceededError("tree", settings.max_depth)
        stats.total_nodes += 1
        levels[depth] += 1
        stats.max_depth = max(stats.max_depth, depth)
        if not node.children:
            stats.leaf_count += 1
        if node.collapsed:
            stats.collapsed_count += 1
        if has_link(node):
            stats.link_count += 1
        stats.total_characters += len(node.content)
        stats.total_words += len(node.content.split())
        if node.icon:
            icons[node.icon] += 1
        if node.cloud is not None and node.cloud.color:
            clouds[node.cloud.color] += 1

    stats.nodes_by_level = dict(sorted(levels.items()))
    stats.icon_distribution = dict(icons.most_common())
    stats.cloud_distribution = dict(clouds.most_common())
    return stats
