"""Dataclass models for the canonical mind-map tree.

These are plain Python objects.  Every codec parses into and serializes
from :class:`MindMapTree`; the graph projection is derived from it and is
never the source of truth.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from mindmap_core.config import settings
from mindmap_core.errors import DepthExceededError, InvalidTreeError

EDGE_STYLES = ("bezier", "linear", "sharp_linear", "sharp_bezier")


@dataclass
class Position:
    x: float
    y: float


@dataclass
class NodeStyle:
    color: Optional[str] = None
    font_size: Optional[int] = None
    background_color: Optional[str] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    font_name: Optional[str] = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.color,
                self.font_size,
                self.background_color,
                self.bold,
                self.italic,
                self.font_name,
            )
        )


@dataclass
class FileAttachment:
    """Opaque payload carried through metadata without interpretation."""

    id: str
    name: str
    type: str
    data: str
    size: Optional[int] = None
    mime_type: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "data": self.data,
        }
        if self.size is not None:
            data["size"] = self.size
        if self.mime_type is not None:
            data["mimeType"] = self.mime_type
        return data

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> FileAttachment:
        return cls(
            id=str(d["id"]),
            name=str(d.get("name", "")),
            type=str(d.get("type", "file")),
            data=str(d.get("data", "")),
            size=d.get("size"),
            mime_type=d.get("mimeType"),
        )


_METADATA_KEYS = ("url", "description", "notes", "tags", "attachments", "link")


@dataclass
class NodeMetadata:
    url: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    tags: set[str] = field(default_factory=set)
    attachments: list[FileAttachment] = field(default_factory=list)
    link: Optional[str] = None
    # Free-form key/value pairs passed through untouched.
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Flatten to the wire shape: known keys plus the ``extra`` pairs."""
        data: dict[str, Any] = dict(self.extra)
        for key in ("url", "description", "notes", "link"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.tags:
            data["tags"] = sorted(self.tags)
        if self.attachments:
            data["attachments"] = [a.to_dict() for a in self.attachments]
        return data

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> NodeMetadata:
        return cls(
            url=d.get("url"),
            description=d.get("description"),
            notes=d.get("notes"),
            tags=set(d.get("tags") or ()),
            attachments=[FileAttachment.from_dict(a) for a in d.get("attachments") or ()],
            link=d.get("link"),
            extra={k: v for k, v in d.items() if k not in _METADATA_KEYS},
        )


@dataclass
class CloudStyle:
    color: Optional[str] = None


@dataclass
class EdgeStyle:
    """Style of the edge coming *into* a node from its parent."""

    color: Optional[str] = None
    width: Optional[int] = None
    style: Optional[str] = None


@dataclass
class MindMapTree:
    id: str
    content: str
    children: list[MindMapTree] = field(default_factory=list)
    position: Optional[Position] = None
    collapsed: bool = False
    style: Optional[NodeStyle] = None
    metadata: Optional[NodeMetadata] = None
    icon: Optional[str] = None
    cloud: Optional[CloudStyle] = None
    edge_style: Optional[EdgeStyle] = None
    link: Optional[str] = None
    created: Optional[int] = None
    modified: Optional[int] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def generate_id() -> str:
    """Return a new collision-resistant opaque node id."""
    return f"node_{uuid.uuid4().hex}"


def iter_nodes(
    tree: MindMapTree, include_collapsed: bool = True
) -> Iterator[tuple[MindMapTree, int]]:
    """Yield ``(node, depth)`` pairs in depth-first pre-order.

    With ``include_collapsed=False`` the children of collapsed nodes are
    skipped, mirroring what the graph projection shows.
    """
    stack: list[tuple[MindMapTree, int]] = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        if node.collapsed and not include_collapsed:
            continue
        for child in reversed(node.children):
            stack.append((child, depth + 1))


def find_node(tree: MindMapTree, node_id: str) -> Optional[MindMapTree]:
    for node, _ in iter_nodes(tree):
        if node.id == node_id:
            return node
    return None


def has_link(node: MindMapTree) -> bool:
    """True when the node carries a link in either of its link slots."""
    if node.link:
        return True
    meta = node.metadata
    return bool(meta and (meta.url or meta.link))


def validate_tree(tree: MindMapTree) -> None:
    """Check the structural invariants of *tree*.

    Raises:
        InvalidTreeError: empty or duplicate ids, or a node that contains
            itself (directly or through a shared subtree object).
        DepthExceededError: nesting deeper than ``settings.max_depth``.
    """
    seen_ids: set[str] = set()
    on_path: set[int] = set()
    # Explicit stack of (node, depth, exiting) so the walk never recurses.
    stack: list[tuple[MindMapTree, int, bool]] = [(tree, 0, False)]
    while stack:
        node, depth, exiting = stack.pop()
        if exiting:
            on_path.discard(id(node))
            continue
        if depth > settings.max_depth:
            raise DepthExceededError("tree", settings.max_depth)
        if id(node) in on_path:
            raise InvalidTreeError(f"Node {node.id!r} is its own ancestor")
        if not node.id:
            raise InvalidTreeError("Node ids must be non-empty strings")
        if node.id in seen_ids:
            raise InvalidTreeError(f"Duplicate node id {node.id!r}")
        seen_ids.add(node.id)
        on_path.add(id(node))
        stack.append((node, depth, True))
        for child in reversed(node.children):
            if child is node:
                raise InvalidTreeError(f"Node {node.id!r} lists itself as a child")
            stack.append((child, depth + 1, False))
