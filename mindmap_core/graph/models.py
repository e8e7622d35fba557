"""Node/edge graph shape handed to the interactive canvas.

Graph values are derived, disposable projections of a
:class:`~mindmap_core.models.MindMapTree`.  ``to_dict``/``from_dict`` use
the canvas' camelCase keys so a payload can be dumped straight to JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from mindmap_core.models import CloudStyle, NodeMetadata, Position


@dataclass
class MindMapNodeData:
    label: str
    collapsed: bool = False
    color: Optional[str] = None
    font_size: Optional[int] = None
    background_color: Optional[str] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    font_name: Optional[str] = None
    icon: Optional[str] = None
    link: Optional[str] = None
    metadata: Optional[NodeMetadata] = None
    cloud: Optional[CloudStyle] = None
    is_root: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "label": self.label,
            "collapsed": self.collapsed,
            "isRoot": self.is_root,
        }
        optional = {
            "color": self.color,
            "fontSize": self.font_size,
            "backgroundColor": self.background_color,
            "bold": self.bold,
            "italic": self.italic,
            "fontName": self.font_name,
            "icon": self.icon,
            "link": self.link,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        if self.cloud is not None:
            data["cloud"] = {"color": self.cloud.color} if self.cloud.color else {}
        return data

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> MindMapNodeData:
        metadata = d.get("metadata")
        cloud = d.get("cloud")
        return cls(
            label=str(d.get("label", "")),
            collapsed=bool(d.get("collapsed", False)),
            color=d.get("color"),
            font_size=d.get("fontSize"),
            background_color=d.get("backgroundColor"),
            bold=d.get("bold"),
            italic=d.get("italic"),
            font_name=d.get("fontName"),
            icon=d.get("icon"),
            link=d.get("link"),
            metadata=NodeMetadata.from_dict(metadata) if metadata is not None else None,
            cloud=CloudStyle(color=cloud.get("color")) if isinstance(cloud, dict) else None,
            is_root=bool(d.get("isRoot", False)),
        )


@dataclass
class MindMapNode:
    id: str
    position: Position
    data: MindMapNodeData
    type: str = "mindmap"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "position": {"x": self.position.x, "y": self.position.y},
            "data": self.data.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> MindMapNode:
        pos = d.get("position") or {}
        return cls(
            id=str(d["id"]),
            type=d.get("type", "mindmap"),
            position=Position(x=pos.get("x", 0), y=pos.get("y", 0)),
            data=MindMapNodeData.from_dict(d.get("data") or {}),
        )


@dataclass
class MindMapEdge:
    """Directed parent -> child edge."""

    id: str
    source: str
    target: str
    type: str = "smoothstep"
    animated: bool = False
    # Rendering projection of the child's edge style: {"stroke", "strokeWidth"}.
    style: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "animated": self.animated,
        }
        if self.style is not None:
            data["style"] = dict(self.style)
        return data

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> MindMapEdge:
        source = str(d["source"])
        target = str(d["target"])
        return cls(
            id=str(d.get("id") or f"{source}-{target}"),
            source=source,
            target=target,
            type=d.get("type", "smoothstep"),
            animated=bool(d.get("animated", False)),
            style=d.get("style"),
        )


@dataclass
class GraphPayload:
    nodes: list[MindMapNode] = field(default_factory=list)
    edges: list[MindMapEdge] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> GraphPayload:
        return cls(
            nodes=[MindMapNode.from_dict(n) for n in d.get("nodes") or ()],
            edges=[MindMapEdge.from_dict(e) for e in d.get("edges") or ()],
        )
