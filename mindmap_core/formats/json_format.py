"""JSON codec: the lossless native exchange format.

pydantic models act as the intermediate representation between the raw
JSON document and :class:`~mindmap_core.models.MindMapTree`.  Nodes are
validated one at a time from an explicit stack, so document depth is
bounded by ``settings.max_depth`` rather than by recursion limits.
"""

from __future__ import annotations

import json
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from mindmap_core.config import settings
from mindmap_core.errors import DepthExceededError, FormatError
from mindmap_core.formats._common import check_depth, finish_tree
from mindmap_core.models import (
    CloudStyle,
    EdgeStyle,
    FileAttachment,
    MindMapTree,
    NodeMetadata,
    NodeStyle,
    Position,
    generate_id,
)

FORMAT_NAME = "JSON"

Number = Union[int, float]


# ---------------------------------------------------------------------------
# Intermediate representation
# ---------------------------------------------------------------------------

class _JsonModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class JsonPosition(_JsonModel):
    x: Number
    y: Number


class JsonStyle(_JsonModel):
    color: Optional[str] = None
    font_size: Optional[int] = None
    background_color: Optional[str] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    font_name: Optional[str] = None


class JsonAttachment(_JsonModel):
    id: str
    name: str
    type: str
    mime_type: Optional[str] = None
    data: str
    size: Optional[int] = None


class JsonMetadata(_JsonModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    url: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[list[str]] = None
    attachments: Optional[list[JsonAttachment]] = None
    link: Optional[str] = None


class JsonCloud(_JsonModel):
    color: Optional[str] = None


class JsonEdgeStyle(_JsonModel):
    color: Optional[str] = None
    width: Optional[int] = None
    style: Optional[Literal["bezier", "linear", "sharp_linear", "sharp_bezier"]] = None


class JsonTreeNode(_JsonModel):
    id: Optional[str] = None
    content: str = ""
    # Validated node by node by the caller.
    children: list[Any] = []
    position: Optional[JsonPosition] = None
    collapsed: Optional[bool] = None
    style: Optional[JsonStyle] = None
    metadata: Optional[JsonMetadata] = None
    icon: Optional[str] = None
    cloud: Optional[JsonCloud] = None
    edge_style: Optional[JsonEdgeStyle] = None
    link: Optional[str] = None
    created: Optional[int] = None
    modified: Optional[int] = None

    def to_tree(self) -> MindMapTree:
        """Convert this node (without its children) to the tree model."""
        metadata = None
        if self.metadata is not None:
            metadata = NodeMetadata(
                url=self.metadata.url,
                description=self.metadata.description,
                notes=self.metadata.notes,
                tags=set(self.metadata.tags or ()),
                attachments=[
                    FileAttachment(
                        id=a.id,
                        name=a.name,
                        type=a.type,
                        data=a.data,
                        size=a.size,
                        mime_type=a.mime_type,
                    )
                    for a in self.metadata.attachments or ()
                ],
                link=self.metadata.link,
                extra=dict(self.metadata.model_extra or {}),
            )
        return MindMapTree(
            id=self.id or generate_id(),
            content=self.content,
            position=Position(x=self.position.x, y=self.position.y) if self.position else None,
            collapsed=bool(self.collapsed),
            style=NodeStyle(**self.style.model_dump()) if self.style else None,
            metadata=metadata,
            icon=self.icon,
            cloud=CloudStyle(color=self.cloud.color) if self.cloud else None,
            edge_style=EdgeStyle(**self.edge_style.model_dump()) if self.edge_style else None,
            link=self.link,
            created=self.created,
            modified=self.modified,
        )

    @classmethod
    def from_tree(cls, node: MindMapTree) -> JsonTreeNode:
        """Build the IR for *node*; ``children`` is left empty."""
        metadata = None
        if node.metadata is not None:
            meta = node.metadata
            metadata = JsonMetadata(
                url=meta.url,
                description=meta.description,
                notes=meta.notes,
                tags=sorted(meta.tags) if meta.tags else None,
                attachments=[
                    JsonAttachment(
                        id=a.id,
                        name=a.name,
                        type=a.type,
                        mime_type=a.mime_type,
                        data=a.data,
                        size=a.size,
                    )
                    for a in meta.attachments
                ]
                or None,
                link=meta.link,
                **meta.extra,
            )
        return cls(
            id=node.id,
            content=node.content,
            position=JsonPosition(x=node.position.x, y=node.position.y) if node.position else None,
            collapsed=True if node.collapsed else None,
            style=JsonStyle(**vars(node.style)) if node.style else None,
            metadata=metadata,
            icon=node.icon,
            cloud=JsonCloud(color=node.cloud.color) if node.cloud else None,
            edge_style=JsonEdgeStyle(**vars(node.edge_style)) if node.edge_style else None,
            link=node.link,
            created=node.created,
            modified=node.modified,
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _describe(exc: ValidationError) -> str:
    err = exc.errors()[0]
    location = ".".join(str(part) for part in err["loc"]) or "node"
    return f"{location}: {err['msg']}"


def _node_to_dict(node: MindMapTree, depth: int) -> dict[str, Any]:
    check_depth(depth, FORMAT_NAME)
    data = JsonTreeNode.from_tree(node).model_dump(by_alias=True, exclude_none=True)
    if node.metadata is not None:
        # exclude_none would otherwise drop explicit nulls in pass-through keys
        data["metadata"].update({k: v for k, v in node.metadata.extra.items() if v is None})
    data["children"] = [_node_to_dict(child, depth + 1) for child in node.children]
    return data


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse(text: str) -> MindMapTree:
    """Parse a JSON mind map document.

    Raises:
        FormatError: malformed JSON, a non-object node, or a field of the
            wrong type.
        DepthExceededError: nesting beyond ``settings.max_depth``.
    """
    try:
        raw = json.loads(text)
    except RecursionError as exc:
        raise DepthExceededError(FORMAT_NAME, settings.max_depth) from exc
    except (json.JSONDecodeError, TypeError) as exc:
        raise FormatError(FORMAT_NAME, f"malformed JSON ({exc})") from exc

    roots: list[MindMapTree] = []
    stack: list[tuple[Any, Optional[MindMapTree], int]] = [(raw, None, 0)]
    while stack:
        item, parent, depth = stack.pop()
        check_depth(depth, FORMAT_NAME)
        if not isinstance(item, dict):
            raise FormatError(FORMAT_NAME, f"expected a node object, got {type(item).__name__}")
        try:
            ir = JsonTreeNode.model_validate(item)
        except ValidationError as exc:
            raise FormatError(FORMAT_NAME, _describe(exc)) from exc
        node = ir.to_tree()
        (parent.children if parent is not None else roots).append(node)
        for child in reversed(ir.children):
            stack.append((child, node, depth + 1))

    return finish_tree(roots[0], FORMAT_NAME)


def serialize(tree: MindMapTree) -> str:
    """Serialize *tree* as pretty-printed JSON (2-space indent)."""
    return json.dumps(_node_to_dict(tree, 0), indent=2, ensure_ascii=False)
