"""YAML codec.

Only the modelled subset travels through YAML: ``content`` (``label`` is
accepted as an alias on input), ``notes`` and ``link`` (kept in node
metadata), ``icon``, ``cloud.color`` and ``children``.  Everything else
is dropped on export.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from mindmap_core.config import settings
from mindmap_core.errors import DepthExceededError, FormatError
from mindmap_core.formats._common import check_depth, finish_tree
from mindmap_core.models import CloudStyle, MindMapTree, NodeMetadata, generate_id

logger = logging.getLogger(__name__)

FORMAT_NAME = "YAML"
DEFAULT_ROOT = "Root"

_SCALARS = (str, int, float, bool)


@dataclass
class YamlNode:
    """One YAML mapping, validated."""

    content: str = DEFAULT_ROOT
    notes: Optional[str] = None
    link: Optional[str] = None
    icon: Optional[str] = None
    cloud_color: Optional[str] = None
    has_cloud: bool = False
    children: list[Any] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> YamlNode:
        if not isinstance(data, dict):
            raise FormatError(FORMAT_NAME, f"expected a mapping, got {type(data).__name__}")

        children = data.get("children")
        if children is None:
            children = []
        elif not isinstance(children, list):
            raise FormatError(FORMAT_NAME, "'children' must be a list")

        has_cloud = False
        cloud_color = None
        cloud = data.get("cloud")
        if isinstance(cloud, dict):
            has_cloud = True
            cloud_color = _scalar(cloud.get("color"), "cloud.color")
        elif cloud:
            logger.warning("Ignoring non-mapping 'cloud' value in YAML node")

        content = _scalar(data.get("content"), "content")
        if content is None:
            content = _scalar(data.get("label"), "label")
        return cls(
            content=DEFAULT_ROOT if content is None else content,
            notes=_scalar(data.get("notes"), "notes"),
            link=_scalar(data.get("link"), "link"),
            icon=_scalar(data.get("icon"), "icon"),
            cloud_color=cloud_color,
            has_cloud=has_cloud,
            children=children,
        )

    @classmethod
    def from_tree(cls, node: MindMapTree) -> YamlNode:
        meta = node.metadata
        return cls(
            content=node.content,
            notes=meta.notes if meta else None,
            link=meta.link if meta else None,
            icon=node.icon,
            cloud_color=node.cloud.color if node.cloud else None,
            has_cloud=node.cloud is not None,
        )

    def to_tree(self) -> MindMapTree:
        """The tree node for this mapping, without children."""
        metadata = None
        if self.notes or self.link:
            metadata = NodeMetadata(notes=self.notes or None, link=self.link or None)
        return MindMapTree(
            id=generate_id(),
            content=self.content,
            metadata=metadata,
            icon=self.icon or None,
            cloud=CloudStyle(color=self.cloud_color) if self.has_cloud else None,
        )

    def to_mapping(self) -> dict[str, Any]:
        data: dict[str, Any] = {"content": self.content}
        if self.notes:
            data["notes"] = self.notes
        if self.link:
            data["link"] = self.link
        if self.icon:
            data["icon"] = self.icon
        if self.has_cloud:
            data["cloud"] = {"color": self.cloud_color} if self.cloud_color else {}
        return data


def _scalar(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, _SCALARS):
        raise FormatError(FORMAT_NAME, f"'{key}' must be a scalar")
    return str(value)


def _to_mapping(node: MindMapTree, depth: int) -> dict[str, Any]:
    check_depth(depth, FORMAT_NAME)
    data = YamlNode.from_tree(node).to_mapping()
    if node.children:
        data["children"] = [_to_mapping(child, depth + 1) for child in node.children]
    return data


def parse(text: str) -> MindMapTree:
    """Parse a YAML mind map document.

    Raises:
        FormatError: invalid YAML, an empty document, or a node that is not
            a mapping.
        DepthExceededError: nesting beyond ``settings.max_depth``.
    """
    try:
        raw = yaml.safe_load(text)
    except RecursionError as exc:
        raise DepthExceededError(FORMAT_NAME, settings.max_depth) from exc
    except yaml.YAMLError as exc:
        raise FormatError(FORMAT_NAME, f"malformed YAML ({exc})") from exc

    if raw is None:
        raise FormatError(FORMAT_NAME, "document is empty")
    if not isinstance(raw, dict):
        raise FormatError(FORMAT_NAME, "root must be a mapping")

    ir = YamlNode.from_mapping(raw)
    root = ir.to_tree()
    stack = [(ir, root, 0)]
    while stack:
        ir, node, depth = stack.pop()
        check_depth(depth, FORMAT_NAME)
        for child_data in ir.children:
            child_ir = YamlNode.from_mapping(child_data)
            child = child_ir.to_tree()
            node.children.append(child)
            stack.append((child_ir, child, depth + 1))

    return finish_tree(root, FORMAT_NAME)


def serialize(tree: MindMapTree) -> str:
    """Serialize *tree* as block-style YAML with no line wrapping."""
    return yaml.safe_dump(
        _to_mapping(tree, 0),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
        indent=2,
    )
