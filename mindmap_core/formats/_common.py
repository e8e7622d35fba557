"""Escaping and structural helpers shared by the codecs."""

from __future__ import annotations

import logging

from mindmap_core.config import settings
from mindmap_core.errors import DepthExceededError, FormatError, InvalidTreeError
from mindmap_core.models import MindMapTree, iter_nodes, validate_tree

logger = logging.getLogger(__name__)

_XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}


def xml_safe_chars(text: str) -> str:
    # XML 1.0 forbids most C0 controls even as character references.
    return "".join(
        ch for ch in text if ch in "\t\n\r" or (ch >= " " and ch not in "\ufffe\uffff")
    )


def escape_xml(text: object) -> str:
    """Escape *text* for a double- or single-quoted XML attribute value.

    Newlines and tabs are written as character references so attribute
    value normalisation does not turn them into spaces.
    """
    value = xml_safe_chars(str(text))
    escaped = "".join(_XML_ESCAPES.get(ch, ch) for ch in value)
    return escaped.replace("\n", "&#10;").replace("\r", "&#13;").replace("\t", "&#9;")


def escape_xml_text(text: object) -> str:
    """Escape *text* for XML element content."""
    value = xml_safe_chars(str(text))
    return "".join(_XML_ESCAPES.get(ch, ch) for ch in value)


def indent(depth: int, unit: str = "  ") -> str:
    return unit * depth


def single_line(content: str) -> str:
    """Collapse line breaks to spaces so content cannot start a new line."""
    return " ".join(content.splitlines()).strip()


def check_depth(depth: int, format_name: str) -> None:
    if depth > settings.max_depth:
        raise DepthExceededError(format_name, settings.max_depth)


def finish_tree(tree: MindMapTree, format_name: str) -> MindMapTree:
    """Validate a freshly parsed tree and log its size."""
    try:
        validate_tree(tree)
    except DepthExceededError as exc:
        raise DepthExceededError(format_name, exc.limit) from exc
    except InvalidTreeError as exc:
        raise FormatError(format_name, str(exc)) from exc
    logger.debug(
        "Parsed %s document: %d node(s)", format_name, sum(1 for _ in iter_nodes(tree))
    )
    return tree
