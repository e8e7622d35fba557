"""File plumbing shared by the CLI commands.

Commands read and write documents through these helpers and are wrapped
in :func:`handle_core_errors`, which turns any core error into a one-line
message and exit code 1.
"""

from __future__ import annotations

import json
import logging
from functools import wraps
from pathlib import Path
from typing import Callable, Optional

import typer

from mindmap_core.errors import FormatError, MindMapError
from mindmap_core.formats import Codec, codec_for_path
from mindmap_core.graph import GraphPayload
from mindmap_core.models import MindMapTree

logger = logging.getLogger(__name__)


def handle_core_errors(func: Callable) -> Callable:
    """Decorator for commands: report core and file errors, then exit 1."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except MindMapError as e:
            typer.echo(f"❌ {e}")
            raise typer.Exit(code=1)
        except OSError as e:
            typer.echo(f"❌ Error: {e}")
            raise typer.Exit(code=1)

    return wrapper


def read_tree(path: Path, format_name: Optional[str] = None) -> tuple[MindMapTree, Codec]:
    """Parse the document at *path*, inferring the format from its suffix."""
    codec = codec_for_path(path, format_name)
    logger.debug("Reading %s as %s", path, codec.label)
    tree = codec.parse(path.read_text(encoding="utf-8"))
    return tree, codec


def write_tree(tree: MindMapTree, path: Path, format_name: Optional[str] = None) -> Codec:
    codec = codec_for_path(path, format_name)
    write_text(path, codec.serialize(tree))
    return codec


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.debug("Wrote %d characters to %s", len(text), path)


def read_graph(path: Path) -> GraphPayload:
    """Load a ``{"nodes": [...], "edges": [...]}`` document."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise FormatError("graph", f"malformed JSON ({e})") from e
    if not isinstance(raw, dict):
        raise FormatError("graph", "expected an object with 'nodes' and 'edges'")
    try:
        return GraphPayload.from_dict(raw)
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise FormatError("graph", f"bad node or edge entry ({e!r})") from e
