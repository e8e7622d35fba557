"""Text-format codecs and the registry that looks them up by name or path."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Union

from mindmap_core.errors import UnsupportedOperationError
from mindmap_core.formats import d2, freemind, json_format, markdown, opml, outline, svg, yaml_format
from mindmap_core.models import MindMapTree


@dataclass(frozen=True)
class Codec:
    name: str
    label: str
    extensions: tuple[str, ...]
    parse: Callable[[str], MindMapTree]
    serialize: Callable[[MindMapTree], str]
    can_import: bool = True


CODECS: Mapping[str, Codec] = MappingProxyType(
    {
        codec.name: codec
        for codec in (
            Codec("json", "JSON", (".json",), json_format.parse, json_format.serialize),
            Codec("freemind", "FreeMind", (".mm",), freemind.parse, freemind.serialize),
            Codec("markdown", "Markdown", (".md", ".markdown"), markdown.parse, markdown.serialize),
            Codec("opml", "OPML", (".opml",), opml.parse, opml.serialize),
            Codec("yaml", "YAML", (".yaml", ".yml"), yaml_format.parse, yaml_format.serialize),
            Codec("svg", "SVG", (".svg",), svg.parse, svg.serialize, can_import=False),
            Codec("d2", "D2", (".d2",), d2.parse, d2.serialize, can_import=False),
            Codec(
                "notion", "Notion", (), outline.parse_notion, outline.serialize_notion,
                can_import=False,
            ),
            Codec(
                "obsidian", "Obsidian", (), outline.parse_obsidian, outline.serialize_obsidian,
                can_import=False,
            ),
        )
    }
)

_BY_EXTENSION = MappingProxyType(
    {ext: codec for codec in CODECS.values() for ext in codec.extensions}
)


def get_codec(name: str) -> Codec:
    """Look a codec up by name (case-insensitive)."""
    codec = CODECS.get(name.strip().lower())
    if codec is None:
        raise UnsupportedOperationError(
            name, f"Unknown format '{name}'. Known formats: {', '.join(CODECS)}"
        )
    return codec


def codec_for_path(path: Union[str, Path], format_name: Optional[str] = None) -> Codec:
    """Pick the codec for *path*, preferring an explicit *format_name*."""
    if format_name:
        return get_codec(format_name)
    suffix = Path(path).suffix.lower()
    codec = _BY_EXTENSION.get(suffix)
    if codec is None:
        raise UnsupportedOperationError(
            suffix or str(path),
            f"Cannot infer a format from '{path}'. Pass the format name explicitly.",
        )
    return codec


def parse(text: str, format_name: str) -> MindMapTree:
    return get_codec(format_name).parse(text)


def serialize(tree: MindMapTree, format_name: str) -> str:
    return get_codec(format_name).serialize(tree)


__all__ = ["CODECS", "Codec", "codec_for_path", "get_codec", "parse", "serialize"]
