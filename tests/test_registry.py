"""Tests for the format registry, icon table and statistics."""

from __future__ import annotations

import dataclasses

import pytest

from mindmap_core.errors import UnsupportedOperationError
from mindmap_core.formats import CODECS, codec_for_path, get_codec, parse, serialize
from mindmap_core.icons import ICON_CATEGORIES, ICONS, get_icon, icon_emoji, icons_in_category, is_known_icon
from mindmap_core.models import CloudStyle, MindMapTree, NodeMetadata
from mindmap_core.stats import tree_stats


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestRegistry:
    def test_known_formats(self) -> None:
        assert list(CODECS) == ["json", "freemind", "markdown", "opml", "yaml", "svg", "d2", "notion", "obsidian"]

    def test_import_capability(self) -> None:
        importable = {name for name, codec in CODECS.items() if codec.can_import}
        assert importable == {"json", "freemind", "markdown", "opml", "yaml"}

    def test_registry_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            CODECS["x"] = CODECS["json"]  # type: ignore[index]
        with pytest.raises(dataclasses.FrozenInstanceError):
            CODECS["json"].name = "other"  # type: ignore[misc]

    def test_get_codec_case_insensitive(self) -> None:
        assert get_codec(" FreeMind ").name == "freemind"

    def test_unknown_format(self) -> None:
        with pytest.raises(UnsupportedOperationError, match="Unknown format"):
            get_codec("docx")

    @pytest.mark.parametrize(
        "path, name",
        [
            ("map.json", "json"),
            ("map.mm", "freemind"),
            ("notes.MD", "markdown"),
            ("notes.markdown", "markdown"),
            ("feed.opml", "opml"),
            ("map.yml", "yaml"),
            ("map.yaml", "yaml"),
            ("out.svg", "svg"),
            ("out.d2", "d2"),
        ],
    )
    def test_codec_for_path(self, path: str, name: str) -> None:
        assert codec_for_path(path).name == name

    def test_explicit_format_wins(self) -> None:
        assert codec_for_path("export.txt", "obsidian").name == "obsidian"

    def test_unknown_extension(self) -> None:
        with pytest.raises(UnsupportedOperationError):
            codec_for_path("map.txt")

    def test_parse_and_serialize_by_name(self) -> None:
        tree = parse("Root\n  Child", "markdown")
        assert serialize(tree, "markdown") == "Root\n  Child"

    def test_cross_format_conversion(self) -> None:
        tree = parse("Root\n  A\n  B", "markdown")
        back = parse(serialize(tree, "freemind"), "freemind")
        assert [c.content for c in back.children] == ["A", "B"]


# ---------------------------------------------------------------------------
# Icons
# ---------------------------------------------------------------------------

class TestIcons:
    def test_lookup(self) -> None:
        assert get_icon("idea").emoji == "💡"
        assert icon_emoji("idea") == "💡"
        assert is_known_icon("yes")

    def test_unknown(self) -> None:
        assert get_icon("nope") is None
        assert icon_emoji(None) == ""
        assert not is_known_icon("")

    def test_ids_unique_and_categorised(self) -> None:
        assert len({i.id for i in ICONS}) == len(ICONS)
        assert {i.category for i in ICONS} <= set(ICON_CATEGORIES)

    def test_category_filter(self) -> None:
        status = icons_in_category("status")
        assert status
        assert all(i.category == "status" for i in status)


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

class TestTreeStats:
    def test_counts(self) -> None:
        tree = MindMapTree(
            id="r",
            content="Root map",
            icon="idea",
            children=[
                MindMapTree(
                    id="a",
                    content="Alpha beta gamma",
                    collapsed=True,
                    link="https://example.com",
                    cloud=CloudStyle(color="#fff"),
                    children=[MindMapTree(id="a1", content="x", icon="idea")],
                ),
                MindMapTree(id="b", content="B", metadata=NodeMetadata(url="https://b")),
            ],
        )
        stats = tree_stats(tree)
        assert stats.total_nodes == 4
        assert stats.max_depth == 2
        assert stats.nodes_by_level == {0: 1, 1: 2, 2: 1}
        assert stats.leaf_count == 2
        assert stats.collapsed_count == 1
        assert stats.link_count == 2
        assert stats.total_characters == len("Root map") + len("Alpha beta gamma") + 1 + 1
        assert stats.total_words == 2 + 3 + 1 + 1
        assert stats.icon_distribution == {"idea": 2}
        assert stats.cloud_distribution == {"#fff": 1}

    def test_single_node(self) -> None:
        stats = tree_stats(MindMapTree(id="r", content=""))
        assert stats.total_nodes == 1
        assert stats.leaf_count == 1
        assert stats.total_words == 0
