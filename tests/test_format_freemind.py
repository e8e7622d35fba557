"""Tests for the FreeMind (.mm) codec."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from mindmap_core.errors import DepthExceededError, FormatError
from mindmap_core.formats import freemind
from mindmap_core.models import CloudStyle, EdgeStyle, MindMapTree, NodeMetadata, NodeStyle

_DOCUMENT = """\
<map version="1.0.1">
  <node TEXT="Root" ID="ID_1" COLOR="#000000" CREATED="1700000000000">
    <icon BUILTIN="idea"/>
    <font NAME="Arial" SIZE="16" BOLD="true"/>
    <node TEXT="Folded" ID="ID_2" FOLDED="true" LINK="https://example.com">
      <edge COLOR="#ff0000" WIDTH="2" STYLE="bezier"/>
      <cloud COLOR="#ffcc00"/>
      <node TEXT="Hidden" ID="ID_3"/>
    </node>
    <node ID="ID_4">
      <richcontent TYPE="NODE"><html><head/><body><p>Rich <b>text</b></p></body></html></richcontent>
      <richcontent TYPE="NOTE"><html><head/><body><p>Note <script>x()</script><i>it</i></p></body></html></richcontent>
    </node>
  </node>
</map>
"""


class TestFreeMindParse:
    def test_structure(self) -> None:
        tree = freemind.parse(_DOCUMENT)
        assert tree.id == "ID_1"
        assert tree.content == "Root"
        assert [c.id for c in tree.children] == ["ID_2", "ID_4"]
        assert tree.children[0].children[0].content == "Hidden"

    def test_attributes(self) -> None:
        tree = freemind.parse(_DOCUMENT)
        assert tree.icon == "idea"
        assert tree.created == 1700000000000
        assert tree.style == NodeStyle(color="#000000", font_name="Arial", font_size=16, bold=True)
        folded = tree.children[0]
        assert folded.collapsed is True
        assert folded.link == "https://example.com"
        assert folded.edge_style == EdgeStyle(color="#ff0000", width=2, style="bezier")
        assert folded.cloud == CloudStyle(color="#ffcc00")

    def test_rich_content(self) -> None:
        rich = freemind.parse(_DOCUMENT).children[1]
        assert rich.content == "Rich text"
        assert rich.metadata.notes == "<p>Note <i>it</i></p>"

    def test_missing_text_is_untitled(self) -> None:
        tree = freemind.parse('<map><node ID="x"/></map>')
        assert tree.content == "Untitled"

    def test_missing_ids_generated(self) -> None:
        tree = freemind.parse('<map><node TEXT="a"><node TEXT="b"/></node></map>')
        assert tree.id.startswith("node_")
        assert tree.children[0].id != tree.id

    def test_unknown_edge_style_dropped(self) -> None:
        tree = freemind.parse('<map><node TEXT="a"><edge STYLE="wavy" COLOR="#111"/></node></map>')
        assert tree.edge_style == EdgeStyle(color="#111", style=None)

    def test_bad_number_ignored(self) -> None:
        tree = freemind.parse('<map><node TEXT="a" CREATED="soon"/></map>')
        assert tree.created is None

    def test_no_root_node(self) -> None:
        with pytest.raises(FormatError, match="no root node found"):
            freemind.parse('<map version="1.0.1"></map>')

    def test_malformed_xml(self) -> None:
        with pytest.raises(FormatError, match="malformed XML"):
            freemind.parse("<map><node TEXT='a'></map>")

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(FormatError):
            freemind.parse('<map><node ID="a" TEXT="1"><node ID="a" TEXT="2"/></node></map>')

    def test_depth_guard(self, monkeypatch) -> None:
        monkeypatch.setattr("mindmap_core.config.settings.max_depth", 2)
        doc = "<map>" + '<node TEXT="n">' * 4 + "</node>" * 4 + "</map>"
        with pytest.raises(DepthExceededError):
            freemind.parse(doc)


class TestFreeMindSerialize:
    def test_document_shape(self) -> None:
        text = freemind.serialize(MindMapTree(id="r", content="Root"))
        assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<map version="1.0.1">')
        assert '<node TEXT="Root" ID="r"/>' in text

    def test_folded_written_only_when_collapsed(self) -> None:
        tree = MindMapTree(
            id="r",
            content="R",
            children=[MindMapTree(id="c", content="C", collapsed=True, children=[MindMapTree(id="g", content="G")])],
        )
        text = freemind.serialize(tree)
        assert text.count("FOLDED") == 1
        assert 'FOLDED="true"' in text

    def test_attribute_escaping(self) -> None:
        text = freemind.serialize(MindMapTree(id="r", content='a<b>&"c"\'d\'\nline'))
        assert 'TEXT="a&lt;b&gt;&amp;&quot;c&quot;&apos;d&apos;&#10;line"' in text
        ET.fromstring(text)

    def test_invalid_xml_characters_dropped(self) -> None:
        text = freemind.serialize(MindMapTree(id="r", content="bell\x07"))
        assert freemind.parse(text).content == "bell"

    def test_notes_are_sanitized(self) -> None:
        tree = MindMapTree(id="r", content="R", metadata=NodeMetadata(notes="<b>ok</b><script>bad()</script>"))
        text = freemind.serialize(tree)
        assert "<b>ok</b>" in text
        assert "script" not in text


class TestFreeMindRoundTrip:
    def test_content_color_collapsed(self) -> None:
        tree = MindMapTree(
            id="r",
            content="Root & <friends>",
            style=NodeStyle(color="#123456", background_color="#abcdef"),
            children=[
                MindMapTree(
                    id="c",
                    content="Child \"quoted\"",
                    collapsed=True,
                    children=[MindMapTree(id="g", content="Grand")],
                ),
            ],
        )
        back = freemind.parse(freemind.serialize(tree))
        assert back.content == "Root & <friends>"
        assert back.style.color == "#123456"
        assert back.style.background_color == "#abcdef"
        assert back.children[0].content == 'Child "quoted"'
        assert back.children[0].collapsed is True
        assert back.children[0].children[0].content == "Grand"

    def test_full_node_survives(self) -> None:
        tree = freemind.parse(_DOCUMENT)
        again = freemind.parse(freemind.serialize(tree))
        assert again == tree

    def test_multiline_content(self) -> None:
        tree = MindMapTree(id="r", content="line one\nline two\ttab")
        assert freemind.parse(freemind.serialize(tree)).content == "line one\nline two\ttab"

    @pytest.mark.parametrize(
        "notes",
        ["&lt;b&gt;x&lt;/b&gt;", "&lt;script&gt;a()&lt;/script&gt; tail", "<b>bold</b> and &lt;i&gt;text&lt;/i&gt;"],
    )
    def test_escaped_notes_stay_text(self, notes: str) -> None:
        tree = MindMapTree(id="r", content="R", metadata=NodeMetadata(notes=notes))
        back = freemind.parse(freemind.serialize(tree))
        assert back.metadata.notes == notes
