"""Tests for the OPML codec."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from mindmap_core.errors import FormatError
from mindmap_core.formats import opml
from mindmap_core.models import MindMapTree, NodeMetadata

_DOCUMENT = """\
<?xml version="1.0" encoding="UTF-8"?>
<opml version="2.0">
  <head><title>Doc</title></head>
  <body>
    <outline text="First" _note="a note">
      <outline title="By title"/>
      <outline TEXT="Upper"/>
      <outline/>
    </outline>
    <outline text="Second"/>
  </body>
</opml>
"""


def _tree() -> MindMapTree:
    return MindMapTree(
        id="r",
        content="Root",
        children=[
            MindMapTree(id="a", content="A", children=[MindMapTree(id="a1", content="A1")]),
            MindMapTree(id="b", content="B"),
        ],
    )


class TestOpmlParse:
    def test_first_outline_is_root(self) -> None:
        tree = opml.parse(_DOCUMENT)
        assert tree.content == "First"
        assert [c.content for c in tree.children] == ["By title", "Upper", "Untitled"]

    def test_note_attribute(self) -> None:
        assert opml.parse(_DOCUMENT).metadata.notes == "a note"

    def test_empty_body(self) -> None:
        tree = opml.parse("<opml><head/><body/></opml>")
        assert tree.content == "Root"
        assert tree.children == []

    def test_missing_body(self) -> None:
        with pytest.raises(FormatError, match="no body element found"):
            opml.parse("<opml><head/></opml>")

    def test_malformed(self) -> None:
        with pytest.raises(FormatError):
            opml.parse("<opml><body>")


class TestOpmlSerialize:
    def test_root_is_not_written(self) -> None:
        text = opml.serialize(_tree())
        body = ET.fromstring(text).find("body")
        assert [o.get("text") for o in body.findall("outline")] == ["A", "B"]
        assert 'text="Root"' not in text

    def test_title_from_settings(self, monkeypatch) -> None:
        monkeypatch.setattr("mindmap_core.config.settings.opml_title", "Plans & <Ideas>")
        text = opml.serialize(_tree())
        assert "<title>Plans &amp; &lt;Ideas&gt;</title>" in text

    def test_escaping(self) -> None:
        tree = MindMapTree(id="r", content="R", children=[MindMapTree(id="a", content='<"x" & \'y\'>')])
        text = opml.serialize(tree)
        assert ET.fromstring(text).find("body/outline").get("text") == '<"x" & \'y\'>'

    def test_notes_written(self) -> None:
        tree = MindMapTree(
            id="r",
            content="R",
            children=[MindMapTree(id="a", content="A", metadata=NodeMetadata(notes="line1\nline2"))],
        )
        back = opml.parse(opml.serialize(tree))
        assert back.metadata.notes == "line1\nline2"


def test_round_trip_promotes_first_child() -> None:
    back = opml.parse(opml.serialize(_tree()))
    assert back.content == "A"
    assert [c.content for c in back.children] == ["A1"]
