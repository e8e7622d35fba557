"""Allowlist HTML sanitizer for rich-text fields.

Markup is parsed into a real tree with BeautifulSoup, the tree is filtered
against fixed tag/attribute allowlists, and the output is serialized from
the filtered tree.  Nothing here matches markup with regular expressions,
so split or nested tag tricks (``<scr<script>ipt>``) can only ever come
back out as escaped text.

Every public function is total: malformed input degrades to stripped or
escaped text and ``None`` normalizes to ``""``.
"""

from __future__ import annotations

import html
import re
from typing import Optional
from urllib.parse import unquote

from bs4 import BeautifulSoup
from bs4.element import PreformattedString, Tag

# ---------------------------------------------------------------------------
# Allowlists
# ---------------------------------------------------------------------------

ALLOWED_TAGS = frozenset({"b", "i", "u", "strong", "em", "p", "br", "span", "div"})
LINK_TAGS = ALLOWED_TAGS | {"a"}

ANCHOR_ATTRIBUTES = frozenset({"href", "title", "target", "rel"})
COMMON_ATTRIBUTES = frozenset({"title"})

# Removed together with everything inside them.
FORBIDDEN_TAGS = frozenset(
    {
        "script", "style", "iframe", "object", "embed", "form",
        "template", "noscript", "textarea", "title", "xmp", "noembed",
        "noframes", "plaintext", "svg", "math", "frame", "frameset",
        "applet", "base", "link", "meta",
    }
)

BLOCKED_URL_SCHEMES = frozenset({"javascript", "data", "vbscript"})
ALLOWED_TARGETS = frozenset({"_blank", "_self", "_parent", "_top"})
SAFE_REL = "noopener noreferrer"

_SCHEME_RE = re.compile(r"^([a-z][a-z0-9+.\-]*):")
_MAX_DECODE_PASSES = 8


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _normalise_url(url: str) -> str:
    """Decode entity/percent obfuscation and drop whitespace and controls."""
    value = url
    for _ in range(_MAX_DECODE_PASSES):
        decoded = unquote(html.unescape(value))
        if decoded == value:
            break
        value = decoded
    return "".join(ch for ch in value if ch > " " and ch != "\x7f").lower()


def _parse(markup: str) -> BeautifulSoup:
    # multi_valued_attributes=None keeps ``rel`` and friends as plain strings.
    return BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)


def _drop_non_elements(soup: BeautifulSoup) -> None:
    """Remove comments, CDATA, doctypes and processing instructions."""
    for node in soup.find_all(string=lambda s: isinstance(s, PreformattedString)):
        node.extract()


def _filter_attributes(tag: Tag) -> None:
    allowed = ANCHOR_ATTRIBUTES if tag.name == "a" else COMMON_ATTRIBUTES
    for name in list(tag.attrs):
        if name.startswith("on") or name not in allowed:
            del tag.attrs[name]

    if tag.name != "a":
        return

    href = tag.attrs.get("href")
    if href is not None and not is_safe_url(href):
        del tag.attrs["href"]

    target = tag.attrs.get("target")
    if target is not None:
        if target.strip().lower() in ALLOWED_TARGETS:
            tag.attrs["target"] = target.strip().lower()
            tag.attrs["rel"] = SAFE_REL
        else:
            del tag.attrs["target"]
    if "rel" in tag.attrs:
        tag.attrs["rel"] = SAFE_REL


def _clean(markup: str, allowed_tags: frozenset[str]) -> str:
    soup = _parse(markup)
    _drop_non_elements(soup)

    # Reverse document order visits children before their parents, so an
    # unwrapped child is already clean when its parent is handled.
    for tag in reversed(soup.find_all(True)):
        name = (tag.name or "").lower()
        if name in FORBIDDEN_TAGS:
            tag.decompose()
        elif name not in allowed_tags:
            tag.unwrap()
        else:
            tag.name = name
            _filter_attributes(tag)

    return soup.decode(formatter="minimal")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def is_safe_url(url: Optional[str]) -> bool:
    """Return ``False`` for empty URLs and script-capable schemes.

    The scheme is inspected after repeated HTML-entity and percent decoding
    with whitespace and control characters removed, which is how browsers
    end up reading obfuscated ``java&#09;script:`` style values.
    """
    if not url or not url.strip():
        return False
    match = _SCHEME_RE.match(_normalise_url(url))
    return not (match and match.group(1) in BLOCKED_URL_SCHEMES)


def sanitize(markup: Optional[str]) -> str:
    """Filter *markup* down to basic inline formatting.

    Anchors are unwrapped (their text stays); use
    :func:`sanitize_with_links` where link rendering is wanted.
    """
    if not markup:
        return ""
    return _clean(markup, ALLOWED_TAGS)


def sanitize_with_links(markup: Optional[str]) -> str:
    """Like :func:`sanitize` but keeps ``<a>`` with safe attributes."""
    if not markup:
        return ""
    return _clean(markup, LINK_TAGS)


def strip_html(markup: Optional[str]) -> str:
    """Discard all markup and return the concatenated text nodes."""
    if not markup:
        return ""
    soup = _parse(markup)
    _drop_non_elements(soup)
    for tag in soup.find_all(True):
        if (tag.name or "").lower() in FORBIDDEN_TAGS and not tag.decomposed:
            tag.decompose()
    return soup.get_text()
