"""FreeMind built-in icon table.

The table is immutable and built once at import; every lookup is a pure
function over it.  Node ``icon`` fields hold the ``id`` column.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class FreeMindIcon:
    id: str
    emoji: str
    name: str
    category: str


ICONS: tuple[FreeMindIcon, ...] = (
    # Status
    FreeMindIcon("yes", "✅", "Yes", "status"),
    FreeMindIcon("no", "❌", "No", "status"),
    FreeMindIcon("help", "❓", "Question", "status"),
    FreeMindIcon("idea", "💡", "Idea", "status"),
    FreeMindIcon("important", "⭐", "Important", "status"),
    FreeMindIcon("wizard", "🧙", "Wizard", "status"),
    FreeMindIcon("warning", "⚠️", "Warning", "status"),
    FreeMindIcon("flag", "🚩", "Flag", "status"),
    FreeMindIcon("button_ok", "🆗", "OK", "status"),
    FreeMindIcon("button_cancel", "🚫", "Cancel", "status"),
    FreeMindIcon("checked", "☑️", "Checked", "status"),
    FreeMindIcon("unchecked", "☐", "Unchecked", "status"),
    # Priority
    FreeMindIcon("full-1", "🔴", "Priority 1", "priority"),
    FreeMindIcon("full-2", "🟠", "Priority 2", "priority"),
    FreeMindIcon("full-3", "🟡", "Priority 3", "priority"),
    FreeMindIcon("full-4", "🟢", "Priority 4", "priority"),
    FreeMindIcon("full-5", "🔵", "Priority 5", "priority"),
    FreeMindIcon("full-6", "🟣", "Priority 6", "priority"),
    FreeMindIcon("full-7", "⚫", "Priority 7", "priority"),
    FreeMindIcon("full-8", "⚪", "Priority 8", "priority"),
    # Progress
    FreeMindIcon("0%", "0%", "0%", "progress"),
    FreeMindIcon("25%", "¼", "25%", "progress"),
    FreeMindIcon("50%", "½", "50%", "progress"),
    FreeMindIcon("75%", "¾", "75%", "progress"),
    FreeMindIcon("100%", "✓", "100%", "progress"),
    # Emotion
    FreeMindIcon("smiley-neutral", "😐", "Neutral", "emotion"),
    FreeMindIcon("smiley-good", "🙂", "Good", "emotion"),
    FreeMindIcon("smiley-bad", "🙁", "Bad", "emotion"),
    FreeMindIcon("smiley-oh", "😮", "Oh", "emotion"),
    FreeMindIcon("heart", "❤️", "Heart", "emotion"),
    FreeMindIcon("broken-heart", "💔", "Broken Heart", "emotion"),
    FreeMindIcon("thumbs_up", "👍", "Thumbs Up", "emotion"),
    FreeMindIcon("thumbs_down", "👎", "Thumbs Down", "emotion"),
    # Time
    FreeMindIcon("clock", "⏰", "Clock", "time"),
    FreeMindIcon("calendar", "📅", "Calendar", "time"),
    FreeMindIcon("hourglass", "⏳", "Hourglass", "time"),
    # Other
    FreeMindIcon("clanbomber", "💣", "Bomb", "other"),
    FreeMindIcon("forward", "▶️", "Forward", "other"),
    FreeMindIcon("back", "◀️", "Back", "other"),
    FreeMindIcon("up", "🔼", "Up", "other"),
    FreeMindIcon("down", "🔽", "Down", "other"),
    FreeMindIcon("folder", "📁", "Folder", "other"),
    FreeMindIcon("desktopnew", "🖥️", "Desktop", "other"),
    FreeMindIcon("kde", "🐧", "KDE", "other"),
    FreeMindIcon("gnome", "🐭", "GNOME", "other"),
    FreeMindIcon("linux", "🐧", "Linux", "other"),
    FreeMindIcon("mail", "✉️", "Mail", "other"),
    FreeMindIcon("info", "ℹ️", "Info", "other"),
    FreeMindIcon("list", "📋", "List", "other"),
    FreeMindIcon("music", "🎵", "Music", "other"),
    FreeMindIcon("password", "🔑", "Password", "other"),
    FreeMindIcon("pencil", "✏️", "Pencil", "other"),
    FreeMindIcon("xmag", "🔍", "Search", "other"),
)

ICON_CATEGORIES: tuple[str, ...] = ("status", "priority", "progress", "emotion", "time", "other")

_BY_ID: Mapping[str, FreeMindIcon] = MappingProxyType({icon.id: icon for icon in ICONS})


def get_icon(icon_id: Optional[str]) -> Optional[FreeMindIcon]:
    if not icon_id:
        return None
    return _BY_ID.get(icon_id)


def is_known_icon(icon_id: Optional[str]) -> bool:
    return get_icon(icon_id) is not None


def icon_emoji(icon_id: Optional[str]) -> str:
    """Return the emoji for *icon_id*, or ``""`` when it is not in the table."""
    icon = get_icon(icon_id)
    return icon.emoji if icon else ""


def icons_in_category(category: str) -> tuple[FreeMindIcon, ...]:
    return tuple(icon for icon in ICONS if icon.category == category)
