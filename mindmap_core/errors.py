"""Exception hierarchy for the mind-map core."""

from __future__ import annotations


class MindMapError(Exception):
    """Base class for every error raised by the core."""


class InvalidTreeError(MindMapError):
    """A tree violates a structural invariant (duplicate ids, cycles)."""


class FormatError(MindMapError):
    """Malformed or unsupported input handed to a codec.

    Always recoverable: callers should surface it as an import failure.
    """

    def __init__(self, format_name: str, message: str) -> None:
        self.format_name = format_name
        self.detail = message
        super().__init__(f"Invalid {format_name} format: {message}")


class DepthExceededError(FormatError):
    """Nesting deeper than ``settings.max_depth``."""

    def __init__(self, format_name: str, limit: int) -> None:
        self.limit = limit
        super().__init__(format_name, f"nesting exceeds the maximum depth of {limit}")


class UnsupportedOperationError(MindMapError):
    """The requested operation does not exist for this format.

    Raised when importing an export-only format such as SVG or D2, so the
    caller can suggest an importable format instead.
    """

    def __init__(self, format_name: str, message: str | None = None) -> None:
        self.format_name = format_name
        super().__init__(
            message
            or f"{format_name} import is not supported. "
            "Use JSON, FreeMind, OPML, Markdown or YAML for importing."
        )
