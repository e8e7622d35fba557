"""Centralised settings for the mind-map core.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Structural limits
    # ------------------------------------------------------------------
    max_depth: int = field(
        default_factory=lambda: int(os.environ.get("MINDMAP_MAX_DEPTH", "256"))
    )

    # ------------------------------------------------------------------
    # Graph layout
    # ------------------------------------------------------------------
    layout_root_x: float = field(
        default_factory=lambda: float(os.environ.get("MINDMAP_LAYOUT_ROOT_X", "400"))
    )
    layout_root_y: float = field(
        default_factory=lambda: float(os.environ.get("MINDMAP_LAYOUT_ROOT_Y", "300"))
    )
    layout_horizontal_spacing: float = field(
        default_factory=lambda: float(os.environ.get("MINDMAP_LAYOUT_H_SPACING", "250"))
    )
    layout_vertical_spacing: float = field(
        default_factory=lambda: float(os.environ.get("MINDMAP_LAYOUT_V_SPACING", "100"))
    )

    # ------------------------------------------------------------------
    # Formats
    # ------------------------------------------------------------------
    opml_title: str = field(
        default_factory=lambda: os.environ.get("MINDMAP_OPML_TITLE", "Mind Map")
    )

    # ------------------------------------------------------------------
    # CLI
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("MINDMAP_LOG_LEVEL", "WARNING")
    )

    @property
    def layout_anchor(self) -> tuple[float, float]:
        """Canonical coordinate the layout places the root at."""
        return (self.layout_root_x, self.layout_root_y)


# Module-level singleton, import this everywhere:
#   from mindmap_core.config import settings
settings = Settings()
