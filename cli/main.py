"""mindmap CLI: entry-point for the mind-map document core.

Usage:
    mindmap --help

Command groups:
    formats   → list, convert and validate documents
    map       → show, stats and tree <-> graph projection
    html      → rich-text sanitizing
"""

from __future__ import annotations

import logging

import typer

from mindmap_core.config import settings

from cli.commands.formats import formats_app
from cli.commands.html import html_app
from cli.commands.map import map_app

app = typer.Typer(
    name="mindmap",
    help="Mind-map document toolkit.",
    no_args_is_help=True,
)
app.add_typer(formats_app, name="formats")
app.add_typer(map_app, name="map")
app.add_typer(html_app, name="html")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
) -> None:
    """Configure logging before any command runs."""
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
