"""Command for cleaning rich-text HTML."""

import sys
from typing import Optional

import typer

from mindmap_core.sanitize import sanitize, sanitize_with_links, strip_html

html_app = typer.Typer(help="Sanitize rich-text HTML.", no_args_is_help=True)


@html_app.command("sanitize")
def html_sanitize(
    text: Optional[str] = typer.Argument(None, help="HTML to clean. Read from stdin when omitted."),
    links: bool = typer.Option(False, "--links", help="Keep safe <a> links."),
    strip: bool = typer.Option(False, "--strip", help="Remove all markup, print plain text."),
) -> None:
    """Print HTML reduced to the rich-text allowlist."""
    if links and strip:
        typer.echo("❌ --links and --strip cannot be combined.")
        raise typer.Exit(code=1)

    markup = text if text is not None else sys.stdin.read()
    if strip:
        typer.echo(strip_html(markup))
    elif links:
        typer.echo(sanitize_with_links(markup))
    else:
        typer.echo(sanitize(markup))
