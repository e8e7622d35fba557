"""Commands for listing, converting and validating mind-map documents."""

from pathlib import Path
from typing import Optional

import typer

from mindmap_core.formats import CODECS
from mindmap_core.stats import tree_stats

from cli.documents import handle_core_errors, read_tree, write_tree

formats_app = typer.Typer(help="Convert and validate mind-map documents.", no_args_is_help=True)


@formats_app.command("list")
def formats_list() -> None:
    """Show every known format and what it supports."""
    for codec in CODECS.values():
        direction = "import/export" if codec.can_import else "export only"
        extensions = " ".join(codec.extensions) or "-"
        typer.echo(f"  {codec.name:<9} {codec.label:<9} {extensions:<16} {direction}")


@formats_app.command("convert")
@handle_core_errors
def formats_convert(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to read."),
    target: Path = typer.Argument(..., dir_okay=False, help="Document to write."),
    from_format: Optional[str] = typer.Option(None, "--from", help="Input format name."),
    to_format: Optional[str] = typer.Option(None, "--to", help="Output format name."),
) -> None:
    """Convert a document between formats (picked from file suffixes by default)."""
    tree, src_codec = read_tree(source, from_format)
    dst_codec = write_tree(tree, target, to_format)
    count = tree_stats(tree).total_nodes
    typer.echo(f"✅ {src_codec.label} → {dst_codec.label}: wrote {target} ({count} nodes)")


@formats_app.command("validate")
@handle_core_errors
def formats_validate(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to check."),
    from_format: Optional[str] = typer.Option(None, "--from", help="Input format name."),
) -> None:
    """Parse a document and report whether it is a valid mind map."""
    tree, codec = read_tree(source, from_format)
    stats = tree_stats(tree)
    typer.echo(
        f"✅ Valid {codec.label} document: {stats.total_nodes} nodes, "
        f"depth {stats.max_depth}, root {tree.content!r}"
    )
