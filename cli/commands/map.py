"""Commands for inspecting a mind map and moving it to and from graph form."""

import json
from pathlib import Path
from typing import Optional

import typer

from mindmap_core.graph import graph_to_tree, tree_to_graph
from mindmap_core.stats import tree_stats

from cli.documents import handle_core_errors, read_graph, read_tree, write_text, write_tree
from cli.rendering import render_list, render_stats, render_tree

map_app = typer.Typer(help="Inspect mind maps and project them to canvas graphs.", no_args_is_help=True)


@map_app.command("show")
@handle_core_errors
def map_show(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to show."),
    format: str = typer.Option("tree", "--format", help="Output format: tree | list"),
    from_format: Optional[str] = typer.Option(None, "--from", help="Input format name."),
    show_all: bool = typer.Option(False, "--all", help="Expand collapsed nodes."),
) -> None:
    """Display a mind map as an ASCII tree or flat list."""
    if format not in ("tree", "list"):
        typer.echo(f"❌ Unknown display format {format!r}. Use: tree | list")
        raise typer.Exit(code=1)

    tree, _ = read_tree(source, from_format)
    if format == "list":
        typer.echo(render_list(tree))
        return
    typer.echo(render_tree(tree, show_collapsed=show_all))


@map_app.command("stats")
@handle_core_errors
def map_stats(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to analyse."),
    from_format: Optional[str] = typer.Option(None, "--from", help="Input format name."),
) -> None:
    """Print node, depth and word counts for a mind map."""
    tree, _ = read_tree(source, from_format)
    typer.echo(render_stats(tree_stats(tree)))


@map_app.command("graph")
@handle_core_errors
def map_graph(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to project."),
    layout: bool = typer.Option(False, "--layout", help="Apply auto-layout to node positions."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON here instead of stdout."),
    from_format: Optional[str] = typer.Option(None, "--from", help="Input format name."),
) -> None:
    """Project a mind map to canvas nodes and edges (JSON)."""
    tree, _ = read_tree(source, from_format)
    payload = tree_to_graph(tree, auto_layout=layout)
    text = json.dumps(payload.to_dict(), indent=2, ensure_ascii=False)
    if output is None:
        typer.echo(text)
        return
    write_text(output, text + "\n")
    typer.echo(f"✅ Wrote {len(payload.nodes)} nodes and {len(payload.edges)} edges to {output}")


@map_app.command("from-graph")
@handle_core_errors
def map_from_graph(
    graph_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Graph JSON document."),
    target: Path = typer.Argument(..., dir_okay=False, help="Document to write."),
    to_format: Optional[str] = typer.Option(None, "--to", help="Output format name."),
) -> None:
    """Rebuild a tree from canvas graph JSON and save it in any format."""
    payload = read_graph(graph_file)
    tree = graph_to_tree(payload.nodes, payload.edges)
    if tree is None:
        typer.echo("❌ Graph is not a single tree (no root, several roots, or a cycle).")
        raise typer.Exit(code=1)
    codec = write_tree(tree, target, to_format)
    typer.echo(f"✅ Wrote {codec.label} document to {target}")
