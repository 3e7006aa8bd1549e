from __future__ import annotations

"""revgen Command Line Interface."""

from collections import Counter
from pathlib import Path
from typing import Optional

import typer
import yaml
from jsonschema import ValidationError as SchemaError
from pydantic import ValidationError
from rich import box
from rich.markup import escape
from rich.table import Table

from revgen.core.graph import Graph
from revgen.utils.dag import build_rich_tree
from revgen.utils.logging import console, get
from revgen.yaml_loader import TreeDocument, load_document

app = typer.Typer(
    name="revgen",
    help="CLI for revgen: inspect generation trees declared in YAML.",
    add_completion=False,
)


def _load(tree_file: Path) -> TreeDocument:
    """Load *tree_file* or exit with a readable error."""
    try:
        return load_document(tree_file)
    except (yaml.YAMLError, SchemaError, ValidationError) as e:
        console.print(f"[bold red]Error: {tree_file} is not a valid tree file:[/] {escape(str(e))}")
        raise typer.Exit(code=1)
    except (KeyError, ValueError) as e:
        console.print(f"[bold red]Error building tree from {tree_file}:[/] {escape(str(e))}")
        raise typer.Exit(code=1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")):
    get("debug" if verbose else "warning")


@app.command()
def show(
    tree_file: Path = typer.Argument(..., help="Path to the YAML tree file.", exists=True, file_okay=True, dir_okay=False, readable=True),
    attrs: Optional[bool] = typer.Option(None, "--attrs/--no-attrs", help="Show node attributes."),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", min=0, help="Stop expanding below this depth."),
    max_links: Optional[int] = typer.Option(None, "--max-links", min=0, help="Show at most N relations per node."),
    ascii_only: bool = typer.Option(False, "--ascii", help="Use plain ASCII markers instead of icons."),
):
    """Render the tree declared in TREE_FILE."""
    doc = _load(tree_file)
    opts = doc.render
    if attrs is not None:
        opts.show_attrs = attrs
    if max_depth is not None:
        opts.max_depth = max_depth
    if max_links is not None:
        opts.max_links = max_links
    if ascii_only:
        opts.icons_on = False

    console.print(f"[bold]{escape(doc.name)}[/]")
    console.print(build_rich_tree(doc.root, opts=opts))


@app.command()
def stats(tree_file: Path = typer.Argument(..., help="Path to the YAML tree file.", exists=True, file_okay=True, dir_okay=False, readable=True)):
    """Print node/edge counts, depth and label frequencies."""
    doc = _load(tree_file)
    graph = Graph([doc.root])
    nodes = graph.nodes()
    cyclic = graph.find_cycle() is not None

    table = Table(title=f"Tree '{doc.name}'", box=box.ROUNDED)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")
    table.add_row("Nodes", str(len(nodes)))
    table.add_row("Edges", str(len(graph.edges())))
    table.add_row("Depth", "cyclic" if cyclic else str(graph.depth()))
    console.print(table)

    labels = Table(title="Labels", box=box.ROUNDED)
    labels.add_column("Label", style="cyan")
    labels.add_column("Count", style="green", justify="right")
    for label, n in Counter(str(node.get_label()) for node in nodes).most_common():
        labels.add_row(label, str(n))
    console.print(labels)


@app.command()
def check(tree_file: Path = typer.Argument(..., help="Path to the YAML tree file.", exists=True, file_okay=True, dir_okay=False, readable=True)):
    """Exit with code 1 if the tree contains a cycle."""
    doc = _load(tree_file)
    cycle = Graph([doc.root]).find_cycle()
    if cycle is not None:
        path = " -> ".join(str(n.get_label()) for n in cycle)
        console.print(f"[bold red]Cycle found:[/] {escape(path)}")
        raise typer.Exit(code=1)
    console.print(f"[bold green]'{doc.name}' is acyclic.[/]")


if __name__ == "__main__":
    app()
