from __future__ import annotations

"""Tree helpers for node graphs (no side-effects).

iter_nodes(root) yields (depth, node) depth-first.
build_rich_tree(root) returns a Rich *Tree* ready for printing.

Both expand every node instance once; a node reached again (shared child or
cycle) is reported but not descended into.
"""
from dataclasses import dataclass
from typing import Iterator, Optional, Set, Tuple

from rich.markup import escape
from rich.tree import Tree

from revgen.core.node import Node

__all__ = [
    "RenderOptions",
    "iter_nodes",
    "build_rich_tree",
]

_ICONS = {"node": "◆ ", "leaf": "◇ ", "revisit": "↺ "}
_ASCII = {"node": "* ", "leaf": "- ", "revisit": "^ "}


@dataclass
class RenderOptions:  # noqa: D101
    show_attrs: bool = True
    max_depth: Optional[int] = None
    max_links: Optional[int] = None
    icons_on: bool = True


# --------------------------------------------------------------------------- #
# Core traverser
# --------------------------------------------------------------------------- #

def iter_nodes(root: Node) -> Iterator[Tuple[int, Node]]:
    """Yield *(depth, node)* for *root* and everything below it (DFS)."""
    seen: Set[int] = set()

    def _walk(node: Node, depth: int):
        yield depth, node
        if id(node) in seen:
            return
        seen.add(id(node))
        for child in node:
            yield from _walk(child, depth + 1)

    yield from _walk(root, 0)


# --------------------------------------------------------------------------- #
# Rich tree builder
# --------------------------------------------------------------------------- #

def _format_label(node: Node, opts: RenderOptions, kind: str) -> str:
    icons = _ICONS if opts.icons_on else _ASCII
    text = f"{icons[kind]}[cyan]{escape(str(node.get_label()))}[/]"
    if opts.show_attrs and node.attrs and kind != "revisit":
        pairs = ", ".join(f"{k}={v!r}" for k, v in node.attrs.items())
        text += f" [dim]{escape(pairs)}[/]"
    return text


def build_rich_tree(root: Node, opts: RenderOptions | None = None) -> Tree:
    """Return a *rich.tree.Tree* visualisation of the graph below *root*."""
    opts = opts or RenderOptions()
    seen: Set[int] = {id(root)}
    tree = Tree(_format_label(root, opts, "node" if len(root) else "leaf"))

    def _add(parent: Tree, node: Node, depth: int):
        children = node.relations()
        if opts.max_depth is not None and depth >= opts.max_depth:
            if children:
                parent.add("[dim]…[/]")
            return
        shown = children if opts.max_links is None else children[: opts.max_links]
        for child in shown:
            if id(child) in seen:
                parent.add(_format_label(child, opts, "revisit"))
                continue
            seen.add(id(child))
            branch = parent.add(_format_label(child, opts, "node" if len(child) else "leaf"))
            _add(branch, child, depth + 1)
        hidden = len(children) - len(shown)
        if hidden:
            parent.add(f"[dim]… +{hidden} more[/]")

    _add(tree, root, 0)
    return tree
