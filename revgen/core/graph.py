from __future__ import annotations
"""Whole-graph helpers over :class:`~revgen.core.node.Node` relations.

Nodes only know their own outgoing links.  :class:`Graph` gives walkers a
graph-level view: an identity-indexed node list (arena-style positions),
the edge list, and cycle checks, none of which the node type does itself.
"""
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set

from revgen.core.node import Node

__all__ = ["GraphEdge", "Graph"]


@dataclass(frozen=True, eq=False)
class GraphEdge:  # noqa: D101
    src: Node
    dst: Node


class Graph:  # noqa: D101
    def __init__(self, roots: Optional[List[Node]] = None):
        self.roots: List[Node] = list(roots) if roots else []

    # -------------------------------------------------- #
    def add_root(self, node: Node) -> "Graph":
        self.roots.append(node)
        return self

    # -------------------------------------------------- #
    def _walk(self) -> Iterator[Node]:
        seen: Set[int] = set()
        for root in self.roots:
            stack = [root]
            while stack:
                n = stack.pop()
                if id(n) in seen:
                    continue
                seen.add(id(n))
                yield n
                # reversed so children come out in insertion order
                stack.extend(reversed(n.relations()))

    def nodes(self) -> List[Node]:
        """Return nodes depth-first, pre-order, each instance once."""
        return list(self._walk())

    def __len__(self) -> int:
        return len(self.nodes())

    # -------------------------------------------------- #
    def edges(self) -> List[GraphEdge]:
        es: List[GraphEdge] = []
        for node in self.nodes():
            for child in node:
                es.append(GraphEdge(node, child))
        return es

    # -------------------------------------------------- #
    def index_of(self, node: Node) -> int:
        """Position of *node* (by identity) in :meth:`nodes` order."""
        for i, n in enumerate(self._walk()):
            if n is node:
                return i
        raise ValueError(f"Node '{node.get_label()}' is not reachable from the roots")

    # -------------------------------------------------- #
    def find_cycle(self) -> Optional[List[Node]]:
        """Return one cycle as a node path (first node repeated last), or None."""
        visited: Set[int] = set()
        path: List[Node] = []
        on_path: Dict[int, int] = {}

        def _visit(n: Node) -> Optional[List[Node]]:
            if id(n) in on_path:
                return path[on_path[id(n)]:] + [n]
            if id(n) in visited:
                return None
            on_path[id(n)] = len(path)
            path.append(n)
            for c in n:
                found = _visit(c)
                if found is not None:
                    return found
            path.pop()
            del on_path[id(n)]
            visited.add(id(n))
            return None

        for r in self.roots:
            found = _visit(r)
            if found is not None:
                return found
        return None

    def validate_dag(self) -> None:
        """Ensure the graph has no cycles. Raises ValueError otherwise."""
        cycle = self.find_cycle()
        if cycle is not None:
            raise ValueError(f"Cycle detected at node '{cycle[-1].get_label()}'")

    # -------------------------------------------------- #
    def depth(self) -> int:
        """Longest root-to-leaf path, counted in nodes (0 for an empty graph)."""
        self.validate_dag()
        memo: Dict[int, int] = {}

        def _depth(n: Node) -> int:
            if id(n) not in memo:
                memo[id(n)] = 1 + max((_depth(c) for c in n), default=0)
            return memo[id(n)]

        return max((_depth(r) for r in self.roots), default=0)
