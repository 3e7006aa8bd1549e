from __future__ import annotations

"""Base Node class for revgen generation trees.

A :class:`Node` carries three pieces of state:

* a scalar *label* (``str``, ``int``, ``float``, ``bool`` or ``None``),
* an ordered attribute store (generation parameters: bounds, counts, literals),
* an ordered set of outgoing relations to other nodes.

Relations are inserted by **identity** (the same instance is stored once) but
queried and removed by **value** (``==`` compares label, attrs and links
recursively).  The two notions are exposed as separately named operations,
:meth:`Node.attach_ref` and :meth:`Node.remove_equal_to`; ``attach`` and
``detach`` are their chainable forms.

Relations are non-owning references, so cyclic graphs are fine: nothing here
walks the graph except equality, which is iterative and cycle-safe.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, Iterator, List, Mapping, Set, Tuple, Union

from revgen.core.result import Result
from revgen.utils.logging import log

__all__ = [
    "Node",
    "Label",
    "LabelError",
    "MissingAttributeError",
    "DEFAULT_LABEL",
    "is_valid_label",
]

Label = Union[str, int, float, bool, None]

DEFAULT_LABEL = "node"

_SCALARS = (str, int, float, bool)
_MISSING = object()


class LabelError(TypeError):
    """Raised (or carried in a failed Result) for a non-scalar label."""


class MissingAttributeError(KeyError):
    """Attribute lookup on a key the node does not hold."""


def is_valid_label(value: Any) -> bool:
    """Return True if *value* is a scalar or ``None``."""
    return value is None or isinstance(value, _SCALARS)


def _nodes_equal(a: "Node", b: "Node") -> bool:
    """Structural comparison of two node graphs.

    Walks node pairs with an explicit stack, following links and node-valued
    attributes alike.  A pair seen before is assumed equal, so cyclic graphs
    (including back-pointers stored as attributes) terminate and deep chains
    do not hit the recursion limit.
    """
    seen: Set[Tuple[int, int]] = set()
    stack: List[Tuple[Node, Node]] = [(a, b)]
    while stack:
        x, y = stack.pop()
        if x is y:
            continue
        pair = (id(x), id(y))
        if pair in seen:
            continue
        seen.add(pair)

        if x._label != y._label or len(x._links) != len(y._links):
            return False
        if x._attrs.keys() != y._attrs.keys():
            return False
        for key, xv in x._attrs.items():
            yv = y._attrs[key]
            if isinstance(xv, Node) and isinstance(yv, Node):
                stack.append((xv, yv))
            elif xv != yv:
                return False
        stack.extend(zip(x._links, y._links))
    return True


class Node:
    """Labelled graph unit with an attribute store and outgoing relations."""

    __hash__ = None  # mutable, compared by value

    def __init__(self, label: Label = DEFAULT_LABEL) -> None:
        self._label: Label = DEFAULT_LABEL
        self._attrs: Dict[Hashable, Any] = {}
        self._links: List[Node] = []
        self._link_ids: Set[int] = set()
        self._cursor = 0

        res = self.set_label(label)
        if not res.ok:
            log.warning("Ignoring invalid node label %r, keeping '%s'", label, DEFAULT_LABEL)

    # ------------------------------------------------------------------ #
    # Label
    # ------------------------------------------------------------------ #

    @property
    def label(self) -> Label:
        return self._label

    def get_label(self) -> Label:
        """Return the node's label."""
        return self._label

    def set_label(self, value: Any) -> Result[Label]:
        """Replace the label with *value* if it is a scalar or ``None``.

        Returns a successful :class:`Result` holding the new label, or a failed
        one carrying a :class:`LabelError`; the old label is kept on failure.
        """
        if not is_valid_label(value):
            log.debug("Rejected label of type %s on node '%s'", type(value).__name__, self._label)
            return Result.failure(
                LabelError(f"label must be a scalar or None, got {type(value).__name__}")
            )
        self._label = value
        return Result.success(value)

    # ------------------------------------------------------------------ #
    # Relation set
    # ------------------------------------------------------------------ #

    def attach_ref(self, node: "Node") -> bool:
        """Insert *node* by identity. Return True if a new entry was added."""
        if not isinstance(node, Node):
            raise TypeError(f"can only attach Node instances, got {type(node).__name__}")
        if id(node) in self._link_ids:
            return False
        self._links.append(node)
        self._link_ids.add(id(node))
        return True

    def remove_equal_to(self, node: "Node") -> int:
        """Remove every relation value-equal to *node*; return how many went."""
        kept: List[Node] = []
        removed = 0
        for linked in self._links:
            if linked == node:
                removed += 1
            else:
                kept.append(linked)
        if removed:
            self._links = kept
            self._link_ids = {id(n) for n in kept}
        return removed

    def attach(self, node: "Node") -> "Node":
        """Attach *node* (identity-unique) and return *self* for chaining."""
        self.attach_ref(node)
        return self

    def detach(self, node: "Node") -> "Node":
        """Detach all relations value-equal to *node* and return *self*."""
        self.remove_equal_to(node)
        return self

    def contains(self, node: "Node") -> bool:
        """True if some relation is value-equal to *node*."""
        return any(linked == node for linked in self._links)

    def count(self) -> int:
        return len(self._links)

    def relations(self) -> List["Node"]:
        """Return a snapshot list of the relations in traversal order."""
        return list(self._links)

    def map(self, fn: Callable[["Node"], Any]) -> None:
        """Call *fn* once per relation for its side effects.

        Return values are discarded; use :meth:`relations` to collect results.
        *fn* must not attach/detach on this same node.
        """
        for linked in self._links:
            fn(linked)

    # Python protocols -------------------------------------------------- #

    def __len__(self) -> int:
        return len(self._links)

    def __bool__(self) -> bool:
        # A leaf node is still a node.
        return True

    def __iter__(self) -> Iterator["Node"]:
        """Iterate over a snapshot of the relations (restartable)."""
        return iter(list(self._links))

    def __contains__(self, node: object) -> bool:
        return isinstance(node, Node) and self.contains(node)

    # Explicit cursor --------------------------------------------------- #
    # The cursor indexes the live relation list.  Resuming it after an
    # attach/detach without rewind() may skip or repeat entries.

    def rewind(self) -> None:
        self._cursor = 0

    def valid(self) -> bool:
        return 0 <= self._cursor < len(self._links)

    def current(self) -> "Node":
        if not self.valid():
            raise IndexError("cursor is past the last relation")
        return self._links[self._cursor]

    def key(self) -> int:
        return self._cursor

    def next(self) -> None:
        self._cursor += 1

    # ------------------------------------------------------------------ #
    # Attribute store
    # ------------------------------------------------------------------ #

    @property
    def attrs(self) -> Mapping[Hashable, Any]:
        """Read-only view of the attribute store."""
        return MappingProxyType(self._attrs)

    def get(self, key: Hashable, default: Any = _MISSING) -> Any:
        """Return attribute *key*.

        Raises :class:`MissingAttributeError` when absent, unless *default*
        is given explicitly.
        """
        try:
            return self._attrs[key]
        except KeyError:
            if default is not _MISSING:
                return default
            raise MissingAttributeError(key) from None

    def set(self, key: Hashable, value: Any) -> "Node":
        self._attrs[key] = value
        return self

    def has(self, key: Hashable) -> bool:
        return key in self._attrs

    def unset(self, key: Hashable) -> None:
        """Remove attribute *key*; missing keys are ignored."""
        self._attrs.pop(key, None)

    def __getitem__(self, key: Hashable) -> Any:
        return self.get(key)

    def __setitem__(self, key: Hashable, value: Any) -> None:
        self._attrs[key] = value

    def __delitem__(self, key: Hashable) -> None:
        self.unset(key)

    # ------------------------------------------------------------------ #
    # Equality / repr
    # ------------------------------------------------------------------ #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return _nodes_equal(self, other)

    def __repr__(self) -> str:
        keys = ", ".join(repr(k) for k in self._attrs)
        return f"Node(label={self._label!r}, attrs=[{keys}], links={len(self._links)})"
