from __future__ import annotations
"""YAML ⇄ node tree conversion.

A declarative way to describe generation trees.  Example YAML:

```yaml
name: digits
render:
  max_depth: 3
tree:
  label: sequence
  links:
    - id: digit
      label: range
      attrs: {lo: 0, hi: 9}
    - label: repeat
      attrs: {min: 1, max: 3}
      links:
        - ref: digit        # same instance as above
```

Usage:
    from revgen.yaml_loader import load_tree
    root = load_tree("digits.yml")

Nodes declared with an ``id`` can be referenced later with ``{ref: id}``;
references resolve to the same :class:`Node` instance, which is how shared
children and cycles are expressed.  A ``ref`` may point at an ancestor that
is still being built.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

import yaml
from yaml.representer import RepresenterError
from jsonschema import validate as _js_validate
from pydantic import BaseModel, ConfigDict

from revgen.core.graph import Graph
from revgen.core.node import Node, Label
from revgen.utils.dag import RenderOptions
from revgen.utils.ids import unique_id
from revgen.utils.logging import log

__all__ = [
    "NodeSpec",
    "RefSpec",
    "TreeDocument",
    "build_node",
    "load_document",
    "load_tree",
    "to_spec",
    "dump_tree",
]


# --------------------------------------------------------------------------- #
# Spec models
# --------------------------------------------------------------------------- #

class RefSpec(BaseModel):
    """Pointer to a node declared elsewhere with the same ``id``."""

    model_config = ConfigDict(extra="forbid")

    ref: str


class NodeSpec(BaseModel):
    """Declarative form of a :class:`Node`."""

    model_config = ConfigDict(extra="forbid")

    id: Optional[str] = None
    label: Label = "node"
    attrs: Dict[Any, Any] = {}
    links: List[Union["NodeSpec", RefSpec]] = []


NodeSpec.model_rebuild()


@dataclass
class TreeDocument:  # noqa: D101
    root: Node
    name: str = "tree"
    render: RenderOptions = field(default_factory=RenderOptions)


# --------------------------------------------------------------------------- #
# Building
# --------------------------------------------------------------------------- #

def build_node(spec: NodeSpec | Dict[str, Any]) -> Node:
    """Instantiate the node graph described by *spec*."""
    if not isinstance(spec, NodeSpec):
        spec = NodeSpec.model_validate(spec)

    by_id: Dict[str, Node] = {}
    wiring: List[tuple[Node, List[Node | RefSpec]]] = []

    def _create(s: NodeSpec) -> Node:
        node = Node(s.label)
        if s.id is not None:
            if s.id in by_id:
                raise ValueError(f"Duplicate node id '{s.id}'")
            by_id[s.id] = node
        for k, v in s.attrs.items():
            node[k] = v
        wiring.append((node, [c if isinstance(c, RefSpec) else _create(c) for c in s.links]))
        return node

    root = _create(spec)

    # Second pass: every id is known now, so refs may point anywhere.
    for node, children in wiring:
        for child in children:
            if isinstance(child, RefSpec):
                if child.ref not in by_id:
                    raise KeyError(f"Unknown node reference '{child.ref}'")
                child = by_id[child.ref]
            node.attach(child)
    return root


def load_document(path: str | Path) -> TreeDocument:
    """Load YAML file at *path* into a :class:`TreeDocument`."""
    data = yaml.safe_load(Path(path).read_text())
    _js_validate(instance=data, schema=_SCHEMA)
    root = build_node(data["tree"])
    render = RenderOptions(**data.get("render", {}))
    name = data.get("name", Path(path).stem)
    log.debug("Loaded tree '%s' from %s", name, path)
    return TreeDocument(root=root, name=name, render=render)


def load_tree(path: str | Path) -> Node:
    """Load only the root node from the YAML file at *path*."""
    return load_document(path).root


# --------------------------------------------------------------------------- #
# Dumping
# --------------------------------------------------------------------------- #

def to_spec(root: Node) -> NodeSpec:
    """Return the :class:`NodeSpec` describing the graph below *root*.

    Nodes reachable more than once get an ``id`` and later occurrences become
    :class:`RefSpec` entries.
    """
    counts: Dict[int, int] = {}

    def _count(n: Node) -> None:
        counts[id(n)] = counts.get(id(n), 0) + 1
        if counts[id(n)] == 1:
            for c in n:
                _count(c)

    _count(root)

    taken: Set[str] = set()
    ids: Dict[int, str] = {}

    def _spec(n: Node) -> NodeSpec | RefSpec:
        if id(n) in ids:
            return RefSpec(ref=ids[id(n)])
        node_id = None
        if counts[id(n)] > 1:
            node_id = unique_id(n.get_label(), taken)
            ids[id(n)] = node_id
        return NodeSpec(
            id=node_id,
            label=n.get_label(),
            attrs=dict(n.attrs),
            links=[_spec(c) for c in n],
        )

    return _spec(root)  # type: ignore[return-value]


def _check_dumpable(root: Node) -> None:
    for node in Graph([root]).nodes():
        for key, value in node.attrs.items():
            try:
                yaml.safe_dump({key: value})
            except RepresenterError:
                raise ValueError(
                    f"Attribute {key!r} on node '{node.get_label()}' is not YAML-serializable "
                    f"({type(value).__name__})"
                ) from None


def dump_tree(root: Node, path: str | Path, *, name: str | None = None) -> Path:
    """Write the graph below *root* to *path* as YAML and return the path.

    Attribute keys and values must be plain YAML data (scalars, lists, dicts).
    Nodes stored as attribute values are not serialized; such a value raises
    ``ValueError`` naming the key, and nothing is written.
    """
    _check_dumpable(root)
    doc: Dict[str, Any] = {}
    if name is not None:
        doc["name"] = name
    doc["tree"] = to_spec(root).model_dump(exclude_defaults=True)
    out = Path(path)
    out.write_text(yaml.safe_dump(doc, sort_keys=False, allow_unicode=True))
    return out


# --------------------------------------------------------------------------- #
# Minimal JSON Schema for YAML files
# --------------------------------------------------------------------------- #

_SCALAR = {"type": ["string", "number", "boolean", "null"]}

_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["tree"],
    "properties": {
        "name": {"type": "string"},
        "render": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "show_attrs": {"type": "boolean"},
                "max_depth": {"type": ["integer", "null"], "minimum": 0},
                "max_links": {"type": ["integer", "null"], "minimum": 0},
                "icons_on": {"type": "boolean"},
            },
        },
        "tree": {"$ref": "#/$defs/node"},
    },
    "$defs": {
        "node": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "id": {"type": "string"},
                "label": _SCALAR,
                "attrs": {"type": "object"},
                "links": {
                    "type": "array",
                    "items": {
                        "anyOf": [
                            {"$ref": "#/$defs/node"},
                            {
                                "type": "object",
                                "required": ["ref"],
                                "additionalProperties": False,
                                "properties": {"ref": {"type": "string"}},
                            },
                        ]
                    },
                },
            },
        },
    },
}
