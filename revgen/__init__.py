"""revgen: labelled graph nodes for pattern-driven text generation.

Main components:
* `Node`: label + attribute store + identity-unique, value-queried relations
* `Graph`: whole-graph traversal, edges and cycle checks over nodes
* `Result`: explicit success/failure value for soft-rejected operations
* `load_tree` / `dump_tree`: declarative YAML trees
"""

# Version info
__version__ = "0.1.0"

# Core components
from revgen.core.node import Node, LabelError, MissingAttributeError, DEFAULT_LABEL
from revgen.core.graph import Graph, GraphEdge
from revgen.core.result import Result

# Rendering / IO
from revgen.utils.dag import RenderOptions, build_rich_tree, iter_nodes
from revgen.yaml_loader import load_tree, dump_tree

__all__ = [
    # Core classes
    "Node",
    "Graph",
    "GraphEdge",
    "Result",
    "LabelError",
    "MissingAttributeError",
    "DEFAULT_LABEL",

    # Rendering / IO
    "RenderOptions",
    "build_rich_tree",
    "iter_nodes",
    "load_tree",
    "dump_tree",
]
