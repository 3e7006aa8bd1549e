from __future__ import annotations
"""Rich-backed logging and tree printing for revgen.

Plain log records go through a :class:`rich.logging.RichHandler`; node graphs
are printed as :class:`rich.tree.Tree` renderables on the shared ``console``.
"""
from logging import Logger, getLogger, INFO, DEBUG, WARNING, ERROR, basicConfig
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

console = Console()

__all__ = [
    "console",
    "get",
    "log",
    "show_tree",
]

_LEVEL_MAP = {
    "info": INFO,
    "debug": DEBUG,
    "warning": WARNING,
    "error": ERROR,
}

# Configure root once with Rich handler for plain log messages
basicConfig(
    level=INFO,
    format="%(message)s",
    datefmt="%H:%M:%S",
    handlers=[RichHandler(rich_tracebacks=True, markup=False)],
)

log: Logger = getLogger("revgen")


def get(level: str = "info") -> Logger:
    """Return the revgen logger set to *level* (str)."""
    lvl = _LEVEL_MAP.get(level.lower(), INFO)
    lg = getLogger("revgen")
    lg.setLevel(lvl)
    return lg


def show_tree(root: Any, opts: Any = None) -> None:
    """Print the relation tree below *root* on the shared console."""
    from revgen.utils.dag import build_rich_tree  # local import avoids a core <-> utils cycle

    console.print(build_rich_tree(root, opts=opts))
