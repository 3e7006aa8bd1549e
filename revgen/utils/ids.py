from __future__ import annotations

"""revgen.utils.ids
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Identifier formatting for serialized trees.

:func:`snake_case` normalises labels, :func:`unique_id` makes them unique
within one dump so shared and cyclic nodes can be referenced by id.
"""

import re
from typing import Any, Set

__all__ = ["snake_case", "unique_id"]

_PATTERN = re.compile(r"[^a-zA-Z0-9]+")


def snake_case(text: str) -> str:
    """Return *text* converted to ``snake_case``.

    * non‑alphanumeric chars become ``_``
    * multiple underscores are squeezed
    * leading/trailing underscores are stripped
    * everything lower‑cased
    """

    s = _PATTERN.sub("_", text)
    s = re.sub(r"_+", "_", s)
    return s.strip("_").lower()


def unique_id(label: Any, taken: Set[str]) -> str:
    """Return an id derived from *label* that is not in *taken* and record it.

    ``None`` or labels that normalise to nothing fall back to ``node``; clashes
    get a numeric suffix (``group``, ``group_2``, ``group_3`` …).
    """
    base = snake_case(str(label)) if label is not None else ""
    base = base or "node"
    candidate = base
    n = 2
    while candidate in taken:
        candidate = f"{base}_{n}"
        n += 1
    taken.add(candidate)
    return candidate
