"""revgen utilities."""

from .ids import snake_case, unique_id

__all__ = [
    "snake_case",
    "unique_id",
]
