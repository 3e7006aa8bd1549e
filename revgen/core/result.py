from __future__ import annotations

"""Outcome of a soft-validated node operation.

``Node.set_label`` never raises for a bad label; it hands back a
:class:`Result` instead, so a builder can branch on it
(``if not node.set_label(x): ...``) or escalate with ``unwrap()``.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

__all__ = ["Result"]


@dataclass(slots=True)
class Result(Generic[T]):
    """Accepted value, or the error explaining the rejection."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        # falsy on rejection, even when the accepted value itself is falsy
        return self.error is None

    @classmethod
    def success(cls, val: T) -> "Result[T]":
        return cls(value=val)

    @classmethod
    def failure(cls, err: Exception) -> "Result[T]":
        return cls(error=err)

    def value_or(self, default: T) -> T:
        """Return the accepted value, or *default* after a rejection."""
        return default if self.error is not None else self.value  # type: ignore[return-value]

    def unwrap(self) -> T:
        """Return the accepted value; re-raise the rejection error otherwise."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
