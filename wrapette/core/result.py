from __future__ import annotations
"""Outcome of one load pass: the accumulator or the first error.

The executor never raises child errors; it hands back a ``Result`` and the
Wrap decides whether to re-raise or deliver to a ``done(error, results)``
callback.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

__all__ = ["Result", "Done"]

Done = Callable[[Optional[BaseException], Any], Any]


@dataclass(slots=True)
class Result(Generic[T]):  # noqa: D101
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:  # noqa: D401
        """Return True when *error* is None."""
        return self.error is None

    @staticmethod
    def success(val: T) -> "Result[T]":  # noqa: D401
        return Result(value=val)

    @staticmethod
    def failure(err: BaseException) -> "Result[None]":  # noqa: D401
        return Result(error=err)

    def unwrap(self) -> T:  # noqa: D401
        """Return *value* or raise *error* if present."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def deliver(self, done: Done) -> Optional[T]:
        """Invoke ``done(error, value)`` once; the value is withheld on failure."""
        if self.error is not None:
            done(self.error, None)
            return None
        done(None, self.value)
        return self.value
