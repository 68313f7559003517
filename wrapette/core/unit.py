from __future__ import annotations

"""Base unit class and adapters for plain and callback-style loaders.

Any object with a ``load(context)`` method can be registered in a Wrap; the
classes here only save boilerplate. ``unit`` and ``from_callback`` are the
function-first helpers.
"""

from typing import Any, Callable, List, Mapping, Optional

import anyio

from .capabilities import CONTAINER
from .result import Result

__all__ = [
    "UNSET",
    "accessor",
    "Unit",
    "FunctionUnit",
    "Container",
    "CallbackUnit",
    "unit",
    "from_callback",
]


class _Unset:  # noqa: D101 – sentinel for get/set-by-arity accessors
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def accessor(attribute: str) -> Callable[..., Any]:  # noqa: D401
    """Return a get/set method for *attribute* stored as ``_<attribute>``.

    Without argument the current value is returned; with one the value is
    stored, ``self._changed(attribute, value)`` is called and ``self`` returned.
    """
    slot = "_" + attribute

    def _method(self, value: Any = UNSET):
        if value is UNSET:
            return getattr(self, slot, None)
        setattr(self, slot, value)
        self._changed(attribute, value)
        return self

    _method.__name__ = attribute
    _method.__doc__ = f"Get or set ``{attribute}``."
    return _method


class Unit:  # noqa: D101 – minimalist base class
    api: str = "unit"

    def __init__(self, *, id: Optional[str] = None, place: Optional[str] = None, editable: Any = None):
        self._id = id
        self._place = place
        self._editable = editable

    id = accessor("id")
    place = accessor("place")
    editable = accessor("editable")

    def _changed(self, attribute: str, value: Any) -> None:
        """Hook run after an accessor stored a new value."""

    def load(self, context: Mapping[str, Any]) -> Any:
        """Return this unit's result (or an awaitable of it) for *context*."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"


class FunctionUnit(Unit):
    """Unit whose load is a plain or ``async`` function of the context."""

    def __init__(self, fn: Callable[[Mapping[str, Any]], Any], *, id: Optional[str] = None, **kwargs: Any):
        super().__init__(id=id, **kwargs)
        self.fn = fn
        self.name = getattr(fn, "__name__", type(self).__name__)

    def load(self, context: Mapping[str, Any]) -> Any:
        return self.fn(context)


class Container(FunctionUnit):  # noqa: D101
    api = CONTAINER


class CallbackUnit(Unit):
    """Adapter for loaders written as ``fn(context, callback)``.

    ``callback(error, result)`` must be called exactly once, either before
    ``fn`` returns or later from the same event loop.
    """

    def __init__(self, fn: Callable[[Mapping[str, Any], Callable[..., None]], Any], *, id: Optional[str] = None, **kwargs: Any):
        super().__init__(id=id, **kwargs)
        self.fn = fn
        self.name = getattr(fn, "__name__", type(self).__name__)

    async def load(self, context: Mapping[str, Any]) -> Any:
        settled = anyio.Event()
        outcome: List[Result[Any]] = []

        def _callback(error: Any = None, result: Any = None) -> None:
            if outcome:
                raise RuntimeError(f"load callback of {self.name!r} invoked more than once")
            # falsy error values (False, 0, "") mean success
            if not error:
                error = None
            elif not isinstance(error, BaseException):
                error = RuntimeError(str(error))
            outcome.append(Result(value=result, error=error))
            settled.set()

        self.fn(context, _callback)
        await settled.wait()
        return outcome[0].unwrap()


# Convenience helpers ------------------------------------------------------- #

def unit(fn: Callable[..., Any] | None = None, *, id: Optional[str] = None, container: bool = False):  # noqa: D401
    """Return a :class:`FunctionUnit` from *fn*; usable bare or with options."""

    def _wrap(func: Callable[..., Any]) -> FunctionUnit:
        cls = Container if container else FunctionUnit
        return cls(func, id=id)

    if fn is not None:
        return _wrap(fn)
    return _wrap


def from_callback(fn: Callable[..., Any], *, id: Optional[str] = None) -> CallbackUnit:  # noqa: D401
    """Return a :class:`CallbackUnit` around callback-style *fn*."""
    return CallbackUnit(fn, id=id)
