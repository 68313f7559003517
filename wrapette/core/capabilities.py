from __future__ import annotations

"""Unit capabilities.

A unit only has to expose ``load``. ``id``, ``place`` and ``editable`` are
optional get/set methods (no argument = get, one argument = set and return
self). The ``api`` class attribute tags special kinds of units.

Capabilities are probed once, when a unit is registered, and stored on its
:class:`~wrapette.core.flow.Registration`.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

__all__ = [
    "Loadable",
    "Identifiable",
    "Placeable",
    "Editable",
    "Capabilities",
    "WRAP",
    "CONTAINER",
]

WRAP = "wrap"
CONTAINER = "container"


@runtime_checkable
class Loadable(Protocol):
    def load(self, context: Mapping[str, Any]) -> Any: ...


@runtime_checkable
class Identifiable(Protocol):
    def id(self, *value: Any) -> Any: ...


@runtime_checkable
class Placeable(Protocol):
    def place(self, *value: Any) -> Any: ...


@runtime_checkable
class Editable(Protocol):
    def editable(self, *value: Any) -> Any: ...


def _has(unit: Any, name: str) -> bool:
    # runtime_checkable only checks presence; a plain ``id`` field must not count.
    return callable(getattr(unit, name, None))


@dataclass(frozen=True, slots=True)
class Capabilities:  # noqa: D101
    loadable: bool = False
    identifiable: bool = False
    placeable: bool = False
    editable: bool = False
    api: Optional[str] = None

    @property
    def is_container(self) -> bool:
        return self.api == CONTAINER

    @property
    def is_wrap(self) -> bool:
        return self.api == WRAP

    @classmethod
    def probe(cls, unit: Any) -> "Capabilities":  # noqa: D401
        """Inspect *unit* once and return its capability record."""
        api = getattr(unit, "api", None)
        return cls(
            loadable=_has(unit, "load"),
            identifiable=_has(unit, "id"),
            placeable=_has(unit, "place"),
            editable=_has(unit, "editable"),
            api=api if isinstance(api, str) else None,
        )
