from __future__ import annotations

"""Wrap – composite unit that loads its children and merges their results.

Children are registered into one of three groups (see :mod:`.flow`)::

    page = (
        Wrap()
        .defaults({"lang": "en"})
        .parallel("header", header)
        .parallel("body", body)
        .series("comments", comments)
        .eventually(analytics)        # keyless: fields merged into results
    )
    results = page.run({"user": "ada"})

A Wrap is itself a unit, so Wraps nest.
"""

from functools import partial
from logging import Logger, getLogger
from typing import Any, Callable, Collection, Dict, Iterator, List, Mapping, Optional

import anyio

from .capabilities import WRAP, Capabilities
from .executor import Executor
from .flow import Flow, Group, Registration
from .result import Done, Result
from .unit import UNSET, Unit, accessor
from ..utils.events import EventBus, AttributeChanged, PreLoad
from ..utils.merge import as_mapping, fill_missing

__all__ = ["Wrap"]


def _fresh(value: Any) -> Any:
    # plain containers are copied per load; anything else is shared as-is
    if isinstance(value, (dict, list, set)):
        return value.copy()
    return value


def _grouped(group: Group) -> Callable[..., "Wrap"]:
    def _method(self: "Wrap", key: Any, unit: Any = None) -> "Wrap":
        return self.register(key, unit, group)

    _method.__name__ = group.value
    _method.__doc__ = f"Register *unit* (optionally under *key*) in the {group.value} group."
    return _method


class Wrap(Unit):  # noqa: D101
    api = WRAP

    def __init__(self, key: Any = None, unit: Any = None, *, logger: Logger | None = None):
        super().__init__()
        self.log = logger or getLogger("wrapette.wrap")
        self.events = EventBus(logger=self.log)
        self.flow = Flow()
        self.containers: List[Any] = []
        self.container: Any = None
        self.content: Dict[str, Any] = {}
        self._defaults: Dict[str, Any] = {}
        if key is not None:
            self.parallel(key, unit)

    # -------------------------------------------------- #
    # Plugins & events
    # -------------------------------------------------- #

    def use(self, plugin: Callable[["Wrap"], Any]) -> "Wrap":
        """Run ``plugin(self)`` and return self."""
        plugin(self)
        return self

    def on(self, event_type: type, handler: Callable[[Any], None] | None = None):
        """Subscribe *handler* to this Wrap's *event_type* events.

        Without *handler* a decorator is returned.
        """
        if handler is None:
            return self.events.subscribe(event_type)
        self.events.subscribe(event_type, handler)
        return self

    # -------------------------------------------------- #
    # Attributes
    # -------------------------------------------------- #

    key = accessor("key")
    selector = accessor("selector")
    prepend = accessor("prepend")
    append = accessor("append")
    el = accessor("el")

    def _changed(self, attribute: str, value: Any) -> None:
        self.events.publish(AttributeChanged(name=attribute, value=value))

    def editable(self, value: Any = UNSET):
        """Get or set ``editable``; a new value is pushed to every child."""
        if value is UNSET:
            return self._editable
        self._editable = value
        self._changed("editable", value)
        for reg in self.flow:
            if reg.caps.editable:
                reg.unit.editable(value)
        return self

    def place(self, value: Any = UNSET):
        """Get or set ``place``; children whose place says ``force`` keep theirs."""
        if value is UNSET:
            return self._place
        self._place = value
        self._changed("place", value)
        for reg in self.flow:
            if not reg.caps.placeable:
                continue
            existing = reg.unit.place()
            if isinstance(existing, Collection) and "force" in existing:
                continue
            reg.unit.place(value)
        return self

    def cid(self, value: Any = UNSET):
        """Get or set the id of the designated container."""
        if self.container is None:
            self.log.debug("can't set cid, because wrap has got no container")
            return None if value is UNSET else self
        if value is UNSET:
            return self.container.id()
        self.container.id(value)
        return self

    def defaults(self, key: str | Mapping[str, Any], value: Any = UNSET):
        """Read one default, set one, or fill missing ones from a mapping."""
        if isinstance(key, Mapping):
            fill_missing(self._defaults, key)
            return self
        if value is UNSET:
            return self._defaults.get(key)
        self._defaults[key] = value
        return self

    # -------------------------------------------------- #
    # Registration
    # -------------------------------------------------- #

    parallel = _grouped(Group.PARALLEL)
    series = _grouped(Group.SERIES)
    eventually = _grouped(Group.EVENTUALLY)

    def register(self, key: Any, unit: Any = None, group: Group | str = Group.PARALLEL) -> "Wrap":
        """Register *unit* under *key* in *group*.

        With a single argument it is taken as a keyless unit. A mapping of
        units is bulk-registered.
        """
        if unit is None:
            unit, key = key, None
        if unit is None:
            raise TypeError("Wrap: no unit provided")

        caps = Capabilities.probe(unit)
        if not caps.loadable:
            if isinstance(unit, Mapping):
                return self.bulk(unit, group)
            self.log.warning("ignoring incompatible unit %r (key=%r): no load()", unit, key)
            return self
        return self.add(key, unit, group, caps)

    def bulk(self, units: Mapping[str, Any], group: Group | str = Group.PARALLEL) -> "Wrap":
        """Register every loadable value of *units* under its mapping key."""
        for k, obj in units.items():
            caps = Capabilities.probe(obj)
            if not caps.loadable:
                self.log.debug("bulk registration skipped %r: no load()", k)
                continue
            self.add(k, obj, group, caps)
        return self

    def add(self, key: Optional[str], unit: Any, group: Group | str = Group.PARALLEL, caps: Capabilities | None = None) -> "Wrap":
        """Append *unit* to *group*, collecting containers and assigning ids."""
        caps = caps or Capabilities.probe(unit)
        if not caps.loadable:
            self.log.warning("ignoring incompatible unit %r (key=%r): no load()", unit, key)
            return self

        if caps.api is None:
            self.log.debug("api field is missing on the unit: %s", key)

        if caps.is_container:
            if self.container is None:
                self.container = unit
            self.containers.append(unit)
        elif caps.is_wrap:
            self.containers.extend(unit.containers)

        # containers keep their own id
        if caps.identifiable and not caps.is_container and key and not unit.id():
            unit.id(key)

        self.flow.add(group, key, unit, caps)
        return self

    def registrations(self) -> List[Registration]:
        return list(self.flow)

    def __iter__(self) -> Iterator[Registration]:
        return iter(self.flow)

    def __len__(self) -> int:
        return len(self.flow)

    # -------------------------------------------------- #
    # Loading
    # -------------------------------------------------- #

    async def load(
        self,
        context: Mapping[str, Any] | Done | None = None,
        done: Done | None = None,
        *,
        timeout: float | None = None,
    ) -> Optional[Dict[str, Any]]:
        """Load all children and return the merged results.

        With *done*, ``done(error, results)`` is called exactly once and
        errors are not raised; otherwise the first child error is raised.
        """
        if done is None and callable(context):
            context, done = None, context

        results: Dict[str, Any] = {}
        self.content = results
        try:
            fill_missing(results, as_mapping(context))
            fill_missing(results, {k: _fresh(v) for k, v in self._defaults.items()})
        except Exception as exc:  # noqa: BLE001 – reported like a child failure
            outcome = Result.failure(exc)
        else:
            self.events.publish(PreLoad(wrap_id=self._id))
            outcome = await Executor(self.flow, self.events, self.log).run(results, timeout=timeout)
        if done is not None:
            return outcome.deliver(done)
        return outcome.unwrap()

    def run(self, context: Mapping[str, Any] | None = None, *, timeout: float | None = None) -> Dict[str, Any]:
        """Blocking variant of :meth:`load` for synchronous callers."""
        return anyio.run(partial(self.load, context, timeout=timeout))

    def __repr__(self) -> str:
        sizes = ", ".join(f"{g.value}={len(m)}" for g, m in self.flow.groups.items())
        return f"Wrap(id={self._id!r}, {sizes})"
