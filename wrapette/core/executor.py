from __future__ import annotations
"""Load executor – drives one Wrap load pass over a Flow.

Each unit's ``load(results)`` is awaited (plain return values are accepted
too) and its result folded into the shared *results* mapping:

* keyed unit   → ``results[key] = result``
* keyless unit → result fields merged, existing keys kept

A ``ChildLoaded`` event follows every fold, ``GroupFinished`` every group and
``PostLoad`` a successful pass.
"""
import inspect
from logging import Logger, getLogger
from typing import Any, Dict

from .flow import Flow, Group, Registration
from .result import Result
from ..utils.events import EventBus, ChildLoaded, GroupFinished, PostLoad
from ..utils.merge import as_mapping, fill_missing

__all__ = ["Executor"]


class Executor:  # noqa: D101
    def __init__(self, flow: Flow, bus: EventBus | None = None, logger: Logger | None = None):
        self.flow = flow
        self.bus = bus if bus is not None else EventBus()
        self.log = logger or getLogger("wrapette.executor")

    # ------------------------------------------------------------------ #
    async def run(self, results: Dict[str, Any], *, timeout: float | None = None) -> Result[Dict[str, Any]]:
        """Load every registered unit into *results*; return the outcome."""

        async def _task(reg: Registration) -> None:
            await self._load_one(reg, results)

        error = await self.flow.exec(
            _task,
            on_group=self._on_group,
            on_done=lambda err: self.log.debug("wrap load all done (error=%r)", err),
            timeout=timeout,
        )
        if error is not None:
            return Result.failure(error)

        self.bus.publish(PostLoad(results=results))
        return Result.success(results)

    # ------------------------------------------------------------------ #
    async def _load_one(self, reg: Registration, results: Dict[str, Any]) -> None:
        key, unit = reg.key, reg.unit
        self.log.debug("wrap load task started %s", key)

        result = unit.load(results)
        if inspect.isawaitable(result):
            result = await result

        self.log.debug("wrap load task loaded %s: %r", key, result)
        if key:
            results[key] = result
            value = result
        else:
            value = as_mapping(result)
            self._merge(results, value, unit)

        self.bus.publish(ChildLoaded(key=key, value=value, unit=unit))

    def _merge(self, results: Dict[str, Any], value: Any, unit: Any) -> None:
        if not value:
            return
        clashes = [k for k in value if k in results]
        if clashes:
            # first writer wins; later keyless results only fill gaps
            self.log.debug("keyless result of %r kept existing keys %s", unit, clashes)
        fill_missing(results, value)

    def _on_group(self, error: BaseException | None, group: Group) -> None:
        self.log.debug("wrap load group finished %s (error=%r)", group.value, error)
        self.bus.publish(GroupFinished(group=group.value, error=error))
