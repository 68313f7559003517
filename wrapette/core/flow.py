from __future__ import annotations
"""Flow – grouping and sequencing primitive behind a Wrap.

Units are appended to one of three groups and executed group by group:

* ``parallel``   – all members started at once, unordered completion
* ``series``     – one member at a time, registration order
* ``eventually`` – after both groups above succeeded, registration order

The first failing member stops the flow: running parallel siblings are
cancelled and no later group starts. ``exec`` never raises member errors, it
returns the first one.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional

import anyio

from .capabilities import Capabilities

__all__ = ["Group", "ORDER", "Registration", "Flow"]


class Group(str, Enum):  # noqa: D101
    PARALLEL = "parallel"
    SERIES = "series"
    EVENTUALLY = "eventually"


ORDER = (Group.PARALLEL, Group.SERIES, Group.EVENTUALLY)


@dataclass(slots=True)
class Registration:  # noqa: D101 – tiny data holder
    key: Optional[str]
    unit: Any
    group: Group
    caps: Capabilities = field(default_factory=Capabilities)


Task = Callable[[Registration], Awaitable[None]]
GroupHook = Callable[[Optional[BaseException], Group], None]
DoneHook = Callable[[Optional[BaseException]], None]


class Flow:  # noqa: D101
    def __init__(self) -> None:
        self.groups: Dict[Group, List[Registration]] = {g: [] for g in ORDER}

    # -------------------------------------------------- #
    def add(self, group: Group | str, key: Optional[str], unit: Any, caps: Capabilities | None = None) -> Registration:
        """Append *unit* under *key* to *group* and return its registration."""
        group = Group(group)
        reg = Registration(key=key, unit=unit, group=group, caps=caps or Capabilities.probe(unit))
        self.groups[group].append(reg)
        return reg

    def parallel(self, key: Optional[str], unit: Any) -> Registration:
        return self.add(Group.PARALLEL, key, unit)

    def series(self, key: Optional[str], unit: Any) -> Registration:
        return self.add(Group.SERIES, key, unit)

    def eventually(self, key: Optional[str], unit: Any) -> Registration:
        return self.add(Group.EVENTUALLY, key, unit)

    # -------------------------------------------------- #
    def __iter__(self) -> Iterator[Registration]:
        for group in ORDER:
            yield from self.groups[group]

    def __len__(self) -> int:
        return sum(len(members) for members in self.groups.values())

    def for_each(self, fn: Callable[[Optional[str], Any], Any]) -> None:
        """Call ``fn(key, unit)`` for every registration in execution order."""
        for reg in self:
            fn(reg.key, reg.unit)

    # -------------------------------------------------- #
    async def exec(
        self,
        task: Task,
        *,
        on_group: GroupHook | None = None,
        on_done: DoneHook | None = None,
        timeout: float | None = None,
    ) -> Optional[BaseException]:
        """Run *task* for every registration; return the first error or None."""
        error: Optional[BaseException] = None
        running: Optional[Group] = None
        try:
            with anyio.fail_after(timeout):
                for group in ORDER:
                    running = group
                    error = await self._run_group(group, task)
                    running = None
                    if on_group is not None:
                        on_group(error, group)
                    if error is not None:
                        break
        except TimeoutError as exc:
            error = exc
            # the interrupted group still reports its outcome
            if running is not None and on_group is not None:
                on_group(error, running)
        if on_done is not None:
            on_done(error)
        return error

    async def _run_group(self, group: Group, task: Task) -> Optional[BaseException]:
        members = list(self.groups[group])
        if not members:
            return None
        if group is Group.PARALLEL:
            return await self._run_concurrent(members, task)
        return await self._run_sequential(members, task)

    @staticmethod
    async def _run_sequential(members: List[Registration], task: Task) -> Optional[BaseException]:
        for reg in members:
            try:
                await task(reg)
            except Exception as exc:  # noqa: BLE001 – surfaced to the caller
                return exc
        return None

    @staticmethod
    async def _run_concurrent(members: List[Registration], task: Task) -> Optional[BaseException]:
        errors: List[BaseException] = []

        async with anyio.create_task_group() as tg:

            async def _guarded(reg: Registration) -> None:
                try:
                    await task(reg)
                except Exception as exc:  # noqa: BLE001 – first one wins
                    if not errors:
                        errors.append(exc)
                        tg.cancel_scope.cancel()

            for reg in members:
                tg.start_soon(_guarded, reg)

        return errors[0] if errors else None
