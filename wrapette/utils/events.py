from __future__ import annotations
"""Ultra-lightweight pub/sub **EventBus** for Wrap lifecycle notifications.

Every Wrap owns one bus, so listeners never leak between nodes.

Example
-------
```python
from wrapette import Wrap
from wrapette.utils.events import ChildLoaded

page = Wrap()

@page.on(ChildLoaded)
def _on_child(evt: ChildLoaded):
    print(f"loaded {evt.key!r} -> {evt.value!r}")
```
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from logging import Logger, getLogger
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

__all__ = [
    "Event",
    "PreLoad",
    "ChildLoaded",
    "GroupFinished",
    "PostLoad",
    "AttributeChanged",
    "EventBus",
]

T = TypeVar("T", bound="Event")
_Handler = Callable[[Any], None]


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, kw_only=True)
class Event:  # noqa: D101 – base event
    ts: datetime = field(default_factory=_now)


# --------------------------------------------------------------------------- #
# Concrete events
# --------------------------------------------------------------------------- #
@dataclass(slots=True)
class PreLoad(Event):
    wrap_id: Optional[str] = None


@dataclass(slots=True)
class ChildLoaded(Event):
    key: Optional[str]
    value: Any
    unit: Any


@dataclass(slots=True)
class GroupFinished(Event):
    group: str
    error: Optional[BaseException] = None


@dataclass(slots=True)
class PostLoad(Event):
    results: Dict[str, Any]


@dataclass(slots=True)
class AttributeChanged(Event):
    name: str
    value: Any


# --------------------------------------------------------------------------- #
# Bus
# --------------------------------------------------------------------------- #

class EventBus:
    """Synchronous listener list keyed by event type.

    Handlers subscribed to a base class (e.g. :class:`Event`) receive every
    subclass instance too. Handlers run in subscription order.
    """

    def __init__(self, logger: Logger | None = None):
        self._handlers: Dict[Type[Event], List[_Handler]] = {}
        self._log = logger or getLogger("wrapette.events")

    def subscribe(self, event_type: Type[T], handler: _Handler | None = None):  # noqa: D401
        """Register *handler* for *event_type*; usable as a decorator."""

        def _decorator(func: _Handler) -> _Handler:
            self._handlers.setdefault(event_type, []).append(func)
            return func

        if handler is not None:
            return _decorator(handler)
        return _decorator

    def unsubscribe(self, event_type: Type[Event], handler: _Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, evt: Event) -> None:  # noqa: D401
        """Publish *evt* to all handlers registered for its type (or a base)."""
        for cls in type(evt).__mro__:
            if cls is object:
                break
            for func in list(self._handlers.get(cls, [])):
                try:
                    func(evt)
                except Exception as e:  # noqa: BLE001
                    # A failing listener must never break a load pass.
                    self._log.warning("event handler %s failed: %s", getattr(func, "__name__", func), e)

    def __len__(self) -> int:
        return sum(len(h) for h in self._handlers.values())
