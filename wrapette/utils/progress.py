from __future__ import annotations
"""Rich progress bar driven by a Wrap's load events.

Usage::

    with LoadProgress() as progress:
        progress.attach(page)
        page.run()
"""
from typing import Any, Dict

from rich.console import Console
from rich.progress import Progress, BarColumn, TextColumn, TimeElapsedColumn

from wrapette.utils.events import ChildLoaded, PostLoad, PreLoad

__all__ = ["LoadProgress"]


class LoadProgress:
    """One progress task per attached Wrap, advanced on every ``ChildLoaded``."""

    def __init__(self, console: Console | None = None, transient: bool = True):
        self.progress = Progress(
            TextColumn("[bold blue]{task.fields[id]}[/]"),
            BarColumn(),
            "{task.percentage:>3.0f}%",
            TextColumn("[green]{task.completed}/{task.total}[/]"),
            "•",
            TimeElapsedColumn(),
            console=console,
            transient=transient,
        )
        self._tasks: Dict[int, int] = {}

    def attach(self, wrap: Any) -> "LoadProgress":
        """Track *wrap*; its direct children make up the total."""
        label = wrap.id() or "wrap"
        task_id = self.progress.add_task(description="", total=len(wrap), id=label, start=False)
        self._tasks[id(wrap)] = task_id

        def _on_pre(evt: PreLoad) -> None:
            self.progress.reset(task_id, total=len(wrap))

        def _on_child(evt: ChildLoaded) -> None:
            self.progress.update(task_id, advance=1)

        def _on_post(evt: PostLoad) -> None:
            self.progress.update(task_id, completed=len(wrap))

        wrap.on(PreLoad, _on_pre)
        wrap.on(ChildLoaded, _on_child)
        wrap.on(PostLoad, _on_post)
        return self

    def task(self, wrap: Any):
        return self.progress.tasks[self._tasks[id(wrap)]]

    def __enter__(self) -> "LoadProgress":
        self.progress.start()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.progress.stop()
