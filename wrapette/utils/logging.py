from __future__ import annotations
"""Package logger with a Rich handler.

``setup()`` installs the handler on the root logger (the CLI calls it);
library code only ever talks to ``getLogger("wrapette...")``.
"""
from logging import Logger, getLogger, INFO, DEBUG, WARNING, ERROR, basicConfig

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["console", "log", "get", "setup"]

console = Console(stderr=True)

_LEVEL_MAP = {
    "info": INFO,
    "debug": DEBUG,
    "warning": WARNING,
    "error": ERROR,
}

log: Logger = getLogger("wrapette")


def get(level: str = "info") -> Logger:  # noqa: D401
    """Return the package logger set to *level* (str)."""
    lvl = _LEVEL_MAP.get(level.lower(), INFO)
    lg = getLogger("wrapette")
    lg.setLevel(lvl)
    return lg


def setup(level: str = "info") -> Logger:  # noqa: D401
    """Route log records through Rich and return the package logger."""
    basicConfig(
        level=_LEVEL_MAP.get(level.lower(), INFO),
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(console=console, rich_tracebacks=True, markup=False)],
        force=True,
    )
    return get(level)
