from __future__ import annotations
"""Fill-missing merge helpers (``defaults`` semantics).

Existing keys are never overwritten; only absent keys are filled in.
"""
from typing import Any, Dict, Mapping, MutableMapping

from pydantic import BaseModel

__all__ = ["fill_missing", "as_mapping"]


def fill_missing(target: MutableMapping[str, Any], source: Mapping[str, Any] | None) -> MutableMapping[str, Any]:  # noqa: D401
    """Copy keys of *source* absent from *target* into *target*; return *target*."""
    if not source:
        return target
    for key, value in source.items():
        if key not in target:
            target[key] = value
    return target


def as_mapping(value: Any) -> Dict[str, Any] | Mapping[str, Any] | None:  # noqa: D401
    """Return *value* as a mapping suitable for a fill-missing merge.

    Pydantic models are dumped, ``None`` yields ``None``; anything else that is
    not a mapping raises ``TypeError``.
    """
    if value is None or isinstance(value, Mapping):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump()
    raise TypeError(f"cannot merge {type(value).__name__} result without a key")
