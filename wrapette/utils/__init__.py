"""Wrapette utilities."""

from .merge import fill_missing, as_mapping

__all__ = [
    "fill_missing",
    "as_mapping",
]
