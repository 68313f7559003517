from __future__ import annotations

"""Tree helpers (no side-effects).

iter_units(wrap) yields (depth, registration) depth-first.
build_rich_tree(wrap) returns a Rich *Tree* ready for printing.
"""
from typing import Iterator, Tuple, TYPE_CHECKING

from wrapette.core.flow import ORDER, Registration

if TYPE_CHECKING:  # pragma: no cover
    from rich.tree import Tree
    from wrapette.core.wrap import Wrap

__all__ = [
    "iter_units",
    "build_rich_tree",
]

_GROUP_STYLE = {
    "parallel": "green",
    "series": "yellow",
    "eventually": "blue",
}


def iter_units(wrap: "Wrap", depth: int = 0) -> Iterator[Tuple[int, Registration]]:  # noqa: D401
    """Yield *(depth, registration)* for every unit in *wrap* (DFS)."""
    for reg in wrap.flow:
        yield depth, reg
        if reg.caps.is_wrap:
            yield from iter_units(reg.unit, depth + 1)


def _label(reg: Registration) -> str:
    name = reg.key or "[dim]<merged>[/]"
    kind = type(reg.unit).__name__
    if reg.caps.is_container:
        return f"📦 [cyan]{name}[/] [dim]({kind}, container)[/]"
    return f"[cyan]{name}[/] [dim]({kind})[/]"


def build_rich_tree(wrap: "Wrap") -> "Tree":  # noqa: D401
    """Return a *rich.tree.Tree* visualisation of *wrap* (side-effect-free)."""
    from rich.tree import Tree  # local import keeps this module lightweight

    title = wrap.id() or "wrap"
    tree = Tree(f"[bold]{title}[/]")

    def _add(parent: "Tree", node: "Wrap") -> None:
        for group in ORDER:
            members = node.flow.groups[group]
            if not members:
                continue
            style = _GROUP_STYLE[group.value]
            g = parent.add(f"[{style}]{group.value} ⨉ {len(members)}[/]")
            for reg in members:
                child = g.add(_label(reg))
                if reg.caps.is_wrap:
                    _add(child, reg.unit)

    _add(tree, wrap)
    return tree
