from rich.console import Console

from wrapette import Wrap, Container
from wrapette.utils.tree import build_rich_tree, iter_units


def _page():
    box = Container(lambda ctx: {})
    inner = Wrap().parallel("x", Container(lambda ctx: {"x": 1}))
    return (
        Wrap()
        .id("page")
        .parallel("box", box)
        .series("inner", inner)
        .eventually(Wrap())
    )


def test_iter_units_depths():
    depths = [(depth, reg.key) for depth, reg in iter_units(_page())]
    assert depths == [(0, "box"), (0, "inner"), (1, "x"), (0, None)]


def test_rich_tree_render():
    console = Console(record=True, width=100)
    console.print(build_rich_tree(_page()))
    text = console.export_text()
    assert "page" in text
    assert "parallel ⨉ 1" in text
    assert "series ⨉ 1" in text
    assert "eventually ⨉ 1" in text
    assert "container" in text
    assert "<merged>" in text
