import logging

import pytest

from wrapette import Wrap, Container, Group, AttributeChanged, unit


@unit
def hello(ctx):
    return {"greeting": "hello"}


class NoLoad:  # noqa: D101
    api = "unit"


class Tagged:  # unit exposing id/place/editable by hand
    api = "unit"

    def __init__(self, place=None, id=None):
        self._place = place
        self._id = id
        self._editable = None

    def load(self, ctx):
        return {}

    def id(self, *value):
        if not value:
            return self._id
        self._id = value[0]
        return self

    def place(self, *value):
        if not value:
            return self._place
        self._place = value[0]
        return self

    def editable(self, *value):
        if not value:
            return self._editable
        self._editable = value[0]
        return self


def test_missing_unit_raises():
    with pytest.raises(TypeError):
        Wrap().parallel(None)
    with pytest.raises(TypeError):
        Wrap().series(None, None)


def test_incompatible_unit_is_skipped(caplog):
    wrap = Wrap()
    with caplog.at_level(logging.WARNING, logger="wrapette.wrap"):
        assert wrap.parallel("x", NoLoad()) is wrap
        wrap.eventually(42)
    assert len(wrap) == 0
    assert "incompatible" in caplog.text


def test_groups_and_keys(stub):
    a, b, c = stub(name="a"), stub(name="b"), stub(name="c")
    wrap = Wrap().parallel("a", a).series(b).eventually("c", c)

    regs = wrap.registrations()
    assert [(r.key, r.group) for r in regs] == [
        ("a", Group.PARALLEL),
        (None, Group.SERIES),
        ("c", Group.EVENTUALLY),
    ]
    assert regs[0].caps.loadable and regs[0].caps.identifiable


def test_constructor_registers_parallel(stub):
    p = stub()
    wrap = Wrap("p", p)
    assert [r.key for r in wrap.flow.groups[Group.PARALLEL]] == ["p"]
    assert Wrap(p).registrations()[0].key is None


def test_mapping_is_bulk_registered(stub):
    a = stub(name="a")
    wrap = Wrap().series({"a": a, "junk": NoLoad(), "n": 3})
    regs = wrap.registrations()
    assert [(r.key, r.unit) for r in regs] == [("a", a)]
    assert regs[0].group is Group.SERIES


def test_explicit_bulk(stub):
    units = {"x": stub(), "y": stub()}
    wrap = Wrap().bulk(units, Group.EVENTUALLY)
    assert [r.key for r in wrap.flow.groups[Group.EVENTUALLY]] == ["x", "y"]


def test_key_becomes_missing_id(stub):
    fresh = stub()
    named = Tagged(id="keep")
    Wrap().parallel("assigned", fresh).parallel("other", named).parallel(stub())
    assert fresh.id() == "assigned"
    assert named.id() == "keep"


def test_containers_are_collected():
    first = Container(lambda ctx: {}, id="c1")
    second = Container(lambda ctx: {})
    inner = Wrap().parallel("inner_box", second)

    outer = Wrap().parallel("box", first).parallel("inner", inner)

    assert outer.container is first
    assert outer.containers == [first, second]
    assert first.id() == "c1"          # containers never get the key as id
    assert second.id() is None
    assert inner.id() == "inner"


def test_cid():
    wrap = Wrap()
    assert wrap.cid() is None
    assert wrap.cid("nothing") is wrap

    box = unit(lambda ctx: {}, container=True)
    wrap.parallel("box", box)
    assert wrap.cid("main") is wrap
    assert box.id() == "main"
    assert wrap.cid() == "main"


def test_defaults_forms():
    wrap = Wrap().defaults("a", 1)
    assert wrap.defaults("a") == 1
    wrap.defaults({"a": 2, "b": 3})
    assert wrap.defaults("a") == 1
    assert wrap.defaults("b") == 3
    assert wrap.defaults("missing") is None


def test_accessors_are_fluent_and_notify():
    wrap = Wrap()
    seen = []
    wrap.on(AttributeChanged, seen.append)

    assert wrap.selector("#main").prepend("<b>").append("</b>").el("div") is wrap
    assert wrap.selector() == "#main"
    assert wrap.el() == "div"
    assert wrap.key() is None
    assert [e.name for e in seen] == ["selector", "prepend", "append", "el"]

    wrap.id("page")
    assert wrap.id() == "page"
    assert (seen[-1].name, seen[-1].value) == ("id", "page")


def test_editable_propagates(stub):
    a, b = stub(), Tagged()
    wrap = Wrap().parallel("a", a).series("b", b).parallel("h", hello)
    seen = []
    wrap.on(AttributeChanged, seen.append)

    wrap.editable(True)

    assert wrap.editable() is True
    assert a.editable() is True
    assert b.editable() is True
    assert hello.editable() is True
    assert [(e.name, e.value) for e in seen] == [("editable", True)]


def test_place_respects_force():
    plain, empty, forced = Tagged(place="left"), Tagged(), Tagged(place="right force")
    wrap = Wrap().parallel("p", plain).parallel("e", empty).parallel("f", forced)

    wrap.place("top")

    assert wrap.place() == "top"
    assert plain.place() == "top"
    assert empty.place() == "top"
    assert forced.place() == "right force"


def test_use_plugin():
    def plugin(w):
        w.defaults("from_plugin", True)

    wrap = Wrap()
    assert wrap.use(plugin) is wrap
    assert wrap.defaults("from_plugin") is True


def test_place_with_non_text_values():
    flagged, counted, plain = Tagged(place=True), Tagged(place=3), Tagged(place="left")
    wrap = Wrap().parallel("f", flagged).parallel("c", counted).series("p", plain)

    wrap.place("top")

    assert flagged.place() == "top"
    assert counted.place() == "top"
    assert plain.place() == "top"
