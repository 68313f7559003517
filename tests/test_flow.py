import pytest

from wrapette import Flow, Group

pytestmark = pytest.mark.anyio


class Dummy:  # noqa: D101
    def __init__(self, fail=False):
        self.fail = fail

    def load(self, ctx):
        return {}


async def test_exec_walks_groups_in_order():
    flow = Flow()
    flow.eventually("e", Dummy())
    flow.parallel("p", Dummy())
    flow.series("s", Dummy())
    assert [r.key for r in flow] == ["p", "s", "e"]
    assert len(flow) == 3

    ran, groups, finished = [], [], []

    async def task(reg):
        ran.append(reg.key)

    error = await flow.exec(
        task,
        on_group=lambda err, group: groups.append((group, err)),
        on_done=finished.append,
    )
    assert error is None
    assert ran == ["p", "s", "e"]
    assert groups == [(Group.PARALLEL, None), (Group.SERIES, None), (Group.EVENTUALLY, None)]
    assert finished == [None]


async def test_exec_returns_first_error():
    flow = Flow()
    flow.series("ok", Dummy())
    flow.series("bad", Dummy(fail=True))
    flow.series("skipped", Dummy())
    flow.eventually("later", Dummy())
    ran = []

    async def task(reg):
        ran.append(reg.key)
        if reg.unit.fail:
            raise KeyError(reg.key)

    error = await flow.exec(task)
    assert isinstance(error, KeyError)
    assert ran == ["ok", "bad"]


async def test_empty_flow_completes():
    finished = []

    async def task(reg):  # pragma: no cover – never called
        raise AssertionError

    assert await Flow().exec(task, on_done=finished.append) is None
    assert finished == [None]


def test_for_each_and_group_names():
    flow = Flow()
    flow.add("series", "a", Dummy())
    flow.add(Group.PARALLEL, None, Dummy())
    seen = []
    flow.for_each(lambda key, unit: seen.append(key))
    assert seen == [None, "a"]
    with pytest.raises(ValueError):
        flow.add("sometime", "x", Dummy())
