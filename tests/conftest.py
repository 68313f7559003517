from typing import Any, List, Optional

import anyio
import pytest

from wrapette import Unit


@pytest.fixture
def anyio_backend():
    return "asyncio"


class Stub(Unit):
    """Scriptable unit recording when its load starts and ends."""

    def __init__(
        self,
        result: Any = None,
        *,
        name: str = "stub",
        delay: float = 0.0,
        error: Optional[BaseException] = None,
        log: Optional[List[Any]] = None,
    ):
        super().__init__()
        self.result = result
        self.name = name
        self.delay = delay
        self.error = error
        self.log = log if log is not None else []
        self.calls = 0
        self.seen: List[dict] = []

    async def load(self, context):
        self.calls += 1
        self.seen.append(dict(context))
        self.log.append(("start", self.name))
        await anyio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        self.log.append(("end", self.name))
        return self.result


@pytest.fixture
def stub():
    return Stub
