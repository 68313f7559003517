"""Profile page demo: parallel fetches, a session step and a deferred footer."""

import anyio
from pydantic import BaseModel

from wrapette import Wrap, Container, unit, from_callback


class Profile(BaseModel):
    name: str
    role: str


@unit
async def header(ctx):
    await anyio.sleep(0.05)
    return {"title": f"Hello ({ctx['lang']})"}


@unit
async def profile(ctx):
    await anyio.sleep(0.02)
    return Profile(name=ctx.get("user", "guest"), role="reader")


def _session(ctx, callback):  # callback-style loader
    callback(None, {"session": "abc123"})


footer = unit(lambda ctx: {"year": 2024})
layout = Container(lambda ctx: {"layout": "two-columns"}, id="main")

page = (
    Wrap()
    .id("page")
    .defaults({"lang": "en"})
    .parallel("header", header)
    .parallel(profile)                 # keyless: Profile fields merged
    .parallel("layout", layout)
    .series(from_callback(_session))
    .eventually("footer", footer)
)

if __name__ == "__main__":
    print(page.run({"user": "ada"}))
