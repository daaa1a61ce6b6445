"""
In-process story providers.

A provider is a zero-argument coroutine function resolving with a sequence
of stories. These are used for demos and tests; see
stories.services.hn_provider for the network one.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from stories.kernel.types import Provider, Story

INITIAL_STORIES: list[Story] = [
    Story(
        id=0,
        title="React",
        url="https://reactjs.org/",
        author="Jordan Walke",
        num_comments=3,
        points=4,
    ),
    Story(
        id=1,
        title="Redux",
        url="https://redux.js.org/",
        author="Dan Abramov, Andrew Clark",
        num_comments=2,
        points=5,
    ),
]


def static_provider(stories: Sequence[Story], delay: float = 0.0) -> Provider:
    """Resolves with a copy of `stories` after `delay` seconds."""
    snapshot = list(stories)

    async def provide() -> list[Story]:
        if delay > 0:
            await asyncio.sleep(delay)
        return list(snapshot)

    return provide


def failing_provider(exc: Exception, delay: float = 0.0) -> Provider:
    """Rejects with `exc` after `delay` seconds."""

    async def provide() -> list[Story]:
        if delay > 0:
            await asyncio.sleep(delay)
        raise exc

    return provide
