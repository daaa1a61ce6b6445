"""
Stories Kernel — Load Orchestrator

Drives an asynchronous provider and turns its outcome into a ReplaceAll
action plus loading/error flags. This is where the kernel awaits; the
reducer and filter stay synchronous.

Provider failures are operational: they end up in Status.error and are
never raised to the caller. InvalidAction from dispatch is a defect and
propagates.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

from stories.kernel.actions import replace_all
from stories.kernel.types import Action, Provider, Status, Story

logger = logging.getLogger(__name__)


class StoryLoader:
    """
    Owns the Status of loads issued through it.

    Overlapping loads are tolerated: each load takes a ticket in issue order
    and a result older than the last one applied is discarded. Results are
    applied without awaiting, so on a single event loop they cannot
    interleave and no lock is needed.
    """

    def __init__(
        self,
        dispatch: Callable[[Action], Any],
        *,
        status: Status | None = None,
        is_alive: Callable[[], bool] | None = None,
    ):
        self.status = status if status is not None else Status()
        self._dispatch = dispatch
        self._is_alive = is_alive or (lambda: True)
        self._issued = 0
        self._applied = 0
        self._pending = 0

    @property
    def pending(self) -> int:
        """Number of loads issued but not yet resolved."""
        return self._pending

    async def load(self, provider: Provider) -> None:
        """
        loading=True → await provider → ReplaceAll + loading=False
                                      ↘ error=True + loading=False
        """
        self._issued += 1
        ticket = self._issued
        self._pending += 1
        self.status.loading = True
        self.status.error = False
        logger.info("loader: load #%d started", ticket)

        stories: list[Story] = []
        failure: Exception | None = None
        try:
            stories = _as_stories(await provider())
        except asyncio.CancelledError:
            self._pending -= 1
            self._settle()
            raise
        except Exception as e:
            failure = e

        self._pending -= 1
        try:
            if not self._is_alive():
                logger.debug("loader: load #%d resolved after close, dropped", ticket)
                return
            if ticket < self._applied:
                logger.debug("loader: load #%d superseded by #%d, dropped", ticket, self._applied)
                return
            self._applied = ticket

            if failure is not None:
                logger.warning("loader: load #%d failed: %r", ticket, failure)
                self.status.error = True
                return

            self._dispatch(replace_all(stories))
            self.status.error = False
            logger.info("loader: load #%d loaded %d stories", ticket, len(stories))
        finally:
            self._settle()

    def _settle(self) -> None:
        if self._is_alive():
            self.status.loading = self._pending > 0


def _as_stories(result: Sequence[Story]) -> list[Story]:
    """Check that a provider resolved with a sequence of uniquely identified stories."""
    if isinstance(result, str | bytes) or not isinstance(result, Sequence):
        raise TypeError(f"provider returned {type(result).__name__}, expected a sequence of stories")
    seen: set = set()
    for item in result:
        if not isinstance(item, Story):
            raise TypeError(f"provider returned {type(item).__name__} in place of a Story")
        if item.id in seen:
            raise ValueError(f"provider returned duplicate story id {item.id!r}")
        seen.add(item.id)
    return list(result)
