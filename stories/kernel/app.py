"""
Stories Kernel — Application Controller

Sits between the pure functions (reducer, filters) and the outside world
(the provider, the value store, the UI). Owns the collection, the load
status and the search query.

Operations: dispatch, current_view, set_query, remove_record, load, start, close

This is where state lives. The reducer and filters are pure.
"""

from __future__ import annotations

import logging

from stories.kernel.actions import remove_by_id
from stories.kernel.filters import apply_filter
from stories.kernel.loader import StoryLoader
from stories.kernel.reducer import empty_state, reduce
from stories.kernel.storage import StoredValue, ValueStorage
from stories.kernel.types import Action, Provider, Status, Story, StoryId

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_KEY = "search"
DEFAULT_QUERY = "React"


class StoriesApp:
    """
    The surface the presentation layer talks to.

    The collection only changes through dispatch(). The filtered view is
    recomputed on every call to current_view().
    """

    def __init__(
        self,
        provider: Provider,
        storage: ValueStorage,
        *,
        search_key: str = DEFAULT_SEARCH_KEY,
        default_query: str = DEFAULT_QUERY,
    ):
        self._provider = provider
        self._stories: list[Story] = empty_state()
        self._actions: list[Action] = []
        self._query = StoredValue(storage, search_key, default_query)
        self._closed = False
        self._started = False
        self._loader = StoryLoader(self.dispatch, is_alive=lambda: not self._closed)

    # -- state access --

    @property
    def stories(self) -> list[Story]:
        """The full collection, unfiltered."""
        return list(self._stories)

    @property
    def actions(self) -> list[Action]:
        """Every action applied so far, in order."""
        return list(self._actions)

    @property
    def query(self) -> str:
        return self._query.value

    @property
    def status(self) -> Status:
        return Status(loading=self._loader.status.loading, error=self._loader.status.error)

    @property
    def loading(self) -> bool:
        return self._loader.status.loading

    @property
    def error(self) -> bool:
        return self._loader.status.error

    @property
    def closed(self) -> bool:
        return self._closed

    # -- mutation --

    def dispatch(self, action: Action) -> list[Story]:
        """Reduce and store. InvalidAction propagates to the caller."""
        self._stories = reduce(self._stories, action)
        self._actions.append(action)
        logger.debug("app: %s applied, %d stories", action.type, len(self._stories))
        return self.stories

    def remove_record(self, story_id: StoryId) -> list[Story]:
        return self.dispatch(remove_by_id(story_id))

    def set_query(self, text: str) -> None:
        self._query.set(text)

    # -- derived --

    def current_view(self) -> list[Story]:
        """Stories matching the current query, in collection order."""
        return apply_filter(self._stories, self._query.value)

    # -- loading --

    async def start(self) -> None:
        """The automatic load at session start. Runs at most once."""
        if self._started:
            return
        self._started = True
        await self.load()

    async def load(self, provider: Provider | None = None) -> None:
        """Fetch and replace the collection. Also usable as a manual refresh."""
        await self._loader.load(provider or self._provider)

    def close(self) -> None:
        """Tear down. Loads still in flight resolve without touching state."""
        self._closed = True

    async def aclose(self) -> None:
        """close(), then release the provider's resources if it holds any."""
        self.close()
        provider_close = getattr(self._provider, "aclose", None)
        if provider_close is not None:
            await provider_close()

