"""Wires a StoriesApp from Settings: file-backed query, HN provider."""

from __future__ import annotations

from stories.config import Settings
from stories.kernel.app import StoriesApp
from stories.kernel.storage import JsonFileStorage, ValueStorage
from stories.kernel.types import Provider
from stories.services.hn_provider import HackerNewsProvider


def build_app(
    settings: Settings,
    *,
    provider: Provider | None = None,
    storage: ValueStorage | None = None,
) -> StoriesApp:
    """
    Build the controller the presentation layer talks to.
    Defaults: JsonFileStorage at STORAGE_PATH and the Hacker News provider.
    """
    if storage is None:
        storage = JsonFileStorage(settings.STORAGE_PATH)
    if provider is None:
        provider = HackerNewsProvider(
            settings.HN_API_URL,
            query=settings.HN_QUERY,
            tags=settings.HN_TAGS or None,
            timeout=settings.HN_TIMEOUT_SECONDS,
        )
    return StoriesApp(
        provider,
        storage,
        search_key=settings.SEARCH_KEY,
        default_query=settings.DEFAULT_QUERY,
    )
