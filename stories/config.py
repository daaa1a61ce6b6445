"""
Hacker Stories configuration — all environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import logging
import os


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {raw!r}")
    return value


class Settings:
    """Application settings from environment variables."""

    def __init__(self) -> None:
        # Query persistence
        self.STORAGE_PATH: str = os.environ.get("STORIES_STORAGE_PATH", "~/.hacker_stories/storage.json")
        self.SEARCH_KEY: str = os.environ.get("STORIES_SEARCH_KEY", "search")
        self.DEFAULT_QUERY: str = os.environ.get("STORIES_DEFAULT_QUERY", "React")

        # Hacker News search API
        self.HN_API_URL: str = os.environ.get("HN_API_URL", "https://hn.algolia.com/api/v1/search")
        self.HN_QUERY: str = os.environ.get("HN_QUERY", "")
        self.HN_TAGS: str = os.environ.get("HN_TAGS", "front_page")
        self.HN_TIMEOUT_SECONDS: float = _float_env("HN_TIMEOUT_SECONDS", 10.0)

        # Logging
        self.LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()


def configure_logging(settings: Settings) -> None:
    """Apply LOG_LEVEL to the package logger."""
    level = logging.getLevelName(settings.LOG_LEVEL)
    if not isinstance(level, int):
        raise RuntimeError(f"LOG_LEVEL must be a logging level name, got {settings.LOG_LEVEL!r}")
    logging.getLogger("stories").setLevel(level)


# Singleton instance
settings = Settings()
