"""
Stories Kernel — the state engine.

Components:
  reducer   — (stories, action) → stories  (pure, deterministic)
  filters   — search predicate and derived view (pure)
  storage   — persisted query value with in-memory fallback
  loader    — async provider → ReplaceAll + loading/error status
  app       — coordinates the above for the presentation layer
"""

from stories.kernel.actions import remove_by_id, replace_all
from stories.kernel.app import StoriesApp
from stories.kernel.filters import apply_filter, matches
from stories.kernel.loader import StoryLoader
from stories.kernel.reducer import empty_state, reduce, replay
from stories.kernel.storage import JsonFileStorage, MemoryValueStorage, StoredValue, ValueStorage
from stories.kernel.types import Action, InvalidAction, Status, StorageUnavailable, Story

__all__ = [
    "Action",
    "InvalidAction",
    "Status",
    "StorageUnavailable",
    "Story",
    "replace_all",
    "remove_by_id",
    "reduce",
    "replay",
    "empty_state",
    "matches",
    "apply_filter",
    "ValueStorage",
    "MemoryValueStorage",
    "JsonFileStorage",
    "StoredValue",
    "StoryLoader",
    "StoriesApp",
]
