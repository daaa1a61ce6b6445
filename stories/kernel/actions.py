"""
Stories Kernel — Action Construction

Factory functions for creating well-formed actions.
Used by the loader and the app to feed the reducer, and by tests to build
actions concisely.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from stories.kernel.types import REMOVE_BY_ID, REPLACE_ALL, Action, Story, StoryId


def replace_all(stories: Iterable[Story]) -> Action:
    """Full replacement of the collection."""
    return Action(type=REPLACE_ALL, payload={"stories": list(stories)})


def remove_by_id(story_id: StoryId) -> Action:
    """Removal by identity. Removing an id that is not present is a no-op."""
    return Action(type=REMOVE_BY_ID, payload={"id": story_id})


def dump_actions(actions: Iterable[Action]) -> list[dict[str, Any]]:
    """Serialize an action log to plain dicts (for auditing)."""
    return [a.to_dict() for a in actions]


def load_actions(data: Iterable[dict[str, Any]]) -> list[Action]:
    """Inverse of dump_actions."""
    return [Action.from_dict(d) for d in data]
