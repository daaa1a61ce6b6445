"""
Stories Kernel — Reducer

Pure function: (stories, action) → stories
No side effects. No IO. Deterministic.

Given the same sequence of actions, produces the same collection every time.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from stories.kernel.types import (
    REMOVE_BY_ID,
    REPLACE_ALL,
    Action,
    InvalidAction,
    Story,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_state() -> list[Story]:
    """The collection before any action has been applied."""
    return []


def reduce(state: list[Story], action: Action) -> list[Story]:
    """
    Apply one action to the current collection.

    Returns a new list; the input list is never modified.
    Raises InvalidAction for unknown or malformed actions.
    """
    handler = _HANDLERS.get(action.type)
    if handler is None:
        raise InvalidAction(action.type)
    return handler(state, action)


def replay(actions: Iterable[Action]) -> list[Story]:
    """
    Rebuild the collection from scratch by reducing over all actions.
    replay(actions) == reduce(reduce(reduce(empty(), a1), a2), a3)...
    """
    state = empty_state()
    for action in actions:
        state = reduce(state, action)
    return state


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _replace_all(state: list[Story], action: Action) -> list[Story]:
    stories = action.payload.get("stories")
    if stories is None:
        raise InvalidAction(action.type, "MISSING_STORIES")

    seen: set = set()
    for story in stories:
        if not isinstance(story, Story):
            raise InvalidAction(action.type, "NOT_A_STORY")
        if story.id in seen:
            raise InvalidAction(action.type, "DUPLICATE_ID")
        seen.add(story.id)

    return list(stories)


def _remove_by_id(state: list[Story], action: Action) -> list[Story]:
    if "id" not in action.payload:
        raise InvalidAction(action.type, "MISSING_ID")
    target = action.payload["id"]
    return [story for story in state if story.id != target]


_HANDLERS: dict[str, Callable[[list[Story], Action], list[Story]]] = {
    REPLACE_ALL: _replace_all,
    REMOVE_BY_ID: _remove_by_id,
}
