"""
Stories Kernel — Shared Types

Data classes used across actions, reducer, filters, loader and the app.
These are the contracts that bind the kernel together.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Action type registry
# ---------------------------------------------------------------------------

REPLACE_ALL = "stories.replace_all"
REMOVE_BY_ID = "stories.remove"

ACTION_TYPES: set[str] = {REPLACE_ALL, REMOVE_BY_ID}

StoryId = int | str


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class InvalidAction(Exception):
    """
    An action the reducer cannot apply.

    A programming error, not a user-input condition: nothing in the kernel
    catches it.
    """

    def __init__(self, action_type: str, reason: str = "UNKNOWN_ACTION"):
        super().__init__(f"{reason}: {action_type}")
        self.action_type = action_type
        self.reason = reason


class StorageUnavailable(Exception):
    """Backing medium for the value store cannot be read or written."""
    pass


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Story:
    """One story entry. Identity is `id`, unique within a collection."""

    id: StoryId
    title: str
    url: str = ""
    author: str = ""
    num_comments: int = 0
    points: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int | str):
            raise ValueError(f"story id must be int or str, got {self.id!r}")
        for name in ("num_comments", "points"):
            count = getattr(self, name)
            if isinstance(count, bool) or not isinstance(count, int):
                raise ValueError(f"{name} must be an int, got {count!r}")
            if count < 0:
                raise ValueError(f"{name} must be >= 0")

    def to_dict(self) -> dict[str, Any]:
        return {
            "objectID": self.id,
            "title": self.title,
            "url": self.url,
            "author": self.author,
            "num_comments": self.num_comments,
            "points": self.points,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Story:
        """Accepts both wire keys (objectID) and attribute keys (id)."""
        story_id = d["objectID"] if "objectID" in d else d["id"]
        return cls(
            id=story_id,
            title=d.get("title") or "",
            url=d.get("url") or "",
            author=d.get("author") or "",
            num_comments=d.get("num_comments", d.get("numComments")) or 0,
            points=d.get("points") or 0,
        )


@dataclass(frozen=True)
class Action:
    """
    A discrete, named intent to transform the collection.
    The reducer reads only `type` and `payload`.
    """

    type: str
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        if self.type == REPLACE_ALL:
            payload = {"stories": [s.to_dict() for s in self.payload.get("stories", [])]}
        else:
            payload = dict(self.payload)
        return {"type": self.type, "payload": payload}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Action:
        payload = d.get("payload", {})
        if d["type"] == REPLACE_ALL:
            payload = {"stories": [Story.from_dict(s) for s in payload.get("stories", [])]}
        return cls(type=d["type"], payload=payload)


@dataclass
class Status:
    """
    Load status, orthogonal to the collection.
    error=True means the most recent load did not populate the collection.
    """

    loading: bool = False
    error: bool = False


# A zero-argument coroutine function resolving with the stories to show.
Provider = Callable[[], Awaitable[Sequence[Story]]]
