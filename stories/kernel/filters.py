"""
Stories Kernel — Search Filter

Pure predicate over a story and a query string. The filtered view is derived
on demand and never written back to the collection.
"""

from __future__ import annotations

from collections.abc import Iterable

from stories.kernel.types import Story


def matches(story: Story, query: str) -> bool:
    """Case-insensitive substring test of `query` within the title only."""
    return query.lower() in story.title.lower()


def apply_filter(stories: Iterable[Story], query: str) -> list[Story]:
    """Stories whose title contains the query, in collection order."""
    if not query:
        return list(stories)
    return [story for story in stories if matches(story, query)]
