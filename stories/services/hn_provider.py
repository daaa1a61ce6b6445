"""
Hacker News story provider.

Fetches one page of search results from the Algolia HN API and maps hits to
kernel Story values. Transport and validation errors propagate; the loader
records them as a failed load.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, Field

from stories.kernel.types import Story

logger = logging.getLogger(__name__)


class SearchHit(BaseModel):
    """One hit as returned by /api/v1/search. Unknown fields are ignored."""

    object_id: str = Field(alias="objectID")
    title: str | None = None
    url: str | None = None
    author: str | None = None
    num_comments: int | None = Field(default=None, ge=0)
    points: int | None = Field(default=None, ge=0)

    def to_story(self) -> Story:
        return Story(
            id=self.object_id,
            title=self.title or "",
            url=self.url or "",
            author=self.author or "",
            num_comments=self.num_comments or 0,
            points=self.points or 0,
        )


class SearchResponse(BaseModel):
    """What the search endpoint returns (only the parts we read)."""

    hits: list[SearchHit]


class HackerNewsProvider:
    """
    Zero-argument coroutine callable usable as a kernel Provider.

    Pass `client` to share an httpx.AsyncClient (or to mock the transport);
    otherwise one is created lazily and closed by aclose().
    """

    def __init__(
        self,
        api_url: str,
        *,
        query: str = "",
        tags: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_url = api_url
        self.query = query
        self.tags = tags
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _params(self) -> dict[str, str]:
        params = {"query": self.query}
        if self.tags:
            params["tags"] = self.tags
        return params

    async def __call__(self) -> list[Story]:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)

        logger.info("hn: GET %s query=%r", self.api_url, self.query)
        res = await self._client.get(self.api_url, params=self._params())
        res.raise_for_status()

        body = SearchResponse.model_validate(res.json())
        stories = _dedupe([hit.to_story() for hit in body.hits])
        logger.info("hn: %d hits, %d stories", len(body.hits), len(stories))
        return stories

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


def _dedupe(stories: list[Story]) -> list[Story]:
    """Keep the first hit for each objectID so the collection stays unique."""
    seen: set[str] = set()
    result: list[Story] = []
    for story in stories:
        if story.id in seen:
            logger.warning("hn: duplicate objectID %s dropped", story.id)
            continue
        seen.add(story.id)
        result.append(story)
    return result
