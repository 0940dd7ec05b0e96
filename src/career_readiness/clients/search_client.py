"""Tavily search wrapper with async support."""

from __future__ import annotations

import logging
import os

from tavily import AsyncTavilyClient

from career_readiness.errors import ExternalServiceError

logger = logging.getLogger(__name__)


class SearchClient:
    """Async Tavily search client.

    Credentials are resolved lazily so a client can be constructed without a
    key; the first ``search`` then raises ``ExternalServiceError``.
    """

    def __init__(self, api_key: str | None = None, search_depth: str = "advanced"):
        key = api_key or os.environ.get("TAVILY_API_KEY")
        self.client = AsyncTavilyClient(api_key=key) if key else None
        self.search_depth = search_depth
        self._search_count: int = 0

    @property
    def has_credentials(self) -> bool:
        return self.client is not None

    async def search(self, query: str, count: int = 6) -> list[dict]:
        """Search and return list of {title, description, url} dicts."""
        if self.client is None:
            raise ExternalServiceError(
                "tavily", "API key required. Set TAVILY_API_KEY env var or pass api_key."
            )
        logger.info("Searching: %s", query)
        self._search_count += 1
        try:
            response = await self.client.search(
                query=query,
                max_results=count,
                search_depth=self.search_depth,
            )
        except Exception as exc:
            logger.error("Search failed", exc_info=True)
            raise ExternalServiceError("tavily", str(exc)) from exc
        return [
            {
                "title": r.get("title") or "",
                "description": r.get("content") or "",
                "url": r.get("url") or "",
            }
            for r in response.get("results", [])
        ]

    def get_search_count(self) -> int:
        """Return accumulated search count and reset the counter."""
        count = self._search_count
        self._search_count = 0
        return count
