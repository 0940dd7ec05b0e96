"""Tests for the Tavily search client."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from career_readiness.clients.search_client import SearchClient
from career_readiness.errors import ExternalServiceError


@pytest.fixture
def tavily():
    with patch("career_readiness.clients.search_client.AsyncTavilyClient") as mock_cls:
        instance = MagicMock()
        instance.search = AsyncMock(
            return_value={
                "results": [
                    {"title": "SRE salaries", "content": "$150k-$190k", "url": "https://levels.fyi"},
                    {"title": None, "url": "https://example.com"},
                ]
            }
        )
        mock_cls.return_value = instance
        yield mock_cls


class TestCredentials:
    def test_no_key(self, monkeypatch):
        monkeypatch.delenv("TAVILY_API_KEY", raising=False)
        client = SearchClient()
        assert client.client is None
        assert client.has_credentials is False

    def test_env_key(self, monkeypatch, tavily):
        monkeypatch.setenv("TAVILY_API_KEY", "env-key")
        client = SearchClient()
        tavily.assert_called_once_with(api_key="env-key")
        assert client.has_credentials is True

    def test_explicit_key_wins(self, monkeypatch, tavily):
        monkeypatch.setenv("TAVILY_API_KEY", "env-key")
        SearchClient(api_key="explicit")
        tavily.assert_called_once_with(api_key="explicit")

    async def test_search_without_key_raises(self, monkeypatch):
        monkeypatch.delenv("TAVILY_API_KEY", raising=False)
        client = SearchClient()
        with pytest.raises(ExternalServiceError, match="API key required"):
            await client.search("SRE skills")
        assert client.get_search_count() == 0


class TestSearch:
    async def test_results_mapped(self, tavily):
        client = SearchClient(api_key="k", search_depth="basic")
        results = await client.search("SRE salary 2025", count=4)

        assert results == [
            {"title": "SRE salaries", "description": "$150k-$190k", "url": "https://levels.fyi"},
            {"title": "", "description": "", "url": "https://example.com"},
        ]
        tavily.return_value.search.assert_awaited_once_with(
            query="SRE salary 2025", max_results=4, search_depth="basic"
        )

    async def test_no_results_key(self, tavily):
        tavily.return_value.search.return_value = {}
        assert await SearchClient(api_key="k").search("q") == []

    async def test_transport_error_wrapped(self, tavily):
        tavily.return_value.search.side_effect = ConnectionError("timeout")
        with pytest.raises(ExternalServiceError) as exc_info:
            await SearchClient(api_key="k").search("q")
        assert exc_info.value.service == "tavily"

    async def test_search_count_resets(self, tavily):
        client = SearchClient(api_key="k")
        await client.search("a")
        await client.search("b")
        assert client.get_search_count() == 2
        assert client.get_search_count() == 0
