"""Pytest configuration and fixtures for firecrawl-mcp tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest

from firecrawl_mcp.core.gateway import Gateway
from firecrawl_mcp.metrics import reset_metrics
from firecrawl_mcp.providers import FirecrawlBackend

BACKEND_METHODS = (
    "scrape_url",
    "map_url",
    "async_crawl_url",
    "check_crawl_status",
    "search",
    "extract",
)


@pytest.fixture(autouse=True)
def fresh_metrics() -> None:
    """Start every test with empty invocation metrics."""
    reset_metrics()


@pytest.fixture
def mock_backend() -> Mock:
    """Firecrawl backend whose calls are AsyncMocks."""
    backend = Mock(spec=FirecrawlBackend)
    for name in BACKEND_METHODS:
        setattr(backend, name, AsyncMock(name=name))
    return backend


@pytest.fixture
def gateway(mock_backend: Mock) -> Gateway:
    """Gateway wired to the mock backend."""
    return Gateway(backend=mock_backend)


@pytest.fixture
def crawl_status_response() -> dict:
    """Status of a finished crawl job as returned by the backend."""
    return {
        "success": True,
        "status": "completed",
        "completed": 2,
        "total": 2,
        "creditsUsed": 2,
        "expiresAt": "2025-01-02T03:04:05+00:00",
        "data": [
            {"markdown": "# Post 1", "metadata": {"sourceURL": "https://example.com/blog/1"}},
            {"markdown": "# Post 2", "metadata": {"sourceURL": "https://example.com/blog/2"}},
        ],
    }


@pytest.fixture
def search_response() -> dict:
    """Search response mixing nested metadata and flat fields."""
    return {
        "success": True,
        "data": [
            {
                "url": "https://example.com",
                "title": "Flat Title",
                "description": "Flat Description",
                "metadata": {"title": "Meta Title", "description": "Meta Description"},
                "markdown": "# Test Content",
            },
            {
                "url": "https://example.org",
                "title": "Only Flat",
                "description": "Only flat description",
            },
        ],
    }
