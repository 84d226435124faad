"""Base interface for the Firecrawl backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class FirecrawlBackend(ABC):
    """Abstract base class for Firecrawl API clients.

    Each method performs one remote call and returns the decoded response
    body as a plain dict. Transport problems (connection errors, timeouts,
    error statuses without a body) are raised; failures Firecrawl reports in
    the body come back as ``{"success": False, "error": ...}``.
    """

    @abstractmethod
    async def scrape_url(self, url: str, options: dict[str, Any]) -> dict[str, Any]:
        """Scrape a single URL."""

    @abstractmethod
    async def map_url(self, url: str, options: dict[str, Any]) -> dict[str, Any]:
        """Discover the URLs of a site."""

    @abstractmethod
    async def async_crawl_url(self, url: str, options: dict[str, Any]) -> dict[str, Any]:
        """Start a crawl job without waiting for it to finish.

        Returns:
            Response containing the job ``id``
        """

    @abstractmethod
    async def check_crawl_status(self, job_id: str) -> dict[str, Any]:
        """Fetch the current state of a crawl job."""

    @abstractmethod
    async def search(self, query: str, options: dict[str, Any]) -> dict[str, Any]:
        """Run a web search."""

    @abstractmethod
    async def extract(self, urls: list[str], options: dict[str, Any]) -> dict[str, Any]:
        """Extract structured data from one or more URLs."""
