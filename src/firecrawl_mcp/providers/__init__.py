"""Clients for the Firecrawl scraping backend."""

from firecrawl_mcp.providers.base import FirecrawlBackend
from firecrawl_mcp.providers.firecrawl_provider import FirecrawlAppBackend

__all__ = ["FirecrawlBackend", "FirecrawlAppBackend"]
