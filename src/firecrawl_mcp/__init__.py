"""MCP gateway for the Firecrawl web scraping API."""

__version__ = "1.12.0"
