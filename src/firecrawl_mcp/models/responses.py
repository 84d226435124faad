"""Pydantic models for tool results.

Fields the backend may legitimately leave out of a response are optional;
their absence is not an error.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolResult(BaseModel):
    """Base class for tool result models."""

    model_config = ConfigDict(extra="forbid")


class ScrapeResponse(ToolResult):
    """Result of a single-page scrape."""

    url: str | None = Field(default=None, description="URL of the scraped page")
    markdown: str | None = Field(default=None, description="Page content as markdown")
    html: str | None = Field(default=None, description="Cleaned HTML")
    rawHtml: str | None = Field(default=None, description="Unmodified HTML")
    links: list[str] | None = Field(default=None, description="Links found on the page")
    screenshot: str | None = Field(default=None, description="Screenshot URL")
    extract: Any = Field(default=None, description="LLM extraction output")
    metadata: Any = Field(default=None, description="Page metadata")
    warning: str | None = Field(default=None, description="Warning from Firecrawl")


class MapResponse(ToolResult):
    """Result of mapping a site."""

    links: list[str] = Field(description="URLs discovered on the site")


class CrawlResponse(ToolResult):
    """Reference to a crawl job started on Firecrawl."""

    id: str = Field(description="Crawl job ID, pass to firecrawl_check_crawl_status")
    url: str = Field(description="The URL the crawl was started from")
    success: bool = Field(description="Whether the job was accepted")
    error: str | None = Field(default=None, description="Error message if any")


class CrawlStatusResponse(ToolResult):
    """Snapshot of a crawl job as reported by Firecrawl.

    Only ``status`` and ``success`` are guaranteed; Firecrawl leaves out the
    progress fields while a job is still queued.
    """

    status: str = Field(description="Job status (scraping, completed, failed, ...)")
    completed: int | None = Field(default=None, description="Number of pages crawled so far")
    total: int | None = Field(default=None, description="Total number of pages to crawl")
    creditsUsed: int | float | None = Field(
        default=None, description="Credits consumed by the job"
    )
    expiresAt: str | None = Field(
        default=None, description="ISO-8601 timestamp when results expire"
    )
    data: list[Any] | None = Field(default=None, description="Documents crawled so far")
    success: bool = Field(description="Whether the status check succeeded")
    error: str | None = Field(default=None, description="Error message if any")


class SearchResult(ToolResult):
    """A single web search hit."""

    url: str = Field(description="Result URL")
    title: str | None = Field(default=None, description="Result title")
    description: str | None = Field(default=None, description="Result description")
    markdown: str | None = Field(default=None, description="Scraped content, if requested")


class SearchResponse(ToolResult):
    """Result of a web search."""

    success: bool = Field(description="Whether the search succeeded")
    data: list[SearchResult] = Field(description="Search results")
    error: str | None = Field(default=None, description="Error message if any")


class ExtractResponse(ToolResult):
    """Structured data extracted from one or more pages."""

    success: bool = Field(description="Whether the extraction succeeded")
    data: Any = Field(description="Extracted data, shaped by the requested schema")
    error: str | None = Field(default=None, description="Error message if any")
    warning: str | None = Field(default=None, description="Warning from Firecrawl")
