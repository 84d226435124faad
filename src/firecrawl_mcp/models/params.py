"""Pydantic models for tool parameters.

Unknown keys are ignored. Scalar fields use strict types, so a caller
sending ``"5"`` for a number gets a validation error instead of a silent
coercion.
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
)

ScrapeFormat = Literal[
    "markdown",
    "html",
    "rawHtml",
    "screenshot",
    "links",
    "screenshot@fullPage",
    "extract",
]

SearchScrapeFormat = Literal["markdown", "html", "rawHtml"]

# Any JSON number; booleans are not numbers here.
Number = Union[StrictInt, StrictFloat]


class ToolParams(BaseModel):
    """Base class for tool parameter models."""

    model_config = ConfigDict(extra="ignore")


class ScrapeParams(ToolParams):
    url: StrictStr = Field(description="The URL to scrape")
    formats: list[ScrapeFormat] | None = Field(
        default=None, description="Formats to return. Defaults to ['markdown']"
    )
    onlyMainContent: StrictBool | None = Field(
        default=None, description="Only return the main content of the page"
    )
    includeTags: list[StrictStr] | None = Field(
        default=None, description="HTML tags to include in the output"
    )
    excludeTags: list[StrictStr] | None = Field(
        default=None, description="HTML tags to exclude from the output"
    )
    waitFor: Number | None = Field(
        default=None, description="Time in milliseconds to wait for dynamic content"
    )
    maxAge: Number | None = Field(
        default=None,
        description=(
            "Maximum age in milliseconds for cached content. Use cached data if available "
            "and younger than maxAge, otherwise scrape fresh. Enables 500% faster scrapes "
            "for recently cached pages. Default: 0 (always scrape fresh)"
        ),
    )


class MapParams(ToolParams):
    url: StrictStr = Field(description="Starting URL for URL discovery")
    search: StrictStr | None = Field(
        default=None, description="Optional search term to filter URLs"
    )
    ignoreSitemap: StrictBool | None = Field(
        default=None, description="Skip sitemap.xml discovery and only use HTML links"
    )
    includeSubdomains: StrictBool | None = Field(
        default=None, description="Include URLs from subdomains in results"
    )
    limit: Number | None = Field(
        default=None, description="Maximum number of URLs to return"
    )


class CrawlParams(ToolParams):
    url: StrictStr = Field(description="Starting URL for the crawl")
    excludePaths: list[StrictStr] | None = Field(
        default=None, description="URL paths to exclude from crawling"
    )
    includePaths: list[StrictStr] | None = Field(
        default=None, description="Only crawl these URL paths"
    )
    maxDepth: Number | None = Field(
        default=None, description="Maximum link depth to crawl"
    )
    limit: Number | None = Field(
        default=None, description="Maximum number of pages to crawl"
    )
    allowExternalLinks: StrictBool | None = Field(
        default=None, description="Allow crawling links to external domains"
    )


class CrawlStatusParams(ToolParams):
    id: StrictStr = Field(description="Crawl job ID to check")


class SearchScrapeOptions(ToolParams):
    formats: list[SearchScrapeFormat] | None = None
    onlyMainContent: StrictBool | None = None
    waitFor: Number | None = None


class SearchParams(ToolParams):
    query: StrictStr = Field(description="Search query string")
    limit: Number | None = Field(
        default=None, description="Maximum number of results to return (default: 5)"
    )
    lang: StrictStr | None = Field(
        default=None, description="Language code for search results (default: en)"
    )
    country: StrictStr | None = Field(
        default=None, description="Country code for search results (default: us)"
    )
    scrapeOptions: SearchScrapeOptions | None = Field(
        default=None, description="Options for scraping search results"
    )


class ExtractParams(ToolParams):
    urls: list[StrictStr] = Field(
        description="List of URLs to extract information from"
    )
    prompt: StrictStr | None = Field(
        default=None, description="Prompt for the LLM extraction"
    )
    systemPrompt: StrictStr | None = Field(
        default=None, description="System prompt for LLM extraction"
    )
    # "schema" would shadow a BaseModel attribute, so the field is aliased.
    extraction_schema: Any = Field(
        default=None,
        alias="schema",
        description="JSON schema for structured data extraction",
    )
    allowExternalLinks: StrictBool | None = Field(
        default=None, description="Allow extraction from external links"
    )
    enableWebSearch: StrictBool | None = Field(
        default=None, description="Enable web search for additional context"
    )
