"""Pydantic data models for tool parameters, results and invocation outcomes.

This module defines the data structures shared by the catalog, the adapter
and the dispatcher:
- Parameter models, one per tool (ScrapeParams, MapParams, ...)
- Result models, one per tool (ScrapeResponse, MapResponse, ...)
- Invocation outcomes (Success, Failure)

Parameter models reject unknown keys and use strict scalar types; result
models reject unknown keys so a malformed adapter result never reaches a
caller.
"""

from firecrawl_mcp.models.invocation import Failure, InvocationResult, Success
from firecrawl_mcp.models.params import (
    CrawlParams,
    CrawlStatusParams,
    ExtractParams,
    MapParams,
    ScrapeParams,
    SearchParams,
    SearchScrapeOptions,
    ToolParams,
)
from firecrawl_mcp.models.responses import (
    CrawlResponse,
    CrawlStatusResponse,
    ExtractResponse,
    MapResponse,
    ScrapeResponse,
    SearchResponse,
    SearchResult,
    ToolResult,
)

__all__ = [
    # Parameter models
    "ToolParams",
    "ScrapeParams",
    "MapParams",
    "CrawlParams",
    "CrawlStatusParams",
    "SearchParams",
    "SearchScrapeOptions",
    "ExtractParams",
    # Result models
    "ToolResult",
    "ScrapeResponse",
    "MapResponse",
    "CrawlResponse",
    "CrawlStatusResponse",
    "SearchResponse",
    "SearchResult",
    "ExtractResponse",
    # Invocation outcomes
    "Success",
    "Failure",
    "InvocationResult",
]
