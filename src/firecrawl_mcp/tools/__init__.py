"""Firecrawl tools and the invocation pipeline behind them.

This module exposes the Firecrawl operations as MCP tools:
- firecrawl_scrape: Single page content
- firecrawl_map: URL discovery
- firecrawl_crawl / firecrawl_check_crawl_status: Background crawl jobs
- firecrawl_search: Web search
- firecrawl_extract: LLM-based structured extraction

The tools module follows a catalog -> dispatcher -> service pattern:
- catalog.py: Operation descriptors with parameter and result schemas
- dispatcher.py: Validation and failure normalization for one invocation
- service.py: Mapping between tool parameters and Firecrawl calls
- router.py: MCP tool definitions and registration
"""

from firecrawl_mcp.tools.catalog import Catalog, Operation, build_catalog
from firecrawl_mcp.tools.dispatcher import Route, dispatch
from firecrawl_mcp.tools.service import BackendAdapter

__all__ = [
    # Catalog
    "Catalog",
    "Operation",
    "build_catalog",
    # Invocation
    "Route",
    "dispatch",
    "BackendAdapter",
]
