"""Core infrastructure for the gateway.

This module provides the single entry point used by transports:
- Gateway construction from an API key, a base URL override or settings
- Routing of invocations by operation name

The gateway owns the only Firecrawl client instance for its whole lifetime.
"""

from firecrawl_mcp.core.gateway import Gateway

__all__ = [
    "Gateway",
]
