"""Admin API functionality for monitoring.

This module provides administrative endpoints for:
- Health checks and server status
- Invocation statistics

The admin module follows a router -> service pattern:
- router.py: HTTP endpoint handlers
- service.py: Business logic for stats
"""

from firecrawl_mcp.admin.router import api_stats, health_check
from firecrawl_mcp.admin.service import get_stats

__all__ = [
    # Router functions
    "api_stats",
    "health_check",
    # Service functions
    "get_stats",
]
