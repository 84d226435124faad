"""Admin service layer for stats."""

from __future__ import annotations

from typing import Any

from firecrawl_mcp.metrics import get_metrics


def get_stats(operations: list[str] | None = None) -> dict[str, Any]:
    """Get server statistics and metrics.

    Args:
        operations: Names of the tools served, included when given

    Returns:
        Dictionary with uptime and invocation metrics
    """
    stats = get_metrics().to_dict()
    if operations is not None:
        stats["operations"] = operations
    return stats
