"""Admin API routes for health and stats."""

from starlette.requests import Request
from starlette.responses import JSONResponse

from firecrawl_mcp.admin.service import get_stats


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint for container orchestration.

    Returns:
        JSONResponse with status: healthy
    """
    return JSONResponse({"status": "healthy"})


async def api_stats(request: Request) -> JSONResponse:
    """Get server statistics and metrics as JSON.

    Returns:
        JSONResponse with uptime, invocation metrics and the served tool names
    """
    gateway = getattr(request.app.state, "gateway", None)
    operations = gateway.operations.names() if gateway is not None else None
    return JSONResponse(get_stats(operations))
