"""MCP server exposing the Firecrawl tools."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator

import uvicorn
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.routing import Mount, Route
from starlette.types import Receive, Scope, Send

from firecrawl_mcp import __version__
from firecrawl_mcp.admin.router import api_stats, health_check
from firecrawl_mcp.config import Settings
from firecrawl_mcp.core.gateway import Gateway
from firecrawl_mcp.tools.router import register_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "firecrawl-mcp"

INSTRUCTIONS = (
    "A Firecrawl MCP server that provides web scraping tools. "
    "Supports scraping single pages, mapping sites, starting and checking crawl jobs, "
    "searching the web, and extracting structured data with an LLM."
)


def build_server(gateway: Gateway) -> Server:
    """Create an MCP server whose tools are the gateway's operations.

    Args:
        gateway: Gateway that executes the invocations

    Returns:
        Low-level MCP server ready to run on any transport
    """
    server = Server(SERVER_NAME, version=__version__, instructions=INSTRUCTIONS)
    register_tools(server, gateway)
    return server


def build_http_app(gateway: Gateway, path: str = "/mcp") -> Starlette:
    """Create the HTTP application: streamable-HTTP MCP endpoint plus admin routes.

    Args:
        gateway: Gateway that executes the invocations
        path: Mount point of the MCP endpoint (default: /mcp)

    Returns:
        Starlette application
    """
    # Stateless mode auto-creates sessions for unknown session IDs, making the server
    # resilient to restarts and eliminating "No valid session ID" errors
    session_manager = StreamableHTTPSessionManager(app=build_server(gateway), stateless=True)

    async def handle_streamable_http(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            yield

    app = Starlette(
        routes=[
            Route("/healthz", health_check, methods=["GET"]),
            Route("/api/stats", api_stats, methods=["GET"]),
            Mount(path, app=handle_streamable_http),
        ],
        lifespan=lifespan,
    )
    app.state.gateway = gateway
    return app


async def run_stdio(gateway: Gateway) -> None:
    """Serve the tools over stdin/stdout until the client disconnects."""
    server = build_server(gateway)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_server(settings: Settings) -> None:
    """Run the MCP server.

    Args:
        settings: Server settings; ``settings.transport`` selects stdio or HTTP
    """
    gateway = Gateway.from_settings(settings)

    if settings.transport == "http":
        logger.info(f"Starting Firecrawl MCP server with HTTP on {settings.host}:{settings.port}...")
        logger.info(f"Firecrawl MCP server running on HTTP at http://{settings.host}:{settings.port}/mcp")
        uvicorn.run(
            build_http_app(gateway),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    else:
        logger.info("Starting Firecrawl MCP server with stdio...")
        asyncio.run(run_stdio(gateway))
