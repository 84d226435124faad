"""MCP tool definitions for the Firecrawl operations."""

from __future__ import annotations

from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server

from firecrawl_mcp.core.gateway import Gateway
from firecrawl_mcp.tools.catalog import Operation


class ToolInvocationError(Exception):
    """Raised to the MCP server so it reports an ``isError`` tool result."""


def tool_definition(operation: Operation) -> types.Tool:
    """Describe an operation as an MCP tool.

    Args:
        operation: Catalog entry to publish

    Returns:
        Tool with input/output schemas and read-only/destructive hints
    """
    return types.Tool(
        name=operation.name,
        description=operation.description,
        inputSchema=operation.input_schema(),
        outputSchema=operation.output_schema(),
        annotations=types.ToolAnnotations(
            readOnlyHint=operation.read_only,
            destructiveHint=operation.destructive,
        ),
    )


async def list_tools(gateway: Gateway) -> list[types.Tool]:
    """List every operation in catalog order."""
    return [tool_definition(operation) for operation in gateway.operations.values()]


async def call_tool(gateway: Gateway, name: str, arguments: dict[str, Any] | None) -> dict[str, Any]:
    """Invoke a tool through the gateway.

    Returns:
        The success payload, sent to the client as structured content

    Raises:
        ToolInvocationError: If the invocation failed for any reason
    """
    result = await gateway.invoke(name, arguments)
    if not result.ok:
        raise ToolInvocationError(result.message)
    return result.payload


def register_tools(server: Server, gateway: Gateway) -> None:
    """Register the list/call tool handlers on an MCP server.

    Args:
        server: Low-level MCP server instance to register handlers on
        gateway: Gateway that executes the invocations
    """

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return await list_tools(gateway)

    # Arguments are validated by the gateway, which reports every bad field.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        return await call_tool(gateway, name, arguments)
