"""MCP tool registration and dispatch.

Registers all stackprint tools with the MCP server and handles
dispatching tool calls to the appropriate handlers.
"""

import json
from typing import Any

from mcp.server import Server
from mcp.types import TextContent, Tool

from stackprint.logging import log_operation
from stackprint.mcp.tools.definitions import ALL_TOOLS
from stackprint.mcp.tools.handlers import (
    handle_detect_profile,
    handle_manage_profile_cache,
)


def register_profile_tools(server: Server) -> None:
    """Register profile tools with the MCP server.

    Args:
        server: The MCP server instance.
    """

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available profile tools."""
        return ALL_TOOLS

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls."""
        try:
            result = await dispatch_tool(name, arguments)
            return [TextContent(type="text", text=result)]
        except Exception as e:
            return [
                TextContent(
                    type="text",
                    text=f"Error: {type(e).__name__}: {e}",
                )
            ]


# Handler dispatch table
_HANDLERS = {
    "detect_profile": handle_detect_profile,
    "manage_profile_cache": handle_manage_profile_cache,
}


async def dispatch_tool(name: str, arguments: dict[str, Any]) -> str:
    """Dispatch tool call to appropriate handler.

    All tool responses include a 'timing' field with performance metrics.

    Args:
        name: Tool name.
        arguments: Tool arguments.

    Returns:
        JSON string with tool response and timing.

    Raises:
        ValueError: If tool name is unknown.
    """
    handler = _HANDLERS.get(name)
    if not handler:
        raise ValueError(f"Unknown tool: {name}")

    log_details: dict[str, Any] = {"project": arguments.get("project_path", "N/A")}
    if "mode" in arguments:
        log_details["mode"] = arguments["mode"]

    with log_operation(f"tool:{name}", log_details) as timing:
        result_str = await handler(arguments)

    return inject_timing(result_str, timing.elapsed_ms)


def inject_timing(result_str: str, elapsed_ms: float) -> str:
    """Add a timing field to a JSON object response.

    Non-object or non-JSON responses are returned unchanged.

    Args:
        result_str: JSON string from handler.
        elapsed_ms: Elapsed time in milliseconds.

    Returns:
        JSON string with timing field added.
    """
    try:
        result = json.loads(result_str)
    except json.JSONDecodeError:
        return result_str
    if not isinstance(result, dict):
        return result_str
    result["timing"] = {"total_ms": round(elapsed_ms, 1)}
    return json.dumps(result, indent=2)
