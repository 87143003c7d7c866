"""MCP tools registration.

Provides tool definitions, handlers, and registration functions for
the stackprint MCP server.
"""

from mcp.server import Server

from stackprint.mcp.tools.definitions import (
    ALL_TOOLS,
    DETECT_PROFILE_TOOL,
    MANAGE_PROFILE_CACHE_TOOL,
)
from stackprint.mcp.tools.dispatch import (
    dispatch_tool,
    inject_timing,
    register_profile_tools,
)


def register_tools(server: Server) -> None:
    """Register all MCP tools with the server.

    Args:
        server: The MCP server instance.
    """
    register_profile_tools(server)


__all__ = [
    "register_tools",
    "register_profile_tools",
    "dispatch_tool",
    "inject_timing",
    "ALL_TOOLS",
    "DETECT_PROFILE_TOOL",
    "MANAGE_PROFILE_CACHE_TOOL",
]
