"""MCP server implementation for stackprint.

Serves project profiles over the Model Context Protocol (stdio transport).

Profiles are read through the on-disk cache under <project>/.stackprint/, so
repeated calls on an unchanged project do not rescan it. Pass refresh=true to
detect_profile after large edits to force a new detection.
"""

import asyncio

from mcp.server import Server
from mcp.server.stdio import stdio_server

from stackprint import __version__
from stackprint.logging import logger
from stackprint.mcp.tools import register_tools

# Server configuration
SERVER_NAME = "stackprint"
SERVER_VERSION = __version__


def create_server() -> Server:
    """Create and configure the MCP server.

    Returns:
        Configured MCP Server instance with all tools registered.
    """
    server = Server(SERVER_NAME, version=SERVER_VERSION)
    register_tools(server)
    return server


async def run_server_async() -> None:
    """Run the MCP server with stdio transport."""
    server = create_server()
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        logger.info("MCP server shutdown complete")


def run_server() -> None:
    """Run the MCP server (blocking)."""
    asyncio.run(run_server_async())
