"""MCP server exposing stackprint profiles to MCP clients."""
