"""MCP tool handlers.

Each handler processes tool calls and returns JSON responses:
- profile: detect_profile
- cache: manage_profile_cache (info, clear)
"""

from stackprint.mcp.tools.handlers.cache import handle_manage_profile_cache
from stackprint.mcp.tools.handlers.profile import handle_detect_profile

__all__ = [
    "handle_detect_profile",
    "handle_manage_profile_cache",
]
