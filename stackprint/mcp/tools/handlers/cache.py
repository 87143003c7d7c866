"""Profile cache management handlers.

Handler for manage_profile_cache tool with modes:
- info: Show cache state for a project
- clear: Delete the cache of a project
"""

import json
from pathlib import Path
from typing import Any

from stackprint.utils.cache import ProfileCache


async def handle_manage_profile_cache(arguments: dict[str, Any]) -> str:
    """Handle manage_profile_cache tool call.

    Args:
        arguments: Tool arguments with mode and project_path.

    Returns:
        JSON string with cache information or operation results.

    Raises:
        ValueError: If required parameters are missing or mode is unknown.
    """
    mode = arguments.get("mode")
    project_path = arguments.get("project_path")

    if not mode:
        raise ValueError("mode is required")
    if not project_path:
        raise ValueError("project_path is required")

    cache = ProfileCache(Path(project_path))

    if mode == "info":
        return json.dumps(cache.info(), indent=2)

    elif mode == "clear":
        existed = cache.exists()
        cache.clear()
        return json.dumps({
            "status": "cleared" if existed else "no_cache",
            "project_path": project_path,
            "cache_dir": str(cache.cache_dir),
        }, indent=2)

    else:
        raise ValueError(f"Unknown mode: {mode}")
