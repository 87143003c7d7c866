"""MCP Tool schema definitions.

Contains all Tool objects that define the MCP interface for stackprint.
Each Tool specifies its name, description, and JSON schema for inputs.
"""

from mcp.types import Tool

DETECT_PROFILE_TOOL = Tool(
    name="detect_profile",
    description=(
        "Detect the conventions of a Java/Spring project: architecture style and confidence, "
        "base package, DTO naming, ID type, mapper, Lombok usage, validation, API docs style, "
        "persistence technology and test setup. Uses the cached profile when it is still valid. "
        "After creating or moving many files, call with refresh=true."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "project_path": {
                "type": "string",
                "description": "Absolute path to the project root (the directory holding src/main/java)",
            },
            "refresh": {
                "type": "boolean",
                "description": "Ignore the cached profile and detect again",
                "default": False,
            },
            "use_cache": {
                "type": "boolean",
                "description": "Read and write the profile cache under <project>/.stackprint/",
                "default": True,
            },
            "include_scores": {
                "type": "boolean",
                "description": (
                    "Include the score of every architecture style. Scores come from "
                    "the current sources, so with a cached or locked profile they can "
                    "disagree with the reported architecture"
                ),
                "default": False,
            },
        },
        "required": ["project_path"],
    },
)

MANAGE_PROFILE_CACHE_TOOL = Tool(
    name="manage_profile_cache",
    description=(
        "Manage the cached stackprint profile of a project. "
        "Modes: info (show cache state and freshness), "
        "clear (delete the cache directory)."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "mode": {
                "type": "string",
                "enum": ["info", "clear"],
                "description": "Cache management mode",
            },
            "project_path": {
                "type": "string",
                "description": "Absolute path to the project root",
            },
        },
        "required": ["mode", "project_path"],
    },
)

# List of all tools for registration
ALL_TOOLS = [
    DETECT_PROFILE_TOOL,
    MANAGE_PROFILE_CACHE_TOOL,
]

__all__ = [
    "DETECT_PROFILE_TOOL",
    "MANAGE_PROFILE_CACHE_TOOL",
    "ALL_TOOLS",
]
