"""stackprint - convention profiling for Java/Spring source trees."""

# Load .env so STACKPRINT_CACHE_MAX_AGE_HOURS, STACKPRINT_SOURCE_ROOT, etc. are
# set for any entry point (CLI, pytest, MCP server) that imports stackprint.
from dotenv import load_dotenv

load_dotenv()

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"


def run_server() -> None:
    """Run the stackprint MCP server (blocking).

    Uses stdio transport for communication with MCP clients.
    """
    from stackprint.mcp.server import run_server as _run_server
    _run_server()
