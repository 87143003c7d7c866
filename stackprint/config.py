"""Runtime configuration for stackprint.

Configuration via environment variables (read at call time, not import time,
so a .env loaded by the package or a test's monkeypatch takes effect):

- STACKPRINT_CACHE_MAX_AGE_HOURS: profile cache time-to-live (default: 24)
- STACKPRINT_SOURCE_ROOT: main source root relative to the project (default: src/main/java)
- STACKPRINT_TEST_ROOT: test source root relative to the project (default: src/test/java)
- STACKPRINT_DISABLE_PROGRESS: set to 1/true/yes to disable progress bars
"""

import os
from datetime import timedelta

DEFAULT_SOURCE_ROOT = "src/main/java"
DEFAULT_TEST_ROOT = "src/test/java"
DEFAULT_CACHE_MAX_AGE = timedelta(hours=24)

# Cache directory name under the project root
CACHE_DIR_NAME = ".stackprint"


def source_root() -> str:
    """Get the main source root relative to the project directory."""
    return os.getenv("STACKPRINT_SOURCE_ROOT", DEFAULT_SOURCE_ROOT)


def test_root() -> str:
    """Get the test source root relative to the project directory."""
    return os.getenv("STACKPRINT_TEST_ROOT", DEFAULT_TEST_ROOT)


def cache_max_age() -> timedelta:
    """Get the profile cache time-to-live.

    Invalid or non-positive values fall back to the 24 hour default.
    """
    raw = os.getenv("STACKPRINT_CACHE_MAX_AGE_HOURS")
    if not raw:
        return DEFAULT_CACHE_MAX_AGE
    try:
        hours = float(raw)
    except ValueError:
        return DEFAULT_CACHE_MAX_AGE
    if hours <= 0:
        return DEFAULT_CACHE_MAX_AGE
    return timedelta(hours=hours)


def progress_disabled() -> bool:
    """Check whether progress bars were explicitly disabled."""
    return os.getenv("STACKPRINT_DISABLE_PROGRESS", "").lower() in ("1", "true", "yes")
