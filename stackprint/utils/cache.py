"""Profile cache for stackprint.

A detected profile is stored under <project>/.stackprint/ as profile.json
(indented JSON) next to a checksum file. The checksum covers the relative
path, size and modification time of every main source file, so any edit to
the source tree invalidates the cached profile.

The cache is an optimization only: every read failure is a cache miss and a
failed checksum write never fails a save.
"""

import hashlib
import json
import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from stackprint import config
from stackprint.analyzers.detector import detect
from stackprint.errors import ProfileCacheError
from stackprint.fs import FileSystem, OsFileSystem
from stackprint.logging import logger
from stackprint.models.profile import PROFILE_SCHEMA_VERSION, ProjectProfile

PROFILE_FILE = "profile.json"
CHECKSUM_FILE = "checksum"
JAVA_SUFFIX = ".java"


def get_cache_dir(project_dir: Path | str) -> Path:
    """Compute the cache directory of a project.

    Examples:
        >>> get_cache_dir("/home/user/shop")
        PosixPath('/home/user/shop/.stackprint')
    """
    return Path(project_dir) / config.CACHE_DIR_NAME


def compute_source_checksum(
    fs: FileSystem,
    project_dir: Path | str,
    source_root: str,
) -> str:
    """Hash the (path, size, mtime) of every main source file.

    Entries are 'relative/path.java:size:mtime' with the mtime truncated to
    whole seconds, sorted by path and newline-joined before hashing. A missing
    source directory hashes the empty entry list.

    Args:
        fs: Filesystem to read through.
        project_dir: Project directory; entry paths are relative to it.
        source_root: Main source root relative to project_dir.

    Returns:
        Hex SHA-256 digest.

    Raises:
        OSError: If the source directory exists but cannot be walked.
    """
    project = Path(project_dir)
    src_dir = project / source_root

    entries: list[str] = []
    if fs.is_dir(src_dir):
        for entry in fs.walk_files(src_dir):
            if entry.path.suffix != JAVA_SUFFIX:
                continue
            rel = Path(os.path.relpath(entry.path, project)).as_posix()
            entries.append(f"{rel}:{entry.size}:{int(entry.mtime)}")

    entries.sort()
    return hashlib.sha256("\n".join(entries).encode()).hexdigest()


class ProfileCache:
    """Reads and writes the cached profile of one project."""

    def __init__(
        self,
        project_dir: Path | str,
        fs: FileSystem | None = None,
        max_age: timedelta | None = None,
        source_root: str | None = None,
        test_root: str | None = None,
    ) -> None:
        self.project_dir = Path(project_dir)
        self.fs = fs if fs is not None else OsFileSystem()
        self.max_age = max_age if max_age is not None else config.cache_max_age()
        self.source_root = source_root if source_root is not None else config.source_root()
        self.test_root = test_root if test_root is not None else config.test_root()

    @property
    def cache_dir(self) -> Path:
        return get_cache_dir(self.project_dir)

    @property
    def profile_path(self) -> Path:
        return self.cache_dir / PROFILE_FILE

    @property
    def checksum_path(self) -> Path:
        return self.cache_dir / CHECKSUM_FILE

    def exists(self) -> bool:
        """Check whether a cached profile file is present."""
        return self.fs.exists(self.profile_path)

    def save(self, profile: ProjectProfile) -> None:
        """Write the profile and the current source checksum.

        The profile's detected_at is stamped with the save time.

        Raises:
            ProfileCacheError: If the cache directory or profile file cannot
                be written. A failed checksum write is only logged.
        """
        try:
            self.fs.mkdirs(self.cache_dir)
        except OSError as e:
            raise ProfileCacheError(f"Failed to create {self.cache_dir}: {e}") from e

        profile.detected_at = datetime.now(tz=None)
        try:
            self.fs.write_text(self.profile_path, profile.model_dump_json(indent=2))
        except OSError as e:
            raise ProfileCacheError(f"Failed to write {self.profile_path}: {e}") from e

        try:
            checksum = compute_source_checksum(self.fs, self.project_dir, self.source_root)
            self.fs.write_text(self.checksum_path, checksum)
        except OSError as e:
            logger.warning("Failed to write profile checksum for %s: %s", self.project_dir, e)

    def load(self) -> ProjectProfile | None:
        """Read the cached profile.

        Returns:
            The cached profile, or None when there is none or it was written
            with a different schema version.

        Raises:
            ProfileCacheError: If the profile file is unreadable or corrupt.
        """
        if not self.exists():
            return None

        try:
            raw = json.loads(self.fs.read_text(self.profile_path))
        except (OSError, json.JSONDecodeError) as e:
            raise ProfileCacheError(f"Failed to read {self.profile_path}: {e}") from e

        if not isinstance(raw, dict):
            raise ProfileCacheError(f"Corrupt profile in {self.profile_path}")

        version = raw.get("schema_version")
        if version != PROFILE_SCHEMA_VERSION:
            logger.info(
                "Ignoring cached profile with schema version %s (current: %d)",
                version,
                PROFILE_SCHEMA_VERSION,
            )
            return None

        try:
            return ProjectProfile.model_validate(raw)
        except ValidationError as e:
            raise ProfileCacheError(f"Corrupt profile in {self.profile_path}: {e}") from e

    def is_valid(self) -> bool:
        """Check that the cached profile loads, is fresh, and matches the sources."""
        try:
            profile = self.load()
        except ProfileCacheError as e:
            logger.debug("Profile cache miss for %s: %s", self.project_dir, e)
            return False
        if profile is None:
            return False
        if profile.is_stale(self.max_age):
            return False

        try:
            stored = self.fs.read_text(self.checksum_path).strip()
            current = compute_source_checksum(self.fs, self.project_dir, self.source_root)
        except OSError as e:
            logger.debug("Profile cache miss for %s: %s", self.project_dir, e)
            return False

        return stored == current

    def clear(self) -> None:
        """Delete the cache directory. Clearing an absent cache is a no-op.

        Raises:
            ProfileCacheError: If the cache directory exists but cannot be removed.
        """
        if not self.fs.is_dir(self.cache_dir):
            return
        try:
            self.fs.remove_tree(self.cache_dir)
        except OSError as e:
            raise ProfileCacheError(f"Failed to remove {self.cache_dir}: {e}") from e

    def info(self) -> dict[str, Any]:
        """Describe the cache state for display."""
        result: dict[str, Any] = {
            "project_dir": str(self.project_dir),
            "cache_dir": str(self.cache_dir),
            "exists": self.exists(),
            "valid": False,
        }
        if not result["exists"]:
            return result

        try:
            profile = self.load()
        except ProfileCacheError as e:
            result["error"] = str(e)
            return result

        if profile is None:
            result["error"] = "schema version mismatch"
            return result

        result["valid"] = self.is_valid()
        result["detected_at"] = profile.detected_at.isoformat()
        result["stale"] = profile.is_stale(self.max_age)
        result["architecture"] = profile.architecture.value
        result["arch_confidence"] = profile.arch_confidence
        result["base_package"] = profile.base_package
        return result

    def load_or_detect(self, refresh: bool = False) -> ProjectProfile:
        """Return the cached profile if valid, otherwise detect and save.

        Locked fields of a previously cached profile survive re-detection.
        A failed save is logged; the detected profile is still returned.

        Args:
            refresh: Skip the cache and always detect.

        Raises:
            ScanError: If a source root exists but cannot be walked.
        """
        if not refresh and self.is_valid():
            cached = self.load()
            if cached is not None:
                logger.debug("Using cached profile for %s", self.project_dir)
                return cached

        try:
            previous = self.load()
        except ProfileCacheError as e:
            logger.debug("Discarding unreadable cached profile: %s", e)
            previous = None

        profile = detect(
            self.project_dir,
            fs=self.fs,
            source_root=self.source_root,
            test_root=self.test_root,
        )
        if previous is not None:
            profile = profile.carry_locked_from(previous)

        try:
            self.save(profile)
        except ProfileCacheError as e:
            logger.warning("Failed to cache profile for %s: %s", self.project_dir, e)

        return profile
