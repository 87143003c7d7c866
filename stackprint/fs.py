"""Filesystem access for stackprint.

Everything the scanner and the profile cache need from a filesystem goes
through the FileSystem protocol. OsFileSystem is used in production;
MemoryFileSystem keeps tests free of real disk state.
"""

import os
import shutil
import time
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Protocol


@dataclass(frozen=True)
class FileEntry:
    """A regular file found while walking a directory."""

    path: Path
    size: int
    mtime: float


class FileSystem(Protocol):
    """Minimal filesystem capability used by the scanner and cache."""

    def is_dir(self, path: Path | str) -> bool: ...

    def exists(self, path: Path | str) -> bool: ...

    def walk_files(self, root: Path | str) -> Iterator[FileEntry]: ...

    def read_text(self, path: Path | str) -> str: ...

    def write_text(self, path: Path | str, data: str) -> None: ...

    def mkdirs(self, path: Path | str) -> None: ...

    def remove_tree(self, path: Path | str) -> None: ...


def _raise_walk_error(error: OSError) -> None:
    raise error


class OsFileSystem:
    """FileSystem backed by the real disk."""

    def is_dir(self, path: Path | str) -> bool:
        return Path(path).is_dir()

    def exists(self, path: Path | str) -> bool:
        return Path(path).exists()

    def walk_files(self, root: Path | str) -> Iterator[FileEntry]:
        """Yield every regular file under root, sorted by path.

        Raises:
            OSError: If a directory under root cannot be listed.
        """
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
            dirnames.sort()
            for name in sorted(filenames):
                path = Path(dirpath) / name
                try:
                    stat = path.stat()
                except OSError:
                    # Vanished or dangling symlink
                    continue
                yield FileEntry(path=path, size=stat.st_size, mtime=stat.st_mtime)

    def read_text(self, path: Path | str) -> str:
        return Path(path).read_text(encoding="utf-8", errors="replace")

    def write_text(self, path: Path | str, data: str) -> None:
        Path(path).write_text(data, encoding="utf-8")

    def mkdirs(self, path: Path | str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def remove_tree(self, path: Path | str) -> None:
        shutil.rmtree(path)


@dataclass
class _MemoryFile:
    data: str
    mtime: float


class MemoryFileSystem:
    """In-memory FileSystem for tests.

    Paths are treated as POSIX paths. Writing a file creates its parent
    directories implicitly.
    """

    def __init__(self) -> None:
        self._files: dict[PurePosixPath, _MemoryFile] = {}
        self._dirs: set[PurePosixPath] = {PurePosixPath("/")}

    @staticmethod
    def _key(path: Path | str) -> PurePosixPath:
        return PurePosixPath(os.path.normpath(str(path)))

    def is_dir(self, path: Path | str) -> bool:
        return self._key(path) in self._dirs

    def exists(self, path: Path | str) -> bool:
        key = self._key(path)
        return key in self._files or key in self._dirs

    def walk_files(self, root: Path | str) -> Iterator[FileEntry]:
        root_key = self._key(root)
        if root_key not in self._dirs:
            raise FileNotFoundError(f"No such directory: {root}")
        for key in sorted(self._files):
            if root_key in key.parents:
                entry = self._files[key]
                yield FileEntry(
                    path=Path(key),
                    size=len(entry.data.encode("utf-8")),
                    mtime=entry.mtime,
                )

    def read_text(self, path: Path | str) -> str:
        try:
            return self._files[self._key(path)].data
        except KeyError:
            raise FileNotFoundError(f"No such file: {path}") from None

    def write_text(self, path: Path | str, data: str) -> None:
        key = self._key(path)
        if key in self._dirs:
            raise IsADirectoryError(f"Is a directory: {path}")
        self.mkdirs(key.parent)
        self._files[key] = _MemoryFile(data=data, mtime=time.time())

    def mkdirs(self, path: Path | str) -> None:
        key = self._key(path)
        if key in self._files:
            raise FileExistsError(f"File exists: {path}")
        self._dirs.add(key)
        self._dirs.update(key.parents)

    def remove_tree(self, path: Path | str) -> None:
        key = self._key(path)
        if key not in self._dirs:
            raise FileNotFoundError(f"No such directory: {path}")
        self._files = {k: v for k, v in self._files.items() if key not in k.parents}
        self._dirs = {d for d in self._dirs if d != key and key not in d.parents}

    def set_mtime(self, path: Path | str, mtime: float) -> None:
        """Override a file's modification time."""
        self._files[self._key(path)].mtime = mtime
