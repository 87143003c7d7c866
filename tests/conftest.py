"""Pytest configuration and shared fixtures."""

import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from stackprint.fs import MemoryFileSystem

# Project root used with the in-memory filesystem
PROJECT = Path("/proj")

JavaWriter = Callable[..., Path]


def java_source(
    package: str,
    class_name: str,
    annotations: Sequence[str] = (),
    imports: Sequence[str] = (),
    extends: str = "",
    implements: Sequence[str] = (),
    kind: str = "class",
) -> str:
    """Render a minimal Java compilation unit."""
    lines = []
    if package:
        lines += [f"package {package};", ""]
    lines += [f"import {imp};" for imp in imports]
    if imports:
        lines.append("")
    lines += [f"@{ann}" for ann in annotations]

    decl = f"public {kind} {class_name}"
    if extends:
        decl += f" extends {extends}"
    if implements:
        decl += f" implements {', '.join(implements)}"
    lines += [decl + " {", "}", ""]
    return "\n".join(lines)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """An empty in-memory filesystem."""
    return MemoryFileSystem()


@pytest.fixture
def project_dir() -> Path:
    """Project root of write_java files in memory_fs."""
    return PROJECT


def _make_writer(write: Callable[[Path, str], None], project: Path) -> JavaWriter:
    def _write(
        package: str,
        class_name: str,
        *,
        test: bool = False,
        **kwargs,
    ) -> Path:
        root = "src/test/java" if test else "src/main/java"
        path = project / root
        if package:
            path = path.joinpath(*package.split("."))
        path = path / f"{class_name}.java"
        write(path, java_source(package, class_name, **kwargs))
        return path

    return _write


@pytest.fixture
def write_java(memory_fs: MemoryFileSystem) -> JavaWriter:
    """Write a Java file under /proj in the in-memory filesystem.

    Call as write_java(package, class_name, annotations=..., imports=...,
    extends=..., implements=..., kind=..., test=False).
    """
    return _make_writer(memory_fs.write_text, PROJECT)


@pytest.fixture
def write_disk_java(temp_dir: Path) -> JavaWriter:
    """Write a Java file under temp_dir on the real filesystem."""

    def _write_file(path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)

    return _make_writer(_write_file, temp_dir)
