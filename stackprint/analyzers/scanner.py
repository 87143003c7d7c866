"""Source scanner for Java projects.

Walks the main and test source roots and extracts lexical facts from each
.java file with a single forward pass over its lines. Only the header of a
file is read: package, imports, annotations and the first type declaration.
Anything else is ignored, so malformed or partial files still produce a
best-effort record.
"""

import re
from collections import Counter
from pathlib import Path

from stackprint import config
from stackprint.analyzers.classifier import classify
from stackprint.errors import ScanError
from stackprint.fs import FileSystem, OsFileSystem
from stackprint.logging import logger, progress_bar
from stackprint.models.source import FileType, ScanResult, SourceFile

JAVA_SUFFIX = ".java"

PACKAGE_RE = re.compile(r"^package\s+([\w.]+)\s*;")
IMPORT_RE = re.compile(r"^import\s+(?:static\s+)?([\w.]+(?:\.\*)?)\s*;")
ANNOTATION_RE = re.compile(r"^@([\w.]+)")
TYPE_DECL_RE = re.compile(r"\b(class|interface|enum|record)\s+([A-Za-z_$][\w$]*)")
EXTENDS_RE = re.compile(r"\bextends\s+([\w.]+)")
IMPLEMENTS_RE = re.compile(r"\bimplements\s+([^{]+)")
INTERFACE_EXTENDS_RE = re.compile(r"\bextends\s+([^{]+)")
_GENERIC_RE = re.compile(r"<[^<>]*>")


def _strip_generics(text: str) -> str:
    """Remove balanced '<...>' groups, innermost first."""
    previous = None
    while previous != text:
        previous = text
        text = _GENERIC_RE.sub("", text)
    return text


def _split_type_list(text: str) -> list[str]:
    """Split 'A<X, Y>, B' into ['A', 'B']."""
    text = _strip_generics(text)
    # Unbalanced generics on a wrapped line: drop everything from '<'
    names = []
    for part in text.split(","):
        name = part.split("<", 1)[0].strip()
        if name and re.fullmatch(r"[\w.$]+", name):
            names.append(name)
    return names


def parse_source(text: str, path: str, is_test: bool = False) -> SourceFile:
    """Extract lexical facts from Java source text.

    Args:
        text: File content.
        path: Path of the file; its base name is the fallback type name.
        is_test: Whether the file lives under the test root.

    Returns:
        A SourceFile; test files are always classified as FileType.TEST.
    """
    package = ""
    class_name = ""
    annotations: list[str] = []
    imports: list[str] = []
    implements: list[str] = []
    extends_class = ""
    is_abstract = False
    is_interface = False

    in_block_comment = False
    for raw_line in text.splitlines():
        line = raw_line.strip()

        if line.startswith("/*"):
            in_block_comment = True
        if "*/" in line:
            in_block_comment = False
            continue
        if in_block_comment or line.startswith("//"):
            continue

        if line.startswith("package "):
            match = PACKAGE_RE.match(line)
            if match:
                package = match.group(1)
            continue

        if line.startswith("import "):
            match = IMPORT_RE.match(line)
            if match:
                imports.append(match.group(1))
            continue

        if line.startswith("@"):
            match = ANNOTATION_RE.match(line)
            if match:
                annotations.append(match.group(1).rsplit(".", 1)[-1])
            continue

        decl = TYPE_DECL_RE.search(line)
        if decl:
            kind, class_name = decl.group(1), decl.group(2)
            header = _strip_generics(line[decl.end():])
            if kind == "interface":
                is_interface = True
                match = INTERFACE_EXTENDS_RE.search(header)
                if match:
                    implements.extend(_split_type_list(match.group(1)))
            else:
                is_abstract = "abstract " in line[: decl.start()]
                match = EXTENDS_RE.search(header)
                if match and match.group(1) not in ("Object", "java.lang.Object"):
                    extends_class = match.group(1)
                match = IMPLEMENTS_RE.search(header)
                if match:
                    implements.extend(_split_type_list(match.group(1)))
            break

    if not class_name:
        class_name = Path(path).stem

    if is_test:
        file_type = FileType.TEST
    else:
        file_type = classify(class_name, annotations, implements)

    return SourceFile(
        path=path,
        package=package,
        class_name=class_name,
        file_type=file_type,
        annotations=tuple(annotations),
        extends_class=extends_class,
        implements=tuple(implements),
        imports=tuple(imports),
        is_abstract=is_abstract,
        is_interface=is_interface,
    )


def common_package_prefix(packages: list[str]) -> str:
    """Longest dotted prefix shared by all packages, on segment boundaries.

    Examples:
        >>> common_package_prefix(["a.b.c", "a.b.d"])
        'a.b'
    """
    if not packages:
        return ""
    prefix = packages[0].split(".")
    for package in packages[1:]:
        parts = package.split(".")
        common = 0
        while common < len(prefix) and common < len(parts) and prefix[common] == parts[common]:
            common += 1
        prefix = prefix[:common]
    return ".".join(prefix)


def detect_base_package(files: list[SourceFile] | tuple[SourceFile, ...]) -> str:
    """Infer the project base package.

    The base package is the deepest dotted prefix shared by every file. Files
    in the default package share no prefix, so when any exist the result
    falls back to the common prefix of the files that do declare a package,
    minus its last segment.

    Args:
        files: Main source files.

    Returns:
        Dotted base package, empty when nothing can be inferred.
    """
    if not files:
        return ""

    prefix_counts: Counter[str] = Counter()
    for f in files:
        if not f.package:
            continue
        parts = f.package.split(".")
        for i in range(1, len(parts) + 1):
            prefix_counts[".".join(parts[:i])] += 1

    universal = [pkg for pkg, count in prefix_counts.items() if count == len(files)]
    if universal:
        return max(universal, key=lambda pkg: pkg.count("."))

    prefix = common_package_prefix([f.package for f in files if f.package])
    head, sep, _ = prefix.rpartition(".")
    return head if sep and head else prefix


class Scanner:
    """Scans a project's source roots into a ScanResult."""

    def __init__(
        self,
        project_dir: Path | str,
        fs: FileSystem | None = None,
        source_root: str | None = None,
        test_root: str | None = None,
    ) -> None:
        self.project_dir = Path(project_dir)
        self.fs = fs if fs is not None else OsFileSystem()
        self.source_root = source_root if source_root is not None else config.source_root()
        self.test_root = test_root if test_root is not None else config.test_root()

    def scan(self) -> ScanResult:
        """Scan main and test sources.

        Missing source roots yield empty file sets.

        Raises:
            ScanError: If a source root exists but cannot be walked.
        """
        has_maven, has_gradle, build_tool = self.detect_build_tool()
        main_files = self.scan_directory(self.project_dir / self.source_root, is_test=False)
        test_files = self.scan_directory(self.project_dir / self.test_root, is_test=True)

        logger.debug(
            "Scanned %s: %d main files, %d test files",
            self.project_dir,
            len(main_files),
            len(test_files),
        )

        return ScanResult(
            main_files=tuple(main_files),
            test_files=tuple(test_files),
            base_package=detect_base_package(main_files),
            source_root=self.source_root,
            test_root=self.test_root,
            build_tool=build_tool,
            has_maven=has_maven,
            has_gradle=has_gradle,
        )

    def detect_build_tool(self) -> tuple[bool, bool, str]:
        """Detect Maven and Gradle manifests.

        Returns:
            Tuple of (has_maven, has_gradle, build_tool). Gradle wins when
            both manifests are present.
        """
        has_maven = self.fs.exists(self.project_dir / "pom.xml")
        has_gradle = self.fs.exists(self.project_dir / "build.gradle") or self.fs.exists(
            self.project_dir / "build.gradle.kts"
        )
        if has_gradle:
            return has_maven, has_gradle, "gradle"
        if has_maven:
            return has_maven, has_gradle, "maven"
        return has_maven, has_gradle, ""

    def scan_directory(self, root: Path, is_test: bool) -> list[SourceFile]:
        """Parse every .java file under root, in path order."""
        if not self.fs.is_dir(root):
            return []

        try:
            entries = [e for e in self.fs.walk_files(root) if e.path.suffix == JAVA_SUFFIX]
        except OSError as e:
            raise ScanError(f"Failed to walk {root}: {e}") from e

        files: list[SourceFile] = []
        desc = "Scanning tests" if is_test else "Scanning sources"
        for entry in progress_bar(entries, desc=desc, total=len(entries), unit="files"):
            try:
                text = self.fs.read_text(entry.path)
            except (OSError, UnicodeDecodeError) as e:
                logger.debug("Skipping unreadable file %s: %s", entry.path, e)
                continue
            files.append(parse_source(text, str(entry.path), is_test=is_test))
        return files
