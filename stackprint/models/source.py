"""Per-file lexical facts and scan results.

SourceFile records are produced by the scanner, one per Java file, and are
never mutated afterwards. ScanResult bundles them with the inferred layout.
"""

from collections import defaultdict
from enum import StrEnum

from pydantic import BaseModel, Field

from stackprint.models.markers import Marker, parse_marker


class FileType(StrEnum):
    """Semantic category of a source file."""

    CONTROLLER = "controller"
    SERVICE = "service"
    REPOSITORY = "repository"
    ENTITY = "entity"
    DTO = "dto"
    MAPPER = "mapper"
    EXCEPTION = "exception"
    CONFIG = "config"
    TEST = "test"
    UNKNOWN = "unknown"


class SourceFile(BaseModel):
    """Lexical facts extracted from a single Java source file."""

    model_config = {"frozen": True}

    path: str = Field(description="Path of the file as walked")
    package: str = Field(default="", description="Declared package, empty for the default package")
    class_name: str = Field(description="Primary type name (file base name when undeclared)")
    file_type: FileType = Field(default=FileType.UNKNOWN, description="Classification")
    annotations: tuple[str, ...] = Field(
        default=(), description="Annotation names in source order, duplicates kept"
    )
    extends_class: str = Field(default="", description="Superclass, empty when none or Object")
    implements: tuple[str, ...] = Field(
        default=(), description="Implemented (or, for interfaces, extended) interfaces"
    )
    imports: tuple[str, ...] = Field(default=(), description="Imported names")
    is_abstract: bool = Field(default=False)
    is_interface: bool = Field(default=False)

    @property
    def markers(self) -> tuple[Marker, ...]:
        """Annotations parsed into markers, in source order."""
        return tuple(parse_marker(a) for a in self.annotations)

    def has_marker(self, *markers: Marker) -> bool:
        """Check whether any of the given markers annotates this file."""
        return any(m in markers for m in self.markers)

    def imports_containing(self, fragment: str) -> bool:
        """Check whether any import contains the given fragment."""
        return any(fragment in imp for imp in self.imports)


class ScanResult(BaseModel):
    """All source files of a project plus the layout inferred from them."""

    model_config = {"frozen": True}

    main_files: tuple[SourceFile, ...] = Field(default=())
    test_files: tuple[SourceFile, ...] = Field(default=())
    base_package: str = Field(default="")
    source_root: str = Field(default="src/main/java")
    test_root: str = Field(default="src/test/java")
    build_tool: str = Field(default="", description="'maven', 'gradle' or '' when undetected")
    has_maven: bool = Field(default=False)
    has_gradle: bool = Field(default=False)

    def files_of_type(self, file_type: FileType) -> list[SourceFile]:
        """Main files with the given classification."""
        return [f for f in self.main_files if f.file_type == file_type]

    def files_with_marker(self, marker: Marker) -> list[SourceFile]:
        """Main files annotated with the given marker."""
        return [f for f in self.main_files if f.has_marker(marker)]

    def files_extending(self, parent_class: str) -> list[SourceFile]:
        """Main files whose superclass is parent_class."""
        return [f for f in self.main_files if f.extends_class == parent_class]

    def files_by_package(self) -> dict[str, list[SourceFile]]:
        """Main files grouped by declared package."""
        groups: dict[str, list[SourceFile]] = defaultdict(list)
        for f in self.main_files:
            groups[f.package].append(f)
        return dict(groups)

    def unique_packages(self) -> list[str]:
        """Distinct non-empty main packages in first-seen order."""
        seen: dict[str, None] = {}
        for f in self.main_files:
            if f.package:
                seen.setdefault(f.package, None)
        return list(seen)
