"""End-to-end tests for project detection."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from stackprint.analyzers.detector import Detector, detect
from stackprint.errors import ScanError
from stackprint.fs import FileEntry, MemoryFileSystem
from stackprint.models.profile import (
    ArchitectureType,
    DatabaseType,
    DTONamingStyle,
    FeatureStyle,
    MapperType,
    SwaggerStyle,
    ValidationStyle,
)
from stackprint.models.source import FileType


def _write_layered(write_java) -> None:
    write_java("com.x.controller", "UserController", annotations=["RestController"])
    write_java("com.x.service", "UserService", annotations=["Service"])
    write_java("com.x.repository", "UserRepository", kind="interface",
               annotations=["Repository"])
    write_java("com.x.entity", "User", annotations=["Entity"])


class TestDetectScenarios:
    """Tests for the documented detection scenarios."""

    def test_empty_project(self, memory_fs, project_dir) -> None:
        profile = detect(project_dir, fs=memory_fs)

        assert profile.architecture == ArchitectureType.LAYERED
        assert profile.arch_confidence == 1.0
        assert profile.base_package == ""
        assert profile.feature_style is None
        assert profile.project_root == str(project_dir)

    def test_empty_source_directory_matches_missing(self, memory_fs, project_dir) -> None:
        missing = detect(project_dir, fs=memory_fs)
        memory_fs.mkdirs(project_dir / "src/main/java")
        empty = detect(project_dir, fs=memory_fs)

        assert missing.model_dump(exclude={"detected_at"}) == empty.model_dump(exclude={"detected_at"})

    def test_layered_project(self, memory_fs, project_dir, write_java) -> None:
        _write_layered(write_java)

        profile = detect(project_dir, fs=memory_fs)

        assert profile.architecture == ArchitectureType.LAYERED
        assert profile.arch_confidence >= 0.5
        assert profile.base_package == "com.x"
        assert profile.is_valid()

    def test_feature_project(self, memory_fs, project_dir, write_java) -> None:
        write_java("base.user.controller", "UserController", annotations=["RestController"])
        write_java("base.user.service", "UserService", annotations=["Service"])
        write_java("base.auth.controller", "AuthController", annotations=["RestController"])
        write_java("base.common.entity", "BaseEntity", annotations=["MappedSuperclass"])

        profile = detect(project_dir, fs=memory_fs)

        assert profile.architecture == ArchitectureType.FEATURE
        assert profile.base_package == "base"
        assert sorted(profile.feature_modules) == ["auth", "user"]
        assert profile.feature_style == FeatureStyle.NESTED

    def test_base_package_inference(self, memory_fs, project_dir, write_java) -> None:
        for name in ("one", "two", "three"):
            write_java(f"a.b.c.{name}", name.capitalize())

        assert detect(project_dir, fs=memory_fs).base_package == "a.b.c"

    def test_dto_naming_majority(self, memory_fs, project_dir, write_java) -> None:
        write_java("com.x.dto", "CreateUserRequest")
        write_java("com.x.dto", "UserResponse")
        write_java("com.x.dto", "OrderDTO")

        profile = detect(project_dir, fs=memory_fs)

        assert profile.dto_naming == DTONamingStyle.REQUEST_RESPONSE
        assert profile.dto_request_suffix() == "Request"

    def test_annotation_beats_name(self, memory_fs, project_dir, write_java) -> None:
        write_java("com.x", "FooController", annotations=["Entity"])

        detector = Detector(project_dir, fs=memory_fs)
        detector.detect()

        assert detector.last_scan is not None
        assert detector.last_scan.main_files[0].file_type == FileType.ENTITY


class TestDetectProperties:
    """Tests for general detection properties."""

    def test_idempotent(self, memory_fs, project_dir, write_java) -> None:
        _write_layered(write_java)

        first = detect(project_dir, fs=memory_fs)
        second = detect(project_dir, fs=memory_fs)

        assert first.model_dump(exclude={"detected_at"}) == second.model_dump(exclude={"detected_at"})

    def test_scores_are_bounded(self, memory_fs, project_dir, write_java) -> None:
        _write_layered(write_java)
        detector = Detector(project_dir, fs=memory_fs)

        scores = detector.scores()

        assert set(scores) == {
            ArchitectureType.LAYERED,
            ArchitectureType.FEATURE,
            ArchitectureType.HEXAGONAL,
            ArchitectureType.CLEAN,
            ArchitectureType.MODULAR,
            ArchitectureType.FLAT,
        }
        assert all(0.0 <= s <= 1.0 for s in scores.values())
        assert detector.last_decision is not None
        assert detector.last_decision.confidence == max(scores.values())

    def test_secondary_attributes(self, memory_fs, project_dir, write_java) -> None:
        write_java("com.shop.common", "BaseEntity", annotations=["MappedSuperclass"])
        write_java("com.shop.user", "User", annotations=["Entity", "Getter", "Setter"],
                   imports=["java.util.UUID", "jakarta.validation.constraints.NotNull"],
                   extends="BaseEntity")
        write_java("com.shop.user", "Role", annotations=["Entity"], extends="BaseEntity")
        write_java("com.shop.user", "UserResource", annotations=["RestController", "Tag"])
        write_java("com.shop.user", "UserMapper", kind="interface", annotations=["Mapper"])
        write_java("com.shop.error", "ApiExceptionHandler", annotations=["RestControllerAdvice"])
        write_java("com.shop.user", "UserServiceTest", test=True,
                   imports=["org.mockito.Mockito"])

        profile = detect(project_dir, fs=memory_fs)

        assert profile.base_entity is not None
        assert profile.base_entity_import() == "com.shop.common.BaseEntity"
        assert profile.id_type == "UUID"
        assert profile.id_import() == "java.util.UUID"
        assert profile.controller_suffix == "Resource"
        assert profile.mapper == MapperType.MAPSTRUCT
        assert profile.lombok.detected and profile.lombok.use_accessors
        assert profile.exceptions.has_global_handler
        assert profile.exceptions.handler_package == "com.shop.error"
        assert profile.has_swagger and profile.swagger_style == SwaggerStyle.OPENAPI3
        assert profile.has_validation and profile.validation_style == ValidationStyle.JAKARTA
        assert profile.database == DatabaseType.JPA
        assert profile.testing.has_mockito
        assert profile.testing.structure_mirror

    def test_custom_roots(self, memory_fs, project_dir) -> None:
        memory_fs.write_text(project_dir / "app/java/com/x/A.java", "package com.x;\nclass A {}\n")

        profile = detect(project_dir, fs=memory_fs, source_root="app/java", test_root="app/test")

        assert profile.base_package == "com.x"
        assert profile.source_root == "app/java"
        assert profile.test_root == "app/test"

    def test_real_filesystem(self, temp_dir: Path, write_disk_java) -> None:
        write_disk_java("com.x.controller", "UserController", annotations=["RestController"])
        write_disk_java("com.x.service", "UserService", annotations=["Service"])
        write_disk_java("com.x.repository", "UserRepository", kind="interface")
        write_disk_java("com.x.entity", "User", annotations=["Entity"])

        profile = detect(temp_dir)

        assert profile.base_package == "com.x"
        assert profile.architecture == ArchitectureType.LAYERED

    def test_walk_failure_propagates(self, project_dir) -> None:
        class BrokenFileSystem(MemoryFileSystem):
            def walk_files(self, root: Path | str) -> Iterator[FileEntry]:
                raise OSError("disk gone")

        fs = BrokenFileSystem()
        fs.mkdirs(project_dir / "src/main/java")

        with pytest.raises(ScanError):
            detect(project_dir, fs=fs)
