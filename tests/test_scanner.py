"""Tests for the Java source scanner."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from stackprint.analyzers.scanner import (
    Scanner,
    common_package_prefix,
    detect_base_package,
    parse_source,
)
from stackprint.errors import ScanError
from stackprint.fs import FileEntry, MemoryFileSystem
from stackprint.models.source import FileType, SourceFile


def _file(package: str, name: str = "A") -> SourceFile:
    return SourceFile(path=f"{name}.java", package=package, class_name=name)


class TestParseSource:
    """Tests for single-file lexical extraction."""

    def test_extracts_header_facts(self) -> None:
        text = """package com.shop.user;

import java.util.UUID;
import static org.junit.Assert.assertEquals;
import com.shop.common.*;

@Entity
@Table(name = "users")
public class User extends BaseEntity implements Serializable, Comparable<User> {
    @Id
    private UUID id;
}
"""
        result = parse_source(text, "/p/User.java")

        assert result.package == "com.shop.user"
        assert result.class_name == "User"
        assert result.imports == (
            "java.util.UUID",
            "org.junit.Assert.assertEquals",
            "com.shop.common.*",
        )
        assert result.annotations == ("Entity", "Table")
        assert result.extends_class == "BaseEntity"
        assert result.implements == ("Serializable", "Comparable")
        assert result.file_type == FileType.ENTITY
        assert not result.is_interface
        assert not result.is_abstract

    def test_stops_at_first_type_declaration(self) -> None:
        text = """package a;
public class Outer {
    @Service
    static class Inner {}
}
"""
        result = parse_source(text, "Outer.java")

        assert result.class_name == "Outer"
        assert result.annotations == ()

    def test_interface_extends_are_interfaces(self) -> None:
        text = "public interface UserRepository extends JpaRepository<User, Long> {\n}\n"
        result = parse_source(text, "UserRepository.java")

        assert result.is_interface
        assert result.implements == ("JpaRepository",)
        assert result.extends_class == ""
        assert result.file_type == FileType.REPOSITORY

    def test_generic_bounds_are_not_superclasses(self) -> None:
        text = "public class Box<T extends Number> extends Base<T> implements Comparable<Box<T>> {\n"
        result = parse_source(text, "Box.java")

        assert result.class_name == "Box"
        assert result.extends_class == "Base"
        assert result.implements == ("Comparable",)

    def test_object_superclass_is_dropped(self) -> None:
        result = parse_source("class Thing extends Object {}\n", "Thing.java")
        assert result.extends_class == ""

    def test_abstract_class(self) -> None:
        result = parse_source("public abstract class BaseEntity {\n}\n", "BaseEntity.java")
        assert result.is_abstract
        assert result.class_name == "BaseEntity"

    def test_record_and_enum_declarations(self) -> None:
        assert parse_source("public record UserResponse(String name) {}\n", "x.java").class_name == (
            "UserResponse"
        )
        assert parse_source("enum Status { ON, OFF }\n", "x.java").class_name == "Status"

    def test_block_comments_are_skipped(self) -> None:
        text = """package a;
/**
 * class Fake is documented here
 * @Service
 */
/* import b.C; */
// class AlsoFake
@Controller
public class Real {}
"""
        result = parse_source(text, "Real.java")

        assert result.class_name == "Real"
        assert result.imports == ()
        assert result.annotations == ("Controller",)

    def test_malformed_file_falls_back_to_file_name(self) -> None:
        result = parse_source("package a.b;\n@Service\nthis is not java", "/src/a/b/Broken.java")

        assert result.package == "a.b"
        assert result.class_name == "Broken"
        assert result.file_type == FileType.SERVICE

    def test_test_files_classify_as_test(self) -> None:
        result = parse_source("@Service\nclass UserServiceTest {}\n", "T.java", is_test=True)
        assert result.file_type == FileType.TEST

    def test_entity_named_controller_is_entity(self) -> None:
        result = parse_source("@Entity\npublic class FooController {}\n", "FooController.java")
        assert result.file_type == FileType.ENTITY


class TestBasePackage:
    """Tests for base package inference."""

    def test_deepest_universal_prefix(self) -> None:
        files = [_file("a.b.c.one"), _file("a.b.c.two"), _file("a.b.c.three")]
        assert detect_base_package(files) == "a.b.c"

    def test_single_package(self) -> None:
        assert detect_base_package([_file("com.x.user"), _file("com.x.user")]) == "com.x.user"

    def test_default_package_falls_back_to_trimmed_common_prefix(self) -> None:
        files = [_file(""), _file("com.x.a"), _file("com.x.b")]
        assert detect_base_package(files) == "com"

    def test_fallback_drops_last_shared_segment(self) -> None:
        files = [_file("a.b.c"), _file("a.b.d"), _file("")]
        assert detect_base_package(files) == "a"

    def test_single_segment_fallback_is_kept(self) -> None:
        assert detect_base_package([_file("com"), _file("")]) == "com"

    def test_no_files(self) -> None:
        assert detect_base_package([]) == ""

    def test_common_package_prefix_respects_segments(self) -> None:
        assert common_package_prefix(["com.abc.x", "com.abd.y"]) == "com"
        assert common_package_prefix(["org.a", "com.a"]) == ""
        assert common_package_prefix([]) == ""


class _BrokenWalkFileSystem(MemoryFileSystem):
    def walk_files(self, root: Path | str) -> Iterator[FileEntry]:
        raise PermissionError(f"denied: {root}")


class _UnreadableFileSystem(MemoryFileSystem):
    def read_text(self, path: Path | str) -> str:
        if Path(path).name == "Locked.java":
            raise PermissionError(f"denied: {path}")
        return super().read_text(path)


class TestScanner:
    """Tests for scanning source roots."""

    def test_missing_source_roots_yield_empty_scan(
        self, memory_fs: MemoryFileSystem, project_dir: Path
    ) -> None:
        result = Scanner(project_dir, fs=memory_fs).scan()

        assert result.main_files == ()
        assert result.test_files == ()
        assert result.base_package == ""
        assert result.build_tool == ""

    def test_scans_main_and_test_roots(self, memory_fs, project_dir, write_java) -> None:
        write_java("com.x.user", "UserController", annotations=["RestController"])
        write_java("com.x.user", "UserService", annotations=["Service"])
        write_java("com.x.user", "UserServiceTest", test=True, imports=["org.mockito.Mock"])
        memory_fs.write_text(project_dir / "src/main/java/com/x/README.md", "not java")

        result = Scanner(project_dir, fs=memory_fs).scan()

        assert [f.class_name for f in result.main_files] == ["UserController", "UserService"]
        assert [f.file_type for f in result.main_files] == [FileType.CONTROLLER, FileType.SERVICE]
        assert [f.file_type for f in result.test_files] == [FileType.TEST]
        assert result.base_package == "com.x.user"
        assert result.source_root == "src/main/java"

    def test_custom_source_root(self, memory_fs, project_dir) -> None:
        memory_fs.write_text(project_dir / "app/src/A.java", "package p;\nclass A {}\n")

        result = Scanner(project_dir, fs=memory_fs, source_root="app/src").scan()

        assert [f.class_name for f in result.main_files] == ["A"]
        assert result.source_root == "app/src"

    @pytest.mark.parametrize(
        "manifests,expected",
        [
            ([], (False, False, "")),
            (["pom.xml"], (True, False, "maven")),
            (["build.gradle"], (False, True, "gradle")),
            (["build.gradle.kts"], (False, True, "gradle")),
            (["pom.xml", "build.gradle"], (True, True, "gradle")),
        ],
    )
    def test_detect_build_tool(self, memory_fs, project_dir, manifests, expected) -> None:
        for name in manifests:
            memory_fs.write_text(project_dir / name, "")

        assert Scanner(project_dir, fs=memory_fs).detect_build_tool() == expected

    def test_unreadable_file_is_skipped(self, project_dir) -> None:
        fs = _UnreadableFileSystem()
        fs.write_text(project_dir / "src/main/java/p/Locked.java", "class Locked {}")
        fs.write_text(project_dir / "src/main/java/p/Open.java", "package p;\nclass Open {}")

        result = Scanner(project_dir, fs=fs).scan()

        assert [f.class_name for f in result.main_files] == ["Open"]

    def test_walk_failure_raises_scan_error(self, project_dir) -> None:
        fs = _BrokenWalkFileSystem()
        fs.write_text(project_dir / "src/main/java/A.java", "class A {}")

        with pytest.raises(ScanError):
            Scanner(project_dir, fs=fs).scan()
