"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from stackprint import __version__
from stackprint.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def project(temp_dir: Path, write_disk_java) -> Path:
    write_disk_java("com.x.controller", "UserController", annotations=["RestController"])
    write_disk_java("com.x.service", "UserService", annotations=["Service"])
    write_disk_java("com.x.repository", "UserRepository", kind="interface")
    write_disk_java("com.x.entity", "User", annotations=["Entity", "Data"])
    return temp_dir


class TestDetectCommand:
    """Tests for stackprint detect."""

    def test_json_output(self, runner: CliRunner, project: Path) -> None:
        result = runner.invoke(cli, ["detect", str(project), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["architecture"] == "layered"
        assert data["base_package"] == "com.x"
        assert data["lombok"]["use_data"] is True
        assert (project / ".stackprint" / "profile.json").exists()

    def test_summary_output(self, runner: CliRunner, project: Path) -> None:
        result = runner.invoke(cli, ["detect", str(project)])

        assert result.exit_code == 0, result.output
        assert "Architecture: layered" in result.output
        assert "Base package: com.x" in result.output

    def test_no_cache_leaves_project_untouched(self, runner: CliRunner, project: Path) -> None:
        result = runner.invoke(cli, ["detect", str(project), "--no-cache", "--json"])

        assert result.exit_code == 0, result.output
        assert not (project / ".stackprint").exists()

    def test_missing_project(self, runner: CliRunner, temp_dir: Path) -> None:
        result = runner.invoke(cli, ["detect", str(temp_dir / "nope")])
        assert result.exit_code != 0


class TestCacheCommands:
    """Tests for stackprint cache info/clear."""

    def test_info_and_clear(self, runner: CliRunner, project: Path) -> None:
        runner.invoke(cli, ["detect", str(project)])

        info = runner.invoke(cli, ["cache", "info", str(project)])
        assert info.exit_code == 0, info.output
        data = json.loads(info.output)
        assert data["exists"] is True
        assert data["valid"] is True

        cleared = runner.invoke(cli, ["cache", "clear", str(project)])
        assert cleared.exit_code == 0
        assert "Cleared" in cleared.output
        assert not (project / ".stackprint").exists()

        again = runner.invoke(cli, ["cache", "clear", str(project)])
        assert again.exit_code == 0
        assert "No cache to clear" in again.output


class TestLockCommands:
    """Tests for stackprint lock/unlock."""

    def test_lock_group_and_field(self, runner: CliRunner, project: Path) -> None:
        result = runner.invoke(cli, ["lock", str(project), "arch", "base_package"])

        assert result.exit_code == 0, result.output
        data = json.loads((project / ".stackprint" / "profile.json").read_text())
        assert data["arch_locked"] is True
        assert data["locked_fields"] == ["base_package"]

        result = runner.invoke(cli, ["unlock", str(project), "arch", "base_package"])

        assert result.exit_code == 0, result.output
        data = json.loads((project / ".stackprint" / "profile.json").read_text())
        assert data["arch_locked"] is False
        assert data["locked_fields"] == []

    def test_unknown_field(self, runner: CliRunner, project: Path) -> None:
        result = runner.invoke(cli, ["lock", str(project), "colour"])

        assert result.exit_code == 2
        assert not (project / ".stackprint").exists()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])
    assert __version__ in result.output
