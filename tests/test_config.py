"""Tests for environment configuration and logging helpers."""

import logging
from datetime import timedelta

import pytest

from stackprint import config
from stackprint.logging import log_operation, logger, progress_bar


class TestConfig:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "STACKPRINT_SOURCE_ROOT",
            "STACKPRINT_TEST_ROOT",
            "STACKPRINT_CACHE_MAX_AGE_HOURS",
            "STACKPRINT_DISABLE_PROGRESS",
        ):
            monkeypatch.delenv(name, raising=False)

        assert config.source_root() == "src/main/java"
        assert config.test_root() == "src/test/java"
        assert config.cache_max_age() == timedelta(hours=24)
        assert not config.progress_disabled()

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STACKPRINT_SOURCE_ROOT", "java")
        monkeypatch.setenv("STACKPRINT_TEST_ROOT", "test-java")
        monkeypatch.setenv("STACKPRINT_CACHE_MAX_AGE_HOURS", "0.5")
        monkeypatch.setenv("STACKPRINT_DISABLE_PROGRESS", "yes")

        assert config.source_root() == "java"
        assert config.test_root() == "test-java"
        assert config.cache_max_age() == timedelta(minutes=30)
        assert config.progress_disabled()

    @pytest.mark.parametrize("raw", ["abc", "0", "-3"])
    def test_invalid_max_age_falls_back(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("STACKPRINT_CACHE_MAX_AGE_HOURS", raw)
        assert config.cache_max_age() == config.DEFAULT_CACHE_MAX_AGE


class TestLogging:
    """Tests for logging helpers."""

    def test_log_operation_records_timing(self) -> None:
        with log_operation("unit", {"k": "v"}, level=logging.DEBUG) as timing:
            pass
        assert timing.elapsed >= 0.0
        assert timing.elapsed_ms == pytest.approx(timing.elapsed * 1000)

    def test_log_operation_reraises(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger=logger.name):
            with pytest.raises(RuntimeError):
                with log_operation("boom"):
                    raise RuntimeError("bad")
        assert "boom failed" in caplog.text

    def test_progress_bar_passthrough_when_disabled(self) -> None:
        items = [1, 2, 3]
        assert progress_bar(items, desc="x", disable=True) is items
