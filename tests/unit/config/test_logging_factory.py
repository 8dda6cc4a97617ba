"""Tests for config/logging_factory.py."""

from pathlib import Path
from unittest.mock import patch

import pytest

from mpv_probe.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from mpv_probe.config.models import LoggingConfig


class TestBuildLoggingConfig:
    """Tests for build_logging_config."""

    def test_keeps_base_values(self) -> None:
        base = LoggingConfig(level="warning", format="json", backup_count=2)

        result = build_logging_config(base)

        assert result == base

    def test_overrides(self, temp_dir: Path) -> None:
        base = LoggingConfig(level="warning")

        result = build_logging_config(
            base, level="debug", file=temp_dir / "probe.log", format="json"
        )

        assert result.level == "debug"
        assert result.file == temp_dir / "probe.log"
        assert result.format == "json"

    def test_invalid_override(self) -> None:
        with pytest.raises(ValueError, match="level"):
            build_logging_config(LoggingConfig(), level="verbose")


class TestConfigureLoggingFromCli:
    """Tests for configure_logging_from_cli."""

    def test_log_file_keeps_stderr(self, temp_dir: Path) -> None:
        with patch("mpv_probe.logging.configure_logging") as configure:
            result = configure_logging_from_cli(
                LoggingConfig(), file=temp_dir / "probe.log"
            )

        assert result.include_stderr is True
        configure.assert_called_once_with(result)

    def test_without_file(self) -> None:
        with patch("mpv_probe.logging.configure_logging") as configure:
            result = configure_logging_from_cli(LoggingConfig(), level="error")

        assert result.level == "error"
        assert result.include_stderr is False
        configure.assert_called_once_with(result)
