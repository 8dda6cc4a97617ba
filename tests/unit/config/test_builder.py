"""Tests for config/builder.py."""

from pathlib import Path

import pytest

from mpv_probe.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mpv_probe.config.env import EnvReader
from mpv_probe.config.models import DEFAULT_EXTENSIONS


class TestConfigBuilder:
    """Tests for ConfigBuilder."""

    def test_defaults(self) -> None:
        config = ConfigBuilder().build()

        assert config.player.path is None
        assert config.player.startup_timeout_ms == 5000
        assert config.player.pause_on_start is True
        assert config.probe.settle_delay_ms == 200
        assert config.probe.extensions == list(DEFAULT_EXTENSIONS)
        assert config.rules.file is None
        assert config.rules.unsupported_codecs is None
        assert config.logging.level == "info"

    def test_later_source_wins(self) -> None:
        builder = ConfigBuilder()
        builder.apply(ConfigSource(settle_delay_ms=100, load_timeout_ms=3000))
        builder.apply(ConfigSource(settle_delay_ms=50))

        config = builder.build()

        assert config.probe.settle_delay_ms == 50
        assert config.player.load_timeout_ms == 3000

    def test_none_does_not_override(self) -> None:
        builder = ConfigBuilder()
        builder.apply(ConfigSource(mpv_path=Path("/opt/mpv")))
        builder.apply(ConfigSource(mpv_path=None))

        assert builder.build().player.path == Path("/opt/mpv")

    def test_invalid_value(self) -> None:
        builder = ConfigBuilder()
        builder.apply(ConfigSource(request_timeout_ms=0))

        with pytest.raises(ValueError, match="request_timeout_ms"):
            builder.build()


class TestSourceFromFile:
    """Tests for source_from_file."""

    def test_sections(self) -> None:
        source = source_from_file(
            {
                "player": {"path": "/usr/local/bin/mpv", "extra_args": ["--vo=null"]},
                "probe": {"settle_delay_ms": 0, "extensions": ["mkv"]},
                "rules": {"unsupported_codecs": ["h263"]},
                "logging": {"level": "debug", "format": "json"},
            }
        )

        assert source.mpv_path == Path("/usr/local/bin/mpv")
        assert source.extra_args == ["--vo=null"]
        assert source.settle_delay_ms == 0
        assert source.extensions == ["mkv"]
        assert source.unsupported_codecs == ["h263"]
        assert source.unsupported_container_extensions is None
        assert source.logging_level == "debug"
        assert source.logging_format == "json"

    def test_empty(self) -> None:
        assert source_from_file({}) == ConfigSource()


class TestSourceFromEnv:
    """Tests for source_from_env."""

    def test_reads_variables(self) -> None:
        reader = EnvReader(
            env={
                "MPV_PROBE_MPV_PATH": "/opt/mpv/bin/mpv",
                "MPV_PROBE_LOAD_TIMEOUT_MS": "2500",
                "MPV_PROBE_SETTLE_DELAY_MS": "0",
                "MPV_PROBE_RULES_PATH": "/etc/rules.yaml",
                "MPV_PROBE_LOG_LEVEL": "warning",
            }
        )

        source = source_from_env(reader)

        assert source.mpv_path == Path("/opt/mpv/bin/mpv")
        assert source.load_timeout_ms == 2500
        assert source.settle_delay_ms == 0
        assert source.rules_file == Path("/etc/rules.yaml")
        assert source.logging_level == "warning"
        assert source.startup_timeout_ms is None

    def test_empty_environment(self) -> None:
        assert source_from_env(EnvReader(env={})) == ConfigSource()

    def test_extensions_and_pause(self) -> None:
        """Comma lists and boolean words reach the probe and player fields."""
        reader = EnvReader(
            env={
                "MPV_PROBE_EXTENSIONS": "mkv,webm",
                "MPV_PROBE_PAUSE_ON_START": "no",
            }
        )

        builder = ConfigBuilder()
        builder.apply(source_from_env(reader))
        config = builder.build()

        assert config.probe.extensions == ["mkv", "webm"]
        assert config.player.pause_on_start is False
