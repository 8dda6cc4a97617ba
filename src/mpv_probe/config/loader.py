"""Locating, reading and merging mpv-probe configuration.

get_config layers, from weakest to strongest: built-in defaults,
~/.mpv-probe/config.toml, MPV_PROBE_* variables, command-line flags.

Recognised variables:
- MPV_PROBE_MPV_PATH: Path to the mpv executable
- MPV_PROBE_STARTUP_TIMEOUT_MS: How long mpv has to open its IPC socket
- MPV_PROBE_REQUEST_TIMEOUT_MS: Bound on every IPC round trip
- MPV_PROBE_LOAD_TIMEOUT_MS: Bound on waiting for a file to load
- MPV_PROBE_PAUSE_ON_START: Start mpv paused (true/false)
- MPV_PROBE_SETTLE_DELAY_MS: Pause between load and property reads
- MPV_PROBE_EXTENSIONS: Comma-separated extensions picked up by discovery
- MPV_PROBE_RULES_PATH: YAML rules file
- MPV_PROBE_LOG_LEVEL: debug, info, warning or error
- MPV_PROBE_CONFIG_PATH: Path to config file (overrides default location)
- MPV_PROBE_DATA_DIR: Base directory (overrides ~/.mpv-probe/)
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from mpv_probe.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mpv_probe.config.env import EnvReader
from mpv_probe.config.models import ProbeToolConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".mpv-probe"
CONFIG_FILE_NAME = "config.toml"


class ConfigError(Exception):
    """Configuration file could not be read or holds invalid values."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)


def _path_from_env(var: str) -> Path | None:
    value = os.environ.get(var)
    return Path(value).expanduser() if value else None


def get_data_dir() -> Path:
    """MPV_PROBE_DATA_DIR, else ~/.mpv-probe."""
    return _path_from_env("MPV_PROBE_DATA_DIR") or DEFAULT_CONFIG_DIR


def get_default_config_path() -> Path:
    """MPV_PROBE_CONFIG_PATH, else config.toml in the data directory."""
    return _path_from_env("MPV_PROBE_CONFIG_PATH") or (
        get_data_dir() / CONFIG_FILE_NAME
    )


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file. If None, uses the default location.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed.
    """
    if path is None:
        path = get_default_config_path()
    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", path) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", path) from e


def get_config(
    config_path: Path | None = None,
    mpv_path: Path | None = None,
    settle_delay_ms: int | None = None,
    rules_path: Path | None = None,
    extensions: list[str] | None = None,
    env_reader: EnvReader | None = None,
) -> ProbeToolConfig:
    """Merge defaults, config file, environment and CLI flags.

    Args:
        config_path: Path to config file (overrides MPV_PROBE_CONFIG_PATH).
        mpv_path: CLI override for the mpv executable.
        settle_delay_ms: CLI override for the settle delay.
        rules_path: CLI override for the rules file.
        extensions: CLI override for discovered file extensions.
        env_reader: Optional EnvReader for testing (uses os.environ if None).

    Returns:
        ProbeToolConfig with merged configuration.

    Raises:
        ConfigError: If the config file is unreadable or a value is invalid.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path()
    file_config = load_config_file(path)

    cli_source = ConfigSource(
        mpv_path=mpv_path,
        settle_delay_ms=settle_delay_ms,
        rules_file=rules_path,
        extensions=extensions,
    )

    builder = ConfigBuilder()
    try:
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        return builder.build()
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}", path) from e
