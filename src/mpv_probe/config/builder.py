"""Layered configuration: config file, then environment, then CLI flags.

Each layer is read into a flat ConfigSource. ConfigBuilder applies them in
precedence order and maps the surviving values onto the section
dataclasses in config.models, whose own defaults fill the gaps.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from mpv_probe.config.env import EnvReader
from mpv_probe.config.models import (
    LoggingConfig,
    PlayerConfig,
    ProbeConfig,
    ProbeToolConfig,
    RulesConfig,
)


@dataclass
class ConfigSource:
    """One layer of settings. None leaves the lower layer's value alone."""

    mpv_path: Path | None = None
    startup_timeout_ms: int | None = None
    request_timeout_ms: int | None = None
    load_timeout_ms: int | None = None
    pause_on_start: bool | None = None
    extra_args: list[str] | None = None
    ipc_socket_path: Path | None = None

    settle_delay_ms: int | None = None
    extensions: list[str] | None = None

    rules_file: Path | None = None
    unsupported_codecs: list[str] | None = None
    unsupported_container_extensions: list[str] | None = None

    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


_SECTIONS: dict[str, type] = {
    "player": PlayerConfig,
    "probe": ProbeConfig,
    "rules": RulesConfig,
    "logging": LoggingConfig,
}

# ConfigSource field -> (config.toml table, key in that table and in the
# section dataclass)
_LAYOUT: dict[str, tuple[str, str]] = {
    "mpv_path": ("player", "path"),
    "startup_timeout_ms": ("player", "startup_timeout_ms"),
    "request_timeout_ms": ("player", "request_timeout_ms"),
    "load_timeout_ms": ("player", "load_timeout_ms"),
    "pause_on_start": ("player", "pause_on_start"),
    "extra_args": ("player", "extra_args"),
    "ipc_socket_path": ("player", "ipc_socket_path"),
    "settle_delay_ms": ("probe", "settle_delay_ms"),
    "extensions": ("probe", "extensions"),
    "rules_file": ("rules", "file"),
    "unsupported_codecs": ("rules", "unsupported_codecs"),
    "unsupported_container_extensions": (
        "rules",
        "unsupported_container_extensions",
    ),
    "logging_level": ("logging", "level"),
    "logging_file": ("logging", "file"),
    "logging_format": ("logging", "format"),
    "logging_include_stderr": ("logging", "include_stderr"),
    "logging_max_bytes": ("logging", "max_bytes"),
    "logging_backup_count": ("logging", "backup_count"),
}

_PATH_FIELDS = frozenset({"mpv_path", "ipc_socket_path", "rules_file", "logging_file"})


class ConfigBuilder:
    """Merge ConfigSources into a ProbeToolConfig.

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource) -> None:
        """Layer source over everything applied so far."""
        self._values.update(
            (name, value) for name, value in asdict(source).items() if value is not None
        )

    def build(self) -> ProbeToolConfig:
        """Build the final config; unset values take the model defaults.

        Raises:
            ValueError: If a section fails its own validation.
        """
        kwargs: dict[str, dict[str, Any]] = {section: {} for section in _SECTIONS}
        for name, value in self._values.items():
            section, key = _LAYOUT[name]
            kwargs[section][key] = list(value) if isinstance(value, list) else value
        return ProbeToolConfig(
            **{section: cls(**kwargs[section]) for section, cls in _SECTIONS.items()}
        )


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create a ConfigSource from a parsed config.toml.

    Unknown tables and keys are ignored.
    """
    values: dict[str, Any] = {}
    for name, (table, key) in _LAYOUT.items():
        value = file_config.get(table, {}).get(key)
        if name in _PATH_FIELDS:
            value = _optional_path(value)
        values[name] = value
    return ConfigSource(**values)


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create a ConfigSource from MPV_PROBE_* environment variables."""
    return ConfigSource(
        mpv_path=reader.get_path("MPV_PROBE_MPV_PATH"),
        startup_timeout_ms=reader.get_int("MPV_PROBE_STARTUP_TIMEOUT_MS"),
        request_timeout_ms=reader.get_int("MPV_PROBE_REQUEST_TIMEOUT_MS"),
        load_timeout_ms=reader.get_int("MPV_PROBE_LOAD_TIMEOUT_MS"),
        pause_on_start=reader.get_bool("MPV_PROBE_PAUSE_ON_START"),
        settle_delay_ms=reader.get_int("MPV_PROBE_SETTLE_DELAY_MS"),
        extensions=reader.get_list("MPV_PROBE_EXTENSIONS"),
        rules_file=reader.get_path("MPV_PROBE_RULES_PATH"),
        logging_level=reader.get_str("MPV_PROBE_LOG_LEVEL"),
    )
