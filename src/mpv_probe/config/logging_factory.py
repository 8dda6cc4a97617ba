"""Merging of the global --log-* flags into the configured LoggingConfig."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from mpv_probe.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Return base with every non-None override applied.

    The result is re-validated, so an unknown level or format raises
    ValueError.
    """
    overrides = {
        name: value
        for name, value in (
            ("level", level),
            ("file", file),
            ("format", format),
            ("include_stderr", include_stderr),
        )
        if value is not None
    }
    return replace(base, **overrides)


def configure_logging_from_cli(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
) -> LoggingConfig:
    """Apply --log-level/--log-file/--log-json and install the handlers.

    --log-file adds a file and keeps per-file progress on stderr; a file
    configured only in config.toml replaces stderr unless the config says
    include_stderr.

    Returns:
        The LoggingConfig that was installed.
    """
    from mpv_probe.logging import configure_logging

    final_config = build_logging_config(
        base,
        level=level,
        file=file,
        format=format,
        include_stderr=True if file is not None else None,
    )
    configure_logging(final_config)
    return final_config
