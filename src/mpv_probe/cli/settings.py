"""Configuration and rule loading shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

import click

from mpv_probe.classification.codecs import UnsupportedRuleSet
from mpv_probe.cli.exit_codes import ExitCode
from mpv_probe.cli.output import error_exit
from mpv_probe.config import ConfigError, ProbeToolConfig, get_config
from mpv_probe.rules import RulesValidationError, resolve_rules


def parse_extensions(value: str | None) -> list[str] | None:
    """Split a comma-separated extension list (None when not given)."""
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def load_settings(
    ctx: click.Context,
    json_output: bool = False,
    *,
    settle_delay_ms: int | None = None,
    rules_path: Path | None = None,
    extensions: list[str] | None = None,
) -> tuple[ProbeToolConfig, UnsupportedRuleSet]:
    """Load configuration and rules, exiting with CONFIG_ERROR on failure.

    Args:
        ctx: Click context carrying the group's --config path.
        json_output: Whether errors are reported as JSON.
        settle_delay_ms: CLI override for the settle delay.
        rules_path: CLI override for the rules file.
        extensions: CLI override for discovered extensions.

    Returns:
        Tuple of (config, rules).
    """
    obj = ctx.obj or {}
    try:
        config = get_config(
            config_path=obj.get("config_path"),
            settle_delay_ms=settle_delay_ms,
            rules_path=rules_path,
            extensions=extensions,
        )
    except ConfigError as e:
        error_exit(e.message, ExitCode.CONFIG_ERROR, json_output, path=e.path)

    try:
        rules = resolve_rules(config.rules)
    except (RulesValidationError, FileNotFoundError) as e:
        message = e.message if isinstance(e, RulesValidationError) else str(e)
        error_exit(
            message, ExitCode.CONFIG_ERROR, json_output, path=config.rules.file
        )
    return config, rules
