"""mpv-probe command line: global options and command registration."""

from pathlib import Path

import click

from mpv_probe.cli.exit_codes import ExitCode
from mpv_probe.cli.output import error_exit
from mpv_probe.config import ConfigError, get_config


def _configure_logging(
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Install log handlers before any command runs.

    The --log-* flags override the [logging] table of the config file.
    Exits with CONFIG_ERROR if either is invalid.
    """
    from mpv_probe.config.logging_factory import configure_logging_from_cli

    try:
        config = get_config(config_path=config_path)
        configure_logging_from_cli(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ConfigError as e:
        error_exit(e.message, ExitCode.CONFIG_ERROR)
    except ValueError as e:
        error_exit(f"Invalid logging configuration: {e}", ExitCode.CONFIG_ERROR)


@click.group()
@click.version_option(package_name="mpv-probe")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Log verbosity (default: info, or [logging] level).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Also write logs to this file.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Emit one JSON object per log line.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.mpv-probe/config.toml).",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    config_path: Path | None,
) -> None:
    """mpv Probe - Measure which media files mpv plays without conversion."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    _configure_logging(config_path, log_level, log_file, log_json)


def _register_commands() -> None:
    # Command modules import from this package
    from mpv_probe.cli.batch import batch_command
    from mpv_probe.cli.inspect import inspect_command
    from mpv_probe.cli.step_bench import step_bench_command

    for command in (batch_command, inspect_command, step_bench_command):
        main.add_command(command)


_register_commands()
