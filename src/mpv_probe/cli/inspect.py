"""CLI inspect command: probe one file and show detailed properties."""

import sys
from pathlib import Path
from typing import Any

import click

from mpv_probe.classification import evaluate
from mpv_probe.cli.exit_codes import ExitCode
from mpv_probe.cli.output import error_exit, print_result
from mpv_probe.cli.settings import load_settings
from mpv_probe.player import MpvSession, ProcessStartError
from mpv_probe.probe import probe, read_detailed_properties
from mpv_probe.probe.formatters import format_inspect_human, format_inspect_json


@click.command("inspect")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text)",
)
@click.pass_context
def inspect_command(ctx: click.Context, file: Path, output_format: str) -> None:
    """Load FILE in mpv and display its video properties.

    Exits with OPERATION_FAILED (40) when mpv cannot load the file.
    """
    json_output = output_format == "json"

    if not file.is_file():
        error_exit(
            f"File not found: {file}",
            ExitCode.TARGET_NOT_FOUND,
            json_output,
            path=file,
        )

    config, rules = load_settings(ctx, json_output)

    details: dict[str, Any] = {}
    try:
        with MpvSession.start(config.player) as session:
            result = probe(session, file, config.probe.settle_delay_ms)
            if result.succeeded:
                details = read_detailed_properties(session)
    except ProcessStartError as e:
        error_exit(e.message, ExitCode.PLAYER_START_FAILED, json_output)

    verdict = evaluate(result, rules)
    print_result(
        json_output,
        lambda: format_inspect_human(verdict, details),
        lambda: format_inspect_json(verdict, details),
    )

    if not result.succeeded:
        sys.exit(ExitCode.OPERATION_FAILED)
