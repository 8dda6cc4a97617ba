"""CLI batch command: probe every media file under a directory."""

import logging
import sys
from pathlib import Path

import click

from mpv_probe.classification import summarize
from mpv_probe.classification.formatters import format_human, format_json
from mpv_probe.cli.exit_codes import ExitCode
from mpv_probe.cli.output import error_exit, print_result, warning_output
from mpv_probe.cli.settings import load_settings, parse_extensions
from mpv_probe.domain.models import ClassificationVerdict
from mpv_probe.player import MpvSession, ProcessStartError
from mpv_probe.probe import run_batch
from mpv_probe.scanner import discover_media_files

logger = logging.getLogger(__name__)


@click.command("batch")
@click.argument("root", type=click.Path(path_type=Path))
@click.option(
    "--rules",
    "rules_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML file listing unsupported codecs and containers.",
)
@click.option(
    "--settle-delay-ms",
    type=click.IntRange(min=0),
    default=None,
    help="Pause after each load before properties are read (default: 200).",
)
@click.option(
    "--extensions",
    default=None,
    help="Comma-separated file extensions to probe (e.g. mp4,mkv).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text)",
)
@click.pass_context
def batch_command(
    ctx: click.Context,
    root: Path,
    rules_path: Path | None,
    settle_delay_ms: int | None,
    extensions: str | None,
    output_format: str,
) -> None:
    """Probe media files with mpv and report conversions it makes unnecessary.

    ROOT is a directory searched recursively (or a single media file). One
    mpv process is reused for every file. Individual files that fail to
    load are listed in the report and do not change the exit code.
    """
    json_output = output_format == "json"
    config, rules = load_settings(
        ctx,
        json_output,
        settle_delay_ms=settle_delay_ms,
        rules_path=rules_path,
        extensions=parse_extensions(extensions),
    )

    if not root.exists():
        error_exit(
            f"Path not found: {root}",
            ExitCode.TARGET_NOT_FOUND,
            json_output,
            path=root,
        )

    if root.is_file():
        files = [root]
    else:
        files = discover_media_files(root, config.probe.extensions)

    verdicts: list[ClassificationVerdict] = []
    interrupted = False

    if not files:
        warning_output(f"No media files found under {root}", json_output)
    else:
        logger.info("Probing %d file(s) under %s", len(files), root)
        try:
            with MpvSession.start(config.player) as session:
                for verdict in run_batch(
                    session, files, rules, config.probe.settle_delay_ms
                ):
                    verdicts.append(verdict)
        except ProcessStartError as e:
            error_exit(e.message, ExitCode.PLAYER_START_FAILED, json_output)
        except KeyboardInterrupt:
            interrupted = True
            logger.warning(
                "Interrupted after %d of %d file(s)", len(verdicts), len(files)
            )

    report = summarize(verdicts)
    print_result(
        json_output,
        lambda: format_human(report, rules, interrupted=interrupted),
        lambda: format_json(report, interrupted=interrupted),
    )

    if interrupted:
        sys.exit(ExitCode.INTERRUPTED)
