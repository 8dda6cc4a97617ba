"""Result and error printing shared by the CLI commands.

Results go to stdout and diagnostics to stderr, so `--format json` output
can be piped straight into another tool.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn

import click

from mpv_probe.cli.exit_codes import ExitCode


def error_document(
    message: str, code: ExitCode | int, path: Path | None = None
) -> dict[str, Any]:
    """Build the JSON error object written by error_exit."""
    error: dict[str, Any] = {
        "code": code.name if isinstance(code, ExitCode) else "UNKNOWN_ERROR",
        "message": message,
    }
    if path is not None:
        error["path"] = str(path)
    return {"status": "failed", "error": error}


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
    path: Path | None = None,
) -> NoReturn:
    """Print an error to stderr and exit.

    Args:
        message: What went wrong.
        code: Process exit status.
        json_output: Print a JSON error object instead of "Error: ...".
        path: File or directory the error is about, if any.
    """
    if json_output:
        click.echo(json.dumps(error_document(message, code, path)), err=True)
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(int(code))


def warning_output(message: str, json_output: bool = False) -> None:
    """Print a warning to stderr (nothing in JSON mode)."""
    if not json_output:
        click.echo(f"Warning: {message}", err=True)


def print_result(
    json_output: bool,
    human: Callable[[], str],
    as_json: Callable[[], str],
) -> None:
    """Print a command result in the requested format.

    Only the chosen formatter is called.
    """
    click.echo(as_json() if json_output else human())
