"""Root logger setup for mpv Probe runs."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from mpv_probe.logging.context import ProbeContextFilter
from mpv_probe.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from mpv_probe.config.models import LoggingConfig

# probe_tag is "[F003] " while file 3 of a batch is being probed
TEXT_FORMAT = "%(asctime)s - %(probe_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _formatter(log_format: str) -> logging.Formatter:
    if log_format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def _file_handler(
    log_file: Path, max_bytes: int, backup_count: int
) -> logging.Handler | None:
    """Open the rotating log file, or return None if it cannot be opened."""
    path = Path(log_file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {log_file}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to config.

    Every handler gets the same level, formatter and ProbeContextFilter.
    stderr is used when no file is configured, when the file cannot be
    opened, or when include_stderr is set.

    Args:
        config: Logging configuration.
    """
    handlers: list[logging.Handler] = []
    file_handler = None
    if config.file is not None:
        file_handler = _file_handler(
            config.file, config.max_bytes, config.backup_count
        )
    if file_handler is not None:
        handlers.append(file_handler)
    if file_handler is None or config.include_stderr:
        handlers.append(logging.StreamHandler(sys.stderr))

    level = _level(config.level)
    formatter = _formatter(config.format)
    context_filter = ProbeContextFilter()

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)
