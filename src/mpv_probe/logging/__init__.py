"""Structured logging module for mpv Probe.

Provides configurable logging with JSON format support and file rotation,
plus probe context tagging for batch runs.
"""

from mpv_probe.logging.config import configure_logging
from mpv_probe.logging.context import (
    ProbeContextFilter,
    get_probe_context,
    probe_context,
)
from mpv_probe.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "ProbeContextFilter",
    "configure_logging",
    "get_probe_context",
    "probe_context",
]
