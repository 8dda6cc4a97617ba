"""Core utilities package.

Pure functions with no dependencies on the player or configuration.
"""

from mpv_probe.core.formatting import (
    format_bitrate,
    format_fps,
    format_speedup,
    format_time,
)

__all__ = [
    "format_bitrate",
    "format_fps",
    "format_speedup",
    "format_time",
]
