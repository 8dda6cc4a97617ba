"""Formatting utilities.

Pure functions for presenting probe values in reports.
"""

import math


def format_time(seconds: float | None) -> str:
    """Format a media position as MM:SS.mmm.

    Args:
        seconds: Position or duration in seconds.

    Returns:
        Formatted string; "00:00.000" for None, NaN or non-positive input.

    Examples:
        >>> format_time(75.5)
        '01:15.500'
        >>> format_time(None)
        '00:00.000'
    """
    if seconds is None or not math.isfinite(seconds) or seconds <= 0:
        return "00:00.000"

    total_ms = int(seconds * 1000)
    minutes, remainder_ms = divmod(total_ms, 60_000)
    secs, ms = divmod(remainder_ms, 1000)
    return f"{minutes:02d}:{secs:02d}.{ms:03d}"


def format_bitrate(bits_per_second: float | None) -> str:
    """Format a bitrate in Mbps (e.g. "4.20 Mbps"), or "Unknown"."""
    if bits_per_second is None or not math.isfinite(bits_per_second):
        return "Unknown"
    return f"{bits_per_second / 1_000_000:.2f} Mbps"


def format_fps(frame_rate: float | None) -> str:
    """Format a frame rate with two decimals, or "N/A"."""
    if frame_rate is None:
        return "N/A"
    return f"{frame_rate:.2f}"


def format_speedup(average_load_ms: float, conversion_ms: int) -> str:
    """Format how many times faster a direct load is than a conversion.

    Examples:
        >>> format_speedup(100.0, 5000)
        '50x'
    """
    if average_load_ms <= 0:
        return "n/a"
    return f"{conversion_ms / average_load_ms:.0f}x"
