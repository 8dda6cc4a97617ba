"""Formatters for single-file probe views and frame-step benchmarks."""

import json
from pathlib import Path
from typing import Any

from mpv_probe.core.formatting import format_bitrate, format_fps, format_time
from mpv_probe.domain.models import ClassificationVerdict, FrameStepStats


def _legacy_line(verdict: ClassificationVerdict) -> str:
    if verdict.would_require_conversion and verdict.reason is not None:
        return f"would convert ({verdict.reason.label})"
    return "plays directly"


def _as_number(value: Any) -> float | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return None


def format_inspect_human(
    verdict: ClassificationVerdict, details: dict[str, Any]
) -> str:
    """Format a probed file with its detailed properties.

    Args:
        verdict: Verdict for the probed file.
        details: Output of read_detailed_properties (may be empty).

    Returns:
        Formatted string for terminal output.
    """
    result = verdict.probe_result
    lines = [f"File: {result.file_path}"]

    if not result.succeeded:
        lines.append(f"  Failed: {result.error_message}")
        lines.append(f"  Load time: {result.load_time_ms} ms")
        return "\n".join(lines)

    descriptor = result.descriptor
    time_position = _as_number(details.get("time_position"))
    frame_number = details.get("frame_number")

    lines.append(f"  Codec: {descriptor.codec}")
    lines.append(f"  Format: {descriptor.container or 'Unknown'}")
    lines.append(f"  Resolution: {descriptor.resolution or 'Unknown'}")
    lines.append(f"  FPS: {format_fps(descriptor.frame_rate)}")
    lines.append(f"  Duration: {format_time(descriptor.duration_seconds)}")
    lines.append(f"  Pixel Format: {details.get('pixel_format') or 'Unknown'}")
    lines.append(f"  Bitrate: {format_bitrate(_as_number(details.get('bitrate')))}")
    lines.append(f"  Current Time: {format_time(time_position)}")
    lines.append(
        f"  Current Frame: {frame_number if frame_number is not None else 'Unknown'}"
    )
    lines.append(f"  Load time: {result.load_time_ms} ms")
    lines.append(f"  Legacy pipeline: {_legacy_line(verdict)}")
    return "\n".join(lines)


def format_inspect_json(
    verdict: ClassificationVerdict, details: dict[str, Any]
) -> str:
    """Format a probed file with its detailed properties as JSON."""
    result = verdict.probe_result
    descriptor = result.descriptor
    data: dict[str, Any] = {
        "file": str(result.file_path),
        "succeeded": result.succeeded,
        "error": result.error_message,
        "load_time_ms": result.load_time_ms,
        "codec": descriptor.codec,
        "container": descriptor.container,
        "width": descriptor.width,
        "height": descriptor.height,
        "frame_rate": descriptor.frame_rate,
        "duration_seconds": descriptor.duration_seconds,
        "would_require_conversion": verdict.would_require_conversion,
        "reason": verdict.reason.value if verdict.reason is not None else None,
        "details": details,
    }
    return json.dumps(data, indent=2, default=str)


def format_step_bench_human(file_path: Path, stats: list[FrameStepStats]) -> str:
    """Format frame-step benchmark results, one line per direction."""
    lines = [f"Frame-step latency: {file_path}"]
    for entry in stats:
        attempted = len(entry.samples_ms) + entry.failures
        line = (
            f"  {entry.direction.value.capitalize()}: "
            f"avg {entry.average_ms:.2f} ms over {len(entry.samples_ms)} step(s)"
        )
        if entry.samples_ms:
            line += f" (min {min(entry.samples_ms)} ms, max {max(entry.samples_ms)} ms)"
        if entry.failures:
            line += f", {entry.failures} of {attempted} failed"
        lines.append(line)
    return "\n".join(lines)
