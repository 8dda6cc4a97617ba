"""Formatters for aggregate classification reports.

Shared by the batch command for human-readable and JSON output.
"""

import json
from typing import Any

from mpv_probe.classification.codecs import UnsupportedRuleSet, is_codec_unsupported
from mpv_probe.core.formatting import format_speedup
from mpv_probe.domain.models import AggregateReport

# Rough time the legacy pipeline spent converting one file
CONVERSION_ESTIMATE_MS: tuple[int, int] = (5000, 30000)

SUPPORTED_MARK = "✓"
UNSUPPORTED_MARK = "⚠"


def _estimate_label() -> str:
    low, high = CONVERSION_ESTIMATE_MS
    return f"~{low}-{high} ms"


def format_human(
    report: AggregateReport, rules: UnsupportedRuleSet, interrupted: bool = False
) -> str:
    """Format an aggregate report for terminal output.

    Args:
        report: The report to format.
        rules: Rules used to mark codecs the legacy pipeline converts.
        interrupted: Whether the run stopped before every file was probed.

    Returns:
        Formatted multi-line string.
    """
    lines: list[str] = []

    if interrupted:
        lines.append("Run interrupted; partial results follow.")
        lines.append("")

    lines.append("Summary:")
    lines.append(f"  Total files probed: {report.total}")
    lines.append(f"  Succeeded: {report.succeeded_count}")
    lines.append(f"  Failed: {report.failed_count}")
    lines.append("")

    lines.append("Conversion analysis:")
    lines.append(f"  Played directly by mpv: {report.succeeded_count}")
    lines.append(f"  Legacy pipeline would convert: {report.conversions_avoided}")
    lines.append(f"  Conversions avoided: {report.conversions_avoided}")
    lines.append("")

    if report.conversions:
        lines.append("Files the legacy pipeline converts but mpv plays directly:")
        for entry in report.conversions:
            codec = entry.codec or "unknown codec"
            lines.append(f"  - {entry.file_path.name} ({codec}) - {entry.reason.label}")
            lines.append(
                f"    Load time: {entry.load_time_ms} ms "
                f"(vs {_estimate_label()} conversion)"
            )
        lines.append("")

    if report.failures:
        lines.append("Failed files:")
        for failure in report.failures:
            lines.append(f"  - {failure.file_path} - {failure.error_message}")
        lines.append("")

    if report.succeeded_count > 0:
        low, high = CONVERSION_ESTIMATE_MS
        average = report.average_load_time_ms
        lines.append("Performance:")
        lines.append(f"  Average load time: {average:.2f} ms")
        lines.append(f"  Legacy conversion estimate: {_estimate_label()}")
        lines.append(
            f"  Speed-up: {format_speedup(average, low)} - "
            f"{format_speedup(average, high)} faster"
        )
        lines.append("")

    if report.per_codec_counts:
        lines.append("Codecs:")
        for codec, count in report.per_codec_counts.items():
            mark = (
                UNSUPPORTED_MARK
                if is_codec_unsupported(codec, rules)
                else SUPPORTED_MARK
            )
            lines.append(f"  {mark} {codec}: {count} file(s)")

    return "\n".join(lines).rstrip("\n")


def report_to_dict(report: AggregateReport) -> dict[str, Any]:
    """Convert a report to a JSON-serializable dictionary."""
    return {
        "total": report.total,
        "succeeded": report.succeeded_count,
        "failed": report.failed_count,
        "conversions_avoided": report.conversions_avoided,
        "average_load_time_ms": round(report.average_load_time_ms, 2),
        "codecs": dict(report.per_codec_counts),
        "conversions": [
            {
                "file": str(entry.file_path),
                "codec": entry.codec,
                "reason": entry.reason.value,
                "load_time_ms": entry.load_time_ms,
            }
            for entry in report.conversions
        ],
        "failures": [
            {"file": str(failure.file_path), "error": failure.error_message}
            for failure in report.failures
        ],
    }


def format_json(report: AggregateReport, interrupted: bool = False) -> str:
    """Format an aggregate report as JSON."""
    data = report_to_dict(report)
    data["interrupted"] = interrupted
    return json.dumps(data, indent=2)
