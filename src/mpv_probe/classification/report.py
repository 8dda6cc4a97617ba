"""Conversion verdicts and batch aggregation.

Everything here is pure: no player access, no I/O, no logging side effects
that change results.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from mpv_probe.classification.codecs import (
    UnsupportedRuleSet,
    canonicalize_codec,
    is_codec_unsupported,
    is_container_unsupported,
)
from mpv_probe.domain.enums import ConversionReason
from mpv_probe.domain.models import (
    AggregateReport,
    ClassificationVerdict,
    ConversionEntry,
    FailureEntry,
    ProbeResult,
)


class ClassificationError(Exception):
    """Raised when a probe result that never succeeded is classified."""

    def __init__(self, message: str, file_path: str | None = None) -> None:
        self.message = message
        self.file_path = file_path
        super().__init__(message)


def classify(
    probe_result: ProbeResult, rules: UnsupportedRuleSet
) -> ClassificationVerdict:
    """Decide whether the legacy pipeline would have converted a file.

    The codec is checked first; a file with both an unsupported codec and
    an unsupported container is reported as UNSUPPORTED_CODEC.

    Args:
        probe_result: A successful probe result.
        rules: Unsupported codec and container rules.

    Returns:
        The verdict for the file.

    Raises:
        ClassificationError: If the probe failed or has no codec.
    """
    codec = probe_result.descriptor.codec
    if not probe_result.succeeded or codec is None:
        detail = probe_result.error_message or "codec undetectable"
        raise ClassificationError(
            f"Cannot classify {probe_result.file_path}: probe did not succeed "
            f"({detail})",
            file_path=str(probe_result.file_path),
        )

    if is_codec_unsupported(codec, rules):
        reason: ConversionReason | None = ConversionReason.UNSUPPORTED_CODEC
    elif is_container_unsupported(probe_result.extension, rules):
        reason = ConversionReason.UNSUPPORTED_CONTAINER
    else:
        reason = None

    return ClassificationVerdict(
        probe_result=probe_result,
        would_require_conversion=reason is not None,
        reason=reason,
    )


def evaluate(
    probe_result: ProbeResult, rules: UnsupportedRuleSet
) -> ClassificationVerdict:
    """Classify successful probes; wrap failed ones in an unclassified verdict.

    Failed probes still need a verdict so they are counted by summarize().
    """
    if not probe_result.succeeded:
        return ClassificationVerdict(probe_result=probe_result)
    return classify(probe_result, rules)


def summarize(verdicts: Iterable[ClassificationVerdict]) -> AggregateReport:
    """Fold verdicts into an aggregate report.

    Failed probes count towards total and failed_count only. The result does
    not depend on the order of the input.

    Args:
        verdicts: Verdicts for every probed file.

    Returns:
        The aggregate report (all zeros for no input).
    """
    total = 0
    load_times: list[int] = []
    per_codec: Counter[str] = Counter()
    conversions: list[ConversionEntry] = []
    failures: list[FailureEntry] = []

    for verdict in verdicts:
        total += 1
        result = verdict.probe_result
        if not result.succeeded:
            failures.append(
                FailureEntry(
                    file_path=result.file_path,
                    error_message=result.error_message or "Unknown error",
                )
            )
            continue

        load_times.append(result.load_time_ms)
        if result.descriptor.codec is not None:
            per_codec[canonicalize_codec(result.descriptor.codec)] += 1
        if verdict.would_require_conversion and verdict.reason is not None:
            conversions.append(
                ConversionEntry(
                    file_path=result.file_path,
                    codec=result.descriptor.codec,
                    reason=verdict.reason,
                    load_time_ms=result.load_time_ms,
                )
            )

    average = sum(load_times) / len(load_times) if load_times else 0.0

    return AggregateReport(
        total=total,
        succeeded_count=len(load_times),
        failed_count=len(failures),
        conversions_avoided=len(conversions),
        average_load_time_ms=average,
        per_codec_counts=dict(sorted(per_codec.items())),
        conversions=tuple(sorted(conversions, key=_conversion_sort_key)),
        failures=tuple(
            sorted(failures, key=lambda e: (str(e.file_path), e.error_message))
        ),
    )


def _conversion_sort_key(entry: ConversionEntry) -> tuple[str, str, str, int]:
    return (
        str(entry.file_path),
        entry.codec or "",
        entry.reason.value,
        entry.load_time_ms,
    )
