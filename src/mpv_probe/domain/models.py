"""Domain models for mpv Probe.

These are immutable value objects created once per probed file and folded
into an AggregateReport at the end of a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mpv_probe.domain.enums import ConversionReason, StepDirection


@dataclass(frozen=True)
class MediaDescriptor:
    """Media properties read from the player.

    Every field is optional because each property read may fail on its own.
    None means "unknown", never zero.
    """

    codec: str | None = None
    container: str | None = None
    width: int | None = None
    height: int | None = None
    frame_rate: float | None = None
    duration_seconds: float | None = None

    @property
    def resolution(self) -> str | None:
        """Resolution as WIDTHxHEIGHT, or None if either side is unknown."""
        if self.width is None or self.height is None:
            return None
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of probing a single file."""

    file_path: Path
    descriptor: MediaDescriptor = field(default_factory=MediaDescriptor)
    load_time_ms: int = 0
    succeeded: bool = False
    error_message: str | None = None

    def __post_init__(self) -> None:
        """Validate timing."""
        if self.load_time_ms < 0:
            raise ValueError(f"load_time_ms must be >= 0, got {self.load_time_ms}")

    @property
    def extension(self) -> str:
        """Lowercased file extension including the leading dot."""
        return self.file_path.suffix.lower()


@dataclass(frozen=True)
class ClassificationVerdict:
    """Whether the legacy pipeline would have converted a probed file."""

    probe_result: ProbeResult
    would_require_conversion: bool = False
    reason: ConversionReason | None = None


@dataclass(frozen=True)
class ConversionEntry:
    """A file the legacy pipeline would convert, as listed in the report."""

    file_path: Path
    codec: str | None
    reason: ConversionReason
    load_time_ms: int


@dataclass(frozen=True)
class FailureEntry:
    """A file that could not be probed, as listed in the report."""

    file_path: Path
    error_message: str


@dataclass(frozen=True)
class AggregateReport:
    """Summary of a batch of classification verdicts.

    Entry tuples are sorted by file path so that the report does not depend
    on the order verdicts were produced in.
    """

    total: int = 0
    succeeded_count: int = 0
    failed_count: int = 0
    conversions_avoided: int = 0
    average_load_time_ms: float = 0.0
    per_codec_counts: dict[str, int] = field(default_factory=dict)
    conversions: tuple[ConversionEntry, ...] = ()
    failures: tuple[FailureEntry, ...] = ()


@dataclass(frozen=True)
class FrameStepStats:
    """Latency samples for a run of frame steps in one direction."""

    direction: StepDirection
    samples_ms: tuple[int, ...] = ()
    failures: int = 0

    @property
    def average_ms(self) -> float:
        """Mean step latency, 0.0 when no step succeeded."""
        if not self.samples_ms:
            return 0.0
        return sum(self.samples_ms) / len(self.samples_ms)
