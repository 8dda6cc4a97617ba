"""Domain models and enums for mpv Probe.

Usage:
    from mpv_probe.domain import MediaDescriptor, ProbeResult
    from mpv_probe.domain import ConversionReason
"""

from .enums import ConversionReason, StepDirection
from .models import (
    AggregateReport,
    ClassificationVerdict,
    ConversionEntry,
    FailureEntry,
    FrameStepStats,
    MediaDescriptor,
    ProbeResult,
)

__all__ = [
    # Models
    "AggregateReport",
    "ClassificationVerdict",
    "ConversionEntry",
    "FailureEntry",
    "FrameStepStats",
    "MediaDescriptor",
    "ProbeResult",
    # Enums
    "ConversionReason",
    "StepDirection",
]
