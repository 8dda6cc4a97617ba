"""Domain enums for mpv Probe.

This module contains the enums shared by the probe, classification and
reporting layers.
"""

from enum import Enum


class ConversionReason(Enum):
    """Why the legacy pipeline would have converted a file.

    Codec matches take priority over container matches when both apply.
    """

    UNSUPPORTED_CODEC = "unsupported_codec"
    UNSUPPORTED_CONTAINER = "unsupported_container"

    @property
    def label(self) -> str:
        """Human-readable label used in reports."""
        if self is ConversionReason.UNSUPPORTED_CODEC:
            return "Unsupported codec"
        return "Container format requires conversion"


class StepDirection(Enum):
    """Direction of a single frame step."""

    FORWARD = "forward"
    BACKWARD = "backward"
