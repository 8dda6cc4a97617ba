"""Probing files through a player session.

- probe / read_detailed_properties: per-file capability probe
- time_frame_steps: frame-step latency benchmark
- run_batch: sequential probing and classification of many files
"""

from mpv_probe.probe.benchmark import time_frame_steps
from mpv_probe.probe.capability import (
    CODEC_UNDETECTABLE,
    DETAIL_PROPERTIES,
    FRAME_RATE_PROPERTIES,
    probe,
    read_descriptor,
    read_detailed_properties,
    read_property,
)
from mpv_probe.probe.runner import run_batch

__all__ = [
    "CODEC_UNDETECTABLE",
    "DETAIL_PROPERTIES",
    "FRAME_RATE_PROPERTIES",
    "probe",
    "read_descriptor",
    "read_detailed_properties",
    "read_property",
    "run_batch",
    "time_frame_steps",
]
