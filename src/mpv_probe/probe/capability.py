"""Capability probing: load a file into the player and describe it."""

from __future__ import annotations

import logging
import math
import time
from pathlib import Path
from typing import Any

from mpv_probe.domain.models import MediaDescriptor, ProbeResult
from mpv_probe.player.interface import PlayerError, PlayerSession, PropertyError

logger = logging.getLogger(__name__)

CODEC_PROPERTY = "video-codec"
CONTAINER_PROPERTY = "file-format"
WIDTH_PROPERTY = "video-params/w"
HEIGHT_PROPERTY = "video-params/h"
# container-fps is preferred; video-params/fps is only known after decoding
FRAME_RATE_PROPERTIES: tuple[str, ...] = ("container-fps", "video-params/fps")
DURATION_PROPERTY = "duration"

# Extra properties shown by the inspect command, in display order
DETAIL_PROPERTIES: tuple[tuple[str, str], ...] = (
    ("pixel_format", "video-params/pixelformat"),
    ("bitrate", "video-bitrate"),
    ("time_position", "time-pos"),
    ("frame_number", "estimated-frame-number"),
)

CODEC_UNDETECTABLE = "codec undetectable"


def read_property(session: PlayerSession, name: str) -> Any | None:
    """Read a property, returning None instead of raising when unavailable."""
    try:
        return session.get_property(name)
    except PropertyError as e:
        logger.debug("Property %s unavailable: %s", name, e.message)
        return None


def read_first_available(session: PlayerSession, names: tuple[str, ...]) -> Any | None:
    """Read the first property in names that has a value."""
    for name in names:
        value = read_property(session, name)
        if value is not None:
            return value
    return None


def _as_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def read_descriptor(session: PlayerSession) -> MediaDescriptor:
    """Read every descriptor property independently.

    A failed read leaves that field None and does not affect the others.
    """
    return MediaDescriptor(
        codec=_as_str(read_property(session, CODEC_PROPERTY)),
        container=_as_str(read_property(session, CONTAINER_PROPERTY)),
        width=_as_int(read_property(session, WIDTH_PROPERTY)),
        height=_as_int(read_property(session, HEIGHT_PROPERTY)),
        frame_rate=_as_float(read_first_available(session, FRAME_RATE_PROPERTIES)),
        duration_seconds=_as_float(read_property(session, DURATION_PROPERTY)),
    )


def read_detailed_properties(session: PlayerSession) -> dict[str, Any | None]:
    """Read the extra properties shown in detailed views.

    Returns:
        Mapping of DETAIL_PROPERTIES keys to values (None when unavailable).
    """
    return {key: read_property(session, name) for key, name in DETAIL_PROPERTIES}


def _elapsed_ms(start: float) -> int:
    return max(0, round((time.monotonic() - start) * 1000))


def probe(
    session: PlayerSession, file_path: Path, settle_delay_ms: int = 200
) -> ProbeResult:
    """Load a file and describe it.

    Load latency covers the load call only (up to the player reporting the
    file loaded). The settle delay that follows gives the player time to
    publish video parameters before they are read.

    Per-file failures never propagate: a load error or an undetectable
    codec produces a result with succeeded=False and an error message.

    Args:
        session: Live player session; used sequentially.
        file_path: File to probe.
        settle_delay_ms: Pause between load and property reads.

    Returns:
        ProbeResult for the file.
    """
    path = Path(file_path)

    start = time.monotonic()
    try:
        session.load(path)
    except PlayerError as e:
        logger.warning("Load failed: %s", e.message, extra={"timed_out": e.timed_out})
        return ProbeResult(
            file_path=path,
            load_time_ms=_elapsed_ms(start),
            succeeded=False,
            error_message=e.message,
        )
    load_time_ms = _elapsed_ms(start)

    if settle_delay_ms > 0:
        time.sleep(settle_delay_ms / 1000)

    descriptor = read_descriptor(session)
    if descriptor.codec is None:
        logger.warning("Could not detect video codec")
        return ProbeResult(
            file_path=path,
            descriptor=descriptor,
            load_time_ms=load_time_ms,
            succeeded=False,
            error_message=CODEC_UNDETECTABLE,
        )

    logger.debug(
        "Probed in %d ms: %s",
        load_time_ms,
        descriptor.codec,
        extra={"container": descriptor.container, "resolution": descriptor.resolution},
    )
    return ProbeResult(
        file_path=path,
        descriptor=descriptor,
        load_time_ms=load_time_ms,
        succeeded=True,
    )
