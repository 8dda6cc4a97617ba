"""Frame-step latency benchmark."""

from __future__ import annotations

import logging
import time

from mpv_probe.domain.enums import StepDirection
from mpv_probe.domain.models import FrameStepStats
from mpv_probe.player.commands import FRAME_STEP_COMMANDS
from mpv_probe.player.interface import CommandError, PlayerSession

logger = logging.getLogger(__name__)


def time_frame_steps(
    session: PlayerSession, direction: StepDirection, count: int
) -> FrameStepStats:
    """Step frames one at a time and record how long each step took.

    Steps are issued strictly one after another. A failed step is counted
    and the run continues.

    Args:
        session: Session with a file loaded.
        direction: Step direction.
        count: Number of steps to attempt.

    Returns:
        Per-step latencies in milliseconds and the failure count.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    command = FRAME_STEP_COMMANDS[direction]
    samples: list[int] = []
    failures = 0

    for _ in range(count):
        start = time.monotonic()
        try:
            session.send_command(command)
        except CommandError as e:
            failures += 1
            logger.warning("Frame step %s failed: %s", direction.value, e.message)
            continue
        elapsed = max(0, round((time.monotonic() - start) * 1000))
        samples.append(elapsed)
        logger.debug("Frame step %s: %d ms", direction.value, elapsed)

    return FrameStepStats(
        direction=direction, samples_ms=tuple(samples), failures=failures
    )
