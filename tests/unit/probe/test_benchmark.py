"""Tests for probe/benchmark.py."""

import pytest

from mpv_probe.domain.enums import StepDirection
from mpv_probe.player.interface import CommandError
from mpv_probe.player.stub import StubSession
from mpv_probe.probe.benchmark import time_frame_steps


class TestTimeFrameSteps:
    """Tests for time_frame_steps."""

    def test_forward_steps(self) -> None:
        session = StubSession()

        stats = time_frame_steps(session, StepDirection.FORWARD, 3)

        assert stats.direction == StepDirection.FORWARD
        assert len(stats.samples_ms) == 3
        assert stats.failures == 0
        assert session.calls == [("command", "frame-step")] * 3

    def test_backward_uses_back_step(self) -> None:
        session = StubSession()

        time_frame_steps(session, StepDirection.BACKWARD, 2)

        assert session.calls == [("command", "frame-back-step")] * 2

    def test_failures_counted_and_run_continues(self) -> None:
        """A failed step is counted and later steps still run."""
        attempts = []

        def flaky(name, args):
            attempts.append(name)
            if len(attempts) == 2:
                raise CommandError(name, "error running command")

        session = StubSession(command_handler=flaky)

        stats = time_frame_steps(session, StepDirection.BACKWARD, 4)

        assert len(attempts) == 4
        assert len(stats.samples_ms) == 3
        assert stats.failures == 1

    def test_zero_count(self) -> None:
        stats = time_frame_steps(StubSession(), StepDirection.FORWARD, 0)

        assert stats.samples_ms == ()
        assert stats.average_ms == 0.0

    def test_negative_count(self) -> None:
        with pytest.raises(ValueError, match="count"):
            time_frame_steps(StubSession(), StepDirection.FORWARD, -1)
