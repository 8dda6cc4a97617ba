"""Named player commands built on the generic session primitives."""

from __future__ import annotations

from typing import Any

from mpv_probe.domain.enums import StepDirection

FRAME_STEP_COMMANDS: dict[StepDirection, str] = {
    StepDirection.FORWARD: "frame-step",
    StepDirection.BACKWARD: "frame-back-step",
}


class PlayerCommandsMixin:
    """Convenience commands for classes providing send_command/set_property."""

    def send_command(self, name: str, *args: Any) -> Any:  # pragma: no cover
        raise NotImplementedError

    def set_property(self, name: str, value: Any) -> None:  # pragma: no cover
        raise NotImplementedError

    def frame_step(self, direction: StepDirection) -> None:
        """Step one frame forward or backward (pauses playback)."""
        self.send_command(FRAME_STEP_COMMANDS[direction])

    def seek(self, seconds: float, mode: str = "relative") -> None:
        """Seek by or to a position in seconds."""
        self.send_command("seek", seconds, mode)

    def toggle_pause(self) -> None:
        self.send_command("cycle", "pause")

    def set_ab_loop(self, start: float, end: float) -> None:
        """Loop playback between two positions in seconds."""
        if end <= start:
            raise ValueError(f"Loop end ({end}) must be after start ({start})")
        self.set_property("ab-loop-a", start)
        self.set_property("ab-loop-b", end)

    def clear_ab_loop(self) -> None:
        self.set_property("ab-loop-a", "no")
        self.set_property("ab-loop-b", "no")
