"""PlayerSession interface and error taxonomy."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol


class PlayerError(Exception):
    """Base class for errors raised while driving the player."""

    def __init__(self, message: str, timed_out: bool = False) -> None:
        self.message = message
        self.timed_out = timed_out
        super().__init__(message)


class ProcessStartError(PlayerError):
    """Raised when the player process cannot be launched or never becomes ready.

    This is the only player error that aborts a whole run.
    """


class LoadError(PlayerError):
    """Raised when a file cannot be opened by the player."""


class PropertyError(PlayerError):
    """Raised when a property cannot be read or written."""

    def __init__(self, name: str, message: str, timed_out: bool = False) -> None:
        self.name = name
        super().__init__(message, timed_out=timed_out)


class CommandError(PlayerError):
    """Raised when a generic player command fails."""

    def __init__(self, command: str, message: str, timed_out: bool = False) -> None:
        self.command = command
        super().__init__(message, timed_out=timed_out)


class IpcError(PlayerError):
    """Raised by the IPC channel; wrapped by the session into operation errors."""


class IpcConnectionError(IpcError):
    """The IPC socket is closed, unreachable, or returned malformed data."""


class IpcCommandError(IpcError):
    """The player answered a request with an error status."""

    def __init__(self, status: str, command: list[Any]) -> None:
        self.status = status
        self.command = command
        super().__init__(f"{command[0] if command else '?'} failed: {status}")


class IpcTimeoutError(IpcError, TimeoutError):
    """An IPC round trip exceeded its time bound."""

    def __init__(self, message: str) -> None:
        super().__init__(message, timed_out=True)


class PlayerSession(Protocol):
    """Protocol for a single controllable player process.

    Operations against one session are issued strictly sequentially.
    Implementations must make stop() idempotent.
    """

    @property
    def is_alive(self) -> bool:
        """Whether the player process is running and reachable."""
        ...

    def load(self, file_path: Path) -> None:
        """Open a file in the player.

        Raises:
            LoadError: If the file cannot be opened or the load times out.
        """
        ...

    def get_property(self, name: str) -> Any:
        """Read a single player property.

        Raises:
            PropertyError: If the property is unavailable or the read fails.
        """
        ...

    def set_property(self, name: str, value: Any) -> None:
        """Write a single player property.

        Raises:
            PropertyError: If the write fails.
        """
        ...

    def send_command(self, name: str, *args: Any) -> Any:
        """Issue a raw player command.

        Raises:
            CommandError: If the command fails.
        """
        ...

    def stop(self) -> None:
        """Terminate the player. Safe to call more than once."""
        ...
