"""In-memory PlayerSession for development and testing."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from types import TracebackType
from typing import Any

from mpv_probe.player.commands import PlayerCommandsMixin
from mpv_probe.player.interface import (
    CommandError,
    LoadError,
    ProcessStartError,
    PropertyError,
)

# Properties returned for a file when no per-file table is given
DEFAULT_PROPERTIES: dict[str, Any] = {
    "video-codec": "h264",
    "file-format": "mp4",
    "video-params/w": 1920,
    "video-params/h": 1080,
    "container-fps": 23.976,
    "duration": 60.0,
}


class StubSession(PlayerCommandsMixin):
    """Scriptable session that records calls instead of driving mpv.

    Properties are looked up per loaded file name (``properties_by_file``)
    and fall back to ``properties``. A property whose value is an Exception
    instance raises it; a missing property raises PropertyError.
    """

    def __init__(
        self,
        properties: Mapping[str, Any] | None = None,
        properties_by_file: Mapping[str, Mapping[str, Any]] | None = None,
        failing_loads: Mapping[str, str] | None = None,
        command_handler: Callable[[str, tuple[Any, ...]], Any] | None = None,
    ) -> None:
        self._properties = dict(
            DEFAULT_PROPERTIES if properties is None else properties
        )
        self._properties_by_file = {
            name: dict(props) for name, props in (properties_by_file or {}).items()
        }
        self._failing_loads = dict(failing_loads or {})
        self._command_handler = command_handler
        self._alive = True
        self.current_file: Path | None = None
        self.calls: list[tuple[Any, ...]] = []
        self.stop_count = 0

    @classmethod
    def start(cls, available: bool = True, **kwargs: Any) -> StubSession:
        """Create a stub, optionally simulating an unavailable player."""
        if not available:
            raise ProcessStartError("stub player unavailable")
        return cls(**kwargs)

    @property
    def is_alive(self) -> bool:
        return self._alive

    def load(self, file_path: Path) -> None:
        path = Path(file_path)
        self.calls.append(("load", path))
        if not self._alive:
            raise LoadError(f"Failed to load {path}: player stopped")
        if path.name in self._failing_loads:
            self.current_file = None
            raise LoadError(f"Failed to load {path}: {self._failing_loads[path.name]}")
        self.current_file = path

    def get_property(self, name: str) -> Any:
        self.calls.append(("get_property", name))
        if not self._alive:
            raise PropertyError(name, f"Cannot read property {name}: player stopped")

        table = self._properties
        if self.current_file is not None:
            table = self._properties_by_file.get(self.current_file.name, table)

        if name not in table:
            raise PropertyError(
                name, f"Cannot read property {name}: property unavailable"
            )
        value = table[name]
        if isinstance(value, Exception):
            raise value
        return value

    def set_property(self, name: str, value: Any) -> None:
        self.calls.append(("set_property", name, value))
        if not self._alive:
            raise PropertyError(name, f"Cannot set property {name}: player stopped")
        self._properties[name] = value

    def send_command(self, name: str, *args: Any) -> Any:
        self.calls.append(("command", name, *args))
        if not self._alive:
            raise CommandError(name, f"Command {name} failed: player stopped")
        if self._command_handler is not None:
            return self._command_handler(name, args)
        return None

    def stop(self) -> None:
        if not self._alive:
            return
        self._alive = False
        self.stop_count += 1

    def __enter__(self) -> StubSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.stop()
