"""Shared test fixtures for mpv Probe."""

from __future__ import annotations

import json
import shutil
import socket
import tempfile
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


class FakeMpvServer:
    """Minimal mpv JSON IPC server on a Unix socket, served from a thread.

    Answers get_property/set_property from ``properties``, answers loadfile
    and then pushes file-loaded (or end-file for names in ``failing_loads``),
    and closes the connection after quit. ``handlers`` overrides the reply
    for a command name; names in ``silent_commands`` are never answered.
    """

    def __init__(
        self, socket_path: Path, properties: dict[str, Any] | None = None
    ) -> None:
        self.socket_path = socket_path
        self.properties: dict[str, Any] = dict(properties or {})
        self.failing_loads: dict[str, str] = {}
        self.silent_commands: set[str] = set()
        self.handlers: dict[str, Callable[[FakeMpvServer, dict[str, Any]], None]] = {}
        self.received: list[dict[str, Any]] = []
        self._conn: socket.socket | None = None
        self._connected = threading.Event()
        self._server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self._server.bind(str(socket_path))
        self._server.listen(1)
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self) -> FakeMpvServer:
        self._thread.start()
        return self

    def commands(self) -> list[list[Any]]:
        """Command arrays received so far, in order."""
        return [request["command"] for request in self.received]

    def send(self, message: dict[str, Any]) -> None:
        """Push a raw message (reply or event) to the client."""
        self._connected.wait(timeout=2)
        assert self._conn is not None
        self._conn.sendall(json.dumps(message).encode("utf-8") + b"\n")

    def reply(
        self, request: dict[str, Any], data: Any = None, error: str = "success"
    ) -> None:
        message: dict[str, Any] = {"request_id": request["request_id"], "error": error}
        if data is not None:
            message["data"] = data
        self.send(message)

    def close(self) -> None:
        try:
            # Wakes a pending accept() when no client ever connected
            self._server.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._server.close()
        if self._conn is not None:
            try:
                self._conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            self._conn.close()
        self._thread.join(timeout=2)

    def _serve(self) -> None:
        try:
            conn, _ = self._server.accept()
        except OSError:
            return
        self._conn = conn
        self._connected.set()
        buffer = b""
        while True:
            try:
                chunk = conn.recv(65536)
            except OSError:
                return
            if not chunk:
                return
            buffer += chunk
            while b"\n" in buffer:
                line, _, buffer = buffer.partition(b"\n")
                if line.strip():
                    self._handle(json.loads(line))

    def _handle(self, request: dict[str, Any]) -> None:
        self.received.append(request)
        command = request["command"]
        name = command[0]

        if name in self.silent_commands:
            return
        if name in self.handlers:
            self.handlers[name](self, request)
            return

        if name == "get_property":
            if command[1] in self.properties:
                self.reply(request, self.properties[command[1]])
            else:
                self.reply(request, error="property unavailable")
        elif name == "set_property":
            self.properties[command[1]] = command[2]
            self.reply(request)
        elif name == "loadfile":
            self.reply(request)
            file_name = Path(command[1]).name
            if file_name in self.failing_loads:
                self.send(
                    {
                        "event": "end-file",
                        "reason": "error",
                        "file_error": self.failing_loads[file_name],
                    }
                )
            else:
                self.send({"event": "start-file"})
                self.send({"event": "file-loaded"})
        elif name == "quit":
            self.reply(request)
            assert self._conn is not None
            self._conn.shutdown(socket.SHUT_RDWR)
        else:
            self.reply(request)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def socket_dir():
    """Short temporary directory for Unix sockets (paths are length-limited)."""
    dir_path = tempfile.mkdtemp(prefix="mp")
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def fake_mpv(socket_dir: Path):
    """A running FakeMpvServer with typical video properties."""
    server = FakeMpvServer(
        socket_dir / "ipc.sock",
        properties={
            "video-codec": "h264 (H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10)",
            "file-format": "mp4",
            "video-params/w": 1280,
            "video-params/h": 720,
            "container-fps": 25.0,
            "duration": 12.5,
        },
    ).start()
    yield server
    server.close()


@pytest.fixture
def temp_video_dir(temp_dir: Path) -> Path:
    """Create a temporary directory with placeholder media files."""
    video_dir = temp_dir / "videos"
    video_dir.mkdir()

    (video_dir / "movie.mkv").touch()
    (video_dir / "show.MP4").touch()
    (video_dir / "notes.txt").touch()

    nested = video_dir / "nested"
    nested.mkdir()
    (nested / "episode.avi").touch()

    # Hidden directories are skipped
    hidden = video_dir / ".hidden"
    hidden.mkdir()
    (hidden / "secret.mkv").touch()

    return video_dir
