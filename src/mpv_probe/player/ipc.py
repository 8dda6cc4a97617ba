"""JSON IPC channel to an mpv process.

mpv's IPC protocol is newline-delimited JSON over a Unix domain socket:

    -> {"command": ["get_property", "duration"], "request_id": 7}
    <- {"data": 42.5, "error": "success", "request_id": 7}

The player also pushes unsolicited event messages ({"event": "file-loaded"})
on the same socket. Replies are matched to requests by request_id; events
are queued until someone waits for them.
"""

from __future__ import annotations

import json
import logging
import socket
import threading
import time
from collections import deque
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from mpv_probe.player.interface import (
    IpcCommandError,
    IpcConnectionError,
    IpcTimeoutError,
)

logger = logging.getLogger(__name__)

# Upper bound on buffered events nobody has asked for yet
MAX_QUEUED_EVENTS = 256

_RECV_SIZE = 65536


class IpcChannel:
    """Request/response channel over a connected mpv IPC socket.

    At most one request is in flight at a time; callers on other threads
    block on an internal lock rather than interleaving on the socket.
    """

    def __init__(self, sock: socket.socket, default_timeout_ms: int = 5000) -> None:
        """Wrap an already-connected socket.

        Args:
            sock: Connected stream socket.
            default_timeout_ms: Bound applied to requests that do not pass
                their own timeout.
        """
        self._sock = sock
        self._default_timeout_ms = default_timeout_ms
        self._buffer = b""
        self._events: deque[dict[str, Any]] = deque(maxlen=MAX_QUEUED_EVENTS)
        self._next_request_id = 0
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def connect(
        cls, socket_path: Path, default_timeout_ms: int = 5000
    ) -> IpcChannel:
        """Connect to an IPC socket (single attempt).

        Raises:
            IpcConnectionError: If the socket does not exist or refuses.
        """
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.settimeout(default_timeout_ms / 1000)
            sock.connect(str(socket_path))
        except OSError as e:
            sock.close()
            raise IpcConnectionError(
                f"Cannot connect to IPC socket {socket_path}: {e}"
            ) from e
        return cls(sock, default_timeout_ms=default_timeout_ms)

    @property
    def closed(self) -> bool:
        """Whether the channel has been closed locally or by the player."""
        return self._closed

    def request(self, command: list[Any], timeout_ms: int | None = None) -> Any:
        """Send a command and wait for its reply.

        Args:
            command: mpv command array, e.g. ["get_property", "duration"].
            timeout_ms: Round-trip bound; defaults to the channel default.

        Returns:
            The reply's "data" field (None when the command has no result).

        Raises:
            IpcTimeoutError: If no matching reply arrives in time.
            IpcCommandError: If the player reports an error status.
            IpcConnectionError: If the socket is closed or broken.
        """
        with self._lock:
            if self._closed:
                raise IpcConnectionError("IPC channel is closed")

            self._next_request_id += 1
            request_id = self._next_request_id
            deadline = self._deadline(timeout_ms)

            payload = json.dumps({"command": command, "request_id": request_id})
            logger.debug("IPC request %d: %s", request_id, command)
            try:
                self._sock.sendall(payload.encode("utf-8") + b"\n")
            except OSError as e:
                self._closed = True
                raise IpcConnectionError(f"Failed to send to player: {e}") from e

            while True:
                message = self._read_message(deadline, command)
                if "event" in message:
                    self._events.append(message)
                    continue
                if message.get("request_id") != request_id:
                    logger.debug(
                        "Dropping reply for request %s while waiting for %d",
                        message.get("request_id"),
                        request_id,
                    )
                    continue

                status = message.get("error", "success")
                if status != "success":
                    raise IpcCommandError(status, command)
                return message.get("data")

    def wait_for_event(
        self,
        names: Iterable[str],
        timeout_ms: int | None = None,
        predicate: Callable[[dict[str, Any]], bool] | None = None,
    ) -> dict[str, Any]:
        """Wait for the next event with one of the given names.

        Already-queued events are considered first. Events that do not match
        stay queued.

        Args:
            names: Event names to accept.
            timeout_ms: Wait bound; defaults to the channel default.
            predicate: Optional extra filter on matching events.

        Returns:
            The event message.

        Raises:
            IpcTimeoutError: If no matching event arrives in time.
            IpcConnectionError: If the socket is closed or broken.
        """
        wanted = frozenset(names)

        def accepts(message: dict[str, Any]) -> bool:
            if message.get("event") not in wanted:
                return False
            return predicate is None or predicate(message)

        with self._lock:
            for message in list(self._events):
                if accepts(message):
                    self._events.remove(message)
                    return message

            if self._closed:
                raise IpcConnectionError("IPC channel is closed")

            deadline = self._deadline(timeout_ms)
            label = ["wait_for_event", *sorted(wanted)]
            while True:
                message = self._read_message(deadline, label)
                if "event" not in message:
                    logger.debug("Dropping unsolicited reply: %s", message)
                    continue
                if accepts(message):
                    return message
                self._events.append(message)

    def clear_events(self) -> None:
        """Discard queued events."""
        with self._lock:
            self._events.clear()

    def close(self) -> None:
        """Close the socket. Safe to call more than once."""
        if self._closed and self._sock.fileno() == -1:
            return
        self._closed = True
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Peer already gone
            pass
        self._sock.close()

    def _deadline(self, timeout_ms: int | None) -> float:
        if timeout_ms is None:
            timeout_ms = self._default_timeout_ms
        return time.monotonic() + timeout_ms / 1000

    def _read_message(self, deadline: float, command: list[Any]) -> dict[str, Any]:
        """Read the next JSON message, blocking until the deadline."""
        while True:
            while b"\n" not in self._buffer:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise IpcTimeoutError(f"Timed out waiting for player: {command}")
                self._sock.settimeout(remaining)
                try:
                    chunk = self._sock.recv(_RECV_SIZE)
                except socket.timeout:
                    raise IpcTimeoutError(
                        f"Timed out waiting for player: {command}"
                    ) from None
                except OSError as e:
                    self._closed = True
                    raise IpcConnectionError(f"IPC socket error: {e}") from e
                if not chunk:
                    self._closed = True
                    raise IpcConnectionError("Player closed the IPC connection")
                self._buffer += chunk

            line, _, self._buffer = self._buffer.partition(b"\n")
            if not line.strip():
                continue
            try:
                message = json.loads(line)
            except ValueError as e:
                # JSONDecodeError, or UnicodeDecodeError for non-UTF-8 bytes
                raise IpcConnectionError(f"Malformed IPC message: {e}") from e
            if not isinstance(message, dict):
                raise IpcConnectionError(f"Unexpected IPC message: {message!r}")
            return message
