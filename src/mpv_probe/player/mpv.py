"""mpv-backed implementation of the PlayerSession protocol."""

from __future__ import annotations

import logging
import shutil
import subprocess  # nosec B404 - subprocess is required to launch mpv
import tempfile
import time
from collections.abc import Sequence
from pathlib import Path
from types import TracebackType
from typing import Any

from mpv_probe.config.models import PlayerConfig
from mpv_probe.player.commands import PlayerCommandsMixin
from mpv_probe.player.interface import (
    CommandError,
    IpcConnectionError,
    IpcError,
    LoadError,
    ProcessStartError,
    PropertyError,
)
from mpv_probe.player.ipc import IpcChannel

logger = logging.getLogger(__name__)

MPV_BINARY = "mpv"

# Always passed: stay alive without a file, no terminal UI
BASE_ARGS: tuple[str, ...] = ("--idle=yes", "--no-terminal")

# Flags for interactive use and frame-accurate stepping
INTERACTIVE_ARGS: tuple[str, ...] = (
    "--hr-seek=yes",
    "--hr-seek-framedrop=no",
    "--demuxer-max-back-bytes=100M",
    "--cache=yes",
    "--no-osd-bar",
)

# Time mpv gets to exit after "quit" before it is killed
STOP_GRACE_SECONDS = 2.0

_CONNECT_POLL_SECONDS = 0.05


def find_mpv(configured_path: Path | None = None) -> Path | None:
    """Find the mpv executable.

    Args:
        configured_path: Optional configured path override.

    Returns:
        Path to mpv, or None if not found.
    """
    if configured_path and configured_path.exists():
        return configured_path

    which_result = shutil.which(MPV_BINARY)
    if which_result:
        return Path(which_result)

    return None


def _is_load_outcome(event: dict[str, Any]) -> bool:
    """Accept file-loaded, or an end-file caused by an error.

    Replacing a playing file emits end-file (reason "stop") for the old one
    first; that one is not an outcome of this load.
    """
    if event.get("event") == "file-loaded":
        return True
    return event.get("reason") == "error"


class MpvSession(PlayerCommandsMixin):
    """A running mpv process driven over its JSON IPC socket.

    Use MpvSession.start() as a context manager so the process is stopped on
    every exit path:

        with MpvSession.start(config) as session:
            session.load(path)
    """

    def __init__(
        self,
        process: subprocess.Popen,
        channel: IpcChannel,
        config: PlayerConfig,
        socket_dir: Path | None = None,
    ) -> None:
        self._process = process
        self._channel = channel
        self._config = config
        self._socket_dir = socket_dir
        self._stopped = False

    @classmethod
    def start(
        cls,
        config: PlayerConfig | None = None,
        extra_args: Sequence[str] = (),
    ) -> MpvSession:
        """Launch mpv and connect to its IPC socket.

        Args:
            config: Player configuration (defaults if None).
            extra_args: Additional flags for this session only.

        Returns:
            A connected session.

        Raises:
            ProcessStartError: If mpv is missing, exits early, or does not
                open its IPC socket within the startup timeout.
        """
        config = config or PlayerConfig()
        binary = find_mpv(config.path)
        if binary is None:
            raise ProcessStartError(
                "mpv is not installed or not in PATH. "
                "Install mpv or configure its location via MPV_PROBE_MPV_PATH "
                "or the [player] path setting."
            )

        socket_dir: Path | None = None
        if config.ipc_socket_path is not None:
            socket_path = config.ipc_socket_path
        else:
            socket_dir = Path(tempfile.mkdtemp(prefix="mpv-probe-"))
            socket_path = socket_dir / "ipc.sock"

        args = [str(binary), *BASE_ARGS, f"--input-ipc-server={socket_path}"]
        if config.pause_on_start:
            args.append("--pause")
        args.extend(config.extra_args)
        args.extend(extra_args)

        logger.debug("Starting player: %s", " ".join(args))
        try:
            process = subprocess.Popen(  # nosec B603 - binary path is resolved
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            _remove_socket_dir(socket_dir)
            raise ProcessStartError(f"Failed to launch {binary}: {e}") from e

        try:
            channel = _connect_when_ready(process, socket_path, config)
        except BaseException:
            # Includes KeyboardInterrupt while waiting for the socket
            _terminate(process, grace_seconds=0)
            _remove_socket_dir(socket_dir)
            raise

        logger.info(
            "Player started (pid %d)",
            process.pid,
            extra={"binary": str(binary), "socket": str(socket_path)},
        )
        return cls(process, channel, config, socket_dir=socket_dir)

    @property
    def is_alive(self) -> bool:
        """Whether the process is running and the IPC channel is open."""
        return (
            not self._stopped
            and self._process.poll() is None
            and not self._channel.closed
        )

    @property
    def pid(self) -> int:
        return self._process.pid

    def load(self, file_path: Path) -> None:
        """Open a file and wait for mpv to report it loaded.

        Raises:
            LoadError: If mpv rejects the file or the load times out.
        """
        path = Path(file_path)
        self._channel.clear_events()
        try:
            self._channel.request(["loadfile", str(path), "replace"])
            event = self._channel.wait_for_event(
                ("file-loaded", "end-file"),
                timeout_ms=self._config.load_timeout_ms,
                predicate=_is_load_outcome,
            )
        except IpcError as e:
            raise LoadError(
                f"Failed to load {path}: {e.message}", timed_out=e.timed_out
            ) from e

        if event["event"] == "end-file":
            reason = event.get("file_error") or "unknown error"
            raise LoadError(f"Failed to load {path}: {reason}")

    def get_property(self, name: str) -> Any:
        """Read a property.

        Raises:
            PropertyError: If mpv reports the property unavailable or the
                read fails or times out.
        """
        try:
            return self._channel.request(["get_property", name])
        except IpcError as e:
            raise PropertyError(
                name, f"Cannot read property {name}: {e.message}", timed_out=e.timed_out
            ) from e

    def set_property(self, name: str, value: Any) -> None:
        """Write a property.

        Raises:
            PropertyError: If the write fails or times out.
        """
        try:
            self._channel.request(["set_property", name, value])
        except IpcError as e:
            raise PropertyError(
                name, f"Cannot set property {name}: {e.message}", timed_out=e.timed_out
            ) from e

    def send_command(self, name: str, *args: Any) -> Any:
        """Send a raw mpv command.

        Raises:
            CommandError: If the command fails or times out.
        """
        try:
            return self._channel.request([name, *args])
        except IpcError as e:
            raise CommandError(
                name, f"Command {name} failed: {e.message}", timed_out=e.timed_out
            ) from e

    def stop(self) -> None:
        """Quit mpv, killing it if it does not exit in time. Idempotent."""
        if self._stopped:
            return
        self._stopped = True

        if self._process.poll() is None and not self._channel.closed:
            try:
                self._channel.request(["quit"], timeout_ms=1000)
            except IpcConnectionError:
                # mpv may close the socket before answering quit
                pass
            except IpcError as e:
                logger.debug("quit request failed: %s", e)
        self._channel.close()

        _terminate(self._process)
        _remove_socket_dir(self._socket_dir)
        logger.info("Player stopped (pid %d)", self._process.pid)

    def __enter__(self) -> MpvSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.stop()


def _connect_when_ready(
    process: subprocess.Popen, socket_path: Path, config: PlayerConfig
) -> IpcChannel:
    """Poll the IPC socket until it accepts a connection.

    Raises:
        ProcessStartError: If the process exits or the startup timeout passes.
    """
    deadline = time.monotonic() + config.startup_timeout_ms / 1000
    last_error: IpcConnectionError | None = None
    while time.monotonic() < deadline:
        returncode = process.poll()
        if returncode is not None:
            raise ProcessStartError(
                f"mpv exited with code {returncode} during startup"
            )
        try:
            return IpcChannel.connect(
                socket_path, default_timeout_ms=config.request_timeout_ms
            )
        except IpcConnectionError as e:
            last_error = e
            time.sleep(_CONNECT_POLL_SECONDS)

    raise ProcessStartError(
        f"mpv did not open its IPC socket within {config.startup_timeout_ms} ms"
        + (f" ({last_error.message})" if last_error else ""),
        timed_out=True,
    )


def _terminate(
    process: subprocess.Popen, grace_seconds: float = STOP_GRACE_SECONDS
) -> None:
    """Wait for the process to exit, killing it after the grace period."""
    if process.poll() is None:
        try:
            process.wait(timeout=grace_seconds)
        except subprocess.TimeoutExpired:
            logger.warning("Player (pid %d) did not exit, killing it", process.pid)
            process.kill()
            process.wait()


def _remove_socket_dir(socket_dir: Path | None) -> None:
    if socket_dir is not None:
        shutil.rmtree(socket_dir, ignore_errors=True)
