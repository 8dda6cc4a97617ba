"""Player module for mpv Probe.

This module provides control of an external mpv process:

- PlayerSession: Protocol defining the session interface
- MpvSession: Production implementation over mpv's JSON IPC socket
- StubSession: In-memory implementation for testing
- IpcChannel: Request/response channel with request_id correlation

Errors:
- PlayerError and its subclasses ProcessStartError, LoadError,
  PropertyError, CommandError and the IPC-level IpcError family
"""

from mpv_probe.player.interface import (
    CommandError,
    IpcCommandError,
    IpcConnectionError,
    IpcError,
    IpcTimeoutError,
    LoadError,
    PlayerError,
    PlayerSession,
    ProcessStartError,
    PropertyError,
)
from mpv_probe.player.ipc import IpcChannel
from mpv_probe.player.mpv import INTERACTIVE_ARGS, MpvSession, find_mpv
from mpv_probe.player.stub import StubSession

__all__ = [
    "PlayerSession",
    "MpvSession",
    "StubSession",
    "IpcChannel",
    "INTERACTIVE_ARGS",
    "find_mpv",
    # Errors
    "PlayerError",
    "ProcessStartError",
    "LoadError",
    "PropertyError",
    "CommandError",
    "IpcError",
    "IpcCommandError",
    "IpcConnectionError",
    "IpcTimeoutError",
]
