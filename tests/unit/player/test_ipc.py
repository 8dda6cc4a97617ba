"""Tests for player/ipc.py using a fake mpv IPC server."""

from pathlib import Path

import pytest

from mpv_probe.player.interface import (
    IpcCommandError,
    IpcConnectionError,
    IpcTimeoutError,
)
from mpv_probe.player.ipc import IpcChannel


@pytest.fixture
def channel(fake_mpv):
    channel = IpcChannel.connect(fake_mpv.socket_path, default_timeout_ms=2000)
    yield channel
    channel.close()


class TestConnect:
    """Tests for IpcChannel.connect."""

    def test_missing_socket(self, socket_dir: Path) -> None:
        """Connecting to a socket that does not exist fails cleanly."""
        with pytest.raises(IpcConnectionError, match="Cannot connect"):
            IpcChannel.connect(socket_dir / "nope.sock")


class TestRequest:
    """Tests for IpcChannel.request."""

    def test_returns_data(self, fake_mpv, channel: IpcChannel) -> None:
        """The reply's data field is returned."""
        assert channel.request(["get_property", "duration"]) == 12.5

    def test_request_ids_increase(self, fake_mpv, channel: IpcChannel) -> None:
        """Each request carries a new request_id."""
        channel.request(["get_property", "duration"])
        channel.request(["get_property", "file-format"])

        ids = [request["request_id"] for request in fake_mpv.received]
        assert ids == [1, 2]

    def test_error_status(self, fake_mpv, channel: IpcChannel) -> None:
        """A non-success status raises IpcCommandError."""
        with pytest.raises(IpcCommandError) as exc_info:
            channel.request(["get_property", "no-such-property"])

        assert exc_info.value.status == "property unavailable"
        assert exc_info.value.command == ["get_property", "no-such-property"]
        assert exc_info.value.timed_out is False

    def test_stale_reply_dropped(self, fake_mpv, channel: IpcChannel) -> None:
        """Replies for other request ids are skipped, not returned."""

        def reply_twice(server, request):
            server.send({"request_id": 999, "error": "success", "data": "stale"})
            server.reply(request, "fresh")

        fake_mpv.handlers["get_property"] = reply_twice

        assert channel.request(["get_property", "anything"]) == "fresh"

    def test_events_interleaved_with_reply(self, fake_mpv, channel: IpcChannel) -> None:
        """Events arriving before the reply are queued for later."""

        def event_then_reply(server, request):
            server.send({"event": "playback-restart"})
            server.reply(request, 1)

        fake_mpv.handlers["get_property"] = event_then_reply

        assert channel.request(["get_property", "x"]) == 1
        event = channel.wait_for_event(["playback-restart"], timeout_ms=100)
        assert event == {"event": "playback-restart"}

    def test_timeout(self, fake_mpv, channel: IpcChannel) -> None:
        """An unanswered request raises IpcTimeoutError."""
        fake_mpv.silent_commands.add("get_property")

        with pytest.raises(IpcTimeoutError) as exc_info:
            channel.request(["get_property", "duration"], timeout_ms=100)

        assert exc_info.value.timed_out is True
        assert isinstance(exc_info.value, TimeoutError)

    def test_reply_after_timeout_is_ignored(
        self, fake_mpv, channel: IpcChannel
    ) -> None:
        """A late reply to a timed-out request does not answer the next one."""
        fake_mpv.silent_commands.add("get_property")
        with pytest.raises(IpcTimeoutError):
            channel.request(["get_property", "duration"], timeout_ms=100)

        fake_mpv.silent_commands.clear()
        fake_mpv.send({"request_id": 1, "error": "success", "data": "late"})

        assert channel.request(["get_property", "file-format"]) == "mp4"

    def test_connection_closed_by_player(self, fake_mpv, channel: IpcChannel) -> None:
        """EOF from the player raises IpcConnectionError and closes the channel."""
        channel.request(["quit"])

        with pytest.raises(IpcConnectionError):
            channel.request(["get_property", "duration"])
        assert channel.closed

    def test_request_after_close(self, channel: IpcChannel) -> None:
        """Requests on a closed channel fail immediately."""
        channel.close()

        with pytest.raises(IpcConnectionError, match="closed"):
            channel.request(["get_property", "duration"])

    def test_malformed_message(self, fake_mpv, channel: IpcChannel) -> None:
        """Invalid JSON from the player is a connection error."""

        def garbage(server, request):
            server._conn.sendall(b"{not json\n")

        fake_mpv.handlers["get_property"] = garbage

        with pytest.raises(IpcConnectionError, match="Malformed"):
            channel.request(["get_property", "duration"])

    def test_invalid_utf8_message(self, fake_mpv, channel: IpcChannel) -> None:
        """Bytes that are not UTF-8 are a connection error, not a decode crash."""

        def bad_bytes(server, request):
            server._conn.sendall(
                b'{"request_id": %d, "error": "success", "data": "h\xff264"}\n'
                % request["request_id"]
            )

        fake_mpv.handlers["get_property"] = bad_bytes

        with pytest.raises(IpcConnectionError, match="Malformed"):
            channel.request(["get_property", "video-codec"])


class TestWaitForEvent:
    """Tests for IpcChannel.wait_for_event."""

    def test_returns_matching_event(self, fake_mpv, channel: IpcChannel) -> None:
        """Non-matching events stay queued while waiting."""
        fake_mpv.send({"event": "start-file"})
        fake_mpv.send({"event": "file-loaded"})

        event = channel.wait_for_event(["file-loaded"], timeout_ms=1000)

        assert event["event"] == "file-loaded"
        assert channel.wait_for_event(["start-file"], timeout_ms=100) == {
            "event": "start-file"
        }

    def test_predicate(self, fake_mpv, channel: IpcChannel) -> None:
        """Events rejected by the predicate are skipped."""
        fake_mpv.send({"event": "end-file", "reason": "stop"})
        fake_mpv.send({"event": "end-file", "reason": "error", "file_error": "bad"})

        event = channel.wait_for_event(
            ["end-file"],
            timeout_ms=1000,
            predicate=lambda message: message.get("reason") == "error",
        )

        assert event["file_error"] == "bad"

    def test_timeout(self, channel: IpcChannel) -> None:
        """No matching event within the bound raises IpcTimeoutError."""
        with pytest.raises(IpcTimeoutError):
            channel.wait_for_event(["file-loaded"], timeout_ms=100)

    def test_clear_events(self, fake_mpv, channel: IpcChannel) -> None:
        """Cleared events are no longer delivered."""
        def event_then_reply(server, request):
            server.send({"event": "file-loaded"})
            server.reply(request, 1)

        fake_mpv.handlers["get_property"] = event_then_reply
        channel.request(["get_property", "x"])
        channel.clear_events()

        with pytest.raises(IpcTimeoutError):
            channel.wait_for_event(["file-loaded"], timeout_ms=100)


class TestClose:
    """Tests for IpcChannel.close."""

    def test_idempotent(self, channel: IpcChannel) -> None:
        """Closing twice does not raise."""
        channel.close()
        channel.close()

        assert channel.closed
