"""Tests for src/realtime/subscriptions.py — Supabase broadcast (mocked)."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.realtime.subscriptions import SupabaseBroadcast


@pytest.fixture
def mock_client():
    """Create a mock Supabase client with async realtime support."""
    client = MagicMock()

    def make_channel(name):
        channel = AsyncMock()
        channel.name = name
        channel.on_broadcast = MagicMock(return_value=channel)
        channel.subscribe = AsyncMock(return_value=channel)
        channel.send_broadcast = AsyncMock()
        channel.unsubscribe = AsyncMock()
        return channel

    client.realtime.channel = MagicMock(side_effect=make_channel)
    client.realtime.remove_channel = AsyncMock()
    return client


class TestSupabaseBroadcast:
    def test_on_message_joins_channel_once(self, mock_client):
        bus = SupabaseBroadcast(mock_client, "destiny")
        try:
            bus.on_message("destiny:flip", lambda p: None)
            bus.on_message("destiny:state", lambda p: None)

            mock_client.realtime.channel.assert_called_once_with("destiny")
            assert bus.topics == ["destiny:flip", "destiny:state"]
        finally:
            bus.shutdown()

    def test_each_topic_bound(self, mock_client):
        bus = SupabaseBroadcast(mock_client, "destiny")
        try:
            bus.on_message("destiny:flip", lambda p: None)
            bus.on_message("destiny:state", lambda p: None)
            bus.on_message("destiny:state", lambda p: None)

            channel = bus._channel
            events = [c.kwargs["event"] for c in channel.on_broadcast.call_args_list]
            assert events == ["destiny:flip", "destiny:state"]
        finally:
            bus.shutdown()

    def test_send_broadcasts(self, mock_client):
        bus = SupabaseBroadcast(mock_client, "destiny")
        bus.send("destiny:flip", {"proposedLight": 1})
        channel = bus._channel
        bus.shutdown()

        channel.send_broadcast.assert_awaited_once_with("destiny:flip", {"proposedLight": 1})

    def test_shutdown_removes_channel(self, mock_client):
        bus = SupabaseBroadcast(mock_client, "destiny")
        bus.on_message("destiny:state", lambda p: None)
        bus.shutdown()

        mock_client.realtime.remove_channel.assert_awaited_once()

    def test_shutdown_without_connect_is_noop(self, mock_client):
        SupabaseBroadcast(mock_client, "destiny").shutdown()
        mock_client.realtime.channel.assert_not_called()


class TestHandleBroadcast:
    def test_unwraps_payload(self, mock_client):
        received = []
        bus = SupabaseBroadcast(mock_client, "destiny")
        bus._handlers["destiny:state"] = [received.append]

        bus._handle_broadcast(
            {"event": "destiny:state", "type": "broadcast", "payload": {"light": 1, "dark": 2}},
            "destiny:state",
        )

        assert received == [{"light": 1, "dark": 2}]

    def test_handler_error_does_not_propagate(self, mock_client):
        bus = SupabaseBroadcast(mock_client, "destiny")

        def boom(data):
            raise RuntimeError("bad handler")

        bus._handlers["destiny:state"] = [boom]
        bus._handle_broadcast({"payload": {}}, "destiny:state")

    def test_unknown_topic_ignored(self, mock_client):
        bus = SupabaseBroadcast(mock_client, "destiny")
        bus._handle_broadcast({"payload": {}}, "nothing")
