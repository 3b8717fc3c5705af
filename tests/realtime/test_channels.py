"""Tests for src/realtime/channels.py — in-process broadcast."""

from src.realtime.channels import LocalBroadcast


class TestLocalBroadcast:
    def test_delivers_to_all_topic_handlers(self):
        channel = LocalBroadcast()
        first, second = [], []
        channel.on_message("t", first.append)
        channel.on_message("t", second.append)

        channel.send("t", {"x": 1})

        assert first == [{"x": 1}]
        assert second == [{"x": 1}]

    def test_other_topics_not_delivered(self):
        channel = LocalBroadcast()
        received = []
        channel.on_message("a", received.append)
        channel.send("b", {"x": 1})
        assert received == []

    def test_handlers_get_a_copy(self):
        channel = LocalBroadcast()
        payload = {"x": 1}
        channel.on_message("t", lambda data: data.update(x=2))
        channel.send("t", payload)
        assert payload == {"x": 1}

    def test_handler_error_does_not_stop_delivery(self):
        channel = LocalBroadcast()
        received = []

        def boom(data):
            raise RuntimeError("bad handler")

        channel.on_message("t", boom)
        channel.on_message("t", received.append)
        channel.send("t", {})
        assert received == [{}]

    def test_send_without_listeners_is_noop(self):
        LocalBroadcast().send("nobody", {"x": 1})

    def test_topics(self):
        channel = LocalBroadcast()
        channel.on_message("a", lambda d: None)
        assert channel.topics == ["a"]
