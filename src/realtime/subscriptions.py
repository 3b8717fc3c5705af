"""
Destiny Dice - Supabase Broadcast Channel

BroadcastChannel backed by Supabase Realtime broadcast messages.
Uses a background thread with an asyncio event loop since the sync
Realtime client in supabase 2.x is not implemented.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any

from supabase import Client

from src.realtime.channels import MessageHandler

logger = logging.getLogger(__name__)


class SupabaseBroadcast:
    """Broadcast channel over one Supabase Realtime channel.

    Bridges the async Realtime API with sync code by running an asyncio
    event loop in a daemon thread. Handlers are invoked from that
    background thread; callers should handle thread safety.
    """

    def __init__(self, client: Client, channel_name: str) -> None:
        self._client = client
        self._channel_name = channel_name
        self._channel: Any | None = None
        self._handlers: dict[str, list[MessageHandler]] = {}
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        """Start the background event loop if not running."""
        with self._lock:
            if self._loop is None or not self._loop.is_running():
                self._loop = asyncio.new_event_loop()
                self._thread = threading.Thread(
                    target=self._run_loop, daemon=True, name="broadcast-loop"
                )
                self._thread.start()
            return self._loop

    def _run_loop(self) -> None:
        """Run the asyncio event loop in the background thread."""
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def connect(self) -> None:
        """Join the Realtime channel. Safe to call more than once."""
        if self._channel is not None:
            return

        loop = self._ensure_loop()
        future = asyncio.run_coroutine_threadsafe(self._connect_async(), loop)
        future.result(timeout=10)

    async def _connect_async(self) -> None:
        """Create the channel, bind known topics and subscribe."""
        channel = self._client.realtime.channel(self._channel_name)
        for topic in self._handlers:
            self._bind(channel, topic)

        await channel.subscribe(
            callback=lambda state, err: self._on_subscribe_state(state, err)
        )
        self._channel = channel
        logger.info("Joined broadcast channel %s", self._channel_name)

    def _bind(self, channel: Any, topic: str) -> None:
        channel.on_broadcast(
            event=topic,
            callback=lambda payload, t=topic: self._handle_broadcast(payload, t),
        )

    def on_message(self, topic: str, handler: MessageHandler) -> None:
        """Register a handler for one topic, joining the channel if needed."""
        is_new_topic = topic not in self._handlers
        self._handlers.setdefault(topic, []).append(handler)

        if self._channel is None:
            self.connect()
        elif is_new_topic:
            self._bind(self._channel, topic)

    def send(self, topic: str, payload: dict[str, Any]) -> None:
        """Broadcast a message without waiting for delivery."""
        self.connect()
        loop = self._ensure_loop()
        future = asyncio.run_coroutine_threadsafe(
            self._channel.send_broadcast(topic, payload), loop
        )
        future.add_done_callback(lambda f, t=topic: self._on_sent(f, t))

    def _on_sent(self, future: Any, topic: str) -> None:
        error = future.exception()
        if error is not None:
            logger.error("Broadcast on %s failed: %s", topic, error)

    def _handle_broadcast(self, payload: dict[str, Any], topic: str) -> None:
        """Unwrap a Realtime broadcast and dispatch it to the topic's handlers."""
        try:
            data = payload.get("payload", payload)
            for handler in list(self._handlers.get(topic, ())):
                handler(dict(data))
        except Exception:
            logger.exception("Error handling broadcast on %s", topic)

    def _on_subscribe_state(self, state: str, error: Exception | None) -> None:
        """Log subscription state changes."""
        if error:
            logger.error("Subscription error for %s: %s", self._channel_name, error)
        else:
            logger.debug("Channel %s state: %s", self._channel_name, state)

    @property
    def topics(self) -> list[str]:
        return list(self._handlers.keys())

    def shutdown(self) -> None:
        """Leave the channel and stop the background event loop."""
        channel, self._channel = self._channel, None
        if channel is not None and self._loop and self._loop.is_running():
            future = asyncio.run_coroutine_threadsafe(
                self._leave_async(channel), self._loop
            )
            try:
                future.result(timeout=10)
            except Exception:
                logger.exception("Error leaving channel %s", self._channel_name)

        if self._loop and self._loop.is_running():
            self._loop.call_soon_threadsafe(self._loop.stop)
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5)
        self._loop = None
        self._thread = None

    async def _leave_async(self, channel: Any) -> None:
        """Unsubscribe and remove the channel."""
        await channel.unsubscribe()
        await self._client.realtime.remove_channel(channel)
