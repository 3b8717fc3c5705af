"""
Destiny Dice - Broadcast Channels

Publish/subscribe interface used by the Destiny Pool, plus an in-process
implementation for participants sharing one Python process.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

MessageHandler = Callable[[dict[str, Any]], None]


class BroadcastChannel(Protocol):
    """Fire-and-forget pub/sub. Messages carry no history."""

    def send(self, topic: str, payload: dict[str, Any]) -> None:
        ...

    def on_message(self, topic: str, handler: MessageHandler) -> None:
        ...


class LocalBroadcast:
    """
    In-process BroadcastChannel.

    Delivers synchronously to every handler registered for the topic at
    send time, the sender's own handlers included. A message sent to a
    topic nobody listens on is dropped.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[MessageHandler]] = defaultdict(list)
        self._lock = threading.Lock()

    def on_message(self, topic: str, handler: MessageHandler) -> None:
        with self._lock:
            self._handlers[topic].append(handler)

    def send(self, topic: str, payload: dict[str, Any]) -> None:
        with self._lock:
            handlers = list(self._handlers.get(topic, ()))

        if not handlers:
            logger.debug("No listeners on %s, message dropped", topic)
            return

        for handler in handlers:
            try:
                handler(dict(payload))
            except Exception:
                logger.exception("Error handling message on %s", topic)

    @property
    def topics(self) -> list[str]:
        with self._lock:
            return [topic for topic, handlers in self._handlers.items() if handlers]
