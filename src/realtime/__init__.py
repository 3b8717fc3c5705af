"""
Destiny Dice Real-time Sync.

Broadcast channels and wire messages for the shared Destiny Pool.
"""

from src.realtime.channels import BroadcastChannel, LocalBroadcast
from src.realtime.events import (
    DestinyEvent,
    EventPayload,
    FlipProposal,
    StateUpdate,
    classify_message,
)
from src.realtime.subscriptions import SupabaseBroadcast

__all__ = [
    "BroadcastChannel",
    "DestinyEvent",
    "EventPayload",
    "FlipProposal",
    "LocalBroadcast",
    "StateUpdate",
    "SupabaseBroadcast",
    "classify_message",
]
