"""
Destiny Dice - Realtime Event Definitions

Event types and wire payloads for Destiny Pool broadcasts.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from pydantic import BaseModel, Field

PROPOSAL_SUFFIX = ":flip"
STATE_SUFFIX = ":state"


class DestinyEvent(Enum):
    """Messages exchanged over the Destiny channel."""

    FLIP_PROPOSED = auto()
    STATE_REPLICATED = auto()


@dataclass
class EventPayload:
    """Wrapper for a received broadcast."""

    event: DestinyEvent
    topic: str
    data: dict[str, Any] = field(default_factory=dict)


class FlipProposal(BaseModel):
    """An observer's request to flip one Destiny point."""

    proposed_light: int = Field(alias="proposedLight", ge=0)
    proposed_dark: int = Field(alias="proposedDark", ge=0)
    assumed_prior_total: int = Field(alias="assumedPriorTotal", ge=0)

    model_config = {"frozen": True, "populate_by_name": True}

    def to_payload(self) -> dict[str, int]:
        return self.model_dump(by_alias=True)


class StateUpdate(BaseModel):
    """Committed Destiny counts replicated by the authority."""

    light: int = Field(ge=0)
    dark: int = Field(ge=0)
    notice: str | None = None

    model_config = {"frozen": True}

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()


def classify_message(topic: str) -> DestinyEvent | None:
    """Determine the Destiny event from a broadcast topic."""
    if topic.endswith(PROPOSAL_SUFFIX):
        return DestinyEvent.FLIP_PROPOSED
    if topic.endswith(STATE_SUFFIX):
        return DestinyEvent.STATE_REPLICATED
    return None
