"""
Destiny Dice - Destiny Pool State

The shared light/dark counter. Flips move one point between the sides and
keep the total; adding or removing points changes it.
"""

from enum import Enum

from pydantic import BaseModel, Field

from src.engine.errors import InsufficientPool


class Side(Enum):
    """Destiny Pool sides."""
    LIGHT = "light"
    DARK = "dark"

    @property
    def opposite(self) -> "Side":
        return Side.DARK if self is Side.LIGHT else Side.LIGHT

    @property
    def label(self) -> str:
        return f"{self.value.title()} Side point"


class DestinyPoolState(BaseModel):
    """Immutable snapshot of the Destiny Pool."""

    light: int = Field(default=0, ge=0)
    dark: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def total(self) -> int:
        return self.light + self.dark

    def count(self, side: Side) -> int:
        return getattr(self, side.value)

    def flipped(self, from_side: Side) -> "DestinyPoolState":
        """
        Move one point from ``from_side`` to the other side.

        Raises:
            InsufficientPool: If ``from_side`` is empty
        """
        if self.count(from_side) == 0:
            raise InsufficientPool(f"Cannot flip a {from_side.label}; 0 remaining.")
        return self.model_copy(update={
            from_side.value: self.count(from_side) - 1,
            from_side.opposite.value: self.count(from_side.opposite) + 1,
        })

    def adjusted(self, side: Side, delta: int) -> "DestinyPoolState":
        """
        Add ``delta`` points (negative to remove) to one side.

        Raises:
            InsufficientPool: If the side would drop below zero
        """
        new_count = self.count(side) + delta
        if new_count < 0:
            raise InsufficientPool(f"Cannot remove a {side.label}; 0 remaining.")
        return self.model_copy(update={side.value: new_count})

    def flip_source(self, target: "DestinyPoolState") -> Side | None:
        """Side flipped to turn this state into ``target``, or None if no single flip does."""
        if target.total != self.total:
            return None
        if target.light == self.light - 1:
            return Side.LIGHT
        if target.light == self.light + 1:
            return Side.DARK
        return None
