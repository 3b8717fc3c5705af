"""
Destiny Dice - Dice Pool

A pool is an ordered list of die types. Order only matters for display;
every composition rule works on per-type counts and saturates instead of
failing, so any sequence of operations leaves a valid pool.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Mapping

from src.engine.base import DIE_ORDER, TIER_PAIRS, Difficulty, DieType
from src.engine.validators import (
    validate_count,
    validate_die_type,
    validate_rating,
    validate_tier_pair,
)

_FORMULA_TERM = re.compile(r"^\s*(\d*)\s*(d?[a-z])\s*$", re.IGNORECASE)

_LOWER_TIERS: dict[DieType, DieType] = {
    higher: lower for lower, higher in TIER_PAIRS.items()
}


class DicePool:
    """
    Mutable multiset of narrative dice.

    Composition methods return the pool so calls can be chained:
    ``DicePool().add(DieType.ABILITY, 2).upgrade(DieType.ABILITY)``.
    """

    def __init__(self, dice: Iterable[DieType] = ()) -> None:
        self._dice: list[DieType] = [validate_die_type(d) for d in dice]

    # -- Construction ----------------------------------------------------

    @classmethod
    def from_counts(cls, counts: Mapping[DieType, int]) -> "DicePool":
        """Build a pool from per-type counts, in canonical order."""
        pool = cls()
        for die_type in DIE_ORDER:
            pool.add(die_type, counts.get(die_type, 0))
        return pool

    @classmethod
    def from_formula(cls, formula: str) -> "DicePool":
        """
        Parse roll notation such as ``"2da+1dp+1dd"``.

        Raises:
            ValueError: If a term is malformed or names an unknown die
        """
        pool = cls()
        if not formula.strip():
            return pool

        for term in formula.split("+"):
            match = _FORMULA_TERM.match(term)
            if match is None:
                raise ValueError(f"Malformed dice term '{term.strip()}' in '{formula}'.")
            count_text, die_text = match.groups()
            pool.add(DieType.from_term(die_text), int(count_text) if count_text else 1)
        return pool

    # -- Inspection ------------------------------------------------------

    @property
    def dice(self) -> tuple[DieType, ...]:
        return tuple(self._dice)

    def count(self, die_type: DieType) -> int:
        return self._dice.count(die_type)

    def counts(self) -> dict[DieType, int]:
        """Non-zero counts per die type, in canonical order."""
        return {
            die_type: self.count(die_type)
            for die_type in DIE_ORDER
            if die_type in self._dice
        }

    @property
    def formula(self) -> str:
        return "+".join(
            f"{count}{die_type.term}" for die_type, count in self.counts().items()
        )

    def __len__(self) -> int:
        return len(self._dice)

    def __iter__(self) -> Iterator[DieType]:
        return iter(self._dice)

    def __bool__(self) -> bool:
        return bool(self._dice)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DicePool):
            return NotImplemented
        return self.counts() == other.counts()

    def __repr__(self) -> str:
        return f"DicePool({self.formula!r})"

    # -- Composition -----------------------------------------------------

    def add(self, die_type: DieType, count: int = 1) -> "DicePool":
        """Append ``count`` dice of a type."""
        validate_die_type(die_type)
        validate_count(count)
        self._dice.extend([die_type] * count)
        return self

    def remove(self, die_type: DieType, count: int = 1) -> "DicePool":
        """Remove up to ``count`` dice of a type, never going below zero."""
        validate_die_type(die_type)
        validate_count(count)
        for _ in range(min(count, self.count(die_type))):
            # Drop from the end so earlier dice keep their display slot
            index = len(self._dice) - 1 - self._dice[::-1].index(die_type)
            del self._dice[index]
        return self

    def upgrade(
        self,
        from_type: DieType = DieType.ABILITY,
        to_type: DieType | None = None,
        count: int = 1,
    ) -> "DicePool":
        """
        Convert lower-tier dice into their higher tier.

        When fewer than ``count`` lower-tier dice exist, the shortfall is
        added as new higher-tier dice.

        Args:
            from_type: Ability or Difficulty
            to_type: Paired higher tier (inferred when omitted)
            count: Number of upgrades
        """
        lower, higher = validate_tier_pair(from_type, to_type)
        validate_count(count)

        converted = self._convert(lower, higher, count)
        self.add(higher, count - converted)
        return self

    def downgrade(
        self,
        from_type: DieType = DieType.PROFICIENCY,
        to_type: DieType | None = None,
        count: int = 1,
    ) -> "DicePool":
        """
        Convert higher-tier dice back into their lower tier.

        When fewer than ``count`` higher-tier dice exist, the shortfall
        removes lower-tier dice instead, saturating at zero.

        Args:
            from_type: Proficiency or Challenge
            to_type: Paired lower tier (inferred when omitted)
            count: Number of downgrades
        """
        validate_die_type(from_type)
        if from_type not in _LOWER_TIERS:
            raise ValueError(
                f"{from_type.name} has no lower tier. "
                f"Only {', '.join(d.name for d in _LOWER_TIERS)} can be downgraded."
            )
        higher, lower = from_type, _LOWER_TIERS[from_type]
        if to_type is not None and to_type is not lower:
            raise ValueError(f"{higher.name} pairs with {lower.name}, not {to_type.name}.")
        validate_count(count)

        converted = self._convert(higher, lower, count)
        self.remove(lower, count - converted)
        return self

    def _convert(self, source: DieType, target: DieType, count: int) -> int:
        """Swap up to ``count`` dice in place. Returns how many were swapped."""
        converted = 0
        for index, die_type in enumerate(self._dice):
            if converted == count:
                break
            if die_type is source:
                self._dice[index] = target
                converted += 1
        return converted


def build_check_pool(
    characteristic: int,
    skill_rank: int,
    difficulty: Difficulty | int = Difficulty.AVERAGE,
) -> DicePool:
    """
    Assemble the standard skill check pool.

    The higher of characteristic and skill rank sets the number of positive
    dice; the lower sets how many of them are upgraded to Proficiency.

    Args:
        characteristic: Characteristic rating (0-6)
        skill_rank: Trained ranks in the skill (0-6)
        difficulty: Difficulty level or raw Difficulty dice count

    Returns:
        A new DicePool
    """
    validate_rating(characteristic, "Characteristic")
    validate_rating(skill_rank, "Skill rank")
    if isinstance(difficulty, Difficulty):
        difficulty = difficulty.value
    validate_count(difficulty, "Difficulty")

    pool = DicePool().add(DieType.ABILITY, max(characteristic, skill_rank))
    pool.upgrade(DieType.ABILITY, DieType.PROFICIENCY, min(characteristic, skill_rank))
    pool.add(DieType.DIFFICULTY, difficulty)
    return pool
