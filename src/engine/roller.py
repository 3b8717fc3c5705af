"""
Destiny Dice - Roll Engine

Draws one face per die. Randomness comes from an injected source so rolls
can be replayed exactly in tests; each die consumes exactly one draw, so no
die's face depends on another's.
"""

import logging
import random
from typing import Protocol

from src.engine.base import DieFace, DieType, RollResult
from src.engine.pool import DicePool
from src.engine.symbols import SymbolTable, resolve_theme

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Uniform integer source."""

    def next_int(self, max_exclusive: int) -> int:
        """Return an integer in ``[0, max_exclusive)``."""
        ...


class PythonRandomSource:
    """RandomSource backed by :class:`random.Random`, optionally seeded."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def next_int(self, max_exclusive: int) -> int:
        return self._rng.randrange(max_exclusive)


class RollEngine:
    """
    Rolls dice pools against a symbol table.

    Args:
        table: Symbol table supplying face counts (default theme if omitted)
        rng: Randomness source (unseeded PythonRandomSource if omitted)
    """

    def __init__(
        self,
        table: SymbolTable | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.table = table or resolve_theme(None)
        self._rng = rng or PythonRandomSource()

    def roll_die(self, die_type: DieType) -> DieFace:
        """Roll a single die."""
        face_count = self.table.face_count(die_type)
        face_index = self._rng.next_int(face_count) + 1
        return DieFace(die_type=die_type, face_index=face_index)

    def roll(self, pool: DicePool) -> RollResult:
        """
        Roll every die in a pool.

        Args:
            pool: Pool to roll (not modified)

        Returns:
            RollResult with one face per die, in pool order
        """
        result = RollResult(faces=tuple(self.roll_die(die_type) for die_type in pool))
        logger.debug("Rolled %s -> %s", pool.formula or "empty pool",
                     [(f.die_type.value, f.face_index) for f in result])
        return result
