"""
Destiny Dice - Result Aggregator

Reduces a rolled pool to its net result. Success/failure, advantage/threat
and light/dark each cancel one-for-one and independently of each other.
Triumph and despair faces already carry their success or failure in the
face table, so they cancel through those fields and are additionally
reported uncancelled.
"""

from functools import reduce

from src.engine.base import BLANK, NetResult, RollResult, SymbolVector
from src.engine.symbols import SymbolTable, resolve_theme


class ResultAggregator:
    """Pure reducer from RollResult to NetResult."""

    def __init__(self, table: SymbolTable | None = None) -> None:
        self.table = table or resolve_theme(None)

    def raw_totals(self, roll: RollResult) -> SymbolVector:
        """Field-wise sum of every rolled face."""
        return reduce(
            lambda total, face: total + self.table.face_symbols(face.die_type, face.face_index),
            roll,
            BLANK,
        )

    def aggregate(self, roll: RollResult) -> NetResult:
        """
        Cancel opposing symbols.

        Args:
            roll: Rolled faces

        Returns:
            NetResult. Check fields are None for a pool of only Force dice.
        """
        raw = self.raw_totals(roll)

        if roll.is_force_only:
            success_or_failure = None
            advantage_or_threat = None
        else:
            success_or_failure = raw.success - raw.failure
            advantage_or_threat = raw.advantage - raw.threat

        return NetResult(
            success_or_failure=success_or_failure,
            advantage_or_threat=advantage_or_threat,
            triumph=raw.triumph,
            despair=raw.despair,
            light_or_dark=raw.light - raw.dark,
        )
