"""
Destiny Dice - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from typing import Callable

import pytest

from src.config.engine import EngineConfig
from src.database.world_settings import MemoryStore
from src.engine.base import DieType
from src.engine.roller import RollEngine
from src.engine.symbols import STARWARS, SymbolTable
from src.realtime.channels import LocalBroadcast


class ScriptedFaces:
    """RandomSource that replays 1-based faces in order."""

    def __init__(self, faces: list[int]) -> None:
        self._faces = list(faces)
        self.requests: list[int] = []

    def next_int(self, max_exclusive: int) -> int:
        self.requests.append(max_exclusive)
        if not self._faces:
            raise AssertionError("Scripted faces exhausted")
        face = self._faces.pop(0)
        assert 1 <= face <= max_exclusive, f"face {face} not valid for d{max_exclusive}"
        return face - 1


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def table() -> SymbolTable:
    return STARWARS


@pytest.fixture
def scripted_source() -> Callable[..., ScriptedFaces]:
    """Factory for a RandomSource that lands on the given faces."""
    def make(*faces: int) -> ScriptedFaces:
        return ScriptedFaces(list(faces))
    return make


@pytest.fixture
def scripted_engine(table, scripted_source) -> Callable[..., RollEngine]:
    """Factory for a RollEngine whose dice land on the given faces."""
    def make(*faces: int) -> RollEngine:
        return RollEngine(table, scripted_source(*faces))
    return make


@pytest.fixture
def face_counts() -> dict[DieType, int]:
    return {
        DieType.ABILITY: 8,
        DieType.PROFICIENCY: 12,
        DieType.BOOST: 6,
        DieType.DIFFICULTY: 8,
        DieType.CHALLENGE: 12,
        DieType.SETBACK: 6,
        DieType.FORCE: 12,
    }


# =============================================================================
# DESTINY POOL FIXTURES
# =============================================================================

@pytest.fixture
def gm_config() -> EngineConfig:
    return EngineConfig(table=STARWARS, is_game_master=True)


@pytest.fixture
def player_config() -> EngineConfig:
    return EngineConfig(table=STARWARS, is_game_master=False)


@pytest.fixture
def channel() -> LocalBroadcast:
    return LocalBroadcast()


@pytest.fixture
def store() -> MemoryStore:
    """World store holding 3 light / 2 dark."""
    return MemoryStore({"dPoolLight": 3, "dPoolDark": 2})
