"""
Destiny Dice Game Engine.

Pure Python dice logic with zero UI/database dependencies.
Handles symbol tables, pool composition, rolling, and symbol cancellation.
"""

from src.engine.aggregator import ResultAggregator
from src.engine.base import (
    CheckOutcome,
    DieFace,
    DieType,
    Difficulty,
    NetResult,
    RollResult,
    Symbol,
    SymbolVector,
)
from src.engine.errors import (
    DestinyDiceError,
    InsufficientPool,
    InvalidFaceIndex,
    Unauthorized,
    UnknownTheme,
)
from src.engine.pool import DicePool, build_check_pool
from src.engine.roller import PythonRandomSource, RandomSource, RollEngine
from src.engine.symbols import SymbolTable, load_theme, resolve_theme

__all__ = [
    # Data Classes
    "DieFace",
    "NetResult",
    "RollResult",
    "SymbolVector",
    # Enums
    "CheckOutcome",
    "DieType",
    "Difficulty",
    "Symbol",
    # Errors
    "DestinyDiceError",
    "InsufficientPool",
    "InvalidFaceIndex",
    "Unauthorized",
    "UnknownTheme",
    # Engine
    "DicePool",
    "PythonRandomSource",
    "RandomSource",
    "ResultAggregator",
    "RollEngine",
    "SymbolTable",
    "build_check_pool",
    "load_theme",
    "resolve_theme",
]
