"""
Destiny Dice Destiny Pool.

Shared light/dark counter with a single committing authority.
"""

from src.destiny.authority import DestinyAuthority, Role
from src.destiny.session import open_destiny_pool
from src.destiny.state import DestinyPoolState, Side

__all__ = ["DestinyAuthority", "DestinyPoolState", "Role", "Side", "open_destiny_pool"]
