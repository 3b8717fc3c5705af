"""
Destiny Dice Database Layer.

Supabase-backed persistence for world-scoped settings.
"""

from src.database.client import create_supabase_client, get_supabase_client
from src.database.models import WorldSetting
from src.database.world_settings import KeyValueStore, MemoryStore, WorldSettingsManager

__all__ = [
    "create_supabase_client",
    "get_supabase_client",
    "KeyValueStore",
    "MemoryStore",
    "WorldSetting",
    "WorldSettingsManager",
]
