"""
Destiny Dice - World Settings Store

Key/value persistence for world-scoped values such as the Destiny Pool
counts. Reads and writes are synchronous from the caller's perspective.
"""

from __future__ import annotations

import threading
from typing import Any, Protocol

from supabase import Client

from src.database.models import WorldSetting


class KeyValueStore(Protocol):
    """Get/set by name."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class MemoryStore:
    """Process-local KeyValueStore for single-table sessions and tests."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value


class WorldSettingsManager:
    """Manages world settings in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("world_settings")

    def get_setting(self, key: str) -> WorldSetting | None:
        """Get a single setting row."""
        data = (
            self.table
            .select("*")
            .eq("key", key)
            .execute()
        )
        if data.data:
            return WorldSetting.model_validate(data.data[0])
        return None

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value, or default when the row is missing."""
        setting = self.get_setting(key)
        if setting is None:
            return default
        return setting.value

    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite a setting."""
        (
            self.table
            .upsert({"key": key, "value": value}, on_conflict="key")
            .execute()
        )

    def delete(self, key: str) -> None:
        """Delete a setting."""
        self.table.delete().eq("key", key).execute()
