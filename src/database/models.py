"""
Destiny Dice - Database Models

Pydantic models that mirror the Supabase table schemas.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class WorldSetting(BaseModel):
    """Mirrors the `world_settings` table."""

    key: str = Field(max_length=64)
    value: Any = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
