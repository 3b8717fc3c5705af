"""
Destiny Dice - Application Settings

Loads configuration from environment variables using Pydantic Settings.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase (optional, only needed for shared sessions)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Dice
    dice_theme: str = "starwars"

    # Destiny Pool
    is_game_master: bool = False
    destiny_channel: str = "destiny"
    destiny_light_key: str = "dPoolLight"
    destiny_dark_key: str = "dPoolDark"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @property
    def has_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
