"""
Destiny Dice - Engine Configuration

Immutable configuration value created once at startup and passed explicitly
to the engine and the Destiny Pool.
"""

from dataclasses import dataclass

from src.config.settings import Settings
from src.engine.symbols import SymbolTable, resolve_theme


@dataclass(frozen=True)
class EngineConfig:
    """
    Startup configuration shared by the dice engine and Destiny Pool.

    Attributes:
        table: Symbol table of the selected theme
        is_game_master: Whether this participant is the Destiny authority
        destiny_channel: Broadcast channel name for Destiny messages
        light_key: Persistence key of the light side count
        dark_key: Persistence key of the dark side count
    """
    table: SymbolTable
    is_game_master: bool = False
    destiny_channel: str = "destiny"
    light_key: str = "dPoolLight"
    dark_key: str = "dPoolDark"

    @property
    def proposal_topic(self) -> str:
        return f"{self.destiny_channel}:flip"

    @property
    def state_topic(self) -> str:
        return f"{self.destiny_channel}:state"

    @classmethod
    def from_settings(cls, settings: Settings) -> "EngineConfig":
        """Resolve the theme (with default fallback) and freeze the settings."""
        return cls(
            table=resolve_theme(settings.dice_theme),
            is_game_master=settings.is_game_master,
            destiny_channel=settings.destiny_channel,
            light_key=settings.destiny_light_key,
            dark_key=settings.destiny_dark_key,
        )
