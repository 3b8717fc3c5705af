"""
Destiny Dice Configuration.

Environment variables, settings, and logging configuration.
"""

from src.config.engine import EngineConfig
from src.config.log import configure_logging
from src.config.settings import Settings, get_settings

__all__ = ["EngineConfig", "Settings", "configure_logging", "get_settings"]
