"""
Destiny Dice - Destiny Pool Session Wiring

Convenience constructors that pick persistence and transport from settings.
"""

from __future__ import annotations

import logging

from src.config.engine import EngineConfig
from src.config.log import configure_logging
from src.config.settings import Settings, get_settings
from src.database.client import create_supabase_client
from src.database.world_settings import MemoryStore, WorldSettingsManager
from src.destiny.authority import DestinyAuthority
from src.realtime.channels import LocalBroadcast
from src.realtime.subscriptions import SupabaseBroadcast

logger = logging.getLogger(__name__)


def open_destiny_pool(settings: Settings | None = None) -> DestinyAuthority:
    """
    Create this participant's Destiny Pool from settings.

    Uses Supabase persistence and Realtime broadcast when credentials are
    configured, otherwise an in-process store and channel.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, debug=settings.debug)
    config = EngineConfig.from_settings(settings)

    if settings.has_supabase:
        client = create_supabase_client(settings)
        store = WorldSettingsManager(client)
        channel = SupabaseBroadcast(client, config.destiny_channel)
        logger.info("Destiny Pool using Supabase channel %s", config.destiny_channel)
    else:
        store = MemoryStore()
        channel = LocalBroadcast()
        logger.info("Destiny Pool running locally (no Supabase credentials)")

    return DestinyAuthority(config, store, channel)
