"""
Destiny Dice - Supabase Client

Thread-safe singleton factory for the Supabase client.
"""

from functools import lru_cache

from supabase import Client, create_client

from src.config.settings import Settings, get_settings


def create_supabase_client(settings: Settings) -> Client:
    """Create a Supabase client from explicit settings."""
    if not settings.has_supabase:
        raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set for shared sessions.")
    return create_client(settings.supabase_url, settings.supabase_anon_key)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Create and cache a Supabase client instance."""
    return create_supabase_client(get_settings())
