"""
Supabase client initialization.

Provides a configured Supabase client for snapshot storage.
"""

from functools import lru_cache

from supabase import Client, create_client

from attendance_bot.config import Settings, get_settings


def build_supabase_client(settings: Settings) -> Client:
    """Create a Supabase client from explicit settings."""
    return create_client(
        supabase_url=settings.supabase_url,
        supabase_key=settings.supabase_service_role_key,
    )


@lru_cache()
def get_supabase_client() -> Client:
    """
    Get a cached Supabase client instance.

    Returns:
        Client: Configured Supabase client

    Raises:
        Exception: If connection fails or credentials are invalid
    """
    return build_supabase_client(get_settings())
