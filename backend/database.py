"""
Database module for Supabase integration.

Builds the Supabase client used by the infrastructure repositories.
"""
from typing import Optional
import logging

from supabase import Client, create_client

from application.exceptions import DatabaseNotConfiguredError
from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

_client: Optional[Client] = None


def get_supabase_client(settings: Optional[Settings] = None) -> Client:
    """
    Get Supabase client instance (cached per process).

    Args:
        settings: Optional Settings; defaults to get_settings()

    Returns:
        Client: Supabase client instance

    Raises:
        DatabaseNotConfiguredError: if URL or key is missing
    """
    global _client
    if _client is not None:
        return _client

    settings = settings or get_settings()
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase credentials not configured. Progression storage is unavailable.")
        raise DatabaseNotConfiguredError(
            "Database not available. Supabase credentials not configured."
        )

    _client = create_client(settings.supabase_url, settings.supabase_key)
    return _client


def reset_supabase_client() -> None:
    """Drop the cached client (used by tests)."""
    global _client
    _client = None
