"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository
interfaces defined in application.ports.

Usage:
    from backend.database import get_supabase_client
    from infrastructure.db import SupabaseProgressionRepository

    client = get_supabase_client()
    progression_repo = SupabaseProgressionRepository(client)
"""

from infrastructure.db.progression_repository import SupabaseProgressionRepository

__all__ = [
    "SupabaseProgressionRepository",
]
