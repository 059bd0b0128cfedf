"""
Infrastructure Layer for progression analytics.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

from infrastructure.db import SupabaseProgressionRepository

__all__ = [
    "SupabaseProgressionRepository",
]
