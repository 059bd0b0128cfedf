"""
Progression Repository Interface (Port).

This module defines the abstract interface for reading workout logs,
adherence rows and progression snapshots, and for persisting recomputed
snapshots. Used by the ProgressionService.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Protocol, Sequence

from domain.models import ProgressionSnapshot


class ProgressionRepository(Protocol):
    """
    Abstract interface for progression data access.

    Implementations raise application.exceptions.ProgressionDataError when
    the backing store fails. Rows are returned as plain dicts; the analytics
    pipeline validates them itself.
    """

    def list_workout_logs(
        self,
        user_id: str,
        *,
        since: Optional[date] = None,
        until: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get workout logs for a user, most recent first.

        Args:
            user_id: User ID
            since: Inclusive lower bound on the log date
            until: Inclusive upper bound on the log date
            limit: Maximum logs to return (None for no limit)

        Returns:
            List of dicts with "date" (ISO string) and "exercises" (list)
        """
        ...

    def list_snapshots(
        self,
        user_id: str,
        *,
        limit: Optional[int] = 100,
    ) -> List[Dict[str, Any]]:
        """
        Get stored progression snapshots, most recently updated first.

        Args:
            user_id: User ID
            limit: Maximum rows to return (None for no limit)

        Returns:
            List of dicts with exercise_name, e1rm, total_volume, trend_score,
            last_performed_date, sample_size, updated_at
        """
        ...

    def upsert_snapshots(
        self,
        user_id: str,
        snapshots: Sequence[ProgressionSnapshot],
    ) -> int:
        """
        Insert or replace snapshots keyed by (user_id, exercise_name).

        Args:
            user_id: User ID
            snapshots: Freshly computed snapshots

        Returns:
            Number of rows written
        """
        ...

    def list_adherence(
        self,
        user_id: str,
        *,
        since: Optional[date] = None,
        until: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get daily nutrition adherence rows.

        Args:
            user_id: User ID
            since: Inclusive lower bound on date_local
            until: Inclusive upper bound on date_local

        Returns:
            List of dicts with date_local and total_score
        """
        ...
