"""
Supabase Progression Repository Implementation.

This module implements the ProgressionRepository protocol using Supabase.
Reads workout_logs, nutrition_adherence_daily and progression_snapshots,
and upserts recomputed snapshots keyed by (user_id, exercise_name).
"""
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
import logging

from supabase import Client

from application.exceptions import ProgressionDataError
from domain.models import ProgressionSnapshot

logger = logging.getLogger(__name__)

WORKOUT_LOGS_TABLE = "workout_logs"
SNAPSHOTS_TABLE = "progression_snapshots"
ADHERENCE_TABLE = "nutrition_adherence_daily"

SNAPSHOT_COLUMNS = (
    "exercise_name, e1rm, total_volume, trend_score, "
    "last_performed_date, sample_size, updated_at"
)


class SupabaseProgressionRepository:
    """
    Supabase implementation of ProgressionRepository.

    Query failures are logged and re-raised as ProgressionDataError so the
    caller decides how to surface them.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def list_workout_logs(
        self,
        user_id: str,
        *,
        since: Optional[date] = None,
        until: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Get workout logs for a user, most recent first."""
        try:
            query = self._client.table(WORKOUT_LOGS_TABLE) \
                .select("date, exercises") \
                .eq("user_id", user_id)

            if since is not None:
                query = query.gte("date", since.isoformat())
            if until is not None:
                query = query.lte("date", until.isoformat())

            query = query.order("date", desc=True)
            if limit is not None:
                query = query.limit(limit)

            result = query.execute()
            return result.data or []

        except Exception as e:
            logger.exception(f"Error fetching workout logs for {user_id}: {e}")
            raise ProgressionDataError(f"Failed to load workout logs: {e}") from e

    def list_snapshots(
        self,
        user_id: str,
        *,
        limit: Optional[int] = 100,
    ) -> List[Dict[str, Any]]:
        """Get stored progression snapshots, most recently updated first."""
        try:
            query = self._client.table(SNAPSHOTS_TABLE) \
                .select(SNAPSHOT_COLUMNS) \
                .eq("user_id", user_id) \
                .order("updated_at", desc=True)
            if limit is not None:
                query = query.limit(limit)

            result = query.execute()
            return result.data or []

        except Exception as e:
            logger.exception(f"Error fetching progression snapshots for {user_id}: {e}")
            raise ProgressionDataError(f"Failed to load progression snapshots: {e}") from e

    def upsert_snapshots(
        self,
        user_id: str,
        snapshots: Sequence[ProgressionSnapshot],
    ) -> int:
        """Insert or replace snapshots keyed by (user_id, exercise_name)."""
        if not snapshots:
            return 0

        updated_at = datetime.now(timezone.utc).isoformat()
        rows = [
            {
                "user_id": user_id,
                "exercise_name": snapshot.exercise_name,
                "e1rm": snapshot.e1rm,
                "total_volume": snapshot.total_volume,
                "trend_score": snapshot.trend_score,
                "last_performed_date": snapshot.last_performed_date,
                "sample_size": snapshot.sample_size,
                "updated_at": updated_at,
            }
            for snapshot in snapshots
        ]

        try:
            self._client.table(SNAPSHOTS_TABLE) \
                .upsert(rows, on_conflict="user_id,exercise_name") \
                .execute()
        except Exception as e:
            logger.exception(f"Error upserting progression snapshots for {user_id}: {e}")
            raise ProgressionDataError(f"Failed to save progression snapshots: {e}") from e

        logger.info(f"Upserted {len(rows)} progression snapshots for {user_id}")
        return len(rows)

    def list_adherence(
        self,
        user_id: str,
        *,
        since: Optional[date] = None,
        until: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """Get daily nutrition adherence rows."""
        try:
            query = self._client.table(ADHERENCE_TABLE) \
                .select("date_local, total_score") \
                .eq("user_id", user_id)

            if since is not None:
                query = query.gte("date_local", since.isoformat())
            if until is not None:
                query = query.lte("date_local", until.isoformat())

            result = query.execute()
            return result.data or []

        except Exception as e:
            logger.exception(f"Error fetching adherence rows for {user_id}: {e}")
            raise ProgressionDataError(f"Failed to load adherence rows: {e}") from e
