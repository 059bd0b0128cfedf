"""
Progression Service.

This module provides the business operations around the progression
pipeline:
- Recompute and persist progression snapshots from workout history
- Next-session targets from stored snapshots
- Performance analytics report (e1rm metrics, trend points, adherence)

The numeric work lives in progression_compute, progression_analytics and
progression_targets; this service only fetches rows, calls those pure
functions, and writes results back.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence
import logging

from application.ports import ProgressionRepository
from backend.core.normalize import normalize_exercise_name
from backend.core.progression_analytics import build_progression_analytics
from backend.core.progression_compute import (
    coerce_rows,
    coerce_workout_logs,
    compute_progression_snapshots,
)
from backend.core.progression_targets import pick_target
from backend.settings import Settings, get_settings
from domain.models import (
    ProgressionMetric,
    ProgressionSnapshot,
    ProgressionTarget,
    ProgressionTrendPoint,
    SnapshotRow,
)

logger = logging.getLogger(__name__)

MAX_TARGET_EXERCISES = 25


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class RecomputeResult:
    """Snapshots written by a recompute."""
    snapshots: List[ProgressionSnapshot] = field(default_factory=list)

    @property
    def snapshot_count(self) -> int:
        return len(self.snapshots)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "snapshots": [s.model_dump() for s in self.snapshots],
            "snapshot_count": self.snapshot_count,
        }


@dataclass
class NextTargetsResult:
    """Targets for the next session."""
    targets: List[ProgressionTarget] = field(default_factory=list)

    @property
    def sparse_history(self) -> bool:
        return len(self.targets) == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "targets": [t.model_dump() for t in self.targets],
            "sparse_history": self.sparse_history,
        }


@dataclass
class PerformanceAnalyticsReport:
    """Progression section of the performance analytics response."""
    period_days: int
    progression_e1rm_metrics: List[ProgressionMetric] = field(default_factory=list)
    progression_trend_points: List[ProgressionTrendPoint] = field(default_factory=list)
    progression_adherence: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period_days": self.period_days,
            "progression_e1rm_metrics": [m.model_dump() for m in self.progression_e1rm_metrics],
            "progression_trend_points": [p.model_dump() for p in self.progression_trend_points],
            "progression_adherence": self.progression_adherence,
        }


def clean_exercise_names(exercise_names: Optional[Sequence[str]]) -> List[str]:
    """Trim names, drop blanks, keep at most MAX_TARGET_EXERCISES."""
    if not exercise_names:
        return []
    cleaned = [n.strip() for n in exercise_names if isinstance(n, str) and n.strip()]
    return cleaned[:MAX_TARGET_EXERCISES]


# =============================================================================
# Progression Service
# =============================================================================


class ProgressionService:
    """
    Service for progression snapshots, targets and analytics.

    Repository errors (ProgressionDataError) propagate to the caller.
    """

    def __init__(
        self,
        progression_repo: ProgressionRepository,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the progression service.

        Args:
            progression_repo: Repository for progression data access
            settings: Optional settings; defaults to get_settings()
        """
        self._progression_repo = progression_repo
        self._settings = settings or get_settings()

    def recompute_snapshots(self, user_id: str) -> RecomputeResult:
        """
        Recompute snapshots from recent history and persist them.

        The repository returns the newest logs first; they are sorted back
        into chronological order before aggregation.

        Args:
            user_id: User ID

        Returns:
            RecomputeResult with the snapshots that were written
        """
        logs = self._progression_repo.list_workout_logs(
            user_id,
            limit=self._settings.progression_history_limit,
        )
        chronological = sorted(coerce_workout_logs(logs), key=lambda log: log.date)

        snapshots = compute_progression_snapshots(chronological)
        self._progression_repo.upsert_snapshots(user_id, snapshots)

        logger.info(
            f"Recomputed {len(snapshots)} progression snapshots for {user_id} "
            f"from {len(logs)} workout logs"
        )
        return RecomputeResult(snapshots=snapshots)

    def _load_targets(self, user_id: str, keys: List[str]) -> List[ProgressionTarget]:
        # Name filtering happens here on normalized names, so the limit
        # applies to the matches rather than to the raw rows.
        limit = self._settings.progression_targets_limit
        rows = self._progression_repo.list_snapshots(
            user_id,
            limit=None if keys else limit,
        )
        targets: List[ProgressionTarget] = []
        for row in coerce_rows(rows, SnapshotRow):
            if not row.exercise_name.strip():
                continue
            if keys and normalize_exercise_name(row.exercise_name) not in keys:
                continue
            targets.append(pick_target(row))
        return targets[:limit]

    def get_next_targets(
        self,
        user_id: str,
        exercise_names: Optional[Sequence[str]] = None,
    ) -> NextTargetsResult:
        """
        Get next-session targets, recomputing snapshots once if none exist.

        Args:
            user_id: User ID
            exercise_names: Optional filter; matched by normalized name

        Returns:
            NextTargetsResult (sparse_history is True when still empty)
        """
        keys = [normalize_exercise_name(n) for n in clean_exercise_names(exercise_names)]

        targets = self._load_targets(user_id, keys)
        if not targets:
            logger.info(f"No progression snapshots for {user_id}; recomputing before picking targets")
            self.recompute_snapshots(user_id)
            targets = self._load_targets(user_id, keys)

        return NextTargetsResult(targets=targets)

    def get_performance_analytics(
        self,
        user_id: str,
        *,
        today: Optional[date] = None,
        period_days: Optional[int] = None,
    ) -> PerformanceAnalyticsReport:
        """
        Build the progression part of the performance analytics response.

        Args:
            user_id: User ID
            today: Local date the report is anchored to (default: today)
            period_days: Adherence window in days (default from settings)

        Returns:
            PerformanceAnalyticsReport
        """
        today = today or date.today()
        period_days = period_days or self._settings.analytics_period_days
        workout_since = today - timedelta(days=self._settings.analytics_workout_window_days)
        period_since = today - timedelta(days=period_days)

        workouts = self._progression_repo.list_workout_logs(
            user_id,
            since=workout_since,
            until=today,
        )
        snapshots = self._progression_repo.list_snapshots(
            user_id,
            limit=self._settings.progression_snapshot_limit,
        )
        adherence = self._progression_repo.list_adherence(
            user_id,
            since=period_since,
            until=today,
        )

        analytics = build_progression_analytics(workouts, snapshots, adherence)

        return PerformanceAnalyticsReport(
            period_days=period_days,
            progression_e1rm_metrics=analytics.metrics,
            progression_trend_points=analytics.trend_points,
            progression_adherence=analytics.adherence_avg,
        )
