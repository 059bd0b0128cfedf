"""
Domain layer for progression analytics.

This package contains pure domain models that are independent of
infrastructure concerns (database, CLI, external services).
"""

from domain.models import (
    AdherenceRow,
    ExerciseLogEntry,
    PerformedSet,
    ProgressionAnalytics,
    ProgressionMetric,
    ProgressionSnapshot,
    ProgressionTarget,
    ProgressionTrendPoint,
    SnapshotRow,
    ValidatedSet,
    WorkoutLog,
)

__all__ = [
    "AdherenceRow",
    "ExerciseLogEntry",
    "PerformedSet",
    "ProgressionAnalytics",
    "ProgressionMetric",
    "ProgressionSnapshot",
    "ProgressionTarget",
    "ProgressionTrendPoint",
    "SnapshotRow",
    "ValidatedSet",
    "WorkoutLog",
]
