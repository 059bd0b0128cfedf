"""
Domain models for progression analytics.

This package contains pure domain models that are independent of
infrastructure concerns (database, CLI, external services).

These models represent the core business concepts:
- WorkoutLog / ExerciseLogEntry / PerformedSet: raw training logs
- ValidatedSet: a set that passed rep/load validation
- ProgressionSnapshot: persisted per-exercise aggregate
- ProgressionTrendPoint / ProgressionMetric / ProgressionAnalytics: dashboard output
- ProgressionTarget: next-session load suggestion

Usage:
    >>> from domain.models import WorkoutLog

    >>> log = WorkoutLog.model_validate({"date": "2026-02-20", "exercises": []})
    >>> log.model_dump_json()
    '{"date":"2026-02-20","exercises":[]}'
"""

from domain.models.progression import (
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
    VolumeLandmark,
    WorkoutLog,
)

__all__ = [
    # Inputs
    "WorkoutLog",
    "ExerciseLogEntry",
    "PerformedSet",
    "SnapshotRow",
    "AdherenceRow",
    # Internal
    "ValidatedSet",
    # Outputs
    "ProgressionSnapshot",
    "ProgressionTrendPoint",
    "ProgressionMetric",
    "ProgressionAnalytics",
    "ProgressionTarget",
    "VolumeLandmark",
]
