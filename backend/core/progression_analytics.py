"""
Progression analytics for the performance dashboard.

Merges three sources into one read-only shape:
- trend points computed fresh from recent workout logs
- previously stored progression snapshots (fallback baseline/current)
- daily nutrition adherence rows

Two different "adherence" numbers come out of here. ProgressionMetric.adherence_score
is sample_size over a 12-session ceiling; ProgressionAnalytics.adherence_avg is the
mean of the adherence rows. Consumers rely on both, so they stay separate.
"""
import math
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional


from backend.core.normalize import normalize_exercise_name, round_half_up
from backend.core.progression_compute import (
    WorkoutLogInput,
    coerce_rows,
    coerce_workout_logs,
    epley_e1rm,
    validated_sets,
)
from domain.models import (
    AdherenceRow,
    ProgressionAnalytics,
    ProgressionMetric,
    ProgressionTrendPoint,
    SnapshotRow,
    VolumeLandmark,
)

ADHERENCE_SESSION_CEILING = 12
VOLUME_LANDMARK_THRESHOLD = 0.08


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# =============================================================================
# Trend points
# =============================================================================


def build_trend_points(workouts: Iterable[WorkoutLogInput]) -> List[ProgressionTrendPoint]:
    """
    One trend point per (workout, exercise) with at least one valid set.

    e1rm is the mean Epley estimate over that workout's sets; volume is the
    workout's summed weight * reps for the exercise. Order follows the input.
    """
    points: List[ProgressionTrendPoint] = []

    for workout in coerce_workout_logs(workouts):
        for entry in workout.exercises:
            name = entry.display_name
            if not name:
                continue

            sets = validated_sets(entry)
            if not sets:
                continue

            e1rms = [epley_e1rm(s.weight_kg, s.reps) for s in sets]
            points.append(ProgressionTrendPoint(
                date=workout.date,
                exercise_name=name,
                e1rm=round_half_up(sum(e1rms) / len(e1rms), 2),
                volume=round_half_up(sum(s.volume for s in sets), 2),
            ))

    return points


def _group_points(points: List[ProgressionTrendPoint]) -> Dict[str, List[ProgressionTrendPoint]]:
    grouped: Dict[str, List[ProgressionTrendPoint]] = defaultdict(list)
    for point in points:
        grouped[normalize_exercise_name(point.exercise_name)].append(point)
    for group in grouped.values():
        group.sort(key=lambda p: p.date)
    return grouped


# =============================================================================
# Metrics
# =============================================================================


def volume_landmark(first_volume: float, last_volume: float) -> VolumeLandmark:
    """Classify volume change between two observations with an 8% dead band."""
    delta = (last_volume - first_volume) / first_volume if first_volume > 0 else 0.0
    if delta > VOLUME_LANDMARK_THRESHOLD:
        return "up"
    if delta < -VOLUME_LANDMARK_THRESHOLD:
        return "down"
    return "stable"


def _or_zero(value: Optional[float]) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return value


def build_metric(
    snapshot: SnapshotRow,
    points: List[ProgressionTrendPoint],
) -> ProgressionMetric:
    """
    Merge one stored snapshot with its date-sorted trend points.

    Trend points win when present; the stored row fills in otherwise.
    """
    stored_e1rm = _or_zero(snapshot.e1rm)
    stored_volume = _or_zero(snapshot.total_volume)

    baseline = points[0].e1rm if points else stored_e1rm
    current = points[-1].e1rm if points else stored_e1rm

    if baseline > 0:
        trend_pct = (current - baseline) / baseline * 100
    else:
        trend_pct = _or_zero(snapshot.trend_score) * 100

    first_volume = points[0].volume if points else stored_volume
    last_volume = points[-1].volume if points else stored_volume

    sample_size = _or_zero(snapshot.sample_size)

    return ProgressionMetric(
        exercise_name=snapshot.exercise_name,
        current_e1rm=round_half_up(current, 2),
        baseline_e1rm=round_half_up(baseline, 2),
        trend_pct=round_half_up(trend_pct, 2),
        volume_landmark=volume_landmark(first_volume, last_volume),
        adherence_score=round_half_up(_clamp(sample_size / ADHERENCE_SESSION_CEILING, 0, 1), 2),
    )


def average_adherence(rows: Optional[Iterable[Any]]) -> Optional[float]:
    """Mean of clamped adherence scores, or None when no row has a score."""
    scores = [
        _clamp(row.total_score, 0, 1)
        for row in coerce_rows(rows, AdherenceRow)
        if row.total_score is not None and math.isfinite(row.total_score)
    ]
    if not scores:
        return None
    return round_half_up(sum(scores) / len(scores), 2)


def build_progression_analytics(
    workouts: Iterable[WorkoutLogInput],
    snapshots: Iterable[Any],
    adherence_rows: Optional[Iterable[Any]] = None,
) -> ProgressionAnalytics:
    """
    Build dashboard analytics from logs, stored snapshots and adherence rows.

    Only stored snapshots produce metrics; exercises that appear in the logs
    but have no snapshot contribute trend points only.

    Args:
        workouts: Recent workout logs
        snapshots: Stored progression snapshot rows
        adherence_rows: Daily adherence rows with total_score in 0..1

    Returns:
        ProgressionAnalytics with metrics sorted by current_e1rm descending
        and trend points sorted by date ascending
    """
    trend_points = build_trend_points(workouts)
    grouped = _group_points(trend_points)

    metrics: List[ProgressionMetric] = []
    for snapshot in coerce_rows(snapshots, SnapshotRow):
        if not snapshot.exercise_name.strip():
            continue
        points = grouped.get(normalize_exercise_name(snapshot.exercise_name), [])
        metrics.append(build_metric(snapshot, points))

    metrics.sort(key=lambda m: m.current_e1rm, reverse=True)
    trend_points.sort(key=lambda p: p.date)

    return ProgressionAnalytics(
        metrics=metrics,
        trend_points=trend_points,
        adherence_avg=average_adherence(adherence_rows),
    )
