"""
Progression snapshot computation.

This module turns raw workout logs into per-exercise progression snapshots:
- E1RM estimation (linear Epley-style approximation)
- Input validation into ValidatedSet
- Snapshot aggregation (average e1rm, average volume, trend, last date)

Everything here is pure: the same input always yields the same output and
malformed input contributes nothing instead of raising.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from backend.core.normalize import (
    normalize_exercise_name,
    parse_reps,
    parse_weight_kg,
    round_half_up,
)
from domain.models import (
    ExerciseLogEntry,
    PerformedSet,
    ProgressionSnapshot,
    ValidatedSet,
    WorkoutLog,
)

WorkoutLogInput = Union[WorkoutLog, Dict[str, Any]]
RowModel = TypeVar("RowModel", bound=BaseModel)

MIN_E1RM_REPS = 1
MAX_E1RM_REPS = 20


# =============================================================================
# E1RM Formulas
# =============================================================================


def epley_e1rm(weight_kg: float, reps: float) -> float:
    """
    Unclamped, unrounded Epley estimate: weight * (1 + reps / 30).

    Returns 0 when either input is non-finite or not positive.
    """
    if not _finite_positive(weight_kg) or not _finite_positive(reps):
        return 0.0
    return weight_kg * (1.0 + reps / 30.0)


def estimate_e1rm(weight_kg: float, reps: float) -> float:
    """
    Estimate a one-rep max from a sub-maximal set.

    Formula: weight * (1 + clamp(round(reps), 1, 20) / 30), rounded to 2 places.

    Args:
        weight_kg: Load lifted in kilograms
        reps: Reps completed

    Returns:
        Estimated 1RM, or 0 if weight is missing/non-positive

    Examples:
        >>> estimate_e1rm(100, 5)
        116.67
        >>> estimate_e1rm(80, 8)
        101.33
    """
    if not _finite_positive(weight_kg):
        return 0.0
    if not _is_finite(reps):
        return 0.0
    clamped = max(MIN_E1RM_REPS, min(MAX_E1RM_REPS, round_half_up(reps, 0)))
    return round_half_up(weight_kg * (1.0 + clamped / 30.0), 2)


def _is_finite(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _finite_positive(value: Any) -> bool:
    return _is_finite(value) and value > 0


# =============================================================================
# Input validation
# =============================================================================


def coerce_rows(rows: Optional[Iterable[Any]], model: Type[RowModel]) -> List[RowModel]:
    """
    Validate raw rows into `model`, dropping rows that aren't mappings.

    Order is preserved. Other pydantic models are dumped and re-validated.
    """
    result: List[RowModel] = []
    for raw in rows or []:
        if isinstance(raw, model):
            result.append(raw)
            continue
        if isinstance(raw, BaseModel):
            raw = raw.model_dump()
        if not isinstance(raw, dict):
            continue
        try:
            result.append(model.model_validate(raw))
        except ValidationError:
            continue
    return result


def coerce_workout_logs(workouts: Optional[Iterable[Any]]) -> List[WorkoutLog]:
    """Convert raw rows into WorkoutLog models (see coerce_rows)."""
    return coerce_rows(workouts, WorkoutLog)


def _candidate_sets(entry: ExerciseLogEntry) -> List[PerformedSet]:
    if entry.shape == "performed_sets":
        return entry.performed_sets
    return [PerformedSet(reps=entry.reps, weight_kg=entry.weight)]


def validated_sets(
    entry: ExerciseLogEntry,
    *,
    allow_string_weight: bool = True,
) -> List[ValidatedSet]:
    """
    Usable sets of an exercise entry, regardless of how it was logged.

    Falls back to the legacy flat reps/weight fields when performed_sets
    is absent or empty. Sets without positive reps and load are dropped.
    Snapshot aggregation only counts numeric loads (allow_string_weight=False);
    trend points also accept numeric strings such as "80".
    """
    result: List[ValidatedSet] = []
    for candidate in _candidate_sets(entry):
        reps = parse_reps(candidate.reps)
        weight = parse_weight_kg(candidate.weight_kg, allow_strings=allow_string_weight)
        if reps is None or weight is None:
            continue
        result.append(ValidatedSet(reps=reps, weight_kg=weight))
    return result


# =============================================================================
# Snapshot aggregation
# =============================================================================


@dataclass
class _ExerciseBucket:
    exercise_name: str
    e1rms: List[float] = field(default_factory=list)
    volumes: List[float] = field(default_factory=list)
    dates: List[str] = field(default_factory=list)
    sample_size: int = 0


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


def _trend_score(e1rms: List[float]) -> float:
    midpoint = len(e1rms) // 2
    first_avg = _mean(e1rms[:max(1, midpoint)])
    second_avg = _mean(e1rms[midpoint:])
    if first_avg <= 0:
        return 0.0
    return round_half_up((second_avg - first_avg) / first_avg, 4)


def compute_progression_snapshots(
    workouts: Iterable[WorkoutLogInput],
) -> List[ProgressionSnapshot]:
    """
    Aggregate workout logs into one snapshot per exercise.

    Exercises are grouped by normalized name, so "Back Squat" and
    "back   squat" land in the same snapshot. The display name is the first
    spelling encountered.

    Per exercise:
        e1rm: mean of per-set e1rm
        total_volume: mean of per-set weight * reps
        trend_score: relative change between the first and second half of
            the per-set e1rm list, in accumulation order
        last_performed_date: latest ISO date that contributed a set
        sample_size: number of valid sets

    Args:
        workouts: Workout logs ordered by date ascending

    Returns:
        Snapshots sorted by display name. Exercises without a single valid
        set are absent.
    """
    buckets: Dict[str, _ExerciseBucket] = {}

    for workout in coerce_workout_logs(workouts):
        for entry in workout.exercises:
            name = entry.display_name
            if not name:
                continue

            key = normalize_exercise_name(name)
            bucket = buckets.setdefault(key, _ExerciseBucket(exercise_name=name))

            sets = validated_sets(entry, allow_string_weight=False)
            for performed in sets:
                bucket.sample_size += 1
                bucket.volumes.append(round_half_up(performed.volume, 2))
                bucket.e1rms.append(estimate_e1rm(performed.weight_kg, performed.reps))

            if sets and workout.date:
                bucket.dates.append(workout.date)

    snapshots: List[ProgressionSnapshot] = []
    for bucket in buckets.values():
        if bucket.sample_size == 0:
            continue

        snapshots.append(ProgressionSnapshot(
            exercise_name=bucket.exercise_name,
            e1rm=round_half_up(_mean(bucket.e1rms), 2),
            total_volume=round_half_up(_mean(bucket.volumes), 2),
            trend_score=_trend_score(bucket.e1rms),
            last_performed_date=max(bucket.dates) if bucket.dates else None,
            sample_size=bucket.sample_size,
        ))

    snapshots.sort(key=lambda s: (s.exercise_name.casefold(), s.exercise_name))
    return snapshots
