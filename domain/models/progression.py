"""
Progression domain models.

Input models (WorkoutLog, ExerciseLogEntry, PerformedSet, SnapshotRow,
AdherenceRow) mirror rows read from storage. They are deliberately lenient:
values that cannot be used are coerced to None or dropped instead of raising,
so a single malformed JSONB row never breaks an analytics request.

Output models (ProgressionSnapshot, ProgressionTrendPoint, ProgressionMetric,
ProgressionAnalytics, ProgressionTarget) are what the pipeline returns.

Examples:
    >>> log = WorkoutLog.model_validate({
    ...     "date": "2026-02-20",
    ...     "exercises": [
    ...         {"name": "Back Squat", "performed_sets": [{"reps": 5, "weight_kg": 100}]},
    ...     ],
    ... })
    >>> log.exercises[0].shape
    'performed_sets'
"""

import math
from datetime import date, datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_number(value: Any) -> Optional[float]:
    """Coerce a stored numeric value to a finite float, or None if unusable."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _as_list(value: Any) -> List[Any]:
    """Keep only mapping items of a list; anything else becomes an empty list."""
    if not isinstance(value, (list, tuple)):
        return []
    return [
        item.model_dump() if isinstance(item, BaseModel) else item
        for item in value
        if isinstance(item, (dict, BaseModel))
    ]


def _as_date_string(value: Any) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        return value.strip()
    return ""


# =============================================================================
# Input models
# =============================================================================


class PerformedSet(BaseModel):
    """One completed set as logged by the user."""

    model_config = ConfigDict(extra="ignore")

    reps: Any = Field(default=None, description="Int, float or free text like '8-12'")
    weight_kg: Any = Field(default=None, description="Load in kilograms")
    rir: Optional[float] = Field(default=None, description="Reps in reserve")

    @field_validator("rir", mode="before")
    @classmethod
    def coerce_rir(cls, v: Any) -> Optional[float]:
        return _as_number(v)


class ExerciseLogEntry(BaseModel):
    """
    One exercise within a workout log.

    Two shapes exist in stored data:
    - "performed_sets": a non-empty list of PerformedSet (preferred)
    - "legacy": flat sets/reps/weight fields on the entry itself
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    sets: Any = None
    reps: Any = None
    weight: Any = None
    performed_sets: List[PerformedSet] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @field_validator("performed_sets", mode="before")
    @classmethod
    def coerce_performed_sets(cls, v: Any) -> List[Any]:
        return _as_list(v)

    @property
    def shape(self) -> Literal["performed_sets", "legacy"]:
        return "performed_sets" if self.performed_sets else "legacy"

    @property
    def display_name(self) -> str:
        return self.name.strip() if self.name else ""


class WorkoutLog(BaseModel):
    """One logged training session."""

    model_config = ConfigDict(extra="ignore")

    date: str = ""
    exercises: List[ExerciseLogEntry] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> str:
        return _as_date_string(v)

    @field_validator("exercises", mode="before")
    @classmethod
    def coerce_exercises(cls, v: Any) -> List[Any]:
        return _as_list(v)


class SnapshotRow(BaseModel):
    """A progression snapshot as stored in progression_snapshots."""

    model_config = ConfigDict(extra="ignore")

    exercise_name: str = ""
    e1rm: Optional[float] = None
    total_volume: Optional[float] = None
    trend_score: Optional[float] = None
    sample_size: Optional[float] = None
    last_performed_date: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("exercise_name", mode="before")
    @classmethod
    def coerce_exercise_name(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("e1rm", "total_volume", "trend_score", "sample_size", mode="before")
    @classmethod
    def coerce_numbers(cls, v: Any) -> Optional[float]:
        return _as_number(v)

    @field_validator("last_performed_date", "updated_at", mode="before")
    @classmethod
    def coerce_dates(cls, v: Any) -> Optional[str]:
        return _as_date_string(v) or None


class AdherenceRow(BaseModel):
    """One day of nutrition adherence (score in 0..1)."""

    model_config = ConfigDict(extra="ignore")

    date_local: str = ""
    total_score: Optional[float] = None

    @field_validator("date_local", mode="before")
    @classmethod
    def coerce_date_local(cls, v: Any) -> str:
        return _as_date_string(v)

    @field_validator("total_score", mode="before")
    @classmethod
    def coerce_total_score(cls, v: Any) -> Optional[float]:
        return _as_number(v)


# =============================================================================
# Internal representation
# =============================================================================


class ValidatedSet(BaseModel):
    """A set that passed rep/load validation. The only input aggregation sees."""

    model_config = ConfigDict(frozen=True)

    reps: int = Field(..., gt=0)
    weight_kg: float = Field(..., gt=0)

    @property
    def volume(self) -> float:
        return self.weight_kg * self.reps


# =============================================================================
# Output models
# =============================================================================


class ProgressionSnapshot(BaseModel):
    """Per-exercise aggregate over a user's history. Never has sample_size 0."""

    exercise_name: str
    e1rm: Optional[float] = None
    # Average per-set volume, not a sum. Name kept for stored-row compatibility.
    total_volume: float = 0.0
    trend_score: float = 0.0
    last_performed_date: Optional[str] = None
    sample_size: int = 0


class ProgressionTrendPoint(BaseModel):
    """One (workout, exercise) observation used for charting."""

    date: str
    exercise_name: str
    e1rm: float
    volume: float


VolumeLandmark = Literal["up", "stable", "down"]


class ProgressionMetric(BaseModel):
    """Stored snapshot merged with fresh trend points."""

    exercise_name: str
    current_e1rm: float
    baseline_e1rm: float
    trend_pct: float
    volume_landmark: VolumeLandmark
    # Derived from sample_size, unrelated to ProgressionAnalytics.adherence_avg.
    adherence_score: float


class ProgressionAnalytics(BaseModel):
    """Result of merging trend points, snapshots and adherence rows."""

    metrics: List[ProgressionMetric] = Field(default_factory=list)
    trend_points: List[ProgressionTrendPoint] = Field(default_factory=list)
    adherence_avg: Optional[float] = None


class ProgressionTarget(BaseModel):
    """Suggested load and effort for the next session of an exercise."""

    exercise_name: str
    target_load_kg: Optional[float] = None
    target_rir: Optional[int] = None
    progression_note: str
    e1rm: Optional[float] = None
    trend_score: float = 0.0
    sample_size: int = 0
