"""
Next-session targets derived from progression snapshots.

A target starts at 72% of the snapshot e1rm and is nudged by the trend:
progressing lifts get +3% and a harder RIR, regressing lifts get -4% and an
easier RIR. Loads are rounded to the nearest 2.5 kg plate increment.
"""
import math
from typing import Union

from domain.models import ProgressionSnapshot, ProgressionTarget, SnapshotRow

WORKING_LOAD_FRACTION = 0.72
TREND_THRESHOLD = 0.03
PLATE_INCREMENT_KG = 2.5

NOTE_PROGRESSING = "Progressing well. Add a small load increase."
NOTE_REGRESSING = "Recent regression detected. Reduce load slightly and own technique."
NOTE_MAINTAIN = "Maintain load and focus on clean reps."


def round_to_increment(value: float, increment: float = PLATE_INCREMENT_KG) -> float:
    """Round to the nearest increment (halves up). 0 for unusable values."""
    if not math.isfinite(value) or value <= 0:
        return 0.0
    return math.floor(value / increment + 0.5) * increment


def pick_target(snapshot: Union[ProgressionSnapshot, SnapshotRow]) -> ProgressionTarget:
    """
    Suggest load and RIR for the next session of one exercise.

    Args:
        snapshot: A computed snapshot or a stored snapshot row

    Returns:
        ProgressionTarget; target_load_kg is None when the snapshot has no e1rm
    """
    e1rm = snapshot.e1rm if snapshot.e1rm is not None and math.isfinite(snapshot.e1rm) else 0.0
    trend = snapshot.trend_score if snapshot.trend_score is not None and math.isfinite(snapshot.trend_score) else 0.0
    base_load = e1rm * WORKING_LOAD_FRACTION if e1rm > 0 else 0.0

    if trend >= TREND_THRESHOLD:
        multiplier, target_rir, note = 1.03, 1, NOTE_PROGRESSING
    elif trend <= -TREND_THRESHOLD:
        multiplier, target_rir, note = 0.96, 3, NOTE_REGRESSING
    else:
        multiplier, target_rir, note = 1.0, 2, NOTE_MAINTAIN

    target_load = round_to_increment(base_load * multiplier) if base_load > 0 else None

    return ProgressionTarget(
        exercise_name=snapshot.exercise_name,
        target_load_kg=target_load,
        target_rir=target_rir,
        progression_note=note,
        e1rm=snapshot.e1rm,
        trend_score=trend,
        sample_size=int(snapshot.sample_size or 0),
    )
