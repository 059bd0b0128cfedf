"""
Normalization helpers shared by every progression code path.

Exercise names are free text, reps may be "8-12" or 8.0, and loads may be
missing. These helpers turn that into grouping keys and usable numbers.
Nothing here raises on bad input: an unusable value becomes None.
"""
import math
import re
from typing import Any, Optional

_WHITESPACE = re.compile(r"\s+")
_DIGITS = re.compile(r"\d+")


def normalize_exercise_name(name: str) -> str:
    """Grouping key for an exercise: lowercase, trimmed, single-spaced."""
    if not isinstance(name, str):
        return ""
    return _WHITESPACE.sub(" ", name.lower().strip())


def round_half_up(value: float, digits: int = 2) -> float:
    """
    Round to `digits` places with halves going up (0.125 -> 0.13, -0.125 -> -0.12).

    Values too large to scale (and inf/nan) come back unchanged.
    """
    base = 10 ** digits
    scaled = value * base
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / base


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _finite_float(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_reps(value: Any) -> Optional[int]:
    """
    Extract a positive integer rep count.

    Numbers are rounded; strings yield their first run of digits. Counts
    too large for a float are unusable.

        >>> parse_reps("8-12")
        8
        >>> parse_reps("rest") is None
        True
    """
    if _is_number(value):
        number = _finite_float(value)
    elif isinstance(value, str):
        match = _DIGITS.search(value)
        number = _finite_float(match.group(0)) if match else None
    else:
        return None

    if number is None or number <= 0:
        return None
    reps = int(round_half_up(number, 0))
    return reps if reps > 0 else None


def parse_weight_kg(value: Any, *, allow_strings: bool = True) -> Optional[float]:
    """
    Return a finite, positive load in kg, or None.

    Snapshot aggregation passes allow_strings=False: a load stored as text
    counts there only on the trend-point path.
    """
    if _is_number(value):
        weight = _finite_float(value)
    elif isinstance(value, str) and allow_strings:
        weight = _finite_float(value.strip())
    else:
        return None

    if weight is None or weight <= 0:
        return None
    return weight
