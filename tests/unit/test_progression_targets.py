"""
Unit tests for backend/core/progression_targets.py
"""
import math

import pytest

from backend.core.progression_targets import (
    NOTE_MAINTAIN,
    NOTE_PROGRESSING,
    NOTE_REGRESSING,
    pick_target,
    round_to_increment,
)
from domain.models import ProgressionSnapshot, SnapshotRow


@pytest.mark.unit
class TestRoundToIncrement:
    """Tests for round_to_increment."""

    def test_rounds_to_nearest_plate(self):
        assert round_to_increment(74.16) == 75.0
        assert round_to_increment(69.12) == 70.0
        assert round_to_increment(72) == 72.5

    def test_half_goes_up(self):
        assert round_to_increment(3.75) == 5.0
        assert round_to_increment(1.25) == 2.5

    def test_custom_increment(self):
        assert round_to_increment(71, increment=5) == 70

    def test_unusable_values_are_zero(self):
        assert round_to_increment(0) == 0
        assert round_to_increment(-10) == 0
        assert round_to_increment(math.nan) == 0


@pytest.mark.unit
class TestPickTarget:
    """Tests for pick_target."""

    def test_progressing(self):
        target = pick_target(SnapshotRow(exercise_name="Bench", e1rm=100, trend_score=0.05, sample_size=8))
        assert target.target_load_kg == 75.0
        assert target.target_rir == 1
        assert target.progression_note == NOTE_PROGRESSING
        assert target.sample_size == 8

    def test_regressing(self):
        target = pick_target(SnapshotRow(exercise_name="Bench", e1rm=100, trend_score=-0.05))
        assert target.target_load_kg == 70.0
        assert target.target_rir == 3
        assert target.progression_note == NOTE_REGRESSING

    def test_flat(self):
        target = pick_target(SnapshotRow(exercise_name="Bench", e1rm=100, trend_score=0.01))
        assert target.target_load_kg == 72.5
        assert target.target_rir == 2
        assert target.progression_note == NOTE_MAINTAIN

    def test_thresholds_are_inclusive(self):
        assert pick_target(SnapshotRow(exercise_name="A", e1rm=100, trend_score=0.03)).target_rir == 1
        assert pick_target(SnapshotRow(exercise_name="A", e1rm=100, trend_score=-0.03)).target_rir == 3

    def test_missing_e1rm_has_no_load(self):
        target = pick_target(SnapshotRow(exercise_name="Pull Up", trend_score=0.1))
        assert target.target_load_kg is None
        assert target.target_rir == 1
        assert target.e1rm is None

    def test_missing_trend_is_flat(self):
        target = pick_target(SnapshotRow(exercise_name="Bench", e1rm=100))
        assert target.trend_score == 0.0
        assert target.target_rir == 2

    def test_accepts_computed_snapshot(self):
        snapshot = ProgressionSnapshot(
            exercise_name="Back Squat", e1rm=121.04, total_volume=518.75,
            trend_score=0.0494, last_performed_date="2026-02-27", sample_size=4,
        )
        target = pick_target(snapshot)
        # 121.04 * 0.72 * 1.03 = 89.76
        assert target.target_load_kg == 90.0
        assert target.exercise_name == "Back Squat"
