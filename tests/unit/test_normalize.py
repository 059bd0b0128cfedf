"""
Unit tests for backend/core/normalize.py

Tests cover:
- Exercise name grouping keys
- Half-up rounding
- Rep and load parsing
"""
import math

import pytest

from backend.core.normalize import (
    normalize_exercise_name,
    parse_reps,
    parse_weight_kg,
    round_half_up,
)


@pytest.mark.unit
class TestNormalizeExerciseName:
    """Tests for normalize_exercise_name."""

    def test_lowercases_and_trims(self):
        assert normalize_exercise_name("  Back Squat ") == "back squat"

    def test_collapses_inner_whitespace(self):
        assert normalize_exercise_name("back   squat") == "back squat"
        assert normalize_exercise_name("Back\tSquat\n") == "back squat"

    def test_same_key_for_spelling_variants(self):
        assert normalize_exercise_name("Back Squat") == normalize_exercise_name("back   squat")

    def test_non_string_is_empty(self):
        assert normalize_exercise_name(None) == ""
        assert normalize_exercise_name(42) == ""


@pytest.mark.unit
class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_two_places(self):
        assert round_half_up(116.6666, 2) == 116.67

    def test_half_goes_up(self):
        assert round_half_up(2.5, 0) == 3
        assert round_half_up(0.125, 2) == 0.13

    def test_negative_half_goes_toward_positive(self):
        assert round_half_up(-2.5, 0) == -2

    def test_four_places(self):
        assert round_half_up(0.051234, 4) == 0.0512

    def test_too_large_to_scale_is_returned_unchanged(self):
        assert round_half_up(1e307, 2) == 1e307
        assert round_half_up(1.7e308, 0) == 1.7e308

    def test_non_finite_is_returned_unchanged(self):
        assert round_half_up(math.inf, 2) == math.inf
        assert math.isnan(round_half_up(math.nan, 2))


@pytest.mark.unit
class TestParseReps:
    """Tests for parse_reps."""

    def test_range_string_takes_first_number(self):
        assert parse_reps("8-12") == 8

    def test_plain_int(self):
        assert parse_reps(5) == 5

    def test_float_rounds_half_up(self):
        assert parse_reps(7.5) == 8
        assert parse_reps(7.4) == 7

    def test_zero_is_none(self):
        assert parse_reps(0) is None

    def test_negative_is_none(self):
        assert parse_reps(-3) is None

    def test_small_float_rounding_to_zero_is_none(self):
        assert parse_reps(0.2) is None

    def test_text_without_digits_is_none(self):
        assert parse_reps("rest") is None

    def test_string_zero_is_none(self):
        assert parse_reps("0") is None

    def test_non_finite_is_none(self):
        assert parse_reps(math.nan) is None
        assert parse_reps(math.inf) is None

    def test_bool_and_none_are_none(self):
        assert parse_reps(True) is None
        assert parse_reps(None) is None

    def test_digit_string_beyond_float_range_is_none(self):
        assert parse_reps("1" + "0" * 400) is None
        assert parse_reps("x" + "9" * 5000 + " reps") is None

    def test_int_beyond_float_range_is_none(self):
        assert parse_reps(10 ** 400) is None

    def test_largest_finite_float_still_parses(self):
        assert parse_reps(1e308) == int(1e308)


@pytest.mark.unit
class TestParseWeightKg:
    """Tests for parse_weight_kg."""

    def test_number(self):
        assert parse_weight_kg(100) == 100.0
        assert parse_weight_kg(102.5) == 102.5

    def test_numeric_string(self):
        assert parse_weight_kg(" 60.5 ") == 60.5

    def test_non_positive_is_none(self):
        assert parse_weight_kg(0) is None
        assert parse_weight_kg(-20) is None

    def test_unusable_is_none(self):
        assert parse_weight_kg("heavy") is None
        assert parse_weight_kg(None) is None
        assert parse_weight_kg(False) is None
        assert parse_weight_kg(math.inf) is None
        assert parse_weight_kg("nan") is None

    def test_int_beyond_float_range_is_none(self):
        assert parse_weight_kg(10 ** 400) is None
        assert parse_weight_kg("1" + "0" * 400) is None

    def test_strings_can_be_refused(self):
        assert parse_weight_kg("80", allow_strings=False) is None
        assert parse_weight_kg(80, allow_strings=False) == 80.0
