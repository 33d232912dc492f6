"""
Tests for the deterministic workout log parser.

Covers segmenting, exercise recognition, merging and the per-exercise
defaults (base weight, bodyweight, timed holds).
"""
import pytest

from workout_log_parser.models import (
    Equipment,
    ExerciseCategory,
    SetType,
    WeightUnit,
)
from workout_log_parser.parsers.voice_log_parser import parse, parse_segment, resolve_unit


class TestParseSession:
    """A whole session parsed end to end."""

    def test_exercises_in_order(self, sample_session_log):
        exercises = parse(sample_session_log)
        assert [e.name for e in exercises] == ["Bench Press", "Squats", "Pull Ups", "Plank"]

    def test_bench(self, sample_session_log):
        bench = parse(sample_session_log)[0]
        assert len(bench.sets) == 3
        assert all(s.reps == 10 and s.weight == 135 for s in bench.sets)
        assert bench.category == ExerciseCategory.WEIGHTED
        assert bench.equipment == Equipment.BARBELL

    def test_plate_math_squats(self, sample_session_log):
        squats = parse(sample_session_log)[1]
        assert [(s.reps, s.weight) for s in squats.sets] == [(5, 225.0)]

    def test_bodyweight_pull_ups(self, sample_session_log):
        pull_ups = parse(sample_session_log)[2]
        assert pull_ups.category == ExerciseCategory.BODYWEIGHT
        assert [(s.reps, s.weight) for s in pull_ups.sets] == [(8, 0.0)]

    def test_timed_plank(self, sample_session_log):
        plank = parse(sample_session_log)[3]
        assert plank.category == ExerciseCategory.TIMED
        assert plank.sets[0].duration_seconds == 60
        assert plank.sets[0].reps == 0
        assert plank.sets[0].weight == 0


class TestParse:
    """Test cases for parse()."""

    def test_repeated_exercise_merged(self):
        """Test a second mention appends sets and renumbers them."""
        exercises = parse("3x10 bench press. then bench press 5 reps at 225")
        assert len(exercises) == 1
        sets = exercises[0].sets
        assert [s.set_number for s in sets] == [1, 2, 3, 4]
        assert [(s.reps, s.weight) for s in sets] == [
            (10, 45.0), (10, 45.0), (10, 45.0), (5, 225.0),
        ]

    def test_merge_keeps_first_mention_order(self):
        exercises = parse("squats 5x5 at 225 then bench 3x8 at 185 then squats 1x3 at 245")
        assert [e.name for e in exercises] == ["Squats", "Bench Press"]
        assert len(exercises[0].sets) == 6
        assert exercises[0].sets[-1].weight == 245

    def test_plate_math(self):
        exercise = parse("I did 2 plates and a 25 for 5 reps on squats")[0]
        assert exercise.name == "Squats"
        assert [(s.reps, s.weight, s.unit) for s in exercise.sets] == [
            (5, 275.0, WeightUnit.POUNDS),
        ]

    def test_single_rep(self):
        exercise = parse("deadlift a single rep at 405")[0]
        assert exercise.name == "Deadlift"
        assert [(s.reps, s.weight) for s in exercise.sets] == [(1, 405.0)]

    def test_single_rep_with_for(self):
        exercise = parse("deadlift for a single rep at 405")[0]
        assert [(s.reps, s.weight) for s in exercise.sets] == [(1, 405.0)]

    def test_per_set_with_exercise_named_last(self):
        """Test a spoken breakdown that names the lift at the end."""
        exercise = parse(
            "first set was 100 pounds for 4 reps the second set was 120 pounds for 5 reps bench press"
        )[0]
        assert exercise.name == "Bench Press"
        assert [(s.reps, s.weight) for s in exercise.sets] == [(4, 100.0), (5, 120.0)]

    @pytest.mark.parametrize("text,expected", [
        ("squats 5 times", 5),
        ("i did bench press twice", 2),
    ])
    def test_trailing_times_counts_sets(self, text, expected):
        """Test 'N times' repeats the set rather than counting reps."""
        sets = parse(text)[0].sets
        assert len(sets) == expected
        assert all(s.reps == 1 and s.weight == 45.0 for s in sets)

    def test_weight_by_reps(self):
        """Test '315 x 3' is one set of 3 at 315, not 315 sets."""
        sets = parse("bench press 315 x 3")[0].sets
        assert [(s.reps, s.weight) for s in sets] == [(3, 315.0)]

    def test_merge_reinfers_category(self):
        """Test weighted sets merged into an unloaded first mention make it weighted."""
        exercise = parse("chest press 3x10. then chest press 3x10 at 100")[0]
        assert len(exercise.sets) == 6
        assert exercise.category == ExerciseCategory.WEIGHTED

    def test_per_set_breakdown(self):
        exercise = parse("bench first set 135 for 8, second set 155 for 6, third set 175 for 4")[0]
        assert [(s.set_number, s.reps, s.weight) for s in exercise.sets] == [
            (1, 8, 135.0), (2, 6, 155.0), (3, 4, 175.0),
        ]

    def test_stated_kilograms(self):
        sets = parse("squats 100 kg for 5")[0].sets
        assert (sets[0].reps, sets[0].weight, sets[0].unit) == (5, 100.0, WeightUnit.KILOGRAMS)

    def test_default_unit_kilograms(self):
        """Test an unstated unit follows the caller's preference."""
        sets = parse("bench press 3x5 at 100", default_unit="kg")[0].sets
        assert all(s.unit == WeightUnit.KILOGRAMS and s.weight == 100 for s in sets)

    def test_base_weight_in_kilograms(self):
        sets = parse("bench press 3x5", default_unit=WeightUnit.KILOGRAMS)[0].sets
        assert all(s.weight == 20.4 for s in sets)

    def test_ez_bar_base_weight(self):
        exercise = parse("ez bar curls 3x12")[0]
        assert exercise.equipment == Equipment.EZ_BAR
        assert all(s.weight == 25.0 for s in exercise.sets)

    def test_rest_is_not_duration(self):
        """Test rest periods do not turn a lift into a timed exercise."""
        exercise = parse("bench 3x8 at 185 rest 90 seconds")[0]
        assert exercise.category == ExerciseCategory.WEIGHTED
        assert all(s.duration_seconds is None for s in exercise.sets)
        assert all(s.rest_seconds == 90 for s in exercise.sets)

    def test_timed_minutes(self):
        plank = parse("plank for 2 minutes")[0]
        assert plank.sets[0].duration_seconds == 120

    def test_set_type(self):
        exercise = parse("warm up squats 10 reps at 135")[0]
        assert exercise.sets[0].set_type == SetType.WARMUP

    @pytest.mark.parametrize("text", [
        "went for a walk and stretched",
        "had a great day at the office",
        "",
        "   ",
    ])
    def test_no_exercise_no_output(self, text):
        """Test text without a known exercise yields nothing."""
        assert parse(text) == []

    def test_set_numbers_contiguous(self, sample_session_log):
        for exercise in parse(sample_session_log):
            assert [s.set_number for s in exercise.sets] == list(range(1, len(exercise.sets) + 1))


class TestParseSegment:
    """Test cases for parse_segment()."""

    def test_unknown_segment(self):
        assert parse_segment("went for a walk") is None

    def test_known_segment(self):
        exercise = parse_segment("pull ups 3x10")
        assert exercise.name == "Pull Ups"
        assert len(exercise.sets) == 3
        assert all(s.weight == 0 for s in exercise.sets)


class TestResolveUnit:
    """Test cases for resolve_unit()."""

    @pytest.mark.parametrize("value,expected", [
        (WeightUnit.KILOGRAMS, WeightUnit.KILOGRAMS),
        ("kg", WeightUnit.KILOGRAMS),
        ("KG", WeightUnit.KILOGRAMS),
        ("lbs", WeightUnit.POUNDS),
    ])
    def test_explicit(self, value, expected):
        assert resolve_unit(value) == expected

    def test_configured_default(self, monkeypatch):
        """Test None falls back to the configured unit."""
        from workout_log_parser.config import settings

        monkeypatch.setattr(settings, "DEFAULT_WEIGHT_UNIT", "kg")
        assert resolve_unit(None) == WeightUnit.KILOGRAMS
