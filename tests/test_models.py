"""Tests for the parsed workout models."""
import pytest
from pydantic import ValidationError

from workout_log_parser.models import (
    ExerciseCategory,
    MatchConfidence,
    NormalizationResult,
    ParsedExercise,
    ParsedSet,
    WeightUnit,
    infer_category,
)


class TestParsedSet:
    """Test cases for ParsedSet."""

    def test_defaults(self):
        """Test a bare set is one rep of nothing."""
        s = ParsedSet()
        assert s.set_number == 1
        assert s.reps == 1
        assert s.weight == 0.0
        assert s.unit == WeightUnit.POUNDS
        assert s.duration_seconds is None

    def test_volume(self):
        """Test volume is weight times reps."""
        assert ParsedSet(reps=10, weight=135).volume == 1350

    def test_volume_serialized(self):
        """Test volume appears in the dumped model."""
        assert ParsedSet(reps=5, weight=100).model_dump()["volume"] == 500

    def test_unit_conversion(self):
        """Test pounds/kilograms conversion helpers."""
        kg = ParsedSet(weight=100, unit=WeightUnit.KILOGRAMS)
        assert kg.weight_in_kilograms == 100
        assert kg.weight_in_pounds == pytest.approx(220.462)

        lbs = ParsedSet(weight=220.462)
        assert lbs.weight_in_pounds == 220.462
        assert lbs.weight_in_kilograms == pytest.approx(100)

    def test_rejects_negative_weight(self):
        """Test negative weights are invalid."""
        with pytest.raises(ValidationError):
            ParsedSet(weight=-5)

    def test_rejects_out_of_range_rpe(self):
        """Test RPE is bounded to 1-10."""
        with pytest.raises(ValidationError):
            ParsedSet(rpe=11)


class TestInferCategory:
    """Test cases for infer_category()."""

    def test_timed(self):
        """Test any duration makes the exercise timed."""
        assert infer_category([ParsedSet(reps=0, duration_seconds=60)]) == ExerciseCategory.TIMED

    def test_bodyweight(self):
        """Test zero weight makes the exercise bodyweight."""
        assert infer_category([ParsedSet(reps=8)]) == ExerciseCategory.BODYWEIGHT

    def test_weighted(self):
        """Test loaded sets make the exercise weighted."""
        assert infer_category([ParsedSet(reps=5, weight=225)]) == ExerciseCategory.WEIGHTED

    def test_no_sets(self):
        """Test an empty set list reads as bodyweight."""
        assert infer_category([]) == ExerciseCategory.BODYWEIGHT


class TestParsedExercise:
    """Test cases for ParsedExercise."""

    def test_category_inferred(self):
        """Test category is filled in when missing."""
        exercise = ParsedExercise(name="Bench Press", sets=[ParsedSet(reps=10, weight=135)])
        assert exercise.category == ExerciseCategory.WEIGHTED

    def test_explicit_category_kept(self):
        """Test a supplied category is not overwritten."""
        exercise = ParsedExercise(
            name="Plank",
            category=ExerciseCategory.TIMED,
            sets=[ParsedSet(reps=0)],
        )
        assert exercise.is_timed
        assert not exercise.is_bodyweight

    def test_aggregates(self):
        """Test total volume, reps and max weight."""
        exercise = ParsedExercise(
            name="Squats",
            sets=[ParsedSet(reps=5, weight=225), ParsedSet(reps=3, weight=245)],
        )
        assert exercise.total_reps == 8
        assert exercise.total_volume == 5 * 225 + 3 * 245
        assert exercise.max_weight == 245

    def test_renumber_sets(self):
        """Test sets are renumbered 1..N in order."""
        exercise = ParsedExercise(
            name="Rows",
            sets=[ParsedSet(set_number=3), ParsedSet(set_number=1), ParsedSet(set_number=7)],
        )
        exercise.renumber_sets()
        assert [s.set_number for s in exercise.sets] == [1, 2, 3]


class TestNormalizationResult:
    """Test cases for NormalizationResult."""

    @pytest.mark.parametrize("confidence,recognized", [
        (MatchConfidence.EXACT, True),
        (MatchConfidence.FUZZY, True),
        (MatchConfidence.UNRECOGNIZED, False),
    ])
    def test_is_recognized(self, confidence, recognized):
        result = NormalizationResult(confidence=confidence, original_input="x")
        assert result.is_recognized is recognized

    def test_suggestions_capped(self):
        """Test more than three suggestions is rejected."""
        with pytest.raises(ValidationError):
            NormalizationResult(
                confidence=MatchConfidence.UNRECOGNIZED,
                original_input="x",
                suggestions=["a", "b", "c", "d"],
            )
