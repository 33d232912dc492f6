"""
Parser Models

Pydantic models for the structured workout log that the voice/text parser
outputs.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field, model_validator

KG_PER_LB = 2.20462


class WeightUnit(str, Enum):
    """Weight unit for a set"""
    POUNDS = "lbs"
    KILOGRAMS = "kg"


class ExerciseCategory(str, Enum):
    """How an exercise is tracked"""
    WEIGHTED = "weighted"      # Tracked by weight
    BODYWEIGHT = "bodyweight"  # Tracked by reps
    TIMED = "timed"            # Tracked by duration


class SetType(str, Enum):
    NORMAL = "normal"
    WARMUP = "warmup"
    DROP_SET = "drop_set"
    SUPERSET = "superset"
    REST_PAUSE = "rest_pause"
    AMRAP = "amrap"
    TO_FAILURE = "to_failure"
    CLUSTER = "cluster"


class GripType(str, Enum):
    WIDE = "wide"
    NARROW = "narrow"
    UNDERHAND = "underhand"
    OVERHAND = "overhand"
    NEUTRAL = "neutral"
    MIXED = "mixed"
    REVERSE = "reverse"


class StanceType(str, Enum):
    WIDE = "wide"
    NARROW = "narrow"
    SUMO = "sumo"
    STAGGERED = "staggered"
    SINGLE_LEG = "single_leg"


class Equipment(str, Enum):
    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    CABLE = "cable"
    MACHINE = "machine"
    KETTLEBELL = "kettlebell"
    BODYWEIGHT = "bodyweight"
    BAND = "band"
    SMITH_MACHINE = "smith_machine"
    TRAP_BAR = "trap_bar"
    EZ_BAR = "ez_bar"
    OTHER = "other"


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    CORE = "core"
    FULL_BODY = "full_body"


class MatchConfidence(str, Enum):
    """Confidence of an exercise name lookup"""
    EXACT = "exact"                # Alias table hit or already canonical
    FUZZY = "fuzzy"                # Close match by edit distance
    UNRECOGNIZED = "unrecognized"  # No acceptable match


class ParsedSet(BaseModel):
    """A single performed set (e.g. 10 reps at 135 lbs)"""
    set_number: int = Field(default=1, ge=1)
    reps: int = Field(default=1, ge=0)
    weight: float = Field(default=0.0, ge=0)
    unit: WeightUnit = WeightUnit.POUNDS
    duration_seconds: Optional[int] = Field(default=None, ge=0, description="Only meaningful for timed exercises")
    set_type: SetType = SetType.NORMAL

    # Intensity & execution
    rpe: Optional[int] = Field(default=None, ge=1, le=10)
    rir: Optional[int] = Field(default=None, ge=0, le=10)
    rest_seconds: Optional[int] = Field(default=None, ge=0)
    tempo: Optional[str] = None  # e.g., "3-1-2"
    grip: Optional[GripType] = None
    stance: Optional[StanceType] = None

    @computed_field
    @property
    def volume(self) -> float:
        return self.weight * self.reps

    @property
    def weight_in_pounds(self) -> float:
        if self.unit == WeightUnit.KILOGRAMS:
            return self.weight * KG_PER_LB
        return self.weight

    @property
    def weight_in_kilograms(self) -> float:
        if self.unit == WeightUnit.POUNDS:
            return self.weight / KG_PER_LB
        return self.weight


class ParsedExercise(BaseModel):
    """One exercise within a logged session"""
    name: str = Field(..., description="Canonical exercise name")
    category: Optional[ExerciseCategory] = Field(
        default=None,
        description="Inferred from the sets when not supplied",
    )
    equipment: Equipment = Equipment.OTHER
    primary_muscles: List[MuscleGroup] = Field(default_factory=list)
    notes: str = ""
    sets: List[ParsedSet] = Field(default_factory=list)

    @model_validator(mode="after")
    def _infer_category(self) -> "ParsedExercise":
        if self.category is None:
            self.category = infer_category(self.sets)
        return self

    @property
    def is_bodyweight(self) -> bool:
        return self.category == ExerciseCategory.BODYWEIGHT

    @property
    def is_timed(self) -> bool:
        return self.category == ExerciseCategory.TIMED

    @property
    def total_volume(self) -> float:
        return sum(s.volume for s in self.sets)

    @property
    def total_reps(self) -> int:
        return sum(s.reps for s in self.sets)

    @property
    def max_weight(self) -> float:
        return max((s.weight for s in self.sets), default=0.0)

    def renumber_sets(self) -> None:
        """Number sets 1..N in their current order."""
        for index, parsed_set in enumerate(self.sets, start=1):
            parsed_set.set_number = index


class NormalizationResult(BaseModel):
    """Result of resolving a free-form exercise name"""
    canonical_name: Optional[str] = None
    confidence: MatchConfidence
    suggestions: List[str] = Field(default_factory=list, max_length=3)
    original_input: str

    @property
    def is_recognized(self) -> bool:
        return self.confidence != MatchConfidence.UNRECOGNIZED


def infer_category(sets: List[ParsedSet]) -> ExerciseCategory:
    """Guess the category of an exercise from what its sets carry.

    Any set with a positive duration makes it timed; otherwise an average
    weight below 1 makes it bodyweight.
    """
    if any(s.duration_seconds for s in sets):
        return ExerciseCategory.TIMED
    avg_weight = sum(s.weight for s in sets) / len(sets) if sets else 0.0
    if avg_weight < 1:
        return ExerciseCategory.BODYWEIGHT
    return ExerciseCategory.WEIGHTED
