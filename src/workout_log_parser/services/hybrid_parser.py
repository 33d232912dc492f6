"""Hybrid parser: alternate (language-model) output with deterministic fallback.

The alternate producer is injected so this module never talks to a network
service itself. Its output is used only when it is confident and non-empty;
otherwise, or when it fails, the rule-based parser runs instead.
"""
import logging
from typing import Callable, List, Optional, Union

from pydantic import BaseModel, Field

from workout_log_parser.config import settings
from workout_log_parser.models import (
    ExerciseCategory,
    ParsedExercise,
    ParsedSet,
    WeightUnit,
)
from workout_log_parser.parsers.voice_log_parser import parse, resolve_unit
from workout_log_parser.services.normalization_service import normalize

logger = logging.getLogger(__name__)


class AlternateExercise(BaseModel):
    """One exercise as reported by the alternate parser."""
    name: str
    sets: int = Field(default=1, ge=1)
    reps: int = Field(default=1, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = None  # "lbs" or "kg"
    is_bodyweight: bool = False


class AlternateParseResult(BaseModel):
    """Alternate parser output with its self-reported confidence (0.0 - 1.0)."""
    exercises: List[AlternateExercise] = Field(default_factory=list)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


AlternateProducer = Callable[[str], Optional[AlternateParseResult]]


def convert_alternate_output(
    result: AlternateParseResult,
    default_unit: WeightUnit = WeightUnit.POUNDS,
) -> List[ParsedExercise]:
    """Turn alternate parser output into ParsedExercise objects."""
    exercises: List[ParsedExercise] = []
    for item in result.exercises:
        if item.unit:
            unit = WeightUnit.KILOGRAMS if item.unit.lower() == "kg" else WeightUnit.POUNDS
        else:
            unit = default_unit
        weight = 0.0 if item.is_bodyweight else (item.weight or 0.0)

        # Prefer the catalog spelling when the name is recognized
        name = normalize(item.name).canonical_name or item.name.strip()

        sets = [
            ParsedSet(set_number=number, reps=item.reps, weight=weight, unit=unit)
            for number in range(1, item.sets + 1)
        ]
        exercises.append(
            ParsedExercise(
                name=name,
                category=ExerciseCategory.BODYWEIGHT if item.is_bodyweight else ExerciseCategory.WEIGHTED,
                sets=sets,
            )
        )
    return exercises


class HybridParser:
    """Try the alternate producer first, fall back to the rule-based parser."""

    def __init__(
        self,
        producer: Optional[AlternateProducer] = None,
        min_confidence: Optional[float] = None,
    ):
        self.producer = producer
        self.min_confidence = (
            min_confidence if min_confidence is not None else settings.LLM_MIN_CONFIDENCE
        )

    def accepts(self, result: Optional[AlternateParseResult]) -> bool:
        return (
            result is not None
            and result.confidence >= self.min_confidence
            and len(result.exercises) > 0
        )

    def parse(
        self,
        text: str,
        default_unit: Union[WeightUnit, str, None] = None,
    ) -> List[ParsedExercise]:
        unit = resolve_unit(default_unit)

        if self.producer is not None and text and text.strip():
            try:
                result = self.producer(text)
            except Exception as e:
                logger.warning(f"Alternate parser failed, using rule-based parser: {e}")
                result = None

            if self.accepts(result):
                logger.info(
                    f"Using alternate parse: {len(result.exercises)} exercise(s), "
                    f"confidence {result.confidence:.2f}"
                )
                return convert_alternate_output(result, unit)

            if result is not None:
                logger.info(
                    f"Alternate parse rejected (confidence {result.confidence:.2f}, "
                    f"{len(result.exercises)} exercise(s)), using rule-based parser"
                )

        return parse(text, unit)
