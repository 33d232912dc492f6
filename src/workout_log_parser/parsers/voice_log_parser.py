"""
Deterministic workout log parser.

Turns a free-form (usually transcribed) sentence such as
"bench 3x10 at 135 then squats with two plates for 5" into an ordered list
of ParsedExercise objects. Text that names no known exercise is dropped
rather than guessed.
"""

import logging
from typing import List, Optional, Union

from workout_log_parser.config import settings
from workout_log_parser.models import ParsedExercise, WeightUnit, infer_category
from workout_log_parser.parsers.attribute_extractor import extract, to_sets
from workout_log_parser.parsers.per_set import try_per_set
from workout_log_parser.parsers.preprocessor import expand
from workout_log_parser.parsers.segmenter import segment as split_segments
from workout_log_parser.services.equipment_service import resolve
from workout_log_parser.services.exercise_catalog import (
    category_for,
    find_exercise,
    is_bodyweight,
    is_timed,
)

logger = logging.getLogger(__name__)


def resolve_unit(default_unit: Union[WeightUnit, str, None]) -> WeightUnit:
    """Caller's unit preference, else the configured default."""
    if isinstance(default_unit, WeightUnit):
        return default_unit
    value = (default_unit or settings.DEFAULT_WEIGHT_UNIT).lower()
    return WeightUnit.KILOGRAMS if value in ("kg", "kgs", "kilograms") else WeightUnit.POUNDS


def parse_segment(text: str, default_unit: WeightUnit = WeightUnit.POUNDS) -> Optional[ParsedExercise]:
    """Parse one segment; None when it names no known exercise."""
    name = find_exercise(text)
    if name is None:
        logger.debug(f"No exercise recognized in segment '{text}'")
        return None

    category = category_for(name)
    bodyweight = is_bodyweight(name)
    timed = is_timed(name)
    equipment, muscles = resolve(name, text)

    # Only look for a duration when the exercise may be timed
    attributes = extract(text, with_duration=timed or category is None)

    sets = try_per_set(
        text,
        attributes,
        bodyweight=bodyweight,
        equipment=equipment,
        default_unit=default_unit,
    )
    if sets is None:
        sets = to_sets(
            attributes,
            bodyweight=bodyweight,
            timed=timed,
            equipment=equipment,
            default_unit=default_unit,
        )

    return ParsedExercise(
        name=name,
        category=category,
        equipment=equipment,
        primary_muscles=muscles,
        sets=sets,
    )


def parse(raw_text: str, default_unit: Union[WeightUnit, str, None] = None) -> List[ParsedExercise]:
    """Parse a workout log into exercises in first-mentioned order.

    Repeated mentions of the same exercise are merged into one entry and
    set numbers are renumbered 1..N afterwards. Never raises on odd input;
    the worst case is an empty list.
    """
    if not raw_text or not raw_text.strip():
        return []

    unit = resolve_unit(default_unit)
    segments = split_segments(expand(raw_text))

    exercises: List[ParsedExercise] = []
    for text in segments:
        exercise = parse_segment(text, unit)
        if exercise is None:
            continue

        existing = next(
            (e for e in exercises if e.name.lower() == exercise.name.lower()),
            None,
        )
        if existing is not None:
            existing.sets.extend(exercise.sets)
        else:
            exercises.append(exercise)

    for exercise in exercises:
        exercise.renumber_sets()
        # Category without a catalog entry is re-inferred over the merged sets
        if category_for(exercise.name) is None:
            exercise.category = infer_category(exercise.sets)

    logger.info(
        f"Parsed {len(exercises)} exercise(s) from {len(segments)} segment(s), "
        f"{sum(len(e.sets) for e in exercises)} set(s) total"
    )
    return exercises
