"""Equipment detection, base weights, and exercise metadata lookup."""
import logging
import re
from typing import Dict, List, Optional, Tuple

from workout_log_parser.models import KG_PER_LB, Equipment, MuscleGroup, WeightUnit
from workout_log_parser.services.exercise_catalog import get_entry

logger = logging.getLogger(__name__)

# Unloaded implement weight in pounds
BASE_WEIGHTS_LBS: Dict[Equipment, float] = {
    Equipment.BARBELL: 45.0,
    Equipment.EZ_BAR: 25.0,
    Equipment.TRAP_BAR: 45.0,
    Equipment.SMITH_MACHINE: 20.0,
}

EQUIPMENT_KEYWORDS: Dict[str, Equipment] = {
    "barbell": Equipment.BARBELL,
    "bar": Equipment.BARBELL,
    "bb": Equipment.BARBELL,
    "dumbbell": Equipment.DUMBBELL,
    "dumbbells": Equipment.DUMBBELL,
    "db": Equipment.DUMBBELL,
    "dbs": Equipment.DUMBBELL,
    "cable": Equipment.CABLE,
    "cables": Equipment.CABLE,
    "machine": Equipment.MACHINE,
    "kettlebell": Equipment.KETTLEBELL,
    "kettlebells": Equipment.KETTLEBELL,
    "kb": Equipment.KETTLEBELL,
    "band": Equipment.BAND,
    "bands": Equipment.BAND,
    "resistance band": Equipment.BAND,
    "smith": Equipment.SMITH_MACHINE,
    "smith machine": Equipment.SMITH_MACHINE,
    "trap bar": Equipment.TRAP_BAR,
    "hex bar": Equipment.TRAP_BAR,
    "ez bar": Equipment.EZ_BAR,
    "ez-bar": Equipment.EZ_BAR,
    "ez curl bar": Equipment.EZ_BAR,
    "bodyweight": Equipment.BODYWEIGHT,
    "body weight": Equipment.BODYWEIGHT,
    "bw": Equipment.BODYWEIGHT,
}


def _keyword_patterns(keywords: Dict[str, object]) -> List[Tuple[re.Pattern, object]]:
    """Compile whole-word patterns, longest keyword first."""
    ordered = sorted(keywords, key=lambda k: (-len(k), k))
    return [(re.compile(rf"\b{re.escape(k)}\b"), keywords[k]) for k in ordered]


_EQUIPMENT_PATTERNS = _keyword_patterns(EQUIPMENT_KEYWORDS)


def base_weight(equipment: Equipment, unit: WeightUnit = WeightUnit.POUNDS) -> float:
    """Weight of the empty implement, 0 for anything without a fixed bar."""
    pounds = BASE_WEIGHTS_LBS.get(equipment, 0.0)
    if unit == WeightUnit.KILOGRAMS:
        return round(pounds / KG_PER_LB, 1)
    return pounds


def detect_equipment(text: str) -> Optional[Equipment]:
    lowered = text.lower()
    for pattern, equipment in _EQUIPMENT_PATTERNS:
        if pattern.search(lowered):
            return equipment
    return None


def resolve(canonical_name: str, segment_text: str) -> Tuple[Equipment, List[MuscleGroup]]:
    """Equipment and primary muscles for an exercise mentioned in a segment.

    Equipment named in the text wins, then the catalog default, then
    bodyweight for bodyweight movements, then OTHER.
    """
    entry = get_entry(canonical_name)
    muscles = list(entry.muscles) if entry else []

    equipment = detect_equipment(segment_text)
    if equipment is None and entry is not None:
        if entry.equipment is not None:
            equipment = entry.equipment
        elif entry.bodyweight:
            equipment = Equipment.BODYWEIGHT
    if equipment is None:
        equipment = Equipment.OTHER

    logger.debug(f"Resolved {canonical_name}: equipment={equipment.value}, muscles={len(muscles)}")
    return equipment, muscles
