"""
Per-set breakdown detection.

Handles logs that describe each set separately, e.g.
"first set 135 for 8, second set 155 for 6, third set 175 for 4".
"""

import logging
import re
from typing import List, Optional

from workout_log_parser.models import Equipment, ParsedSet, WeightUnit
from workout_log_parser.parsers.attribute_extractor import (
    PartialSetAttributes,
    extract_reps,
    extract_rir,
    extract_rpe,
    find_weight,
    first_number,
)
from workout_log_parser.services.equipment_service import base_weight

logger = logging.getLogger(__name__)

MIN_MARKERS = 2

# "1st set" .. "10th set", "first set" .. "tenth set", "set 1" .. "set 10".
# "set 10" is tried before "set 1" so a marker is never split.
ORDINAL_MARKER_PATTERN = re.compile(
    r"\b(?:"
    r"(?:1st|2nd|3rd|[4-9]th|10th"
    r"|first|second|third|fourth|fifth|sixth|seventh|eighth|ninth|tenth)\s+set"
    r"|set\s+(?:10|[1-9])"
    r")\b",
    re.IGNORECASE,
)


def find_markers(text: str) -> List[re.Match]:
    return list(ORDINAL_MARKER_PATTERN.finditer(text))


def _parse_chunk(
    chunk: str,
    defaults: PartialSetAttributes,
    *,
    bodyweight: bool,
    equipment: Equipment,
    default_unit: WeightUnit,
) -> ParsedSet:
    found = find_weight(chunk)
    if found:
        weight, unit, (start, end) = found
        unit = unit or default_unit
        remainder = chunk[:start] + " " + chunk[end:]
    else:
        weight, unit, remainder = None, default_unit, chunk

    reps = extract_reps(chunk)
    if reps is None:
        reps = first_number(remainder)

    if bodyweight:
        weight = 0.0
    elif weight is None:
        weight = base_weight(equipment, unit)

    rpe = extract_rpe(chunk)
    rir = extract_rir(chunk)

    return ParsedSet(
        reps=reps if reps is not None else 1,
        weight=weight,
        unit=unit,
        set_type=defaults.set_type,
        rpe=rpe if rpe is not None else defaults.rpe,
        rir=rir if rir is not None else defaults.rir,
        rest_seconds=defaults.rest_seconds,
        tempo=defaults.tempo,
        grip=defaults.grip,
        stance=defaults.stance,
    )


def try_per_set(
    segment: str,
    defaults: Optional[PartialSetAttributes] = None,
    *,
    bodyweight: bool = False,
    equipment: Equipment = Equipment.OTHER,
    default_unit: WeightUnit = WeightUnit.POUNDS,
) -> Optional[List[ParsedSet]]:
    """Split a segment at its ordinal set markers into one set per marker.

    Returns None when fewer than two markers are present so the caller can
    fall back to uniform extraction. Segment-level attributes (set type,
    rest, tempo, grip, stance, and RPE/RIR when a chunk has none) come from
    ``defaults``.
    """
    markers = find_markers(segment)
    if len(markers) < MIN_MARKERS:
        return None

    defaults = defaults or PartialSetAttributes()
    sets: List[ParsedSet] = []
    for index, marker in enumerate(markers):
        end = markers[index + 1].start() if index + 1 < len(markers) else len(segment)
        # Marker text excluded so "set 3" never reads as 3 reps
        chunk = segment[marker.end():end]
        parsed = _parse_chunk(
            chunk,
            defaults,
            bodyweight=bodyweight,
            equipment=equipment,
            default_unit=default_unit,
        )
        parsed.set_number = index + 1
        sets.append(parsed)

    logger.debug(f"Per-set breakdown: {len(sets)} sets from '{segment}'")
    return sets
