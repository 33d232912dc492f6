"""
Attribute extraction for a single exercise segment.

Each attribute has an ordered list of regex rules; the first rule that
matches decides the value. Segments are expected to be preprocessed
(lower-cased, number words replaced by digits) but rules are
case-insensitive anyway.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from workout_log_parser.models import (
    Equipment,
    GripType,
    ParsedSet,
    SetType,
    StanceType,
    WeightUnit,
)
from workout_log_parser.services.equipment_service import base_weight

logger = logging.getLogger(__name__)


# Larger counts are weights or noise, not sets
MAX_SETS_COUNT = 20


class PartialSetAttributes(BaseModel):
    """Everything a segment says about its sets; None means not mentioned."""
    sets_count: Optional[int] = Field(default=None, ge=1, le=MAX_SETS_COUNT)
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    unit: Optional[WeightUnit] = None
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    rpe: Optional[int] = Field(default=None, ge=1, le=10)
    rir: Optional[int] = Field(default=None, ge=0, le=10)
    rest_seconds: Optional[int] = Field(default=None, ge=0)
    tempo: Optional[str] = None
    grip: Optional[GripType] = None
    stance: Optional[StanceType] = None
    set_type: SetType = SetType.NORMAL


# ---------------------------------------------------------------------------
# Keyword vocabularies
# ---------------------------------------------------------------------------

SET_TYPE_KEYWORDS: Dict[str, SetType] = {
    "drop set": SetType.DROP_SET,
    "dropset": SetType.DROP_SET,
    "drop": SetType.DROP_SET,
    "superset": SetType.SUPERSET,
    "super set": SetType.SUPERSET,
    "rest pause": SetType.REST_PAUSE,
    "rest-pause": SetType.REST_PAUSE,
    "amrap": SetType.AMRAP,
    "as many as possible": SetType.AMRAP,
    "to failure": SetType.TO_FAILURE,
    "til failure": SetType.TO_FAILURE,
    "until failure": SetType.TO_FAILURE,
    "failed": SetType.TO_FAILURE,
    "warm up": SetType.WARMUP,
    "warmup": SetType.WARMUP,
    "warm-up": SetType.WARMUP,
    "cluster": SetType.CLUSTER,
    "cluster set": SetType.CLUSTER,
}

GRIP_KEYWORDS: Dict[str, GripType] = {
    "wide grip": GripType.WIDE,
    "wide": GripType.WIDE,
    "narrow grip": GripType.NARROW,
    "narrow": GripType.NARROW,
    "close grip": GripType.NARROW,
    "close": GripType.NARROW,
    "underhand grip": GripType.UNDERHAND,
    "underhand": GripType.UNDERHAND,
    "supinated grip": GripType.UNDERHAND,
    "supinated": GripType.UNDERHAND,
    "overhand grip": GripType.OVERHAND,
    "overhand": GripType.OVERHAND,
    "pronated grip": GripType.OVERHAND,
    "pronated": GripType.OVERHAND,
    "neutral grip": GripType.NEUTRAL,
    "neutral": GripType.NEUTRAL,
    "hammer grip": GripType.NEUTRAL,
    "mixed grip": GripType.MIXED,
    "mixed": GripType.MIXED,
    "alternating grip": GripType.MIXED,
    "reverse grip": GripType.REVERSE,
    "reverse": GripType.REVERSE,
}

STANCE_KEYWORDS: Dict[str, StanceType] = {
    "wide stance": StanceType.WIDE,
    "sumo stance": StanceType.SUMO,
    "sumo": StanceType.SUMO,
    "narrow stance": StanceType.NARROW,
    "staggered stance": StanceType.STAGGERED,
    "staggered": StanceType.STAGGERED,
    "split stance": StanceType.STAGGERED,
    "single leg": StanceType.SINGLE_LEG,
    "one leg": StanceType.SINGLE_LEG,
    "1 leg": StanceType.SINGLE_LEG,
    "unilateral": StanceType.SINGLE_LEG,
}

DESCRIPTIVE_TEMPOS: List[Tuple[str, str]] = [
    (r"slow\s*(?:and\s*)?controlled", "3-1-3"),
    (r"slow\s*eccentric", "4-0-1"),
    (r"slow\s*negative", "4-0-1"),
    (r"pause(?:d)?\s*(?:at\s*)?(?:the\s*)?bottom", "2-2-1"),
    (r"pause(?:d)?\s*(?:at\s*)?(?:the\s*)?top", "2-0-2-2"),
    (r"explosive", "1-0-X"),
    (r"time\s*under\s*tension", "3-1-3"),
    (r"\btut\b", "3-1-3"),
]


def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


def _keyword_patterns(keywords: Dict[str, object]) -> List[Tuple[re.Pattern, object]]:
    ordered = sorted(keywords, key=lambda k: (-len(k), k))
    return [(_compile(rf"\b{re.escape(k)}\b"), keywords[k]) for k in ordered]


_SET_TYPE_PATTERNS = _keyword_patterns(SET_TYPE_KEYWORDS)
_GRIP_PATTERNS = _keyword_patterns(GRIP_KEYWORDS)
_STANCE_PATTERNS = _keyword_patterns(STANCE_KEYWORDS)
_DESCRIPTIVE_TEMPO_PATTERNS = [(_compile(p), tempo) for p, tempo in DESCRIPTIVE_TEMPOS]

# ---------------------------------------------------------------------------
# Numeric patterns
# ---------------------------------------------------------------------------

_NUMBER = r"(\d+(?:\.\d+)?)"
_MINUTES = r"(?:minutes?|mins?)"
_SECONDS = r"(?:seconds?|secs?)"

# A number followed by one of these is not a plain count
_NOT_A_COUNT = (
    r"(?![\d:.%]|\s*(?:sets?\b|[x×]|times?\b|reps?\b|kgs?\b|kilo|lbs?\b|pounds?\b"
    r"|minutes?\b|mins?\b|seconds?\b|secs?\b|rpe\b))"
)

_REPS_THEN_TIMES = _compile(r"reps?\s+(\d+)\s*times?\b")
_TRAILING_TIMES = _compile(r"\b(\d+)\s*times?\s*$")
_N_SETS = _compile(r"\b(\d+)\s*sets?\b")
# A three-digit first operand is a weight ("315x3"), not a set count
_SETS_BY_REPS = _compile(r"\b(\d{1,2})\s*[x×]\s*\d+")

_SINGULAR_REP_PATTERNS = [
    _compile(r"\ba\s+single\s+rep\b"),
    _compile(r"\bsingle\s+rep\b"),
    _compile(r"\b(?:one|1)\s+rep\b"),
    _compile(r"\ba\s+rep\b"),
    _compile(r"\bfor\s+a\s+single\b"),
    _compile(r"\bjust\s+(?:one|1)\b" + _NOT_A_COUNT),
    _compile(r"\bfor\s+(?:one|1)\b" + _NOT_A_COUNT),
]

_REPS_PATTERNS = [
    _compile(r"\b(\d+)\s*reps?\b(?!\s*(?:in\s+(?:the\s+)?(?:tank|reserve)|left|remaining|more))"),
    _compile(r"\bfor\s+(\d+)\s+reps?\b"),
    _compile(r"\bsets?\s*of\s*(\d+)\b" + _NOT_A_COUNT),
    _compile(r"\b\d+\s*[x×]\s*(\d+)"),
]

_REPS_FALLBACK_PATTERNS = [
    _compile(r"\bfor\s+(\d{1,3})\b" + _NOT_A_COUNT),
    _compile(r"\bdid\s+(\d{1,3})\b" + _NOT_A_COUNT),
    _compile(r"\bdo\s+(\d{1,3})\b" + _NOT_A_COUNT),
]

_KG_PATTERN = _compile(_NUMBER + r"\s*(?:kilograms?|kilos?|kgs?)\b")
_LBS_PATTERN = _compile(_NUMBER + r"\s*(?:pounds?|lbs?)\b")
_AT_PATTERN = _compile(
    r"\bat\s*" + _NUMBER + r"\b(?![:%]|\s*(?:reps?\b|sets?\b|[x×]|times?\b|minutes?\b|mins?\b"
    r"|seconds?\b|secs?\b|%))"
)
_AFTER_SETS_REPS_PATTERN = _compile(
    r"\b\d+\s*[x×]\s*\d+\s+" + _NUMBER + r"\b(?!\s*(?:reps?\b|sets?\b|minutes?\b|mins?\b|seconds?\b|secs?\b))"
)
_WEIGHT_BY_REPS_PATTERN = _compile(r"\b(\d{3,}(?:\.\d+)?)\s*[x×]\s*\d+")
_STANDALONE_PATTERN = _compile(
    r"(?<![\d.:])\b(\d{3})\b(?![.:]\d)(?!\s*(?:[x×]|reps?\b|sets?\b|times?\b|minutes?\b|mins?\b"
    r"|seconds?\b|secs?\b|%))"
)
MIN_WEIGHT_AFTER_SETS_REPS = 20
MIN_STANDALONE_WEIGHT = 45

_DURATION_MMSS = _compile(r"\b(\d{1,2}):([0-5]\d)\b")
_DURATION_MIN_SEC = _compile(r"(\d+)\s*" + _MINUTES + r"\s*(?:and\s*)?(\d+)\s*" + _SECONDS + r"\b")
_DURATION_MIN = _compile(r"(\d+)\s*" + _MINUTES + r"\b")
_DURATION_SEC = _compile(r"(\d+)\s*" + _SECONDS + r"\b")

_REST = r"rest(?:ed|ing)?\s*(?:for\s*)?"
_REST_MIN_UNIT = r"(?:minutes?|mins?|m)"
_REST_SEC_UNIT = r"(?:seconds?|secs?|s)"
_REST_MMSS_PATTERNS = [
    _compile(r"(\d+):(\d+)\s*(?:of\s*)?rest"),
    _compile(_REST + r"(\d+):(\d+)"),
]
_REST_MIN_SEC_PATTERN = _compile(
    _REST + r"(\d+)\s*" + _REST_MIN_UNIT + r"\s*(?:and\s*)?(\d+)\s*" + _REST_SEC_UNIT + r"\b"
)
_REST_MIN_PATTERNS = [
    _compile(r"(\d+)\s*" + _REST_MIN_UNIT + r"\s*(?:of\s*)?rest"),
    _compile(_REST + r"(\d+)\s*" + _REST_MIN_UNIT + r"\b"),
]
_REST_SEC_PATTERNS = [
    _compile(r"(\d+)\s*" + _REST_SEC_UNIT + r"\s*(?:of\s*)?rest"),
    _compile(_REST + r"(\d+)\s*" + _REST_SEC_UNIT + r"\b"),
]
# Whole rest phrases, removed before looking for an exercise duration
_REST_SPAN_PATTERNS = [
    _REST_MIN_SEC_PATTERN,
    *_REST_MMSS_PATTERNS,
    _compile(
        r"\d+\s*(?:" + _REST_MIN_UNIT + r"|" + _REST_SEC_UNIT + r")\b"
        r"(?:\s*(?:and\s*)?\d+\s*" + _REST_SEC_UNIT + r"\b)?\s*(?:of\s*)?rest"
    ),
    *_REST_MIN_PATTERNS[1:],
    *_REST_SEC_PATTERNS[1:],
]

_RPE_PATTERNS = [
    _compile(r"\brpe\s*(?:of\s*)?(?:an?\s+)?(\d+)"),
    _compile(r"rate\s*(?:of\s*)?(?:perceived\s*)?(?:exertion\s*)?(?:of\s*)?(\d+)"),
    _compile(r"(?:felt like|was)\s+(?:an?\s+)?(\d+)\s*(?:out of 10|/\s*10)"),
]

_RIR_PATTERNS = [
    _compile(r"\brir\s*(?:of\s*)?(\d+)"),
    _compile(r"(\d+)\s*(?:reps?\s*)?in\s*(?:the\s*)?(?:tank|reserve)"),
    _compile(r"\bhad\s*(\d+)\s*(?:reps?\s*)?(?:left|remaining)\b"),
    _compile(r"could\s*(?:have\s*)?(?:done\s*)?(\d+)\s*more"),
]

_TEMPO_PATTERNS = [
    _compile(r"tempo\s*(?:of\s*)?(\d+[-/\s]\d+[-/\s]\d+(?:[-/\s]\d+)?)"),
    _compile(r"(\d+[-/\s]\d+[-/\s]\d+(?:[-/\s]\d+)?)\s*tempo"),
    _compile(r"\b(\d+-\d+-\d+(?:-\d+)?)\b"),
]

_FIRST_INT = re.compile(r"\d+")


# ---------------------------------------------------------------------------
# Individual extractors
# ---------------------------------------------------------------------------

def _first_group_int(patterns, text: str) -> Optional[int]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return int(match.group(1))
    return None


def extract_sets_count(text: str) -> Optional[int]:
    """Number of identical sets ("4 sets", "3x10", "10 reps 3 times")."""
    match = _REPS_THEN_TIMES.search(text)
    if not match:
        match = _TRAILING_TIMES.search(text)
    if not match:
        match = _N_SETS.search(text)
    if not match:
        match = _SETS_BY_REPS.search(text)

    if match:
        count = int(match.group(1))
        if 1 <= count <= MAX_SETS_COUNT:
            return count
    return None


def extract_reps(text: str) -> Optional[int]:
    """Reps per set.

    Singular phrases ("a single rep", "for one") always mean exactly one rep.
    "N times" is never reps; it is the set count.
    """
    for pattern in _SINGULAR_REP_PATTERNS:
        if pattern.search(text):
            return 1

    reps = _first_group_int(_REPS_PATTERNS, text)
    if reps is not None:
        return reps

    if "rep" in text.lower():
        return None

    return _first_group_int(_REPS_FALLBACK_PATTERNS, text)


def find_weight(text: str) -> Optional[Tuple[float, Optional[WeightUnit], Tuple[int, int]]]:
    """Weight, its unit (None when not stated) and the matched span."""
    for pattern, unit in ((_KG_PATTERN, WeightUnit.KILOGRAMS), (_LBS_PATTERN, WeightUnit.POUNDS)):
        match = pattern.search(text)
        if match:
            return float(match.group(1)), unit, match.span()

    match = _AT_PATTERN.search(text)
    if match:
        return float(match.group(1)), None, match.span()

    match = _AFTER_SETS_REPS_PATTERN.search(text)
    if match and float(match.group(1)) >= MIN_WEIGHT_AFTER_SETS_REPS:
        return float(match.group(1)), None, match.span(1)

    match = _WEIGHT_BY_REPS_PATTERN.search(text)
    if match:
        return float(match.group(1)), None, match.span(1)

    for match in _STANDALONE_PATTERN.finditer(text):
        value = float(match.group(1))
        if value >= MIN_STANDALONE_WEIGHT:
            return value, None, match.span()

    return None


def extract_weight(text: str) -> Tuple[Optional[float], Optional[WeightUnit]]:
    found = find_weight(text)
    if found is None:
        return None, None
    weight, unit, _ = found
    return weight, unit


def strip_rest_phrases(text: str) -> str:
    for pattern in _REST_SPAN_PATTERNS:
        text = pattern.sub(" ", text)
    return text


def extract_duration(text: str) -> Optional[int]:
    """Duration of a timed set in seconds; rest periods are ignored."""
    text = strip_rest_phrases(text)

    match = _DURATION_MMSS.search(text)
    if match:
        return int(match.group(1)) * 60 + int(match.group(2))

    match = _DURATION_MIN_SEC.search(text)
    if match:
        return int(match.group(1)) * 60 + int(match.group(2))

    match = _DURATION_MIN.search(text)
    if match:
        return int(match.group(1)) * 60

    match = _DURATION_SEC.search(text)
    if match:
        return int(match.group(1))
    return None


def extract_rpe(text: str) -> Optional[int]:
    rpe = _first_group_int(_RPE_PATTERNS, text)
    return max(1, min(10, rpe)) if rpe is not None else None


def extract_rir(text: str) -> Optional[int]:
    rir = _first_group_int(_RIR_PATTERNS, text)
    return max(0, min(10, rir)) if rir is not None else None


def extract_rest_seconds(text: str) -> Optional[int]:
    for pattern in _REST_MMSS_PATTERNS:
        match = pattern.search(text)
        if match:
            return int(match.group(1)) * 60 + int(match.group(2))

    match = _REST_MIN_SEC_PATTERN.search(text)
    if match:
        return int(match.group(1)) * 60 + int(match.group(2))

    minutes = _first_group_int(_REST_MIN_PATTERNS, text)
    if minutes is not None:
        return minutes * 60

    return _first_group_int(_REST_SEC_PATTERNS, text)


def extract_tempo(text: str) -> Optional[str]:
    for pattern in _TEMPO_PATTERNS:
        match = pattern.search(text)
        if match:
            return re.sub(r"[/\s]", "-", match.group(1))

    for pattern, tempo in _DESCRIPTIVE_TEMPO_PATTERNS:
        if pattern.search(text):
            return tempo
    return None


def _detect_keyword(patterns, text: str):
    for pattern, value in patterns:
        if pattern.search(text):
            return value
    return None


def detect_grip(text: str) -> Optional[GripType]:
    return _detect_keyword(_GRIP_PATTERNS, text)


def detect_stance(text: str) -> Optional[StanceType]:
    return _detect_keyword(_STANCE_PATTERNS, text)


def detect_set_type(text: str) -> SetType:
    return _detect_keyword(_SET_TYPE_PATTERNS, text) or SetType.NORMAL


def first_number(text: str) -> Optional[int]:
    match = _FIRST_INT.search(text)
    return int(match.group(0)) if match else None


# ---------------------------------------------------------------------------
# Segment-level API
# ---------------------------------------------------------------------------

def extract(segment: str, with_duration: bool = True) -> PartialSetAttributes:
    """Run every extractor over a segment.

    Args:
        segment: One exercise fragment of a preprocessed log.
        with_duration: Look for a set duration (skipped for exercises known
            to be rep-based, so "21s" or a rest period is never a duration).
    """
    weight, unit = extract_weight(segment)
    attributes = PartialSetAttributes(
        sets_count=extract_sets_count(segment),
        reps=extract_reps(segment),
        weight=weight,
        unit=unit,
        duration_seconds=extract_duration(segment) if with_duration else None,
        rpe=extract_rpe(segment),
        rir=extract_rir(segment),
        rest_seconds=extract_rest_seconds(segment),
        tempo=extract_tempo(segment),
        grip=detect_grip(segment),
        stance=detect_stance(segment),
        set_type=detect_set_type(segment),
    )
    logger.debug(f"Extracted from '{segment}': {attributes.model_dump(exclude_none=True)}")
    return attributes


def to_sets(
    attributes: PartialSetAttributes,
    *,
    bodyweight: bool = False,
    timed: bool = False,
    equipment: Equipment = Equipment.OTHER,
    default_unit: WeightUnit = WeightUnit.POUNDS,
) -> List[ParsedSet]:
    """Replicate one uniform set description sets_count times.

    Missing reps default to 1 (0 for timed work); a missing weight falls back
    to the empty implement's weight, and bodyweight work always weighs 0.
    """
    unit = attributes.unit or default_unit
    reps = attributes.reps if attributes.reps is not None else (0 if timed else 1)

    if bodyweight:
        weight = 0.0
    elif attributes.weight is not None:
        weight = attributes.weight
    else:
        weight = base_weight(equipment, unit)

    count = attributes.sets_count or 1
    return [
        ParsedSet(
            set_number=number,
            reps=reps,
            weight=weight,
            unit=unit,
            duration_seconds=attributes.duration_seconds,
            set_type=attributes.set_type,
            rpe=attributes.rpe,
            rir=attributes.rir,
            rest_seconds=attributes.rest_seconds,
            tempo=attributes.tempo,
            grip=attributes.grip,
            stance=attributes.stance,
        )
        for number in range(1, count + 1)
    ]
