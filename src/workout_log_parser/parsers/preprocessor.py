"""
Lexical preprocessing for spoken/typed workout logs.

Expands gym slang (plate math, "threw on", "hit bis") and spelled-out
numbers into the plain vocabulary the extraction rules understand.
"""

import logging
import re
from typing import List, Tuple

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Substitution tables (order matters: most specific phrase first)
# ---------------------------------------------------------------------------

# Barbell plate math: 45 lb bar plus plates on each side.
PLATE_PATTERNS: List[Tuple[str, str]] = [
    # 4 plates (405 base)
    ("4 plates and a 45", "495 pounds"),
    ("4 plates and a 25", "455 pounds"),
    ("4 plates and a quarter", "455 pounds"),
    ("4 plates and a 10", "425 pounds"),
    ("4 plates and a dime", "425 pounds"),
    ("4 plates and a 5", "415 pounds"),
    ("4 plates and a nickel", "415 pounds"),
    ("four plates", "405 pounds"),
    ("4 plates", "405 pounds"),

    # 3 plates (315 base)
    ("3 plates and a 45", "405 pounds"),
    ("3 plates and a 25", "365 pounds"),
    ("3 plates and a quarter", "365 pounds"),
    ("3 plates and a 10", "335 pounds"),
    ("3 plates and a dime", "335 pounds"),
    ("3 plates and a 5", "325 pounds"),
    ("3 plates and a nickel", "325 pounds"),
    ("three plates", "315 pounds"),
    ("3 plates", "315 pounds"),

    # 2 plates (225 base)
    ("2 plates and a 45", "315 pounds"),
    ("two plates and a 45", "315 pounds"),
    ("2 plates and a 25", "275 pounds"),
    ("two plates and a 25", "275 pounds"),
    ("2 plates and a quarter", "275 pounds"),
    ("two plates and a quarter", "275 pounds"),
    ("2 plates and a 15", "255 pounds"),
    ("two plates and a 15", "255 pounds"),
    ("2 plates and 15", "255 pounds"),
    ("2 plates and a 10", "245 pounds"),
    ("two plates and a 10", "245 pounds"),
    ("2 plates and a dime", "245 pounds"),
    ("2 plates and a 5", "235 pounds"),
    ("two plates and a 5", "235 pounds"),
    ("2 plates and a nickel", "235 pounds"),
    ("two plates", "225 pounds"),
    ("2 plates", "225 pounds"),

    # "with a plate and ..." reads as a load, so it becomes "at ..."
    ("with a plate and a 15", "at 165 pounds"),
    ("with a plate and 15", "at 165 pounds"),
    ("with a plate and a 10", "at 155 pounds"),
    ("with a plate and 10", "at 155 pounds"),

    # 1 plate (135 base)
    ("a plate and a 45", "225 pounds"),
    ("plate and a 45", "225 pounds"),
    ("1 plate and a 45", "225 pounds"),
    ("one plate and a 45", "225 pounds"),
    ("a plate and 45", "225 pounds"),
    ("plate and 45", "225 pounds"),

    ("a plate and a 35", "205 pounds"),
    ("plate and a 35", "205 pounds"),
    ("a plate and 35", "205 pounds"),

    ("a plate and a 25", "185 pounds"),
    ("plate and a 25", "185 pounds"),
    ("1 plate and a 25", "185 pounds"),
    ("one plate and a 25", "185 pounds"),
    ("a plate and 25", "185 pounds"),
    ("plate and 25", "185 pounds"),
    ("a plate and a quarter", "185 pounds"),
    ("plate and a quarter", "185 pounds"),

    ("a plate and a 15", "165 pounds"),
    ("plate and a 15", "165 pounds"),
    ("1 plate and a 15", "165 pounds"),
    ("one plate and a 15", "165 pounds"),
    ("a plate and 15", "165 pounds"),
    ("plate and 15", "165 pounds"),

    ("a plate and a 10", "155 pounds"),
    ("plate and a 10", "155 pounds"),
    ("1 plate and a 10", "155 pounds"),
    ("a plate and 10", "155 pounds"),
    ("plate and 10", "155 pounds"),
    ("a plate and a dime", "155 pounds"),
    ("plate and a dime", "155 pounds"),

    ("a plate and a 5", "145 pounds"),
    ("plate and a 5", "145 pounds"),
    ("1 plate and a 5", "145 pounds"),
    ("a plate and 5", "145 pounds"),
    ("plate and 5", "145 pounds"),
    ("a plate and a nickel", "145 pounds"),
    ("plate and a nickel", "145 pounds"),

    # Single plate
    ("one plate", "135 pounds"),
    ("1 plate", "135 pounds"),
    ("a plate", "135 pounds"),

    # Empty bar
    ("just the bar", "45 pounds"),
    ("empty bar", "45 pounds"),
    ("bar only", "45 pounds"),

    # Small plates on their own
    ("a quarter", "25 pounds"),
    ("a dime", "10 pounds"),
    ("a nickel", "5 pounds"),
]

WEIGHT_EXPRESSIONS: List[Tuple[str, str]] = [
    ("put on a", "at"),
    ("i put on", "at"),
    ("loaded up", "at"),
    ("threw on", "at"),
    ("with a", "at"),
]

BODY_PART_SLANG: List[Tuple[str, str]] = [
    ("hittin' bis", "bicep curls"),
    ("hitting bis", "bicep curls"),
    ("hit bis", "bicep curls"),
    ("worked bis", "bicep curls"),
    ("hittin' tris", "tricep extensions"),
    ("hitting tris", "tricep extensions"),
    ("hit tris", "tricep extensions"),
    ("worked tris", "tricep extensions"),
    ("hittin' chest", "bench press"),
    ("hitting chest", "bench press"),
    ("hit chest", "bench press"),
    ("worked chest", "bench press"),
    ("hittin' back", "rows"),
    ("hitting back", "rows"),
    ("hit back", "rows"),
    ("worked back", "rows"),
    ("hittin' legs", "squats"),
    ("hitting legs", "squats"),
    ("hit legs", "squats"),
    ("worked legs", "squats"),
    ("banged out", "did"),
    ("knocked out", "did"),
]

NUMBER_WORDS = {
    "zero": "0", "one": "1", "two": "2", "three": "3", "four": "4",
    "five": "5", "six": "6", "seven": "7", "eight": "8", "nine": "9",
    "ten": "10", "eleven": "11", "twelve": "12", "thirteen": "13",
    "fourteen": "14", "fifteen": "15", "sixteen": "16", "seventeen": "17",
    "eighteen": "18", "nineteen": "19", "twenty": "20",
    # Frequency words carry "times" so the sets/reps rules see them
    "once": "1 times", "twice": "2 times", "thrice": "3 times",
}


def _phrase_pattern(phrase: str) -> re.Pattern:
    return re.compile(rf"(?<![\w']){re.escape(phrase)}(?![\w'])")


_SLANG_SUBSTITUTIONS = [
    (_phrase_pattern(slang), expanded)
    for table in (PLATE_PATTERNS, WEIGHT_EXPRESSIONS, BODY_PART_SLANG)
    for slang, expanded in table
]

_NUMBER_WORD_PATTERN = re.compile(
    r"\b("
    + "|".join(sorted(NUMBER_WORDS, key=lambda w: (-len(w), w)))
    + r")\b"
)


def expand_gym_slang(text: str) -> str:
    """Lower-case the text and apply plate math and slang substitutions."""
    result = text.lower()
    for pattern, expanded in _SLANG_SUBSTITUTIONS:
        result = pattern.sub(expanded, result)
    return result


def replace_number_words(text: str) -> str:
    """Replace spelled-out numbers (whole words only) with digits."""
    return _NUMBER_WORD_PATTERN.sub(lambda m: NUMBER_WORDS[m.group(1)], text)


def expand(text: str) -> str:
    """Full preprocessing pass: slang expansion, then number words.

    Never raises; running it again on its own output changes nothing.
    """
    if not text:
        return ""
    expanded = replace_number_words(expand_gym_slang(text))
    if expanded != text.lower():
        logger.debug(f"Preprocessed '{text}' -> '{expanded}'")
    return expanded
