"""Exercise name normalization.

Maps free-form exercise names (typos included) onto canonical catalog names
using the alias table first and Levenshtein distance as a fallback.
"""
import logging
from typing import List, Optional

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from workout_log_parser.config import settings
from workout_log_parser.models import MatchConfidence, NormalizationResult
from workout_log_parser.services.exercise_catalog import get_alias_table

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3


def fuzzy_threshold(query: str) -> int:
    """Largest edit distance accepted for a query of this length.

    Short queries get a tighter bound so three-letter noise does not land on
    three-letter aliases like "ohp" or "rdl".
    """
    return min(settings.FUZZY_MATCH_THRESHOLD, max(1, len(query) // 2))


def normalize(name: str) -> NormalizationResult:
    """Resolve a free-form exercise name to its canonical form."""
    original = name if name is not None else ""
    query = original.strip().lower()

    if not query:
        return NormalizationResult(
            confidence=MatchConfidence.UNRECOGNIZED,
            original_input=original,
        )

    table = get_alias_table()

    canonical = table.lookup(query)
    if canonical:
        return NormalizationResult(
            canonical_name=canonical,
            confidence=MatchConfidence.EXACT,
            original_input=original,
        )

    entry = table.entry(query)
    if entry:
        return NormalizationResult(
            canonical_name=entry.name,
            confidence=MatchConfidence.EXACT,
            original_input=original,
        )

    # Every alias ranked by edit distance, closest first
    matches = process.extract(
        query,
        table.sorted_keys,
        scorer=Levenshtein.distance,
        limit=None,
    )

    if matches:
        best_alias, best_distance, _ = matches[0]
        if best_distance <= fuzzy_threshold(query):
            logger.debug(f"Fuzzy match '{query}' -> '{best_alias}' (distance {best_distance})")
            return NormalizationResult(
                canonical_name=table.aliases[best_alias],
                confidence=MatchConfidence.FUZZY,
                original_input=original,
            )

    suggestions = _closest_names([table.aliases[alias] for alias, _, _ in matches])
    logger.debug(f"Unrecognized exercise '{query}', suggestions: {suggestions}")
    return NormalizationResult(
        confidence=MatchConfidence.UNRECOGNIZED,
        suggestions=suggestions,
        original_input=original,
    )


def _closest_names(ranked_names: List[str]) -> List[str]:
    suggestions: List[str] = []
    for name in ranked_names:
        if name not in suggestions:
            suggestions.append(name)
        if len(suggestions) == MAX_SUGGESTIONS:
            break
    return suggestions


def is_recognized(name: str) -> bool:
    return normalize(name).is_recognized


def canonical_name(name: str) -> Optional[str]:
    return normalize(name).canonical_name
