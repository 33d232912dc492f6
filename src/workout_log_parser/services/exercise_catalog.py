"""Exercise catalog and alias table.

Loads the packaged exercise catalog (canonical names, spoken/typed aliases,
timed/bodyweight flags, default equipment and primary muscles) once per
process and answers "which exercise does this text talk about?".
"""
import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from workout_log_parser.models import Equipment, ExerciseCategory, MuscleGroup

logger = logging.getLogger(__name__)

CATALOG_PATH = Path(__file__).parent.parent / "data" / "exercise_catalog.json"


@dataclass(frozen=True)
class CatalogEntry:
    """A canonical exercise as described in the catalog."""
    name: str
    aliases: Tuple[str, ...] = ()
    timed: bool = False
    bodyweight: bool = False
    equipment: Optional[Equipment] = None
    muscles: Tuple[MuscleGroup, ...] = ()

    @property
    def category(self) -> Optional[ExerciseCategory]:
        # Timed wins over bodyweight (a plank is tracked by duration)
        if self.timed:
            return ExerciseCategory.TIMED
        if self.bodyweight:
            return ExerciseCategory.BODYWEIGHT
        return None


@dataclass
class AliasTable:
    """Lower-cased alias -> canonical name, with keys ordered for lookup."""
    aliases: Dict[str, str]
    entries: Dict[str, CatalogEntry]
    version: str = "0.0.0"
    sorted_keys: Tuple[str, ...] = field(init=False, default=())

    def __post_init__(self):
        # Longest alias first so "incline bench press" beats "bench"
        self.sorted_keys = tuple(sorted(self.aliases, key=lambda k: (-len(k), k)))

    def lookup(self, phrase: str) -> Optional[str]:
        return self.aliases.get(phrase.strip().lower())

    def entry(self, name: str) -> Optional[CatalogEntry]:
        return self.entries.get(name.strip().lower())

    @property
    def canonical_names(self) -> List[str]:
        return [entry.name for entry in self.entries.values()]


def _build_entry(raw: dict) -> CatalogEntry:
    equipment = raw.get("equipment")
    return CatalogEntry(
        name=raw["name"],
        aliases=tuple(alias.lower() for alias in raw.get("aliases", [])),
        timed=bool(raw.get("timed", False)),
        bodyweight=bool(raw.get("bodyweight", False)),
        equipment=Equipment(equipment) if equipment else None,
        muscles=tuple(MuscleGroup(m) for m in raw.get("muscles", [])),
    )


def build_alias_table(data: dict) -> AliasTable:
    """Build an AliasTable from the catalog's JSON structure."""
    aliases: Dict[str, str] = {}
    entries: Dict[str, CatalogEntry] = {}

    for raw in data.get("exercises", []):
        entry = _build_entry(raw)
        key = entry.name.lower()
        if key in entries:
            logger.warning(f"Duplicate catalog exercise ignored: {entry.name}")
            continue
        entries[key] = entry

        for alias in entry.aliases:
            existing = aliases.get(alias)
            if existing and existing != entry.name:
                logger.warning(
                    f"Alias '{alias}' already maps to {existing}, not {entry.name}"
                )
                continue
            aliases[alias] = entry.name

    return AliasTable(
        aliases=aliases,
        entries=entries,
        version=data.get("version", "1.0.0"),
    )


@lru_cache(maxsize=1)
def get_alias_table() -> AliasTable:
    """Load the packaged catalog once per process."""
    try:
        with open(CATALOG_PATH, "r", encoding="utf-8") as f:
            data = json.load(f)
    except Exception as e:
        logger.error(f"Failed to load exercise catalog from {CATALOG_PATH}: {e}")
        return AliasTable(aliases={}, entries={})

    table = build_alias_table(data)
    logger.info(
        f"Loaded exercise catalog v{table.version}: "
        f"{len(table.entries)} exercises, {len(table.aliases)} aliases"
    )
    return table


def find_exercise(segment: str) -> Optional[str]:
    """Return the canonical name of the longest alias contained in the segment.

    Plain substring containment; no fuzzy fallback. Unknown text yields None
    rather than a guess.
    """
    if not segment:
        return None
    table = get_alias_table()
    lowered = segment.lower()
    for alias in table.sorted_keys:
        if alias in lowered:
            return table.aliases[alias]
    return None


def get_entry(name: str) -> Optional[CatalogEntry]:
    return get_alias_table().entry(name)


def is_bodyweight(name: str) -> bool:
    entry = get_entry(name)
    return bool(entry and entry.bodyweight)


def is_timed(name: str) -> bool:
    entry = get_entry(name)
    return bool(entry and entry.timed)


def category_for(name: str) -> Optional[ExerciseCategory]:
    """Catalog category, or None when it has to be inferred from the sets."""
    entry = get_entry(name)
    return entry.category if entry else None
