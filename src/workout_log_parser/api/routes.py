"""
API routes for workout log parsing.

POST /parse/voice-log turns a spoken/typed workout log into structured
exercises; POST /exercises/normalize resolves a single exercise name.
"""

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from workout_log_parser import __version__
from workout_log_parser.config import settings
from workout_log_parser.models import MatchConfidence, ParsedExercise
from workout_log_parser.services.exercise_catalog import get_alias_table
from workout_log_parser.services.hybrid_parser import HybridParser
from workout_log_parser.services.normalization_service import normalize

logger = logging.getLogger(__name__)

router = APIRouter()

# No alternate producer is wired in by default; deployments that have one
# override get_parser.
_default_parser = HybridParser()


def get_parser() -> HybridParser:
    return _default_parser


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class ParseVoiceLogRequest(BaseModel):
    """Request model for POST /parse/voice-log"""
    text: str = Field(..., max_length=10000, description="Transcribed or typed workout log")
    default_unit: Optional[Literal["lbs", "kg"]] = Field(
        default=None,
        description="Unit for weights stated without one (defaults to server setting)",
    )


class ParseVoiceLogResponse(BaseModel):
    """Response model for POST /parse/voice-log"""
    success: bool
    exercises: List[ParsedExercise]
    exercise_count: int
    total_sets: int
    unit: str


class NormalizeRequest(BaseModel):
    """Request model for POST /exercises/normalize"""
    name: str = Field(..., max_length=200)


class NormalizeResponse(BaseModel):
    """Response model for POST /exercises/normalize"""
    canonical_name: Optional[str] = None
    confidence: MatchConfidence
    suggestions: List[str] = Field(default_factory=list)
    original_input: str
    is_recognized: bool


# ---------------------------------------------------------------------------
# Version / health
# ---------------------------------------------------------------------------


@router.get("/version")
def get_version():
    """Service and exercise catalog version."""
    table = get_alias_table()
    return {
        "service": "workout-log-parser",
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "catalog_version": table.version,
        "catalog_exercises": len(table.entries),
    }


@router.get("/health")
def health():
    """Health check endpoint."""
    return {"ok": True}


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


@router.post("/parse/voice-log", response_model=ParseVoiceLogResponse)
def parse_voice_log(
    request: ParseVoiceLogRequest,
    parser: HybridParser = Depends(get_parser),
):
    """Parse a natural-language workout log into exercises and sets."""
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text must not be empty")

    unit = request.default_unit or settings.DEFAULT_WEIGHT_UNIT
    exercises = parser.parse(request.text, unit)
    logger.info(f"/parse/voice-log: {len(exercises)} exercise(s) from {len(request.text)} chars")

    return ParseVoiceLogResponse(
        success=len(exercises) > 0,
        exercises=exercises,
        exercise_count=len(exercises),
        total_sets=sum(len(e.sets) for e in exercises),
        unit=unit,
    )


@router.post("/exercises/normalize", response_model=NormalizeResponse)
def normalize_exercise(request: NormalizeRequest):
    """Resolve an exercise name to its canonical catalog name."""
    if not request.name.strip():
        raise HTTPException(status_code=400, detail="Name must not be empty")

    result = normalize(request.name)
    return NormalizeResponse(
        canonical_name=result.canonical_name,
        confidence=result.confidence,
        suggestions=result.suggestions,
        original_input=result.original_input,
        is_recognized=result.is_recognized,
    )
