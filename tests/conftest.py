"""
Test fixtures for workout-log-parser.

Provides the FastAPI test client and canned alternate-parser results so the
hybrid path can be exercised offline and deterministically.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from workout_log_parser.main import app
from workout_log_parser.api.routes import get_parser
from workout_log_parser.services.hybrid_parser import (
    AlternateExercise,
    AlternateParseResult,
    HybridParser,
)


# ---------------------------------------------------------------------------
# Core Test Client
# ---------------------------------------------------------------------------


@pytest.fixture
def client() -> TestClient:
    """Per-test FastAPI TestClient using the rule-based parser only."""
    app.dependency_overrides.pop(get_parser, None)
    yield TestClient(app)
    app.dependency_overrides.pop(get_parser, None)


# ---------------------------------------------------------------------------
# Sample Logs
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_session_log() -> str:
    """A typical spoken gym session."""
    return (
        "Bench press 3x10 at 135. Then squats with two plates for 5 reps. "
        "After that I did pull ups for 8 then plank for 60 seconds"
    )


# ---------------------------------------------------------------------------
# Alternate Parser Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def confident_alternate_result() -> AlternateParseResult:
    """Alternate parser output that clears the confidence gate."""
    return AlternateParseResult(
        confidence=0.92,
        exercises=[
            AlternateExercise(name="bench press", sets=3, reps=8, weight=185, unit="lbs"),
            AlternateExercise(name="Pull Ups", sets=2, reps=10, is_bodyweight=True),
        ],
    )


@pytest.fixture
def low_confidence_alternate_result() -> AlternateParseResult:
    """Alternate parser output below the confidence gate."""
    return AlternateParseResult(
        confidence=0.3,
        exercises=[AlternateExercise(name="Leg Press", sets=5, reps=5, weight=400)],
    )


@pytest.fixture
def mock_producer(confident_alternate_result):
    """A stand-in for the language-model producer."""
    return MagicMock(return_value=confident_alternate_result)


@pytest.fixture
def hybrid_client(mock_producer):
    """TestClient whose parse endpoint goes through the alternate producer."""
    app.dependency_overrides[get_parser] = lambda: HybridParser(producer=mock_producer)
    yield TestClient(app)
    app.dependency_overrides.pop(get_parser, None)
