"""Configuration settings for the workout log parser."""
import os
from typing import Literal


EnvironmentType = Literal["development", "staging", "production"]
WeightUnitType = Literal["lbs", "kg"]


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"

    # Parsing defaults
    DEFAULT_WEIGHT_UNIT: WeightUnitType = "lbs"
    FUZZY_MATCH_THRESHOLD: int = 3

    # Minimum confidence for accepting an alternate (LLM) parse
    LLM_MIN_CONFIDENCE: float = 0.6

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        # Parsing defaults
        unit = os.getenv("DEFAULT_WEIGHT_UNIT", "lbs").lower()
        self.DEFAULT_WEIGHT_UNIT = "kg" if unit in ("kg", "kgs", "kilograms") else "lbs"

        try:
            self.FUZZY_MATCH_THRESHOLD = int(os.getenv("FUZZY_MATCH_THRESHOLD", "3"))
        except ValueError:
            self.FUZZY_MATCH_THRESHOLD = 3

        try:
            self.LLM_MIN_CONFIDENCE = float(os.getenv("LLM_MIN_CONFIDENCE", "0.6"))
        except ValueError:
            self.LLM_MIN_CONFIDENCE = 0.6


settings = Settings()
