"""
Configuration for the applicant-job matching engine.
Adjust weights and tier constants here, or override them from the environment.
"""

import logging
import math
import os
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, model_validator

# Component weights (must sum to 1.0)
WEIGHTS = {
    "education": 0.2,
    "experience": 0.3,
    "skills": 0.3,
    "eligibility": 0.2,
}

# Education degree hierarchy (ordinal 1-5, unrecognized degrees rank 0)
DEGREE_HIERARCHY = {
    "High School": 1,
    "Associate": 2,
    "Bachelor": 3,
    "Master": 4,
    "Doctorate": 5,
}

# Education level scoring
EDUCATION_LEVEL_SCORES = {
    "meets": 1.0,
    "one_below": 0.7,
    "other": 0.3,
}

# Experience scoring
EXPERIENCE_SCORES = {
    "at_max": 1.0,
    "within_range": 0.8,
    "floor": 0.3,
}

DAYS_PER_YEAR = 365.25

# Decimal places kept on the composite score
SCORE_PRECISION = 2

# Ranking defaults
DEFAULT_LIMIT = 10

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class EducationTiers(BaseModel):
    model_config = ConfigDict(frozen=True)

    meets: float = Field(default=EDUCATION_LEVEL_SCORES["meets"], ge=0.0, le=1.0)
    one_below: float = Field(default=EDUCATION_LEVEL_SCORES["one_below"], ge=0.0, le=1.0)
    other: float = Field(default=EDUCATION_LEVEL_SCORES["other"], ge=0.0, le=1.0)


class ExperienceTiers(BaseModel):
    model_config = ConfigDict(frozen=True)

    at_max: float = Field(default=EXPERIENCE_SCORES["at_max"], ge=0.0, le=1.0)
    within_range: float = Field(default=EXPERIENCE_SCORES["within_range"], ge=0.0, le=1.0)
    floor: float = Field(default=EXPERIENCE_SCORES["floor"], ge=0.0, le=1.0)


class ScoringConfig(BaseModel):
    """Policy constants for the scorer.

    The four weights must each lie in [0, 1] and sum to 1.0, so a composite
    built from in-range components stays in range.
    """

    model_config = ConfigDict(frozen=True)

    weights: Dict[str, float] = Field(default_factory=lambda: dict(WEIGHTS))
    education_tiers: EducationTiers = Field(default_factory=EducationTiers)
    experience_tiers: ExperienceTiers = Field(default_factory=ExperienceTiers)
    days_per_year: float = Field(default=DAYS_PER_YEAR, gt=0)
    score_precision: int = Field(default=SCORE_PRECISION, ge=0)

    @model_validator(mode="after")
    def check_weights(self) -> "ScoringConfig":
        if set(self.weights) != set(WEIGHTS):
            raise ValueError(
                f"weights must define exactly {sorted(WEIGHTS)}, got {sorted(self.weights)}"
            )
        for name, weight in self.weights.items():
            if not 0.0 <= weight <= 1.0:
                raise ValueError(f"weight '{name}' must be between 0 and 1, got {weight}")
        total = sum(self.weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"weights must sum to 1.0, got {total}")
        return self


DEFAULT_CONFIG = ScoringConfig()


class MatcherSettings(BaseModel):
    default_limit: int = Field(default=DEFAULT_LIMIT, gt=0)
    max_workers: Optional[int] = Field(default=None, gt=0)
    log_level: str = "INFO"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw not in (None, "") else default


def load_config() -> ScoringConfig:
    """
    Build a ScoringConfig, applying weight overrides from the environment.

    Reads MATCH_WEIGHT_EDUCATION, MATCH_WEIGHT_EXPERIENCE, MATCH_WEIGHT_SKILLS
    and MATCH_WEIGHT_ELIGIBILITY (after loading a .env file if present).

    Raises:
        pydantic.ValidationError: If the resulting weights are invalid
    """
    load_dotenv()
    weights = {
        name: _env_float(f"MATCH_WEIGHT_{name.upper()}", default)
        for name, default in WEIGHTS.items()
    }
    return ScoringConfig(weights=weights)


def get_settings() -> MatcherSettings:
    """Return runtime settings for ranking, read from the environment."""
    load_dotenv()
    max_workers = os.getenv("MATCH_MAX_WORKERS")
    return MatcherSettings(
        default_limit=int(os.getenv("MATCH_DEFAULT_LIMIT", str(DEFAULT_LIMIT))),
        max_workers=int(max_workers) if max_workers else None,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Install the package's log format on the root logger."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
