"""
OCEAN Scoring Engine — Application Configuration

Loads configuration from environment variables (and an optional .env file)
using Pydantic Settings.  Every field has a default so the pure scoring core
runs with an empty environment; only the persistence adapter needs
``DATABASE_URL``.  A cached ``get_settings()`` helper returns the same
validated instance to every call-site.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the scoring engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OCEAN_",
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Runtime environment
    # ------------------------------------------------------------------ #
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # ------------------------------------------------------------------ #
    # Database (score store only)
    # ------------------------------------------------------------------ #
    DATABASE_URL: Optional[str] = None
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 5

    # ------------------------------------------------------------------ #
    # Dark-side risk model
    # ------------------------------------------------------------------ #
    DEFAULT_STRESS_LEVEL: float = 5.0

    # ------------------------------------------------------------------ #
    # Facet engine tier modifiers (all 1.0 until recalibrated per tier)
    # ------------------------------------------------------------------ #
    FACET_TIER_MODIFIERS: Dict[str, float] = {
        "individual": 1.0,
        "executive": 1.0,
        "organizational": 1.0,
    }

    # ------------------------------------------------------------------ #
    # Multi-rater (360) perspective weights
    # ------------------------------------------------------------------ #
    RATER_PERSPECTIVE_WEIGHTS: Dict[str, float] = {
        "self": 1.0,
        "peer": 0.8,
        "manager": 0.9,
        "direct_report": 0.7,
    }

    # ------------------------------------------------------------------ #
    # Derived helpers
    # ------------------------------------------------------------------ #
    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @field_validator("DEFAULT_STRESS_LEVEL")
    @classmethod
    def _stress_must_be_between_1_and_10(cls, v: float) -> float:
        if not 1.0 <= v <= 10.0:
            raise ValueError(f"Stress level must be between 1 and 10, got {v}")
        return v

    @field_validator("FACET_TIER_MODIFIERS", "RATER_PERSPECTIVE_WEIGHTS")
    @classmethod
    def _weights_must_be_non_negative(cls, v: Dict[str, float]) -> Dict[str, float]:
        for key, weight in v.items():
            if weight < 0:
                raise ValueError(f"Weight for {key!r} must be non-negative, got {weight}")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached, validated ``Settings`` instance.

    Using ``@lru_cache`` guarantees the .env file is read and validated
    exactly once per process lifetime::

        from ocean_scoring.config import get_settings
        settings = get_settings()
    """
    return Settings()
