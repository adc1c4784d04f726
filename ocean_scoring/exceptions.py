"""
OCEAN Scoring Engine — Exception hierarchy.

Input-data problems (unknown labels, missing mappings, unparseable facet
answers) are handled fail-soft inside the services and never raise.  The
classes below cover structurally invalid calls only.
"""

from __future__ import annotations


class OceanScoringError(Exception):
    """Base class for every error raised by the scoring engine."""


class EmptyAggregationInputError(OceanScoringError, ValueError):
    """Raised when an aggregation is requested over zero inputs."""

    def __init__(self, what: str = "score sets") -> None:
        super().__init__(f"Cannot aggregate an empty collection of {what}")
        self.what = what


# Short alias used by callers that only care about the empty-input case.
EmptyInputError = EmptyAggregationInputError


class InvalidTraitError(OceanScoringError, KeyError):
    """Raised when a trait-keyed mapping is missing a trait or names an unknown one."""

    def __init__(self, key: str, reason: str = "unknown trait") -> None:
        super().__init__(key)
        self.key = key
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.reason}: {self.key!r}"


class InvalidWeightsError(OceanScoringError, ValueError):
    """Raised when aggregation weights do not line up with their inputs."""


class InvalidStressLevelError(OceanScoringError, ValueError):
    """Raised when a stress level falls outside the 1-10 scale."""

    def __init__(self, stress_level: float) -> None:
        super().__init__(f"Stress level must be between 1 and 10, got {stress_level}")
        self.stress_level = stress_level


class NonFiniteScoreError(OceanScoringError, ValueError):
    """Raised when a raw trait score is NaN or infinite."""

    def __init__(self, trait: str, value: float) -> None:
        super().__init__(f"Raw {trait} score must be finite, got {value}")
        self.trait = trait
        self.value = value
