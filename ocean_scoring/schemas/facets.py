"""Facet-path result models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ocean_scoring.schemas.traits import Facet


class FacetScore(BaseModel):
    """Score for one facet on the -3..+3 scale.

    ``confidence`` grows with accumulated item weight and saturates at 1.0
    once the cumulative weight reaches 10.
    """

    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=-3.0, le=3.0)
    confidence: float = Field(ge=0.0, le=1.0)
    n_items: int = Field(ge=0)
    raw_scores: list[float] = []
    percentile: Optional[int] = None
    t_score: Optional[int] = None

    @classmethod
    def no_coverage(cls) -> "FacetScore":
        """Sentinel for a facet that no response touched."""
        return cls(score=0.0, confidence=0.0, n_items=0, raw_scores=[])


class CoverageMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    coverage_percentage: float
    confidence_scores: dict[Facet, float]
    missing_facets: list[Facet]
    weak_coverage_facets: list[Facet]


class FacetValidation(BaseModel):
    """Data-quality verdict over a full facet score set."""

    overall_quality: str  # good / fair / poor
    coverage_percentage: float
    critical_facet_confidence: dict[Facet, float]
    low_confidence_critical_facets: list[Facet]
    issues: list[str] = []


class NodeContribution(BaseModel):
    node_id: str
    response_count: int
    facet_contributions: dict[Facet, float]
    total_contribution: float
