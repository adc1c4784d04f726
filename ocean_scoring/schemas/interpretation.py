"""Narrative interpretation outputs."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from ocean_scoring.schemas.traits import Trait


class ProfileInterpretation(BaseModel):
    strengths: list[str] = []
    challenges: list[str] = []
    recommendations: list[str] = []


class ProfileReport(BaseModel):
    summary: str
    dominant_traits: list[str]
    trait_levels: dict[Trait, str]
    trait_descriptions: dict[Trait, str]
    archetype: Optional[str] = None


class BenchmarkComparison(BaseModel):
    percentile: int
    benchmark: float
    difference: float
    interpretation: str


class InsightItem(BaseModel):
    trait: str
    insight: str
    evidence: list[str] = []
    impact: str = "medium"


class ProfileInsights(BaseModel):
    """Strengths, development areas and trait combinations worth growing.

    ``trait`` is a trait name, or ``emotional_stability`` for insights
    derived from low / high neuroticism.
    """

    strengths: list[InsightItem] = []
    development_areas: list[InsightItem] = []
    hidden_potential: list[InsightItem] = []


class RecommendationItem(BaseModel):
    action: str
    rationale: str
    target_traits: list[str]
    expected_outcome: str


class ProfileRecommendations(BaseModel):
    immediate: list[RecommendationItem] = []
    short_term: list[RecommendationItem] = []
    long_term: list[RecommendationItem] = []


class TraitTrend(BaseModel):
    """Percentile history of one trait, oldest first, current last."""

    percentiles: list[int]
    change: int
    change_from_previous: int
    direction: str


class HistoryComparison(BaseModel):
    n_assessments: int
    trends: dict[Trait, TraitTrend]
