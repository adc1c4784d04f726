"""Executive and organizational projection models."""

from __future__ import annotations

from pydantic import BaseModel

from ocean_scoring.schemas.traits import Trait, TraitScores


class ExecutiveStressResponse(BaseModel):
    resilience_score: float
    recovery_speed: str  # rapid / moderate / slow
    team_impact: str  # stabilizing / energizing / calming / variable
    coping_strategies: list[str]


class ExecutiveProfile(BaseModel):
    """Leadership projections from a role-reweighted trait profile.

    ``traits`` and ``emotional_stability`` are on a 0-100 scale; leadership
    style shares sum to 100.
    """

    traits: TraitScores
    emotional_stability: float
    leadership_styles: dict[str, float]
    influence_tactics: dict[str, float]
    team_predictions: dict[str, float]
    stress_response: ExecutiveStressResponse


class OrganizationProfile(BaseModel):
    member_count: int
    collective_traits: TraitScores
    trait_diversity: TraitScores
    culture_type: str
    emergent_properties: dict[str, float]
    health_metrics: dict[str, float]


class TeamCompositionAnalysis(BaseModel):
    mean_traits: TraitScores
    trait_diversity: TraitScores
    role_fit_scores: dict[str, float]
    dynamic_predictions: dict[str, float]
    optimal_additions: TraitScores


class ExecutiveOrgFit(BaseModel):
    trait_alignment: dict[Trait, float]
    leadership_gap_fill: float
    diversity_contribution: float
    balance_potential: float
    overall_fit_score: float
    recommendations: list[str]


class SuccessionPlan(BaseModel):
    ideal_profile: TraitScores
    critical_traits: list[Trait]
    development_paths: dict[Trait, list[str]]
    timeline_months: int
