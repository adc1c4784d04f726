"""Dark-side risk model outputs."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from ocean_scoring.schemas.traits import Trait, TraitScores


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def weight(self) -> int:
        return _RISK_WEIGHTS[self]


_RISK_WEIGHTS: dict[RiskLevel, int] = {
    RiskLevel.LOW: 1,
    RiskLevel.MODERATE: 2,
    RiskLevel.HIGH: 3,
    RiskLevel.CRITICAL: 4,
}


class ManifestationType(str, Enum):
    HIGH_EXTREME = "high_extreme"
    LOW_EXTREME = "low_extreme"
    WARNING = "warning"
    NONE = "none"

    @property
    def is_extreme(self) -> bool:
        return self in (ManifestationType.HIGH_EXTREME, ManifestationType.LOW_EXTREME)


class TraitRisk(BaseModel):
    model_config = ConfigDict(frozen=True)

    risk_level: RiskLevel
    manifestation_type: ManifestationType
    manifestation_name: str | None = None
    primary_concerns: list[str] = []
    impact_areas: list[str] = []


class DarkSideRiskProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_risk: RiskLevel
    trait_risks: dict[Trait, TraitRisk]
    stress_level: float
    stress_amplification: float
    compensatory_behaviors: list[str] = []


class StressResponseAssessment(BaseModel):
    current_stress_level: float
    stressors_identified: list[str]
    adaptive_capacity: float
    maladaptive_patterns: list[str]
    recovery_factors: list[str]
    team_impact: str  # positive / neutral / negative / toxic


class ObservedBehavior(BaseModel):
    frequency: str
    severity: str
    trend: str
    examples: list[str]


class TeamImpactEstimate(BaseModel):
    team_morale: float
    productivity: float
    turnover_risk: float
    stakeholder_confidence: float


class BehavioralIndicatorReport(BaseModel):
    observed_behaviors: dict[Trait, ObservedBehavior]
    self_awareness_gap: float
    impact_on_others: TeamImpactEstimate


class ImmediateAction(BaseModel):
    action: str
    priority: str  # urgent / high / medium
    timeframe: str
    responsibility: list[str]


class DevelopmentGoal(BaseModel):
    trait: Trait
    target_behavior: str
    methods: list[str]
    timeline: str
    success_metrics: list[str]


class SupportStructures(BaseModel):
    coaching: list[str] = []
    mentoring: list[str] = []
    training: list[str] = []
    systemic_changes: list[str] = []


class MonitoringPlan(BaseModel):
    indicators: list[str]
    frequency: str
    reviewers: list[str]
    escalation_triggers: list[str]


class InterventionPlan(BaseModel):
    immediate_actions: list[ImmediateAction]
    development_goals: list[DevelopmentGoal]
    support_structures: SupportStructures
    monitoring_plan: MonitoringPlan


class DarkSideAssessment(BaseModel):
    trait_scores: TraitScores
    dark_side_risk: DarkSideRiskProfile
    stress_response: StressResponseAssessment
    behavioral_indicators: BehavioralIndicatorReport
    intervention_plan: InterventionPlan
