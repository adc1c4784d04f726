"""
OCEAN Scoring Engine — Core input and output models.

Inputs (``RawResponse``, ``QuestionTraitMapping``, ``NodeCorrelation``) are
produced by the assessment-taking flow and read-only to the engine.
``OceanScoreDetails`` is the principal output; it is frozen once built.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ocean_scoring.schemas.emotional import EmotionalRegulationProfile
from ocean_scoring.schemas.executive import ExecutiveProfile
from ocean_scoring.schemas.facets import CoverageMetrics, FacetScore
from ocean_scoring.schemas.interpretation import (
    ProfileInsights,
    ProfileInterpretation,
    ProfileRecommendations,
    ProfileReport,
)
from ocean_scoring.schemas.risk import DarkSideRiskProfile
from ocean_scoring.schemas.traits import Facet, Trait, TraitBands, TraitScores


# ══════════════════════════════════════════════════════════════════════════
# Inputs
# ══════════════════════════════════════════════════════════════════════════


class RawResponse(BaseModel):
    """One submitted answer.

    ``answer`` may be a number, a label (``"agree"``, ``"often"``, ``"c"``)
    or an object carrying ``value`` / ``score``.  ``node_id`` links the
    answer to facet correlations; when absent the question id is used.
    """

    model_config = ConfigDict(frozen=True)

    question_id: str
    answer: Any = None
    node_id: Optional[str] = None
    prompt_type: str = "likert"
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    response_time_ms: Optional[float] = Field(default=None, ge=0.0)

    @property
    def effective_node_id(self) -> str:
        return self.node_id or self.question_id


class QuestionTraitMapping(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: str
    traits: dict[Trait, float] = {}
    facets: dict[Facet, float] = {}
    reverse: bool = False


class QuestionSpec(BaseModel):
    """Question metadata used to generate a mapping when no table exists."""

    id: str
    domain: str = ""
    question_text: str = ""
    question_type: str = "likert"
    metadata: dict[str, Any] = {}


class MappingType(str, Enum):
    DIRECT = "direct"
    INDIRECT = "indirect"
    INVERSE = "inverse"


class NodeCorrelation(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_id: str
    facet_code: Facet
    correlation: float = Field(ge=-1.0, le=1.0)
    mapping_type: MappingType = MappingType.DIRECT
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)


class TraitNorm(BaseModel):
    model_config = ConfigDict(frozen=True)

    mean: float
    sd: float = Field(gt=0.0)


# ══════════════════════════════════════════════════════════════════════════
# Outputs
# ══════════════════════════════════════════════════════════════════════════


class TraitAggregate(BaseModel):
    """Intermediate result of the trait aggregator."""

    model_config = ConfigDict(frozen=True)

    raw: TraitScores
    facets: dict[Facet, float] = {}
    trait_counts: dict[Trait, int] = {}


class OceanScoreDetails(BaseModel):
    """Raw, percentile and stanine scores for all five traits.

    ``facets`` holds facet means from the trait path (signed, weight-scaled)
    or facet-engine scores (-3..+3) when the facet path ran; it is ``None``
    when no facet data exists.
    """

    model_config = ConfigDict(frozen=True)

    raw: TraitScores
    percentile: TraitBands
    stanine: TraitBands
    facets: Optional[dict[Facet, float]] = None

    @model_validator(mode="after")
    def _check_ranges(self) -> "OceanScoreDetails":
        for trait, value in self.raw.items():
            if not 1.0 <= value <= 5.0:
                raise ValueError(f"raw {trait.value} must be within [1, 5], got {value}")
        for trait, value in self.percentile.items():
            if not 1 <= value <= 99:
                raise ValueError(f"percentile {trait.value} must be within [1, 99], got {value}")
        for trait, value in self.stanine.items():
            if not 1 <= value <= 9:
                raise ValueError(f"stanine {trait.value} must be within [1, 9], got {value}")
        return self


class EnrichedOceanScore(BaseModel):
    """``OceanScoreDetails`` plus every derived sub-object the pipeline built.

    ``confidence_level`` is the mean response confidence on a 0-100 scale;
    ``confidence_adjusted`` is set when it was low enough to pull the raw
    scores toward neutral.  Pillar and domain scores are plain answer means
    (1-5) keyed by the question metadata.
    """

    details: OceanScoreDetails
    interpretation: Optional[ProfileInterpretation] = None
    report: Optional[ProfileReport] = None
    facet_scores: Optional[dict[Facet, FacetScore]] = None
    coverage: Optional[CoverageMetrics] = None
    emotional_regulation: Optional[EmotionalRegulationProfile] = None
    executive_profile: Optional[ExecutiveProfile] = None
    dark_side_risks: Optional[DarkSideRiskProfile] = None
    insights: Optional[ProfileInsights] = None
    recommendations: Optional[ProfileRecommendations] = None
    pillar_scores: dict[str, float] = {}
    domain_scores: dict[str, float] = {}
    confidence_level: float = 100.0
    confidence_adjusted: bool = False
