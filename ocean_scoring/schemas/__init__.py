"""Pydantic models and closed enums shared by the scoring services."""

from ocean_scoring.schemas.traits import Facet, Trait, TraitBands, TraitScores
from ocean_scoring.schemas.scoring import (
    EnrichedOceanScore,
    MappingType,
    NodeCorrelation,
    OceanScoreDetails,
    QuestionSpec,
    QuestionTraitMapping,
    RawResponse,
    TraitAggregate,
    TraitNorm,
)
from ocean_scoring.schemas.facets import CoverageMetrics, FacetScore
from ocean_scoring.schemas.risk import (
    DarkSideRiskProfile,
    ManifestationType,
    RiskLevel,
    TraitRisk,
)

__all__ = [
    "Trait",
    "Facet",
    "TraitScores",
    "TraitBands",
    "MappingType",
    "NodeCorrelation",
    "QuestionSpec",
    "QuestionTraitMapping",
    "RawResponse",
    "TraitAggregate",
    "TraitNorm",
    "OceanScoreDetails",
    "EnrichedOceanScore",
    "FacetScore",
    "CoverageMetrics",
    "RiskLevel",
    "ManifestationType",
    "TraitRisk",
    "DarkSideRiskProfile",
]
