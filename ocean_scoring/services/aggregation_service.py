"""
OCEAN Scoring Engine — Multi-source aggregation.

Combines several complete score sets (repeat administrations, 360 raters)
into one.  Raw trait scores are weight-averaged; percentiles and stanines
are always recomputed from the combined raw scores, never averaged.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Sequence

import structlog

from ocean_scoring.config import get_settings
from ocean_scoring.exceptions import EmptyAggregationInputError, InvalidWeightsError
from ocean_scoring.schemas.scoring import OceanScoreDetails
from ocean_scoring.schemas.traits import Trait, TraitScores
from ocean_scoring.services.scoring_service import OceanScoringService

logger = structlog.get_logger("ocean.aggregation_service")


class RaterPerspective(str, Enum):
    SELF = "self"
    PEER = "peer"
    MANAGER = "manager"
    DIRECT_REPORT = "direct_report"


class MultiSourceAggregator:
    """Weighted combination of ``OceanScoreDetails``."""

    def __init__(
        self,
        scoring: OceanScoringService | None = None,
        perspective_weights: dict[str, float] | None = None,
    ) -> None:
        self.scoring = scoring or OceanScoringService()
        self.perspective_weights = (
            perspective_weights
            if perspective_weights is not None
            else dict(get_settings().RATER_PERSPECTIVE_WEIGHTS)
        )

    def aggregate(
        self,
        score_sets: Sequence[OceanScoreDetails],
        weights: Sequence[float] | None = None,
    ) -> OceanScoreDetails:
        """Combine score sets into one.

        Parameters
        ----------
        score_sets:
            At least one complete score set.
        weights:
            One non-negative weight per score set.  Uniform when omitted.

        Returns
        -------
        OceanScoreDetails
            Combined raw scores with freshly computed percentiles and
            stanines.  ``facets`` is ``None``.

        Raises
        ------
        EmptyAggregationInputError
            If ``score_sets`` is empty.
        InvalidWeightsError
            If the weights do not match the score sets, are not finite, or
            sum to zero.
        """
        if not score_sets:
            raise EmptyAggregationInputError("score sets")

        if weights is None:
            weights = [1.0] * len(score_sets)
        if len(weights) != len(score_sets):
            raise InvalidWeightsError(
                f"Expected {len(score_sets)} weights, got {len(weights)}"
            )
        if not all(math.isfinite(w) for w in weights):
            raise InvalidWeightsError("Aggregation weights must be finite")
        if any(w < 0 for w in weights):
            raise InvalidWeightsError("Aggregation weights must be non-negative")
        try:
            total = math.fsum(weights)
        except OverflowError as exc:
            raise InvalidWeightsError("Aggregation weights must sum to a finite value") from exc
        if total <= 0:
            raise InvalidWeightsError("Aggregation weights must sum to a positive value")

        combined = {
            trait.value: math.fsum(
                s.raw[trait] * (w / total) for s, w in zip(score_sets, weights)
            )
            for trait in Trait
        }
        logger.info(
            "aggregation.complete",
            n_sources=len(score_sets),
            combined_raw=combined,
        )
        return self.scoring.details_from_raw(TraitScores(**combined))

    def aggregate_raters(
        self,
        ratings: Sequence[tuple[RaterPerspective | str, OceanScoreDetails]],
    ) -> OceanScoreDetails:
        """Aggregate 360 ratings weighted by rater perspective.

        Unknown perspectives get weight 1.0.
        """
        if not ratings:
            raise EmptyAggregationInputError("rater score sets")
        weights = []
        for perspective, _ in ratings:
            key = perspective.value if isinstance(perspective, RaterPerspective) else perspective
            weights.append(self.perspective_weights.get(key, 1.0))
        return self.aggregate([details for _, details in ratings], weights)
