"""
OCEAN Scoring Engine — Trait score aggregation

Turns raw responses plus question mappings into raw trait scores:

  1. Normalize each mapped answer to 1-5 (reverse coding applied)
  2. Push ``normalized x weight`` into every trait / facet bucket the
     mapping gives a non-zero weight
  3. Reduce each trait bucket with a simple arithmetic mean; an empty
     bucket scores neutral 3.0
  4. Re-clamp trait means to [1, 5] before percentile conversion

The reduction in step 3 divides by item count, not by summed weight.  The
norm tables were calibrated against this behaviour, so it is kept even
though the facet engine divides by summed weight.
"""

from __future__ import annotations

import math
import statistics
from collections import defaultdict
from typing import Iterable

import structlog

from ocean_scoring.exceptions import NonFiniteScoreError
from ocean_scoring.schemas.scoring import (
    OceanScoreDetails,
    QuestionTraitMapping,
    RawResponse,
    TraitAggregate,
)
from ocean_scoring.schemas.traits import Facet, Trait, TraitScores
from ocean_scoring.services.normalizer_service import ResponseNormalizer
from ocean_scoring.services.percentile_service import PercentileService, clamp

logger = structlog.get_logger("ocean.scoring_service")


class OceanScoringService:
    """Aggregate responses into ``OceanScoreDetails``."""

    NEUTRAL_SCORE: float = 3.0
    SCALE_MIN: float = 1.0
    SCALE_MAX: float = 5.0

    def __init__(
        self,
        normalizer: ResponseNormalizer | None = None,
        percentiles: PercentileService | None = None,
    ) -> None:
        self.normalizer = normalizer or ResponseNormalizer()
        self.percentiles = percentiles or PercentileService()

    # ══════════════════════════════════════════════════════════════════════
    # 1. aggregate — raw trait and facet means
    # ══════════════════════════════════════════════════════════════════════

    def aggregate(
        self,
        responses: Iterable[RawResponse],
        mappings: Iterable[QuestionTraitMapping],
    ) -> TraitAggregate:
        """Compute raw trait and facet scores.

        Parameters
        ----------
        responses:
            Submitted answers.  Responses whose question has no mapping
            contribute nothing.
        mappings:
            Question -> weight mappings.  When a question id appears twice
            the first mapping wins.

        Returns
        -------
        TraitAggregate
            ``raw`` trait scores in [1, 5], facet means, and per-trait item
            counts.
        """
        by_question: dict[str, QuestionTraitMapping] = {}
        for mapping in mappings:
            by_question.setdefault(mapping.question_id, mapping)

        trait_buckets: dict[Trait, list[float]] = defaultdict(list)
        facet_buckets: dict[Facet, list[float]] = defaultdict(list)
        unmapped = 0

        for response in responses:
            mapping = by_question.get(response.question_id)
            if mapping is None:
                unmapped += 1
                continue

            value = self.normalizer.normalize(response.answer, mapping.reverse)

            for trait, weight in mapping.traits.items():
                if weight:
                    trait_buckets[trait].append(value * weight)
            for facet, weight in mapping.facets.items():
                if weight:
                    facet_buckets[facet].append(value * weight)

        if unmapped:
            logger.debug("scoring.unmapped_responses", n_unmapped=unmapped)

        raw = TraitScores(
            **{t.value: self._reduce_trait(trait_buckets.get(t, [])) for t in Trait}
        )
        facets = {f: statistics.fmean(vals) for f, vals in facet_buckets.items()}
        counts = {t: len(trait_buckets.get(t, [])) for t in Trait}
        return TraitAggregate(raw=raw, facets=facets, trait_counts=counts)

    # ══════════════════════════════════════════════════════════════════════
    # 2. score — aggregate + percentile / stanine
    # ══════════════════════════════════════════════════════════════════════

    def score(
        self,
        responses: Iterable[RawResponse],
        mappings: Iterable[QuestionTraitMapping],
    ) -> OceanScoreDetails:
        """Run aggregation then percentile and stanine conversion."""
        aggregate = self.aggregate(responses, mappings)
        details = self.details_from_raw(aggregate.raw, aggregate.facets or None)
        logger.info(
            "scoring.complete",
            raw=aggregate.raw.as_dict(),
            stanine=details.stanine.as_dict(),
            n_facets=len(aggregate.facets),
        )
        return details

    def details_from_raw(
        self,
        raw: TraitScores,
        facets: dict[Facet, float] | None = None,
    ) -> OceanScoreDetails:
        """Build ``OceanScoreDetails`` from raw scores, re-clamping to [1, 5].

        Raises ``NonFiniteScoreError`` for a NaN or infinite raw score; only
        finite values are clamped.
        """
        for trait, value in raw.items():
            if not math.isfinite(value):
                raise NonFiniteScoreError(trait.value, value)
        clamped = TraitScores(
            **{t.value: clamp(v, self.SCALE_MIN, self.SCALE_MAX) for t, v in raw.items()}
        )
        percentile, stanine = self.percentiles.convert(clamped)
        return OceanScoreDetails(
            raw=clamped,
            percentile=percentile,
            stanine=stanine,
            facets=facets,
        )

    # ── Helpers ─────────────────────────────────────────────────────

    def _reduce_trait(self, bucket: list[float]) -> float:
        if not bucket:
            return self.NEUTRAL_SCORE
        return clamp(statistics.fmean(bucket), self.SCALE_MIN, self.SCALE_MAX)
