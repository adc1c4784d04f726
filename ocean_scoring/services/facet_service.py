"""
OCEAN Scoring Engine — Facet scoring engine

Scores the 30 facets from node-correlation mappings.  Per facet:

  1. For each response whose node maps to the facet, normalize the answer
     to -3..+3 by prompt type, negating it when the correlation is negative
  2. weight   = |correlation| x mapping confidence x tier modifier
     weighted = normalized x correlation x weight
  3. score      = clamp(sum(weighted) / sum(weight), -3, 3)
     confidence = min(1, sum(weight) / 10)
  4. percentile = round((score + 3) / 6 x 100), t_score = round(50 + 10 x score / 1.5)

A facet nothing maps to returns the no-coverage sentinel (score 0,
confidence 0, n_items 0).  Facet percentiles deliberately use this linear
conversion rather than the trait path's normal CDF.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Mapping
from numbers import Real
from typing import Any, Iterable, Sequence

import structlog

from ocean_scoring.config import get_settings
from ocean_scoring.schemas.facets import (
    CoverageMetrics,
    FacetScore,
    FacetValidation,
    NodeContribution,
)
from ocean_scoring.schemas.scoring import NodeCorrelation, RawResponse
from ocean_scoring.schemas.traits import Facet
from ocean_scoring.services.percentile_service import clamp, round_half_up

logger = structlog.get_logger("ocean.facet_service")


class FacetScoringEngine:
    """Tier-weighted facet scoring with confidence and coverage metrics."""

    SCORE_MIN: float = -3.0
    SCORE_MAX: float = 3.0
    CONFIDENCE_SATURATION_WEIGHT: float = 10.0
    T_SCORE_SD: float = 1.5

    COVERED_CONFIDENCE: float = 0.3
    WEAK_CONFIDENCE: float = 0.5
    CRITICAL_CONFIDENCE: float = 0.3
    POOR_COVERAGE_PCT: float = 70.0
    FAIR_COVERAGE_PCT: float = 85.0
    RUSHED_RESPONSE_MS: float = 2000.0

    CRITICAL_FACETS: list[Facet] = [
        Facet.O2_AESTHETICS,
        Facet.O6_VALUES,
        Facet.E2_GREGARIOUSNESS,
        Facet.E5_EXCITEMENT_SEEKING,
        Facet.A3_ALTRUISM,
        Facet.A4_COMPLIANCE,
        Facet.A6_TENDER_MINDEDNESS,
        Facet.N3_DEPRESSION,
    ]

    # prompt type aliases -> canonical normalization rule
    PROMPT_TYPES: dict[str, str] = {
        "likert": "likert",
        "true/false": "true_false",
        "true_false": "true_false",
        "multiple choice": "multiple_choice",
        "multiple_choice": "multiple_choice",
    }

    def __init__(self, tier_modifiers: dict[str, float] | None = None) -> None:
        self.tier_modifiers = (
            dict(tier_modifiers)
            if tier_modifiers is not None
            else dict(get_settings().FACET_TIER_MODIFIERS)
        )

    # ══════════════════════════════════════════════════════════════════════
    # 1. Scoring
    # ══════════════════════════════════════════════════════════════════════

    def score_all_facets(
        self,
        responses: Sequence[RawResponse],
        mappings: Iterable[NodeCorrelation],
        tier: str = "individual",
    ) -> dict[Facet, FacetScore]:
        """Score every facet; unmapped facets get the no-coverage sentinel."""
        by_facet: dict[Facet, list[NodeCorrelation]] = defaultdict(list)
        for mapping in mappings:
            by_facet[mapping.facet_code].append(mapping)

        scores = {
            facet: self.score_facet(responses, facet, by_facet.get(facet, []), tier)
            for facet in Facet
        }
        logger.info(
            "facets.scored",
            tier=tier,
            n_responses=len(responses),
            n_covered=sum(1 for s in scores.values() if s.n_items > 0),
        )
        return scores

    def score_facet(
        self,
        responses: Iterable[RawResponse],
        facet_code: Facet,
        mappings: Iterable[NodeCorrelation],
        tier: str = "individual",
    ) -> FacetScore:
        """Score a single facet.

        Parameters
        ----------
        responses:
            Submitted answers; each is matched to a mapping by node id.
        facet_code:
            Facet to score.  Mappings for other facets are ignored.
        mappings:
            Node correlations.  The first mapping for a node wins.
        tier:
            Assessment tier selecting the weight modifier (unknown -> 1.0).

        Returns
        -------
        FacetScore
            ``score`` is clamped to [-3, 3]; ``percentile`` and ``t_score`` are
            derived from the unclamped weighted mean, so an out-of-scale
            answer can push them past 100 and 70 respectively.
        """
        facet_code = Facet(facet_code)
        by_node: dict[str, NodeCorrelation] = {}
        for mapping in mappings:
            if mapping.facet_code is facet_code:
                by_node.setdefault(mapping.node_id, mapping)

        tier_modifier = self.tier_modifier(tier)
        weighted_scores: list[float] = []
        total_weight = 0.0

        for response in responses:
            mapping = by_node.get(response.effective_node_id)
            if mapping is None:
                continue

            value = self._numeric_answer(response.answer)
            if value is None:
                logger.debug(
                    "facets.unparseable_answer",
                    question_id=response.question_id,
                    facet=facet_code.value,
                )
                continue

            normalized = self.normalize_response(value, response.prompt_type, mapping.correlation)
            weight = abs(mapping.correlation) * mapping.confidence * tier_modifier
            weighted_scores.append(normalized * mapping.correlation * weight)
            total_weight += weight

        if total_weight <= 0 or not weighted_scores:
            return FacetScore.no_coverage()

        raw_score = math.fsum(weighted_scores) / total_weight
        return FacetScore(
            score=clamp(raw_score, self.SCORE_MIN, self.SCORE_MAX),
            confidence=min(1.0, total_weight / self.CONFIDENCE_SATURATION_WEIGHT),
            n_items=len(weighted_scores),
            raw_scores=weighted_scores,
            percentile=self.facet_percentile(raw_score),
            t_score=self.facet_t_score(raw_score),
        )

    def normalize_response(self, value: float, prompt_type: str, correlation: float) -> float:
        """Normalize to -3..+3 by prompt type; negative correlation reverses."""
        rule = self.PROMPT_TYPES.get((prompt_type or "").strip().lower())
        if rule == "likert":
            normalized = (value - 3.5) / 2.5
        elif rule == "true_false":
            # 1 = false, 2 = true
            normalized = 1.0 if value == 2 else -1.0
        else:
            normalized = clamp(value, self.SCORE_MIN, self.SCORE_MAX)

        if correlation < 0:
            normalized = -normalized
        return normalized

    def tier_modifier(self, tier: str) -> float:
        return self.tier_modifiers.get(tier, 1.0)

    @staticmethod
    def facet_percentile(score: float) -> int:
        return round_half_up((score + 3.0) / 6.0 * 100.0)

    def facet_t_score(self, score: float) -> int:
        return round_half_up(50.0 + 10.0 * score / self.T_SCORE_SD)

    # ══════════════════════════════════════════════════════════════════════
    # 2. Coverage and validation
    # ══════════════════════════════════════════════════════════════════════

    def coverage_metrics(self, scores: Mapping[Facet, FacetScore]) -> CoverageMetrics:
        covered = sum(
            1 for s in scores.values()
            if s.confidence > self.COVERED_CONFIDENCE and s.n_items > 0
        )
        missing: list[Facet] = []
        weak: list[Facet] = []
        for facet, score in scores.items():
            if score.confidence == 0.0 or score.n_items == 0:
                missing.append(facet)
            elif score.confidence < self.WEAK_CONFIDENCE:
                weak.append(facet)

        return CoverageMetrics(
            coverage_percentage=covered / len(Facet) * 100.0,
            confidence_scores={f: s.confidence for f, s in scores.items()},
            missing_facets=missing,
            weak_coverage_facets=weak,
        )

    def validate_facet_scores(
        self,
        scores: Mapping[Facet, FacetScore],
        responses: Sequence[RawResponse],
    ) -> FacetValidation:
        """Judge the quality of a facet score set.

        Flags critical facets below 0.3 confidence, grades overall coverage
        (good / fair below 85 % / poor below 70 %) and flags assessments whose
        mean response time is under two seconds.
        """
        critical = {
            facet: (scores[facet].confidence if facet in scores else 0.0)
            for facet in self.CRITICAL_FACETS
        }
        low_critical = [f for f, c in critical.items() if c < self.CRITICAL_CONFIDENCE]
        issues: list[str] = []
        if low_critical:
            issues.append(
                "Missing coverage for critical facets: "
                + ", ".join(f.value for f in low_critical)
            )

        coverage = self.coverage_metrics(scores).coverage_percentage
        quality = "good"
        if coverage < self.POOR_COVERAGE_PCT:
            quality = "poor"
            issues.append(f"Low overall coverage: {coverage:.1f}%")
        elif coverage < self.FAIR_COVERAGE_PCT:
            quality = "fair"

        timings = [r.response_time_ms for r in responses if r.response_time_ms is not None]
        if timings and math.fsum(timings) / len(timings) < self.RUSHED_RESPONSE_MS:
            issues.append("Responses may be too quick - possible rushed assessment")

        if issues:
            logger.warning("facets.validation_issues", quality=quality, issues=issues)

        return FacetValidation(
            overall_quality=quality,
            coverage_percentage=coverage,
            critical_facet_confidence=critical,
            low_confidence_critical_facets=low_critical,
            issues=issues,
        )

    def node_contributions(
        self,
        responses: Iterable[RawResponse],
        mappings: Sequence[NodeCorrelation],
        scores: Mapping[Facet, FacetScore],
    ) -> dict[str, NodeContribution]:
        """Summarise how much each answered node fed the facets it maps to."""
        counts: dict[str, int] = defaultdict(int)
        for response in responses:
            counts[response.effective_node_id] += 1

        result: dict[str, NodeContribution] = {}
        for node_id, n in counts.items():
            contributions: dict[Facet, float] = {}
            for mapping in mappings:
                if mapping.node_id != node_id:
                    continue
                score = scores.get(mapping.facet_code)
                if score is not None and score.confidence > 0:
                    contributions[mapping.facet_code] = abs(mapping.correlation) * mapping.confidence
            result[node_id] = NodeContribution(
                node_id=node_id,
                response_count=n,
                facet_contributions=contributions,
                total_contribution=math.fsum(contributions.values()),
            )
        return result

    # ── Helpers ─────────────────────────────────────────────────────

    @staticmethod
    def _numeric_answer(answer: Any) -> float | None:
        if isinstance(answer, Mapping):
            answer = answer.get("value", answer.get("score"))
        if isinstance(answer, bool) or not isinstance(answer, Real):
            return None
        value = float(answer)
        return None if math.isnan(value) else value
