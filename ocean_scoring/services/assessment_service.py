"""
OCEAN Scoring Engine — AssessmentScoringService: end-to-end pipeline

Runs every stage for one submitted assessment:

  1. **Mappings** — use the caller's table or resolve one by assessment
     type / question metadata.
  2. **Traits** — raw, percentile and stanine scores.  When mean response
     confidence is 80 % or lower the raw scores are pulled toward neutral
     and re-converted.
  3. **Facets** — only when node correlations are supplied.  The details'
     facet map then carries the facet-engine scores of covered facets.
  4. **Interpretation** — strengths, challenges, the profile report,
     insights and the action plan.
  5. **Emotional regulation** — spectrum from trait (and facet) percentiles.
  6. **Dark side** — stress-amplified risk profile.
  7. **Executive** — optional leadership projection.
  8. **Pillars / domains** — answer means grouped by question metadata.

Every stage logs with the bound ``assessment_id``.
"""

from __future__ import annotations

import statistics
from collections import defaultdict
from typing import Iterable, Optional, Sequence

import structlog

from ocean_scoring.schemas.scoring import (
    EnrichedOceanScore,
    NodeCorrelation,
    OceanScoreDetails,
    QuestionSpec,
    QuestionTraitMapping,
    RawResponse,
)
from ocean_scoring.schemas.traits import TraitScores
from ocean_scoring.services.dark_side_service import DarkSideService
from ocean_scoring.services.emotional_service import EmotionalRegulationService
from ocean_scoring.services.executive_service import ExecutiveProfileService
from ocean_scoring.services.facet_service import FacetScoringEngine
from ocean_scoring.services.interpretation_service import InterpretationService
from ocean_scoring.services.mapping_service import PILLAR_TRAIT_CORRELATIONS, MappingResolver
from ocean_scoring.services.scoring_service import OceanScoringService

logger = structlog.get_logger("ocean.assessment_service")


class AssessmentScoringService:
    """Compose the scoring services into one call.

    Every collaborator can be injected; defaults are built from settings.
    """

    # mean response confidence (0-100) at or below which raw scores shrink
    CONFIDENCE_ADJUSTMENT_THRESHOLD: float = 80.0

    def __init__(
        self,
        scoring: OceanScoringService | None = None,
        resolver: MappingResolver | None = None,
        facets: FacetScoringEngine | None = None,
        interpretation: InterpretationService | None = None,
        emotional: EmotionalRegulationService | None = None,
        dark_side: DarkSideService | None = None,
        executive: ExecutiveProfileService | None = None,
    ) -> None:
        self.scoring = scoring or OceanScoringService()
        self.resolver = resolver or MappingResolver()
        self.facets = facets or FacetScoringEngine()
        self.interpretation = interpretation or InterpretationService()
        self.emotional = emotional or EmotionalRegulationService()
        self.dark_side = dark_side or DarkSideService()
        self.executive = executive or ExecutiveProfileService()

    def score_assessment(
        self,
        responses: Sequence[RawResponse],
        mappings: Optional[Iterable[QuestionTraitMapping]] = None,
        assessment_type: Optional[str] = None,
        questions: Optional[Iterable[QuestionSpec]] = None,
        node_correlations: Optional[Iterable[NodeCorrelation]] = None,
        tier: str = "individual",
        stress_level: Optional[float] = None,
        include_executive: bool = False,
        observer_ratings: Optional[TraitScores] = None,
        assessment_id: Optional[str] = None,
    ) -> EnrichedOceanScore:
        """Score one assessment and derive every report.

        Parameters
        ----------
        responses:
            Submitted answers.  ``confidence`` (0-1) feeds the confidence level;
            answers without one count as fully confident.
        mappings:
            Explicit question -> trait mappings.  When omitted they are
            resolved from ``assessment_type`` and ``questions``.
        assessment_type:
            ``individual`` / ``executive`` / ``organizational`` or any other
            value to generate mappings from ``questions``.
        questions:
            Question metadata for mapping generation.  Also the source of pillar
            (``metadata["pillar"]``) and domain groupings.
        node_correlations:
            Node -> facet correlations.  Facet scoring is skipped without
            them.
        tier:
            Facet tier modifier key.
        stress_level:
            Stress (1-10) for the dark-side model; settings default when
            omitted.
        include_executive:
            Also build the executive leadership profile.
        observer_ratings:
            Optional observer trait scores for the dark-side model.
        assessment_id:
            Bound to every log line of this run.

        Returns
        -------
        EnrichedOceanScore

        Raises
        ------
        InvalidStressLevelError
            If ``stress_level`` is outside 1-10.
        """
        log = logger.bind(assessment_id=assessment_id, assessment_type=assessment_type)
        responses = list(responses)
        questions = list(questions) if questions is not None else None

        if mappings is None:
            mappings = self.resolver.resolve(assessment_type, questions)
        mappings = list(mappings)
        log.debug("assessment.mappings_ready", n_mappings=len(mappings))

        details = self.scoring.score(responses, mappings)
        confidence = self.overall_confidence(responses)
        adjusted = confidence <= self.CONFIDENCE_ADJUSTMENT_THRESHOLD
        if adjusted:
            details = self.adjust_for_confidence(details, confidence)
            log.info("assessment.confidence_adjusted", confidence_level=confidence)
        log.info("assessment.traits_scored", stanine=details.stanine.as_dict())

        facet_scores = None
        coverage = None
        if node_correlations is not None:
            facet_scores = self.facets.score_all_facets(responses, list(node_correlations), tier)
            coverage = self.facets.coverage_metrics(facet_scores)
            covered = {f: s.score for f, s in facet_scores.items() if s.n_items > 0}
            details = details.model_copy(update={"facets": covered or None})
            log.info(
                "assessment.facets_scored",
                tier=tier,
                coverage_percentage=coverage.coverage_percentage,
            )

        interpretation = self.interpretation.interpret(details)
        report = self.interpretation.build_profile(details)
        insights = self.interpretation.insights(details)
        recommendations = self.interpretation.recommendations(details, insights)
        emotional = self.emotional.build_profile(details, facet_scores)
        dark_side = self.dark_side.assess_risk(details.raw, stress_level, observer_ratings)
        log.info(
            "assessment.reports_built",
            archetype=report.archetype,
            emotional_profile=emotional.profile_type,
            dark_side_risk=dark_side.overall_risk.value,
        )

        executive = None
        if include_executive:
            executive = self.executive.build_profile(details.raw)
            log.info("assessment.executive_built")

        pillar_scores = self.pillar_scores(responses, questions or [])
        domain_scores = self.domain_scores(responses, questions or [])

        return EnrichedOceanScore(
            details=details,
            interpretation=interpretation,
            report=report,
            facet_scores=facet_scores,
            coverage=coverage,
            emotional_regulation=emotional,
            executive_profile=executive,
            dark_side_risks=dark_side,
            insights=insights,
            recommendations=recommendations,
            pillar_scores=pillar_scores,
            domain_scores=domain_scores,
            confidence_level=confidence,
            confidence_adjusted=adjusted,
        )

    # ── Helpers ─────────────────────────────────────────────────────

    @staticmethod
    def overall_confidence(responses: Iterable[RawResponse]) -> float:
        """Mean response confidence as a percentage; 100 with no responses."""
        levels = [
            100.0 if r.confidence is None else r.confidence * 100.0 for r in responses
        ]
        if not levels:
            return 100.0
        return statistics.fmean(levels)

    def adjust_for_confidence(
        self, details: OceanScoreDetails, confidence_pct: float
    ) -> OceanScoreDetails:
        """Shrink raw scores toward 3 and recompute percentiles and stanines."""
        adjusted = TraitScores(
            **{
                trait.value: MappingResolver.adjust_trait_score_by_confidence(value, confidence_pct)
                for trait, value in details.raw.items()
            }
        )
        return self.scoring.details_from_raw(adjusted, details.facets)

    def pillar_scores(
        self, responses: Iterable[RawResponse], questions: Iterable[QuestionSpec]
    ) -> dict[str, float]:
        """Mean normalized answer per pillar (sustainable / performance / potential)."""
        return self._group_means(
            responses,
            questions,
            lambda q: str(q.metadata.get("pillar") or "").strip().lower(),
            allowed=PILLAR_TRAIT_CORRELATIONS,
        )

    def domain_scores(
        self, responses: Iterable[RawResponse], questions: Iterable[QuestionSpec]
    ) -> dict[str, float]:
        """Mean normalized answer per question domain (field, then metadata)."""
        return self._group_means(
            responses,
            questions,
            lambda q: (q.domain or str(q.metadata.get("domain") or "")).strip().lower(),
        )

    def _group_means(self, responses, questions, key, allowed=None) -> dict[str, float]:
        by_id = {q.id: q for q in questions}
        buckets: dict[str, list[float]] = defaultdict(list)
        for response in responses:
            question = by_id.get(response.question_id)
            if question is None:
                continue
            group = key(question)
            if not group or (allowed is not None and group not in allowed):
                continue
            buckets[group].append(self.scoring.normalizer.normalize(response.answer))
        return {group: statistics.fmean(values) for group, values in buckets.items()}
