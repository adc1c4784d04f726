"""
OCEAN Scoring Engine — Trait/facet mapping resolver.

Resolves the ``QuestionTraitMapping`` list for an assessment:

  1. Predefined table for the assessment type, returned verbatim.
  2. Otherwise one generated mapping per question, from the question's
     domain -> trait correlation table.
     A question tagged with a ``pillar`` in its metadata blends the pillar
     and domain tables (0.4 / 0.6).
  3. Unknown domains fall back to a uniform 0.2 weight on all five traits
     (explicit degraded mode, logged as a warning).

Reverse coding of generated mappings is decided by a swappable
``ReverseScoreDetector``; the default is a regex heuristic over the
question wording.
"""

from __future__ import annotations

import re
from typing import Iterable, Protocol, runtime_checkable

import structlog

from ocean_scoring.schemas.scoring import QuestionSpec, QuestionTraitMapping
from ocean_scoring.schemas.traits import Facet, Trait

logger = structlog.get_logger("ocean.mapping_service")

O, C, E, A, N = (
    Trait.OPENNESS,
    Trait.CONSCIENTIOUSNESS,
    Trait.EXTRAVERSION,
    Trait.AGREEABLENESS,
    Trait.NEUROTICISM,
)


# ══════════════════════════════════════════════════════════════════════════
# Static tables
# ══════════════════════════════════════════════════════════════════════════

DOMAIN_TRAIT_CORRELATIONS: dict[str, dict[Trait, float]] = {
    # individual
    "self-awareness": {O: 0.7, N: -0.3},
    "adaptability": {O: 0.8, E: 0.4},
    "collaboration": {A: 0.9, E: 0.6},
    "innovation": {O: 1.0},
    "execution": {C: 1.0},
    # executive
    "strategic-thinking": {O: 0.7, C: 0.6},
    "decision-making": {C: 0.8, N: -0.4},
    "team-building": {A: 0.7, E: 0.8},
    "influence": {E: 0.9, A: 0.4},
    "vision": {O: 0.9, E: 0.5},
    # organizational
    "culture": {A: 0.7, O: 0.5},
    "processes": {C: 1.0},
    "talent": {A: 0.6, O: 0.7},
    "strategy": {O: 0.8, C: 0.6},
}

PILLAR_TRAIT_CORRELATIONS: dict[str, dict[Trait, float]] = {
    "sustainable": {C: 0.7, N: -0.6},
    "performance": {C: 0.9, E: 0.5},
    "potential": {O: 0.8, E: 0.6},
}

PREDEFINED_MAPPINGS: dict[str, list[QuestionTraitMapping]] = {
    "individual": [
        QuestionTraitMapping(
            question_id="ind_001",
            traits={O: 0.6, N: -0.3},
            facets={
                Facet.O3_FEELINGS: 0.8,
                Facet.O5_IDEAS: 0.4,
                Facet.N4_SELF_CONSCIOUSNESS: -0.4,
            },
        ),
        QuestionTraitMapping(
            question_id="ind_002",
            traits={C: 0.9},
            facets={
                Facet.C4_ACHIEVEMENT_STRIVING: 1.0,
                Facet.C1_COMPETENCE: 0.8,
                Facet.C5_SELF_DISCIPLINE: 0.7,
            },
        ),
        QuestionTraitMapping(
            question_id="ind_003",
            traits={O: 0.8, E: 0.4},
            facets={
                Facet.O4_ACTIONS: 0.9,
                Facet.O5_IDEAS: 0.7,
                Facet.E4_ACTIVITY: 0.5,
                Facet.E5_EXCITEMENT_SEEKING: 0.3,
            },
        ),
    ],
    "executive": [
        QuestionTraitMapping(
            question_id="exec_001",
            traits={O: 0.7, C: 0.6},
            facets={
                Facet.O5_IDEAS: 0.9,
                Facet.O6_VALUES: 0.5,
                Facet.C6_DELIBERATION: 0.8,
                Facet.C1_COMPETENCE: 0.5,
            },
        ),
        QuestionTraitMapping(
            question_id="exec_002",
            traits={C: 0.8, N: -0.4},
            facets={
                Facet.C6_DELIBERATION: 0.9,
                Facet.C2_ORDER: 0.6,
                Facet.N5_IMPULSIVENESS: -0.6,
                Facet.N1_ANXIETY: -0.3,
            },
        ),
    ],
    "organizational": [
        QuestionTraitMapping(
            question_id="org_001",
            traits={A: 0.7, O: 0.5},
            facets={
                Facet.A1_TRUST: 0.8,
                Facet.A4_COMPLIANCE: 0.6,
                Facet.O6_VALUES: 0.7,
            },
        ),
        QuestionTraitMapping(
            question_id="org_002",
            traits={C: 0.9},
            facets={
                Facet.C2_ORDER: 1.0,
                Facet.C3_DUTIFULNESS: 0.7,
            },
        ),
    ],
}


# ══════════════════════════════════════════════════════════════════════════
# Reverse-score detection
# ══════════════════════════════════════════════════════════════════════════


@runtime_checkable
class ReverseScoreDetector(Protocol):
    def is_reverse_scored(self, question_text: str) -> bool:
        ...


class RegexReverseScoreDetector:
    """Flags wording that describes the low pole of a trait.

    Matching is a case-insensitive substring search, so ``"unstable"``
    triggers the ``stable`` family.  Known false positive; the heuristic is
    best-effort.
    """

    PATTERNS: list[str] = [
        r"calm|relaxed|stable|confident|secure",          # low N
        r"traditional|conventional|routine|practical",    # low O
        r"quiet|reserved|solitary|independent",           # low E
        r"competitive|assertive|challenging|critical",    # low A
        r"flexible|spontaneous|adaptable|improvis",       # low C
    ]

    def __init__(self, patterns: Iterable[str] | None = None) -> None:
        self._compiled = [
            re.compile(p, re.IGNORECASE) for p in (patterns or self.PATTERNS)
        ]

    def is_reverse_scored(self, question_text: str) -> bool:
        return any(p.search(question_text or "") for p in self._compiled)


# ══════════════════════════════════════════════════════════════════════════
# Resolver
# ══════════════════════════════════════════════════════════════════════════


class MappingResolver:
    """Resolve or generate question -> trait/facet mappings."""

    FALLBACK_WEIGHT: float = 0.2
    PILLAR_SHARE: float = 0.4
    DOMAIN_SHARE: float = 0.6

    def __init__(
        self,
        reverse_detector: ReverseScoreDetector | None = None,
        predefined: dict[str, list[QuestionTraitMapping]] | None = None,
        domain_table: dict[str, dict[Trait, float]] | None = None,
    ) -> None:
        self.reverse_detector = reverse_detector or RegexReverseScoreDetector()
        self.predefined = PREDEFINED_MAPPINGS if predefined is None else predefined
        self.domain_table = DOMAIN_TRAIT_CORRELATIONS if domain_table is None else domain_table

    def resolve(
        self,
        assessment_type: str | None,
        questions: Iterable[QuestionSpec] | None = None,
    ) -> list[QuestionTraitMapping]:
        """Return the mapping table for ``assessment_type``.

        Parameters
        ----------
        assessment_type:
            ``individual`` / ``executive`` / ``organizational`` select a
            predefined table.  Any other value (or ``None``) generates
            mappings from ``questions``.
        questions:
            Question metadata used for generation.

        Returns
        -------
        list[QuestionTraitMapping]
        """
        if assessment_type and assessment_type in self.predefined:
            logger.debug("mapping.predefined", assessment_type=assessment_type)
            return list(self.predefined[assessment_type])
        return self.generate(questions or [])

    def generate(self, questions: Iterable[QuestionSpec]) -> list[QuestionTraitMapping]:
        mappings = [self.generate_one(q) for q in questions]
        logger.debug("mapping.generated", n_mappings=len(mappings))
        return mappings

    def generate_one(self, question: QuestionSpec) -> QuestionTraitMapping:
        domain = question.domain.strip().lower()
        weights = self.domain_table.get(domain)
        if weights is None:
            logger.warning(
                "mapping.unknown_domain_fallback",
                question_id=question.id,
                domain=question.domain,
                weight=self.FALLBACK_WEIGHT,
            )
            return QuestionTraitMapping(
                question_id=question.id,
                traits={t: self.FALLBACK_WEIGHT for t in Trait},
                reverse=False,
            )
        pillar = str(question.metadata.get("pillar") or "").strip().lower()
        if pillar in PILLAR_TRAIT_CORRELATIONS:
            blended = {t: self.pillar_domain_trait_weight(pillar, domain, t) for t in Trait}
            weights = {t: w for t, w in blended.items() if w}
        return QuestionTraitMapping(
            question_id=question.id,
            traits=dict(weights),
            reverse=self.reverse_detector.is_reverse_scored(question.question_text),
        )

    def pillar_domain_trait_weight(self, pillar: str, domain: str, trait: Trait) -> float:
        """Blend pillar and domain correlations: 0.4 x pillar + 0.6 x domain."""
        pillar_w = PILLAR_TRAIT_CORRELATIONS.get(pillar, {}).get(trait, 0.0)
        domain_w = self.domain_table.get(domain, {}).get(trait, 0.0)
        return pillar_w * self.PILLAR_SHARE + domain_w * self.DOMAIN_SHARE

    @staticmethod
    def adjust_trait_score_by_confidence(score: float, confidence_pct: float) -> float:
        """Shrink a trait score toward neutral 3 as confidence (0-100) falls.

        At 100 % confidence the score is unchanged; at 0 % its distance from
        3 is halved.
        """
        factor = 0.5 + (confidence_pct / 100.0) * 0.5
        return 3.0 + (score - 3.0) * factor
