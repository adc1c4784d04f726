"""
OCEAN Scoring Engine — Executive leadership projection.

Reweights raw trait scores for the executive role and projects them onto
leadership styles, influence tactics, team outcomes and a stress response:

  weighted_t          = raw_t x EXECUTIVE_WEIGHTS[t]
  emotional_stability = (5 - weighted_N) x EXECUTIVE_WEIGHTS[N]

Reported traits and emotional stability use (x - 1) / 4 x 100, clamped to
0-100.  Leadership style shares are normalized to sum to 100.
"""

from __future__ import annotations

import math
from typing import Mapping, Optional

import structlog

from ocean_scoring.schemas.executive import ExecutiveProfile, ExecutiveStressResponse
from ocean_scoring.schemas.traits import Trait, TraitScores
from ocean_scoring.services.percentile_service import clamp

logger = structlog.get_logger("ocean.executive_service")

O, C, E, A, N = (
    Trait.OPENNESS,
    Trait.CONSCIENTIOUSNESS,
    Trait.EXTRAVERSION,
    Trait.AGREEABLENESS,
    Trait.NEUROTICISM,
)
# Coefficient key for emotional stability alongside the trait keys.
ES = "emotional_stability"


def to_hundred(score: float) -> float:
    """1-5 scale to 0-100, clamped."""
    return clamp((score - 1.0) / 4.0 * 100.0, 0.0, 100.0)


class ExecutiveProfileService:
    """Executive leadership profile from raw trait scores."""

    EXECUTIVE_WEIGHTS: dict[Trait, float] = {
        O: 1.2,
        C: 1.15,
        E: 1.25,
        A: 1.0,
        N: 1.3,
    }

    LEADERSHIP_STYLES: dict[str, dict[Trait | str, float]] = {
        "transformational": {O: 0.35, E: 0.35, ES: 0.30},
        "transactional": {C: 0.50, E: 0.20, A: 0.30},
        "servant": {C: 0.30, A: 0.45, ES: 0.25},
        "authentic": {O: 0.30, A: 0.35, ES: 0.35},
        "adaptive": {O: 0.40, E: 0.30, ES: 0.30},
    }

    # A negative weight scores the inverse (5 - trait).
    INFLUENCE_TACTICS: dict[str, dict[Trait, float]] = {
        "inspirational_appeals": {E: 0.9, O: 0.7, A: 0.55},
        "rational_persuasion": {C: 0.85, O: 0.55},
        "consultation": {A: 0.9, E: 0.65},
        "ingratiation": {A: 0.75, E: 0.6},
        "exchange": {C: 0.6, E: 0.5},
        "personal_appeals": {E: 0.8, A: 0.7},
        "coalition": {A: 0.85, E: 0.75},
        "legitimating": {C: 0.8, A: 0.4},
        "pressure": {E: 0.7, C: 0.65, A: -0.4},
    }

    TEAM_OUTCOMES: dict[str, dict[Trait | str, float]] = {
        "engagement": {E: 0.30, A: 0.35, ES: 0.35},
        "innovation": {O: 0.50, E: 0.25, ES: 0.25},
        "performance": {C: 0.45, E: 0.30, ES: 0.25},
        "cohesion": {E: 0.25, A: 0.40, ES: 0.35},
    }

    COPING_THRESHOLD: float = 3.5
    COPING_STRATEGIES: list[tuple[Trait | str, str]] = [
        (C, "Structured problem-solving"),
        (E, "Social support seeking"),
        (O, "Creative reframing"),
        (ES, "Emotional regulation"),
        (A, "Collaborative solutions"),
    ]

    def build_profile(
        self,
        scores: TraitScores,
        trait_weights: Optional[Mapping[Trait, float]] = None,
    ) -> ExecutiveProfile:
        """Project raw 1-5 trait scores onto the executive model.

        Parameters
        ----------
        scores:
            Raw trait scores.
        trait_weights:
            Role reweighting; defaults to ``EXECUTIVE_WEIGHTS``.  Missing
            traits keep weight 1.0.

        Returns
        -------
        ExecutiveProfile
        """
        weights = dict(trait_weights) if trait_weights is not None else self.EXECUTIVE_WEIGHTS
        weighted = {t: s * weights.get(t, 1.0) for t, s in scores.items()}
        stability = (5.0 - weighted[N]) * weights.get(N, 1.0)
        values: dict[Trait | str, float] = {**weighted, ES: stability}

        styles = {name: self._linear(values, coeffs) for name, coeffs in self.LEADERSHIP_STYLES.items()}
        total = math.fsum(styles.values())
        if total:
            styles = {name: v / total * 100.0 for name, v in styles.items()}

        profile = ExecutiveProfile(
            traits=TraitScores.from_mapping({t: to_hundred(v) for t, v in weighted.items()}),
            emotional_stability=to_hundred(stability),
            leadership_styles=styles,
            influence_tactics={
                name: self._tactic(weighted, mapping)
                for name, mapping in self.INFLUENCE_TACTICS.items()
            },
            team_predictions={
                name: self._linear(values, coeffs) / 5.0 * 100.0
                for name, coeffs in self.TEAM_OUTCOMES.items()
            },
            stress_response=self.stress_response(weighted, stability),
        )
        logger.info(
            "executive.profile",
            primary_style=max(styles, key=styles.get),
            resilience=round(profile.stress_response.resilience_score, 1),
        )
        return profile

    def stress_response(
        self, weighted: Mapping[Trait, float], stability: float
    ) -> ExecutiveStressResponse:
        resilience = (
            stability * 0.45 + weighted[C] * 0.30 + weighted[O] * 0.15 + weighted[E] * 0.10
        ) / 5.0 * 100.0

        if resilience > 70:
            recovery = "rapid"
        elif resilience > 40:
            recovery = "moderate"
        else:
            recovery = "slow"

        if stability > 3.5 and weighted[A] > 3.5:
            impact = "stabilizing"
        elif weighted[E] > 4 and stability > 3:
            impact = "energizing"
        elif weighted[A] > 4 and weighted[C] > 3.5:
            impact = "calming"
        else:
            impact = "variable"

        values: dict[Trait | str, float] = {**weighted, ES: stability}
        coping = [
            strategy
            for key, strategy in self.COPING_STRATEGIES
            if values[key] > self.COPING_THRESHOLD
        ]
        return ExecutiveStressResponse(
            resilience_score=resilience,
            recovery_speed=recovery,
            team_impact=impact,
            coping_strategies=coping,
        )

    # ── Helpers ─────────────────────────────────────────────────────

    @staticmethod
    def _linear(values: Mapping[Trait | str, float], coeffs: Mapping[Trait | str, float]) -> float:
        return math.fsum(values[k] * w for k, w in coeffs.items())

    @staticmethod
    def _tactic(weighted: Mapping[Trait, float], mapping: Mapping[Trait, float]) -> float:
        score = 0.0
        weight_sum = 0.0
        for trait, w in mapping.items():
            value = (5.0 - weighted[trait]) if w < 0 else weighted[trait]
            score += value * abs(w)
            weight_sum += abs(w)
        return score / weight_sum * 20.0 if weight_sum else 0.0
