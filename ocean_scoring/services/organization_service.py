"""
OCEAN Scoring Engine — Organizational and team projections.

All inputs are raw 1-5 ``TraitScores``.

* ``build_profile`` — collective traits with emergence factors, diversity
  (population SD), culture type, emergent properties and health metrics.
* ``analyze_team_composition`` — mean traits, role fit, team dynamics and
  the profile of an ideal next hire.
* ``executive_org_fit`` — alignment plus complementary fit of one executive
  against an organization profile.
* ``succession_plan`` — ideal successor profile and development paths.
"""

from __future__ import annotations

import math
import statistics
from typing import Mapping, Optional, Sequence

import structlog

from ocean_scoring.exceptions import EmptyAggregationInputError, InvalidWeightsError
from ocean_scoring.schemas.executive import (
    ExecutiveOrgFit,
    OrganizationProfile,
    SuccessionPlan,
    TeamCompositionAnalysis,
)
from ocean_scoring.schemas.traits import Trait, TraitScores
from ocean_scoring.services.percentile_service import round_half_up

logger = structlog.get_logger("ocean.organization_service")

O, C, E, A, N = (
    Trait.OPENNESS,
    Trait.CONSCIENTIOUSNESS,
    Trait.EXTRAVERSION,
    Trait.AGREEABLENESS,
    Trait.NEUROTICISM,
)


def _scores(o: float, c: float, e: float, a: float, n: float) -> TraitScores:
    return TraitScores(
        openness=o, conscientiousness=c, extraversion=e, agreeableness=a, neuroticism=n
    )


class OrganizationService:
    """Collective, team and succession analysis over raw trait profiles."""

    HIGH_TRAIT: float = 3.5

    # Culture targets on a 0-1 scale; collective traits are rescaled before
    # comparison.  Ties keep the earlier entry.
    CULTURE_PROFILES: dict[str, TraitScores] = {
        "innovation": _scores(0.90, 0.50, 0.70, 0.55, 0.30),
        "performance": _scores(0.55, 0.90, 0.65, 0.45, 0.40),
        "collaborative": _scores(0.55, 0.60, 0.70, 0.85, 0.35),
        "adaptive": _scores(0.80, 0.60, 0.60, 0.65, 0.30),
    }

    ROLE_PROFILES: dict[str, TraitScores] = {
        "leader": _scores(3.5, 4.0, 4.0, 3.5, 2.0),
        "analyst": _scores(3.5, 4.5, 2.5, 3.0, 2.5),
        "creative": _scores(4.5, 3.0, 3.5, 3.5, 3.0),
    }
    DEFAULT_ROLE: str = "leader"

    DEVELOPMENT_PATHS: dict[Trait, list[str]] = {
        O: [
            "Cross-functional project leadership",
            "Innovation workshop facilitation",
            "Strategic partnership development",
            "Emerging technology exploration",
        ],
        C: [
            "Process improvement initiatives",
            "Quality management certification",
            "Project management leadership",
            "Operational excellence programs",
        ],
        E: [
            "Public speaking engagements",
            "Network leadership roles",
            "Team building facilitation",
            "Executive coaching practice",
        ],
        A: [
            "Conflict resolution training",
            "Collaborative leadership programs",
            "Mentoring relationships",
            "Cross-cultural team experiences",
        ],
        N: [
            "Stress management coaching",
            "Mindfulness practice",
            "Crisis simulation training",
            "Executive resilience programs",
        ],
    }

    FIT_THRESHOLD: float = 0.6
    DEFAULT_FUTURE_NEED: float = 3.5
    CRITICAL_GAP: float = 1.5
    MONTHS_PER_POINT: int = 12

    # ══════════════════════════════════════════════════════════════════════
    # 1. Organization profile
    # ══════════════════════════════════════════════════════════════════════

    def build_profile(
        self,
        profiles: Sequence[TraitScores],
        interaction_matrix: Optional[Sequence[Sequence[float]]] = None,
    ) -> OrganizationProfile:
        """Collective organizational profile.

        Parameters
        ----------
        profiles:
            Member raw trait scores.
        interaction_matrix:
            Optional n x n interaction strengths.  Row sums give each
            member's degree centrality, used as the averaging weight.
            Uniform weights when omitted.

        Raises
        ------
        EmptyAggregationInputError
            If ``profiles`` is empty.
        InvalidWeightsError
            If the matrix shape is wrong or its entries sum to zero.
        """
        if not profiles:
            raise EmptyAggregationInputError("member profiles")

        weights = self.centrality_weights(interaction_matrix, len(profiles))
        diversity = self.trait_diversity(profiles)
        collective = self.collective_traits(profiles, weights)
        culture = self.culture_type(collective)

        emergent = {
            "collective_intelligence": (collective[O] * 0.4 + diversity[O] * 0.3 + collective[C] * 0.3) / 5 * 100,
            "team_cohesion": (collective[A] * 0.5 + (5 - diversity[A]) * 0.3 + collective[E] * 0.2) / 5 * 100,
            "adaptive_capacity": (collective[O] * 0.4 + diversity[E] * 0.3 + (5 - collective[N]) * 0.3) / 5 * 100,
            "execution_capability": (collective[C] * 0.5 + (5 - diversity[C]) * 0.3 + (5 - collective[N]) * 0.2) / 5 * 100,
        }
        health = {
            "psychological_safety": (collective[A] * 0.4 + (5 - collective[N]) * 0.35 + collective[O] * 0.25) / 5 * 100,
            "innovation_climate": (collective[O] * 0.5 + collective[E] * 0.3 + collective[A] * 0.2) / 5 * 100,
            "resilience": ((5 - collective[N]) * 0.45 + collective[O] * 0.30 + collective[C] * 0.25) / 5 * 100,
            "performance_culture": (collective[C] * 0.45 + collective[E] * 0.30 + (5 - collective[N]) * 0.25) / 5 * 100,
        }

        logger.info("organization.profile", members=len(profiles), culture_type=culture)
        return OrganizationProfile(
            member_count=len(profiles),
            collective_traits=collective,
            trait_diversity=diversity,
            culture_type=culture,
            emergent_properties=emergent,
            health_metrics=health,
        )

    @staticmethod
    def centrality_weights(
        matrix: Optional[Sequence[Sequence[float]]], n: int
    ) -> list[float]:
        if matrix is None:
            return [1.0 / n] * n
        if len(matrix) != n or any(len(row) != n for row in matrix):
            raise InvalidWeightsError(f"Interaction matrix must be {n}x{n}")
        centrality = [math.fsum(row) for row in matrix]
        total = math.fsum(centrality)
        if total <= 0:
            raise InvalidWeightsError("Interaction matrix must have a positive total")
        return [c / total for c in centrality]

    def collective_traits(
        self, profiles: Sequence[TraitScores], weights: Sequence[float]
    ) -> TraitScores:
        n = len(profiles)
        collective: dict[Trait, float] = {}
        for trait in Trait:
            values = [p[trait] for p in profiles]
            mean = math.fsum(v * w for v, w in zip(values, weights))
            sd = statistics.pstdev(values)
            share_high = sum(1 for v in values if v > self.HIGH_TRAIT) / n

            if trait is O:
                factor = 1.1 + sd * 0.2
            elif trait is C:
                factor = 1.0 + (1 - sd / 2) * 0.15
            elif trait is E:
                factor = 1.0 + share_high * 0.25
            elif trait is A:
                factor = 1.15 if mean > self.HIGH_TRAIT else 0.95
            else:
                factor = 1.0 + share_high * 0.3
            collective[trait] = min(mean * factor, 5.0)
        return TraitScores.from_mapping(collective)

    @staticmethod
    def trait_diversity(profiles: Sequence[TraitScores]) -> TraitScores:
        return TraitScores.from_mapping(
            {t: statistics.pstdev(p[t] for p in profiles) for t in Trait}
        )

    def culture_type(self, collective: TraitScores) -> str:
        """Closest culture profile by L1 distance on the 0-1 scale."""
        rescaled = {t: (v - 1.0) / 4.0 for t, v in collective.items()}
        best, best_distance = None, math.inf
        for name, target in self.CULTURE_PROFILES.items():
            distance = math.fsum(abs(rescaled[t] - target[t]) for t in Trait)
            if distance < best_distance:
                best, best_distance = name, distance
        return best

    # ══════════════════════════════════════════════════════════════════════
    # 2. Team composition
    # ══════════════════════════════════════════════════════════════════════

    def analyze_team_composition(
        self,
        profiles: Sequence[TraitScores],
        role_assignments: Optional[Mapping[int, str]] = None,
    ) -> TeamCompositionAnalysis:
        """Team dynamics, role fit and ideal next hire.

        ``role_assignments`` maps a member index to a role name; unknown
        roles are compared against the leader profile.  Fits accumulate per
        role.
        """
        if not profiles:
            raise EmptyAggregationInputError("team profiles")

        mean = TraitScores.from_mapping(
            {t: statistics.fmean(p[t] for p in profiles) for t in Trait}
        )
        diversity = self.trait_diversity(profiles)

        role_fit: dict[str, float] = {}
        for index, role in (role_assignments or {}).items():
            member = profiles[index]
            ideal = self.ROLE_PROFILES.get(role, self.ROLE_PROFILES[self.DEFAULT_ROLE])
            fit = math.fsum((5 - abs(member[t] - ideal[t])) / 5 for t in Trait)
            role_fit[role] = role_fit.get(role, 0.0) + fit / 5

        dynamics = {
            "collaboration_potential": (mean[A] * 0.4 + mean[E] * 0.3 + (1 - diversity[A] / 5) * 0.3) * 20,
            "innovation_capacity": (mean[O] * 0.5 + diversity[O] * 0.3 + mean[E] * 0.2) * 20,
            "execution_reliability": (mean[C] * 0.5 + (1 - diversity[C] / 5) * 0.3 + (5 - mean[N]) * 0.2) * 20,
            "conflict_risk": (diversity[A] * 0.4 + mean[N] * 0.3 + (5 - mean[A]) * 0.3) * 20,
        }

        return TeamCompositionAnalysis(
            mean_traits=mean,
            trait_diversity=diversity,
            role_fit_scores=role_fit,
            dynamic_predictions=dynamics,
            optimal_additions=self.optimal_additions(mean, diversity),
        )

    @staticmethod
    def optimal_additions(mean: TraitScores, diversity: TraitScores) -> TraitScores:
        ideal = {O: 3.5, C: 3.5, E: 3.5, A: 3.5, N: 2.5}
        if mean[O] < 3.0:
            ideal[O] = 4.5
        if mean[C] < 3.5:
            ideal[C] = 4.5
        if mean[E] < 3.0:
            ideal[E] = 4.0
        if mean[A] < 3.5:
            ideal[A] = 4.0
        if mean[N] > 3.5:
            ideal[N] = 2.0
        # Low spread calls for a contrasting profile.
        if diversity[O] < 0.8:
            ideal[O] = 5.0
        if diversity[E] < 1.0:
            ideal[E] = 1.0
        return TraitScores.from_mapping(ideal)

    # ══════════════════════════════════════════════════════════════════════
    # 3. Executive / organization fit
    # ══════════════════════════════════════════════════════════════════════

    def executive_org_fit(self, executive: TraitScores, org: TraitScores) -> ExecutiveOrgFit:
        alignment = {t: 1 - abs(executive[t] - org[t]) / 5 for t in Trait}

        gap_fill = 0.0
        if org[O] < 3.0 and executive[O] > 4.0:
            gap_fill += 0.25
        if org[C] < 3.5 and executive[C] > 4.0:
            gap_fill += 0.25
        if org[E] < 3.0 and executive[E] > 4.0:
            gap_fill += 0.25
        if org[N] > 3.5 and executive[N] < 2.5:
            gap_fill += 0.25
        gap_fill = min(gap_fill, 1.0)

        diversity = min(
            sum(0.2 for t in Trait if 1.0 < abs(executive[t] - org[t]) < 2.5), 1.0
        )
        balance = 0.8 if self._balance(executive) > self._balance(org) else 0.5

        overall = (
            statistics.fmean(alignment.values()) * 0.6
            + statistics.fmean([gap_fill, diversity, balance]) * 0.4
        )

        recommendations: list[str] = []
        for trait, fit in alignment.items():
            if fit >= self.FIT_THRESHOLD:
                continue
            if executive[trait] > org[trait]:
                recommendations.append(
                    f"High {trait.value} may clash with organizational culture. "
                    "Focus on gradual culture shift or adjust leadership style."
                )
            else:
                recommendations.append(
                    f"Lower {trait.value} than organization norm. "
                    f"Develop {trait.value}-related competencies or leverage team strengths."
                )
        if gap_fill > 0.6:
            recommendations.append(
                "Strong potential to fill organizational capability gaps. "
                "Leverage unique strengths to drive positive change."
            )
        if diversity > 0.7:
            recommendations.append(
                "Valuable diversity of perspective. "
                "Use different viewpoint to challenge groupthink and drive innovation."
            )
        if balance > 0.7:
            recommendations.append(
                "Well-balanced profile can stabilize organizational extremes. "
                "Act as a moderating influence in decision-making."
            )

        return ExecutiveOrgFit(
            trait_alignment=alignment,
            leadership_gap_fill=gap_fill,
            diversity_contribution=diversity,
            balance_potential=balance,
            overall_fit_score=overall,
            recommendations=recommendations,
        )

    @staticmethod
    def _balance(profile: TraitScores) -> float:
        return 1 - statistics.pstdev(profile.values()) / 2.5

    # ══════════════════════════════════════════════════════════════════════
    # 4. Succession planning
    # ══════════════════════════════════════════════════════════════════════

    def succession_plan(
        self,
        current: TraitScores,
        org: TraitScores,
        future_needs: Optional[Mapping[Trait | str, float]] = None,
    ) -> SuccessionPlan:
        """Ideal successor profile.

        ideal = org x 0.3 + future x 0.4 + continuity x 0.2 + improvement x 0.1
        where continuity regresses the incumbent toward the mean and
        improvement nudges each trait in its desirable direction.
        """
        needs = {Trait.parse(k): v for k, v in (future_needs or {}).items()}

        ideal: dict[Trait, float] = {}
        for trait in Trait:
            continuity = current[trait] * 0.7 + 1.05
            if trait is N:
                improvement = max(current[trait] - 0.5, 1.0)
            elif trait is A:
                improvement = 3.5
            else:
                improvement = min(current[trait] + 0.5, 5.0)
            ideal[trait] = (
                org[trait] * 0.3
                + (needs.get(trait) or self.DEFAULT_FUTURE_NEED) * 0.4
                + continuity * 0.2
                + improvement * 0.1
            )

        critical = [t for t, need in needs.items() if abs(need - current[t]) > self.CRITICAL_GAP]
        max_gap = max(abs(ideal[t] - current[t]) for t in Trait)

        return SuccessionPlan(
            ideal_profile=TraitScores.from_mapping(ideal),
            critical_traits=critical,
            development_paths={t: list(paths) for t, paths in self.DEVELOPMENT_PATHS.items()},
            timeline_months=round_half_up(max_gap * self.MONTHS_PER_POINT),
        )
