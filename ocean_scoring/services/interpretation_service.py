"""
OCEAN Scoring Engine — Profile interpretation.

Turns stanine bands into narrative output:

* ``interpret`` — strength / challenge statements with recommendations for
  every trait at stanine >= 7 or <= 3.  Neuroticism is inverted: a low
  stanine is a strength and a high stanine a challenge.
* ``build_profile`` — dominant traits, level descriptions, best-fitting
  archetype and a one-paragraph summary.
* ``compare_to_benchmark`` — percentile differences against a benchmark.
* ``insights`` / ``recommendations`` — strength and development insights,
  trait pairings with untapped potential, and the immediate, short-term and
  long-term actions that follow from them.
* ``compare_to_history`` — percentile trends across earlier administrations.
"""

from __future__ import annotations

from typing import Mapping, Sequence

import structlog

from ocean_scoring.schemas.interpretation import (
    BenchmarkComparison,
    HistoryComparison,
    InsightItem,
    ProfileInsights,
    ProfileInterpretation,
    ProfileRecommendations,
    ProfileReport,
    RecommendationItem,
    TraitTrend,
)
from ocean_scoring.schemas.scoring import OceanScoreDetails
from ocean_scoring.schemas.traits import Trait

logger = structlog.get_logger("ocean.interpretation_service")

O, C, E, A, N = (
    Trait.OPENNESS,
    Trait.CONSCIENTIOUSNESS,
    Trait.EXTRAVERSION,
    Trait.AGREEABLENESS,
    Trait.NEUROTICISM,
)


class InterpretationService:
    """Stanine-driven narrative interpretation."""

    HIGH_STANINE: int = 7
    LOW_STANINE: int = 3

    # (trait, "high" | "low") -> (statement, recommendation)
    STATEMENTS: dict[tuple[Trait, str], tuple[str, str]] = {
        (O, "high"): (
            "Highly creative and innovative with strong intellectual curiosity",
            "Leverage creativity in strategic roles and innovation projects",
        ),
        (O, "low"): (
            "May resist change and new approaches",
            "Develop comfort with ambiguity through structured experimentation",
        ),
        (C, "high"): (
            "Exceptional reliability and attention to detail",
            "Take on leadership roles requiring systematic execution",
        ),
        (C, "low"): (
            "May struggle with organization and follow-through",
            "Implement structured planning tools and accountability systems",
        ),
        (E, "high"): (
            "Natural leader with strong communication and networking abilities",
            "Excel in roles requiring public presence and team motivation",
        ),
        (E, "low"): (
            "May avoid necessary networking and visibility",
            "Practice structured networking and prepare for social interactions",
        ),
        (A, "high"): (
            "Excellent team player with strong collaborative skills",
            "Serve as mediator and team harmony builder",
        ),
        (A, "low"): (
            "May come across as overly critical or competitive",
            "Develop empathy and diplomatic communication skills",
        ),
        (N, "high"): (
            "May experience stress and emotional volatility",
            "Develop stress management and emotional regulation techniques",
        ),
        (N, "low"): (
            "Exceptional emotional stability and resilience",
            "Take on high-pressure roles requiring calm under stress",
        ),
    }

    TRAIT_DESCRIPTIONS: dict[Trait, dict[str, str]] = {
        O: {
            "high": "Highly creative, imaginative, and open to new experiences. Enjoys intellectual stimulation and abstract thinking.",
            "moderate": "Balanced between tradition and innovation. Open to new ideas while maintaining practical considerations.",
            "low": "Practical, traditional, and focused on concrete reality. Prefers proven methods and established routines.",
        },
        C: {
            "high": "Highly organized, disciplined, and goal-oriented. Exceptional attention to detail and strong work ethic.",
            "moderate": "Balanced approach to organization and flexibility. Generally reliable while maintaining adaptability.",
            "low": "Flexible, spontaneous, and adaptable. May prefer emergent strategies over detailed planning.",
        },
        E: {
            "high": "Highly sociable, energetic, and assertive. Thrives in social situations and seeks external stimulation.",
            "moderate": "Balanced social energy. Comfortable in both social and solitary situations.",
            "low": "Reserved, reflective, and independent. Prefers smaller groups and deeper connections.",
        },
        A: {
            "high": "Highly cooperative, trusting, and considerate. Strong focus on harmony and helping others.",
            "moderate": "Balanced between cooperation and assertiveness. Can collaborate while maintaining boundaries.",
            "low": "Direct, competitive, and skeptical. Values honesty and achievement over harmony.",
        },
        N: {
            "high": "Emotionally sensitive and reactive. May experience stress and mood fluctuations more intensely.",
            "moderate": "Balanced emotional responses. Experiences normal range of emotions without extreme reactions.",
            "low": "Emotionally stable and resilient. Maintains composure under pressure and stress.",
        },
    }

    # name, expected levels, description
    ARCHETYPES: list[tuple[str, dict[Trait, str], str]] = [
        (
            "Innovator",
            {O: "high", C: "moderate", E: "moderate"},
            "Creative problem-solver who brings fresh perspectives and novel solutions",
        ),
        (
            "Executor",
            {C: "high", N: "low", A: "moderate"},
            "Reliable implementer who delivers consistent results with strong attention to detail",
        ),
        (
            "Leader",
            {E: "high", C: "high", N: "low"},
            "Natural leader who inspires others while maintaining focus on goals and results",
        ),
        (
            "Collaborator",
            {A: "high", E: "moderate", O: "moderate"},
            "Team-oriented individual who builds bridges and fosters cooperation",
        ),
        (
            "Analyst",
            {C: "high", O: "high", E: "low"},
            "Deep thinker who excels at complex problem-solving and detailed analysis",
        ),
        (
            "Stabilizer",
            {N: "low", C: "high", A: "high"},
            "Calm presence who provides stability and support during challenging times",
        ),
    ]
    ARCHETYPE_MIN_MATCH: int = 4

    STRENGTH_INSIGHTS: dict[Trait, str] = {
        O: "Exceptional creativity and innovation capability",
        C: "Outstanding reliability and execution excellence",
        E: "Natural leadership presence and communication skills",
        A: "Exceptional team player and relationship builder",
    }
    DEVELOPMENT_INSIGHTS: dict[Trait, str] = {
        O: "May benefit from exposure to diverse perspectives and creative exercises",
        C: "Could improve through structured planning and organization tools",
        E: "May benefit from communication training and networking practice",
        A: "Could develop through empathy exercises and collaboration skills",
    }
    # (trait at moderate stanine, partner trait, minimum partner stanine, insight)
    HIDDEN_POTENTIAL: list[tuple[Trait, Trait, int, str]] = [
        (O, C, 6, "Potential for innovative yet practical solutions"),
        (E, A, 6, "Potential for influential leadership with team support"),
    ]

    # keyed by insight trait name; emotional_stability stands in for N
    IMMEDIATE_ACTIONS: dict[str, str] = {
        "openness": "Attend a workshop on creative thinking or innovation",
        "conscientiousness": "Implement a task management system this week",
        "extraversion": "Schedule three networking conversations this month",
        "agreeableness": "Practice active listening in all meetings this week",
        "emotional_stability": "Start daily mindfulness or meditation practice",
    }
    SHORT_TERM_ACTIONS: dict[str, str] = {
        "openness": "Enroll in a course outside your expertise area",
        "conscientiousness": "Complete a project management certification",
        "extraversion": "Join a public speaking group or professional association",
        "agreeableness": "Participate in team collaboration training",
        "emotional_stability": "Work with a coach on stress management techniques",
    }
    LONG_TERM_ACTIONS: dict[str, str] = {
        "openness": "Seek roles in innovation, strategy, or R&D",
        "conscientiousness": "Target operational excellence or quality assurance leadership",
        "extraversion": "Pursue people leadership or business development roles",
        "agreeableness": "Excel in team leadership or organizational development",
        "emotional_stability": "Lead high-pressure initiatives or crisis management",
    }

    # percentile points below which a change counts as stable
    TREND_STABLE_DELTA: int = 5

    # ══════════════════════════════════════════════════════════════════════
    # interpret
    # ══════════════════════════════════════════════════════════════════════

    def interpret(self, details: OceanScoreDetails) -> ProfileInterpretation:
        """Strengths, challenges and recommendations from stanine bands."""
        strengths: list[str] = []
        challenges: list[str] = []
        recommendations: list[str] = []

        for trait, stanine in details.stanine.items():
            direction = self.level(stanine)
            if direction == "moderate":
                continue
            statement, recommendation = self.STATEMENTS[(trait, direction)]
            favourable = (direction == "high") != (trait is N)
            (strengths if favourable else challenges).append(statement)
            recommendations.append(recommendation)

        return ProfileInterpretation(
            strengths=strengths,
            challenges=challenges,
            recommendations=recommendations,
        )

    # ══════════════════════════════════════════════════════════════════════
    # build_profile
    # ══════════════════════════════════════════════════════════════════════

    def build_profile(self, details: OceanScoreDetails) -> ProfileReport:
        levels = {trait: self.level(stanine) for trait, stanine in details.stanine.items()}
        dominant = self.dominant_traits(details)
        archetype = self.match_archetype(levels)

        summary = ""
        if archetype is not None:
            summary = f"{archetype[2]}. "
        if dominant:
            names = [d[:1].upper() + d[1:].replace("_", " ", 1) for d in dominant]
            summary += f"Key strengths include {', '.join(names)}."
        summary = summary.strip() or "Balanced personality profile across all dimensions."

        logger.debug(
            "interpretation.profile",
            archetype=archetype[0] if archetype else None,
            dominant=dominant,
        )
        return ProfileReport(
            summary=summary,
            dominant_traits=dominant,
            trait_levels=levels,
            trait_descriptions={t: self.TRAIT_DESCRIPTIONS[t][lvl] for t, lvl in levels.items()},
            archetype=archetype[0] if archetype else None,
        )

    def dominant_traits(self, details: OceanScoreDetails) -> list[str]:
        """Traits at stanine >= 7, plus emotional stability when N <= 3."""
        dominant: list[str] = []
        for trait, stanine in details.stanine.items():
            if trait is N:
                if stanine <= self.LOW_STANINE:
                    dominant.append("emotional_stability")
            elif stanine >= self.HIGH_STANINE:
                dominant.append(trait.value)
        return dominant

    def match_archetype(
        self, levels: Mapping[Trait, str]
    ) -> tuple[str, dict[Trait, str], str] | None:
        """Best archetype by level agreement (2 exact, 1 adjacent); None below 4."""
        best = None
        best_score = 0
        for archetype in self.ARCHETYPES:
            score = 0
            for trait, expected in archetype[1].items():
                actual = levels[trait]
                if actual == expected:
                    score += 2
                elif (
                    (expected == "high" and actual == "moderate")
                    or (expected == "moderate" and actual != "low")
                    or (expected == "low" and actual == "moderate")
                ):
                    score += 1
            if score > best_score:
                best, best_score = archetype, score
        return best if best_score >= self.ARCHETYPE_MIN_MATCH else None

    def compare_to_benchmark(
        self,
        details: OceanScoreDetails,
        benchmarks: Mapping[Trait, float] | None = None,
    ) -> dict[Trait, BenchmarkComparison]:
        """Percentile minus benchmark per trait (missing benchmark -> 50)."""
        benchmarks = benchmarks or {}
        comparisons: dict[Trait, BenchmarkComparison] = {}
        for trait, percentile in details.percentile.items():
            benchmark = benchmarks.get(trait) or 50.0
            diff = percentile - benchmark
            comparisons[trait] = BenchmarkComparison(
                percentile=percentile,
                benchmark=benchmark,
                difference=diff,
                interpretation=self._describe_difference(diff),
            )
        return comparisons

    # ══════════════════════════════════════════════════════════════════════
    # insights / recommendations
    # ══════════════════════════════════════════════════════════════════════

    def insights(self, details: OceanScoreDetails) -> ProfileInsights:
        """Strength, development and hidden-potential insights.

        Strengths are traits at stanine >= 7 (neuroticism: <= 3, reported as
        ``emotional_stability``); development areas mirror that at the other
        end.  A development area has high impact at stanine 1 and medium
        otherwise, except that high neuroticism is always high impact.
        Hidden potential looks for moderate traits (stanine 4-6) backed by a
        supporting trait.
        """
        strengths: list[InsightItem] = []
        development: list[InsightItem] = []
        hidden: list[InsightItem] = []

        for trait, stanine in details.stanine.items():
            percentile = details.percentile[trait]
            if trait is N:
                if stanine <= self.LOW_STANINE:
                    strengths.append(InsightItem(
                        trait="emotional_stability",
                        insight="Exceptional emotional resilience and stability under pressure",
                        evidence=["Low neuroticism indicates strong stress management"],
                        impact="high",
                    ))
                elif stanine >= self.HIGH_STANINE:
                    development.append(InsightItem(
                        trait="emotional_stability",
                        insight="May benefit from stress management and emotional regulation techniques",
                        evidence=["High neuroticism suggests emotional sensitivity"],
                        impact="high",
                    ))
            elif stanine >= self.HIGH_STANINE:
                strengths.append(InsightItem(
                    trait=trait.value,
                    insight=self.STRENGTH_INSIGHTS[trait],
                    evidence=[f"{trait.value} score in top {100 - percentile}%"],
                    impact="high",
                ))
            elif stanine <= self.LOW_STANINE:
                development.append(InsightItem(
                    trait=trait.value,
                    insight=self.DEVELOPMENT_INSIGHTS[trait],
                    evidence=[f"{trait.value} score in bottom {percentile}%"],
                    impact="high" if stanine == 1 else "medium",
                ))

        for trait, partner, minimum, insight in self.HIDDEN_POTENTIAL:
            stanine = details.stanine[trait]
            if self.LOW_STANINE < stanine < self.HIGH_STANINE and details.stanine[partner] >= minimum:
                hidden.append(InsightItem(
                    trait=trait.value,
                    insight=insight,
                    evidence=["Moderate score with room for development"],
                    impact="medium",
                ))

        return ProfileInsights(
            strengths=strengths,
            development_areas=development,
            hidden_potential=hidden,
        )

    def recommendations(
        self,
        details: OceanScoreDetails,
        insights: ProfileInsights | None = None,
    ) -> ProfileRecommendations:
        """Action plan derived from ``insights``.

        High-impact development areas get an immediate action, medium-impact
        ones a short-term plan, and every strength a long-term role move.
        """
        if insights is None:
            insights = self.insights(details)

        immediate = [
            RecommendationItem(
                action=self.IMMEDIATE_ACTIONS.get(area.trait, f"Focus on improving {area.trait}"),
                rationale=f"Address {area.trait} to improve overall effectiveness",
                target_traits=[area.trait],
                expected_outcome=f"Improved {area.trait} leading to better performance",
            )
            for area in insights.development_areas
            if area.impact == "high"
        ]
        short_term = [
            RecommendationItem(
                action=self.SHORT_TERM_ACTIONS.get(
                    area.trait, f"Develop {area.trait} through structured learning"
                ),
                rationale=f"Develop {area.trait} for career growth",
                target_traits=[area.trait],
                expected_outcome=f"Enhanced {area.trait} capabilities",
            )
            for area in insights.development_areas
            if area.impact == "medium"
        ]
        long_term = [
            RecommendationItem(
                action=self.LONG_TERM_ACTIONS.get(
                    strength.trait, f"Leverage {strength.trait} in leadership roles"
                ),
                rationale=f"Leverage {strength.trait} strength for leadership roles",
                target_traits=[strength.trait],
                expected_outcome=f"Maximize impact through {strength.trait} excellence",
            )
            for strength in insights.strengths
        ]

        logger.debug(
            "interpretation.recommendations",
            n_immediate=len(immediate),
            n_short_term=len(short_term),
            n_long_term=len(long_term),
        )
        return ProfileRecommendations(
            immediate=immediate,
            short_term=short_term,
            long_term=long_term,
        )

    # ══════════════════════════════════════════════════════════════════════
    # compare_to_history
    # ══════════════════════════════════════════════════════════════════════

    def compare_to_history(
        self,
        current: OceanScoreDetails,
        history: Sequence[OceanScoreDetails],
    ) -> HistoryComparison:
        """Percentile trend per trait across earlier score sets.

        Parameters
        ----------
        current:
            The latest score set.
        history:
            Earlier score sets, oldest first.  May be empty.

        Returns
        -------
        HistoryComparison
            ``change`` is current minus the oldest percentile and
            ``change_from_previous`` current minus the most recent earlier
            one.  ``direction`` is ``increased`` / ``decreased`` once the
            overall change reaches ``TREND_STABLE_DELTA`` points, otherwise
            ``stable``.  Neuroticism is reported as measured, not inverted.
        """
        series = [*history, current]
        trends: dict[Trait, TraitTrend] = {}
        for trait in Trait:
            percentiles = [s.percentile[trait] for s in series]
            change = percentiles[-1] - percentiles[0]
            if change >= self.TREND_STABLE_DELTA:
                direction = "increased"
            elif change <= -self.TREND_STABLE_DELTA:
                direction = "decreased"
            else:
                direction = "stable"
            trends[trait] = TraitTrend(
                percentiles=percentiles,
                change=change,
                change_from_previous=percentiles[-1] - percentiles[-2] if history else 0,
                direction=direction,
            )
        return HistoryComparison(n_assessments=len(series), trends=trends)

    # ── Helpers ─────────────────────────────────────────────────────

    def level(self, stanine: int) -> str:
        if stanine >= self.HIGH_STANINE:
            return "high"
        if stanine <= self.LOW_STANINE:
            return "low"
        return "moderate"

    @staticmethod
    def _describe_difference(diff: float) -> str:
        if diff > 20:
            return "Significantly above average"
        if diff > 10:
            return "Above average"
        if diff > -10:
            return "Average"
        if diff > -20:
            return "Below average"
        return "Significantly below average"
