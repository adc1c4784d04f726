"""
OCEAN Scoring Engine — Dark-side risk model

Flags trait extremes that tend to derail behaviour and scales their risk by
self-reported stress (1-10):

  1. Classify each raw trait score: high_extreme (>= 4.5), low_extreme
     (<= 1.5), warning (>= 3.8) or none
  2. Extremes only: risk_score = |score - 3| x stress / 5, banded
     critical >= 2.0, high >= 1.5, moderate >= 1.0, else low
  3. Overall risk = mean of level weights {low 1, moderate 2, high 3,
     critical 4}, banded at 3.5 / 2.5 / 1.5
  4. stress_amplification = 1 + stress / 10 x 2 (reported, never fed back)

Stress-response, behavioural-indicator and intervention-plan reports are
deterministic lookups keyed by (trait, direction).
"""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass

import structlog

from ocean_scoring.config import get_settings
from ocean_scoring.exceptions import InvalidStressLevelError
from ocean_scoring.schemas.risk import (
    BehavioralIndicatorReport,
    DarkSideAssessment,
    DarkSideRiskProfile,
    DevelopmentGoal,
    ImmediateAction,
    InterventionPlan,
    ManifestationType,
    MonitoringPlan,
    ObservedBehavior,
    RiskLevel,
    StressResponseAssessment,
    SupportStructures,
    TeamImpactEstimate,
    TraitRisk,
)
from ocean_scoring.schemas.traits import Trait, TraitScores
from ocean_scoring.services.percentile_service import clamp

logger = structlog.get_logger("ocean.dark_side_service")

O, C, E, A, N = (
    Trait.OPENNESS,
    Trait.CONSCIENTIOUSNESS,
    Trait.EXTRAVERSION,
    Trait.AGREEABLENESS,
    Trait.NEUROTICISM,
)
HIGH, LOW = "high", "low"


@dataclass(frozen=True)
class Manifestation:
    name: str
    description: str
    behaviors: tuple[str, ...]
    stress_amplifiers: tuple[str, ...]
    impact_on_others: tuple[str, ...]
    compensatory_behaviors: tuple[str, ...]


@dataclass(frozen=True)
class StressPattern:
    triggers: tuple[str, ...]
    adaptive_response: str
    maladaptive_response: str
    recovery_factors: tuple[str, ...]
    warning_signals: tuple[str, ...]


# ══════════════════════════════════════════════════════════════════════════
# Lookup tables keyed by (trait, direction)
# ══════════════════════════════════════════════════════════════════════════

MANIFESTATIONS: dict[tuple[Trait, str], Manifestation] = {
    (O, HIGH): Manifestation(
        name="Chaotic Visionary",
        description="Unrealistic, impractical, scattered thinking",
        behaviors=(
            "Constantly pursuing new ideas without follow-through",
            'Dismissing practical constraints as "limiting"',
            "Creating confusion with too many initiatives",
            'Neglecting operational details for "big picture"',
            "Overwhelming teams with constant change",
        ),
        stress_amplifiers=(
            "Becomes increasingly erratic under pressure",
            'Abandons current projects for "better" ideas',
            "Creates chaos in attempt to find breakthrough solutions",
        ),
        impact_on_others=(
            "Team exhaustion from constant pivoting",
            "Loss of confidence in leadership direction",
            "Operational instability and missed deadlines",
            "Decreased morale from lack of closure",
        ),
        compensatory_behaviors=(
            "Over-intellectualizing to avoid practical decisions",
            "Using complexity to mask lack of focus",
            "Constant learning as avoidance of execution",
        ),
    ),
    (O, LOW): Manifestation(
        name="Rigid Traditionalist",
        description="Inflexible, closed-minded, change-resistant",
        behaviors=(
            "Automatically rejecting new ideas or approaches",
            "Insisting on traditional methods regardless of context",
            "Punishing innovation attempts",
            "Creating overly restrictive policies",
            "Micromanaging to prevent any deviation",
        ),
        stress_amplifiers=(
            "Becomes increasingly controlling when threatened",
            "Escalates resistance to necessary changes",
            "Creates toxic environment for creative thinking",
        ),
        impact_on_others=(
            "Stifled innovation and creative problem-solving",
            "Talented employees leaving for more dynamic environments",
            "Organizational stagnation and competitive decline",
            "Culture of fear around suggesting improvements",
        ),
        compensatory_behaviors=(
            "Claiming superior experience to justify inflexibility",
            "Finding fault with any new approach",
            "Creating complex approval processes to prevent change",
        ),
    ),
    (C, HIGH): Manifestation(
        name="Perfectionist Controller",
        description="Rigid, perfectionist, workaholic micromanager",
        behaviors=(
            "Setting impossibly high standards for self and others",
            "Obsessing over minor details while missing deadlines",
            "Unable to delegate due to trust issues",
            "Working excessive hours and expecting same from team",
            "Paralysis from fear of making imperfect decisions",
        ),
        stress_amplifiers=(
            "Standards become even more unrealistic under pressure",
            "Micromanagement intensifies to control outcomes",
            "Sleep deprivation leads to poor judgment",
        ),
        impact_on_others=(
            "Team burnout from unrealistic expectations",
            "Decreased productivity from excessive checking",
            "Innovation stifled by fear of imperfection",
            "High turnover from unsustainable pressure",
        ),
        compensatory_behaviors=(
            "Staying late to redo others' work",
            "Creating excessive documentation and processes",
            "Becoming the bottleneck for all decisions",
        ),
    ),
    (C, LOW): Manifestation(
        name="Chaotic Underperformer",
        description="Disorganized, unreliable, lacks follow-through",
        behaviors=(
            "Consistently missing deadlines and commitments",
            "Poor planning and preparation for important events",
            "Ignoring details that lead to quality problems",
            "Procrastinating on difficult or unpleasant tasks",
            "Making impulsive decisions without considering consequences",
        ),
        stress_amplifiers=(
            "Organization completely breaks down under pressure",
            "Abandons responsibilities when overwhelmed",
            "Makes increasingly poor decisions when rushed",
        ),
        impact_on_others=(
            "Team frustration from unreliable leadership",
            "Increased workload as others compensate",
            "Loss of stakeholder confidence",
            "Culture of low accountability develops",
        ),
        compensatory_behaviors=(
            "Blaming external factors for poor performance",
            "Over-promising to compensate for past failures",
            "Avoiding accountability through deflection",
        ),
    ),
    (E, HIGH): Manifestation(
        name="Attention-Seeking Dominator",
        description="Attention-seeking, poor listening, impulsively dominant",
        behaviors=(
            "Monopolizing conversations and meetings",
            "Making decisions quickly without gathering input",
            "Seeking recognition and credit for team achievements",
            "Interrupting others and finishing their sentences",
            "Creating drama to stay at center of attention",
        ),
        stress_amplifiers=(
            "Becomes increasingly loud and dominant when challenged",
            "Seeks even more attention when feeling insecure",
            "Makes rash decisions to appear decisive",
        ),
        impact_on_others=(
            "Quieter team members become disengaged",
            "Poor decision quality from lack of input",
            "Resentment from feeling unheard and undervalued",
            "Groupthink as dissenting voices are suppressed",
        ),
        compensatory_behaviors=(
            "Constant networking to maintain energy and attention",
            "Taking on too many commitments to stay visible",
            "Using humor or charm to deflect from poor performance",
        ),
    ),
    (E, LOW): Manifestation(
        name="Withdrawn Avoider",
        description="Socially withdrawn, communication-avoidant, isolated",
        behaviors=(
            "Avoiding necessary difficult conversations",
            "Failing to communicate vision or expectations clearly",
            "Isolating from team during critical periods",
            "Under-communicating changes or important information",
            "Avoiding public speaking or presentation opportunities",
        ),
        stress_amplifiers=(
            "Becomes increasingly isolated when pressure mounts",
            "Communication becomes even more minimal",
            "Avoids confrontation even when critical",
        ),
        impact_on_others=(
            "Team confusion from lack of clear direction",
            "Missed opportunities due to poor external relationships",
            "Low morale from feeling disconnected from leadership",
            "Important issues go unaddressed due to avoidance",
        ),
        compensatory_behaviors=(
            "Over-relying on written communication to avoid face-to-face",
            "Delegating all external relationship building",
            "Creating barriers to avoid unwanted social interaction",
        ),
    ),
    (A, HIGH): Manifestation(
        name="Conflict-Avoidant Pushover",
        description="Pushover, conflict-avoidant, naively trusting",
        behaviors=(
            "Avoiding all conflict even when necessary for progress",
            "Being unable to say no to unreasonable requests",
            "Trusting others despite clear evidence of poor performance",
            "Prioritizing harmony over results and accountability",
            "Taking on others' work to avoid disappointing them",
        ),
        stress_amplifiers=(
            "Becomes even more accommodating when pressured",
            "Sacrifices important goals to maintain relationships",
            "Allows poor performers to continue unchecked",
        ),
        impact_on_others=(
            "High performers frustrated by lack of accountability",
            "Standards drift lower as poor performance is tolerated",
            "Team loses respect for leadership effectiveness",
            "Important decisions delayed to avoid upsetting anyone",
        ),
        compensatory_behaviors=(
            "Working excessive hours to avoid burdening others",
            "Making excuses for poor performers",
            "Seeking consensus even when quick decisions are needed",
        ),
    ),
    (A, LOW): Manifestation(
        name="Ruthless Competitor",
        description="Cold, competitive, lacks empathy",
        behaviors=(
            "Prioritizing personal success over team welfare",
            "Being dismissive of others' concerns or emotions",
            "Creating competitive rather than collaborative environment",
            "Lacking empathy for personal circumstances",
            "Using others as stepping stones for advancement",
        ),
        stress_amplifiers=(
            "Becomes increasingly self-focused under pressure",
            "Blames others for failures and takes credit for successes",
            "Views every interaction as zero-sum competition",
        ),
        impact_on_others=(
            "Team members feel undervalued and dispensable",
            "Collaboration breaks down as people protect themselves",
            "High turnover as people seek more supportive environments",
            "Toxic culture of internal competition develops",
        ),
        compensatory_behaviors=(
            'Justifying harsh treatment as "business necessity"',
            "Surrounding self with sycophants who won't challenge",
            "Using intimidation to maintain control",
        ),
    ),
    (N, HIGH): Manifestation(
        name="Anxious Overwhelmer",
        description="Chronically anxious, emotionally volatile, stress-spreading",
        behaviors=(
            "Reacting emotionally to minor setbacks or criticism",
            "Creating crisis atmosphere around normal challenges",
            "Making decisions based on fear rather than strategy",
            "Constantly seeking reassurance from others",
            "Transmitting stress and anxiety to entire team",
        ),
        stress_amplifiers=(
            "Emotional reactions become more extreme under pressure",
            "Catastrophic thinking spirals out of control",
            "Decision-making paralyzed by overwhelming anxiety",
        ),
        impact_on_others=(
            "Team walks on eggshells to avoid triggering reactions",
            "Stress levels elevated throughout organization",
            "Decision quality suffers from emotional interference",
            "Talented people leave to escape toxic emotional environment",
        ),
        compensatory_behaviors=(
            "Over-preparing for meetings due to anxiety",
            "Seeking constant validation and reassurance",
            "Avoiding high-stakes situations that trigger anxiety",
        ),
    ),
    (N, LOW): Manifestation(
        name="Complacent Risk-Taker",
        description="Complacent, insensitive, overconfident risk-taker",
        behaviors=(
            "Ignoring warning signs of potential problems",
            "Making risky decisions without adequate consideration",
            "Being insensitive to others' stress and concerns",
            "Failing to prepare for potential negative outcomes",
            "Overconfidence leading to poor risk assessment",
        ),
        stress_amplifiers=(
            "Becomes even more dismissive of concerns under pressure",
            "Takes increasingly risky shortcuts when rushed",
            "Fails to recognize severity of crisis situations",
        ),
        impact_on_others=(
            "Team stress increases as leader appears unconcerned",
            "Important risks overlooked leading to preventable failures",
            "Others feel unsupported during difficult periods",
            "Culture of complacency develops around risk management",
        ),
        compensatory_behaviors=(
            'Dismissing others\' concerns as "overreaction"',
            "Using past successes to justify continued risk-taking",
            "Avoiding situations that might challenge confidence",
        ),
    ),
}

STRESS_PATTERNS: dict[tuple[Trait, str], StressPattern] = {
    (O, HIGH): StressPattern(
        triggers=("Routine tasks", "Micromanagement", "Rigid processes"),
        adaptive_response="Finding creative solutions within constraints",
        maladaptive_response="Creating unnecessary complexity to feel engaged",
        recovery_factors=("Variety in tasks", "Creative challenges", "Autonomy"),
        warning_signals=(
            "Increasing boredom complaints",
            "Over-complicating simple tasks",
            "Constant idea generation without execution",
        ),
    ),
    (O, LOW): StressPattern(
        triggers=("Frequent changes", "Ambiguous instructions", "New technologies"),
        adaptive_response="Seeking clarity and structure in chaos",
        maladaptive_response="Rigidly resisting all change regardless of merit",
        recovery_factors=("Clear procedures", "Stable environment", "Predictable routine"),
        warning_signals=(
            "Increasing complaints about changes",
            "Passive resistance to new initiatives",
            "Excessive focus on \"how we've always done it\"",
        ),
    ),
    (C, HIGH): StressPattern(
        triggers=("Unclear deadlines", "Incomplete information", "Delegating tasks"),
        adaptive_response="Creating structure and processes to manage uncertainty",
        maladaptive_response="Paralysis from inability to achieve perfection",
        recovery_factors=(
            "Clear expectations",
            "Adequate time for thoroughness",
            "Recognition of quality work",
        ),
        warning_signals=(
            "Increasing time spent on minor details",
            "Difficulty delegating",
            "Working excessive hours",
        ),
    ),
    (C, LOW): StressPattern(
        triggers=("Tight deadlines", "Detail-oriented tasks", "High accountability"),
        adaptive_response="Leveraging others' organizational strengths",
        maladaptive_response="Completely abandoning planning and preparation",
        recovery_factors=("Flexible deadlines", "Support with organization", "Focus on big picture"),
        warning_signals=(
            "Increasing missed deadlines",
            "Avoidance of detailed tasks",
            "Blaming external factors for poor performance",
        ),
    ),
    (E, HIGH): StressPattern(
        triggers=("Social isolation", "Solo work", "Lack of recognition"),
        adaptive_response="Seeking appropriate social stimulation and collaboration",
        maladaptive_response="Creating drama or conflict to generate stimulation",
        recovery_factors=("Team interaction", "Public recognition", "Collaborative projects"),
        warning_signals=(
            "Excessive meeting scheduling",
            "Attention-seeking behaviors",
            "Difficulty with solo work",
        ),
    ),
    (E, LOW): StressPattern(
        triggers=("Public speaking", "Large group meetings", "High visibility roles"),
        adaptive_response="Preparing thoroughly for social interactions",
        maladaptive_response="Complete withdrawal from necessary social leadership",
        recovery_factors=(
            "Quiet workspace",
            "Small group interactions",
            "Written communication options",
        ),
        warning_signals=(
            "Avoiding team meetings",
            "Delegating all external communication",
            "Increased isolation",
        ),
    ),
    (A, HIGH): StressPattern(
        triggers=(
            "Conflict situations",
            "Difficult personnel decisions",
            "Competitive environments",
        ),
        adaptive_response="Finding collaborative solutions to conflicts",
        maladaptive_response="Avoiding all conflict even when necessary",
        recovery_factors=(
            "Supportive team environment",
            "Clear conflict resolution processes",
            "Training in difficult conversations",
        ),
        warning_signals=(
            "Increasing avoidance of difficult decisions",
            "Tolerance of poor performance",
            "Taking on others' responsibilities",
        ),
    ),
    (A, LOW): StressPattern(
        triggers=(
            "Team-building activities",
            "Collaborative decision-making",
            "Emotional discussions",
        ),
        adaptive_response="Recognizing value of others' input and emotions",
        maladaptive_response="Becoming increasingly cold and dismissive",
        recovery_factors=(
            "Individual achievement recognition",
            "Structured interaction formats",
            "Clear role boundaries",
        ),
        warning_signals=(
            "Increasing dismissiveness of others",
            "Reduced empathy in interactions",
            "Focus only on personal success",
        ),
    ),
    (N, HIGH): StressPattern(
        triggers=("High-pressure situations", "Uncertainty", "Criticism"),
        adaptive_response="Using anxiety as motivation for thorough preparation",
        maladaptive_response="Emotional volatility disrupting team function",
        recovery_factors=(
            "Stress management support",
            "Clear communication",
            "Predictable environment",
        ),
        warning_signals=(
            "Increasing emotional reactions",
            "Sleep problems",
            "Catastrophic thinking",
        ),
    ),
    (N, LOW): StressPattern(
        triggers=(
            "Crisis situations requiring emotional sensitivity",
            "Team stress",
            "Risk assessment needs",
        ),
        adaptive_response="Providing calm stability during turbulent times",
        maladaptive_response="Dangerous overconfidence and risk-taking",
        recovery_factors=(
            "Regular risk assessment prompts",
            "Diverse advisory input",
            "Structured stress monitoring",
        ),
        warning_signals=(
            "Dismissing others' concerns",
            "Taking unnecessary risks",
            "Lack of stress response in critical situations",
        ),
    ),
}

BEHAVIORAL_WARNINGS: dict[tuple[Trait, str], tuple[str, ...]] = {
    (O, HIGH): (
        "Starts multiple projects without finishing previous ones",
        "Constantly reorganizes team structure",
        'Dismisses practical concerns as "limiting creativity"',
    ),
    (O, LOW): (
        'Responds to all suggestions with "we tried that before"',
        "Creates increasingly detailed procedures",
        "Punishes any deviation from established process",
    ),
    (C, HIGH): (
        "Staying significantly later than team",
        "Redoing others' completed work",
        "Creating elaborate backup plans for low-risk situations",
    ),
    (C, LOW): (
        "Missing previously reliable deadlines",
        "Showing up unprepared to important meetings",
        "Making commitments without checking calendar",
    ),
    (E, HIGH): (
        "Talking significantly more in meetings",
        "Scheduling back-to-back social interactions",
        "Becoming agitated during quiet work periods",
    ),
    (E, LOW): (
        "Declining optional team activities",
        "Communicating primarily through written channels",
        "Avoiding one-on-one conversations",
    ),
    (A, HIGH): (
        "Taking on others' work responsibilities",
        "Agreeing to conflicting commitments",
        "Avoiding giving negative feedback",
    ),
    (A, LOW): (
        "Making unilateral decisions without consultation",
        "Showing impatience with others' emotions",
        "Focusing only on personal metrics",
    ),
    (N, HIGH): (
        "Visible physical stress symptoms",
        "Overreacting to minor setbacks",
        "Seeking excessive reassurance",
    ),
    (N, LOW): (
        "Dismissing team stress concerns",
        "Making decisions without risk analysis",
        "Showing no concern during crisis situations",
    ),
}

DEVELOPMENT_METHODS: dict[tuple[Trait, str], tuple[str, ...]] = {
    (O, HIGH): (
        "Project completion accountability",
        "Structured innovation processes",
        "Operational excellence training",
        "Focus and prioritization coaching",
    ),
    (O, LOW): (
        "Change management training",
        "Innovation workshops",
        "Perspective-taking exercises",
        "Cross-functional assignments",
    ),
    (C, HIGH): (
        "Delegation training",
        "Good enough decision-making",
        "Time management coaching",
        "Stress management techniques",
    ),
    (C, LOW): (
        "Project management training",
        "Accountability partnerships",
        "Planning and organization systems",
        "Follow-through coaching",
    ),
    (E, HIGH): (
        "Active listening training",
        "Meeting facilitation skills",
        "Introvert appreciation workshops",
        "Communication balance coaching",
    ),
    (E, LOW): (
        "Public speaking training",
        "Relationship building skills",
        "Communication confidence building",
        "Network development coaching",
    ),
    (A, HIGH): (
        "Difficult conversations training",
        "Assertiveness coaching",
        "Conflict resolution skills",
        "Performance management training",
    ),
    (A, LOW): (
        "Empathy development",
        "Collaborative leadership training",
        "Team building skills",
        "Emotional intelligence coaching",
    ),
    (N, HIGH): (
        "Stress management training",
        "Mindfulness and meditation",
        "Cognitive behavioral coaching",
        "Resilience building programs",
    ),
    (N, LOW): (
        "Risk assessment training",
        "Emotional intelligence development",
        "Crisis management skills",
        "Empathy and sensitivity training",
    ),
}

_DIRECTION_BY_MANIFESTATION: dict[ManifestationType, str] = {
    ManifestationType.HIGH_EXTREME: HIGH,
    ManifestationType.LOW_EXTREME: LOW,
}


class DarkSideService:
    """Trait-extreme risk assessment with stress amplification."""

    HIGH_EXTREME: float = 4.5
    LOW_EXTREME: float = 1.5
    WARNING_THRESHOLD: float = 3.8
    SEVERE_HIGH: float = 4.7
    SEVERE_LOW: float = 1.3

    NEUTRAL_SCORE: float = 3.0
    STRESS_DIVISOR: float = 5.0
    MIN_STRESS: float = 1.0
    MAX_STRESS: float = 10.0

    # (minimum risk score, level), checked in order
    RISK_BANDS: list[tuple[float, RiskLevel]] = [
        (2.0, RiskLevel.CRITICAL),
        (1.5, RiskLevel.HIGH),
        (1.0, RiskLevel.MODERATE),
    ]
    OVERALL_BANDS: list[tuple[float, RiskLevel]] = [
        (3.5, RiskLevel.CRITICAL),
        (2.5, RiskLevel.HIGH),
        (1.5, RiskLevel.MODERATE),
    ]

    HIGH_PATTERN_THRESHOLD: float = 3.5
    MALADAPTIVE_STRESS: float = 7.0
    COACHING_STRESS: float = 7.0
    AWARENESS_GAP_THRESHOLD: float = 1.0
    STAKEHOLDER_BASE: float = 80.0
    STAKEHOLDER_PENALTY: float = 15.0

    MONITORING_PLAN = MonitoringPlan(
        indicators=[
            "Team engagement scores",
            "Stress level assessments",
            "Behavioral observation reports",
            "360-degree feedback scores",
        ],
        frequency="Monthly for 6 months, then quarterly",
        reviewers=["Executive coach", "HR Director", "Direct supervisor"],
        escalation_triggers=[
            "Team engagement drops below 60%",
            "Stress level exceeds 8/10",
            "Multiple behavioral concerns reported",
            "Turnover in direct reports",
        ],
    )

    def __init__(self, default_stress_level: float | None = None) -> None:
        self.default_stress_level = (
            default_stress_level
            if default_stress_level is not None
            else get_settings().DEFAULT_STRESS_LEVEL
        )

    # ══════════════════════════════════════════════════════════════════════
    # 1. assess_risk — the risk profile
    # ══════════════════════════════════════════════════════════════════════

    def assess_risk(
        self,
        scores: TraitScores,
        stress_level: float | None = None,
        observer_ratings: TraitScores | None = None,
    ) -> DarkSideRiskProfile:
        """Build the dark-side risk profile for one raw trait score set.

        Parameters
        ----------
        scores:
            Raw trait scores on the 1-5 scale.
        stress_level:
            Self-reported stress, 1-10.  Defaults to
            ``Settings.DEFAULT_STRESS_LEVEL``.
        observer_ratings:
            Accepted for parity with ``generate_assessment``; the risk bands
            use self scores only.

        Returns
        -------
        DarkSideRiskProfile

        Raises
        ------
        InvalidStressLevelError
            If ``stress_level`` is outside 1-10.
        """
        stress = self._validate_stress(stress_level)

        trait_risks: dict[Trait, TraitRisk] = {}
        compensatory: list[str] = []
        for trait, score in scores.items():
            risk = self.assess_trait(trait, score, stress)
            trait_risks[trait] = risk
            if risk.risk_level is not RiskLevel.LOW:
                compensatory.extend(self.compensatory_behaviors(trait, score))

        mean_weight = statistics.fmean(r.risk_level.weight for r in trait_risks.values())
        overall = self._band(mean_weight, self.OVERALL_BANDS)

        profile = DarkSideRiskProfile(
            overall_risk=overall,
            trait_risks=trait_risks,
            stress_level=stress,
            stress_amplification=1.0 + (stress / 10.0) * 2.0,
            compensatory_behaviors=list(dict.fromkeys(compensatory)),
        )
        logger.info(
            "dark_side.assessed",
            overall_risk=overall.value,
            stress_level=stress,
            flagged=[t.value for t, r in trait_risks.items() if r.manifestation_type.is_extreme],
        )
        return profile

    def assess_trait(self, trait: Trait, score: float, stress_level: float) -> TraitRisk:
        manifestation_type = self.classify(score)
        concerns: list[str] = []
        impacts: list[str] = []
        name = None
        risk_level = RiskLevel.LOW

        direction = _DIRECTION_BY_MANIFESTATION.get(manifestation_type)
        if direction is not None:
            manifestation = MANIFESTATIONS[(trait, direction)]
            name = manifestation.name
            concerns = list(manifestation.behaviors[:3])
            impacts = list(manifestation.impact_on_others[:3])
            risk_score = abs(score - self.NEUTRAL_SCORE) * (stress_level / self.STRESS_DIVISOR)
            risk_level = self._band(risk_score, self.RISK_BANDS)
        elif manifestation_type is ManifestationType.WARNING:
            concerns = [f"Watch for overuse of {trait.value} strengths"]
            impacts = ["Potential team dynamics issues"]

        return TraitRisk(
            risk_level=risk_level,
            manifestation_type=manifestation_type,
            manifestation_name=name,
            primary_concerns=concerns,
            impact_areas=impacts,
        )

    def classify(self, score: float) -> ManifestationType:
        if score >= self.HIGH_EXTREME:
            return ManifestationType.HIGH_EXTREME
        if score <= self.LOW_EXTREME:
            return ManifestationType.LOW_EXTREME
        if score >= self.WARNING_THRESHOLD:
            return ManifestationType.WARNING
        return ManifestationType.NONE

    def compensatory_behaviors(self, trait: Trait, score: float) -> list[str]:
        direction = _DIRECTION_BY_MANIFESTATION.get(self.classify(score))
        if direction is None:
            return []
        return list(MANIFESTATIONS[(trait, direction)].compensatory_behaviors)

    # ══════════════════════════════════════════════════════════════════════
    # 2. assess_stress_response
    # ══════════════════════════════════════════════════════════════════════

    def assess_stress_response(
        self, scores: TraitScores, stress_level: float | None = None
    ) -> StressResponseAssessment:
        stress = self._validate_stress(stress_level)
        stressors: list[str] = []
        maladaptive: list[str] = []
        recovery: list[str] = []

        for trait, score in scores.items():
            pattern = STRESS_PATTERNS[(trait, HIGH if score >= self.HIGH_PATTERN_THRESHOLD else LOW)]
            stressors.extend(pattern.triggers)
            recovery.extend(pattern.recovery_factors)
            if stress >= self.MALADAPTIVE_STRESS:
                maladaptive.append(pattern.maladaptive_response)

        stability = 6.0 - scores[N]
        adaptive_capacity = clamp(
            stability * 30 + scores[C] * 25 + scores[O] * 20 + 25, 0.0, 100.0
        )

        if stress >= 8 and scores[N] >= 4:
            team_impact = "toxic"
        elif stress >= 6 and (scores[N] >= 3.5 or scores[A] <= 2.5):
            team_impact = "negative"
        elif stability >= 4 and scores[A] >= 3.5:
            team_impact = "positive"
        else:
            team_impact = "neutral"

        return StressResponseAssessment(
            current_stress_level=stress,
            stressors_identified=list(dict.fromkeys(stressors)),
            adaptive_capacity=adaptive_capacity,
            maladaptive_patterns=list(dict.fromkeys(maladaptive)),
            recovery_factors=list(dict.fromkeys(recovery)),
            team_impact=team_impact,
        )

    # ══════════════════════════════════════════════════════════════════════
    # 3. analyze_behavioral_indicators
    # ══════════════════════════════════════════════════════════════════════

    def analyze_behavioral_indicators(
        self,
        scores: TraitScores,
        observer_ratings: TraitScores | None = None,
    ) -> BehavioralIndicatorReport:
        observed: dict[Trait, ObservedBehavior] = {}
        for trait, score in scores.items():
            direction = _DIRECTION_BY_MANIFESTATION.get(self.classify(score))
            if direction is None:
                continue
            severe = score >= self.SEVERE_HIGH or score <= self.SEVERE_LOW
            observed[trait] = ObservedBehavior(
                frequency="frequent",
                severity="significant" if severe else "moderate",
                trend="stable",
                examples=list(BEHAVIORAL_WARNINGS[(trait, direction)]),
            )

        gap = 0.0
        if observer_ratings is not None:
            gap = statistics.fmean(abs(scores[t] - observer_ratings[t]) for t in Trait)

        return BehavioralIndicatorReport(
            observed_behaviors=observed,
            self_awareness_gap=gap,
            impact_on_others=TeamImpactEstimate(
                team_morale=self._team_morale(scores),
                productivity=self._productivity(scores),
                turnover_risk=self._turnover_risk(scores),
                stakeholder_confidence=self._stakeholder_confidence(scores),
            ),
        )

    # ══════════════════════════════════════════════════════════════════════
    # 4. generate_intervention_plan
    # ══════════════════════════════════════════════════════════════════════

    def generate_intervention_plan(
        self,
        risk: DarkSideRiskProfile,
        stress_response: StressResponseAssessment,
        indicators: BehavioralIndicatorReport,
    ) -> InterventionPlan:
        actions: list[ImmediateAction] = []
        if risk.overall_risk is RiskLevel.CRITICAL or stress_response.team_impact == "toxic":
            actions.append(
                ImmediateAction(
                    action="Emergency leadership coaching and stress management intervention",
                    priority="urgent",
                    timeframe="Within 48 hours",
                    responsibility=["Executive coach", "HR Director", "CEO"],
                )
            )
        if risk.overall_risk is RiskLevel.HIGH:
            actions.append(
                ImmediateAction(
                    action="360-degree feedback and leadership assessment",
                    priority="high",
                    timeframe="Within 2 weeks",
                    responsibility=["HR Director", "Direct reports"],
                )
            )

        goals: list[DevelopmentGoal] = []
        for trait, trait_risk in risk.trait_risks.items():
            if trait_risk.risk_level not in (RiskLevel.HIGH, RiskLevel.CRITICAL):
                continue
            goals.append(
                DevelopmentGoal(
                    trait=trait,
                    target_behavior=f"Manage {trait.value} extremes and reduce negative impact",
                    methods=self.development_methods(trait, trait_risk.manifestation_type),
                    timeline="3-6 months",
                    success_metrics=[
                        "Reduced behavioral indicators",
                        "Improved team feedback",
                        "Better stress management",
                    ],
                )
            )

        support = SupportStructures()
        if stress_response.current_stress_level >= self.COACHING_STRESS:
            support.coaching.extend(["Stress management coaching", "Executive wellness program"])
        if indicators.self_awareness_gap > self.AWARENESS_GAP_THRESHOLD:
            support.training.extend(["Self-awareness development", "360-degree feedback training"])

        return InterventionPlan(
            immediate_actions=actions,
            development_goals=goals,
            support_structures=support,
            monitoring_plan=self.MONITORING_PLAN.model_copy(deep=True),
        )

    @staticmethod
    def development_methods(trait: Trait, manifestation_type: ManifestationType) -> list[str]:
        direction = _DIRECTION_BY_MANIFESTATION.get(manifestation_type)
        if direction is None:
            return ["General leadership development"]
        return list(DEVELOPMENT_METHODS[(trait, direction)])

    # ══════════════════════════════════════════════════════════════════════
    # 5. generate_assessment — all of the above
    # ══════════════════════════════════════════════════════════════════════

    def generate_assessment(
        self,
        scores: TraitScores,
        stress_level: float | None = None,
        observer_ratings: TraitScores | None = None,
    ) -> DarkSideAssessment:
        risk = self.assess_risk(scores, stress_level, observer_ratings)
        stress_response = self.assess_stress_response(scores, risk.stress_level)
        indicators = self.analyze_behavioral_indicators(scores, observer_ratings)
        plan = self.generate_intervention_plan(risk, stress_response, indicators)
        return DarkSideAssessment(
            trait_scores=scores,
            dark_side_risk=risk,
            stress_response=stress_response,
            behavioral_indicators=indicators,
            intervention_plan=plan,
        )

    # ── Helpers ─────────────────────────────────────────────────────

    def _validate_stress(self, stress_level: float | None) -> float:
        stress = self.default_stress_level if stress_level is None else float(stress_level)
        if math.isnan(stress) or not self.MIN_STRESS <= stress <= self.MAX_STRESS:
            raise InvalidStressLevelError(stress)
        return stress

    @staticmethod
    def _band(value: float, bands: list[tuple[float, RiskLevel]]) -> RiskLevel:
        for threshold, level in bands:
            if value >= threshold:
                return level
        return RiskLevel.LOW

    @staticmethod
    def _team_morale(scores: TraitScores) -> float:
        factor = (6.0 - scores[N]) * 0.4 + scores[A] * 0.6
        return clamp(factor * 20, 0.0, 100.0)

    def _productivity(self, scores: TraitScores) -> float:
        productivity = scores[C]
        if scores[C] >= self.HIGH_EXTREME:
            productivity = 5.5 - scores[C]
        productivity -= (scores[N] - 2.5) * 0.3
        return clamp(productivity * 20, 0.0, 100.0)

    @staticmethod
    def _turnover_risk(scores: TraitScores) -> float:
        risk = 0.0
        if scores[N] >= 4:
            risk += (scores[N] - 3) * 30
        if scores[A] <= 2.5:
            risk += (3 - scores[A]) * 25
        if scores[E] >= 4.5:
            risk += (scores[E] - 4) * 20
        return clamp(risk, 0.0, 100.0)

    def _stakeholder_confidence(self, scores: TraitScores) -> float:
        extremes = sum(1 for _, s in scores.items() if self.classify(s).is_extreme)
        return clamp(self.STAKEHOLDER_BASE - self.STAKEHOLDER_PENALTY * extremes, 0.0, 100.0)
