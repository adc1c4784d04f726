"""
OCEAN Scoring Engine — Emotional regulation spectrum.

Projects trait percentiles onto eighteen emotions in three groups:

  score = 50 + Σ (trait_percentile - 50) x weight

When any of the emotion's facets carries a percentile, the score is blended
70 / 30 with the mean of those facet percentiles.  Scores are clamped to
0-100 and rounded half-up.
"""

from __future__ import annotations

import statistics
from dataclasses import dataclass
from typing import Mapping, Optional

import structlog

from ocean_scoring.schemas.emotional import (
    EmotionalBalance,
    EmotionalHighlight,
    EmotionalIntelligence,
    EmotionalRegulationProfile,
    EmotionalSpectrum,
    EmotionScore,
)
from ocean_scoring.schemas.facets import FacetScore
from ocean_scoring.schemas.scoring import OceanScoreDetails
from ocean_scoring.schemas.traits import Facet, Trait
from ocean_scoring.services.percentile_service import clamp, round_half_up

logger = structlog.get_logger("ocean.emotional_service")


def _facet(code: str) -> Facet:
    """Resolve a short facet code such as ``"E6"``."""
    return next(f for f in Facet if f.value.startswith(f"{code}_"))


@dataclass(frozen=True)
class Emotion:
    name: str
    weights: dict[str, float]  # OCEAN letter -> weight
    facets: tuple[Facet, ...]
    description: str


def _emotion(name: str, weights: dict[str, float], facets: str, description: str) -> Emotion:
    return Emotion(name, weights, tuple(_facet(c) for c in facets.split()), description)


SPECTRUM: dict[str, dict[str, Emotion]] = {
    "positive": {
        "joy": _emotion("Joy", {"E": 0.6, "N": -0.3, "O": 0.1}, "E6 E1 N3",
                        "Capacity for happiness and delight"),
        "enthusiasm": _emotion("Enthusiasm", {"E": 0.7, "O": 0.2, "C": 0.1}, "E6 E4 O4",
                               "Energy and excitement for life"),
        "serenity": _emotion("Serenity", {"N": -0.6, "A": 0.3, "C": 0.1}, "N1 N6 A1",
                             "Inner peace and calmness"),
        "gratitude": _emotion("Gratitude", {"A": 0.5, "E": 0.3, "N": -0.2}, "A3 E6 A6",
                              "Appreciation and thankfulness"),
        "love": _emotion("Love", {"A": 0.6, "E": 0.3, "O": 0.1}, "A1 E1 A6",
                         "Capacity for deep affection"),
        "pride": _emotion("Pride", {"C": 0.5, "E": 0.3, "N": -0.2}, "C4 E3 C1",
                          "Healthy self-esteem and achievement"),
    },
    "negative": {
        "anxiety": _emotion("Anxiety", {"N": 0.7, "E": -0.2, "C": -0.1}, "N1 N6 N4",
                            "Worry and nervous tension"),
        "anger": _emotion("Anger", {"N": 0.6, "A": -0.3, "C": -0.1}, "N2 A4 A2",
                          "Frustration and hostility"),
        "sadness": _emotion("Sadness", {"N": 0.7, "E": -0.2, "O": -0.1}, "N3 E6 E1",
                            "Sorrow and melancholy"),
        "fear": _emotion("Fear", {"N": 0.6, "E": -0.3, "O": -0.1}, "N1 N6 E5",
                         "Apprehension and dread"),
        "shame": _emotion("Shame", {"N": 0.5, "A": 0.3, "E": -0.2}, "N4 A5 E3",
                          "Self-consciousness and embarrassment"),
        "guilt": _emotion("Guilt", {"N": 0.4, "A": 0.4, "C": 0.2}, "N3 A3 C3",
                          "Remorse and self-blame"),
    },
    "complex": {
        "ambivalence": _emotion("Ambivalence", {"O": 0.4, "N": 0.3, "A": 0.3}, "O3 N5 A4",
                                "Mixed or conflicting emotions"),
        "nostalgia": _emotion("Nostalgia", {"O": 0.5, "N": 0.3, "E": -0.2}, "O1 O3 N3",
                              "Bittersweet longing for the past"),
        "awe": _emotion("Awe", {"O": 0.7, "E": 0.2, "A": 0.1}, "O2 O5 O6",
                        "Wonder and reverence"),
        "curiosity": _emotion("Curiosity", {"O": 0.8, "E": 0.1, "C": 0.1}, "O5 O4 O1",
                              "Desire to learn and explore"),
        "empathy": _emotion("Empathy", {"A": 0.6, "O": 0.3, "N": 0.1}, "A6 O3 A3",
                            "Understanding others' emotions"),
        "flow": _emotion("Flow", {"C": 0.5, "O": 0.3, "N": -0.2}, "C5 O4 C1",
                         "Complete absorption in activity"),
    },
}

STRENGTH_NOTES: dict[str, str] = {
    "joy": "Enhances resilience and social connections",
    "enthusiasm": "Drives motivation and inspires others",
    "serenity": "Promotes clear thinking and stress reduction",
    "gratitude": "Improves relationships and life satisfaction",
    "love": "Builds deep connections and meaning",
    "pride": "Fuels achievement and self-confidence",
    "awe": "Expands perspective and creativity",
    "curiosity": "Drives learning and innovation",
    "empathy": "Strengthens relationships and leadership",
    "flow": "Maximizes performance and satisfaction",
}

CHALLENGE_NOTES: dict[str, str] = {
    "anxiety": "May interfere with decision-making and wellbeing",
    "anger": "Can damage relationships and cloud judgment",
    "sadness": "May reduce motivation and energy",
    "fear": "Can limit opportunities and growth",
    "shame": "May harm self-esteem and social connections",
    "guilt": "Can lead to rumination and self-punishment",
}

REGULATION_TECHNIQUES: dict[str, list[str]] = {
    "cognitive": [
        "Practice cognitive reframing techniques",
        "Use thought challenging for negative emotions",
        "Develop problem-solving skills",
        "Learn perspective-taking exercises",
    ],
    "behavioral": [
        "Engage in regular physical exercise",
        "Practice relaxation techniques",
        "Build healthy routines",
        "Use behavioral activation for low mood",
    ],
    "experiential": [
        "Practice mindfulness meditation",
        "Learn acceptance techniques",
        "Engage with emotions non-judgmentally",
        "Use body-based awareness practices",
    ],
    "interpersonal": [
        "Build supportive relationships",
        "Practice assertive communication",
        "Learn conflict resolution skills",
        "Seek support when overwhelmed",
    ],
    "mixed": [
        "Experiment with different techniques",
        "Build a regulation toolkit",
        "Match strategies to situations",
        "Seek professional guidance if needed",
    ],
}


class EmotionalRegulationService:
    """Emotion spectrum and regulation profile from trait percentiles."""

    BASELINE: float = 50.0
    FACET_BLEND: float = 0.3
    DOMINANT_THRESHOLD: int = 70
    ELEVATED_THRESHOLD: int = 60
    STRENGTH_THRESHOLD: int = 65
    POSITIVE_RATIO: float = 1.5
    NEGATIVE_RATIO: float = 0.67

    def build_spectrum(
        self,
        percentiles: Mapping[Trait, float],
        facet_percentiles: Optional[Mapping[Facet, Optional[float]]] = None,
    ) -> EmotionalSpectrum:
        """Score all eighteen emotions.

        Parameters
        ----------
        percentiles:
            Trait percentiles (0-100); ``TraitBands`` works directly.
            Missing traits count as 50.
        facet_percentiles:
            Optional facet percentiles.  ``None`` or zero entries are ignored.

        Returns
        -------
        EmotionalSpectrum
        """
        by_letter = {Trait.parse(t).letter: float(v) for t, v in percentiles.items()}
        facet_percentiles = facet_percentiles or {}

        scores: dict[str, dict[str, EmotionScore]] = {}
        dominant: list[EmotionScore] = []
        for category, emotions in SPECTRUM.items():
            scores[category] = {}
            for key, emotion in emotions.items():
                value = self.BASELINE
                for letter, weight in emotion.weights.items():
                    value += (by_letter.get(letter, self.BASELINE) - self.BASELINE) * weight

                facet_values = [facet_percentiles[f] for f in emotion.facets if facet_percentiles.get(f)]
                if facet_values:
                    value = value * (1 - self.FACET_BLEND) + statistics.fmean(facet_values) * self.FACET_BLEND

                score = EmotionScore(
                    key=key,
                    name=emotion.name,
                    category=category,
                    score=round_half_up(clamp(value, 0.0, 100.0)),
                    description=emotion.description,
                )
                scores[category][key] = score
                if score.score >= self.DOMINANT_THRESHOLD:
                    dominant.append(score)
        dominant.sort(key=lambda s: s.score, reverse=True)

        by_category = {c: [s.score for s in group.values()] for c, group in scores.items()}
        positive = statistics.fmean(by_category["positive"])
        negative = statistics.fmean(by_category["negative"])
        ratio = round(positive / (negative or 1), 2)
        if ratio > self.POSITIVE_RATIO:
            valence = "positive"
        elif ratio < self.NEGATIVE_RATIO:
            valence = "negative"
        else:
            valence = "balanced"

        everything = [v for values in by_category.values() for v in values]
        elevated = sum(1 for v in everything if v >= self.ELEVATED_THRESHOLD)

        return EmotionalSpectrum(
            scores=scores,
            dominant_emotions=dominant,
            balance=EmotionalBalance(
                positive=round_half_up(positive),
                negative=round_half_up(negative),
                complex=round_half_up(statistics.fmean(by_category["complex"])),
                ratio=ratio,
            ),
            dominant_valence=valence,
            range=round_half_up(statistics.pstdev(everything)),
            complexity=round_half_up(elevated / len(everything) * 100),
        )

    def build_profile(
        self,
        details: OceanScoreDetails,
        facet_scores: Optional[Mapping[Facet, FacetScore]] = None,
    ) -> EmotionalRegulationProfile:
        """Spectrum plus profile type, regulation style and highlights."""
        facet_percentiles = (
            {f: s.percentile for f, s in facet_scores.items()} if facet_scores else None
        )
        spectrum = self.build_spectrum(dict(details.percentile.items()), facet_percentiles)
        pct = {t.letter: float(v) for t, v in details.percentile.items()}

        profile_type, description = self.profile_type(spectrum)
        style = self.regulation_style(pct)

        logger.debug(
            "emotional.profile",
            profile_type=profile_type,
            regulation_style=style,
            valence=spectrum.dominant_valence,
        )
        return EmotionalRegulationProfile(
            spectrum=spectrum,
            profile_type=profile_type,
            description=description,
            regulation_style=style,
            regulation_techniques=list(REGULATION_TECHNIQUES[style]),
            strengths=self._strengths(spectrum),
            challenges=self._challenges(spectrum),
            emotional_intelligence=EmotionalIntelligence(
                awareness=min(100, round_half_up(
                    pct["O"] * 0.5 + abs(pct["N"] - 50) * 0.3 + spectrum.complexity * 0.2
                )),
                understanding=min(100, round_half_up(
                    pct["O"] * 0.4 + pct["A"] * 0.3 + spectrum.complexity * 0.3
                )),
                expression=min(100, round_half_up(
                    pct["E"] * 0.5 + spectrum.balance.positive * 0.3 + pct["A"] * 0.2
                )),
            ),
        )

    @staticmethod
    def profile_type(spectrum: EmotionalSpectrum) -> tuple[str, str]:
        valence, complexity = spectrum.dominant_valence, spectrum.complexity
        if valence == "positive":
            if complexity > 60:
                return (
                    "Emotionally Rich Optimist",
                    "You experience a wide range of emotions with a positive bias, "
                    "suggesting high emotional intelligence and resilience.",
                )
            return (
                "Stable Optimist",
                "You maintain a consistently positive emotional state with good emotional stability.",
            )
        if valence == "negative":
            if complexity > 60:
                return (
                    "Emotionally Intense",
                    "You experience emotions deeply and intensely, which can be both a "
                    "source of insight and challenge.",
                )
            return (
                "Emotionally Challenged",
                "You may benefit from developing emotional regulation strategies to improve wellbeing.",
            )
        if complexity > 70:
            return (
                "Emotionally Complex",
                "You have a rich and nuanced emotional life with the ability to experience subtle emotions.",
            )
        return (
            "Emotionally Balanced",
            "You maintain good emotional equilibrium with moderate emotional experiences.",
        )

    @staticmethod
    def regulation_style(pct: Mapping[str, float]) -> str:
        """Preferred regulation style from letter-keyed percentiles."""
        if pct["O"] >= 60 and pct["C"] >= 60:
            return "cognitive"
        if pct["E"] >= 60 and pct["A"] >= 60:
            return "interpersonal"
        if pct["O"] >= 60 and pct["N"] <= 40:
            return "experiential"
        if pct["C"] >= 60 and pct["E"] >= 50:
            return "behavioral"
        return "mixed"

    # ── Helpers ─────────────────────────────────────────────────────

    def _strengths(self, spectrum: EmotionalSpectrum) -> list[EmotionalHighlight]:
        top_positive = sorted(
            spectrum.scores["positive"].values(), key=lambda s: s.score, reverse=True
        )[:2]
        picked = [s for s in top_positive if s.score >= self.STRENGTH_THRESHOLD]
        picked += [s for s in spectrum.scores["complex"].values() if s.score >= self.DOMINANT_THRESHOLD]
        return [
            EmotionalHighlight(
                emotion=s.name,
                score=s.score,
                note=STRENGTH_NOTES.get(s.key, "Positive emotional capacity"),
            )
            for s in picked
        ]

    def _challenges(self, spectrum: EmotionalSpectrum) -> list[EmotionalHighlight]:
        return [
            EmotionalHighlight(emotion=s.name, score=s.score, note=CHALLENGE_NOTES[s.key])
            for s in spectrum.scores["negative"].values()
            if s.score >= self.STRENGTH_THRESHOLD
        ]
