"""Unit tests for EmotionalRegulationService — emotion spectrum and regulation profile."""
import pytest

from ocean_scoring.schemas.traits import Facet, Trait
from ocean_scoring.services.emotional_service import (
    REGULATION_TECHNIQUES,
    SPECTRUM,
    EmotionalRegulationService,
)


@pytest.fixture
def emotional_service():
    return EmotionalRegulationService()


def percentiles(o=50, c=50, e=50, a=50, n=50):
    return {
        Trait.OPENNESS: o,
        Trait.CONSCIENTIOUSNESS: c,
        Trait.EXTRAVERSION: e,
        Trait.AGREEABLENESS: a,
        Trait.NEUROTICISM: n,
    }


class TestSpectrumTable:
    """Tests for the emotion catalogue."""

    def test_eighteen_emotions_in_three_groups(self):
        assert set(SPECTRUM) == {"positive", "negative", "complex"}
        assert all(len(group) == 6 for group in SPECTRUM.values())

    def test_every_emotion_has_three_facets(self):
        for group in SPECTRUM.values():
            for emotion in group.values():
                assert len(emotion.facets) == 3
                assert all(isinstance(f, Facet) for f in emotion.facets)


class TestBuildSpectrum:
    """Tests for trait projection, facet blending and summary statistics."""

    def test_average_profile_is_flat(self, emotional_service):
        spectrum = emotional_service.build_spectrum(percentiles())
        flat = [s.score for group in spectrum.scores.values() for s in group.values()]
        assert flat == [50] * 18
        assert spectrum.dominant_emotions == []
        assert spectrum.balance.ratio == 1.0
        assert spectrum.dominant_valence == "balanced"
        assert spectrum.range == 0
        assert spectrum.complexity == 0

    def test_missing_traits_count_as_average(self, emotional_service):
        spectrum = emotional_service.build_spectrum({})
        assert spectrum.scores["positive"]["joy"].score == 50

    def test_high_openness_drives_curiosity(self, emotional_service):
        spectrum = emotional_service.build_spectrum(percentiles(o=90))
        assert spectrum.scores["complex"]["curiosity"].score == 82
        assert spectrum.scores["complex"]["awe"].score == 78
        assert [s.key for s in spectrum.dominant_emotions] == ["curiosity", "awe", "nostalgia"]

    def test_facet_blend(self, emotional_service):
        spectrum = emotional_service.build_spectrum(
            percentiles(), facet_percentiles={Facet.O5_IDEAS: 100}
        )
        # 50 x 0.7 + 100 x 0.3
        assert spectrum.scores["complex"]["curiosity"].score == 65
        assert spectrum.scores["complex"]["awe"].score == 65
        assert spectrum.scores["positive"]["joy"].score == 50

    def test_zero_or_missing_facet_percentile_ignored(self, emotional_service):
        spectrum = emotional_service.build_spectrum(
            percentiles(), facet_percentiles={Facet.O5_IDEAS: 0, Facet.O4_ACTIONS: None}
        )
        assert spectrum.scores["complex"]["curiosity"].score == 50

    def test_scores_clamped(self, emotional_service):
        spectrum = emotional_service.build_spectrum(percentiles(n=100, e=0))
        for group in spectrum.scores.values():
            for score in group.values():
                assert 0 <= score.score <= 100

    def test_negative_valence(self, emotional_service):
        spectrum = emotional_service.build_spectrum(percentiles(n=90))
        assert spectrum.scores["negative"]["anxiety"].score == 78
        assert spectrum.balance.negative == 73
        assert spectrum.balance.positive == 41
        assert spectrum.dominant_valence == "negative"
        # 6 negative + ambivalence + nostalgia elevated
        assert spectrum.complexity == 44

    def test_positive_valence(self, emotional_service):
        spectrum = emotional_service.build_spectrum(percentiles(e=90, a=90, n=10))
        assert spectrum.scores["positive"]["gratitude"].score == 90
        assert spectrum.dominant_valence == "positive"
        assert spectrum.balance.ratio > 1.5
        assert spectrum.dominant_emotions[0].key == "gratitude"

    def test_accepts_trait_bands(self, emotional_service, trait_bands):
        spectrum = emotional_service.build_spectrum(dict(trait_bands(90, 50, 50, 50, 50).items()))
        assert spectrum.scores["complex"]["curiosity"].score == 82


class TestBuildProfile:
    """Tests for the regulation profile built from score details."""

    def test_average_profile(self, emotional_service, details_with_stanines, trait_bands):
        profile = emotional_service.build_profile(details_with_stanines())
        assert profile.profile_type == "Emotionally Balanced"
        assert profile.regulation_style == "mixed"
        assert profile.regulation_techniques == REGULATION_TECHNIQUES["mixed"]
        assert profile.strengths == []
        assert profile.challenges == []
        assert profile.emotional_intelligence.awareness == 25
        assert profile.emotional_intelligence.understanding == 35
        assert profile.emotional_intelligence.expression == 50

    def test_anxious_profile(self, emotional_service, details_with_stanines, trait_bands):
        details = details_with_stanines(percentile=trait_bands(50, 50, 50, 50, 90))
        profile = emotional_service.build_profile(details)
        assert profile.profile_type == "Emotionally Challenged"
        assert [c.emotion for c in profile.challenges] == [
            "Anxiety", "Anger", "Sadness", "Fear", "Shame", "Guilt",
        ]
        assert profile.challenges[0].note == "May interfere with decision-making and wellbeing"

    def test_warm_profile(self, emotional_service, details_with_stanines, trait_bands):
        details = details_with_stanines(percentile=trait_bands(50, 50, 90, 90, 10))
        profile = emotional_service.build_profile(details)
        assert profile.profile_type == "Stable Optimist"
        assert profile.regulation_style == "interpersonal"
        assert [s.emotion for s in profile.strengths] == ["Gratitude", "Joy", "Empathy"]

    def test_profile_is_serialisable(self, emotional_service, details_with_stanines):
        dumped = emotional_service.build_profile(details_with_stanines()).model_dump(mode="json")
        assert dumped["spectrum"]["balance"]["ratio"] == 1.0


class TestRegulationStyle:
    """Tests for the ordered regulation-style rules."""

    @pytest.mark.parametrize(
        "pct,expected",
        [
            ({"O": 60, "C": 60, "E": 90, "A": 90, "N": 50}, "cognitive"),
            ({"O": 50, "C": 50, "E": 60, "A": 60, "N": 50}, "interpersonal"),
            ({"O": 70, "C": 50, "E": 50, "A": 50, "N": 40}, "experiential"),
            ({"O": 50, "C": 70, "E": 50, "A": 50, "N": 50}, "behavioral"),
            ({"O": 50, "C": 50, "E": 50, "A": 50, "N": 50}, "mixed"),
        ],
    )
    def test_styles(self, pct, expected):
        assert EmotionalRegulationService.regulation_style(pct) == expected
