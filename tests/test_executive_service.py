"""Unit tests for ExecutiveProfileService — leadership projection of trait scores."""
import pytest

from ocean_scoring.schemas.traits import Trait
from ocean_scoring.services.executive_service import ExecutiveProfileService, to_hundred

UNIT_WEIGHTS = {t: 1.0 for t in Trait}


@pytest.fixture
def executive_service():
    return ExecutiveProfileService()


class TestToHundred:
    """Tests for the 1-5 to 0-100 projection."""

    def test_projection(self):
        assert to_hundred(1.0) == 0.0
        assert to_hundred(3.0) == 50.0
        assert to_hundred(5.0) == 100.0

    def test_clamped(self):
        assert to_hundred(6.25) == 100.0
        assert to_hundred(0.5) == 0.0


class TestBuildProfile:
    """Tests for styles, tactics and team predictions."""

    def test_neutral_unit_weights(self, executive_service, trait_scores):
        profile = executive_service.build_profile(trait_scores(), trait_weights=UNIT_WEIGHTS)
        assert profile.traits.openness == pytest.approx(50.0)
        assert profile.emotional_stability == pytest.approx(25.0)
        assert profile.influence_tactics["rational_persuasion"] == pytest.approx(60.0)
        assert profile.team_predictions["engagement"] == pytest.approx(53.0)

    def test_style_shares_sum_to_hundred(self, executive_service, trait_scores):
        profile = executive_service.build_profile(trait_scores(4.2, 2.1, 3.7, 4.9, 1.6))
        assert sum(profile.leadership_styles.values()) == pytest.approx(100.0)
        assert set(profile.leadership_styles) == {
            "transformational", "transactional", "servant", "authentic", "adaptive",
        }

    def test_neutral_profile_leans_transactional(self, executive_service, trait_scores):
        profile = executive_service.build_profile(trait_scores(), trait_weights=UNIT_WEIGHTS)
        styles = profile.leadership_styles
        assert max(styles, key=styles.get) == "transactional"
        assert styles["transactional"] == pytest.approx(3.0 / 13.8 * 100.0)

    def test_pressure_scores_inverse_agreeableness(self, executive_service, trait_scores):
        profile = executive_service.build_profile(trait_scores(), trait_weights=UNIT_WEIGHTS)
        # (0.7 x 3 + 0.65 x 3 + 0.4 x (5 - 3)) / 1.75 x 20
        assert profile.influence_tactics["pressure"] == pytest.approx(4.85 / 1.75 * 20.0)

    def test_nine_influence_tactics(self, executive_service, trait_scores):
        profile = executive_service.build_profile(trait_scores())
        assert len(profile.influence_tactics) == 9

    def test_default_executive_weights(self, executive_service, trait_scores):
        profile = executive_service.build_profile(trait_scores())
        # 3.0 x 1.2 = 3.6 -> 65
        assert profile.traits.openness == pytest.approx(65.0)
        # 3.0 x 1.3 = 3.9 -> 72.5
        assert profile.traits.neuroticism == pytest.approx(72.5)
        # (5 - 3.9) x 1.3 = 1.43
        assert profile.emotional_stability == pytest.approx(10.75)

    def test_weighted_trait_clamped(self, executive_service, trait_scores):
        profile = executive_service.build_profile(trait_scores(e=5.0))
        assert profile.traits.extraversion == 100.0

    def test_missing_weights_default_to_one(self, executive_service, trait_scores):
        profile = executive_service.build_profile(
            trait_scores(), trait_weights={Trait.OPENNESS: 1.5}
        )
        assert profile.traits.openness == pytest.approx(87.5)
        assert profile.traits.conscientiousness == pytest.approx(50.0)


class TestStressResponse:
    """Tests for resilience, recovery and coping strategies."""

    def test_neutral_is_moderate_and_variable(self, executive_service, trait_scores):
        stress = executive_service.build_profile(
            trait_scores(), trait_weights=UNIT_WEIGHTS
        ).stress_response
        assert stress.resilience_score == pytest.approx(51.0)
        assert stress.recovery_speed == "moderate"
        assert stress.team_impact == "variable"
        assert stress.coping_strategies == []

    def test_stable_warm_leader(self, executive_service, trait_scores):
        stress = executive_service.build_profile(
            trait_scores(5, 5, 5, 5, 1), trait_weights=UNIT_WEIGHTS
        ).stress_response
        assert stress.resilience_score == pytest.approx(91.0)
        assert stress.recovery_speed == "rapid"
        assert stress.team_impact == "stabilizing"
        assert len(stress.coping_strategies) == 5

    def test_energizing(self, executive_service, trait_scores):
        stress = executive_service.build_profile(
            trait_scores(e=5.0, n=1.5), trait_weights=UNIT_WEIGHTS
        ).stress_response
        assert stress.team_impact == "energizing"

    def test_coping_order(self, executive_service, trait_scores):
        stress = executive_service.build_profile(trait_scores()).stress_response
        assert stress.coping_strategies == ["Social support seeking", "Creative reframing"]

    def test_slow_recovery(self, executive_service, trait_scores):
        stress = executive_service.build_profile(
            trait_scores(1, 1, 1, 3, 5), trait_weights=UNIT_WEIGHTS
        ).stress_response
        assert stress.resilience_score == pytest.approx(11.0)
        assert stress.recovery_speed == "slow"
