"""Unit tests for OceanScoringService — trait aggregation and conversion."""
import math

import pytest
from pydantic import ValidationError

from ocean_scoring.exceptions import NonFiniteScoreError
from ocean_scoring.schemas.scoring import QuestionTraitMapping, RawResponse
from ocean_scoring.schemas.traits import Facet, Trait
from ocean_scoring.services.percentile_service import PercentileService
from ocean_scoring.services.scoring_service import OceanScoringService


@pytest.fixture
def scoring_service():
    return OceanScoringService()


def _mapping(qid, reverse=False, facets=None, **traits):
    return QuestionTraitMapping(
        question_id=qid,
        traits={Trait(t): w for t, w in traits.items()},
        facets=facets or {},
        reverse=reverse,
    )


class TestAggregate:
    """Tests for bucket construction and the simple-mean reduction."""

    def test_single_item(self, scoring_service):
        """One answer of 5 with weight 1.0 -> raw 5.0."""
        result = scoring_service.aggregate(
            [RawResponse(question_id="q1", answer=5)],
            [_mapping("q1", conscientiousness=1.0)],
        )
        assert result.raw.conscientiousness == 5.0
        assert result.trait_counts[Trait.CONSCIENTIOUSNESS] == 1

    def test_untouched_traits_are_neutral(self, scoring_service):
        result = scoring_service.aggregate(
            [RawResponse(question_id="q1", answer=5)],
            [_mapping("q1", conscientiousness=1.0)],
        )
        for trait in (Trait.OPENNESS, Trait.EXTRAVERSION, Trait.AGREEABLENESS, Trait.NEUROTICISM):
            assert result.raw[trait] == 3.0
            assert result.trait_counts[trait] == 0

    def test_simple_mean_of_weighted_values(self, scoring_service):
        """[5 x 1.0, 5 x 0.5] -> mean 3.75, not the weighted mean 5.0."""
        result = scoring_service.aggregate(
            [RawResponse(question_id="q1", answer=5), RawResponse(question_id="q2", answer=5)],
            [_mapping("q1", conscientiousness=1.0), _mapping("q2", conscientiousness=0.5)],
        )
        assert result.raw.conscientiousness == pytest.approx(3.75)

    def test_weighted_value_below_scale_is_clamped(self, scoring_service):
        """5 x 0.1 = 0.5 -> clamped to 1.0."""
        result = scoring_service.aggregate(
            [RawResponse(question_id="q1", answer=5)],
            [_mapping("q1", openness=0.1)],
        )
        assert result.raw.openness == 1.0

    def test_negative_weight_is_clamped(self, scoring_service):
        result = scoring_service.aggregate(
            [RawResponse(question_id="q1", answer=5)],
            [_mapping("q1", neuroticism=-0.3)],
        )
        assert result.raw.neuroticism == 1.0

    def test_zero_weight_contributes_nothing(self, scoring_service):
        result = scoring_service.aggregate(
            [RawResponse(question_id="q1", answer=5)],
            [_mapping("q1", conscientiousness=0.0)],
        )
        assert result.raw.conscientiousness == 3.0
        assert result.trait_counts[Trait.CONSCIENTIOUSNESS] == 0

    def test_reverse_coding(self, scoring_service):
        result = scoring_service.aggregate(
            [RawResponse(question_id="q1", answer=5)],
            [_mapping("q1", reverse=True, conscientiousness=1.0)],
        )
        assert result.raw.conscientiousness == 1.0

    def test_first_mapping_wins(self, scoring_service):
        result = scoring_service.aggregate(
            [RawResponse(question_id="q1", answer=5)],
            [_mapping("q1", conscientiousness=1.0), _mapping("q1", extraversion=1.0)],
        )
        assert result.raw.conscientiousness == 5.0
        assert result.raw.extraversion == 3.0

    def test_unmapped_response_ignored(self, scoring_service):
        result = scoring_service.aggregate(
            [RawResponse(question_id="other", answer=1)],
            [_mapping("q1", conscientiousness=1.0)],
        )
        assert result.raw.values() == [3.0] * 5

    def test_facet_means(self, scoring_service):
        result = scoring_service.aggregate(
            [RawResponse(question_id="q1", answer=4), RawResponse(question_id="q2", answer=2)],
            [
                _mapping("q1", facets={Facet.C4_ACHIEVEMENT_STRIVING: 1.0}, conscientiousness=1.0),
                _mapping("q2", facets={Facet.C4_ACHIEVEMENT_STRIVING: 0.5}, conscientiousness=1.0),
            ],
        )
        assert result.facets == {Facet.C4_ACHIEVEMENT_STRIVING: pytest.approx(2.5)}

    def test_mixed_formats(self, scoring_service, sample_responses, sample_mappings):
        result = scoring_service.aggregate(sample_responses, sample_mappings)
        assert result.raw.openness == 5.0
        assert result.raw.conscientiousness == 4.0
        assert result.raw.extraversion == 2.0
        assert result.raw.agreeableness == 4.0
        # q5 = 1, q6 = strongly_agree reversed -> 1
        assert result.raw.neuroticism == 1.0


class TestScore:
    """Tests for the full trait path."""

    def test_percentiles_follow_norms(self, scoring_service, sample_responses, sample_mappings):
        details = scoring_service.score(sample_responses, sample_mappings)
        percentiles = PercentileService()
        for trait, raw in details.raw.items():
            expected = percentiles.trait_percentile(trait, raw)
            assert details.percentile[trait] == expected
            assert details.stanine[trait] == percentiles.to_stanine(expected)

    def test_no_facets_gives_none(self, scoring_service):
        details = scoring_service.score(
            [RawResponse(question_id="q1", answer=4)],
            [_mapping("q1", agreeableness=1.0)],
        )
        assert details.facets is None

    def test_empty_input_is_neutral(self, scoring_service):
        details = scoring_service.score([], [])
        assert details.raw.values() == [3.0] * 5
        assert all(1 <= p <= 99 for p in details.percentile.values())

    def test_details_from_raw_clamps(self, scoring_service, trait_scores):
        details = scoring_service.details_from_raw(trait_scores(o=6.2, n=0.4))
        assert details.raw.openness == 5.0
        assert details.raw.neuroticism == 1.0

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_details_from_raw_rejects_non_finite(self, scoring_service, trait_scores, value):
        with pytest.raises(NonFiniteScoreError) as exc:
            scoring_service.details_from_raw(trait_scores(e=value))
        assert exc.value.trait == "extraversion"

    def test_non_finite_is_value_error(self, scoring_service, trait_scores):
        with pytest.raises(ValueError):
            scoring_service.details_from_raw(trait_scores(o=math.nan))

    def test_details_are_frozen(self, scoring_service, trait_scores):
        details = scoring_service.details_from_raw(trait_scores())
        with pytest.raises(ValidationError):
            details.facets = {}
