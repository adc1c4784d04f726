"""Unit tests for FacetScoringEngine — node-correlation facet scoring."""
import pytest

from ocean_scoring.schemas.facets import FacetScore
from ocean_scoring.schemas.scoring import NodeCorrelation, RawResponse
from ocean_scoring.schemas.traits import Facet
from ocean_scoring.services.facet_service import FacetScoringEngine


@pytest.fixture
def engine():
    return FacetScoringEngine(
        tier_modifiers={"individual": 1.0, "executive": 1.0, "organizational": 1.0}
    )


def _corr(node, facet=Facet.C4_ACHIEVEMENT_STRIVING, correlation=0.8, confidence=1.0):
    return NodeCorrelation(
        node_id=node, facet_code=facet, correlation=correlation, confidence=confidence
    )


class TestScoreFacet:
    """Tests for single-facet scoring."""

    def test_likert_worked_example(self, engine):
        """Answer 5, r = 0.8: normalized 0.6, weight 0.8 -> score 0.48."""
        score = engine.score_facet(
            [RawResponse(question_id="q1", answer=5)],
            Facet.C4_ACHIEVEMENT_STRIVING,
            [_corr("q1")],
        )
        assert score.score == pytest.approx(0.48)
        assert score.confidence == pytest.approx(0.08)
        assert score.n_items == 1
        assert score.raw_scores == [pytest.approx(0.384)]
        assert score.percentile == 58
        assert score.t_score == 53

    def test_negative_correlation_sign_applied_twice(self, engine):
        """The reversal and the correlation sign cancel for r < 0."""
        positive = engine.score_facet(
            [RawResponse(question_id="q1", answer=5)], Facet.C4_ACHIEVEMENT_STRIVING, [_corr("q1")]
        )
        negative = engine.score_facet(
            [RawResponse(question_id="q1", answer=5)],
            Facet.C4_ACHIEVEMENT_STRIVING,
            [_corr("q1", correlation=-0.8)],
        )
        assert negative.score == pytest.approx(positive.score)

    def test_no_mapping_is_sentinel(self, engine):
        score = engine.score_facet(
            [RawResponse(question_id="q1", answer=5)], Facet.O1_FANTASY, [_corr("q1")]
        )
        assert score == FacetScore.no_coverage()
        assert score.percentile is None

    def test_unparseable_answer_skipped(self, engine):
        score = engine.score_facet(
            [RawResponse(question_id="q1", answer="agree")],
            Facet.C4_ACHIEVEMENT_STRIVING,
            [_corr("q1")],
        )
        assert score.n_items == 0
        assert score.confidence == 0.0

    def test_mapping_answer_accepted(self, engine):
        score = engine.score_facet(
            [RawResponse(question_id="q1", answer={"value": 5})],
            Facet.C4_ACHIEVEMENT_STRIVING,
            [_corr("q1")],
        )
        assert score.score == pytest.approx(0.48)

    def test_node_id_overrides_question_id(self, engine):
        score = engine.score_facet(
            [RawResponse(question_id="q1", node_id="node-7", answer=5)],
            Facet.C4_ACHIEVEMENT_STRIVING,
            [_corr("node-7")],
        )
        assert score.n_items == 1

    def test_true_false(self, engine):
        true_score = engine.score_facet(
            [RawResponse(question_id="q1", answer=2, prompt_type="true/false")],
            Facet.C4_ACHIEVEMENT_STRIVING,
            [_corr("q1", correlation=1.0)],
        )
        false_score = engine.score_facet(
            [RawResponse(question_id="q1", answer=1, prompt_type="true_false")],
            Facet.C4_ACHIEVEMENT_STRIVING,
            [_corr("q1", correlation=1.0)],
        )
        assert true_score.score == pytest.approx(1.0)
        assert false_score.score == pytest.approx(-1.0)

    def test_multiple_choice_clamped(self, engine):
        score = engine.score_facet(
            [RawResponse(question_id="q1", answer=10, prompt_type="multiple choice")],
            Facet.C4_ACHIEVEMENT_STRIVING,
            [_corr("q1", correlation=1.0)],
        )
        assert score.score == pytest.approx(3.0)
        assert score.percentile == 100

    def test_percentile_and_t_score_use_unclamped_score(self, engine):
        """Likert 20, r = 1.0: raw 6.6 -> score 3.0, percentile 160, T 94."""
        score = engine.score_facet(
            [RawResponse(question_id="q1", answer=20)],
            Facet.C4_ACHIEVEMENT_STRIVING,
            [_corr("q1", correlation=1.0)],
        )
        assert score.score == pytest.approx(3.0)
        assert score.percentile == 160
        assert score.t_score == 94

    def test_confidence_saturates(self, engine):
        responses = [RawResponse(question_id=f"q{i}", answer=4) for i in range(15)]
        mappings = [_corr(f"q{i}", correlation=1.0) for i in range(15)]
        score = engine.score_facet(responses, Facet.C4_ACHIEVEMENT_STRIVING, mappings)
        assert score.confidence == 1.0
        assert score.n_items == 15

    def test_tier_modifier_scales_weight_not_score(self):
        engine = FacetScoringEngine(tier_modifiers={"individual": 1.0, "executive": 2.0})
        responses = [RawResponse(question_id="q1", answer=5)]
        base = engine.score_facet(responses, Facet.C4_ACHIEVEMENT_STRIVING, [_corr("q1")], "individual")
        executive = engine.score_facet(responses, Facet.C4_ACHIEVEMENT_STRIVING, [_corr("q1")], "executive")
        assert executive.score == pytest.approx(base.score)
        assert executive.confidence == pytest.approx(2 * base.confidence)

    def test_unknown_tier_is_neutral(self, engine):
        assert engine.tier_modifier("galactic") == 1.0


class TestScoreAllFacets:
    """Tests for full facet-set scoring."""

    def test_all_thirty_present(self, engine, sample_responses, sample_node_correlations):
        scores = engine.score_all_facets(sample_responses, sample_node_correlations)
        assert set(scores) == set(Facet)
        assert scores[Facet.O5_IDEAS].n_items == 1
        assert scores[Facet.A1_TRUST] == FacetScore.no_coverage()

    def test_scores_in_range(self, engine, sample_responses, sample_node_correlations):
        scores = engine.score_all_facets(sample_responses, sample_node_correlations)
        for score in scores.values():
            assert -3.0 <= score.score <= 3.0
            assert 0.0 <= score.confidence <= 1.0


class TestCoverageAndValidation:
    """Tests for coverage metrics and data-quality validation."""

    def test_empty_coverage(self, engine):
        scores = engine.score_all_facets([], [])
        coverage = engine.coverage_metrics(scores)
        assert coverage.coverage_percentage == 0.0
        assert len(coverage.missing_facets) == 30
        assert coverage.weak_coverage_facets == []

    def test_weak_coverage(self, engine):
        scores = {Facet.O1_FANTASY: FacetScore(score=1.0, confidence=0.4, n_items=3)}
        coverage = engine.coverage_metrics(scores)
        assert coverage.weak_coverage_facets == [Facet.O1_FANTASY]
        assert coverage.coverage_percentage == pytest.approx(100 / 30)

    def test_validation_flags_empty_set(self, engine):
        scores = engine.score_all_facets([], [])
        result = engine.validate_facet_scores(scores, [])
        assert result.overall_quality == "poor"
        assert len(result.low_confidence_critical_facets) == 8
        assert result.issues[0].startswith("Missing coverage for critical facets: O2_Aesthetics")
        assert "Low overall coverage: 0.0%" in result.issues
        assert not any("too quick" in issue for issue in result.issues)

    def test_rushed_responses(self, engine):
        responses = [RawResponse(question_id=f"q{i}", answer=3, response_time_ms=800) for i in range(3)]
        result = engine.validate_facet_scores(engine.score_all_facets(responses, []), responses)
        assert "Responses may be too quick - possible rushed assessment" in result.issues

    def test_full_coverage_is_good(self, engine):
        scores = {f: FacetScore(score=0.5, confidence=0.9, n_items=4) for f in Facet}
        result = engine.validate_facet_scores(scores, [])
        assert result.overall_quality == "good"
        assert result.issues == []

    def test_fair_band(self, engine):
        scores = {f: FacetScore(score=0.5, confidence=0.9, n_items=4) for f in Facet}
        for facet in list(Facet)[:8]:
            if facet not in engine.CRITICAL_FACETS:
                scores[facet] = FacetScore.no_coverage()
        result = engine.validate_facet_scores(scores, [])
        assert 70.0 <= result.coverage_percentage < 85.0
        assert result.overall_quality == "fair"


class TestNodeContributions:
    """Tests for per-node contribution summaries."""

    def test_counts_and_weights(self, engine):
        responses = [
            RawResponse(question_id="q1", answer=4),
            RawResponse(question_id="q1", answer=5),
            RawResponse(question_id="q2", answer=5),
        ]
        mappings = [_corr("q1"), _corr("q2", facet=Facet.O1_FANTASY, correlation=0.5, confidence=0.5)]
        scores = engine.score_all_facets(responses, mappings)
        contributions = engine.node_contributions(responses, mappings, scores)
        assert contributions["q1"].response_count == 2
        assert contributions["q1"].facet_contributions == {
            Facet.C4_ACHIEVEMENT_STRIVING: pytest.approx(0.8)
        }
        assert contributions["q2"].total_contribution == pytest.approx(0.25)
