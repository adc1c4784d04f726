"""Shared pytest fixtures for OCEAN scoring engine tests."""
import pytest

from ocean_scoring.schemas.scoring import (
    NodeCorrelation,
    OceanScoreDetails,
    QuestionTraitMapping,
    RawResponse,
)
from ocean_scoring.schemas.traits import Facet, Trait, TraitBands, TraitScores
from ocean_scoring.services.scoring_service import OceanScoringService


def make_scores(o=3.0, c=3.0, e=3.0, a=3.0, n=3.0):
    return TraitScores(
        openness=o, conscientiousness=c, extraversion=e, agreeableness=a, neuroticism=n
    )


def make_bands(o=5, c=5, e=5, a=5, n=5):
    return TraitBands(
        openness=o, conscientiousness=c, extraversion=e, agreeableness=a, neuroticism=n
    )


@pytest.fixture
def details_from_raw():
    """Factory: raw 1-5 scores -> fully converted OceanScoreDetails."""
    service = OceanScoringService()

    def _build(**raw):
        return service.details_from_raw(make_scores(**raw))

    return _build


@pytest.fixture
def details_with_stanines():
    """Factory: neutral raw / percentile with chosen stanine bands."""

    def _build(o=5, c=5, e=5, a=5, n=5, percentile=None):
        return OceanScoreDetails(
            raw=make_scores(),
            percentile=percentile or make_bands(50, 50, 50, 50, 50),
            stanine=make_bands(o, c, e, a, n),
        )

    return _build


@pytest.fixture
def sample_responses():
    """Six answers covering every trait, in mixed answer formats."""
    return [
        RawResponse(question_id="q1", answer=5, response_time_ms=4200),
        RawResponse(question_id="q2", answer="agree", response_time_ms=3900),
        RawResponse(question_id="q3", answer={"value": 2}, response_time_ms=5100),
        RawResponse(question_id="q4", answer="often", response_time_ms=2800),
        RawResponse(question_id="q5", answer=1, response_time_ms=6100),
        RawResponse(question_id="q6", answer="strongly_agree", response_time_ms=3300),
    ]


@pytest.fixture
def sample_mappings():
    return [
        QuestionTraitMapping(
            question_id="q1",
            traits={Trait.OPENNESS: 1.0},
            facets={Facet.O5_IDEAS: 1.0},
        ),
        QuestionTraitMapping(
            question_id="q2",
            traits={Trait.CONSCIENTIOUSNESS: 1.0},
            facets={Facet.C4_ACHIEVEMENT_STRIVING: 1.0},
        ),
        QuestionTraitMapping(question_id="q3", traits={Trait.EXTRAVERSION: 1.0}),
        QuestionTraitMapping(question_id="q4", traits={Trait.AGREEABLENESS: 1.0}),
        QuestionTraitMapping(question_id="q5", traits={Trait.NEUROTICISM: 1.0}),
        QuestionTraitMapping(
            question_id="q6", traits={Trait.NEUROTICISM: 1.0}, reverse=True
        ),
    ]


@pytest.fixture
def sample_node_correlations():
    return [
        NodeCorrelation(node_id="q1", facet_code=Facet.O5_IDEAS, correlation=0.8),
        NodeCorrelation(node_id="q3", facet_code=Facet.E2_GREGARIOUSNESS, correlation=0.7),
        NodeCorrelation(node_id="q5", facet_code=Facet.N1_ANXIETY, correlation=0.9),
        NodeCorrelation(
            node_id="q5", facet_code=Facet.N6_VULNERABILITY, correlation=-0.6, confidence=0.5
        ),
    ]


@pytest.fixture
def trait_scores():
    """Factory: ``trait_scores(o=.., c=.., ...)`` -> TraitScores (default 3.0)."""
    return make_scores


@pytest.fixture
def trait_bands():
    """Factory: ``trait_bands(o=.., ...)`` -> TraitBands (default 5)."""
    return make_bands
