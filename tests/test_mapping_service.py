"""Unit tests for MappingResolver — predefined and generated trait mappings."""
import pytest

from ocean_scoring.schemas.scoring import QuestionSpec
from ocean_scoring.schemas.traits import Trait
from ocean_scoring.services.mapping_service import (
    MappingResolver,
    RegexReverseScoreDetector,
    ReverseScoreDetector,
)


@pytest.fixture
def resolver():
    return MappingResolver()


class NeverReverse:
    def is_reverse_scored(self, question_text: str) -> bool:
        return False


class TestResolve:
    """Tests for mapping table selection."""

    @pytest.mark.parametrize(
        "assessment_type,count,first_id",
        [("individual", 3, "ind_001"), ("executive", 2, "exec_001"), ("organizational", 2, "org_001")],
    )
    def test_predefined_tables(self, resolver, assessment_type, count, first_id):
        mappings = resolver.resolve(assessment_type)
        assert len(mappings) == count
        assert mappings[0].question_id == first_id

    def test_predefined_returned_verbatim(self, resolver):
        mapping = resolver.resolve("individual")[0]
        assert mapping.traits == {Trait.OPENNESS: 0.6, Trait.NEUROTICISM: -0.3}
        assert mapping.reverse is False

    def test_other_type_generates(self, resolver):
        mappings = resolver.resolve(
            "pulse-survey",
            [QuestionSpec(id="q1", domain="Execution", question_text="I finish what I start")],
        )
        assert len(mappings) == 1
        assert mappings[0].question_id == "q1"
        assert mappings[0].traits == {Trait.CONSCIENTIOUSNESS: 1.0}

    def test_no_type_no_questions(self, resolver):
        assert resolver.resolve(None) == []


class TestGenerate:
    """Tests for domain-driven mapping generation."""

    def test_unknown_domain_fallback(self, resolver):
        mapping = resolver.generate_one(
            QuestionSpec(id="q9", domain="astrology", question_text="I stay calm")
        )
        assert mapping.traits == {t: 0.2 for t in Trait}
        assert mapping.reverse is False

    def test_reverse_detected_from_wording(self, resolver):
        mapping = resolver.generate_one(
            QuestionSpec(id="q2", domain="decision-making", question_text="I stay calm under pressure")
        )
        assert mapping.reverse is True
        assert mapping.traits == {Trait.CONSCIENTIOUSNESS: 0.8, Trait.NEUROTICISM: -0.4}

    def test_plain_wording_not_reversed(self, resolver):
        mapping = resolver.generate_one(
            QuestionSpec(id="q3", domain="vision", question_text="I imagine bold futures")
        )
        assert mapping.reverse is False

    def test_injected_detector(self):
        resolver = MappingResolver(reverse_detector=NeverReverse())
        mapping = resolver.generate_one(
            QuestionSpec(id="q2", domain="culture", question_text="I prefer routine")
        )
        assert mapping.reverse is False

    def test_pillar_blends_domain_weights(self, resolver):
        """performance x execution: C 0.4 x 0.9 + 0.6 x 1.0, E 0.4 x 0.5."""
        mapping = resolver.generate_one(
            QuestionSpec(id="q4", domain="execution", metadata={"pillar": "performance"})
        )
        assert mapping.traits == {
            Trait.CONSCIENTIOUSNESS: pytest.approx(0.96),
            Trait.EXTRAVERSION: pytest.approx(0.2),
        }

    def test_unknown_pillar_keeps_domain_weights(self, resolver):
        mapping = resolver.generate_one(
            QuestionSpec(id="q5", domain="execution", metadata={"pillar": "legacy"})
        )
        assert mapping.traits == {Trait.CONSCIENTIOUSNESS: 1.0}

    def test_pillar_ignored_for_unknown_domain(self, resolver):
        mapping = resolver.generate_one(
            QuestionSpec(id="q6", domain="astrology", metadata={"pillar": "potential"})
        )
        assert mapping.traits == {t: 0.2 for t in Trait}


class TestRegexReverseScoreDetector:
    """Tests for the keyword heuristic."""

    @pytest.mark.parametrize(
        "text",
        [
            "I am relaxed most of the time",
            "I prefer TRADITIONAL approaches",
            "I am a quiet person",
            "I can be critical of others",
            "I like to improvise",
        ],
    )
    def test_low_pole_wording(self, text):
        assert RegexReverseScoreDetector().is_reverse_scored(text)

    def test_substring_false_positive(self):
        """'unstable' contains 'stable' and is flagged."""
        assert RegexReverseScoreDetector().is_reverse_scored("My mood is unstable")

    def test_empty_text(self):
        assert not RegexReverseScoreDetector().is_reverse_scored("")

    def test_custom_patterns(self):
        detector = RegexReverseScoreDetector(patterns=[r"\bnot\b"])
        assert detector.is_reverse_scored("I do not plan ahead")
        assert not detector.is_reverse_scored("I am calm")

    def test_protocol(self):
        assert isinstance(RegexReverseScoreDetector(), ReverseScoreDetector)
        assert isinstance(NeverReverse(), ReverseScoreDetector)


class TestWeightHelpers:
    """Tests for pillar blending and confidence shrinkage."""

    def test_pillar_domain_blend(self, resolver):
        """0.4 x 0.9 (performance) + 0.6 x 1.0 (execution)."""
        weight = resolver.pillar_domain_trait_weight("performance", "execution", Trait.CONSCIENTIOUSNESS)
        assert weight == pytest.approx(0.96)

    def test_unknown_pillar_and_domain(self, resolver):
        assert resolver.pillar_domain_trait_weight("x", "y", Trait.OPENNESS) == 0.0

    @pytest.mark.parametrize(
        "score,confidence,expected",
        [(5.0, 100, 5.0), (5.0, 0, 4.0), (1.0, 50, 1.5), (3.0, 0, 3.0)],
    )
    def test_confidence_adjustment(self, score, confidence, expected):
        assert MappingResolver.adjust_trait_score_by_confidence(score, confidence) == pytest.approx(expected)
