"""
OCEAN Scoring Engine — Trait and facet vocabularies.

Both vocabularies are closed: the five Big Five traits and their thirty
facets.  Trait-keyed values travel as ``TraitScores`` / ``TraitBands`` which
have exactly one field per trait, so a partial trait set cannot exist.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Mapping

from pydantic import BaseModel, ConfigDict

from ocean_scoring.exceptions import InvalidTraitError


class Trait(str, Enum):
    OPENNESS = "openness"
    CONSCIENTIOUSNESS = "conscientiousness"
    EXTRAVERSION = "extraversion"
    AGREEABLENESS = "agreeableness"
    NEUROTICISM = "neuroticism"

    @property
    def letter(self) -> str:
        return self.value[0].upper()

    @classmethod
    def parse(cls, key: Any) -> "Trait":
        """Resolve a trait from its enum member, full name or OCEAN letter."""
        if isinstance(key, Trait):
            return key
        text = str(key).strip().lower()
        for trait in cls:
            if text == trait.value or (len(text) == 1 and text == trait.value[0]):
                return trait
        raise InvalidTraitError(str(key))


# Facet code prefix letter -> owning trait.
_TRAIT_BY_LETTER: dict[str, Trait] = {t.letter: t for t in Trait}


class Facet(str, Enum):
    """The thirty NEO-style facets, six per trait."""

    O1_FANTASY = "O1_Fantasy"
    O2_AESTHETICS = "O2_Aesthetics"
    O3_FEELINGS = "O3_Feelings"
    O4_ACTIONS = "O4_Actions"
    O5_IDEAS = "O5_Ideas"
    O6_VALUES = "O6_Values"

    C1_COMPETENCE = "C1_Competence"
    C2_ORDER = "C2_Order"
    C3_DUTIFULNESS = "C3_Dutifulness"
    C4_ACHIEVEMENT_STRIVING = "C4_Achievement_Striving"
    C5_SELF_DISCIPLINE = "C5_Self_Discipline"
    C6_DELIBERATION = "C6_Deliberation"

    E1_WARMTH = "E1_Warmth"
    E2_GREGARIOUSNESS = "E2_Gregariousness"
    E3_ASSERTIVENESS = "E3_Assertiveness"
    E4_ACTIVITY = "E4_Activity"
    E5_EXCITEMENT_SEEKING = "E5_Excitement_Seeking"
    E6_POSITIVE_EMOTIONS = "E6_Positive_Emotions"

    A1_TRUST = "A1_Trust"
    A2_STRAIGHTFORWARDNESS = "A2_Straightforwardness"
    A3_ALTRUISM = "A3_Altruism"
    A4_COMPLIANCE = "A4_Compliance"
    A5_MODESTY = "A5_Modesty"
    A6_TENDER_MINDEDNESS = "A6_Tender_Mindedness"

    N1_ANXIETY = "N1_Anxiety"
    N2_ANGRY_HOSTILITY = "N2_Angry_Hostility"
    N3_DEPRESSION = "N3_Depression"
    N4_SELF_CONSCIOUSNESS = "N4_Self_Consciousness"
    N5_IMPULSIVENESS = "N5_Impulsiveness"
    N6_VULNERABILITY = "N6_Vulnerability"

    @property
    def trait(self) -> Trait:
        return _TRAIT_BY_LETTER[self.value[0]]

    @property
    def label(self) -> str:
        """Human-readable facet name, e.g. ``"Achievement Striving"``."""
        return self.value.split("_", 1)[1].replace("_", " ")

    @classmethod
    def for_trait(cls, trait: Trait) -> list["Facet"]:
        return [f for f in cls if f.trait is trait]


# ══════════════════════════════════════════════════════════════════════════
# Trait-keyed value objects
# ══════════════════════════════════════════════════════════════════════════


class _TraitRecord(BaseModel):
    """Shared behaviour for one-field-per-trait records."""

    model_config = ConfigDict(frozen=True)

    def __getitem__(self, trait: Trait | str) -> Any:
        return getattr(self, Trait.parse(trait).value)

    def items(self) -> Iterator[tuple[Trait, Any]]:
        for trait in Trait:
            yield trait, getattr(self, trait.value)

    def values(self) -> list[Any]:
        return [getattr(self, t.value) for t in Trait]

    def as_dict(self) -> dict[str, Any]:
        return {t.value: getattr(self, t.value) for t in Trait}

    @classmethod
    def from_mapping(cls, data: Mapping[Any, Any]):
        """Build from a trait-keyed mapping.

        Keys may be ``Trait`` members, full names or OCEAN letters.  Every
        trait must be present exactly once.

        Raises
        ------
        InvalidTraitError
            If a key is not a trait or a trait is missing.
        """
        values: dict[str, Any] = {}
        for key, value in data.items():
            values[Trait.parse(key).value] = value
        for trait in Trait:
            if trait.value not in values:
                raise InvalidTraitError(trait.value, reason="missing trait")
        return cls(**values)

    @classmethod
    def uniform(cls, value: Any):
        return cls(**{t.value: value for t in Trait})


class TraitScores(_TraitRecord):
    """One float per trait (raw 1-5 scores, weights, 0-100 projections ...)."""

    openness: float
    conscientiousness: float
    extraversion: float
    agreeableness: float
    neuroticism: float


class TraitBands(_TraitRecord):
    """One integer per trait (percentiles or stanines)."""

    openness: int
    conscientiousness: int
    extraversion: int
    agreeableness: int
    neuroticism: int
