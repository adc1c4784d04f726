"""
OCEAN Scoring Engine — Response normalizer.

Maps a heterogeneous raw answer onto the canonical 1-5 scale:

  * numbers are clamped to [1, 5]
  * labels are looked up case-insensitively (agreement, frequency, letters)
  * objects contribute their ``value`` or ``score``
  * anything else is neutral (3)

Unrecognized answers are a data-quality concern, not an error: they are
logged and scored as neutral.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real
from typing import Any

import structlog

logger = structlog.get_logger("ocean.normalizer_service")


class ResponseNormalizer:
    """Canonicalise raw answers to the 1-5 Likert scale."""

    SCALE_MIN: float = 1.0
    SCALE_MAX: float = 5.0
    NEUTRAL: float = 3.0

    LABEL_VALUES: dict[str, float] = {
        # agreement
        "strongly_disagree": 1.0,
        "disagree": 2.0,
        "neutral": 3.0,
        "agree": 4.0,
        "strongly_agree": 5.0,
        # frequency
        "never": 1.0,
        "rarely": 2.0,
        "sometimes": 3.0,
        "often": 4.0,
        "always": 5.0,
        # letter choices
        "a": 1.0,
        "b": 2.0,
        "c": 3.0,
        "d": 4.0,
        "e": 5.0,
    }

    def normalize(self, answer: Any, reverse: bool = False) -> float:
        """Return ``answer`` on the 1-5 scale, reversed as ``6 - v`` if asked.

        Parameters
        ----------
        answer:
            Number, label string, or an object / mapping with ``value`` or
            ``score``.
        reverse:
            Apply reverse coding after clamping.  Neutral stays neutral.

        Returns
        -------
        float
            Value in [1, 5].
        """
        value = self._to_scale(answer)
        value = max(self.SCALE_MIN, min(self.SCALE_MAX, value))
        if reverse:
            value = (self.SCALE_MIN + self.SCALE_MAX) - value
        return value

    # ── Internals ───────────────────────────────────────────────────

    def _to_scale(self, answer: Any) -> float:
        number = self._as_number(answer)
        if number is not None:
            return number

        if isinstance(answer, str):
            key = answer.strip().lower()
            if key in self.LABEL_VALUES:
                return self.LABEL_VALUES[key]
            logger.debug("normalizer.unrecognized_label", label=answer)
            return self.NEUTRAL

        if answer is not None and not isinstance(answer, bool):
            inner = self._field(answer, "value") or self._field(answer, "score")
            number = self._as_number(inner)
            if number is not None:
                return number

        logger.debug("normalizer.unrecognized_answer", answer_type=type(answer).__name__)
        return self.NEUTRAL

    @staticmethod
    def _as_number(value: Any) -> float | None:
        # bool is a Real subclass but a yes/no flag is not a scale point
        if isinstance(value, bool) or not isinstance(value, Real):
            return None
        number = float(value)
        if math.isnan(number):
            return None
        return number

    @staticmethod
    def _field(answer: Any, name: str) -> Any:
        if isinstance(answer, Mapping):
            return answer.get(name)
        return getattr(answer, name, None)
