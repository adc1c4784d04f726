"""
OCEAN Scoring Engine — Percentile and stanine conversion.

Converts a raw 1-5 trait score into a population percentile and a stanine
band:

  1. z = (raw - mean) / sd, using the per-trait norm table
  2. percentile = normal_cdf(z) x 100, clamped to [1, 99], rounded half-up
  3. stanine from the fixed 9-band cut table

The CDF uses the Abramowitz-Stegun 7.1.26 rational approximation of erf so
that banding matches previously issued reports exactly.
"""

from __future__ import annotations

import math
from bisect import bisect_right

import structlog

from ocean_scoring.schemas.scoring import TraitNorm
from ocean_scoring.schemas.traits import Trait, TraitBands, TraitScores

logger = structlog.get_logger("ocean.percentile_service")

# ──────────────────────────────────────────────────────────────────────────────
# Population norms (mean, sd) on the 1-5 scale.
# ──────────────────────────────────────────────────────────────────────────────

OCEAN_NORMS: dict[Trait, TraitNorm] = {
    Trait.OPENNESS: TraitNorm(mean=3.92, sd=0.66),
    Trait.CONSCIENTIOUSNESS: TraitNorm(mean=3.81, sd=0.69),
    Trait.EXTRAVERSION: TraitNorm(mean=3.39, sd=0.86),
    Trait.AGREEABLENESS: TraitNorm(mean=3.94, sd=0.63),
    Trait.NEUROTICISM: TraitNorm(mean=2.96, sd=0.87),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class PercentileService:
    """Raw score -> percentile -> stanine conversions."""

    # ── A&S 7.1.26 constants ────────────────────────────────────────
    A1: float = 0.254829592
    A2: float = -0.284496736
    A3: float = 1.421413741
    A4: float = -1.453152027
    A5: float = 1.061405429
    P: float = 0.3275911

    # Upper (exclusive) percentile bound of stanines 1-8; 9 is open-ended.
    STANINE_CUTS: list[int] = [4, 11, 23, 40, 60, 77, 89, 96]

    MIN_PERCENTILE: int = 1
    MAX_PERCENTILE: int = 99

    def __init__(self, norms: dict[Trait, TraitNorm] | None = None) -> None:
        self.norms = norms or OCEAN_NORMS

    def normal_cdf(self, z: float) -> float:
        """Standard normal CDF via the Abramowitz-Stegun erf approximation."""
        sign = -1.0 if z < 0 else 1.0
        x = abs(z) / math.sqrt(2.0)
        t = 1.0 / (1.0 + self.P * x)
        poly = ((((self.A5 * t + self.A4) * t) + self.A3) * t + self.A2) * t + self.A1
        y = 1.0 - poly * t * math.exp(-x * x)
        return 0.5 * (1.0 + sign * y)

    def to_percentile(self, raw: float, mean: float, sd: float) -> int:
        """Convert a raw score to an integer percentile in [1, 99]."""
        z = (raw - mean) / sd
        pct = clamp(self.normal_cdf(z) * 100.0, self.MIN_PERCENTILE, self.MAX_PERCENTILE)
        return round_half_up(pct)

    def to_stanine(self, percentile: float) -> int:
        """Map a percentile onto the standard 1-9 stanine bands."""
        return bisect_right(self.STANINE_CUTS, percentile) + 1

    def trait_percentile(self, trait: Trait, raw: float) -> int:
        norm = self.norms[trait]
        return self.to_percentile(raw, norm.mean, norm.sd)

    def convert(self, raw: TraitScores) -> tuple[TraitBands, TraitBands]:
        """Return ``(percentile, stanine)`` for a full raw trait set."""
        percentiles = {t.value: self.trait_percentile(t, score) for t, score in raw.items()}
        stanines = {t: self.to_stanine(p) for t, p in percentiles.items()}
        logger.debug("percentile.convert", percentiles=percentiles, stanines=stanines)
        return TraitBands(**percentiles), TraitBands(**stanines)
