"""Unit tests for PercentileService — norm-referenced percentile and stanine bands."""
import pytest

from ocean_scoring.schemas.scoring import TraitNorm
from ocean_scoring.schemas.traits import Trait
from ocean_scoring.services.percentile_service import (
    OCEAN_NORMS,
    PercentileService,
    clamp,
    round_half_up,
)


@pytest.fixture
def percentile_service():
    return PercentileService()


class TestNormalCdf:
    """Tests for the Abramowitz-Stegun normal CDF."""

    def test_zero_is_half(self, percentile_service):
        assert percentile_service.normal_cdf(0.0) == pytest.approx(0.5, abs=1e-6)

    def test_symmetry(self, percentile_service):
        upper = percentile_service.normal_cdf(1.3)
        lower = percentile_service.normal_cdf(-1.3)
        assert upper + lower == pytest.approx(1.0, abs=1e-7)

    def test_one_sd(self, percentile_service):
        """Phi(1) ~= 0.8413."""
        assert percentile_service.normal_cdf(1.0) == pytest.approx(0.8413, abs=1e-4)

    def test_monotonic(self, percentile_service):
        values = [percentile_service.normal_cdf(z / 4) for z in range(-16, 17)]
        assert values == sorted(values)


class TestToPercentile:
    """Tests for raw -> percentile conversion."""

    def test_mean_is_fiftieth(self, percentile_service):
        """Raw 3.81 against {mean 3.81, sd 0.69}: z = 0 -> 50."""
        assert percentile_service.to_percentile(3.81, 3.81, 0.69) == 50

    def test_clamped_low(self, percentile_service):
        assert percentile_service.to_percentile(-10.0, 3.0, 0.5) == 1

    def test_clamped_high(self, percentile_service):
        assert percentile_service.to_percentile(10.0, 3.0, 0.5) == 99

    def test_one_sd_above(self, percentile_service):
        assert percentile_service.to_percentile(4.0, 3.0, 1.0) == 84

    def test_custom_norms(self):
        norms = {t: TraitNorm(mean=3.0, sd=1.0) for t in Trait}
        service = PercentileService(norms=norms)
        assert service.trait_percentile(Trait.OPENNESS, 3.0) == 50


class TestToStanine:
    """Tests for the fixed 9-band stanine table."""

    @pytest.mark.parametrize(
        "percentile,stanine",
        [
            (1, 1),
            (3, 1),
            (4, 2),
            (10, 2),
            (11, 3),
            (22, 3),
            (23, 4),
            (40, 5),
            (50, 5),
            (59, 5),
            (60, 6),
            (77, 7),
            (89, 8),
            (95, 8),
            (96, 9),
            (99, 9),
        ],
    )
    def test_band_edges(self, percentile_service, percentile, stanine):
        assert percentile_service.to_stanine(percentile) == stanine


class TestConvert:
    """Tests for full trait-set conversion."""

    def test_norm_means_land_mid_scale(self, percentile_service, trait_scores):
        raw = trait_scores(
            o=OCEAN_NORMS[Trait.OPENNESS].mean,
            c=OCEAN_NORMS[Trait.CONSCIENTIOUSNESS].mean,
            e=OCEAN_NORMS[Trait.EXTRAVERSION].mean,
            a=OCEAN_NORMS[Trait.AGREEABLENESS].mean,
            n=OCEAN_NORMS[Trait.NEUROTICISM].mean,
        )
        percentile, stanine = percentile_service.convert(raw)
        assert percentile.values() == [50] * 5
        assert stanine.values() == [5] * 5

    def test_bounds_always_hold(self, percentile_service, trait_scores):
        for raw in (trait_scores(1, 1, 1, 1, 1), trait_scores(5, 5, 5, 5, 5)):
            percentile, stanine = percentile_service.convert(raw)
            assert all(1 <= p <= 99 for p in percentile.values())
            assert all(1 <= s <= 9 for s in stanine.values())


class TestHelpers:
    """Tests for rounding and clamping helpers."""

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4999) == 2
        assert round_half_up(-0.5) == 0

    def test_clamp(self):
        assert clamp(7, 1, 5) == 5
        assert clamp(-1, 1, 5) == 1
        assert clamp(3.3, 1, 5) == 3.3
