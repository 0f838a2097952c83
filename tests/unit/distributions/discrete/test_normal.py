"""
Tests for the rounded (discrete) normal distribution.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import sys
import warnings

import numpy as np
import pytest
from scipy.stats import norm, truncnorm

from pysatl_randkit.distributions import RoundedNormal
from pysatl_randkit.distributions.discrete import normal as normal_module
from pysatl_randkit.distributions.discrete.normal import RoundedNormalParameters
from pysatl_randkit.distributions.support import INTEGERS
from pysatl_randkit.errors import (
    ConstructionError,
    DegenerateTruncationWarning,
    MomentTruncationWarning,
)
from tests.unit.base import BaseDistributionTest
from tests.utils.mocks import ScriptedRandomSource


def _polar_pair(first: float, second: float) -> tuple[float, float]:
    u = 2.0 * first - 1.0
    v = 2.0 * second - 1.0
    s = u * u + v * v
    scale = math.sqrt(-2.0 * math.log(s) / s)
    return u * scale, v * scale


class TestRoundedNormalConstruction:
    def test_parameters(self):
        distr = RoundedNormal(0.3, 1.1, seed=1)
        params = distr.parameters
        assert isinstance(params, RoundedNormalParameters)
        assert params.parameters == {"mu": 0.3, "sigma": 1.1, "lower": None, "upper": None}
        assert distr.mu == 0.3
        assert distr.sigma == 1.1
        assert not distr.is_truncated
        assert distr.lower is None and distr.upper is None
        assert distr.normalization == 1.0

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"mean": math.nan, "sigma": 1.0}, "mu is finite"),
            ({"mean": math.inf, "sigma": 1.0}, "mu is finite"),
            ({"mean": 0.0, "sigma": 0.0}, "sigma > 0"),
            ({"mean": 0.0, "sigma": -1.0}, "sigma > 0"),
            ({"mean": 0.0, "sigma": math.nan}, "sigma > 0"),
            ({"mean": 0.0, "sigma": math.inf}, "sigma > 0"),
            ({"mean": 0.0, "sigma": 1.0, "lower": -1}, "both given"),
            ({"mean": 0.0, "sigma": 1.0, "upper": 1}, "both given"),
            ({"mean": 0.0, "sigma": 1.0, "lower": -1.5, "upper": 1}, "integers"),
            ({"mean": 0.0, "sigma": 1.0, "lower": 0, "upper": 10**400}, "floating-point range"),
            ({"mean": 0.0, "sigma": 1.0, "lower": 2, "upper": 1}, "lower <= upper"),
        ],
        ids=[
            "nan_mean",
            "inf_mean",
            "zero_sigma",
            "negative_sigma",
            "nan_sigma",
            "inf_sigma",
            "lower_only",
            "upper_only",
            "float_bound",
            "unrepresentable_bound",
            "reversed_window",
        ],
    )
    def test_invalid_parameters(self, kwargs, message):
        with pytest.raises(ConstructionError, match=message):
            RoundedNormal(**kwargs)

    def test_truncated_factory(self):
        distr = RoundedNormal.truncated(0.3, 1.1, -2, 3, seed=42)
        reference = RoundedNormal(0.3, 1.1, lower=-2, upper=3, seed=42)
        assert distr.is_truncated
        assert (distr.lower, distr.upper) == (-2, 3)
        assert [distr.sample() for _ in range(100)] == [reference.sample() for _ in range(100)]

    def test_support(self):
        assert RoundedNormal(0.0, 1.0, seed=1).support == INTEGERS
        support = RoundedNormal(0.0, 1.0, lower=-2, upper=3, seed=1).support
        assert support.is_discrete
        assert (support.lower, support.upper) == (-2.0, 3.0)
        assert support.lower_closed and support.upper_closed

    def test_single_point_window_is_not_degenerate(self):
        distr = RoundedNormal(0.0, 1.0, lower=0, upper=0, seed=1)
        assert not distr.is_degenerate
        assert distr.pmf(0) == pytest.approx(1.0, abs=1e-15)
        assert [distr.sample() for _ in range(50)] == [0] * 50
        assert distr.mean() == 0.0
        assert distr.variance() == 0.0


class TestRoundedNormalCharacteristics(BaseDistributionTest):
    @pytest.fixture
    def distr(self):
        return RoundedNormal(0.3, 1.1, seed=1)

    @pytest.fixture
    def truncated(self):
        return RoundedNormal(0.3, 1.1, lower=-2, upper=3, seed=42)

    def test_pmf_sums_to_one(self, distr):
        total = float(np.sum(distr.pmf(np.arange(-30, 31))))
        assert total == pytest.approx(1.0, abs=1e-6)

    def test_pmf_against_scipy(self, distr):
        k = np.arange(-10, 11)
        reference = norm.cdf(k + 0.5, loc=0.3, scale=1.1) - norm.cdf(k - 0.5, loc=0.3, scale=1.1)
        assert np.max(np.abs(distr.pmf(k) - reference)) <= 2e-7

    def test_pmf_is_non_negative(self):
        distr = RoundedNormal(0.0, 0.5, seed=1)
        assert np.all(distr.pmf(np.arange(-100, 101)) >= 0.0)

    def test_pmf_off_integers(self, distr):
        assert distr.pmf(0.5) == 0.0
        assert distr.pmf(1.0) == distr.pmf(1)

    def test_cdf_is_running_sum_of_pmf(self, distr):
        k = np.arange(-20, 21)
        running = np.cumsum(distr.pmf(k))
        np.testing.assert_allclose(distr.cdf(k), running, atol=1e-9)

    def test_cdf_monotone(self, distr):
        values = distr.cdf(np.arange(-20, 21))
        assert np.all(np.diff(values) >= 0.0)
        assert distr.cdf(-math.inf) == 0.0
        assert distr.cdf(math.inf) == 1.0

    def test_cdf_between_integers(self, distr):
        assert distr.cdf(1.7) == distr.cdf(1)
        assert distr.cdf(-0.2) == distr.cdf(-1)

    @pytest.mark.parametrize("mean", [0.0, 5.0, -3.0])
    def test_symmetry_around_integer_mean(self, mean):
        distr = RoundedNormal(mean, 1.7, seed=1)
        k = np.arange(0, 15)
        centre = int(mean)
        np.testing.assert_allclose(distr.pmf(centre + k), distr.pmf(centre - k), atol=1e-12)

    def test_untruncated_moments(self):
        distr = RoundedNormal(0.3, 2.0, seed=1)
        # Rounding a wide normal adds the Sheppard correction 1/12 to the variance.
        assert distr.mean() == pytest.approx(0.3, abs=1e-5)
        assert distr.variance() == pytest.approx(4.0 + 1.0 / 12.0, abs=5e-4)

    def test_moments_of_far_mean(self):
        distr = RoundedNormal(1e6 + 0.25, 3.0, seed=1)
        assert distr.mean() == pytest.approx(1e6 + 0.25, abs=1e-5)
        assert distr.variance() == pytest.approx(9.0 + 1.0 / 12.0, abs=5e-4)

    def test_moments_are_cached(self, distr):
        assert distr.mean() is distr.mean()
        assert distr.variance() is distr.variance()

    def test_truncated_pmf_sums_to_one(self, truncated):
        total = float(np.sum(truncated.pmf(np.arange(-2, 4))))
        assert total == pytest.approx(1.0, abs=1e-12)
        assert truncated.pmf(-3) == 0.0
        assert truncated.pmf(4) == 0.0

    def test_truncated_pmf_is_renormalised(self, truncated):
        plain = RoundedNormal(0.3, 1.1, seed=1)
        for k in range(-2, 4):
            assert truncated.pmf(k) == pytest.approx(
                plain.pmf(k) / truncated.normalization, abs=1e-15
            )

    def test_truncated_cdf(self, truncated):
        assert truncated.cdf(-3) == 0.0
        assert truncated.cdf(-100) == 0.0
        assert truncated.cdf(3) == 1.0
        assert truncated.cdf(100) == 1.0
        k = np.arange(-2, 4)
        np.testing.assert_allclose(truncated.cdf(k), np.cumsum(truncated.pmf(k)), atol=1e-12)

    def test_truncated_moments(self, truncated):
        k = np.arange(-2, 4)
        p = truncated.pmf(k)
        mean = float(np.sum(k * p))
        variance = float(np.sum((k - mean) ** 2 * p))
        assert truncated.mean() == pytest.approx(mean, abs=1e-12)
        assert truncated.variance() == pytest.approx(variance, abs=1e-12)

    def test_wide_window_matches_untruncated(self):
        wide = RoundedNormal(0.3, 1.1, lower=-10**9, upper=10**9, seed=1)
        plain = RoundedNormal(0.3, 1.1, seed=1)
        assert wide.normalization == pytest.approx(1.0, abs=1e-15)
        assert wide.mean() == pytest.approx(plain.mean(), abs=1e-9)
        assert wide.variance() == pytest.approx(plain.variance(), abs=1e-9)

    def test_moment_window_shortfall_warns(self, monkeypatch):
        monkeypatch.setattr(normal_module, "MOMENT_WINDOW_SIGMAS", 1.0)
        monkeypatch.setattr(normal_module, "MOMENT_MAX_EXTENSION", 0)
        with pytest.warns(MomentTruncationWarning):
            distr = RoundedNormal(0.0, 5.0, seed=1)
        # normalised by the captured mass, the symmetric window still centres on mu
        assert distr.mean() == pytest.approx(0.0, abs=1e-12)

    def test_no_warning_for_regular_parameters(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            RoundedNormal(0.3, 1.1, seed=1)
            RoundedNormal(0.3, 1.1, lower=-2, upper=3, seed=1)

    def test_points_beyond_float_range(self, distr, truncated):
        huge = 10**400
        assert distr.pmf(huge) == 0.0
        assert distr.pmf(-huge) == 0.0
        assert distr.cdf(huge) == 1.0
        assert distr.cdf(-huge) == 0.0
        assert truncated.pmf(huge) == 0.0
        assert truncated.cdf(huge) == 1.0
        assert truncated.cdf(-huge) == 0.0

    def test_window_at_float_limit(self):
        limit = int(sys.float_info.max)
        distr = RoundedNormal(0.0, 1.0, lower=-limit, upper=limit, seed=1)
        assert distr.normalization == pytest.approx(1.0, abs=1e-15)
        assert distr.mean() == pytest.approx(0.0, abs=1e-12)


class TestRoundedNormalWideMoments:
    def test_large_sigma_moments(self):
        sigma = 1e9
        distr = RoundedNormal(0.0, sigma, seed=1)
        assert distr.mean() == pytest.approx(0.0, abs=1e-6)
        assert distr.variance() == pytest.approx(sigma * sigma, rel=1e-9)

    def test_large_sigma_samples(self):
        distr = RoundedNormal(2.5, 1e9, seed=1)
        draws = [distr.sample() for _ in range(2_000)]
        assert all(isinstance(x, int) for x in draws)
        assert np.std(draws) == pytest.approx(1e9, rel=0.1)

    @pytest.mark.parametrize("sigma", [1e300, sys.float_info.max])
    def test_construction_with_extreme_sigma(self, sigma):
        distr = RoundedNormal(0.0, sigma, seed=1)
        assert distr.mean() == 0.0
        assert distr.variance() == math.inf

    def test_closed_form_continues_summed_moments(self, monkeypatch):
        summed = RoundedNormal(0.3, 2_000.0, seed=1)
        monkeypatch.setattr(normal_module, "MOMENT_MAX_TERMS", 1_000)
        closed = RoundedNormal(0.3, 2_000.0, seed=1)
        assert closed.mean() == pytest.approx(summed.mean(), abs=1e-6)
        assert closed.variance() == pytest.approx(summed.variance(), rel=1e-5)

    def test_large_sigma_symmetric_window(self):
        distr = RoundedNormal(0.0, 1e7, lower=-(10**8), upper=10**8, seed=1)
        assert distr.mean() == pytest.approx(0.0, abs=1e-6)
        assert distr.variance() == pytest.approx(1e14, rel=1e-6)

    def test_window_narrow_against_sigma_is_nearly_uniform(self):
        distr = RoundedNormal(0.0, 1e12, lower=-(10**7), upper=10**7, seed=1)
        n = 2 * 10**7 + 1
        assert distr.mean() == pytest.approx(0.0, abs=1e-3)
        assert distr.variance() == pytest.approx((n * n - 1) / 12, rel=1e-6)

    def test_large_sigma_half_window_against_scipy(self):
        sigma = 1e7
        distr = RoundedNormal(0.0, sigma, lower=0, upper=10**9, seed=1)
        reference = truncnorm(-0.5 / sigma, (10**9 + 0.5) / sigma, loc=0.0, scale=sigma)
        assert distr.mean() == pytest.approx(reference.mean(), rel=1e-9)
        assert distr.variance() == pytest.approx(reference.var() + 1.0 / 12.0, rel=1e-9)


class TestRoundedNormalDegenerate:
    def test_far_window_collapses(self):
        with pytest.warns(DegenerateTruncationWarning):
            distr = RoundedNormal(0.0, 1.0, lower=50, upper=50, source=ScriptedRandomSource())

        assert distr.is_degenerate
        assert distr.normalization == 0.0
        assert [distr.sample() for _ in range(10)] == [50] * 10
        assert distr.random_source.uniform_calls == 0
        assert distr.mean() == 50.0
        assert distr.variance() == 0.0
        assert distr.pmf(50) == 1.0
        assert distr.pmf(49) == 0.0
        assert distr.cdf(49) == 0.0
        assert distr.cdf(50) == 1.0

        support = distr.support
        assert support.is_single_point
        assert support.lower == 50.0

    def test_collapse_point_is_clamped(self):
        with pytest.warns(DegenerateTruncationWarning, match="-5"):
            distr = RoundedNormal(100.0, 0.5, lower=-10, upper=-5, seed=3)
        assert distr.sample() == -5
        assert distr.mean() == -5.0

    def test_collapse_point_clamped_from_below(self):
        with pytest.warns(DegenerateTruncationWarning):
            distr = RoundedNormal(-100.0, 0.5, lower=5, upper=10, seed=3)
        assert distr.sample() == 5


class TestRoundedNormalSampling(BaseDistributionTest):
    def test_seeded_scenario(self):
        first = RoundedNormal(0.3, 1.1, lower=-2, upper=3, seed=42)
        second = RoundedNormal(0.3, 1.1, lower=-2, upper=3, seed=42)

        draws = self.draw(first, 50_000)
        assert draws == self.draw(second, 50_000)
        assert all(-2 <= x <= 3 for x in draws)
        assert first.cdf(-3) == 0.0
        assert first.cdf(3) == 1.0

    def test_samples_are_ints(self):
        distr = RoundedNormal(0.3, 1.1, seed=5)
        assert all(type(x) is int for x in self.draw(distr, 100))

    def test_spare_is_cached_between_calls(self):
        source = ScriptedRandomSource(uniforms=[0.75, 0.6])
        distr = RoundedNormal(10.0, 3.0, source=source)
        first, second = _polar_pair(0.75, 0.6)

        assert not distr.has_spare
        assert distr.sample() == round(10.0 + 3.0 * first)
        assert source.uniform_calls == 2
        assert distr.has_spare

        assert distr.sample() == round(10.0 + 3.0 * second)
        assert source.uniform_calls == 2
        assert not distr.has_spare

    def test_polar_rejects_points_outside_unit_disc(self):
        # (0.8, 0.8) lies outside the disc, (0, 0) is the excluded origin
        source = ScriptedRandomSource(uniforms=[0.9, 0.9, 0.5, 0.5, 0.75, 0.6])
        distr = RoundedNormal(10.0, 3.0, source=source)
        first, _ = _polar_pair(0.75, 0.6)

        assert distr.sample() == round(10.0 + 3.0 * first)
        assert source.uniform_calls == 6

    def test_ties_round_to_even(self):
        source = ScriptedRandomSource(uniforms=[0.5, 0.75, 0.5, 0.75])
        assert RoundedNormal(2.5, 1.0, source=source).sample() == 2
        assert RoundedNormal(3.5, 1.0, source=source).sample() == 4

    def test_truncation_rejects_and_retries(self):
        # first normal is 0 (outside [1, 5]); the cached spare is then accepted
        source = ScriptedRandomSource(uniforms=[0.5, 0.75])
        distr = RoundedNormal(0.0, 1.0, lower=1, upper=5, source=source)
        _, spare = _polar_pair(0.5, 0.75)

        assert distr.sample() == round(spare)
        assert source.uniform_calls == 2
        assert not distr.has_spare

    def test_monte_carlo_moments(self):
        distr = RoundedNormal(0.3, 1.1, seed=2024)
        values = np.array(self.draw(distr, 50_000), dtype=np.float64)
        assert values.mean() == pytest.approx(distr.mean(), abs=0.03)
        assert values.var() == pytest.approx(distr.variance(), rel=0.05)

    def test_monte_carlo_truncated_frequencies(self):
        distr = RoundedNormal(0.3, 1.1, lower=-2, upper=3, seed=7)
        values = np.array(self.draw(distr, 50_000))
        for k in range(-2, 4):
            frequency = float(np.mean(values == k))
            assert frequency == pytest.approx(distr.pmf(k), abs=0.01)

    def test_sample_n(self):
        sample = RoundedNormal(0.3, 1.1, lower=-2, upper=3, seed=42).sample_n(1_000)
        assert sample.shape == (1_000, 1)
        assert sample.array.dtype == np.int64
        assert sample.array.min() >= -2
        assert sample.array.max() <= 3
