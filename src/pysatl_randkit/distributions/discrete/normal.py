"""
Rounded (discrete) normal distribution.

``Y = round_half_even(X)`` with ``X ~ Normal(mu, sigma^2)``, optionally
restricted to a closed integer window ``[lower, upper]`` with renormalised
mass.

Probability mass function (untruncated):
    p(k) = Φ((k + 0.5 - mu) / sigma) - Φ((k - 0.5 - mu) / sigma)

Truncated to ``[lower, upper]``:
    Z = Φ((upper + 0.5 - mu) / sigma) - Φ((lower - 0.5 - mu) / sigma)
    p_trunc(k) = p(k) / Z for k in [lower, upper], 0 otherwise

If ``Z`` is not strictly positive the window holds numerically no mass and
the distribution collapses to a point mass at ``round_half_even(mu)``
clamped into the window.

``Φ`` is the A&S 7.1.26 approximation from
:mod:`pysatl_randkit.distributions.special` (max absolute error about
``1.5e-7``).
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import sys
import warnings
from typing import TYPE_CHECKING, overload

import numpy as np

from pysatl_randkit.distributions.distribution import DiscreteDistributionBase
from pysatl_randkit.distributions.parameters import (
    Parameters,
    constraint,
    is_integral,
    parameter_set,
)
from pysatl_randkit.distributions.special import round_half_even, standard_normal_cdf
from pysatl_randkit.distributions.support import INTEGERS, DistributionSupport
from pysatl_randkit.errors import DegenerateTruncationWarning, MomentTruncationWarning

if TYPE_CHECKING:
    from pysatl_randkit.rng import RandomSource
    from pysatl_randkit.types import FloatArray


MOMENT_WINDOW_SIGMAS = 8.0
"""Half-width, in standard deviations, of the initial moment summation window."""

MOMENT_TAIL_TOLERANCE = 1e-12
"""Window is widened while the summed mass is short of 1 by more than this."""

MOMENT_MAX_EXTENSION = 32
"""Maximum number of one-step widenings on each side of the window."""

MOMENT_MAX_TERMS = 1 << 20
"""Windows with more integers than this use the closed-form moments of the
underlying normal with Sheppard's correction instead of direct summation."""

# Beyond this distance Φ differences are exactly zero in double precision.
_NEGLIGIBLE_SIGMAS = 40.0


@parameter_set
class RoundedNormalParameters(Parameters):
    """
    Parameters of the rounded normal distribution.

    Parameters
    ----------
    mu : float
        Mean of the underlying continuous normal.
    sigma : float
        Standard deviation of the underlying continuous normal.
    lower : int or None
        Inclusive lower bound of the truncation window.
    upper : int or None
        Inclusive upper bound of the truncation window.
    """

    mu: float
    sigma: float
    lower: int | None = None
    upper: int | None = None

    @constraint(description="mu is finite")
    def check_mu_finite(self) -> bool:
        return math.isfinite(self.mu)

    @constraint(description="sigma is finite and sigma > 0")
    def check_sigma_positive(self) -> bool:
        """Check that standard deviation is finite and positive."""
        return math.isfinite(self.sigma) and self.sigma > 0

    @constraint(description="lower and upper are both given or both omitted")
    def check_window_complete(self) -> bool:
        return (self.lower is None) == (self.upper is None)

    @constraint(description="lower and upper are integers")
    def check_window_integral(self) -> bool:
        if self.lower is None:
            return True
        return is_integral(self.lower) and is_integral(self.upper)

    @constraint(description="lower and upper are within the floating-point range")
    def check_window_representable(self) -> bool:
        if self.lower is None or self.upper is None:
            return True
        return abs(self.lower) <= sys.float_info.max and abs(self.upper) <= sys.float_info.max

    @constraint(description="lower <= upper")
    def check_window_ordered(self) -> bool:
        if self.lower is None or self.upper is None:
            return True
        return self.lower <= self.upper

    @property
    def is_truncated(self) -> bool:
        return self.lower is not None


class RoundedNormal(DiscreteDistributionBase):
    """
    Normal distribution rounded to the nearest integer (ties to even).

    Parameters
    ----------
    mean : float
        Mean ``mu`` of the underlying continuous normal (finite).
    sigma : float
        Standard deviation of the underlying normal (finite, ``> 0``).
    lower, upper : int, optional
        Inclusive truncation window; give both or neither.
    seed : int, optional
        64-bit seed for a deterministic source.
    source : RandomSource, optional
        Caller-supplied source of uniform draws.

    Raises
    ------
    ConstructionError
        If ``mean`` or ``sigma`` are invalid, only one window bound is given,
        the bounds are not integers or exceed the float range,
        ``lower > upper``, or the seeding arguments are invalid.

    Warns
    -----
    DegenerateTruncationWarning
        If the window captures numerically zero probability. The instance
        then always returns the clamped rounded mean and has variance 0.

    Notes
    -----
    Sampling uses the Marsaglia polar method. Each accepted pair of uniforms
    yields two standard normals; the second is kept as a *spare* and consumed
    by the next call. This cache makes the instance stateful, so it must not
    be shared between threads without external locking.

    Truncated sampling rejects draws outside the window and retries without
    an iteration cap. Windows that are valid but lie far in a tail can make
    single draws slow; only windows with numerically zero mass are collapsed.

    Moments are computed once at construction: by summing the PMF over
    ``mu ± 8 sigma`` (widened up to 32 steps per side while tail mass above
    ``1e-12`` remains) when untruncated, exactly over the window otherwise.
    Windows of more than ``MOMENT_MAX_TERMS`` integers fall back to the
    moments of the continuous (truncated) normal plus Sheppard's ``1/12``
    variance correction, so memory stays bounded for any finite ``sigma``.

    Examples
    --------
    >>> d = RoundedNormal(0.3, 1.1, lower=-2, upper=3, seed=42)
    >>> d.cdf(-3), d.cdf(3)
    (0.0, 1.0)
    """

    def __init__(
        self,
        mean: float,
        sigma: float,
        lower: int | None = None,
        upper: int | None = None,
        *,
        seed: int | None = None,
        source: RandomSource | None = None,
    ) -> None:
        params = RoundedNormalParameters(mu=mean, sigma=sigma, lower=lower, upper=upper)
        super().__init__(params, seed=seed, source=source)

        self._mu = float(mean)
        self._sigma = float(sigma)
        self._lower = None if lower is None else int(lower)
        self._upper = None if upper is None else int(upper)

        # Marsaglia polar spare: empty, or holding one unused standard normal.
        self._has_spare = False
        self._spare = 0.0

        self._degenerate_value: int | None = None

        if self._lower is None or self._upper is None:
            self._normalization = 1.0
            self._mean, self._variance = self._untruncated_moments()
            return

        self._normalization = self._phi(self._upper + 0.5) - self._phi(self._lower - 0.5)
        if not self._normalization > 0.0:
            value = min(max(round_half_even(self._mu), self._lower), self._upper)
            self._degenerate_value = value
            self._mean, self._variance = float(value), 0.0
            warnings.warn(
                f"Truncation window [{self._lower}, {self._upper}] holds no probability mass "
                f"for mu={self._mu}, sigma={self._sigma}; collapsing to a point mass at {value}",
                DegenerateTruncationWarning,
                stacklevel=2,
            )
        else:
            self._mean, self._variance = self._truncated_moments(self._lower, self._upper)

    @classmethod
    def truncated(
        cls,
        mean: float,
        sigma: float,
        lower: int,
        upper: int,
        *,
        seed: int | None = None,
        source: RandomSource | None = None,
    ) -> RoundedNormal:
        """Create a rounded normal truncated to ``[lower, upper]``."""
        return cls(mean, sigma, lower, upper, seed=seed, source=source)

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def sigma(self) -> float:
        return self._sigma

    @property
    def lower(self) -> int | None:
        return self._lower

    @property
    def upper(self) -> int | None:
        return self._upper

    @property
    def is_truncated(self) -> bool:
        return self._lower is not None

    @property
    def is_degenerate(self) -> bool:
        """Whether the distribution collapsed to a point mass."""
        return self._degenerate_value is not None

    @property
    def normalization(self) -> float:
        """Renormalisation constant ``Z`` (``1.0`` when untruncated)."""
        return self._normalization

    @property
    def has_spare(self) -> bool:
        """Whether a cached standard normal is waiting to be used."""
        return self._has_spare

    @property
    def support(self) -> DistributionSupport:
        """
        Discrete support: all integers, ``[lower, upper]`` when truncated, or
        the single collapse point when degenerate.
        """
        if self._degenerate_value is not None:
            value = self._degenerate_value
            return DistributionSupport.discrete(value, True, value, True)
        if self._lower is None or self._upper is None:
            return INTEGERS
        return DistributionSupport.discrete(self._lower, True, self._upper, True)

    def sample(self) -> int:
        """Draw one integer variate."""
        if self._degenerate_value is not None:
            return self._degenerate_value

        while True:
            y = round_half_even(self._mu + self._sigma * self._next_standard_normal())
            if self._lower is None or self._upper is None or self._lower <= y <= self._upper:
                return y

    def _next_standard_normal(self) -> float:
        if self._has_spare:
            self._has_spare = False
            return self._spare

        while True:
            u = 2.0 * self._source.next_uniform() - 1.0
            v = 2.0 * self._source.next_uniform() - 1.0
            s = u * u + v * v
            if 0.0 < s < 1.0:
                break

        scale = math.sqrt(-2.0 * math.log(s) / s)
        self._spare = v * scale
        self._has_spare = True
        return u * scale

    @overload
    def _phi(self, x: float) -> float: ...
    @overload
    def _phi(self, x: FloatArray) -> FloatArray: ...

    def _phi(self, x: float | FloatArray) -> float | FloatArray:
        return standard_normal_cdf((x - self._mu) / self._sigma)

    def _pmf_untruncated(self, k: int) -> float:
        x = _to_float(k)
        p = self._phi(x + 0.5) - self._phi(x - 0.5)
        return p if p > 0.0 else 0.0

    def _pmf_untruncated_array(self, k: FloatArray) -> FloatArray:
        p = self._phi(k + 0.5) - self._phi(k - 0.5)
        return np.where(p > 0.0, p, 0.0)

    def _pmf_at(self, k: int) -> float:
        if self._degenerate_value is not None:
            return 1.0 if k == self._degenerate_value else 0.0
        if self._lower is None or self._upper is None:
            return self._pmf_untruncated(k)
        if not self._lower <= k <= self._upper:
            return 0.0
        return self._pmf_untruncated(k) / self._normalization

    def _cdf_at(self, k: int) -> float:
        if self._degenerate_value is not None:
            return 0.0 if k < self._degenerate_value else 1.0
        if self._lower is None or self._upper is None:
            return self._phi(_to_float(k) + 0.5)
        if k < self._lower - 1:
            return 0.0
        if k >= self._upper:
            return 1.0
        value = (self._phi(k + 0.5) - self._phi(self._lower - 0.5)) / self._normalization
        return min(max(value, 0.0), 1.0)

    def mean(self) -> float:
        """Mean ``E[Y]``, cached at construction."""
        return self._mean

    def variance(self) -> float:
        """Variance ``Var[Y]``, cached at construction."""
        return self._variance

    def _untruncated_moments(self) -> tuple[float, float]:
        if 2.0 * MOMENT_WINDOW_SIGMAS * self._sigma >= MOMENT_MAX_TERMS:
            # The rounding bias of the mean vanishes for wide normals.
            return self._mu, self._sigma * self._sigma + 1.0 / 12.0

        # Offsets from the rounded mean keep the second moment well conditioned.
        center = round_half_even(self._mu)
        lo = math.floor(self._mu - MOMENT_WINDOW_SIGMAS * self._sigma)
        hi = math.ceil(self._mu + MOMENT_WINDOW_SIGMAS * self._sigma)

        offsets = np.arange(lo - center, hi - center + 1, dtype=np.float64)
        probs = self._pmf_untruncated_array(center + offsets)
        mass = float(np.sum(probs))
        m1 = float(np.sum(probs * offsets))
        m2 = float(np.sum(probs * offsets * offsets))

        extension = 0
        while mass < 1.0 - MOMENT_TAIL_TOLERANCE and extension < MOMENT_MAX_EXTENSION:
            lo -= 1
            hi += 1
            p_lo = self._pmf_untruncated(lo)
            p_hi = self._pmf_untruncated(hi)
            d_lo = float(lo - center)
            d_hi = float(hi - center)
            mass += p_lo + p_hi
            m1 += p_lo * d_lo + p_hi * d_hi
            m2 += p_lo * d_lo * d_lo + p_hi * d_hi * d_hi
            extension += 1

        if mass < 1.0 - MOMENT_TAIL_TOLERANCE:
            warnings.warn(
                f"Moment summation over [{lo}, {hi}] captured mass {mass!r}; "
                "moments are normalised by the summed mass",
                MomentTruncationWarning,
                stacklevel=3,
            )

        if mass > 0.0 and abs(1.0 - mass) > 1e-15:
            m1 /= mass
            m2 /= mass
        return center + m1, max(m2 - m1 * m1, 0.0)

    def _truncated_moments(self, lower: int, upper: int) -> tuple[float, float]:
        center = min(max(round_half_even(self._mu), lower), upper)
        # Terms outside the negligible band are exactly zero; skipping them
        # keeps wide windows cheap without changing the sums.
        reach = _NEGLIGIBLE_SIGMAS * self._sigma
        if min(upper - lower, 2.0 * reach) >= MOMENT_MAX_TERMS:
            return self._continuous_truncated_moments(lower, upper)
        lo = max(lower, math.floor(self._mu - reach) - 1)
        hi = min(upper, math.ceil(self._mu + reach) + 1)

        offsets = np.arange(lo - center, hi - center + 1, dtype=np.float64)
        probs = self._pmf_untruncated_array(center + offsets) / self._normalization
        m1 = float(np.sum(probs * offsets))
        m2 = float(np.sum(probs * offsets * offsets))
        return center + m1, max(m2 - m1 * m1, 0.0)

    def _continuous_truncated_moments(self, lower: int, upper: int) -> tuple[float, float]:
        """
        Moments of ``Normal(mu, sigma^2)`` truncated to ``[lower - 0.5, upper + 0.5]``
        plus Sheppard's ``1/12`` variance correction for the rounding.

        The standardised window, clipped to the negligible band, is mapped
        onto ``t in [-1, 1]`` and integrated with composite Gauss-Legendre
        quadrature, so narrow windows keep their relative precision.
        """
        alpha = max((lower - 0.5 - self._mu) / self._sigma, -_NEGLIGIBLE_SIGMAS)
        beta = min((upper + 0.5 - self._mu) / self._sigma, _NEGLIGIBLE_SIGMAS)
        centre = 0.5 * alpha + 0.5 * beta
        half = 0.5 * beta - 0.5 * alpha

        x = centre + half * _QUADRATURE_POINTS
        density = _QUADRATURE_WEIGHTS * np.exp(-0.5 * x * x)
        mass = float(np.sum(density))
        t1 = float(np.sum(density * _QUADRATURE_POINTS)) / mass
        t2 = float(np.sum(density * _QUADRATURE_POINTS * _QUADRATURE_POINTS)) / mass

        scale = self._sigma * half
        mean = self._mu + self._sigma * centre + scale * t1
        spread = scale * math.sqrt(max(t2 - t1 * t1, 0.0))
        mean = min(max(mean, float(lower)), float(upper))
        return mean, spread * spread + 1.0 / 12.0


def _composite_gauss_legendre(panels: int, order: int) -> tuple[FloatArray, FloatArray]:
    nodes, weights = np.polynomial.legendre.leggauss(order)
    edges = np.linspace(-1.0, 1.0, panels + 1)
    mid = 0.5 * (edges[1:] + edges[:-1])
    half = 0.5 * (edges[1:] - edges[:-1])
    points = (mid[:, None] + half[:, None] * nodes).ravel()
    scaled = (half[:, None] * weights).ravel()
    return points, scaled


# Panels of at most 80 / 256 standard deviations; 32 nodes each integrate
# the normal density to double precision.
_QUADRATURE_POINTS, _QUADRATURE_WEIGHTS = _composite_gauss_legendre(256, 32)


def _to_float(k: int) -> float:
    try:
        return float(k)
    except OverflowError:
        return math.inf if k > 0 else -math.inf


__all__ = [
    "MOMENT_WINDOW_SIGMAS",
    "MOMENT_MAX_TERMS",
    "MOMENT_TAIL_TOLERANCE",
    "MOMENT_MAX_EXTENSION",
    "RoundedNormal",
    "RoundedNormalParameters",
]
