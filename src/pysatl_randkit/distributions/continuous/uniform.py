"""
Continuous uniform distribution on a half-open interval.

Probability density function:
    f(x) = 1 / (b - a) for x in [a, b), 0 otherwise

Samples are drawn by inverse transform, ``a + (b - a) * U`` with
``U ~ U[0, 1)``, so they never reach ``b``. The quantile function
nevertheless returns ``b`` at ``p = 1``.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_randkit.distributions.distribution import (
    ContinuousDistributionBase,
    check_probability,
)
from pysatl_randkit.distributions.parameters import Parameters, constraint, parameter_set
from pysatl_randkit.distributions.support import DistributionSupport

if TYPE_CHECKING:
    from pysatl_randkit.rng import RandomSource
    from pysatl_randkit.types import FloatArray, Number, NumericArray


@parameter_set
class UniformDoubleParameters(Parameters):
    """
    Parameters of the continuous uniform distribution.

    Parameters
    ----------
    lower_bound : float
        Inclusive lower bound ``a``.
    upper_bound : float
        Exclusive upper bound ``b``.
    """

    lower_bound: float
    upper_bound: float

    @constraint(description="lower_bound and upper_bound are finite")
    def check_bounds_finite(self) -> bool:
        return math.isfinite(self.lower_bound) and math.isfinite(self.upper_bound)

    @constraint(description="lower_bound < upper_bound")
    def check_lower_less_than_upper(self) -> bool:
        """Check that lower bound is less than upper bound."""
        return self.lower_bound < self.upper_bound

    @constraint(description="upper_bound - lower_bound is finite")
    def check_width_finite(self) -> bool:
        return math.isfinite(self.upper_bound - self.lower_bound)


class UniformDouble(ContinuousDistributionBase):
    """
    Uniform distribution on ``[a, b)``.

    Parameters
    ----------
    lower_bound : float
        Inclusive lower bound ``a`` (finite).
    upper_bound : float
        Exclusive upper bound ``b`` (finite, ``a < b``).
    seed : int, optional
        64-bit seed for a deterministic source.
    source : RandomSource, optional
        Caller-supplied source of uniform draws.

    Raises
    ------
    ConstructionError
        If the bounds are not finite and strictly ordered, or the seeding
        arguments are invalid.

    Examples
    --------
    >>> u = UniformDouble(2.0, 5.0, seed=999)
    >>> u.mean(), u.variance()
    (3.5, 0.75)
    >>> u.quantile(1.0)
    5.0
    """

    def __init__(
        self,
        lower_bound: float,
        upper_bound: float,
        *,
        seed: int | None = None,
        source: RandomSource | None = None,
    ) -> None:
        params = UniformDoubleParameters(lower_bound=lower_bound, upper_bound=upper_bound)
        super().__init__(params, seed=seed, source=source)
        self._a = float(lower_bound)
        self._b = float(upper_bound)
        self._width = self._b - self._a

    @property
    def lower_bound(self) -> float:
        return self._a

    @property
    def upper_bound(self) -> float:
        return self._b

    @property
    def width(self) -> float:
        return self._width

    @property
    def support(self) -> DistributionSupport:
        """Continuous support ``[a, b)``."""
        return DistributionSupport.continuous(self._a, True, self._b, False)

    def sample(self) -> float:
        """Draw one variate in ``[a, b)``."""
        x = self._a + self._width * self._source.next_uniform()
        # a + width * u may round up to b when u is within an ulp of 1.
        if x >= self._b:
            return math.nextafter(self._b, -math.inf)
        return x

    def pdf(self, x: Number | NumericArray) -> float | FloatArray:
        """
        Probability density function.
            - For x in [a, b): returns 1 / (b - a)
            - Otherwise: returns 0
        """
        arr = np.asarray(x, dtype=np.float64)
        result = np.where((arr >= self._a) & (arr < self._b), 1.0 / self._width, 0.0)
        return _unwrap(arr, result)

    def cdf(self, x: Number | NumericArray) -> float | FloatArray:
        """
        Cumulative distribution function.
            - For x <= a: returns 0
            - For x >= b: returns 1
            - Otherwise: returns (x - a) / (b - a)
        """
        arr = np.asarray(x, dtype=np.float64)
        result = np.where(
            arr <= self._a,
            0.0,
            np.where(arr >= self._b, 1.0, (arr - self._a) / self._width),
        )
        return _unwrap(arr, result)

    def quantile(self, p: Number | NumericArray) -> float | FloatArray:
        """
        Percent point function (inverse CDF).

        - For p = 0: returns a
        - For p = 1: returns b, although b itself is never sampled
        - For p in (0, 1): returns a + p * (b - a)

        Raises
        ------
        DomainError
            If probability is outside [0, 1]
        """
        check_probability(p)
        arr = np.asarray(p, dtype=np.float64)
        result = np.where(
            arr == 0.0,
            self._a,
            np.where(arr == 1.0, self._b, self._a + arr * self._width),
        )
        return _unwrap(arr, result)

    def mean(self) -> float:
        """Mean ``(a + b) / 2``."""
        return 0.5 * self._a + 0.5 * self._b

    def variance(self) -> float:
        """Variance ``(b - a)^2 / 12``."""
        return self._width**2 / 12.0


def _unwrap(arr: NumericArray, result: FloatArray) -> float | FloatArray:
    if np.ndim(arr) == 0:
        return float(result)
    return cast("FloatArray", result)


__all__ = [
    "UniformDouble",
    "UniformDoubleParameters",
]
