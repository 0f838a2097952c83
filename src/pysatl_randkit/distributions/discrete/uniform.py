"""
Discrete uniform distribution on a closed integer interval.

Probability mass function:
    p(k) = 1 / n for k in [a, b], 0 otherwise, with n = b - a + 1

Bounds and the cardinality ``n`` are exact Python integers, so no span is too
wide to represent. Equal bounds give a point mass.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from fractions import Fraction
from typing import TYPE_CHECKING

import numpy as np

from pysatl_randkit.distributions.distribution import (
    DiscreteDistributionBase,
    check_probability,
)
from pysatl_randkit.distributions.parameters import (
    Parameters,
    constraint,
    is_integral,
    parameter_set,
)
from pysatl_randkit.distributions.support import DistributionSupport

if TYPE_CHECKING:
    import numpy.typing as npt

    from pysatl_randkit.rng import RandomSource
    from pysatl_randkit.types import Number, NumericArray


@parameter_set
class UniformIntParameters(Parameters):
    """
    Parameters of the discrete uniform distribution.

    Parameters
    ----------
    lower_bound : int
        Inclusive lower bound ``a``.
    upper_bound : int
        Inclusive upper bound ``b``.
    """

    lower_bound: int
    upper_bound: int

    @constraint(description="lower_bound and upper_bound are integers")
    def check_bounds_integral(self) -> bool:
        return is_integral(self.lower_bound) and is_integral(self.upper_bound)

    @constraint(description="lower_bound <= upper_bound")
    def check_lower_not_greater_than_upper(self) -> bool:
        return self.lower_bound <= self.upper_bound


class UniformInt(DiscreteDistributionBase):
    """
    Uniform distribution on the integers ``a, a + 1, ..., b``.

    Parameters
    ----------
    lower_bound : int
        Inclusive lower bound ``a``.
    upper_bound : int
        Inclusive upper bound ``b``, ``a <= b``.
    seed : int, optional
        64-bit seed for a deterministic source.
    source : RandomSource, optional
        Caller-supplied source of uniform draws.

    Raises
    ------
    ConstructionError
        If the bounds are not integers or ``a > b``, or the seeding arguments
        are invalid.

    Notes
    -----
    Sampling uses the source's unbiased bounded-integer draw, so every value
    has exactly probability ``1 / n``.
    """

    def __init__(
        self,
        lower_bound: int,
        upper_bound: int,
        *,
        seed: int | None = None,
        source: RandomSource | None = None,
    ) -> None:
        params = UniformIntParameters(lower_bound=lower_bound, upper_bound=upper_bound)
        super().__init__(params, seed=seed, source=source)
        self._a = int(lower_bound)
        self._b = int(upper_bound)
        self._n = self._b - self._a + 1
        self._p = 1.0 / self._n

    @property
    def lower_bound(self) -> int:
        return self._a

    @property
    def upper_bound(self) -> int:
        return self._b

    @property
    def cardinality(self) -> int:
        """Number of support points ``n = b - a + 1``."""
        return self._n

    @property
    def support(self) -> DistributionSupport:
        """Discrete support ``[a, b]``."""
        return DistributionSupport.discrete(self._a, True, self._b, True)

    def sample(self) -> int:
        """Draw one integer in ``[a, b]``."""
        return self._a + self._source.next_bounded_int(self._n)

    def _pmf_at(self, k: int) -> float:
        return self._p if self._a <= k <= self._b else 0.0

    def _cdf_at(self, k: int) -> float:
        if k < self._a:
            return 0.0
        if k >= self._b:
            return 1.0
        return (k - self._a + 1) / self._n

    def quantile(self, p: Number | NumericArray) -> int | npt.NDArray[np.int64]:
        """
        Smallest ``k`` with ``cdf(k) >= p``.

        Evaluated in exact rational arithmetic; ``p = 0`` returns ``a`` and
        ``p = 1`` returns ``b``.

        Raises
        ------
        DomainError
            If probability is outside [0, 1]
        """
        check_probability(p)
        if np.ndim(p) == 0:
            return self._quantile_at(float(np.asarray(p)))
        arr = np.asarray(p, dtype=np.float64)
        values = [self._quantile_at(v) for v in arr.ravel().tolist()]
        try:
            out = np.array(values, dtype=np.int64)
        except OverflowError:
            out = np.array(values, dtype=object)
        return out.reshape(arr.shape)

    def _quantile_at(self, p: float) -> int:
        return self._a + max(math.ceil(Fraction(p) * self._n) - 1, 0)

    def mean(self) -> float:
        """Mean ``(a + b) / 2``."""
        return (self._a + self._b) / 2

    def variance(self) -> float:
        """Variance ``(n^2 - 1) / 12``."""
        return (self._n * self._n - 1) / 12


__all__ = [
    "UniformInt",
    "UniformIntParameters",
]
