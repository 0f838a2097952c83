"""
Distribution Supports
=====================

Immutable descriptor of the domain of a univariate distribution: numeric
bounds, open/closed endpoints and the continuous/discrete kind.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from math import inf
from typing import cast, overload

import numpy as np

from pysatl_randkit.errors import ConstructionError
from pysatl_randkit.types import BoolArray, Kind, Number, NumericArray


@dataclass(frozen=True, slots=True, order=True)
class DistributionSupport:
    """
    Interval support with configurable closure.

    Parameters
    ----------
    lower : float, default=-inf
        Lower bound, finite or ``-inf``.
    upper : float, default=inf
        Upper bound, finite or ``+inf``.
    lower_closed : bool, default=False
        Whether ``lower`` belongs to the support (ignored if ``lower = -inf``).
    upper_closed : bool, default=False
        Whether ``upper`` belongs to the support (ignored if ``upper = inf``).
    kind : Kind, default=Kind.CONTINUOUS
        Continuous reals or discrete integers.

    Raises
    ------
    ConstructionError
        If a bound is NaN or infinite on the wrong side, or finite bounds are
        not ordered.

    Notes
    -----
    Finite bounds must satisfy ``lower < upper``. The single exception is a
    point support ``lower == upper`` with both endpoints closed, used by
    degenerate distributions.

    Infinite endpoints are limits, never members: an infinite side is always
    open, so ``REAL_LINE.contains(inf)`` and ``INTEGERS.contains(-inf)`` are
    ``False``. A closed flag passed for an infinite side is reset to ``False``.
    """

    lower: float = -inf
    upper: float = inf
    lower_closed: bool = False
    upper_closed: bool = False
    kind: Kind = Kind.CONTINUOUS

    def __post_init__(self) -> None:
        lower = float(self.lower)
        upper = float(self.upper)

        if math.isnan(lower) or lower == inf:
            raise ConstructionError(f"lower must be finite or -inf, got {self.lower}")
        if math.isnan(upper) or upper == -inf:
            raise ConstructionError(f"upper must be finite or +inf, got {self.upper}")

        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)
        object.__setattr__(self, "kind", Kind(self.kind))

        # Infinite endpoints are limits, never members.
        if lower == -inf:
            object.__setattr__(self, "lower_closed", False)
        if upper == inf:
            object.__setattr__(self, "upper_closed", False)

        if math.isfinite(lower) and math.isfinite(upper):
            is_point = lower == upper and self.lower_closed and self.upper_closed
            if not (lower < upper or is_point):
                raise ConstructionError(
                    f"lower must be strictly less than upper (got {lower} >= {upper})"
                )

    @classmethod
    def continuous(
        cls, lower: float, lower_closed: bool, upper: float, upper_closed: bool
    ) -> DistributionSupport:
        """Create a continuous (real-valued) support."""
        return cls(lower, upper, lower_closed, upper_closed, Kind.CONTINUOUS)

    @classmethod
    def discrete(
        cls, lower: float, lower_closed: bool, upper: float, upper_closed: bool
    ) -> DistributionSupport:
        """Create a discrete (integer-valued) support."""
        return cls(lower, upper, lower_closed, upper_closed, Kind.DISCRETE)

    @property
    def is_unbounded_below(self) -> bool:
        return self.lower == -inf

    @property
    def is_unbounded_above(self) -> bool:
        return self.upper == inf

    @property
    def is_discrete(self) -> bool:
        return self.kind is Kind.DISCRETE

    @property
    def is_continuous(self) -> bool:
        return self.kind is Kind.CONTINUOUS

    @property
    def is_single_point(self) -> bool:
        """Whether the support consists of exactly one point."""
        return self.lower == self.upper

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """
        Check if point(s) lie in the support interval.

        Parameters
        ----------
        x : Number or NumericArray
            Point(s) to check.

        Returns
        -------
        bool or BoolArray
            True for points within the interval, False otherwise.

        Notes
        -----
        Only the numeric interval is tested; for discrete supports ``x`` need
        not be an integer.
        """
        arr = np.asarray(x)

        lower_ok = (arr > self.lower) | (self.lower_closed & (arr >= self.lower))
        upper_ok = (arr < self.upper) | (self.upper_closed & (arr <= self.upper))
        result = lower_ok & upper_ok

        if np.ndim(arr) == 0:
            return bool(result)

        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        """Check if a single point is in the support."""
        return bool(self.contains(cast(Number, x)))

    def __str__(self) -> str:
        if self.is_unbounded_below:
            left = "(-inf"
        else:
            left = ("[" if self.lower_closed else "(") + str(self.lower)
        if self.is_unbounded_above:
            right = "inf)"
        else:
            right = str(self.upper) + ("]" if self.upper_closed else ")")
        return f"{left}, {right} {self.kind}"


REAL_LINE = DistributionSupport.continuous(-inf, False, inf, False)
"""Real line ``(-inf, inf)``, continuous."""

NON_NEGATIVE_REALS = DistributionSupport.continuous(0.0, True, inf, False)
"""Non-negative reals ``[0, inf)``, continuous."""

UNIT_INTERVAL_OPEN = DistributionSupport.continuous(0.0, False, 1.0, False)
"""Open unit interval ``(0, 1)``, continuous."""

UNIT_INTERVAL_CLOSED = DistributionSupport.continuous(0.0, True, 1.0, True)
"""Closed unit interval ``[0, 1]``, continuous."""

NON_NEGATIVE_INTEGERS = DistributionSupport.discrete(0.0, True, inf, False)
"""Non-negative integers ``{0, 1, 2, ...}``, discrete."""

INTEGERS = DistributionSupport.discrete(-inf, False, inf, False)
"""All integers, discrete."""


__all__ = [
    "DistributionSupport",
    "REAL_LINE",
    "NON_NEGATIVE_REALS",
    "UNIT_INTERVAL_OPEN",
    "UNIT_INTERVAL_CLOSED",
    "NON_NEGATIVE_INTEGERS",
    "INTEGERS",
]
