"""
Special Functions
=================

Numerical helpers shared by the distributions:

- :func:`erf_approx` – Abramowitz & Stegun 7.1.26 error function,
  maximum absolute error about ``1.5e-7``;
- :func:`standard_normal_cdf` – ``Φ(x)`` built on :func:`erf_approx`;
- :func:`round_half_even` – nearest-integer rounding with ties to even.

All functions accept scalars or arrays and evaluate element-wise. No platform
``erf`` primitive is used, so results are identical wherever IEEE-754
arithmetic is.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import cast, overload

import numpy as np

from pysatl_randkit.types import FloatArray, Number, NumericArray

# Abramowitz & Stegun 7.1.26 coefficients.
_P = 0.3275911
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429

INV_SQRT2 = 1.0 / math.sqrt(2.0)

ERF_MAX_ABS_ERROR = 1.5e-7
"""Documented bound on ``|erf_approx(x) - erf(x)|``."""


@overload
def erf_approx(x: Number) -> float: ...
@overload
def erf_approx(x: NumericArray) -> FloatArray: ...


def erf_approx(x: Number | NumericArray) -> float | FloatArray:
    """
    Error function approximation (A&S 7.1.26, Horner form).

    Parameters
    ----------
    x : Number or NumericArray
        Argument(s).

    Returns
    -------
    float or FloatArray
        ``erf(x)`` with absolute error below :data:`ERF_MAX_ABS_ERROR`.
        The approximation is odd: ``erf_approx(-x) == -erf_approx(x)``.
    """
    arr = np.asarray(x, dtype=np.float64)
    ax = np.abs(arr)
    t = 1.0 / (1.0 + _P * ax)
    poly = ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t
    result = np.sign(arr) * (1.0 - poly * np.exp(-ax * ax))

    if np.ndim(arr) == 0:
        return float(result)
    return cast(FloatArray, result)


@overload
def standard_normal_cdf(x: Number) -> float: ...
@overload
def standard_normal_cdf(x: NumericArray) -> FloatArray: ...


def standard_normal_cdf(x: Number | NumericArray) -> float | FloatArray:
    """Standard normal CDF ``Φ(x) = (1 + erf(x / √2)) / 2``."""
    arr = np.asarray(x, dtype=np.float64)
    result = 0.5 * (1.0 + erf_approx(arr * INV_SQRT2))
    if np.ndim(arr) == 0:
        return float(result)
    return cast(FloatArray, result)


def round_half_even(x: float) -> int:
    """
    Round to the nearest integer, resolving ``.5`` ties to the even neighbour.

    Parameters
    ----------
    x : float
        Finite value.

    Returns
    -------
    int
        Rounded value.
    """
    return round(float(x))


__all__ = [
    "ERF_MAX_ABS_ERROR",
    "erf_approx",
    "standard_normal_cdf",
    "round_half_even",
]
