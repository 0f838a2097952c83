"""
Core Type Definitions
=====================

Fundamental types and enumerations used throughout PySATL RandKit.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from enum import StrEnum
from typing import Any, TypeAlias

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of distribution kinds.

    Attributes
    ----------
    DISCRETE : str
        Integer-valued distribution.
    CONTINUOUS : str
        Real-valued distribution.
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[NumPyNumber]
"""Type alias for numeric arrays."""

FloatArray = NDArray[np.float64]
"""Type alias for float arrays returned by vectorised characteristics."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""

GenericCharacteristicName: TypeAlias = str
"""Type alias for characteristic names (e.g., 'pdf', 'cdf')."""


class CharacteristicName(StrEnum):
    """
    Enumeration of the statistical characteristics a distribution exposes.

    Continuous distributions provide ``pdf``, ``cdf``, ``ppf``, ``mean`` and
    ``var``. Discrete distributions provide ``pmf`` in place of ``pdf``.
    """

    PDF = "pdf"
    PMF = "pmf"
    CDF = "cdf"
    PPF = "ppf"
    MEAN = "mean"
    VAR = "var"


class FamilyName(StrEnum):
    UNIFORM_DOUBLE = "UniformDouble"
    UNIFORM_INT = "UniformInt"
    ROUNDED_NORMAL = "RoundedNormal"


__all__ = [
    "Kind",
    "GenericCharacteristicName",
    "BoolArray",
    "FloatArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "CharacteristicName",
    "FamilyName",
]
