"""Discrete (integer-valued) distributions."""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .normal import RoundedNormal, RoundedNormalParameters
from .uniform import UniformInt, UniformIntParameters

__all__ = [
    "UniformInt",
    "UniformIntParameters",
    "RoundedNormal",
    "RoundedNormalParameters",
]
