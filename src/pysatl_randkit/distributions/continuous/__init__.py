"""Continuous distributions."""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .uniform import UniformDouble, UniformDoubleParameters

__all__ = [
    "UniformDouble",
    "UniformDoubleParameters",
]
