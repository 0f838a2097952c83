"""
Distributions subpackage

Interfaces and implementations of the probability distributions provided by
PySATL RandKit:

- capability protocols and base classes (:mod:`.distribution`);
- support descriptors (:mod:`.support`);
- parameter sets with declarative constraints (:mod:`.parameters`);
- sample containers and sampler interfaces (:mod:`.sampling`);
- numerical helpers (:mod:`.special`);
- concrete families (:mod:`.continuous`, :mod:`.discrete`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .continuous import UniformDouble, UniformDoubleParameters
from .discrete import (
    RoundedNormal,
    RoundedNormalParameters,
    UniformInt,
    UniformIntParameters,
)
from .distribution import (
    ContinuousDistribution,
    ContinuousDistributionBase,
    DiscreteDistribution,
    DiscreteDistributionBase,
)
from .parameters import Parameters, constraint, parameter_set
from .sampling import ArraySample, DoubleSampler, IntSampler, Sample
from .special import erf_approx, round_half_even, standard_normal_cdf
from .support import (
    INTEGERS,
    NON_NEGATIVE_INTEGERS,
    NON_NEGATIVE_REALS,
    REAL_LINE,
    UNIT_INTERVAL_CLOSED,
    UNIT_INTERVAL_OPEN,
    DistributionSupport,
)

__all__ = [
    # protocols and bases
    "ContinuousDistribution",
    "DiscreteDistribution",
    "ContinuousDistributionBase",
    "DiscreteDistributionBase",
    # parameters
    "Parameters",
    "constraint",
    "parameter_set",
    # sampling
    "Sample",
    "ArraySample",
    "DoubleSampler",
    "IntSampler",
    # special functions
    "erf_approx",
    "standard_normal_cdf",
    "round_half_even",
    # support
    "DistributionSupport",
    "REAL_LINE",
    "NON_NEGATIVE_REALS",
    "UNIT_INTERVAL_OPEN",
    "UNIT_INTERVAL_CLOSED",
    "NON_NEGATIVE_INTEGERS",
    "INTEGERS",
    # families
    "UniformDouble",
    "UniformDoubleParameters",
    "UniformInt",
    "UniformIntParameters",
    "RoundedNormal",
    "RoundedNormalParameters",
]
