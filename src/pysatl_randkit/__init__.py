"""
PySATL RandKit
==============

Random variate generation with a uniform statistical surface: sampling,
density or mass, cumulative and quantile functions, mean and variance, built
on a pluggable, seedable source of uniform random bits.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .distributions import *
from .distributions import __all__ as _distr_all
from .errors import *
from .errors import __all__ as _errors_all
from .families import *
from .families import __all__ as _family_all
from .rng import *
from .rng import __all__ as _rng_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-randkit")
__all__ = [
    "__version__",
    *_distr_all,
    *_errors_all,
    *_family_all,
    *_rng_all,
    *_types_all,
]

del _distr_all
del _errors_all
del _family_all
del _rng_all
del _types_all
