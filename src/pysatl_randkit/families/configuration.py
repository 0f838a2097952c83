"""
Distribution Families Configuration
===================================

Registers the built-in distribution families of PySATL RandKit:

- :class:`~pysatl_randkit.distributions.UniformDouble` — continuous uniform
  on ``[a, b)``;
- :class:`~pysatl_randkit.distributions.UniformInt` — discrete uniform on
  ``[a, b]``;
- :class:`~pysatl_randkit.distributions.RoundedNormal` — rounded normal,
  optionally truncated.

Notes
-----
- All families are registered in the global :class:`DistributionRegister`.
- Configuration is idempotent; call :func:`reset_distributions_register` to
  start from an empty register (e.g. between tests).
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_randkit.distributions import RoundedNormal, UniformDouble, UniformInt
from pysatl_randkit.families.registry import DistributionRegister
from pysatl_randkit.types import FamilyName


@lru_cache(maxsize=1)
def configure_distributions_register() -> DistributionRegister:
    """
    Register all built-in distribution families in the global registry.

    Returns
    -------
    DistributionRegister
        The global registry of distribution families.
    """
    builtins = {
        FamilyName.UNIFORM_DOUBLE: UniformDouble,
        FamilyName.UNIFORM_INT: UniformInt,
        FamilyName.ROUNDED_NORMAL: RoundedNormal,
    }
    for name, factory in builtins.items():
        if not DistributionRegister.contains(name):
            DistributionRegister.register(name, factory)
    return DistributionRegister()


def reset_distributions_register() -> None:
    """
    Reset the cached distributions registry.
    """
    configure_distributions_register.cache_clear()
    DistributionRegister._reset()


__all__ = [
    "configure_distributions_register",
    "reset_distributions_register",
]
