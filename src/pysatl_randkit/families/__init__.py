"""
Distribution families subpackage

Name-based access to the built-in distributions:

- global register of families (:mod:`.registry`);
- registration of the built-ins (:mod:`.configuration`).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .configuration import configure_distributions_register, reset_distributions_register
from .registry import DistributionRegister

__all__ = [
    "DistributionRegister",
    "configure_distributions_register",
    "reset_distributions_register",
]
