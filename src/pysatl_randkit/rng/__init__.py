"""
Random sources subpackage

Uniform-bit sources consumed by PySATL RandKit distributions, see
:mod:`.source`.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .source import (
    DEFAULT_ALGORITHM,
    SUPPORTED_ALGORITHMS,
    BitGeneratorSource,
    RandomSource,
    default_source,
    resolve_source,
    seeded_source,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "SUPPORTED_ALGORITHMS",
    "RandomSource",
    "BitGeneratorSource",
    "default_source",
    "seeded_source",
    "resolve_source",
]
