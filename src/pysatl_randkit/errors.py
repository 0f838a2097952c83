"""
Errors and Warnings
===================

Exception taxonomy and warning categories of PySATL RandKit.

- :class:`ConstructionError` is raised only while building a distribution,
  a support descriptor or a random source from invalid input.
- :class:`DomainError` is raised by ``quantile`` for probabilities outside
  ``[0, 1]``.

Both derive from :class:`ValueError`, so code that guards parameter errors
with ``except ValueError`` keeps working.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class RandkitError(Exception):
    """Base class for all errors raised by PySATL RandKit."""


class ConstructionError(RandkitError, ValueError):
    """Invalid parameters, bounds or random source passed to a constructor."""


class DomainError(RandkitError, ValueError):
    """Argument outside the domain of a characteristic (e.g. ``p`` not in ``[0, 1]``)."""


class RandkitWarning(UserWarning):
    """Base class for warnings emitted by PySATL RandKit."""


class DegenerateTruncationWarning(RandkitWarning, RuntimeWarning):
    """
    A truncation window captures numerically zero probability.

    The distribution has collapsed to a point mass; this is a designed
    fallback, not an error.
    """


class MomentTruncationWarning(RandkitWarning, RuntimeWarning):
    """Moment summation stopped before the tail mass became negligible."""


__all__ = [
    "RandkitError",
    "ConstructionError",
    "DomainError",
    "RandkitWarning",
    "DegenerateTruncationWarning",
    "MomentTruncationWarning",
]
