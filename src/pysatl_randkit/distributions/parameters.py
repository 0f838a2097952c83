"""
Distribution Parameters
=======================

Immutable parameter sets with declarative constraint validation.

A parameter set is a frozen dataclass registered with :func:`parameter_set`;
its invariants are instance methods marked with :func:`constraint`. The
constraints run in declaration order as soon as the object is built, so an
invalid parameter set never exists.

Examples
--------
>>> @parameter_set
... class _Scale(Parameters):
...     sigma: float
...
...     @constraint(description="sigma > 0")
...     def check_sigma_positive(self) -> bool:
...         return self.sigma > 0
>>> _Scale(sigma=-1.0)
Traceback (most recent call last):
    ...
pysatl_randkit.errors.ConstructionError: Constraint "sigma > 0" does not hold (sigma=-1.0)
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numbers
from abc import ABC
from dataclasses import dataclass, fields, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, Any, ClassVar, ParamSpec, TypeVar

from pysatl_randkit.errors import ConstructionError

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(slots=True, frozen=True)
class ParameterConstraint:
    """
    Constraint on parameter values.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    """

    description: str
    check: Callable[[Any], bool]


class Parameters(ABC):
    """
    Abstract base class for distribution parameter sets.

    Subclasses are turned into frozen dataclasses by :func:`parameter_set`,
    which also collects their :func:`constraint` methods.
    """

    __slots__ = ()

    _constraints: ClassVar[list[ParameterConstraint]] = []

    def __post_init__(self) -> None:
        self.validate()

    @property
    def parameters(self) -> dict[str, Any]:
        """Get parameters as a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]

    @property
    def constraints(self) -> list[ParameterConstraint]:
        """Get constraints for this parameter set."""
        return self._constraints

    def validate(self) -> None:
        """
        Validate all constraints for this parameter set.

        Raises
        ------
        ConstructionError
            If any constraint is not satisfied.
        """
        for constraint in self._constraints:
            if not constraint.check(self):
                values = ", ".join(f"{k}={v!r}" for k, v in self.parameters.items())
                raise ConstructionError(
                    f'Constraint "{constraint.description}" does not hold ({values})'
                )


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Returns
    -------
    Callable[[Callable[P, bool]], Callable[P, bool]]
        Decorator that marks the function as a constraint.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def _is_constraint(func: object) -> bool:
    return bool(getattr(func, "__is_constraint", False))


def _collect_constraints(cls: type[Parameters]) -> list[ParameterConstraint]:
    """Collect constraint methods from the class."""
    constraints: list[ParameterConstraint] = []
    for name, attr in cls.__dict__.items():
        if isinstance(attr, staticmethod) and _is_constraint(attr.__func__):
            raise TypeError(f"@constraint '{name}' must be an instance method, not @staticmethod")
        if isinstance(attr, classmethod) and _is_constraint(attr.__func__):
            raise TypeError(f"@constraint '{name}' must be an instance method, not @classmethod")

        func = attr if callable(attr) and isfunction(attr) else None
        if not func:
            continue
        if _is_constraint(func):
            desc = getattr(func, "__constraint_description", func.__name__)
            constraints.append(ParameterConstraint(description=desc, check=func))
    return constraints


T = TypeVar("T", bound=Parameters)


def parameter_set(cls: type[T]) -> type[T]:
    """
    Class decorator registering a parameter set.

    Converts the class to a frozen, slotted dataclass (unless it already is a
    dataclass) and stores its constraints in declaration order.
    """
    if not is_dataclass(cls):
        cls = dataclass(slots=True, frozen=True)(cls)
    cls._constraints = _collect_constraints(cls)
    return cls


def is_integral(value: object) -> bool:
    """Whether ``value`` is an integer (``int`` or NumPy integer, not ``bool``)."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


__all__ = [
    "ParameterConstraint",
    "Parameters",
    "constraint",
    "parameter_set",
    "is_integral",
]
