"""
Global registry of distribution families using singleton pattern.

This module implements a centralized registry mapping family names to
distribution factories, enabling construction by name across the
application.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar

    from pysatl_randkit.distributions.distribution import (
        ContinuousDistributionBase,
        DiscreteDistributionBase,
    )

DistributionFactory: TypeAlias = "Callable[..., ContinuousDistributionBase | DiscreteDistributionBase]"
"""Callable building a distribution from keyword parameters."""


class DistributionRegister:
    """
    Singleton registry of distribution families.

    Maintains a global mapping from family name to a factory (usually the
    distribution class itself), allowing distributions to be created by name.
    """

    _instance: ClassVar[DistributionRegister | None] = None
    _registered_families: dict[str, DistributionFactory]

    def __new__(cls) -> DistributionRegister:
        """Create or return the singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._registered_families = {}
        return cls._instance

    @classmethod
    def get(cls, name: str) -> DistributionFactory:
        """
        Retrieve a distribution factory by name.

        Parameters
        ----------
        name : str
            Name of the family to retrieve.

        Returns
        -------
        DistributionFactory
            The requested factory.

        Raises
        ------
        ValueError
            If no family with the given name exists.
        """
        self = cls()
        if name not in self._registered_families:
            raise ValueError(f"No family {name} found in register")
        return self._registered_families[name]

    @classmethod
    def register(cls, name: str, factory: DistributionFactory) -> None:
        """
        Register a new distribution family.

        Parameters
        ----------
        name : str
            Family name.
        factory : DistributionFactory
            Callable building a distribution from keyword parameters.

        Raises
        ------
        ValueError
            If a family with the same name is already registered.
        """
        self = cls()
        if name in self._registered_families:
            raise ValueError(f"Family {name} already found in register")
        self._registered_families[name] = factory

    @classmethod
    def contains(cls, name: str) -> bool:
        return name in cls()._registered_families

    @classmethod
    def names(cls) -> list[str]:
        """Names of all registered families, in registration order."""
        return list(cls()._registered_families)

    @classmethod
    def create(
        cls, name: str, *args: Any, **kwargs: Any
    ) -> ContinuousDistributionBase | DiscreteDistributionBase:
        """
        Build a distribution of the named family.

        Positional and keyword arguments are passed to the factory, e.g.
        ``create("RoundedNormal", mean=0.0, sigma=1.0, seed=7)``.
        """
        return cls.get(name)(*args, **kwargs)

    @classmethod
    def _reset(cls) -> None:
        """Drop the singleton instance (test helper)."""
        cls._instance = None


__all__ = [
    "DistributionRegister",
]
