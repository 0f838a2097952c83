"""
Distribution Interfaces and Shared Implementations
==================================================

This module defines the public capability protocols and the base classes the
concrete distributions build on:

- :class:`ContinuousDistribution` protocol – ``sample``, ``pdf``, ``cdf``,
  ``quantile``, ``mean``, ``variance``;
- :class:`DiscreteDistribution` protocol – ``sample``, ``pmf``, ``cdf``,
  ``mean``, ``variance``;
- :class:`ContinuousDistributionBase` and :class:`DiscreteDistributionBase` –
  validated parameters, random source resolution, batch sampling,
  log-likelihood and access to characteristics by name.

Notes
-----
- Every distribution owns exactly one :class:`~pysatl_randkit.rng.RandomSource`
  and is not synchronised; use one instance per thread.
- Characteristics accept scalars (returning ``float``) or arrays (returning
  ``float64`` arrays of the same shape).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, cast, runtime_checkable

import numpy as np

from pysatl_randkit.distributions.parameters import is_integral
from pysatl_randkit.distributions.sampling import ArraySample
from pysatl_randkit.errors import DomainError
from pysatl_randkit.rng import resolve_source
from pysatl_randkit.types import CharacteristicName, Kind

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    import numpy.typing as npt

    from pysatl_randkit.distributions.parameters import Parameters
    from pysatl_randkit.distributions.sampling import DoubleSampler, IntSampler, Sample
    from pysatl_randkit.distributions.support import DistributionSupport
    from pysatl_randkit.rng import RandomSource
    from pysatl_randkit.types import FloatArray, GenericCharacteristicName, Number, NumericArray


@runtime_checkable
class ContinuousDistribution(Protocol):
    """Capability set of real-valued distributions."""

    @property
    def support(self) -> DistributionSupport: ...

    @property
    def parameters(self) -> Parameters: ...

    def sample(self) -> float: ...

    def pdf(self, x: Number | NumericArray) -> float | FloatArray: ...

    def cdf(self, x: Number | NumericArray) -> float | FloatArray: ...

    def quantile(self, p: Number | NumericArray) -> float | FloatArray: ...

    def mean(self) -> float: ...

    def variance(self) -> float: ...


@runtime_checkable
class DiscreteDistribution(Protocol):
    """Capability set of integer-valued distributions."""

    @property
    def support(self) -> DistributionSupport: ...

    @property
    def parameters(self) -> Parameters: ...

    def sample(self) -> int: ...

    def pmf(self, k: Number | NumericArray) -> float | FloatArray: ...

    def cdf(self, k: Number | NumericArray) -> float | FloatArray: ...

    def mean(self) -> float: ...

    def variance(self) -> float: ...


def check_probability(p: Number | NumericArray) -> None:
    """
    Ensure probabilities lie in ``[0, 1]``.

    Raises
    ------
    DomainError
        If any value is outside ``[0, 1]`` or NaN.
    """
    arr = np.asarray(p, dtype=np.float64)
    if not np.all((arr >= 0.0) & (arr <= 1.0)):
        raise DomainError(f"Probability must be in [0, 1], got {p}")


def _integral_value(k: object) -> int | None:
    """Return ``k`` as ``int`` if it is a whole number, else ``None``."""
    if is_integral(k):
        return int(cast(int, k))
    value = float(cast(float, k))
    if math.isfinite(value) and value.is_integer():
        return int(value)
    return None


class _DistributionBase(ABC):
    """Parameters, random source and characteristic lookup shared by all distributions."""

    kind: ClassVar[Kind]
    _sample_dtype: ClassVar[npt.DTypeLike]

    def __init__(
        self,
        parameters: Parameters,
        *,
        seed: int | None = None,
        source: RandomSource | None = None,
    ) -> None:
        self._parameters = parameters
        self._source = resolve_source(seed=seed, source=source)

    @property
    def parameters(self) -> Parameters:
        """Validated, immutable parameter set."""
        return self._parameters

    @property
    def random_source(self) -> RandomSource:
        """Source of uniform draws owned by this distribution."""
        return self._source

    @property
    @abstractmethod
    def support(self) -> DistributionSupport: ...

    @abstractmethod
    def sample(self) -> Any: ...

    @abstractmethod
    def mean(self) -> float: ...

    @abstractmethod
    def variance(self) -> float: ...

    @abstractmethod
    def _density(self, x: Number | NumericArray) -> float | FloatArray: ...

    @property
    @abstractmethod
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, Callable[..., Any]]: ...

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any = None
    ) -> Any:
        """
        Evaluate a characteristic by name.

        Parameters
        ----------
        characteristic_name : str
            One of the names in :attr:`analytical_computations`.
        value : Any, optional
            Argument of the characteristic; ignored for moments.

        Raises
        ------
        KeyError
            If the distribution does not provide the characteristic.
        """
        try:
            method = self.analytical_computations[characteristic_name]
        except KeyError:
            raise KeyError(
                f"Characteristic '{characteristic_name}' is not available for "
                f"{type(self).__name__}"
            ) from None
        if characteristic_name in (CharacteristicName.MEAN, CharacteristicName.VAR):
            return method()
        return method(value)

    def sample_n(self, n: int) -> ArraySample:
        """
        Draw ``n`` variates as an ``(n, 1)`` sample.

        The draws consume the random source exactly as ``n`` consecutive
        calls to :meth:`sample` would.
        """
        if n < 0:
            raise ValueError(f"Sample size must be non-negative, got {n}")
        return ArraySample.from_values([self.sample() for _ in range(n)], self._sample_dtype)

    def log_likelihood(self, sample: Sample | npt.ArrayLike) -> float:
        """
        Log-likelihood of observed values.

        Returns ``-inf`` if any value has zero density (or mass).
        """
        data = sample.array if isinstance(sample, ArraySample) else np.asarray(sample)
        values = np.asarray(data).ravel()
        if values.size == 0:
            return 0.0
        density = np.asarray(self._density(values), dtype=np.float64)
        with np.errstate(divide="ignore"):
            return float(np.sum(np.log(density)))

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self._parameters.parameters.items())
        return f"{type(self).__name__}({params})"


class ContinuousDistributionBase(_DistributionBase):
    """Base class for real-valued distributions."""

    kind = Kind.CONTINUOUS
    _sample_dtype = np.float64

    @abstractmethod
    def sample(self) -> float: ...

    @abstractmethod
    def pdf(self, x: Number | NumericArray) -> float | FloatArray: ...

    @abstractmethod
    def cdf(self, x: Number | NumericArray) -> float | FloatArray: ...

    @abstractmethod
    def quantile(self, p: Number | NumericArray) -> float | FloatArray: ...

    def sampler(self) -> DoubleSampler:
        """Return a zero-argument callable drawing from this distribution."""
        return self.sample

    def _density(self, x: Number | NumericArray) -> float | FloatArray:
        return self.pdf(x)

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, Callable[..., Any]]:
        return {
            CharacteristicName.PDF: self.pdf,
            CharacteristicName.CDF: self.cdf,
            CharacteristicName.PPF: self.quantile,
            CharacteristicName.MEAN: self.mean,
            CharacteristicName.VAR: self.variance,
        }


class DiscreteDistributionBase(_DistributionBase):
    """
    Base class for integer-valued distributions.

    Subclasses implement :meth:`_pmf_at` and :meth:`_cdf_at` for exact Python
    integers; this class lifts them to scalars of any numeric type and to
    arrays. ``pmf`` is zero at non-integral points and ``cdf(x)`` equals
    ``cdf(floor(x))``.
    """

    kind = Kind.DISCRETE
    _sample_dtype = np.int64

    @abstractmethod
    def sample(self) -> int: ...

    @abstractmethod
    def _pmf_at(self, k: int) -> float: ...

    @abstractmethod
    def _cdf_at(self, k: int) -> float: ...

    def pmf(self, k: Number | NumericArray) -> float | FloatArray:
        """Probability mass ``P(Y = k)``."""
        return self._evaluate(self._pmf_scalar, k)

    def cdf(self, k: Number | NumericArray) -> float | FloatArray:
        """Cumulative probability ``P(Y <= k)``."""
        return self._evaluate(self._cdf_scalar, k)

    def sampler(self) -> IntSampler:
        """Return a zero-argument callable drawing from this distribution."""
        return self.sample

    def _density(self, x: Number | NumericArray) -> float | FloatArray:
        return self.pmf(x)

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, Callable[..., Any]]:
        return {
            CharacteristicName.PMF: self.pmf,
            CharacteristicName.CDF: self.cdf,
            CharacteristicName.MEAN: self.mean,
            CharacteristicName.VAR: self.variance,
        }

    def _pmf_scalar(self, k: object) -> float:
        value = _integral_value(k)
        if value is None:
            return 0.0
        return self._pmf_at(value)

    def _cdf_scalar(self, x: object) -> float:
        if is_integral(x):
            return self._cdf_at(int(cast(int, x)))
        value = float(cast(float, x))
        if math.isnan(value):
            return math.nan
        if value == math.inf:
            return 1.0
        if value == -math.inf:
            return 0.0
        return self._cdf_at(math.floor(value))

    @staticmethod
    def _evaluate(
        func: Callable[[object], float], x: Number | NumericArray
    ) -> float | FloatArray:
        if np.ndim(x) == 0:
            return func(x.item() if isinstance(x, np.ndarray) else x)
        arr = np.asarray(x)
        values = arr.ravel().tolist()
        out = np.fromiter((func(v) for v in values), dtype=np.float64, count=arr.size)
        return cast("FloatArray", out.reshape(arr.shape))


__all__ = [
    "ContinuousDistribution",
    "DiscreteDistribution",
    "ContinuousDistributionBase",
    "DiscreteDistributionBase",
    "check_probability",
]
