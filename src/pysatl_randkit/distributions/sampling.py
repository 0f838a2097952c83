"""
Sampling Interfaces
===================

This module defines protocols and containers used in distribution sampling:

- :class:`Sample` protocol and the array-backed :class:`ArraySample`;
- :class:`DoubleSampler` and :class:`IntSampler`, zero-argument callables
  producing one variate per call.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any

    import numpy.typing as npt


class Sample(Protocol):
    """
    Protocol for sample containers.

    Attributes
    ----------
    array : numpy.ndarray
        Array representation of the samples.
    shape : tuple[int, ...]
        Shape of the sample array.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[Any]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    Array-backed sample container.

    This implementation stores samples as a 2D array of shape
    (n_samples, n_dimensions). Continuous distributions produce ``float64``
    arrays, discrete ones ``int64`` arrays (``object`` arrays when a value
    does not fit in 64 bits).

    Parameters
    ----------
    data : numpy.ndarray
        2D array of shape (n, d).

    Attributes
    ----------
    data : numpy.ndarray
        Backing array containing the samples.
    dimension : int
        Dimensionality of the samples (d).

    Raises
    ------
    ValueError
        If data is not 2D.
    """

    dimension: int
    data: npt.NDArray[Any]

    def __init__(self, data: npt.NDArray[Any]) -> None:
        if data.ndim != 2:
            raise ValueError("ArraySample expects 2D array of shape (n, d).")
        self.data = data
        self.dimension = int(data.shape[1])

    @classmethod
    def from_values(cls, values: list[float] | list[int], dtype: npt.DTypeLike) -> ArraySample:
        """Build a univariate ``(n, 1)`` sample from a flat list of values."""
        try:
            arr = np.array(values, dtype=dtype)
        except OverflowError:
            arr = np.array(values, dtype=object)
        return cls(arr.reshape(len(values), 1))

    def __len__(self) -> int:
        """Return the number of samples (n)."""
        return int(self.data.shape[0])

    @property
    def dim(self) -> int:
        """Alias for dimension attribute."""
        return self.dimension

    def __iter__(self) -> Iterator[npt.NDArray[Any]]:
        """Iterate over samples (rows of the array)."""
        yield from self.data

    @property
    def array(self) -> npt.NDArray[Any]:
        """Return the backing array."""
        return self.data

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the sample array (n, d)."""
        n, d = self.data.shape
        return int(n), int(d)


@runtime_checkable
class DoubleSampler(Protocol):
    """Zero-argument callable returning one real variate per call."""

    def __call__(self) -> float: ...


@runtime_checkable
class IntSampler(Protocol):
    """Zero-argument callable returning one integer variate per call."""

    def __call__(self) -> int: ...


__all__ = [
    "Sample",
    "ArraySample",
    "DoubleSampler",
    "IntSampler",
]
