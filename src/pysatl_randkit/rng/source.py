"""
Random Sources
==============

Uniform-bit sources consumed by every distribution.

- :class:`RandomSource` protocol – the two draws distributions rely on.
- :class:`BitGeneratorSource` – adapter over a NumPy
  :class:`~numpy.random.BitGenerator`.
- :func:`default_source`, :func:`seeded_source` – explicit factories for the
  library's default algorithm.
- :func:`resolve_source` – the seeding rule shared by distribution
  constructors (nothing, a seed, or a caller-supplied source).

Notes
-----
- Sources are not synchronised. Confine each instance to one thread, or give
  every thread its own child via :meth:`BitGeneratorSource.spawn`.
- Sequences are reproducible for a fixed seed and algorithm; the algorithm
  identity (:data:`DEFAULT_ALGORITHM`) is fixed per library version.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import operator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from pysatl_randkit.errors import ConstructionError

if TYPE_CHECKING:
    from collections.abc import Callable


DEFAULT_ALGORITHM = "PCG64"
"""Bit generator used by :func:`default_source` and :func:`seeded_source`."""

_BIT_GENERATORS: dict[str, Callable[..., np.random.BitGenerator]] = {
    "PCG64": np.random.PCG64,
    "PCG64DXSM": np.random.PCG64DXSM,
    "Philox": np.random.Philox,
    "SFC64": np.random.SFC64,
    "MT19937": np.random.MT19937,
}

# Width of one ``random_raw`` word; MT19937 only fills the low 32 bits.
_NATIVE_BITS: dict[str, int] = {
    "PCG64": 64,
    "PCG64DXSM": 64,
    "Philox": 64,
    "SFC64": 64,
    "MT19937": 32,
}

SUPPORTED_ALGORITHMS: tuple[str, ...] = tuple(_BIT_GENERATORS)
"""Names accepted by the ``algorithm`` argument of the factories."""

_SEED_MIN = -(1 << 63)
_SEED_LIMIT = 1 << 64
_SEED_MASK = (1 << 64) - 1


@runtime_checkable
class RandomSource(Protocol):
    """
    Source of independent uniform draws.

    Implementations must guarantee ``0 <= next_uniform() < 1`` and that
    ``next_bounded_int(bound)`` returns every integer of ``[0, bound)`` with
    exactly equal probability.
    """

    def next_uniform(self) -> float: ...

    def next_bounded_int(self, bound: int) -> int: ...


class BitGeneratorSource:
    """
    :class:`RandomSource` backed by a NumPy bit generator.

    Parameters
    ----------
    bit_generator : numpy.random.BitGenerator
        Underlying generator. Its type must be one of
        :data:`SUPPORTED_ALGORITHMS` unless ``native_bits`` is given.
    native_bits : int, optional
        Number of random bits in one ``random_raw`` word.

    Raises
    ------
    ConstructionError
        If the word width of ``bit_generator`` is unknown or invalid.

    Notes
    -----
    ``next_uniform`` uses :meth:`numpy.random.Generator.random` (53-bit
    doubles). ``next_bounded_int`` draws raw words and rejects those at or
    above the largest multiple of ``bound`` below the native range, so no
    modulo bias is introduced. Bounds wider than one word are served by
    concatenating several words.
    """

    __slots__ = ("_bit_generator", "_generator", "_word_bits")

    def __init__(self, bit_generator: np.random.BitGenerator, native_bits: int | None = None):
        if native_bits is None:
            native_bits = _NATIVE_BITS.get(type(bit_generator).__name__)
            if native_bits is None:
                raise ConstructionError(
                    f"Unknown bit generator {type(bit_generator).__name__}; "
                    "pass native_bits explicitly."
                )
        if not 1 <= native_bits <= 64:
            raise ConstructionError(f"native_bits must be in [1, 64], got {native_bits}")

        self._bit_generator = bit_generator
        self._generator = np.random.Generator(bit_generator)
        self._word_bits = native_bits

    @property
    def bit_generator(self) -> np.random.BitGenerator:
        """Underlying NumPy bit generator."""
        return self._bit_generator

    @property
    def algorithm(self) -> str:
        """Name of the bit generator algorithm."""
        return type(self._bit_generator).__name__

    def next_uniform(self) -> float:
        """Return a uniform double in ``[0, 1)``."""
        return float(self._generator.random())

    def next_bounded_int(self, bound: int) -> int:
        """
        Return an unbiased integer in ``[0, bound)``.

        Parameters
        ----------
        bound : int
            Exclusive upper bound, ``bound >= 1``. Any Python integer is
            accepted.

        Returns
        -------
        int
            Uniformly distributed integer.

        Raises
        ------
        ValueError
            If ``bound < 1``.
        """
        bound = operator.index(bound)
        if bound < 1:
            raise ValueError(f"bound must be positive, got {bound}")
        if bound == 1:
            return 0

        words = max(1, -(-(bound - 1).bit_length() // self._word_bits))
        span = 1 << (words * self._word_bits)
        limit = span - span % bound

        while True:
            value = self._draw(words)
            if value < limit:
                return value % bound

    def _draw(self, words: int) -> int:
        value = 0
        for word in self._bit_generator.random_raw(words).tolist():
            value = (value << self._word_bits) | word
        return value

    def spawn(self, n_children: int) -> list[BitGeneratorSource]:
        """
        Create independent child sources.

        Parameters
        ----------
        n_children : int
            Number of children to create.

        Returns
        -------
        list[BitGeneratorSource]
            Sources whose streams are statistically independent of each other
            and of the parent. Deterministic if the parent was seeded.
        """
        return [
            BitGeneratorSource(child, native_bits=self._word_bits)
            for child in self._bit_generator.spawn(n_children)
        ]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(algorithm={self.algorithm!r})"


def _bit_generator_factory(algorithm: str) -> Callable[..., np.random.BitGenerator]:
    try:
        return _BIT_GENERATORS[algorithm]
    except KeyError:
        raise ConstructionError(
            f"Unknown algorithm {algorithm!r}; expected one of {', '.join(SUPPORTED_ALGORITHMS)}"
        ) from None


def _normalize_seed(seed: object) -> int:
    if isinstance(seed, bool) or not isinstance(seed, int | np.integer):
        raise ConstructionError(f"seed must be an integer, got {type(seed).__name__}")
    value = int(seed)
    if not _SEED_MIN <= value < _SEED_LIMIT:
        raise ConstructionError(f"seed must fit in 64 bits, got {value}")
    return value & _SEED_MASK


def default_source(algorithm: str = DEFAULT_ALGORITHM) -> BitGeneratorSource:
    """
    Create a new source seeded from operating-system entropy.

    Every call returns a fresh, independent source; there is no shared
    process-wide generator.

    Parameters
    ----------
    algorithm : str, default :data:`DEFAULT_ALGORITHM`
        Bit generator name.
    """
    factory = _bit_generator_factory(algorithm)
    return BitGeneratorSource(factory(), native_bits=_NATIVE_BITS[algorithm])


def seeded_source(seed: int, algorithm: str = DEFAULT_ALGORITHM) -> BitGeneratorSource:
    """
    Create a deterministic source from a 64-bit seed.

    Parameters
    ----------
    seed : int
        Seed in ``[-2**63, 2**64)``. Negative values are read as signed 64-bit
        integers and mapped to their unsigned two's-complement value.
    algorithm : str, default :data:`DEFAULT_ALGORITHM`
        Bit generator name.

    Returns
    -------
    BitGeneratorSource
        Source whose output sequence depends only on ``seed`` and
        ``algorithm``.

    Raises
    ------
    ConstructionError
        If the seed is not an integer, does not fit in 64 bits, or the
        algorithm is unknown.
    """
    factory = _bit_generator_factory(algorithm)
    bit_generator = factory(np.random.SeedSequence(_normalize_seed(seed)))
    return BitGeneratorSource(bit_generator, native_bits=_NATIVE_BITS[algorithm])


def resolve_source(seed: int | None = None, source: RandomSource | None = None) -> RandomSource:
    """
    Pick the random source for a distribution constructor.

    Parameters
    ----------
    seed : int, optional
        Deterministic seed, see :func:`seeded_source`.
    source : RandomSource, optional
        Caller-supplied source, used as is.

    Returns
    -------
    RandomSource
        ``source`` if given, a seeded source if ``seed`` is given, otherwise
        a fresh :func:`default_source`.

    Raises
    ------
    ConstructionError
        If both arguments are given, or ``source`` does not implement the
        :class:`RandomSource` protocol.
    """
    if source is not None:
        if seed is not None:
            raise ConstructionError("Pass either seed or source, not both")
        if not isinstance(source, RandomSource):
            raise ConstructionError(
                "source must provide next_uniform() and next_bounded_int(), "
                f"got {type(source).__name__}"
            )
        return source
    if seed is not None:
        return seeded_source(seed)
    return default_source()


__all__ = [
    "DEFAULT_ALGORITHM",
    "SUPPORTED_ALGORITHMS",
    "RandomSource",
    "BitGeneratorSource",
    "default_source",
    "seeded_source",
    "resolve_source",
]
