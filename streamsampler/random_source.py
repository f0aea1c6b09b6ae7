"""Random sources owned by samplers."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any

import numpy as np


class RandomSource(ABC):
    """Base interface for the uniform variates a sampler consumes.

    A source is an owned value: :meth:`clone` returns an independent copy
    whose future draws repeat this source's future draws exactly.
    """

    @abstractmethod
    def uniform(self) -> float:
        """Return a uniform float in ``[0, 1)``."""

    @abstractmethod
    def integer(self, high: int) -> int:
        """Return a uniform integer in ``[0, high)``."""

    def uniform_between(self, low: float, high: float) -> float:
        """Return a uniform float in ``[low, high)``."""
        return low + (high - low) * self.uniform()

    def clone(self) -> RandomSource:
        """Return an independent copy carrying the same generator state."""
        return copy.deepcopy(self)


class NumpyRandomSource(RandomSource):
    """Random source backed by a ``numpy.random.Generator``."""

    def __init__(self, seed: Any = None) -> None:
        """Initialize the source.

        Args:
            seed: Anything ``numpy.random.default_rng`` accepts.  ``None``
                seeds from OS entropy; an existing ``Generator`` is used as is
                and becomes owned by this source.
        """
        self._rng = np.random.default_rng(seed)

    @property
    def generator(self) -> np.random.Generator:
        return self._rng

    def uniform(self) -> float:
        return float(self._rng.random())

    def integer(self, high: int) -> int:
        return int(self._rng.integers(high))

    def uniform_between(self, low: float, high: float) -> float:
        return float(self._rng.uniform(low, high))


def as_random_source(source: Any = None) -> RandomSource:
    """Coerce a seed, numpy generator or source into a :class:`RandomSource`.

    Raises:
        TypeError: If ``source`` cannot seed a numpy generator.
    """
    if isinstance(source, RandomSource):
        return source
    if source is None or isinstance(
        source, (int, np.integer, np.random.SeedSequence, np.random.BitGenerator, np.random.Generator)
    ):
        return NumpyRandomSource(source)
    raise TypeError(f"Cannot build a random source from {type(source).__name__}")
