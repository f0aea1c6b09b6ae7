"""Exact single-element weighted sampling over a running weight sum."""

from __future__ import annotations

import logging
import numbers
from collections.abc import Iterable
from typing import Any, Callable

from streamsampler.base import StreamSampler, T
from streamsampler.random_source import RandomSource, as_random_source

logger = logging.getLogger(__name__)


class SingleWeightedSampler(StreamSampler[T]):
    """Select one element of a weighted stream with probability ``weight / total``.

    Costs one random draw per element, so it suits short streams.  When all
    weights are integers the draw is an integer in ``[0, weight_sum)``;
    otherwise it is a real number in the same range.

    Important: integer weight sums must stay below ``2**63`` (the range of
    ``numpy.random.Generator.integers``).  This is not checked.
    """

    def __init__(self, random_source: Any = None) -> None:
        self._random = as_random_source(random_source)
        self._weight_sum: float = 0
        self._selected: T | None = None
        self._has_selected = False

    @property
    def capacity(self) -> int:
        return 1

    @property
    def random_source(self) -> RandomSource:
        return self._random

    @property
    def weight_sum(self) -> float:
        return self._weight_sum

    @property
    def has_result(self) -> bool:
        return self._has_selected

    def __len__(self) -> int:
        return int(self._has_selected)

    def observe(self, weight: float, element: T) -> None:
        """Offer the next stream element with its weight."""
        if self._admit(weight):
            self._select(element)

    def emplace(self, weight: float, factory: Callable[..., T], *args: Any, **kwargs: Any) -> None:
        """Offer the next weighted element, building it only if it is selected.

        If ``factory`` raises, the weight is not added to the running sum.
        """
        weight_sum = self._weight_sum
        if not self._admit(weight):
            return
        try:
            element = factory(*args, **kwargs)
        except Exception:
            self._weight_sum = weight_sum
            raise
        self._select(element)

    def observe_many(self, pairs: Iterable[tuple[float, T]]) -> int:
        """Offer every ``(weight, element)`` pair in order; return how many were read."""
        count = 0
        for weight, element in pairs:
            self.observe(weight, element)
            count += 1
        return count

    def peek_result(self) -> T | None:
        """Return the selected element, or None if nothing has been selected."""
        return self._selected

    def consume_result(self) -> T | None:
        """Return the selected element (or None) and reset the sampler."""
        selected = self._selected
        self.reset()
        return selected

    def reset(self) -> None:
        self._weight_sum = 0
        self._selected = None
        self._has_selected = False
        logger.debug("Reset SingleWeightedSampler")

    def clone(self) -> SingleWeightedSampler[T]:
        duplicate: SingleWeightedSampler[T] = SingleWeightedSampler(self._random.clone())
        duplicate._weight_sum = self._weight_sum
        duplicate._selected = self._selected
        duplicate._has_selected = self._has_selected
        return duplicate

    def _admit(self, weight: float) -> bool:
        if not weight > 0:
            return False
        self._weight_sum += weight
        if not self._has_selected:
            return True
        return self._draw_below(self._weight_sum) < weight

    def _draw_below(self, high: float) -> float:
        if isinstance(high, numbers.Integral):
            return self._random.integer(int(high))
        return self._random.uniform_between(0.0, float(high))

    def _select(self, element: T) -> None:
        self._selected = element
        self._has_selected = True
