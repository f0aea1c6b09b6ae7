"""Unweighted reservoir sampling with skip-ahead (Algorithm L)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Callable

import numpy as np

from streamsampler.base import SlotReservoir, T
from streamsampler.utils import jump_factor, skip_count


class UniformReservoir(SlotReservoir[T]):
    """Keep ``min(n, capacity)`` uniformly chosen elements of an unweighted stream.

    Instead of rolling a die for every element, each admission draws the
    number of following elements that will be passed over, so the steady
    state costs O(1) per skipped element with no random draws at all.

    See https://en.wikipedia.org/wiki/Reservoir_sampling#Optimal:_Algorithm_L

    Example::

        reservoir = UniformReservoir(3, random_source=7)
        reservoir.observe_many(range(1_000_000))
        reservoir.peek_result()
    """

    def __init__(
        self,
        capacity: int,
        random_source: Any = None,
        float_dtype: Any = np.float64,
        preallocate: bool = False,
    ) -> None:
        super().__init__(capacity, random_source, float_dtype, preallocate)
        self._reset_state()

    @property
    def weight_jump_over(self) -> float:
        return float(self._weight_jump_over)

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def observe(self, element: T) -> None:
        """Offer the next stream element to the reservoir."""
        slot = self._next_slot()
        if slot is not None:
            self._place(slot, element)

    def emplace(self, factory: Callable[..., T], *args: Any, **kwargs: Any) -> None:
        """Offer the next stream element, building it only if it is admitted.

        ``factory(*args, **kwargs)`` is not called when the element is skipped.
        If it raises, the skip bookkeeping is left as it was; only the slot
        draw is spent.
        """
        slot = self._next_slot()
        if slot is not None:
            self._place(slot, factory(*args, **kwargs))

    def observe_many(self, elements: Iterable[T]) -> int:
        """Offer every element of ``elements`` in order.

        Indexable sequences are walked with :meth:`advance_skip`, so skipped
        runs are never touched.

        Returns:
            Number of stream elements consumed.
        """
        if isinstance(elements, Sequence):
            total = len(elements)
            index = 0
            while index < total:
                pending = self._indexes_to_skip
                if pending > 0:
                    step = min(pending, total - index)
                    self.advance_skip(step)
                    index += step
                    continue
                self.observe(elements[index])
                index += 1
            return total

        count = 0
        for element in elements:
            self.observe(element)
            count += 1
        return count

    # ------------------------------------------------------------------
    # Skip-ahead helpers for callers with expensive elements
    # ------------------------------------------------------------------

    def would_be_considered(self) -> bool:
        """Return True if the next element is admitted when observed."""
        return self._indexes_to_skip == 0

    def skip_one(self) -> None:
        """Account for one skipped element without materializing it."""
        if self.would_be_considered():
            raise RuntimeError("next element would be considered; observe it instead")
        self._indexes_to_skip -= 1

    def peek_skip_count(self) -> int:
        """Return how many upcoming elements are guaranteed to be skipped."""
        return self._indexes_to_skip

    def advance_skip(self, count: int) -> None:
        """Pass over ``count`` upcoming elements without materializing them."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if count > self._indexes_to_skip:
            raise ValueError(
                f"cannot skip {count} elements, only {self._indexes_to_skip} are pending"
            )
        self._indexes_to_skip -= count

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _next_slot(self) -> int | None:
        """Resolve the next element to a target slot, or None when skipped."""
        filled = len(self._store)
        if filled < self._store.capacity:
            return filled
        if self._indexes_to_skip > 0:
            self._indexes_to_skip -= 1
            return None
        return self._random.integer(self._store.capacity)

    def _place(self, slot: int, element: T) -> None:
        if slot == len(self._store):
            self._store.construct(slot, element)
            if self.is_full:
                self._weight_jump_over = self._draw_jump_factor()
                self._indexes_to_skip = self._draw_skip()
        else:
            self._store.overwrite(slot, element)
            self._weight_jump_over = self._weight_jump_over * self._draw_jump_factor()
            self._indexes_to_skip = self._draw_skip()

    def _draw_jump_factor(self) -> np.floating:
        return jump_factor(self._random.uniform(), self._store.capacity, self._ftype)

    def _draw_skip(self) -> int:
        return skip_count(self._weight_jump_over, self._random.uniform(), self._ftype)

    def _reset_state(self) -> None:
        self._indexes_to_skip = 0
        self._weight_jump_over = self._ftype(0.0)
