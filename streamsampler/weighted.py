"""Weighted reservoir sampling with exponential jumps (Algorithm A-ExpJ)."""

from __future__ import annotations

import heapq
from collections.abc import Iterable
from typing import Any, Callable

import numpy as np

from streamsampler.base import SlotReservoir, T
from streamsampler.utils import priority_key, remaining_jump, truncation_floor, weight_jump


class WeightedReservoir(SlotReservoir[T]):
    """Keep ``capacity`` elements of a weighted stream, favouring heavy ones.

    Every admitted element carries a random priority key ``u ** (1 / weight)``
    and the reservoir keeps the elements with the largest keys.  Rather than
    drawing a key per element, the reservoir draws how much weight may stream
    past before its minimum key is challenged again.  Elements with a
    non-positive (or NaN) weight are never admitted.

    Priorities live in a min-heap of ``(priority, slot)`` pairs; the elements
    themselves stay in their slots.

    Reference: Efraimidis & Spirakis, "Weighted random sampling with a
    reservoir", Information Processing Letters 97(5), 2006.
    """

    def __init__(
        self,
        capacity: int,
        random_source: Any = None,
        float_dtype: Any = np.float64,
        preallocate: bool = False,
    ) -> None:
        super().__init__(capacity, random_source, float_dtype, preallocate)
        self._heap: list[tuple[np.floating, int]] = []
        self._reset_state()

    @property
    def weight_jump_over(self) -> float:
        return float(self._weight_jump_over)

    @property
    def min_priority(self) -> float | None:
        """Smallest priority key in the reservoir, or None when empty."""
        if not self._heap:
            return None
        return float(self._heap[0][0])

    def priorities(self) -> tuple[float, ...]:
        """Return the priority key of every occupied slot, in slot order."""
        keys = [0.0] * len(self._heap)
        for priority, slot in self._heap:
            keys[slot] = float(priority)
        return tuple(keys)

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def observe(self, weight: float, element: T) -> None:
        """Offer the next stream element with its weight."""
        decision = self._next_slot(weight)
        if decision is not None:
            self._place(decision[0], decision[1], element)

    def emplace(self, weight: float, factory: Callable[..., T], *args: Any, **kwargs: Any) -> None:
        """Offer the next weighted element, building it only if it is admitted."""
        jump = self._weight_jump_over
        decision = self._next_slot(weight)
        if decision is None:
            return
        try:
            element = factory(*args, **kwargs)
        except Exception:
            # the draws are spent, but the jump weight must not count this element
            self._weight_jump_over = jump
            raise
        self._place(decision[0], decision[1], element)

    def observe_many(self, pairs: Iterable[tuple[float, T]]) -> int:
        """Offer every ``(weight, element)`` pair in order.

        Returns:
            Number of pairs consumed.
        """
        count = 0
        for weight, element in pairs:
            self.observe(weight, element)
            count += 1
        return count

    # ------------------------------------------------------------------
    # Skip-ahead helpers for callers with expensive elements
    # ------------------------------------------------------------------

    def would_be_considered(self, weight: float) -> bool:
        """Return True if an element of ``weight`` would challenge the reservoir."""
        return bool(remaining_jump(self._weight_jump_over, weight, self._ftype) <= 0)

    def skip_one(self, weight: float) -> None:
        """Account for one element of ``weight`` that would not be admitted."""
        if self.would_be_considered(weight):
            raise RuntimeError("next element would be considered; observe it instead")
        if weight > 0:
            self._weight_jump_over = remaining_jump(self._weight_jump_over, weight, self._ftype)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _next_slot(self, weight: float) -> tuple[int, np.floating] | None:
        """Resolve a weighted element to ``(slot, priority)``, or None when skipped."""
        if not weight > 0:
            return None

        filled = len(self._store)
        if filled < self._store.capacity:
            return filled, priority_key(self._random.uniform(), weight, self._ftype)

        self._weight_jump_over = remaining_jump(self._weight_jump_over, weight, self._ftype)
        if self._weight_jump_over > 0:
            return None

        min_priority, slot = self._heap[0]
        low = truncation_floor(min_priority, weight, self._ftype)
        draw = self._random.uniform_between(float(low), 1.0)
        return slot, priority_key(draw, weight, self._ftype)

    def _place(self, slot: int, priority: np.floating, element: T) -> None:
        if slot == len(self._store):
            self._store.construct(slot, element)
            heapq.heappush(self._heap, (priority, slot))
        else:
            self._store.overwrite(slot, element)
            heapq.heapreplace(self._heap, (priority, slot))

        if self.is_full:
            self._weight_jump_over = weight_jump(
                self._heap[0][0], self._random.uniform(), self._ftype
            )

    def _reset_state(self) -> None:
        self._heap.clear()
        self._weight_jump_over = self._ftype(0.0)

    def _clone_state(self, duplicate: SlotReservoir[T]) -> None:
        duplicate._heap = list(self._heap)
