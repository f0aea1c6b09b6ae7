"""Streaming sampler interfaces."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

import numpy as np

from streamsampler.random_source import RandomSource, as_random_source
from streamsampler.store import ArenaSlotStore, ListSlotStore, SlotStore
from streamsampler.utils import resolve_float_dtype

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StreamSampler(ABC, Generic[T]):
    """Base interface for samplers fed one stream element at a time."""

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Number of elements the final sample holds at most."""

    @property
    @abstractmethod
    def random_source(self) -> RandomSource:
        """The random source owned by this sampler."""

    @abstractmethod
    def peek_result(self) -> Any:
        """Return the current sample without modifying the sampler."""

    @abstractmethod
    def consume_result(self) -> Any:
        """Hand over the current sample and reset the sampler."""

    @abstractmethod
    def reset(self) -> None:
        """Discard the sample and all skip state so the sampler can be reused."""

    @abstractmethod
    def clone(self) -> StreamSampler[T]:
        """Return an independent copy, generator state included."""

    def take(self) -> StreamSampler[T]:
        """Move the sample and state into a new sampler, leaving this one empty."""
        moved = self.clone()
        self.reset()
        return moved

    def __copy__(self) -> StreamSampler[T]:
        return self.clone()


class SlotReservoir(StreamSampler[T]):
    """Shared plumbing for reservoirs that keep up to ``capacity`` slots.

    Subclasses implement the admission policy; this class owns the element
    store, the random source and the float type used for probability math.
    """

    def __init__(
        self,
        capacity: int,
        random_source: Any = None,
        float_dtype: Any = np.float64,
        preallocate: bool = False,
    ) -> None:
        """Initialize the reservoir.

        Args:
            capacity: Target sample size, at least 1.
            random_source: A :class:`RandomSource`, a numpy ``Generator``, an
                integer seed, or ``None`` to seed from OS entropy.
            float_dtype: Floating-point dtype for probability math.
            preallocate: Allocate every slot up front instead of growing.
        """
        if isinstance(capacity, bool) or not isinstance(capacity, (int, np.integer)):
            raise ValueError(f"capacity must be an integer, got {capacity!r}")
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._ftype = resolve_float_dtype(float_dtype)
        self._random = as_random_source(random_source)
        store_cls = ArenaSlotStore if preallocate else ListSlotStore
        self._store: SlotStore[T] = store_cls(int(capacity))
        logger.debug(
            f"Created {type(self).__name__} with capacity {capacity} "
            f"({np.dtype(self._ftype).name}, {store_cls.__name__})"
        )

    @property
    def capacity(self) -> int:
        return self._store.capacity

    @property
    def random_source(self) -> RandomSource:
        return self._random

    @property
    def is_full(self) -> bool:
        return len(self._store) == self._store.capacity

    def __len__(self) -> int:
        return len(self._store)

    def peek_result(self) -> tuple[T, ...]:
        """Return the sampled elements in slot order."""
        return self._store.view()

    def consume_result(self) -> list[T]:
        """Return the sampled elements in slot order and reset the reservoir."""
        result = self._store.drain()
        self.reset()
        logger.debug(f"Consumed {len(result)} samples from {type(self).__name__}")
        return result

    def reset(self) -> None:
        self._store.clear()
        self._reset_state()
        logger.debug(f"Reset {type(self).__name__}")

    def clone(self) -> SlotReservoir[T]:
        duplicate = type(self).__new__(type(self))
        duplicate.__dict__.update(self.__dict__)
        duplicate._store = self._store.clone()
        duplicate._random = self._random.clone()
        self._clone_state(duplicate)
        return duplicate

    @abstractmethod
    def _reset_state(self) -> None:
        """Restore skip or priority bookkeeping to its initial value."""

    def _clone_state(self, duplicate: SlotReservoir[T]) -> None:
        """Copy mutable bookkeeping containers into ``duplicate``."""
