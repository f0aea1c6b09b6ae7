"""Element stores holding the admitted samples of a reservoir.

A store only knows slots.  It never reorders them; the owning reservoir
decides which slot index is constructed or overwritten.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class SlotStore(ABC, Generic[T]):
    """Base interface for fixed-capacity slot storage.

    Slots ``0 .. len(store) - 1`` are occupied.  New elements can only be
    constructed at ``len(store)``; occupied slots can be overwritten in place.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of occupied slots."""

    @abstractmethod
    def construct(self, index: int, value: T) -> None:
        """Place ``value`` in the first free slot, which must be ``index``."""

    @abstractmethod
    def overwrite(self, index: int, value: T) -> None:
        """Replace the element held in occupied slot ``index``."""

    @abstractmethod
    def view(self) -> tuple[T, ...]:
        """Return the occupied slots in slot order."""

    @abstractmethod
    def drain(self) -> list[T]:
        """Move all elements out into a new list and leave the store empty."""

    @abstractmethod
    def clear(self) -> None:
        """Release all elements."""

    @abstractmethod
    def clone(self) -> SlotStore[T]:
        """Return an independent store holding the same elements."""

    def _check_construct(self, index: int) -> None:
        filled = len(self)
        if filled >= self._capacity:
            raise IndexError(f"store is full ({self._capacity} slots)")
        if index != filled:
            raise IndexError(f"next free slot is {filled}, cannot construct at {index}")

    def _check_occupied(self, index: int) -> None:
        if not 0 <= index < len(self):
            raise IndexError(f"slot {index} is not occupied")


class ListSlotStore(SlotStore[T]):
    """Store that grows a list on demand, up to ``capacity``."""

    def __init__(self, capacity: int) -> None:
        super().__init__(capacity)
        self._slots: list[T] = []

    def __len__(self) -> int:
        return len(self._slots)

    def construct(self, index: int, value: T) -> None:
        self._check_construct(index)
        self._slots.append(value)

    def overwrite(self, index: int, value: T) -> None:
        self._check_occupied(index)
        self._slots[index] = value

    def view(self) -> tuple[T, ...]:
        return tuple(self._slots)

    def drain(self) -> list[T]:
        drained, self._slots = self._slots, []
        return drained

    def clear(self) -> None:
        self._slots.clear()

    def clone(self) -> ListSlotStore[T]:
        duplicate: ListSlotStore[T] = ListSlotStore(self._capacity)
        duplicate._slots = list(self._slots)
        return duplicate


class ArenaSlotStore(SlotStore[T]):
    """Store that allocates all ``capacity`` slots up front.

    Slots past the fill marker hold ``None`` and are never exposed, so
    ``None`` is still a valid element value.
    """

    def __init__(self, capacity: int) -> None:
        super().__init__(capacity)
        self._slots: list[Any] = [None] * capacity
        self._filled = 0

    def __len__(self) -> int:
        return self._filled

    def construct(self, index: int, value: T) -> None:
        self._check_construct(index)
        self._slots[index] = value
        self._filled += 1

    def overwrite(self, index: int, value: T) -> None:
        self._check_occupied(index)
        self._slots[index] = value

    def view(self) -> tuple[T, ...]:
        return tuple(self._slots[: self._filled])

    def drain(self) -> list[T]:
        drained = self._slots[: self._filled]
        self.clear()
        return drained

    def clear(self) -> None:
        for index in range(self._filled):
            self._slots[index] = None
        self._filled = 0

    def clone(self) -> ArenaSlotStore[T]:
        duplicate: ArenaSlotStore[T] = ArenaSlotStore(self._capacity)
        duplicate._slots = list(self._slots)
        duplicate._filled = self._filled
        return duplicate
