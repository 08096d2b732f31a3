from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, List, TypeVar

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """
    Fixed-size FIFO over a preallocated slot list.
    Appending to a full buffer overwrites the oldest entry.
    """

    __slots__ = ("_capacity", "_slots", "_head", "_size")

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = int(capacity)
        self._slots: list[T | None] = [None] * self._capacity
        self._head = 0  # physical index of the oldest item
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def is_full(self) -> bool:
        return self._size == self._capacity

    def append(self, item: T) -> None:
        if self._size < self._capacity:
            self._slots[(self._head + self._size) % self._capacity] = item
            self._size += 1
            return
        # Full: the oldest slot is reused and the head moves past it.
        self._slots[self._head] = item
        self._head = (self._head + 1) % self._capacity

    def to_list(self) -> List[T]:
        """Logical contents, oldest first."""
        return [self[i] for i in range(self._size)]

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> T:
        """Support buf[i] and buf[-1] indexing over the *logical* contents."""
        if index < 0:
            index += self._size
        if index < 0 or index >= self._size:
            raise IndexError("RingBuffer index out of range")
        item = self._slots[(self._head + index) % self._capacity]
        assert item is not None
        return item

    def __iter__(self) -> Iterator[T]:
        return iter(self.to_list())
