"""Bounded history window of collected samples.

Owned by a single monitor task, so no locking. Views are returned as
tuples so an evaluation always sees a fixed snapshot.
"""

from collections import deque
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class HistoryWindow(Generic[T]):
    """Fixed-capacity window; appending beyond capacity evicts the oldest entry."""

    def __init__(self, max_samples: int) -> None:
        if max_samples <= 0:
            raise ValueError(f"max_samples must be > 0, got {max_samples}")
        self._entries: deque[T] = deque(maxlen=max_samples)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def append(self, entry: T) -> None:
        self._entries.append(entry)

    def newest_first(self) -> tuple[T, ...]:
        return tuple(reversed(self._entries))

    def oldest_first(self) -> tuple[T, ...]:
        return tuple(self._entries)

    def latest(self) -> T | None:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self._entries)
