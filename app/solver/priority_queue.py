"""
MinHeap — binary min-heap priority queue with lazy updates.

A cheaper priority for an item already in the heap is pushed as a new
entry instead of decreasing the old one in place.  Consumers discard
stale entries when they pop an item that has already been finalized.

Ties on equal priority pop in insertion order: every entry carries a
monotonically increasing sequence number as a secondary key.
"""

from __future__ import annotations

import heapq
import itertools

from app.core.errors import EmptyQueue
from app.core.steps import Entry


class MinHeap:
    """
    Usage
    -----
    >>> pq = MinHeap()
    >>> pq.push("B", 4)
    >>> pq.push("C", 1)
    >>> pq.pop_min()
    ('C', 1)
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, str]] = []
        self._counter = itertools.count()

    def push(self, item: str, priority: int) -> None:
        """Insert *item* with *priority* in O(log n)."""
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def pop_min(self) -> tuple[str, int]:
        """
        Remove and return the lowest-priority ``(item, priority)``.

        Raises EmptyQueue when the heap is empty.
        """
        if not self._heap:
            raise EmptyQueue("pop_min() from an empty priority queue")
        priority, _seq, item = heapq.heappop(self._heap)
        return item, priority

    def is_empty(self) -> bool:
        return not self._heap

    def snapshot(self) -> tuple[Entry, ...]:
        """All current entries in pop order, without removing them."""
        return tuple(Entry(item, priority) for priority, _seq, item in sorted(self._heap))

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"MinHeap(size={len(self._heap)})"
