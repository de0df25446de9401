"""Kernel priority – array-backed binary min-heap of pending log events."""
from __future__ import annotations

import threading
from typing import NamedTuple

from logfanout.kernel.events import LogEvent


class HeapEntry(NamedTuple):
    """``(priority, event)`` pair owned by :class:`PriorityHeap`."""

    priority: int
    event: LogEvent


class PriorityHeap:
    """Min-heap keyed by priority (1 = most urgent).

    The implicit tree lives in a single list: the parent of slot ``i`` is
    ``(i - 1) // 2`` and its children are ``2i + 1`` and ``2i + 2``.  Insert
    and extract are O(log n); peek, size and is_empty are O(1).

    Entries sharing a priority come out in **unspecified** order; the heap
    is not insertion-stable and callers must not rely on FIFO among ties.

    Every public operation runs under one lock, so concurrent inserts never
    interleave writes to the backing list.

    Example::

        heap = PriorityHeap()
        heap.insert(4, info_event)
        heap.insert(1, critical_event)
        assert heap.extract_min() is critical_event
    """

    def __init__(self) -> None:
        self._entries: list[HeapEntry] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Index arithmetic
    # ------------------------------------------------------------------

    @staticmethod
    def _parent(index: int) -> int:
        return (index - 1) // 2

    @staticmethod
    def _left(index: int) -> int:
        return 2 * index + 1

    @staticmethod
    def _right(index: int) -> int:
        return 2 * index + 2

    def _swap(self, i: int, j: int) -> None:
        self._entries[i], self._entries[j] = self._entries[j], self._entries[i]

    def _sift_up(self, index: int) -> None:
        entries = self._entries
        while index > 0:
            parent = self._parent(index)
            if entries[index].priority < entries[parent].priority:
                self._swap(index, parent)
                index = parent
            else:
                break

    def _sift_down(self, index: int) -> None:
        entries = self._entries
        size = len(entries)
        while True:
            smallest = index
            left = self._left(index)
            right = self._right(index)
            if left < size and entries[left].priority < entries[smallest].priority:
                smallest = left
            if right < size and entries[right].priority < entries[smallest].priority:
                smallest = right
            if smallest == index:
                return
            self._swap(index, smallest)
            index = smallest

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def insert(self, priority: int, event: LogEvent) -> None:
        with self._lock:
            self._entries.append(HeapEntry(priority, event))
            self._sift_up(len(self._entries) - 1)

    def peek(self) -> LogEvent | None:
        """Return the most urgent event without removing it, or ``None``."""
        with self._lock:
            if not self._entries:
                return None
            return self._entries[0].event

    def extract_min(self) -> LogEvent | None:
        """Remove and return the most urgent event.

        Returns ``None`` when the heap is empty; the heap is left untouched
        in that case.
        """
        with self._lock:
            return self._extract_locked()

    def _extract_locked(self) -> LogEvent | None:
        if not self._entries:
            return None
        root = self._entries[0]
        last = self._entries.pop()
        if self._entries:
            self._entries[0] = last
            self._sift_down(0)
        return root.event

    def drain(self, limit: int | None = None) -> list[LogEvent]:
        """Extract up to *limit* events (all when ``None``), most urgent first."""
        drained: list[LogEvent] = []
        with self._lock:
            while self._entries and (limit is None or len(drained) < limit):
                event = self._extract_locked()
                if event is not None:
                    drained.append(event)
        return drained

    def size(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries = []

    def snapshot(self) -> list[HeapEntry]:
        """Copy of the backing list in array (not sorted) order."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PriorityHeap(size={len(self._entries)})"


__all__ = ["HeapEntry", "PriorityHeap"]
