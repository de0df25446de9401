"""Kernel priority – pending-event min-heap."""
from logfanout.kernel.priority.heap import HeapEntry, PriorityHeap

__all__ = ["HeapEntry", "PriorityHeap"]
