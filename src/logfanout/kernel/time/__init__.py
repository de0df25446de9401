"""Kernel time – Clock port and the system clock."""
from logfanout.kernel.time.clock import Clock, SystemClock

__all__ = ["Clock", "SystemClock"]
