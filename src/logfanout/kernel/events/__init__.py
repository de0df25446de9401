"""Kernel events – log event model and severity classifier."""
from logfanout.kernel.events.classifier import classify, normalize_severity
from logfanout.kernel.events.model import (
    HIGHEST_PRIORITY,
    LOWEST_PRIORITY,
    Category,
    LogEvent,
    Severity,
)

__all__ = [
    "Category",
    "HIGHEST_PRIORITY",
    "LOWEST_PRIORITY",
    "LogEvent",
    "Severity",
    "classify",
    "normalize_severity",
]
