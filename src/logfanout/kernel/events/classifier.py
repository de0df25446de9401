"""Kernel events – severity → priority classifier."""
from __future__ import annotations

from typing import Any

from logfanout.kernel.events.model import LOWEST_PRIORITY, Severity

_PRIORITY_BY_SEVERITY: dict[Severity, int] = {
    Severity.CRITICAL: 1,
    Severity.ERROR: 2,
    Severity.WARNING: 3,
    Severity.INFO: 4,
}


def _parse(value: Any) -> Severity | None:
    if isinstance(value, Severity):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Severity(value.strip().lower())
    except ValueError:
        return None


def classify(severity: Any) -> int:
    """Map a declared severity to a priority rank (1 = most urgent).

    ``critical→1``, ``error→2``, ``warning→3``, ``info→4``; anything else,
    including ``None`` and non-strings, maps to ``5``.
    """
    parsed = _parse(severity)
    if parsed is None:
        return LOWEST_PRIORITY
    return _PRIORITY_BY_SEVERITY[parsed]


def normalize_severity(value: Any) -> Severity:
    """Coerce a declared severity to a :class:`Severity`, defaulting to ``INFO``."""
    return _parse(value) or Severity.INFO


__all__ = ["classify", "normalize_severity"]
