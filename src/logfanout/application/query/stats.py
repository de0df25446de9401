"""Query – LogStats aggregate."""
from __future__ import annotations

import dataclasses
from datetime import timedelta
from typing import Any


@dataclasses.dataclass(frozen=True)
class LogStats:
    """Aggregate counts over stored events.

    ``by_severity`` and ``by_category`` list ``(value, count)`` pairs in
    descending count order; values with no events are omitted.
    """

    total: int
    recent: int
    critical: int
    by_severity: list[tuple[str, int]]
    by_category: list[tuple[str, int]]
    window: timedelta = timedelta(hours=24)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "recent": self.recent,
            "recent_window_seconds": int(self.window.total_seconds()),
            "critical": self.critical,
            "by_severity": [{"value": v, "count": c} for v, c in self.by_severity],
            "by_category": [{"value": v, "count": c} for v, c in self.by_category],
        }


__all__ = ["LogStats"]
