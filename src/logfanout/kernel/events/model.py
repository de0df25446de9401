"""Kernel events – LogEvent, Severity, Category."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Producer-declared severity of a log event."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class Category(str, Enum):
    """Functional area a log event belongs to."""

    SYSTEM = "system"
    SECURITY = "security"
    NETWORK = "network"
    APPLICATION = "application"
    DATABASE = "database"
    IOT = "iot"


#: Most urgent / least urgent priority ranks.
HIGHEST_PRIORITY = 1
LOWEST_PRIORITY = 5


@dataclasses.dataclass(frozen=True)
class LogEvent:
    """Canonical structured log event.

    ``id`` and ``created_at`` are ``None`` until the event store persists it;
    :meth:`persisted` returns the stored copy.  ``priority_explicit`` records
    whether the producer supplied ``priority`` itself, in which case it is
    never re-derived from ``severity``.

    An unrecognised declared severity is stored as ``info`` while its
    priority is derived from the declared value, so such records carry
    ``severity="info"`` with ``priority=5`` and ``priority_explicit=False``
    rather than the usual info priority of 4.
    """

    message: str
    source: str
    severity: Severity = Severity.INFO
    priority: int = 4
    category: Category = Category.APPLICATION
    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)
    origin_address: str | None = None
    id: str | None = None
    created_at: datetime | None = None
    priority_explicit: bool = False

    @property
    def is_critical(self) -> bool:
        return self.severity is Severity.CRITICAL or self.priority == HIGHEST_PRIORITY

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def persisted(self, id: str, created_at: datetime) -> "LogEvent":
        """Return a copy carrying the storage-assigned identity."""
        return dataclasses.replace(self, id=id, created_at=created_at)

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "severity": self.severity.value,
            "priority": self.priority,
            "source": self.source,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "severity": self.severity.value,
            "priority": self.priority,
            "source": self.source,
            "category": self.category.value,
            "metadata": dict(self.metadata),
            "origin_address": self.origin_address,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "priority_explicit": self.priority_explicit,
        }


__all__ = ["Category", "HIGHEST_PRIORITY", "LOWEST_PRIORITY", "LogEvent", "Severity"]
