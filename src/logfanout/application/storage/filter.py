"""Application storage – LogFilter conjunction."""
from __future__ import annotations

import dataclasses
import re
from datetime import datetime
from typing import Any

from logfanout.kernel.errors import ValidationError
from logfanout.kernel.events import Category, LogEvent, Severity


@dataclasses.dataclass(frozen=True)
class LogFilter:
    """Conjunction of optional criteria; ``None`` means "any".

    ``source`` matches as a case-insensitive substring.  ``created_after``
    is inclusive.
    """

    severity: Severity | None = None
    source: str | None = None
    category: Category | None = None
    priority: int | None = None
    created_after: datetime | None = None

    @classmethod
    def from_params(
        cls,
        *,
        severity: str | None = None,
        source: str | None = None,
        category: str | None = None,
        priority: int | str | None = None,
        created_after: datetime | None = None,
    ) -> "LogFilter":
        """Build a filter from loosely-typed request parameters.

        Raises:
            ValidationError: when a value is not one of the known enums or
                priority is not an integer.
        """
        errors: list[dict[str, Any]] = []
        sev: Severity | None = None
        cat: Category | None = None
        prio: int | None = None
        if severity:
            try:
                sev = Severity(severity.strip().lower())
            except ValueError:
                errors.append({"field": "severity", "reason": f"unknown severity {severity!r}"})
        if category:
            try:
                cat = Category(category.strip().lower())
            except ValueError:
                errors.append({"field": "category", "reason": f"unknown category {category!r}"})
        if priority is not None and priority != "":
            try:
                prio = int(priority)
            except (TypeError, ValueError):
                errors.append({"field": "priority", "reason": f"not an integer: {priority!r}"})
        if errors:
            raise ValidationError("Invalid log filter", errors=errors)
        return cls(
            severity=sev,
            source=source or None,
            category=cat,
            priority=prio,
            created_after=created_after,
        )

    def matches(self, event: LogEvent) -> bool:
        if self.severity is not None and event.severity is not self.severity:
            return False
        if self.source is not None and self.source.lower() not in event.source.lower():
            return False
        if self.category is not None and event.category is not self.category:
            return False
        if self.priority is not None and event.priority != self.priority:
            return False
        if self.created_after is not None:
            if event.created_at is None or event.created_at < self.created_after:
                return False
        return True

    def to_mongo_filter(self) -> dict[str, Any]:
        query: dict[str, Any] = {}
        if self.severity is not None:
            query["severity"] = self.severity.value
        if self.source is not None:
            query["source"] = {"$regex": re.escape(self.source), "$options": "i"}
        if self.category is not None:
            query["category"] = self.category.value
        if self.priority is not None:
            query["priority"] = self.priority
        if self.created_after is not None:
            query["created_at"] = {"$gte": self.created_after}
        return query

    def narrow(self, **changes: Any) -> "LogFilter":
        """Return a copy with additional criteria applied."""
        return dataclasses.replace(self, **changes)


__all__ = ["LogFilter"]
