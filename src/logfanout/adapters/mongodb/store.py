"""MongoDB adapter — MongoEventStore."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from logfanout.application.pagination import Sort
from logfanout.application.storage import EventStore, LogFilter
from logfanout.kernel.errors import NotFoundError
from logfanout.kernel.events import Category, LogEvent, Severity
from logfanout.kernel.time import Clock, SystemClock


class MongoEventStore(EventStore):
    """MongoDB-backed :class:`EventStore` over a motor collection.

    Documents are keyed by a uuid4 hex ``_id``.  Call
    :meth:`create_indexes` once on startup to create the query indexes:

    - ``(severity, created_at desc)`` for severity filters in time order
    - ``source`` for source lookups
    - ``(priority, created_at desc)`` for priority ordering
    - ``category`` for category filters
    - ``created_at desc`` for time-window counts
    """

    def __init__(self, collection: Any, clock: Clock | None = None) -> None:
        self._col = collection
        self._clock = clock or SystemClock()

    # ------------------------------------------------------------------
    # Index management
    # ------------------------------------------------------------------

    @classmethod
    async def create_indexes(cls, collection: Any) -> None:
        """Create recommended indexes.  Idempotent — safe to call repeatedly."""
        await collection.create_index([("severity", 1), ("created_at", -1)], name="idx_logs_severity_time")
        await collection.create_index("source", name="idx_logs_source")
        await collection.create_index([("priority", 1), ("created_at", -1)], name="idx_logs_priority_time")
        await collection.create_index("category", name="idx_logs_category")
        await collection.create_index([("created_at", -1)], name="idx_logs_time")

    # ------------------------------------------------------------------
    # EventStore interface
    # ------------------------------------------------------------------

    async def persist(self, event: LogEvent) -> tuple[str, datetime]:
        event_id = uuid.uuid4().hex
        created_at = self._clock.now()
        await self._col.insert_one(self._to_doc(event.persisted(event_id, created_at)))
        return event_id, created_at

    async def find(
        self,
        filter: LogFilter,
        sort: Sort,
        skip: int = 0,
        limit: int = 50,
    ) -> list[LogEvent]:
        cursor = (
            self._col.find(filter.to_mongo_filter())
            .sort(sort.field, -1 if sort.descending else 1)
            .skip(skip)
            .limit(limit)
        )
        return [self._from_doc(doc) async for doc in cursor]

    async def count(self, filter: LogFilter) -> int:
        return await self._col.count_documents(filter.to_mongo_filter())

    async def find_by_id(self, id: str) -> LogEvent:
        doc = await self._col.find_one({"_id": id})
        if doc is None:
            raise NotFoundError("LogEvent", id)
        return self._from_doc(doc)

    async def delete_by_id(self, id: str) -> bool:
        result = await self._col.delete_one({"_id": id})
        return result.deleted_count > 0

    # ------------------------------------------------------------------
    # (De)serialisation helpers
    # ------------------------------------------------------------------

    def _to_doc(self, event: LogEvent) -> dict[str, Any]:
        return {
            "_id": event.id,
            "message": event.message,
            "severity": event.severity.value,
            "priority": event.priority,
            "priority_explicit": event.priority_explicit,
            "source": event.source,
            "category": event.category.value,
            "metadata": dict(event.metadata),
            "origin_address": event.origin_address,
            "created_at": event.created_at,
        }

    def _from_doc(self, doc: dict[str, Any]) -> LogEvent:
        created_at = doc.get("created_at")
        # pymongo returns naive UTC datetimes unless tz_aware=True
        if isinstance(created_at, datetime) and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        return LogEvent(
            id=doc["_id"],
            message=doc["message"],
            source=doc["source"],
            severity=Severity(doc.get("severity", Severity.INFO.value)),
            priority=doc.get("priority", 4),
            priority_explicit=doc.get("priority_explicit", False),
            category=Category(doc.get("category", Category.APPLICATION.value)),
            metadata=doc.get("metadata") or {},
            origin_address=doc.get("origin_address"),
            created_at=created_at,
        )


__all__ = ["MongoEventStore"]
