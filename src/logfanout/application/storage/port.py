"""Application storage – EventStore port."""
from __future__ import annotations

import abc
from datetime import datetime

from logfanout.application.pagination import Sort
from logfanout.application.storage.filter import LogFilter
from logfanout.kernel.events import LogEvent


class EventStore(abc.ABC):
    """Port: durable log event storage.

    Implementations assign ``id`` and ``created_at`` on :meth:`persist`.
    Any failure to reach the backing store should surface as an exception;
    the ingestion pipeline wraps it in :class:`PersistenceError`.
    """

    @abc.abstractmethod
    async def persist(self, event: LogEvent) -> tuple[str, datetime]:
        """Store *event*; return the assigned ``(id, created_at)``."""

    @abc.abstractmethod
    async def find(
        self,
        filter: LogFilter,
        sort: Sort,
        skip: int = 0,
        limit: int = 50,
    ) -> list[LogEvent]: ...

    @abc.abstractmethod
    async def count(self, filter: LogFilter) -> int: ...

    @abc.abstractmethod
    async def find_by_id(self, id: str) -> LogEvent:
        """Return the stored event or raise :class:`NotFoundError`."""

    @abc.abstractmethod
    async def delete_by_id(self, id: str) -> bool:
        """Delete the event; ``False`` when nothing matched."""


__all__ = ["EventStore"]
