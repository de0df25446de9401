"""Query – QueryFacade over the event store port."""
from __future__ import annotations

import asyncio
from datetime import timedelta
from enum import Enum
from typing import TypeVar

from logfanout.application.pagination import Page, PageRequest, Sort
from logfanout.application.query.stats import LogStats
from logfanout.application.storage import EventStore, LogFilter
from logfanout.kernel.events import HIGHEST_PRIORITY, Category, LogEvent, Severity
from logfanout.kernel.time import Clock, SystemClock
from logfanout.observability.logging import get_logger

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)


class QueryFacade:
    """Read/delete operations layered over :class:`EventStore`.

    Nothing here touches the pending heap or the broker.
    """

    def __init__(
        self,
        store: EventStore,
        clock: Clock | None = None,
        *,
        stats_window: timedelta = timedelta(hours=24),
    ) -> None:
        self._store = store
        self._clock = clock or SystemClock()
        self._stats_window = stats_window

    async def query(
        self,
        filter: LogFilter | None = None,
        sort: Sort | None = None,
        page: PageRequest | None = None,
    ) -> Page[LogEvent]:
        filter = filter or LogFilter()
        sort = sort or Sort()
        page = page or PageRequest()
        items, total = await asyncio.gather(
            self._store.find(filter, sort, skip=page.offset, limit=page.size),
            self._store.count(filter),
        )
        return Page.of(items, total, page)

    async def get(self, event_id: str) -> LogEvent:
        """Fetch one stored event; raises :class:`NotFoundError`."""
        return await self._store.find_by_id(event_id)

    async def delete(self, event_id: str) -> bool:
        deleted = await self._store.delete_by_id(event_id)
        logger.info("event_deleted", event_id=event_id, deleted=deleted)
        return deleted

    async def stats(self, window: timedelta | None = None) -> LogStats:
        """Counts by severity and category, in the trailing window, and critical."""
        if window is None:
            window = self._stats_window
        everything = LogFilter()
        since = self._clock.now() - window
        total, recent, by_severity, by_category, critical = await asyncio.gather(
            self._store.count(everything),
            self._store.count(LogFilter(created_after=since)),
            self._grouped(Severity, "severity"),
            self._grouped(Category, "category"),
            self._critical_count(),
        )
        return LogStats(
            total=total,
            recent=recent,
            critical=critical,
            by_severity=by_severity,
            by_category=by_category,
            window=window,
        )

    async def _grouped(self, enum: type[E], field: str) -> list[tuple[str, int]]:
        members = list(enum)
        counts = await asyncio.gather(
            *(self._store.count(LogFilter(**{field: member})) for member in members)
        )
        pairs = [(m.value, c) for m, c in zip(members, counts) if c > 0]
        return sorted(pairs, key=lambda pair: pair[1], reverse=True)

    async def _critical_count(self) -> int:
        # severity == critical OR priority == 1, by inclusion-exclusion
        by_severity, by_priority, both = await asyncio.gather(
            self._store.count(LogFilter(severity=Severity.CRITICAL)),
            self._store.count(LogFilter(priority=HIGHEST_PRIORITY)),
            self._store.count(LogFilter(severity=Severity.CRITICAL, priority=HIGHEST_PRIORITY)),
        )
        return by_severity + by_priority - both


__all__ = ["QueryFacade"]
