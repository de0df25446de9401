"""Ingestion – IngestionPipeline."""
from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Any

from logfanout.application.fanout import FanoutBroker
from logfanout.application.ingestion.validation import build_event
from logfanout.application.storage import EventStore
from logfanout.kernel.errors import BaseError, PersistenceError, ValidationError
from logfanout.kernel.events import LogEvent
from logfanout.kernel.priority import PriorityHeap
from logfanout.observability.logging import get_logger

logger = get_logger(__name__)


class IngestionPipeline:
    """Validate, classify, persist, enqueue and fan out incoming log events.

    Every collaborator is injected; the pipeline holds no global state.
    Each successful :meth:`ingest` performs exactly one store write, one
    heap insertion and one or two broker publications, in that order.  A
    rejected or unpersisted event produces none of them.

    Subscriber delivery is fire-and-forget: the broker only queues the
    event, so ``ingest`` never waits on observers.  Many producers may
    await ``ingest`` concurrently.
    """

    def __init__(
        self,
        store: EventStore,
        broker: FanoutBroker,
        heap: PriorityHeap | None = None,
    ) -> None:
        self._store = store
        self._broker = broker
        self._heap = heap if heap is not None else PriorityHeap()

    @property
    def pending(self) -> PriorityHeap:
        return self._heap

    @property
    def pending_count(self) -> int:
        return self._heap.size()

    async def ingest(self, raw: Any) -> LogEvent:
        """Ingest one producer payload and return the persisted event.

        Raises:
            ValidationError: the payload is missing ``message``/``source``
                or carries an invalid field.  Nothing is written.
            PersistenceError: the store failed.  Nothing is enqueued or
                published; the producer may retry the whole event.
        """
        try:
            event = build_event(raw)
        except ValidationError as exc:
            logger.info("event_rejected", errors=exc.errors, **exc.log_fields())
            raise

        try:
            event_id, created_at = await self._store.persist(event)
        except PersistenceError as exc:
            logger.error("persist_failed", source=event.source, **exc.log_fields())
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("persist_failed", source=event.source, error=repr(exc))
            raise PersistenceError(
                f"Failed to persist event from '{event.source}'",
                operation="persist",
                cause=exc,
            ) from exc

        stored = event.persisted(event_id, created_at)
        self._heap.insert(stored.priority, stored)
        self._broker.publish(stored)
        if stored.is_critical:
            self._broker.publish_alert(stored)

        logger.debug(
            "event_ingested",
            event_id=stored.id,
            source=stored.source,
            severity=stored.severity.value,
            priority=stored.priority,
        )
        return stored

    async def ingest_many(self, raws: Iterable[Any]) -> list[LogEvent | BaseError]:
        """Ingest a batch concurrently.

        Returns one outcome per payload, in input order: the persisted event
        or the :class:`ValidationError` / :class:`PersistenceError` that
        rejected it.  A failing item does not abort the batch.
        """
        outcomes = await asyncio.gather(
            *(self.ingest(raw) for raw in raws),
            return_exceptions=True,
        )
        results: list[LogEvent | BaseError] = []
        for outcome in outcomes:
            if isinstance(outcome, (LogEvent, BaseError)):
                results.append(outcome)
            else:
                raise outcome
        return results

    def next_pending(self) -> LogEvent | None:
        """Take the most urgent pending event, or ``None`` when none remain."""
        return self._heap.extract_min()

    def drain_pending(self, limit: int | None = None) -> list[LogEvent]:
        """Take up to *limit* pending events, most urgent first."""
        return self._heap.drain(limit)


__all__ = ["IngestionPipeline"]
