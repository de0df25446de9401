"""Composition root – wires store, heap, broker, pipeline and query façade."""
from __future__ import annotations

import dataclasses
from typing import Any

from logfanout.application.fanout import FanoutBroker
from logfanout.application.ingestion import IngestionPipeline
from logfanout.application.query import QueryFacade
from logfanout.application.storage import EventStore
from logfanout.config import LogfanoutSettings, load_settings
from logfanout.kernel.priority import PriorityHeap
from logfanout.kernel.time import Clock
from logfanout.observability.logging import JsonLoggerFactory, get_logger

logger = get_logger(__name__)


@dataclasses.dataclass
class Engine:
    """The explicitly constructed components of one ingestion process."""

    settings: LogfanoutSettings
    store: EventStore
    heap: PriorityHeap
    broker: FanoutBroker
    pipeline: IngestionPipeline
    query: QueryFacade

    async def close(self) -> None:
        await self.broker.close()
        logger.info("engine_closed", pending=self.heap.size())


def mongo_store(settings: LogfanoutSettings, clock: Clock | None = None) -> EventStore:
    """Build a :class:`MongoEventStore` from *settings* using motor."""
    try:
        from motor.motor_asyncio import AsyncIOMotorClient  # type: ignore[import-untyped]
    except ImportError as exc:
        raise ImportError("Install 'logfanout[mongodb]' to use the MongoDB event store") from exc
    from logfanout.adapters.mongodb import MongoEventStore

    client: Any = AsyncIOMotorClient(settings.mongo_uri, tz_aware=True)
    collection = client[settings.mongo_database][settings.mongo_collection]
    return MongoEventStore(collection, clock=clock)


def build_engine(
    settings: LogfanoutSettings | None = None,
    store: EventStore | None = None,
    *,
    clock: Clock | None = None,
    configure_logging: bool = False,
) -> Engine:
    """Assemble an :class:`Engine`.

    Settings default to :func:`~logfanout.config.load_settings`.  Without an
    explicit *store* a MongoDB store is built from *settings*.
    """
    if settings is None:
        settings = load_settings()
    if configure_logging:
        JsonLoggerFactory.configure(settings.log_level)
    if store is None:
        store = mongo_store(settings, clock)

    heap = PriorityHeap()
    broker = FanoutBroker(
        delivery_timeout=settings.delivery_timeout_seconds,
        max_backlog=settings.max_subscriber_backlog,
    )
    engine = Engine(
        settings=settings,
        store=store,
        heap=heap,
        broker=broker,
        pipeline=IngestionPipeline(store, broker, heap),
        query=QueryFacade(store, clock=clock, stats_window=settings.stats_window),
    )
    logger.info(
        "engine_built",
        store=type(store).__name__,
        delivery_timeout=settings.delivery_timeout_seconds,
        max_backlog=settings.max_subscriber_backlog,
    )
    return engine


__all__ = ["Engine", "build_engine", "mongo_store"]
