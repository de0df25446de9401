"""Unit tests for the ingestion pipeline."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from logfanout.application.fanout import FanoutBroker
from logfanout.application.ingestion import IngestionPipeline, build_event
from logfanout.kernel.errors import PersistenceError, ValidationError
from logfanout.kernel.events import Category, LogEvent, Severity
from logfanout.kernel.priority import PriorityHeap
from logfanout.testing.fakes import FakeClock, InMemoryEventStore, RecordingSubscriber


class BrokenStore(InMemoryEventStore):
    async def persist(self, event: LogEvent) -> Any:
        raise OSError("connection refused")


def _pipeline(
    store: InMemoryEventStore | None = None,
    *,
    max_backlog: int = 1000,
) -> tuple[IngestionPipeline, InMemoryEventStore, PriorityHeap, FanoutBroker]:
    if store is None:
        store = InMemoryEventStore(FakeClock())
    heap = PriorityHeap()
    broker = FanoutBroker(max_backlog=max_backlog)
    return IngestionPipeline(store, broker, heap), store, heap, broker


# ---------------------------------------------------------------------------
# build_event: validation and defaults
# ---------------------------------------------------------------------------


class TestBuildEvent:
    def test_defaults_applied(self) -> None:
        event = build_event({"message": "boot", "source": "node-1"})
        assert event.severity is Severity.INFO
        assert event.category is Category.APPLICATION
        assert event.metadata == {}
        assert event.priority == 4
        assert not event.priority_explicit

    def test_priority_derived_from_severity(self) -> None:
        assert build_event({"message": "m", "source": "s", "severity": "error"}).priority == 2

    def test_explicit_priority_is_kept(self) -> None:
        event = build_event({"message": "m", "source": "s", "severity": "info", "priority": 1})
        assert event.priority == 1
        assert event.severity is Severity.INFO
        assert event.priority_explicit

    def test_explicit_low_priority_on_critical_is_kept(self) -> None:
        event = build_event({"message": "m", "source": "s", "severity": "critical", "priority": 5})
        assert event.priority == 5
        assert event.is_critical

    def test_unknown_severity_normalised(self) -> None:
        event = build_event({"message": "m", "source": "s", "severity": "apocalyptic"})
        assert event.severity is Severity.INFO
        assert event.priority == 5
        assert not event.priority_explicit

    def test_text_fields_trimmed(self) -> None:
        event = build_event({"message": "  disk full ", "source": " node-3 ", "origin_address": " 10.0.0.9 "})
        assert event.message == "disk full"
        assert event.source == "node-3"
        assert event.origin_address == "10.0.0.9"

    def test_category_parsed(self) -> None:
        assert build_event({"message": "m", "source": "s", "category": "IoT"}).category is Category.IOT

    def test_metadata_copied(self) -> None:
        meta = {"temperature": 91}
        event = build_event({"message": "m", "source": "s", "metadata": meta})
        meta["temperature"] = 0
        assert event.metadata == {"temperature": 91}

    @pytest.mark.parametrize(
        "raw,field",
        [
            ({"message": "", "source": "node-3"}, "message"),
            ({"message": "   ", "source": "node-3"}, "message"),
            ({"source": "node-3"}, "message"),
            ({"message": "m"}, "source"),
            ({"message": "m", "source": 7}, "source"),
            ({"message": "m", "source": "s", "category": "kitchen"}, "category"),
            ({"message": "m", "source": "s", "priority": 0}, "priority"),
            ({"message": "m", "source": "s", "priority": 6}, "priority"),
            ({"message": "m", "source": "s", "priority": "1"}, "priority"),
            ({"message": "m", "source": "s", "priority": True}, "priority"),
            ({"message": "m", "source": "s", "metadata": ["x"]}, "metadata"),
            ({"message": "m", "source": "s", "origin_address": 127}, "origin_address"),
        ],
    )
    def test_rejections(self, raw: dict[str, Any], field: str) -> None:
        with pytest.raises(ValidationError) as info:
            build_event(raw)
        assert field in info.value.fields

    def test_all_failures_reported(self) -> None:
        with pytest.raises(ValidationError) as info:
            build_event({"message": "", "source": ""})
        assert info.value.fields == ["message", "source"]

    def test_non_mapping_rejected(self) -> None:
        with pytest.raises(ValidationError):
            build_event(["message", "source"])


# ---------------------------------------------------------------------------
# IngestionPipeline.ingest
# ---------------------------------------------------------------------------


class TestIngest:
    def test_critical_event_is_persisted_enqueued_and_alerted(self) -> None:
        async def _run() -> None:
            pipeline, store, heap, broker = _pipeline()
            subs = [RecordingSubscriber(), RecordingSubscriber()]
            for s in subs:
                broker.subscribe(s)

            event = await pipeline.ingest({"message": "disk full", "source": "node-3", "severity": "critical"})
            await broker.flush()

            assert event.priority == 1
            assert event.id is not None
            assert event.created_at == FakeClock().now()
            assert (await store.find_by_id(event.id)).message == "disk full"
            assert heap.size() == 1
            assert heap.peek() is event
            for s in subs:
                assert [e.id for e in s.events] == [event.id]
                assert [e.id for e in s.alerts] == [event.id]
            await broker.close()

        asyncio.run(_run())

    def test_ordinary_event_is_not_alerted(self) -> None:
        async def _run() -> None:
            pipeline, _, _, broker = _pipeline()
            sub = RecordingSubscriber()
            broker.subscribe(sub)
            await pipeline.ingest({"message": "heartbeat", "source": "node-1", "severity": "warning"})
            await broker.flush()
            assert sub.event_messages == ["heartbeat"]
            assert sub.alerts == []
            await broker.close()

        asyncio.run(_run())

    def test_explicit_priority_one_triggers_alert(self) -> None:
        async def _run() -> None:
            pipeline, _, _, broker = _pipeline()
            sub = RecordingSubscriber()
            broker.subscribe(sub)
            await pipeline.ingest({"message": "door forced", "source": "lock-2", "priority": 1})
            await broker.flush()
            assert [e.message for e in sub.alerts] == ["door forced"]
            await broker.close()

        asyncio.run(_run())

    def test_validation_error_has_no_side_effects(self) -> None:
        async def _run() -> None:
            pipeline, store, heap, broker = _pipeline()
            sub = RecordingSubscriber()
            broker.subscribe(sub)
            with pytest.raises(ValidationError):
                await pipeline.ingest({"message": "", "source": "node-3"})
            await broker.flush()
            assert store.persist_calls == 0
            assert len(store) == 0
            assert heap.is_empty()
            assert sub.events == [] and sub.alerts == []
            await broker.close()

        asyncio.run(_run())

    def test_persistence_error_has_no_heap_or_broker_effects(self) -> None:
        async def _run() -> None:
            store = InMemoryEventStore(FakeClock())
            store.fail_next()
            pipeline, _, heap, broker = _pipeline(store)
            sub = RecordingSubscriber()
            broker.subscribe(sub)
            with pytest.raises(PersistenceError):
                await pipeline.ingest({"message": "disk full", "source": "node-3", "severity": "critical"})
            await broker.flush()
            assert heap.is_empty()
            assert sub.events == [] and sub.alerts == []

            # the producer retries the whole event
            event = await pipeline.ingest({"message": "disk full", "source": "node-3", "severity": "critical"})
            await broker.flush()
            assert heap.size() == 1
            assert [e.id for e in sub.alerts] == [event.id]
            await broker.close()

        asyncio.run(_run())

    def test_unexpected_store_exception_wrapped(self) -> None:
        async def _run() -> None:
            pipeline, _, heap, broker = _pipeline(BrokenStore())
            with pytest.raises(PersistenceError) as info:
                await pipeline.ingest({"message": "m", "source": "s"})
            assert isinstance(info.value.__cause__, OSError)
            assert info.value.operation == "persist"
            assert heap.is_empty()

        asyncio.run(_run())

    def test_delivery_failure_never_loses_the_event(self) -> None:
        from logfanout.testing.fakes import FailingSubscriber

        async def _run() -> None:
            pipeline, store, heap, broker = _pipeline()
            broker.subscribe(FailingSubscriber())
            event = await pipeline.ingest({"message": "m", "source": "s", "severity": "critical"})
            await broker.flush()
            assert broker.subscriber_count == 0
            assert heap.peek() is event
            assert len(store) == 1

        asyncio.run(_run())

    def test_concurrent_ingest_no_lost_or_duplicated_entries(self) -> None:
        async def _run() -> None:
            store = InMemoryEventStore(FakeClock(), persist_delay=0.0001)
            pipeline, _, heap, broker = _pipeline(store, max_backlog=5000)
            sub = RecordingSubscriber()
            broker.subscribe(sub)
            severities = ["info", "warning", "error", "critical"]

            async def producer(n: int) -> None:
                for i in range(100):
                    await pipeline.ingest({
                        "message": f"p{n}-{i}",
                        "source": f"device-{n}",
                        "severity": severities[(n + i) % 4],
                    })

            await asyncio.gather(*(producer(n) for n in range(10)))
            await broker.flush()

            assert len(store) == 1000
            assert heap.size() == 1000
            ids = [entry.event.id for entry in heap.snapshot()]
            assert len(set(ids)) == 1000
            assert set(ids) == {e.id for e in store.records}
            assert len(sub.events) == 1000
            assert len(sub.alerts) == 250
            await broker.close()

        asyncio.run(_run())


# ---------------------------------------------------------------------------
# Batches and pending drain
# ---------------------------------------------------------------------------


class TestBatchAndDrain:
    def test_ingest_many_reports_per_item(self) -> None:
        async def _run() -> None:
            pipeline, store, heap, broker = _pipeline()
            outcomes = await pipeline.ingest_many([
                {"message": "ok", "source": "a"},
                {"message": "", "source": "b"},
                {"message": "also ok", "source": "c", "severity": "error"},
            ])
            assert isinstance(outcomes[0], LogEvent)
            assert isinstance(outcomes[1], ValidationError)
            assert isinstance(outcomes[2], LogEvent)
            assert len(store) == 2
            assert heap.size() == 2

        asyncio.run(_run())

    def test_drain_pending_by_urgency(self) -> None:
        async def _run() -> None:
            pipeline, _, _, _ = _pipeline()
            for severity in ("info", "critical", "warning", "error"):
                await pipeline.ingest({"message": severity, "source": "s", "severity": severity})
            assert pipeline.pending_count == 4
            assert pipeline.next_pending().message == "critical"  # type: ignore[union-attr]
            assert [e.message for e in pipeline.drain_pending(limit=2)] == ["error", "warning"]
            assert [e.message for e in pipeline.drain_pending()] == ["info"]
            assert pipeline.next_pending() is None

        asyncio.run(_run())

    def test_default_heap_created(self) -> None:
        pipeline = IngestionPipeline(InMemoryEventStore(), FanoutBroker())
        assert pipeline.pending.is_empty()
