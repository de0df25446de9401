"""Testing fakes – recording, failing and slow subscribers."""
from __future__ import annotations

import asyncio

from logfanout.kernel.events import LogEvent


class RecordingSubscriber:
    """Collects everything delivered on both channels."""

    def __init__(self) -> None:
        self.events: list[LogEvent] = []
        self.alerts: list[LogEvent] = []

    def on_event(self, event: LogEvent) -> None:
        self.events.append(event)

    def on_critical_alert(self, event: LogEvent) -> None:
        self.alerts.append(event)

    @property
    def event_messages(self) -> list[str]:
        return [e.message for e in self.events]


class AsyncRecordingSubscriber(RecordingSubscriber):
    """Same as :class:`RecordingSubscriber` but with coroutine callbacks."""

    async def on_event(self, event: LogEvent) -> None:  # type: ignore[override]
        await asyncio.sleep(0)
        self.events.append(event)

    async def on_critical_alert(self, event: LogEvent) -> None:  # type: ignore[override]
        await asyncio.sleep(0)
        self.alerts.append(event)


class FailingSubscriber:
    """Raises on every delivery."""

    def __init__(self) -> None:
        self.attempts = 0

    def on_event(self, event: LogEvent) -> None:
        self.attempts += 1
        raise ConnectionResetError("socket closed")

    def on_critical_alert(self, event: LogEvent) -> None:
        self.attempts += 1
        raise ConnectionResetError("socket closed")


class SlowSubscriber:
    """Takes ``delay`` seconds to accept each event."""

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self.events: list[LogEvent] = []

    async def on_event(self, event: LogEvent) -> None:
        await asyncio.sleep(self.delay)
        self.events.append(event)


__all__ = [
    "AsyncRecordingSubscriber",
    "FailingSubscriber",
    "RecordingSubscriber",
    "SlowSubscriber",
]
