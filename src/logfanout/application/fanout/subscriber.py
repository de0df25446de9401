"""Fan-out – subscriber capabilities and subscription handles."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Awaitable, Protocol, runtime_checkable

from logfanout.kernel.events import LogEvent


class Channel(str, Enum):
    """Logical delivery channels exposed to observers."""

    EVENT = "new-log"
    ALERT = "critical-alert"


@runtime_checkable
class EventSubscriber(Protocol):
    """Can receive every published event."""

    def on_event(self, event: LogEvent) -> Awaitable[None] | None: ...


@runtime_checkable
class AlertSubscriber(Protocol):
    """Can receive critical alerts."""

    def on_critical_alert(self, event: LogEvent) -> Awaitable[None] | None: ...


@dataclasses.dataclass(frozen=True)
class SubscriptionHandle:
    """Opaque token returned by :meth:`FanoutBroker.subscribe`."""

    connection_id: str

    def __str__(self) -> str:
        return self.connection_id


__all__ = ["AlertSubscriber", "Channel", "EventSubscriber", "SubscriptionHandle"]
