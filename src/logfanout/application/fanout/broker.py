"""Fan-out – FanoutBroker."""
from __future__ import annotations

import asyncio
import threading
import uuid
from typing import Any

from logfanout.application.fanout.subscriber import (
    AlertSubscriber,
    Channel,
    EventSubscriber,
    SubscriptionHandle,
)
from logfanout.application.fanout.subscription import Subscription
from logfanout.kernel.errors import DeliveryFailure
from logfanout.kernel.events import LogEvent
from logfanout.observability.logging import get_logger

logger = get_logger(__name__)


class FanoutBroker:
    """Delivers events to a dynamic set of live subscribers.

    Construct one per process and inject it wherever events are produced.
    ``publish`` and ``publish_alert`` never wait on subscribers: they take a
    snapshot of the registry under the lock, then enqueue onto each
    subscriber's own queue.  A subscriber whose callback raises, exceeds
    ``delivery_timeout`` or lets its backlog reach ``max_backlog`` is
    dropped; the failure is logged and goes no further.

    ``subscribe`` must be called while an event loop is running because
    each subscription starts a worker task.

    Example::

        broker = FanoutBroker(delivery_timeout=1.0)
        handle = broker.subscribe(websocket_session)
        broker.publish(event)
        await broker.flush()
        broker.unsubscribe(handle)
    """

    def __init__(self, *, delivery_timeout: float = 2.0, max_backlog: int = 1000) -> None:
        if delivery_timeout <= 0:
            raise ValueError("delivery_timeout must be > 0")
        if max_backlog < 1:
            raise ValueError("max_backlog must be >= 1")
        self._delivery_timeout = delivery_timeout
        self._max_backlog = max_backlog
        self._subscriptions: dict[str, Subscription] = {}
        self._lock = threading.Lock()
        self._dropped = 0

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def subscribe(self, subscriber: Any, *, connection_id: str | None = None) -> SubscriptionHandle:
        if not isinstance(subscriber, (EventSubscriber, AlertSubscriber)):
            raise TypeError(
                f"{type(subscriber).__name__} implements neither on_event nor on_critical_alert"
            )
        handle = SubscriptionHandle(connection_id or uuid.uuid4().hex)
        with self._lock:
            if handle.connection_id in self._subscriptions:
                raise ValueError(f"connection '{handle.connection_id}' is already subscribed")
            self._subscriptions[handle.connection_id] = Subscription(
                handle,
                subscriber,
                delivery_timeout=self._delivery_timeout,
                max_backlog=self._max_backlog,
                on_failure=self._drop,
            )
            count = len(self._subscriptions)
        logger.info("subscriber_added", connection_id=handle.connection_id, subscribers=count)
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """Remove a subscriber.  Unknown or already-removed handles are ignored."""
        self._remove(handle.connection_id, None)

    def is_subscribed(self, handle: SubscriptionHandle) -> bool:
        with self._lock:
            return handle.connection_id in self._subscriptions

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def _remove(self, connection_id: str, expected: Subscription | None) -> Subscription | None:
        with self._lock:
            current = self._subscriptions.get(connection_id)
            if current is None or (expected is not None and current is not expected):
                return None
            del self._subscriptions[connection_id]
            count = len(self._subscriptions)
        current.close()
        logger.info("subscriber_removed", connection_id=connection_id, subscribers=count)
        return current

    def _drop(self, subscription: Subscription, failure: DeliveryFailure) -> None:
        if self._remove(subscription.connection_id, subscription) is None:
            return
        self._dropped += 1
        logger.warning("subscriber_dropped", dropped_total=self._dropped, **failure.log_fields())

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def publish(self, event: LogEvent) -> int:
        """Queue *event* for every subscriber's general channel.

        Returns the number of subscribers it was queued for.
        """
        return self._fanout(Channel.EVENT, event)

    def publish_alert(self, event: LogEvent) -> int:
        """Queue *event* for every subscriber's critical-alert channel."""
        queued = self._fanout(Channel.ALERT, event)
        logger.warning(
            "critical_alert_published",
            event_id=event.id,
            source=event.source,
            subscribers=queued,
        )
        return queued

    def _fanout(self, channel: Channel, event: LogEvent) -> int:
        with self._lock:
            targets = list(self._subscriptions.values())
        queued = 0
        for subscription in targets:
            if subscription.closed:
                # removed after the snapshot was taken
                continue
            if subscription.offer(channel, event):
                queued += 1
                continue
            self._drop(
                subscription,
                DeliveryFailure(
                    subscription.connection_id,
                    f"Backlog of '{subscription.connection_id}' exceeded {self._max_backlog} events",
                    channel=channel.value,
                ),
            )
        return queued

    async def flush(self) -> None:
        """Wait until every live subscriber has worked through its backlog."""
        with self._lock:
            targets = list(self._subscriptions.values())
        await asyncio.gather(*(s.join() for s in targets))

    async def close(self) -> None:
        """Drop every subscriber and wait for their workers to stop."""
        with self._lock:
            targets = list(self._subscriptions.values())
            self._subscriptions.clear()
        tasks = [t for t in (s.close() for s in targets) if t is not None]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("broker_closed", subscribers=len(targets))

    def stats(self) -> dict[str, Any]:
        with self._lock:
            backlog = {cid: s.backlog for cid, s in self._subscriptions.items()}
            delivered = {cid: s.delivered for cid, s in self._subscriptions.items()}
        return {
            "subscribers": len(backlog),
            "backlog": backlog,
            "delivered": delivered,
            "dropped": self._dropped,
            "delivery_timeout": self._delivery_timeout,
            "max_backlog": self._max_backlog,
        }


__all__ = ["FanoutBroker"]
