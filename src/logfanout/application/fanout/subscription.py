"""Fan-out – per-subscriber delivery queue and worker."""
from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable

from logfanout.application.fanout.subscriber import Channel, SubscriptionHandle
from logfanout.kernel.errors import DeliveryFailure
from logfanout.kernel.events import LogEvent

_CALLBACKS: dict[Channel, str] = {
    Channel.EVENT: "on_event",
    Channel.ALERT: "on_critical_alert",
}


class Subscription:
    """One live subscriber: a bounded FIFO queue drained by its own task.

    Both channels share the queue, so a subscriber sees events in the order
    they were published.  A slow subscriber only ever delays itself:
    coroutine callbacks are awaited under ``delivery_timeout`` and plain
    callbacks run in a worker thread under the same bound, so a blocking
    ``on_event`` never stalls the event loop.  A timed-out thread cannot be
    interrupted and may still finish after the subscriber was dropped.
    """

    def __init__(
        self,
        handle: SubscriptionHandle,
        subscriber: Any,
        *,
        delivery_timeout: float,
        max_backlog: int,
        on_failure: Callable[["Subscription", DeliveryFailure], None],
    ) -> None:
        self.handle = handle
        self.subscriber = subscriber
        self._timeout = delivery_timeout
        self._on_failure = on_failure
        self._queue: asyncio.Queue[tuple[Channel, LogEvent]] = asyncio.Queue(maxsize=max_backlog)
        self._closed = False
        self.delivered = 0
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=f"fanout-{handle.connection_id}"
        )

    @property
    def connection_id(self) -> str:
        return self.handle.connection_id

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def backlog(self) -> int:
        return self._queue.qsize()

    def offer(self, channel: Channel, event: LogEvent) -> bool:
        """Enqueue without waiting; ``False`` when closed or the backlog is full."""
        if self._closed:
            return False
        try:
            self._queue.put_nowait((channel, event))
        except asyncio.QueueFull:
            return False
        return True

    async def join(self) -> None:
        await self._queue.join()

    def close(self) -> asyncio.Task[None] | None:
        """Stop delivery and discard the backlog.

        Returns the worker task when it was cancelled so callers may await it.
        """
        self._closed = True
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            self._queue.task_done()
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if current is self._task or self._task.done():
            return None
        self._task.cancel()
        return self._task

    async def _run(self) -> None:
        while not self._closed:
            channel, event = await self._queue.get()
            try:
                if not self._closed:
                    await self._deliver(channel, event)
                    self.delivered += 1
            except DeliveryFailure as exc:
                self._on_failure(self, exc)
            finally:
                self._queue.task_done()

    async def _deliver(self, channel: Channel, event: LogEvent) -> None:
        callback = getattr(self.subscriber, _CALLBACKS[channel], None)
        if callback is None:
            return
        try:
            if inspect.iscoroutinefunction(callback):
                await asyncio.wait_for(callback(event), timeout=self._timeout)
            else:
                result = await asyncio.wait_for(
                    asyncio.to_thread(callback, event), timeout=self._timeout
                )
                if inspect.isawaitable(result):
                    await asyncio.wait_for(result, timeout=self._timeout)
        except asyncio.CancelledError:
            raise
        except (asyncio.TimeoutError, TimeoutError) as exc:
            raise DeliveryFailure(
                self.connection_id,
                f"Delivery to '{self.connection_id}' timed out after {self._timeout}s",
                channel=channel.value,
                cause=exc,
            ) from exc
        except Exception as exc:  # noqa: BLE001
            raise DeliveryFailure(
                self.connection_id,
                channel=channel.value,
                cause=exc,
            ) from exc


__all__ = ["Subscription"]
