"""Infrastructure errors — storage and delivery failures."""

from __future__ import annotations

from typing import Any

from logfanout.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O failure outside the domain rules."""

    default_code = "infrastructure_error"


class PersistenceError(InfrastructureError):
    """The event store failed to persist or read a record.

    Ingestion aborts for the affected event; the producer may retry the
    whole event.
    """

    default_code = "persistence_error"

    def __init__(
        self,
        message: str = "Event store unavailable",
        *,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation
        if operation is not None:
            self.detail.setdefault("operation", operation)


class DeliveryFailure(InfrastructureError):
    """A subscriber could not be reached.

    Contained within the fan-out broker: the subscriber is dropped and the
    failure never reaches producers or other subscribers.
    """

    default_code = "delivery_failure"

    def __init__(
        self,
        connection_id: str,
        message: str | None = None,
        *,
        channel: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Delivery to '{connection_id}' failed", **kwargs)
        self.connection_id = connection_id
        self.channel = channel
        self.detail.setdefault("connection_id", connection_id)
        if channel is not None:
            self.detail.setdefault("channel", channel)


__all__ = [
    "DeliveryFailure",
    "InfrastructureError",
    "PersistenceError",
]
