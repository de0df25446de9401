"""Application fan-out – broker and subscriber capabilities."""
from logfanout.application.fanout.broker import FanoutBroker
from logfanout.application.fanout.subscriber import (
    AlertSubscriber,
    Channel,
    EventSubscriber,
    SubscriptionHandle,
)

__all__ = [
    "AlertSubscriber",
    "Channel",
    "EventSubscriber",
    "FanoutBroker",
    "SubscriptionHandle",
]
