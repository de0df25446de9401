"""Testing fakes – in-memory stand-ins for ports and observers."""
from logfanout.testing.fakes.clock import FakeClock
from logfanout.testing.fakes.event_store import InMemoryEventStore
from logfanout.testing.fakes.subscribers import (
    AsyncRecordingSubscriber,
    FailingSubscriber,
    RecordingSubscriber,
    SlowSubscriber,
)

__all__ = [
    "AsyncRecordingSubscriber",
    "FailingSubscriber",
    "FakeClock",
    "InMemoryEventStore",
    "RecordingSubscriber",
    "SlowSubscriber",
]
