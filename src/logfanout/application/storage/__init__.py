"""Application storage – event store port and filter."""
from logfanout.application.storage.filter import LogFilter
from logfanout.application.storage.port import EventStore

__all__ = ["EventStore", "LogFilter"]
