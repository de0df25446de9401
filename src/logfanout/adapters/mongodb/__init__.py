"""MongoDB adapter — event store over a motor collection.

Requires the ``mongodb`` extra::

    pip install "logfanout[mongodb]"
"""

from logfanout.adapters.mongodb.store import MongoEventStore

__all__ = ["MongoEventStore"]
