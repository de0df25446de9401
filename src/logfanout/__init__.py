"""
logfanout – priority-ordered log ingestion with live subscriber fan-out.

Import path convention::

    from logfanout.kernel.events import LogEvent, Severity, classify
    from logfanout.kernel.priority import PriorityHeap
    from logfanout.application.fanout import FanoutBroker
    from logfanout.application.ingestion import IngestionPipeline
    from logfanout.engine import build_engine
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
