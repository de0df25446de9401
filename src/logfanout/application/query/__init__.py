"""Application query – filtered retrieval and administrative statistics."""
from logfanout.application.query.facade import QueryFacade
from logfanout.application.query.stats import LogStats

__all__ = ["LogStats", "QueryFacade"]
