"""Application ingestion – validation and the ingestion pipeline."""
from logfanout.application.ingestion.pipeline import IngestionPipeline
from logfanout.application.ingestion.validation import build_event

__all__ = ["IngestionPipeline", "build_event"]
