"""Application layer – ingestion, fan-out, query and storage port."""
