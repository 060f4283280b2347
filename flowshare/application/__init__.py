"""Application layer: use case orchestration over the document store."""
