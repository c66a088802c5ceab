"""Application layer: orchestration of loading, scoring, ranking and export."""
