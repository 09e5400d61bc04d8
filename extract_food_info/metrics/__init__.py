"""In-memory metrics for the extraction pipeline."""
