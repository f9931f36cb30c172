"""Adapters connecting the metrics engine to HTTP and storage."""
