"""Multi-strategy market scanner with a deduplicating, self-expiring signal store."""

__version__ = "0.1.0"
