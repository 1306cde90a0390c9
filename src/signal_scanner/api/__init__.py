"""HTTP boundary over the query surface."""

from signal_scanner.api.app import create_app

__all__ = ["create_app"]
