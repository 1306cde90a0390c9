"""ORM table models."""

from signal_scanner.db.tables.signals import SignalRow

__all__ = ["SignalRow"]
