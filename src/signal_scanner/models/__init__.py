"""Pydantic domain models."""

from signal_scanner.models.market import MarketSnapshot, OHLCV
from signal_scanner.models.signal import (
    Category,
    Direction,
    ListedSignal,
    Signal,
    SignalStats,
    Verdict,
    make_signal_id,
)

__all__ = [
    "Category",
    "Direction",
    "ListedSignal",
    "MarketSnapshot",
    "OHLCV",
    "Signal",
    "SignalStats",
    "Verdict",
    "make_signal_id",
]
