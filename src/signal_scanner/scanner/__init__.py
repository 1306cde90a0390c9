"""Scan orchestration — paced instrument walk, evaluator fan-out, scheduling."""

from signal_scanner.scanner.engine import Scanner
from signal_scanner.scanner.pacing import IntervalGate
from signal_scanner.scanner.scheduler import ScanScheduler
from signal_scanner.scanner.snapshot import BinanceSnapshotProvider, SnapshotProvider

__all__ = [
    "BinanceSnapshotProvider",
    "IntervalGate",
    "ScanScheduler",
    "Scanner",
    "SnapshotProvider",
]
