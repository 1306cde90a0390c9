"""Signal store — dedup, expiry and persistence of live signals."""

from signal_scanner.store.persistence import SignalRepository
from signal_scanner.store.signal_store import SignalStore, WriteResult, utc_now

__all__ = ["SignalRepository", "SignalStore", "WriteResult", "utc_now"]
