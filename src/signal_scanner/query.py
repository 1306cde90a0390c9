"""Query surface — read-only views over the signal store for the API layer."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel

from signal_scanner.models import ListedSignal
from signal_scanner.policy import SignalPolicy
from signal_scanner.scanner.engine import Scanner
from signal_scanner.store import SignalStore, utc_now
from signal_scanner.store.signal_store import Clock

ConfidenceBand = Literal["high", "medium", "low"]


class SignalListing(ListedSignal):
    """A listed signal with presentation-ready derived fields."""

    age_seconds: int
    expires_at: datetime
    expires_in_seconds: int
    time_ago: str
    expires_in: str
    confidence_band: ConfidenceBand
    risk_reward: float | None


def confidence_band(confidence: float) -> ConfidenceBand:
    if confidence >= 80:
        return "high"
    if confidence >= 60:
        return "medium"
    return "low"


def time_ago(age: timedelta) -> str:
    minutes = int(age.total_seconds() // 60)
    hours = int(age.total_seconds() // 3600)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def expires_in(remaining: timedelta) -> str:
    seconds = remaining.total_seconds()
    if seconds <= 0:
        return "Expired"
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def risk_reward(entry: Decimal, stop_loss: Decimal, take_profit: Decimal) -> float | None:
    """Reward-to-risk ratio rounded to 2 places; None when the stop sits on the entry."""
    risk = abs(entry - stop_loss)
    if risk == 0:
        return None
    return round(float(abs(take_profit - entry) / risk), 2)


class SignalQuery:
    """Listing, stats and delete-by-id over a SignalStore.

    Expiry figures come from the store's own ``SignalPolicy`` so they always
    agree with what the sweep removes.
    """

    def __init__(self, store: SignalStore, scanner: Scanner | None = None, clock: Clock = utc_now) -> None:
        self.store = store
        self.scanner = scanner
        self._clock = clock

    @property
    def policy(self) -> SignalPolicy:
        return self.store.policy

    def list_signals(self) -> list[SignalListing]:
        now = self._clock()
        listed = self.store.list(now)
        return [self._present(s, now) for s in listed]

    def stats(self) -> dict[str, Any]:
        stats = self.store.stats()
        last_scan = self.scanner.last_scan_time if self.scanner else None
        return {
            "totalSignals": stats.total,
            "recentSignals": stats.recent,
            "dailySignals": stats.daily,
            "comboCounts": stats.by_category,
            "lastScan": last_scan.isoformat() if last_scan else None,
        }

    def delete(self, signal_id: str) -> bool:
        return bool(self.store.remove(signal_id))

    def _present(self, signal: ListedSignal, now: datetime) -> SignalListing:
        age = now - signal.created_at
        expires_at = self.policy.expires_at(signal.category, signal.created_at)
        remaining = expires_at - now
        return SignalListing(
            **signal.model_dump(),
            age_seconds=max(int(age.total_seconds()), 0),
            expires_at=expires_at,
            expires_in_seconds=max(int(remaining.total_seconds()), 0),
            time_ago=time_ago(age),
            expires_in=expires_in(remaining),
            confidence_band=confidence_band(signal.confidence),
            risk_reward=risk_reward(signal.entry, signal.stop_loss, signal.take_profit),
        )
