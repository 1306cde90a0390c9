"""Tests for the query surface — presentation helpers and store-backed views."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import T0, FakeClock, make_signal
from signal_scanner.query import (
    SignalQuery,
    confidence_band,
    expires_in,
    risk_reward,
    time_ago,
)
from signal_scanner.store import SignalStore


class TestHelpers:
    @pytest.mark.parametrize(
        "confidence, band",
        [(95, "high"), (80, "high"), (79.9, "medium"), (60, "medium"), (59, "low"), (0, "low")],
    )
    def test_confidence_band(self, confidence, band):
        assert confidence_band(confidence) == band

    @pytest.mark.parametrize(
        "age, text",
        [
            (timedelta(seconds=30), "Just now"),
            (timedelta(minutes=7), "7m ago"),
            (timedelta(minutes=59, seconds=59), "59m ago"),
            (timedelta(hours=3, minutes=20), "3h ago"),
            (timedelta(days=2, hours=5), "2d ago"),
        ],
    )
    def test_time_ago(self, age, text):
        assert time_ago(age) == text

    @pytest.mark.parametrize(
        "remaining, text",
        [
            (timedelta(0), "Expired"),
            (timedelta(minutes=-3), "Expired"),
            (timedelta(minutes=42, seconds=10), "42m"),
            (timedelta(hours=23, minutes=5), "23h 5m"),
        ],
    )
    def test_expires_in(self, remaining, text):
        assert expires_in(remaining) == text

    def test_risk_reward_long(self):
        assert risk_reward(Decimal("100"), Decimal("95"), Decimal("110")) == 2.0

    def test_risk_reward_short(self):
        assert risk_reward(Decimal("100"), Decimal("104"), Decimal("94")) == 1.5

    def test_risk_reward_zero_risk(self):
        assert risk_reward(Decimal("100"), Decimal("100"), Decimal("110")) is None


class TickingClock(FakeClock):
    """Moves forward one second every time it is read."""

    def __call__(self):
        now = self.now
        self.advance(seconds=1)
        return now


class _Scanner:
    def __init__(self, last_scan_time=None) -> None:
        self.last_scan_time = last_scan_time


class TestSignalQuery:
    def test_listing_fields(self, store, clock):
        store.add(make_signal(category="Momentum Master", confidence=85, created_at=clock()))
        clock.advance(minutes=20)
        query = SignalQuery(store, clock=clock)

        [listing] = query.list_signals()
        assert listing.is_new is False
        assert listing.age_seconds == 20 * 60
        assert listing.time_ago == "20m ago"
        assert listing.expires_in == "40m"
        assert listing.expires_in_seconds == 40 * 60
        assert listing.confidence_band == "high"
        assert listing.risk_reward == 2.0

    def test_expires_in_uses_store_policy(self, store, clock):
        store.add(make_signal(category="Trend Following", created_at=clock()))
        clock.advance(hours=2)
        [listing] = SignalQuery(store, clock=clock).list_signals()
        assert listing.expires_in == "22h 0m"
        assert listing.expires_at == store.policy.expires_at("Trend Following", listing.created_at)

    def test_expired_never_listed(self, store, clock):
        store.add(make_signal(category="Breakout Pro", created_at=clock()))
        clock.advance(hours=1)
        assert SignalQuery(store, clock=clock).list_signals() == []

    def test_stats_with_last_scan(self, store, clock):
        store.add(make_signal(created_at=clock()))
        query = SignalQuery(store, _Scanner(clock()), clock=clock)
        stats = query.stats()
        assert stats["totalSignals"] == 1
        assert stats["recentSignals"] == 1
        assert stats["dailySignals"] == 1
        assert stats["comboCounts"] == {"Momentum Master": 1}
        assert stats["lastScan"] == clock().isoformat()

    def test_stats_before_first_scan(self, store, clock):
        assert SignalQuery(store, _Scanner(), clock=clock).stats()["lastScan"] is None
        assert SignalQuery(store, clock=clock).stats()["lastScan"] is None

    def test_delete(self, store, clock):
        signal = make_signal(created_at=clock())
        store.add(signal)
        query = SignalQuery(store, clock=clock)
        assert query.delete(signal.id) is True
        assert query.delete(signal.id) is False

    def test_listing_uses_one_instant(self):
        clock = TickingClock(T0)
        store = SignalStore(None, clock=clock)
        store.add(make_signal(category="Momentum Master", created_at=T0))
        clock.now = T0 + timedelta(minutes=59, seconds=59)

        [listing] = SignalQuery(store, clock=clock).list_signals()
        assert listing.expires_in_seconds == 1
        assert listing.expires_in != "Expired"
