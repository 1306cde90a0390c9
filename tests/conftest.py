"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from signal_scanner.models import MarketSnapshot, OHLCV, Signal, Verdict
from signal_scanner.policy import SignalPolicy
from signal_scanner.store import SignalRepository, SignalStore

T0 = datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable UTC clock for simulated time."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def make_signal(
    instrument: str = "BTCUSDT",
    category: str = "Momentum Master",
    created_at: datetime = T0,
    direction: str = "LONG",
    confidence: float = 75.0,
    entry: str = "100",
    stop_loss: str = "95",
    take_profit: str = "110",
) -> Signal:
    return Signal.from_verdict(
        instrument,
        Verdict(
            category=category,
            direction=direction,
            entry=Decimal(entry),
            stop_loss=Decimal(stop_loss),
            take_profit=Decimal(take_profit),
            confidence=confidence,
        ),
        created_at,
    )


def make_snapshot(
    instrument: str = "BTCUSDT",
    closes: list[float] | None = None,
    volumes: list[float] | None = None,
    spread: float = 1.0,
) -> MarketSnapshot:
    """Snapshot of 15m bars with highs/lows ``spread`` around each close."""
    closes = closes if closes is not None else [100.0] * 60
    volumes = volumes if volumes is not None else [1000.0] * len(closes)
    start = T0 - timedelta(minutes=15 * len(closes))
    candles = [
        OHLCV(
            open_time=start + timedelta(minutes=15 * i),
            open=Decimal(str(c)),
            high=Decimal(str(c + spread)),
            low=Decimal(str(c - spread)),
            close=Decimal(str(c)),
            volume=Decimal(str(v)),
        )
        for i, (c, v) in enumerate(zip(closes, volumes))
    ]
    return MarketSnapshot(
        instrument=instrument,
        ts=T0,
        current_price=candles[-1].close if candles else Decimal("1"),
        candles=candles,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repository():
    """Repository over a private in-memory SQLite database with the schema created."""
    repo = SignalRepository.from_url("sqlite:///:memory:")
    repo.create_schema()
    yield repo
    repo.dispose()


@pytest.fixture
def policy() -> SignalPolicy:
    return SignalPolicy()


@pytest.fixture
def store(repository, policy, clock) -> SignalStore:
    return SignalStore(repository, policy, clock=clock)
