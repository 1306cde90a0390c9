"""Technical indicators — pure functions on price series."""

from __future__ import annotations

from decimal import Decimal
from statistics import mean

from signal_scanner.models import OHLCV


def sma(values: list[Decimal], period: int) -> Decimal | None:
    """Simple moving average of the last *period* values."""
    if period <= 0 or len(values) < period:
        return None
    return Decimal(sum(values[-period:])) / period


def ema(values: list[Decimal], period: int) -> Decimal | None:
    """Exponential moving average, seeded with the SMA of the first *period* values."""
    if period <= 0 or len(values) < period:
        return None
    k = Decimal(2) / (period + 1)
    current = Decimal(sum(values[:period])) / period
    for v in values[period:]:
        current = (v - current) * k + current
    return current


def rsi(closes: list[Decimal], period: int = 14) -> Decimal | None:
    """Relative Strength Index (Wilder's smoothing).

    Returns a Decimal in [0, 100] or None if there are fewer than
    ``period + 1`` data points.
    """
    if len(closes) < period + 1:
        return None

    deltas = [closes[i] - closes[i - 1] for i in range(1, len(closes))]

    # Seed with simple average of first *period* changes
    gains = [d if d > 0 else Decimal(0) for d in deltas[:period]]
    losses = [-d if d < 0 else Decimal(0) for d in deltas[:period]]
    avg_gain = Decimal(mean(gains))
    avg_loss = Decimal(mean(losses))

    for d in deltas[period:]:
        avg_gain = (avg_gain * (period - 1) + (d if d > 0 else Decimal(0))) / period
        avg_loss = (avg_loss * (period - 1) + (-d if d < 0 else Decimal(0))) / period

    if avg_loss == 0:
        return Decimal(100)
    rs = avg_gain / avg_loss
    return Decimal(100) - Decimal(100) / (1 + rs)


def bollinger_bands(
    closes: list[Decimal],
    period: int = 20,
    num_std: int | float = 2,
) -> tuple[Decimal, Decimal, Decimal] | None:
    """Bollinger Bands (SMA +/- num_std * stdev).

    Returns ``(lower, middle, upper)`` or None if fewer than *period* data
    points are available.
    """
    if len(closes) < period:
        return None

    window = closes[-period:]
    middle = Decimal(mean(window))
    variance = sum((p - middle) ** 2 for p in window) / period
    std = variance.sqrt()
    offset = std * Decimal(str(num_std))
    return (middle - offset, middle, middle + offset)


def atr(candles: list[OHLCV], period: int = 14) -> Decimal | None:
    """Average True Range over the last *period* bars (simple average of true ranges)."""
    if len(candles) < period + 1:
        return None
    ranges = []
    for prev, cur in zip(candles[-period - 1:-1], candles[-period:]):
        ranges.append(max(
            cur.high - cur.low,
            abs(cur.high - prev.close),
            abs(cur.low - prev.close),
        ))
    return Decimal(sum(ranges)) / period


def channel(candles: list[OHLCV], period: int) -> tuple[Decimal, Decimal] | None:
    """Lowest low and highest high of the *period* bars before the latest one."""
    if len(candles) < period + 1:
        return None
    window = candles[-period - 1:-1]
    return (min(c.low for c in window), max(c.high for c in window))
