"""Trend Following — stacked EMAs with price on the trend side."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from signal_scanner.models import Category, MarketSnapshot, Verdict
from signal_scanner.strategy.base import Evaluator, price_levels
from signal_scanner.strategy.indicators import atr, ema
from signal_scanner.strategy.registry import register


@register
class TrendFollowing(Evaluator):
    """Follow an established trend.

    price > EMA(fast) > EMA(slow) and slow EMA rising → LONG
    price < EMA(fast) < EMA(slow) and slow EMA falling → SHORT
    """

    name = "trend_following"
    category = Category.TREND_FOLLOWING.value
    docs = {
        "thesis": "Once fast and slow EMAs stack in one direction and price holds above/below both, the trend tends to continue for hours.",
        "data": "15m closes for EMA(20)/EMA(50) and the slope of EMA(50) over `slope_lookback` bars; ATR(14) for levels.",
        "risk": "Late entries near exhaustion; whipsaws when the trend rolls over. Long expiry class.",
    }

    def __init__(self, **params: Any) -> None:
        super().__init__(**params)
        self.fast = int(self.params.get("fast", 20))
        self.slow = int(self.params.get("slow", 50))
        self.slope_lookback = int(self.params.get("slope_lookback", 5))
        self.stop_mult = Decimal(str(self.params.get("stop_atr", 2)))
        self.target_mult = Decimal(str(self.params.get("target_atr", 4)))

    def evaluate(self, snapshot: MarketSnapshot) -> Verdict | None:
        closes = snapshot.closes
        if len(closes) < self.slow + self.slope_lookback:
            return None

        fast = ema(closes, self.fast)
        slow = ema(closes, self.slow)
        slow_before = ema(closes[:-self.slope_lookback], self.slow)
        volatility = atr(snapshot.candles)
        if None in (fast, slow, slow_before, volatility) or volatility == 0:
            return None

        price = snapshot.current_price
        if price > fast > slow and slow > slow_before:
            direction = "LONG"
        elif price < fast < slow and slow < slow_before:
            direction = "SHORT"
        else:
            return None

        separation = abs(fast - slow) / volatility
        confidence = 60 + float(min(separation, Decimal(3))) * 10
        stop, target = price_levels(price, volatility, direction, self.stop_mult, self.target_mult)
        return self.verdict(direction, price, stop, target, confidence)
