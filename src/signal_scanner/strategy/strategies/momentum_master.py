"""Momentum Master — EMA crossover regime confirmed by RSI strength."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from signal_scanner.models import Category, MarketSnapshot, Verdict
from signal_scanner.strategy.base import Evaluator, price_levels
from signal_scanner.strategy.indicators import atr, ema, rsi
from signal_scanner.strategy.registry import register


@register
class MomentumMaster(Evaluator):
    """Ride short-term momentum while the fast EMA leads the slow EMA.

    fast EMA > slow EMA and RSI in (rsi_low_long, rsi_high_long) → LONG
    fast EMA < slow EMA and RSI in (100 - rsi_high_long, 100 - rsi_low_long) → SHORT
    """

    name = "momentum_master"
    category = Category.MOMENTUM_MASTER.value
    docs = {
        "thesis": "Short-term momentum persists while a fast EMA leads a slow one and RSI shows strength without being exhausted.",
        "data": "15m closes for EMA(9)/EMA(21) and RSI(14); ATR(14) for stop and target distances.",
        "risk": "Momentum flips quickly on news. Short expiry class because the edge decays within the hour.",
    }

    def __init__(self, **params: Any) -> None:
        super().__init__(**params)
        self.fast = int(self.params.get("fast", 9))
        self.slow = int(self.params.get("slow", 21))
        self.rsi_period = int(self.params.get("rsi_period", 14))
        self.rsi_low_long = Decimal(str(self.params.get("rsi_low_long", 55)))
        self.rsi_high_long = Decimal(str(self.params.get("rsi_high_long", 75)))
        self.stop_mult = Decimal(str(self.params.get("stop_atr", 1.5)))
        self.target_mult = Decimal(str(self.params.get("target_atr", 3)))

    def evaluate(self, snapshot: MarketSnapshot) -> Verdict | None:
        closes = snapshot.closes
        fast = ema(closes, self.fast)
        slow = ema(closes, self.slow)
        strength = rsi(closes, self.rsi_period)
        volatility = atr(snapshot.candles, self.rsi_period)
        if None in (fast, slow, strength, volatility) or volatility == 0:
            return None

        if fast > slow and self.rsi_low_long < strength < self.rsi_high_long:
            direction = "LONG"
            confidence = 60 + float(strength - self.rsi_low_long) * 1.5
        elif fast < slow and 100 - self.rsi_high_long < strength < 100 - self.rsi_low_long:
            direction = "SHORT"
            confidence = 60 + float((100 - self.rsi_low_long) - strength) * 1.5
        else:
            return None

        price = snapshot.current_price
        stop, target = price_levels(price, volatility, direction, self.stop_mult, self.target_mult)
        return self.verdict(direction, price, stop, target, confidence)
