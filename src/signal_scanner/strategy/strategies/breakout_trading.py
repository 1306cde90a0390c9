"""Breakout Trading — Donchian channel break of the prior range."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from signal_scanner.models import Category, MarketSnapshot, Verdict
from signal_scanner.strategy.base import Evaluator
from signal_scanner.strategy.indicators import atr, channel
from signal_scanner.strategy.registry import register


@register
class BreakoutTrading(Evaluator):
    """Trade closes beyond the high/low of the previous ``lookback`` bars.

    Stop goes back inside the range by ``stop_atr`` ATRs; target projects
    the range height from the breakout price.
    """

    name = "breakout_trading"
    category = Category.BREAKOUT_TRADING.value
    docs = {
        "thesis": "A close beyond a multi-hour consolidation range often starts a move roughly the size of the range.",
        "data": "15m highs/lows of the previous `lookback` bars (default 24 = 6 hours); ATR(14) for the stop buffer.",
        "risk": "Range breaks fail often in low volume; wide ranges make targets unrealistic.",
    }

    def __init__(self, **params: Any) -> None:
        super().__init__(**params)
        self.lookback = int(self.params.get("lookback", 24))
        self.stop_mult = Decimal(str(self.params.get("stop_atr", 1)))
        self.max_range_pct = Decimal(str(self.params.get("max_range_pct", 0.1)))

    def evaluate(self, snapshot: MarketSnapshot) -> Verdict | None:
        bounds = channel(snapshot.candles, self.lookback)
        volatility = atr(snapshot.candles)
        if bounds is None or volatility is None:
            return None

        low, high = bounds
        height = high - low
        price = snapshot.current_price
        if height <= 0 or height / price > self.max_range_pct:
            return None

        if price > high:
            direction = "LONG"
            stop = high - volatility * self.stop_mult
            target = price + height
            excess = (price - high) / height
        elif price < low:
            direction = "SHORT"
            stop = low + volatility * self.stop_mult
            target = price - height
            excess = (low - price) / height
        else:
            return None

        confidence = 60 + float(min(excess, Decimal(1))) * 35
        return self.verdict(direction, price, stop, target, confidence)
