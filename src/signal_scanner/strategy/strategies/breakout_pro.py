"""Breakout Pro — Bollinger Band breakout with volume confirmation."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from signal_scanner.models import Category, MarketSnapshot, Verdict
from signal_scanner.strategy.base import Evaluator
from signal_scanner.strategy.indicators import bollinger_bands
from signal_scanner.strategy.registry import register


@register
class BreakoutPro(Evaluator):
    """Enter on Bollinger Band breakouts confirmed by a volume spike.

    Price above upper band + volume > volume_mult * SMA(volume) → LONG
    Price below lower band + volume > volume_mult * SMA(volume) → SHORT
    Stop at the middle band, target at twice the stop distance.
    """

    name = "breakout_pro"
    category = Category.BREAKOUT_PRO.value
    docs = {
        "thesis": "Price closing outside the Bollinger Bands on elevated volume marks genuine momentum rather than noise.",
        "data": "15m closes for Bollinger Bands (default 20-period, 2 std) and volume for the spike filter (default 1.5x average).",
        "risk": "False breakouts are common in ranging markets; volume confirmation reduces but does not eliminate them.",
    }

    def __init__(self, **params: Any) -> None:
        super().__init__(**params)
        self.bb_period = int(self.params.get("bb_period", 20))
        self.bb_std = float(self.params.get("bb_std", 2))
        self.volume_mult = Decimal(str(self.params.get("volume_mult", 1.5)))
        self.reward_mult = Decimal(str(self.params.get("reward_mult", 2)))

    def evaluate(self, snapshot: MarketSnapshot) -> Verdict | None:
        if len(snapshot.candles) < self.bb_period:
            return None

        bands = bollinger_bands(snapshot.closes, period=self.bb_period, num_std=self.bb_std)
        if bands is None:
            return None
        lower, middle, upper = bands

        volumes = [c.volume for c in snapshot.candles[-self.bb_period:]]
        avg_volume = sum(volumes) / len(volumes)
        if avg_volume == 0 or snapshot.candles[-1].volume <= self.volume_mult * avg_volume:
            return None

        price = snapshot.current_price
        if price > upper:
            direction = "LONG"
            band_width = upper - middle
            overshoot = (price - upper) / band_width if band_width > 0 else Decimal(0)
        elif price < lower:
            direction = "SHORT"
            band_width = middle - lower
            overshoot = (lower - price) / band_width if band_width > 0 else Decimal(0)
        else:
            return None

        risk = abs(price - middle)
        if risk == 0:
            return None
        stop = middle
        target = price + risk * self.reward_mult if direction == "LONG" else price - risk * self.reward_mult
        confidence = 65 + float(min(overshoot, Decimal(1))) * 30
        return self.verdict(direction, price, stop, target, confidence)
