"""Market data models — candles and the per-instrument snapshot."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class OHLCV(BaseModel):
    """One candlestick bar."""

    open_time: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
    close_time: datetime | None = None


class MarketSnapshot(BaseModel):
    """Recent bars plus current price for one instrument, passed to evaluators."""

    instrument: str
    ts: datetime
    current_price: Decimal
    candles: list[OHLCV] = []

    @property
    def closes(self) -> list[Decimal]:
        return [c.close for c in self.candles]
