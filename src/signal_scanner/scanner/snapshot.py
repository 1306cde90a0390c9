"""Snapshot providers — turn exchange market data into a MarketSnapshot per instrument."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Protocol

from signal_scanner.exchange.binance import BinanceFuturesClient
from signal_scanner.models import MarketSnapshot, OHLCV


class SnapshotProvider(Protocol):
    """Per-instrument market data source.

    ``fetch`` returns None when the instrument has no data and raises on
    transport or payload errors; the scanner treats both as a skip.
    """

    async def fetch(self, instrument: str) -> MarketSnapshot | None: ...


def _ms_to_dt(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def kline_to_ohlcv(kline: list[Any]) -> OHLCV:
    """Convert one raw Binance kline row into an OHLCV bar."""
    return OHLCV(
        open_time=_ms_to_dt(int(kline[0])),
        open=Decimal(str(kline[1])),
        high=Decimal(str(kline[2])),
        low=Decimal(str(kline[3])),
        close=Decimal(str(kline[4])),
        volume=Decimal(str(kline[5])),
        close_time=_ms_to_dt(int(kline[6])) if len(kline) > 6 else None,
    )


class BinanceSnapshotProvider:
    """Builds snapshots from Binance futures klines."""

    def __init__(
        self,
        client: BinanceFuturesClient,
        *,
        interval: str = "15m",
        limit: int = 100,
    ) -> None:
        self.client = client
        self.interval = interval
        self.limit = limit

    async def fetch(self, instrument: str) -> MarketSnapshot | None:
        klines = await self.client.get_klines(instrument, interval=self.interval, limit=self.limit)
        if not klines:
            return None
        candles = [kline_to_ohlcv(k) for k in klines]
        return MarketSnapshot(
            instrument=instrument,
            ts=datetime.now(timezone.utc),
            current_price=candles[-1].close,
            candles=candles,
        )

    async def close(self) -> None:
        await self.client.close()
