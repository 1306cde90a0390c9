"""Binance USDⓈ-M futures client — public REST market data."""

from __future__ import annotations

from typing import Any

import httpx


class BinanceFuturesClient:
    """Async client for Binance futures' public kline endpoint."""

    def __init__(
        self,
        base_url: str = "https://fapi.binance.com",
        timeout_s: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)
        return self._http

    async def close(self) -> None:
        if self._http and not self._http.is_closed:
            await self._http.aclose()

    async def get_klines(self, symbol: str, interval: str = "15m", limit: int = 100) -> list[list[Any]]:
        """Fetch the most recent klines for *symbol*, oldest first.

        Each kline is ``[open_time_ms, open, high, low, close, volume,
        close_time_ms, ...]`` with prices as strings.
        """
        http = await self._get_http()
        resp = await http.get(
            f"{self.base_url}/fapi/v1/klines",
            params={"symbol": symbol, "interval": interval, "limit": limit},
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, list):
            raise ValueError(f"Unexpected klines payload for {symbol}: {type(data).__name__}")
        return data
