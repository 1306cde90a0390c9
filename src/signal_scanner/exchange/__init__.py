"""Exchange API clients."""

from signal_scanner.exchange.binance import BinanceFuturesClient

__all__ = ["BinanceFuturesClient"]
