"""Configuration schema — Pydantic models for config.yaml."""

from __future__ import annotations

from pydantic import BaseModel, Field

from signal_scanner.models.signal import Category

DEFAULT_INSTRUMENTS = [
    "BTCUSDT", "ETHUSDT", "BNBUSDT", "ADAUSDT", "DOTUSDT",
    "LINKUSDT", "LTCUSDT", "BCHUSDT", "XLMUSDT", "XRPUSDT",
    "EOSUSDT", "TRXUSDT", "ETCUSDT", "XTZUSDT", "ATOMUSDT",
    "NEOUSDT", "IOTAUSDT", "VETUSDT", "THETAUSDT", "ALGOUSDT",
    "QTUMUSDT", "ONTUSDT", "ZILUSDT", "BATUSDT", "OMGUSDT",
    "ZRXUSDT", "ICXUSDT", "KNCUSDT", "SNXUSDT", "COMPUSDT",
]

# Category name -> minutes until a signal of that category expires.
DEFAULT_EXPIRY_MINUTES = {
    Category.MOMENTUM_MASTER.value: 60,
    Category.BREAKOUT_PRO.value: 60,
    Category.TREND_FOLLOWING.value: 24 * 60,
    Category.BREAKOUT_TRADING.value: 24 * 60,
}


class ProviderConfig(BaseModel):
    base_url: str = "https://fapi.binance.com"
    interval: str = "15m"
    limit: int = Field(default=100, gt=0, le=1500)
    timeout_s: float = 15.0


class ScannerConfig(BaseModel):
    period_s: float = Field(default=300, gt=0)
    initial_delay_s: float = Field(default=5, ge=0)
    pace_s: float = Field(default=0.1, ge=0)
    sweep_interval_s: float = Field(default=3600, gt=0)
    reject_inconsistent_verdicts: bool = True


class StoreConfig(BaseModel):
    url: str = "sqlite:///data/signals.db"
    dedup_window_minutes: int = Field(default=60, gt=0)
    new_window_minutes: int = Field(default=5, ge=0)
    default_expiry_minutes: int = Field(default=24 * 60, gt=0)
    expiry_minutes: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_EXPIRY_MINUTES))


class StrategyParams(BaseModel):
    enabled: bool = True
    params: dict[str, float | int | str | bool] = Field(default_factory=dict)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class ApiConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000


class AppConfig(BaseModel):
    instruments: list[str] = Field(default_factory=lambda: list(DEFAULT_INSTRUMENTS))
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    strategies: dict[str, StrategyParams] = Field(default_factory=dict)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
