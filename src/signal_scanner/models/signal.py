"""Signal models — verdicts emitted by evaluators and the signals the store keeps."""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Literal

from pydantic import AwareDatetime, BaseModel, Field

Direction = Literal["LONG", "SHORT"]

_WHITESPACE = re.compile(r"\s+")


class Category(str, Enum):
    """Known signal categories. Each maps to an expiry class in SignalPolicy."""

    MOMENTUM_MASTER = "Momentum Master"
    BREAKOUT_PRO = "Breakout Pro"
    TREND_FOLLOWING = "Trend Following"
    BREAKOUT_TRADING = "Breakout Trading"


class Verdict(BaseModel):
    """A positive answer from an evaluator: trade parameters for one instrument."""

    category: str
    direction: Direction
    entry: Decimal = Field(gt=0)
    stop_loss: Decimal = Field(gt=0)
    take_profit: Decimal = Field(gt=0)
    confidence: float = Field(ge=0.0, le=100.0)

    def is_consistent(self) -> bool:
        """True if entry sits strictly between stop and target for the direction."""
        if self.direction == "LONG":
            return self.stop_loss < self.entry < self.take_profit
        return self.take_profit < self.entry < self.stop_loss


class Signal(BaseModel):
    """A trading opportunity accepted into the store. Never mutated after acceptance."""

    id: str
    instrument: str
    category: str
    direction: Direction
    entry: Decimal = Field(gt=0)
    stop_loss: Decimal = Field(gt=0)
    take_profit: Decimal = Field(gt=0)
    confidence: float = Field(ge=0.0, le=100.0)
    created_at: AwareDatetime

    @classmethod
    def from_verdict(cls, instrument: str, verdict: Verdict, created_at: datetime) -> Signal:
        return cls(
            id=make_signal_id(instrument, verdict.category, created_at),
            instrument=instrument,
            category=verdict.category,
            direction=verdict.direction,
            entry=verdict.entry,
            stop_loss=verdict.stop_loss,
            take_profit=verdict.take_profit,
            confidence=verdict.confidence,
            created_at=created_at,
        )

    @property
    def key(self) -> tuple[str, str]:
        """Dedup key."""
        return (self.instrument, self.category)


class ListedSignal(Signal):
    """A Signal as returned by a store listing, tagged with read-time freshness."""

    is_new: bool


class SignalStats(BaseModel):
    """Aggregate counts over the live signal set."""

    total: int
    recent: int
    daily: int
    by_category: dict[str, int] = Field(default_factory=dict)


def make_signal_id(instrument: str, category: str, created_at: datetime) -> str:
    """Build ``{instrument}_{category}_{epoch-ms}`` with whitespace in the category collapsed to ``_``."""
    millis = int(created_at.timestamp() * 1000)
    slug = _WHITESPACE.sub("_", category.strip())
    return f"{instrument}_{slug}_{millis}"
