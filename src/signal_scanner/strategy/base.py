"""Evaluator abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

from signal_scanner.models import Direction, MarketSnapshot, Verdict


def price_levels(
    price: Decimal,
    distance: Decimal,
    direction: Direction,
    stop_mult: Decimal,
    target_mult: Decimal,
) -> tuple[Decimal, Decimal]:
    """Return ``(stop_loss, take_profit)`` placed *distance* multiples away from *price*."""
    if direction == "LONG":
        return price - distance * stop_mult, price + distance * target_mult
    return price + distance * stop_mult, price - distance * target_mult


def clamp_confidence(value: float) -> float:
    return round(max(0.0, min(100.0, value)), 1)


class Evaluator(ABC):
    """Base class for all strategy evaluators.

    Subclasses set ``name`` and ``category`` and implement evaluate().
    Instantiate with keyword params from config to override defaults.
    Evaluators must be stateless with respect to the snapshots they see:
    the scanner calls them concurrently from worker threads.
    """

    name: str
    category: str
    docs: dict[str, str] = {}

    def __init__(self, **params: Any) -> None:
        self.params = params

    @abstractmethod
    def evaluate(self, snapshot: MarketSnapshot) -> Verdict | None:
        """Evaluate a market snapshot and optionally return a verdict.

        Returns a Verdict when an opportunity exists, or None to pass.
        """
        ...

    def verdict(
        self,
        direction: Direction,
        entry: Decimal,
        stop_loss: Decimal,
        take_profit: Decimal,
        confidence: float,
    ) -> Verdict | None:
        """Build a Verdict in this evaluator's category, or None if a level is not a usable price."""
        if min(entry, stop_loss, take_profit) <= 0:
            return None
        return Verdict(
            category=self.category,
            direction=direction,
            entry=entry,
            stop_loss=stop_loss,
            take_profit=take_profit,
            confidence=clamp_confidence(confidence),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, category={self.category!r})"
