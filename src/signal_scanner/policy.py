"""Signal lifetime policy — the one category -> expiry table.

Both the store's expiry sweep and the query surface's "expires in" figures
read from the same ``SignalPolicy`` instance.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from types import MappingProxyType

from signal_scanner.config.schema import DEFAULT_EXPIRY_MINUTES, StoreConfig


@dataclass(frozen=True)
class SignalPolicy:
    """Read-only lifetime rules for signals."""

    expiry: Mapping[str, timedelta] = field(
        default_factory=lambda: MappingProxyType(
            {name: timedelta(minutes=m) for name, m in DEFAULT_EXPIRY_MINUTES.items()}
        )
    )
    default_expiry: timedelta = timedelta(hours=24)
    dedup_window: timedelta = timedelta(hours=1)
    new_window: timedelta = timedelta(minutes=5)

    @classmethod
    def from_config(cls, store: StoreConfig) -> SignalPolicy:
        return cls(
            expiry=MappingProxyType(
                {name: timedelta(minutes=m) for name, m in store.expiry_minutes.items()}
            ),
            default_expiry=timedelta(minutes=store.default_expiry_minutes),
            dedup_window=timedelta(minutes=store.dedup_window_minutes),
            new_window=timedelta(minutes=store.new_window_minutes),
        )

    def is_known(self, category: str) -> bool:
        return category in self.expiry

    def expiry_for(self, category: str) -> timedelta:
        """Expiry duration for *category*; unknown categories get the default class."""
        return self.expiry.get(category, self.default_expiry)

    def expires_at(self, category: str, created_at: datetime) -> datetime:
        return created_at + self.expiry_for(category)

    def is_expired(self, category: str, created_at: datetime, now: datetime) -> bool:
        return now - created_at >= self.expiry_for(category)

    def is_new(self, created_at: datetime, now: datetime) -> bool:
        return now - created_at < self.new_window
