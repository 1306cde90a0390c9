"""SignalStore — in-memory signal set with dedup-on-insert, TTL sweep and a durable mirror."""

from __future__ import annotations

import threading
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError

from signal_scanner.logging import get_logger
from signal_scanner.models import ListedSignal, Signal, SignalStats
from signal_scanner.policy import SignalPolicy
from signal_scanner.store.persistence import SignalRepository

log = get_logger(__name__)

Clock = Callable[[], datetime]

# Errors the repository can raise that we degrade on instead of propagating.
PERSISTENCE_ERRORS = (SQLAlchemyError, OSError)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a mutating store call.

    Truthy when the mutation was applied in memory. ``persisted`` is False
    when the durable write did not confirm; the in-memory change still stands.
    """

    applied: bool
    persisted: bool = True

    def __bool__(self) -> bool:
        return self.applied


class SignalStore:
    """Authoritative collection of live signals.

    Every public method holds a single re-entrant lock for the whole
    read-modify-persist sequence and never awaits, so it can be called from
    the event loop and from worker threads alike.
    """

    def __init__(
        self,
        repository: SignalRepository | None,
        policy: SignalPolicy | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._repository = repository
        self.policy = policy or SignalPolicy()
        self._clock = clock
        self._lock = threading.RLock()
        self._signals: list[Signal] = []

    # ── Lifecycle ─────────────────────────────────────────────

    def load(self) -> int:
        """Rehydrate from the repository. Read failures leave the store empty."""
        if self._repository is None:
            return 0
        try:
            loaded = self._repository.load_all()
        except PERSISTENCE_ERRORS:
            log.exception("load_failed")
            loaded = []
        except ValueError:
            # Corrupt rows fail pydantic validation.
            log.exception("load_corrupt")
            loaded = []
        with self._lock:
            self._signals = list(loaded)
        log.info("store_loaded", signals=len(loaded))
        return len(loaded)

    # ── Mutations ─────────────────────────────────────────────

    def add(self, candidate: Signal) -> WriteResult:
        """Accept *candidate* unless a live signal for the same pair sits inside the dedup window."""
        with self._lock:
            bound = self._clock() - self.policy.dedup_window
            for existing in self._signals:
                if existing.key == candidate.key and existing.created_at > bound:
                    log.info(
                        "signal_duplicate",
                        instrument=candidate.instrument,
                        category=candidate.category,
                        existing_id=existing.id,
                    )
                    return WriteResult(applied=False, persisted=False)

            if not self.policy.is_known(candidate.category):
                log.warning(
                    "signal_unknown_category",
                    category=candidate.category,
                    expiry_s=self.policy.default_expiry.total_seconds(),
                )

            self._signals.append(candidate)
            persisted = self._persist("insert", candidate)

        log.info(
            "signal_accepted",
            signal_id=candidate.id,
            instrument=candidate.instrument,
            category=candidate.category,
            direction=candidate.direction,
            persisted=persisted,
        )
        return WriteResult(applied=True, persisted=persisted)

    def remove(self, signal_id: str) -> WriteResult:
        """Remove a signal by id. Falsy when no such signal exists."""
        with self._lock:
            before = len(self._signals)
            self._signals = [s for s in self._signals if s.id != signal_id]
            if len(self._signals) == before:
                return WriteResult(applied=False, persisted=False)
            persisted = self._delete_rows([signal_id])
        log.info("signal_removed", signal_id=signal_id, persisted=persisted)
        return WriteResult(applied=True, persisted=persisted)

    def sweep(self) -> int:
        """Drop every expired signal in one pass and return how many went."""
        with self._lock:
            return self._sweep_locked(self._clock())

    # ── Reads ─────────────────────────────────────────────────

    def list(self, now: datetime | None = None) -> list[ListedSignal]:
        """Live signals as of *now* (default: the store clock), newest first, tagged with ``is_new``."""
        with self._lock:
            now = self._clock() if now is None else now
            self._sweep_locked(now)
            ordered = sorted(self._signals, key=lambda s: s.created_at, reverse=True)
            return [
                ListedSignal(**s.model_dump(), is_new=self.policy.is_new(s.created_at, now))
                for s in ordered
            ]

    def get(self, signal_id: str) -> Signal | None:
        with self._lock:
            self._sweep_locked(self._clock())
            return next((s for s in self._signals if s.id == signal_id), None)

    def stats(self) -> SignalStats:
        with self._lock:
            now = self._clock()
            self._sweep_locked(now)
            hour_ago = now - timedelta(hours=1)
            day_ago = now - timedelta(hours=24)
            return SignalStats(
                total=len(self._signals),
                recent=sum(1 for s in self._signals if s.created_at > hour_ago),
                daily=sum(1 for s in self._signals if s.created_at > day_ago),
                by_category=dict(Counter(s.category for s in self._signals)),
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._signals)

    # ── Internals (call with the lock held) ───────────────────

    def _sweep_locked(self, now: datetime) -> int:
        expired = [s for s in self._signals if self.policy.is_expired(s.category, s.created_at, now)]
        if not expired:
            return 0
        expired_ids = {s.id for s in expired}
        self._signals = [s for s in self._signals if s.id not in expired_ids]
        persisted = self._delete_rows(expired_ids)
        log.info("signals_expired", count=len(expired), persisted=persisted)
        return len(expired)

    def _delete_rows(self, ids: Iterable[str]) -> bool:
        return self._persist("delete", list(ids))

    def _persist(self, operation: str, payload) -> bool:
        if self._repository is None:
            return True
        try:
            getattr(self._repository, operation)(payload)
        except PERSISTENCE_ERRORS:
            log.exception("persist_failed", operation=operation)
            return False
        return True
