"""Scanner — walks the instrument universe, fans snapshots out to evaluators, feeds the store."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from datetime import datetime

from signal_scanner.logging import get_logger
from signal_scanner.models import MarketSnapshot, Signal, Verdict
from signal_scanner.scanner.pacing import IntervalGate
from signal_scanner.scanner.snapshot import SnapshotProvider
from signal_scanner.store import SignalStore, utc_now
from signal_scanner.store.signal_store import Clock
from signal_scanner.strategy import Evaluator

log = get_logger(__name__)


class Scanner:
    """One full-universe scan per ``run_cycle()`` call.

    Instruments are visited one at a time behind ``gate``; the provider is
    never hit concurrently. A cycle that is entered while another is still
    running is skipped, not queued.
    """

    def __init__(
        self,
        instruments: Sequence[str],
        provider: SnapshotProvider,
        evaluators: Sequence[Evaluator],
        store: SignalStore,
        gate: IntervalGate | None = None,
        clock: Clock = utc_now,
        reject_inconsistent: bool = True,
    ) -> None:
        self.instruments = list(instruments)
        self.provider = provider
        self.evaluators = list(evaluators)
        self.store = store
        self.gate = gate or IntervalGate(0.1)
        self._clock = clock
        self.reject_inconsistent = reject_inconsistent

        self.last_scan_time: datetime | None = None
        self.last_accepted: int | None = None
        self._running = False
        self._stop_requested = False

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask the current cycle to finish its instrument and stop.

        Later cycles return 0 until resume() is called.
        """
        self._stop_requested = True

    def resume(self) -> None:
        """Clear a previous stop() so the next cycle scans again."""
        self._stop_requested = False

    async def run_cycle(self) -> int:
        """Scan every instrument once and return how many signals the store accepted."""
        if self._running:
            log.warning("scan_skipped_overlap", started_at=self._iso(self.last_scan_time))
            return 0
        if self._stop_requested:
            return 0

        self._running = True
        self.last_scan_time = self._clock()
        log.info("scan_started", instruments=len(self.instruments), evaluators=len(self.evaluators))

        accepted = 0
        scanned = 0
        try:
            for instrument in self.instruments:
                if self._stop_requested:
                    log.info("scan_stopping", remaining=len(self.instruments) - scanned)
                    break
                await self.gate.acquire()
                try:
                    accepted += await self.scan_instrument(instrument)
                except Exception:
                    log.exception("scan_instrument_failed", instrument=instrument)
                scanned += 1
        finally:
            self._running = False

        self.last_accepted = accepted
        log.info("scan_completed", accepted=accepted, scanned=scanned, instruments=len(self.instruments))
        return accepted

    async def scan_instrument(self, instrument: str) -> int:
        """Fetch, evaluate and offer candidates for one instrument."""
        try:
            snapshot = await self.provider.fetch(instrument)
        except Exception as exc:
            log.warning("snapshot_failed", instrument=instrument, error=repr(exc))
            return 0
        if snapshot is None:
            log.info("snapshot_empty", instrument=instrument)
            return 0

        accepted = 0
        for evaluator, verdict in await self.evaluate(snapshot):
            if self.reject_inconsistent and not verdict.is_consistent():
                log.warning(
                    "verdict_inconsistent",
                    instrument=instrument,
                    evaluator=evaluator.name,
                    direction=verdict.direction,
                    entry=str(verdict.entry),
                    stop_loss=str(verdict.stop_loss),
                    take_profit=str(verdict.take_profit),
                )
                continue
            candidate = Signal.from_verdict(instrument, verdict, self._clock())
            if self.store.add(candidate):
                accepted += 1
        return accepted

    async def evaluate(self, snapshot: MarketSnapshot) -> list[tuple[Evaluator, Verdict]]:
        """Run every evaluator on *snapshot* concurrently; failures are logged and dropped."""
        results = await asyncio.gather(
            *(asyncio.to_thread(ev.evaluate, snapshot) for ev in self.evaluators),
            return_exceptions=True,
        )
        verdicts: list[tuple[Evaluator, Verdict]] = []
        for evaluator, result in zip(self.evaluators, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                log.error(
                    "evaluator_error",
                    evaluator=evaluator.name,
                    instrument=snapshot.instrument,
                    exc_info=result,
                )
                continue
            if result is not None:
                verdicts.append((evaluator, result))
        return verdicts

    @staticmethod
    def _iso(ts: datetime | None) -> str | None:
        return ts.isoformat() if ts else None
