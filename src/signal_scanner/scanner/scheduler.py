"""ScanScheduler — runs scan cycles on a fixed period plus a periodic expiry sweep."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable

from signal_scanner.logging import get_logger
from signal_scanner.scanner.engine import Scanner
from signal_scanner.store import SignalStore

log = get_logger(__name__)


def next_trigger(scheduled: float, now: float, period_s: float) -> tuple[float, int]:
    """Return the next trigger time after *scheduled* and how many slots were missed.

    *scheduled* is the slot that just fired. Slots that already lie in the
    past at *now* are skipped, never run back to back.
    """
    upcoming = scheduled + period_s
    if now <= upcoming:
        return upcoming, 0
    missed = int((now - upcoming) // period_s) + 1
    return upcoming + missed * period_s, missed


class ScanScheduler:
    """Drive ``Scanner.run_cycle`` every ``period_s`` after an initial delay.

    Triggers are anchored to the schedule, not to cycle completion. When a
    cycle overruns one or more periods, the missed triggers are skipped and
    the next cycle starts on the following slot. ``clock`` and ``sleep`` are
    injectable so the schedule can be driven without real waits.
    """

    def __init__(
        self,
        scanner: Scanner,
        store: SignalStore,
        *,
        period_s: float = 300,
        initial_delay_s: float = 5,
        sweep_interval_s: float = 3600,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.scanner = scanner
        self.store = store
        self.period_s = period_s
        self.initial_delay_s = initial_delay_s
        self.sweep_interval_s = sweep_interval_s
        self._clock = clock
        self._sleep = sleep
        self.cycles_run = 0
        self.triggers_skipped = 0
        self._stop = asyncio.Event()
        self._tasks: list[asyncio.Task] = []

    # ── Lifecycle ─────────────────────────────────────────────

    def start(self) -> None:
        """Spawn the scan and sweep loops on the running event loop.

        Restarting after stop() resumes the scanner as well.
        """
        if self._tasks:
            return
        self._stop.clear()
        self.scanner.resume()
        self._tasks = [
            asyncio.create_task(self.run_scans(), name="scan-loop"),
            asyncio.create_task(self.run_sweeps(), name="sweep-loop"),
        ]
        log.info(
            "scheduler_started",
            period_s=self.period_s,
            initial_delay_s=self.initial_delay_s,
            sweep_interval_s=self.sweep_interval_s,
        )

    async def stop(self) -> None:
        """Stop both loops, letting an in-flight cycle finish its current instrument."""
        self._stop.set()
        self.scanner.stop()
        tasks, self._tasks = self._tasks, []
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        log.info("scheduler_stopped", cycles=self.cycles_run, skipped=self.triggers_skipped)

    # ── Loops ─────────────────────────────────────────────────

    async def run_scans(self) -> None:
        if await self._wait(self.initial_delay_s):
            return
        scheduled = self._clock()
        while not self._stop.is_set():
            await self._run_cycle_safely()
            now = self._clock()
            scheduled, missed = next_trigger(scheduled, now, self.period_s)
            if missed:
                self.triggers_skipped += missed
                log.warning("scan_overran_period", skipped=missed)
            if await self._wait(scheduled - now):
                return

    async def run_sweeps(self) -> None:
        while not await self._wait(self.sweep_interval_s):
            try:
                self.store.sweep()
            except Exception:
                log.exception("sweep_error")

    async def _run_cycle_safely(self) -> None:
        try:
            await self.scanner.run_cycle()
        except Exception:
            log.exception("scan_error")
        self.cycles_run += 1

    async def _wait(self, seconds: float) -> bool:
        """Sleep up to *seconds*; return True if stop was requested meanwhile."""
        if self._stop.is_set():
            return True
        stopped = asyncio.ensure_future(self._stop.wait())
        nap = asyncio.ensure_future(self._sleep(max(seconds, 0)))
        try:
            await asyncio.wait({stopped, nap}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            stopped.cancel()
            nap.cancel()
        return self._stop.is_set()
