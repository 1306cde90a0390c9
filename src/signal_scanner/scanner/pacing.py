"""Fixed-interval gate that spaces out calls to the market data provider."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable


class IntervalGate:
    """Grant at most one pass every ``interval_s`` seconds.

    The first ``acquire()`` returns immediately; each later one waits until
    ``interval_s`` has elapsed since the previous grant. ``clock`` and
    ``sleep`` are injectable so pacing can be checked without real waits.
    Not safe to share between concurrent acquirers; the scanner holds one
    gate per sequential walk.
    """

    def __init__(
        self,
        interval_s: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval_s < 0:
            raise ValueError("interval_s must be >= 0")
        self.interval_s = interval_s
        self._clock = clock
        self._sleep = sleep
        self._last_grant: float | None = None

    async def acquire(self) -> float:
        """Wait for the next slot and return how long we waited."""
        waited = 0.0
        if self._last_grant is not None:
            remaining = self._last_grant + self.interval_s - self._clock()
            if remaining > 0:
                await self._sleep(remaining)
                waited = remaining
        self._last_grant = self._clock()
        return waited

    def reset(self) -> None:
        self._last_grant = None
