"""Composition root — build each component once and hand out references."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.engine import make_url

from signal_scanner.config.schema import AppConfig
from signal_scanner.exchange.binance import BinanceFuturesClient
from signal_scanner.logging import get_logger
from signal_scanner.policy import SignalPolicy
from signal_scanner.query import SignalQuery
from signal_scanner.scanner.engine import Scanner
from signal_scanner.scanner.pacing import IntervalGate
from signal_scanner.scanner.scheduler import ScanScheduler
from signal_scanner.scanner.snapshot import BinanceSnapshotProvider, SnapshotProvider
from signal_scanner.store import SignalRepository, SignalStore, utc_now
from signal_scanner.store.signal_store import Clock
from signal_scanner.strategy import Evaluator, build_evaluators

# Ensure all evaluator modules are imported so @register fires
import signal_scanner.strategy.strategies  # noqa: F401

log = get_logger(__name__)


@dataclass
class Services:
    config: AppConfig
    store: SignalStore
    scanner: Scanner
    scheduler: ScanScheduler
    query: SignalQuery
    provider: SnapshotProvider
    repository: SignalRepository | None = None

    async def aclose(self) -> None:
        await self.scheduler.stop()
        close = getattr(self.provider, "close", None)
        if close is not None:
            await close()
        if self.repository is not None:
            self.repository.dispose()


def build_services(
    config: AppConfig,
    *,
    provider: SnapshotProvider | None = None,
    evaluators: Sequence[Evaluator] | None = None,
    repository: SignalRepository | None = None,
    clock: Clock = utc_now,
) -> Services:
    """Wire store, scanner, scheduler and query surface from *config*.

    Any collaborator can be passed in to replace the default built from
    config. Fails loudly if the database cannot be reached to create the
    schema; a schema that exists but cannot be read degrades to an empty
    store.
    """
    policy = SignalPolicy.from_config(config.store)

    if repository is None:
        repository = SignalRepository.from_url(config.store.url)
        repository.create_schema()

    store = SignalStore(repository, policy, clock=clock)
    store.load()

    if provider is None:
        provider = BinanceSnapshotProvider(
            BinanceFuturesClient(config.provider.base_url, timeout_s=config.provider.timeout_s),
            interval=config.provider.interval,
            limit=config.provider.limit,
        )

    if evaluators is None:
        evaluators = build_evaluators(config.strategies)
    if not evaluators:
        log.warning("no_evaluators_enabled")

    scanner = Scanner(
        config.instruments,
        provider,
        evaluators,
        store,
        gate=IntervalGate(config.scanner.pace_s),
        clock=clock,
        reject_inconsistent=config.scanner.reject_inconsistent_verdicts,
    )
    scheduler = ScanScheduler(
        scanner,
        store,
        period_s=config.scanner.period_s,
        initial_delay_s=config.scanner.initial_delay_s,
        sweep_interval_s=config.scanner.sweep_interval_s,
    )
    query = SignalQuery(store, scanner, clock=clock)

    log.info(
        "services_built",
        instruments=len(config.instruments),
        evaluators=[e.name for e in evaluators],
        database=repository_url(config.store.url),
    )
    return Services(
        config=config,
        store=store,
        scanner=scanner,
        scheduler=scheduler,
        query=query,
        provider=provider,
        repository=repository,
    )


def repository_url(url: str) -> str:
    """Database URL with any password masked, for logging."""
    return make_url(url).render_as_string(hide_password=True)
