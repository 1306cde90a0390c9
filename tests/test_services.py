"""Tests for the composition root and the headless runner."""

from __future__ import annotations

import asyncio

from conftest import make_signal
from signal_scanner.config import AppConfig
from signal_scanner.db import ensure_psycopg_driver
from signal_scanner.scanner import runner
from signal_scanner.services import build_services, repository_url
from signal_scanner.strategy import EVALUATOR_REGISTRY


class QuietProvider:
    def __init__(self) -> None:
        self.closed = False

    async def fetch(self, instrument):
        return None

    async def close(self) -> None:
        self.closed = True


def _config(url: str, **extra) -> AppConfig:
    return AppConfig.model_validate({"store": {"url": url}, "instruments": ["BTCUSDT"], **extra})


class TestBuildServices:
    def test_components_share_one_store(self, tmp_path, clock):
        services = build_services(
            _config(f"sqlite:///{tmp_path}/signals.db"), provider=QuietProvider(), clock=clock
        )
        try:
            assert services.scanner.store is services.store
            assert services.query.store is services.store
            assert services.query.policy is services.store.policy
        finally:
            asyncio.run(services.aclose())

    def test_default_evaluators_follow_config(self, tmp_path, clock):
        config = _config(
            f"sqlite:///{tmp_path}/signals.db",
            strategies={"breakout_trading": {"enabled": False}},
        )
        services = build_services(config, provider=QuietProvider(), clock=clock)
        try:
            names = {e.name for e in services.scanner.evaluators}
            assert "breakout_trading" not in names
            assert names == set(EVALUATOR_REGISTRY) - {"breakout_trading"}
        finally:
            asyncio.run(services.aclose())

    def test_signals_survive_rebuild(self, tmp_path, clock):
        url = f"sqlite:///{tmp_path}/nested/signals.db"
        first = build_services(_config(url), provider=QuietProvider(), evaluators=[], clock=clock)
        first.store.add(make_signal(created_at=clock()))
        asyncio.run(first.aclose())

        clock.advance(minutes=10)
        second = build_services(_config(url), provider=QuietProvider(), evaluators=[], clock=clock)
        try:
            assert len(second.store) == 1
            assert not second.store.add(make_signal(created_at=clock()))
        finally:
            asyncio.run(second.aclose())

    def test_aclose_closes_provider(self, tmp_path, clock):
        provider = QuietProvider()
        services = build_services(
            _config(f"sqlite:///{tmp_path}/signals.db"), provider=provider, evaluators=[], clock=clock
        )
        asyncio.run(services.aclose())
        assert provider.closed


class TestRepositoryUrl:
    def test_password_masked(self):
        masked = repository_url("postgresql://scanner:secret@db:5432/signals")
        assert "secret" not in masked
        assert "scanner" in masked

    def test_sqlite_unchanged(self):
        assert repository_url("sqlite:///data/signals.db") == "sqlite:///data/signals.db"


class TestRunner:
    def test_single_cycle(self, tmp_path, monkeypatch):
        built = {}
        real_build = runner.build_services

        def fake_build(config):
            services = real_build(config, provider=QuietProvider(), evaluators=[])
            built["services"] = services
            return services

        monkeypatch.setattr(runner, "build_services", fake_build)
        asyncio.run(runner.run(_config(f"sqlite:///{tmp_path}/signals.db"), once=True))
        services = built["services"]
        assert services.scanner.last_scan_time is not None
        assert services.provider.closed


class TestDriverRewrite:
    def test_postgres_uses_psycopg3(self):
        assert ensure_psycopg_driver("postgresql://u:p@db/signals") == "postgresql+psycopg://u:p@db/signals"

    def test_explicit_driver_and_sqlite_untouched(self):
        assert ensure_psycopg_driver("postgresql+asyncpg://db/s") == "postgresql+asyncpg://db/s"
        assert ensure_psycopg_driver("sqlite:///data/signals.db") == "sqlite:///data/signals.db"
