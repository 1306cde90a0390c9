"""Tests for the evaluator framework, registry and the four reference evaluators."""

from __future__ import annotations

from decimal import Decimal

import pytest

from conftest import make_snapshot
from signal_scanner.config.schema import StrategyParams
from signal_scanner.models import Category, MarketSnapshot, Verdict
from signal_scanner.strategy import EVALUATOR_REGISTRY, Evaluator, build_evaluators, register
from signal_scanner.strategy.strategies.breakout_pro import BreakoutPro
from signal_scanner.strategy.strategies.breakout_trading import BreakoutTrading
from signal_scanner.strategy.strategies.momentum_master import MomentumMaster
from signal_scanner.strategy.strategies.trend_following import TrendFollowing

ALL_EVALUATORS = (MomentumMaster, BreakoutPro, TrendFollowing, BreakoutTrading)
REQUIRED_DOC_KEYS = {"thesis", "data", "risk"}


def _zigzag(n: int, up: float, down: float, start: float = 100.0) -> list[float]:
    """Alternate +up / -down steps."""
    closes = [start]
    for i in range(n - 1):
        closes.append(closes[-1] + (up if i % 2 == 0 else -down))
    return closes


def _range_then(last: float, n: int = 60) -> list[float]:
    return [99.0 if i % 2 else 101.0 for i in range(n - 1)] + [last]


# ── Framework ───────────────────────────────────────────────────


class TestEvaluatorABC:
    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            Evaluator()

    def test_verdict_helper_uses_category(self):
        class Dummy(Evaluator):
            name = "dummy"
            category = "Momentum Master"

            def evaluate(self, snapshot: MarketSnapshot) -> Verdict | None:
                return self.verdict("LONG", Decimal("10"), Decimal("9"), Decimal("12"), 140)

        v = Dummy().evaluate(make_snapshot())
        assert v.category == "Momentum Master"
        assert v.confidence == 100.0

    def test_verdict_helper_rejects_non_positive_levels(self):
        class Dummy(Evaluator):
            name = "dummy"
            category = "Momentum Master"

            def evaluate(self, snapshot):
                return self.verdict("SHORT", Decimal("10"), Decimal("12"), Decimal("-1"), 70)

        assert Dummy().evaluate(make_snapshot()) is None


class TestRegistry:
    def test_reference_evaluators_registered(self):
        for cls in ALL_EVALUATORS:
            assert EVALUATOR_REGISTRY[cls.name] is cls

    def test_one_evaluator_per_category(self):
        assert {cls.category for cls in ALL_EVALUATORS} == {c.value for c in Category}

    @pytest.mark.parametrize("cls", ALL_EVALUATORS)
    def test_docs(self, cls):
        assert set(cls.docs) == REQUIRED_DOC_KEYS
        assert all(isinstance(v, str) and v for v in cls.docs.values())

    def test_register_and_duplicate(self):
        class Temp(Evaluator):
            name = "temp_for_test"
            category = "Momentum Master"

            def evaluate(self, snapshot):
                return None

        try:
            register(Temp)
            assert EVALUATOR_REGISTRY["temp_for_test"] is Temp
            with pytest.raises(ValueError, match="Duplicate"):
                register(Temp)
        finally:
            EVALUATOR_REGISTRY.pop("temp_for_test", None)

    def test_register_requires_name_and_category(self):
        class NoName(Evaluator):
            category = "Momentum Master"

            def evaluate(self, snapshot):
                return None

        class NoCategory(Evaluator):
            name = "no_category"

            def evaluate(self, snapshot):
                return None

        with pytest.raises(ValueError, match="name"):
            register(NoName)
        with pytest.raises(ValueError, match="category"):
            register(NoCategory)

    def test_build_all_by_default(self):
        names = {e.name for e in build_evaluators({})}
        assert {cls.name for cls in ALL_EVALUATORS} <= names

    def test_build_skips_disabled_and_applies_params(self):
        evaluators = build_evaluators({
            "breakout_trading": StrategyParams(enabled=False),
            "momentum_master": StrategyParams(params={"fast": 5}),
            "not_a_real_one": StrategyParams(),
        })
        by_name = {e.name: e for e in evaluators}
        assert "breakout_trading" not in by_name
        assert by_name["momentum_master"].fast == 5


# ── Momentum Master ─────────────────────────────────────────────


class TestMomentumMaster:
    def test_uptrend_long(self):
        v = MomentumMaster().evaluate(make_snapshot(closes=_zigzag(60, up=2, down=1)))
        assert v is not None
        assert v.direction == "LONG"
        assert v.category == "Momentum Master"
        assert v.is_consistent()
        assert 60 <= v.confidence <= 100

    def test_downtrend_short(self):
        v = MomentumMaster().evaluate(make_snapshot(closes=_zigzag(60, up=-2, down=-1)))
        assert v is not None
        assert v.direction == "SHORT"
        assert v.is_consistent()

    def test_flat_no_signal(self):
        assert MomentumMaster().evaluate(make_snapshot(closes=[100.0] * 60)) is None

    def test_insufficient_history(self):
        assert MomentumMaster().evaluate(make_snapshot(closes=[100.0, 101.0])) is None


# ── Breakout Pro ────────────────────────────────────────────────


class TestBreakoutPro:
    def test_upside_breakout_with_volume(self):
        volumes = [1000.0] * 59 + [5000.0]
        v = BreakoutPro().evaluate(make_snapshot(closes=_range_then(110.0), volumes=volumes))
        assert v is not None
        assert v.direction == "LONG"
        assert v.stop_loss < v.entry < v.take_profit
        assert v.category == "Breakout Pro"

    def test_downside_breakout_with_volume(self):
        volumes = [1000.0] * 59 + [5000.0]
        v = BreakoutPro().evaluate(make_snapshot(closes=_range_then(90.0), volumes=volumes))
        assert v is not None
        assert v.direction == "SHORT"
        assert v.is_consistent()

    def test_breakout_without_volume(self):
        assert BreakoutPro().evaluate(make_snapshot(closes=_range_then(110.0))) is None

    def test_inside_bands(self):
        volumes = [1000.0] * 59 + [5000.0]
        assert BreakoutPro().evaluate(make_snapshot(closes=_range_then(100.0), volumes=volumes)) is None


# ── Trend Following ─────────────────────────────────────────────


class TestTrendFollowing:
    def test_uptrend_long(self):
        closes = [100 + i * 0.5 for i in range(60)]
        v = TrendFollowing().evaluate(make_snapshot(closes=closes))
        assert v is not None
        assert v.direction == "LONG"
        assert v.category == "Trend Following"
        assert v.is_consistent()

    def test_downtrend_short(self):
        closes = [100 - i * 0.5 for i in range(60)]
        v = TrendFollowing().evaluate(make_snapshot(closes=closes))
        assert v is not None
        assert v.direction == "SHORT"
        assert v.is_consistent()

    def test_flat_no_signal(self):
        assert TrendFollowing().evaluate(make_snapshot(closes=[100.0] * 60)) is None

    def test_needs_slow_plus_lookback_bars(self):
        closes = [100 + i * 0.5 for i in range(54)]
        assert TrendFollowing().evaluate(make_snapshot(closes=closes)) is None


# ── Breakout Trading ────────────────────────────────────────────


class TestBreakoutTrading:
    def test_break_above_range(self):
        v = BreakoutTrading().evaluate(make_snapshot(closes=_range_then(105.0)))
        assert v is not None
        assert v.direction == "LONG"
        assert v.take_profit == Decimal("109.0")
        assert v.is_consistent()

    def test_break_below_range(self):
        v = BreakoutTrading().evaluate(make_snapshot(closes=_range_then(95.0)))
        assert v is not None
        assert v.direction == "SHORT"
        assert v.take_profit == Decimal("91.0")
        assert v.is_consistent()

    def test_inside_range(self):
        assert BreakoutTrading().evaluate(make_snapshot(closes=_range_then(100.0))) is None

    def test_range_too_wide(self):
        ev = BreakoutTrading(max_range_pct=0.01)
        assert ev.evaluate(make_snapshot(closes=_range_then(105.0))) is None
