"""Evaluator registry — decorated classes are auto-registered."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from signal_scanner.logging import get_logger

if TYPE_CHECKING:
    from signal_scanner.config.schema import StrategyParams
    from signal_scanner.strategy.base import Evaluator

log = get_logger(__name__)

EVALUATOR_REGISTRY: dict[str, type[Evaluator]] = {}


def register(cls: type[Evaluator]) -> type[Evaluator]:
    """Class decorator that adds an evaluator to the global registry."""
    if not getattr(cls, "name", None):
        raise ValueError(f"Evaluator class {cls.__name__} must define a 'name' attribute")
    if not getattr(cls, "category", None):
        raise ValueError(f"Evaluator class {cls.__name__} must define a 'category' attribute")
    if cls.name in EVALUATOR_REGISTRY:
        raise ValueError(f"Duplicate evaluator name: {cls.name!r}")
    EVALUATOR_REGISTRY[cls.name] = cls
    return cls


def build_evaluators(strategies: dict[str, StrategyParams]) -> list[Evaluator]:
    """Instantiate every registered evaluator, applying per-name config.

    Evaluators without a config entry run with their defaults; entries with
    ``enabled: false`` are skipped and names that are not registered are
    logged and ignored.
    """
    for name in strategies:
        if name not in EVALUATOR_REGISTRY:
            log.warning("evaluator_not_found", evaluator=name)

    instances: list[Evaluator] = []
    for name, cls in EVALUATOR_REGISTRY.items():
        conf = strategies.get(name)
        if conf is not None and not conf.enabled:
            log.info("evaluator_disabled", evaluator=name)
            continue
        params: dict[str, Any] = dict(conf.params) if conf is not None else {}
        instances.append(cls(**params))
        log.info("evaluator_loaded", evaluator=name, category=cls.category, params=params)
    return instances
