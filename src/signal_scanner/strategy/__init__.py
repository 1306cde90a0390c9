"""Evaluator framework."""

from signal_scanner.strategy.base import Evaluator
from signal_scanner.strategy.registry import EVALUATOR_REGISTRY, build_evaluators, register

__all__ = ["EVALUATOR_REGISTRY", "Evaluator", "build_evaluators", "register"]
