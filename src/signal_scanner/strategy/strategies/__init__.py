"""Import all evaluator modules to trigger @register decorators."""

from signal_scanner.strategy.strategies import breakout_pro  # noqa: F401
from signal_scanner.strategy.strategies import breakout_trading  # noqa: F401
from signal_scanner.strategy.strategies import momentum_master  # noqa: F401
from signal_scanner.strategy.strategies import trend_following  # noqa: F401
