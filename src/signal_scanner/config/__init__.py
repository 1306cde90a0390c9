"""Configuration system."""

from signal_scanner.config.loader import load_config
from signal_scanner.config.schema import AppConfig

__all__ = ["AppConfig", "load_config"]
