"""Allow running the scanner as: python -m signal_scanner.scanner [--config path] [--once]."""

from signal_scanner.scanner.runner import cli

cli()
