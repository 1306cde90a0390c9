"""Allow running the API as: python -m signal_scanner.api [--config path]."""

from signal_scanner.api.runner import main

main()
