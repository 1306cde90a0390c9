"""structlog over stdlib logging, shared by the scanner and the API server."""

from __future__ import annotations

import logging
import sys

import structlog

# Third-party loggers that are too chatty at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_RENDERERS = {
    "json": structlog.processors.JSONRenderer,
    "console": structlog.dev.ConsoleRenderer,
}


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors run on every event before it reaches the stdlib handler."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def setup_logging(level: str = "INFO", log_format: str = "json") -> None:
    """Route structlog and stdlib records through one stderr handler.

    ``log_format`` is "json" (default, one object per line) or "console".
    Unknown formats fall back to JSON; unknown levels to INFO. Safe to call
    more than once: the root handler is replaced, not stacked.
    """
    renderer = _RENDERERS.get(log_format, structlog.processors.JSONRenderer)()

    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # Module-level loggers are created at import, before configure() runs.
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper() if level.upper() in _LEVELS else "INFO")

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None, **initial_context) -> structlog.stdlib.BoundLogger:
    """Logger for *name*, pre-bound with any keyword context."""
    logger = structlog.get_logger(name)
    return logger.bind(**initial_context) if initial_context else logger
