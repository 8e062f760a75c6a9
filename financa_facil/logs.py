"""
Structured Logging

DESIGN DECISION: Every failure the user never sees still leaves a trace.
Persistence is best-effort and the AI call is optional, so both swallow
their errors at the boundary - the log is the only place those errors go.

Log events are snake_case names with keyword context:
    logger.warning("ledger_load_failed", key=key, error=str(e))
"""

import logging
import sys

import structlog

_configured = False


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure structlog on top of the stdlib logging factory.

    Only the first call has an effect; call ``reset_logging`` to
    configure again.
    """
    global _configured
    if _configured:
        return

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def reset_logging() -> None:
    """Forget the current configuration so the next call re-applies it."""
    global _configured
    structlog.reset_defaults()
    _configured = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a named structured logger.

    The logger is a lazy proxy, so modules can create it at import time
    and still pick up the configuration applied later at startup.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    return structlog.get_logger(name)
