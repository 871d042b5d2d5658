from __future__ import annotations

import logging
import sys
from typing import cast

import structlog

LOGGER_NAME = "tracelite"


def configure_logging(
    level: str = "INFO",
    json: bool = True,
    logger_name: str = LOGGER_NAME,
) -> logging.Logger:
    """Route tracelite's structlog events to stdout.

    tracelite never configures logging itself.  Applications that want its
    events (bucket creation, dropped marks, collections, formatting
    failures) call this once at startup.  Only the *logger_name* logger is
    touched: it gets a single stdout handler and stops propagating, so the
    host application's root handlers are left alone.

    Args:
        level: Standard logging level name, e.g. ``"DEBUG"`` or ``"INFO"``.
            Unknown names fall back to ``INFO``.
        json: Render entries as JSON when true, coloured console text otherwise.
        logger_name: stdlib logger that receives the events.

    Returns:
        The configured stdlib logger.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=pre_chain,
        )
    )

    target = logging.getLogger(logger_name)
    target.handlers[:] = [handler]
    target.setLevel(log_level)
    target.propagate = False
    return target


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to *name* (usually ``__name__``)."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
