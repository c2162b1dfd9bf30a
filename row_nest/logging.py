"""structlog configuration for applications embedding row-nest.

The library only emits events through ``structlog.get_logger``; call
``configure_logging()`` once at process startup to choose how they render::

    from row_nest.logging import configure_logging

    configure_logging(level="DEBUG", fmt="json")
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_FORMATS = ("console", "json")


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog with a console or JSON renderer.

    Args:
        level: Minimum level emitted ("DEBUG", "INFO", ...).
        fmt:   "console" for human-readable output, "json" for one object per line.
    """
    level = level.upper()
    if level not in _LEVELS:
        msg = f"level must be one of {', '.join(_LEVELS)}"
        raise ValueError(msg)
    if fmt not in _FORMATS:
        msg = f"fmt must be one of {', '.join(_FORMATS)}"
        raise ValueError(msg)

    numeric_level = getattr(logging, level)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    if fmt == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
