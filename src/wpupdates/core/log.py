"""structlog setup for the probe.

Stdout belongs to the monitoring output, so log events go to stderr and are
filtered by the configured level.
"""

import logging
import sys

import structlog


def configure_logging(level: str = "warning") -> None:
    """Route structlog output to stderr at the given level.

    Args:
        level: Level name (debug, info, warning, error, critical); unknown
            names fall back to warning
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
