"""structlog loggers for the library and logging setup for the CLI.

Library modules log through `get_logger(__name__)`. Those loggers wrap a
stdlib logger under "redis_derive", which only has a NullHandler, so
nothing is printed unless the host application configures logging:

    logging.getLogger("redis_derive").setLevel(logging.DEBUG)

The CLI calls setup_logging() so that debug events go to stderr and never
mix with generated source printed on stdout.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any

import structlog
from structlog.dev import ConsoleRenderer

ROOT_LOGGER = "redis_derive"


def get_logger(name: str = ROOT_LOGGER) -> Any:
    """Return a structlog logger backed by the stdlib logger `name`."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def setup_logging(*, verbose: bool = False) -> None:
    timestamper = structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S")
    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'plain': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processors': [
                    timestamper,
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    ConsoleRenderer(colors=False),
                ],
                'foreign_pre_chain': [
                    structlog.stdlib.add_log_level,
                    structlog.stdlib.add_logger_name,
                    timestamper,
                ],
            },
        },
        'handlers': {
            'stderr': {
                'level': 'DEBUG',
                'class': 'logging.StreamHandler',
                'formatter': 'plain',
                'stream': 'ext://sys.stderr',
            },
        },
        'loggers': {
            ROOT_LOGGER: {
                'handlers': ['stderr'],
                'level': 'DEBUG' if verbose else 'WARNING',
            },
        },
    })


__all__ = ["ROOT_LOGGER", "get_logger", "setup_logging"]
