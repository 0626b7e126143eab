# SPDX-License-Identifier: MIT

import logging
import logging.config
import sys

import structlog


def configure_logging(log_level: str = "WARNING") -> structlog.stdlib.BoundLogger:
    """
    Configure structured logging for the application.

    Log records go to stderr so they never interleave with chart output on stdout.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        The application logger
    """
    log_level = log_level.upper()

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
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    log_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": "%(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "plain",
                "stream": sys.stderr,
            }
        },
        "loggers": {
            "lobchart": {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False,
            }
        },
    }
    logging.config.dictConfig(log_config)

    logger = get_logger("lobchart")
    logger.debug("Logging configured", level=log_level)
    return logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
