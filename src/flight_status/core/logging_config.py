"""Logging configuration for the flight status service.

Console logging through ``logging.config.dictConfig`` with a detailed format in
debug mode and a compact one otherwise.
"""

import logging
import logging.config
import sys
from typing import Any

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO", *, debug: bool = False) -> None:
    """Configure logging for the service and the uvicorn server loggers.

    Args:
        level: Log level name applied to the service and root loggers
        debug: Use the detailed formatter with file/line information
    """
    level = level.upper()
    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": (
                    "%(asctime)s | %(name)s | %(levelname)s | "
                    "%(filename)s:%(lineno)d | %(funcName)s | %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if debug else "simple",
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "flight_status": {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "aiokafka": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }

    logging.config.dictConfig(logging_config)
    logger.info("Logging configured with level %s", level)
