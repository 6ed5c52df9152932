"""Global pytest configuration for logging setup.

Keeps the service loggers propagating to the root logger so caplog captures
them even after a test ran ``setup_logging``.
"""

import logging

import pytest

LOGGERS = [
    "flight_status",
    "flight_status.core.decorators",
    "flight_status.startup",
    "flight_status.clients",
]


@pytest.fixture(autouse=True)
def setup_logging() -> None:
    """Re-enable propagation and DEBUG level for the service loggers."""
    for logger_name in LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = True

    logging.getLogger().setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def configure_caplog(caplog: pytest.LogCaptureFixture) -> None:
    """Capture DEBUG records from every service module."""
    caplog.set_level(logging.DEBUG)
    for logger_name in LOGGERS:
        caplog.set_level(logging.DEBUG, logger=logger_name)
