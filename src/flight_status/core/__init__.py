"""Core cross-cutting concerns: exceptions, logging and decorators."""

from flight_status.core.exceptions import (
    BootstrapError,
    ConfigUnavailable,
    DependencyConnectionError,
    InvalidConfigValue,
    InvalidStateTransition,
    ListenError,
    RegistrationError,
)

__all__ = [
    "BootstrapError",
    "ConfigUnavailable",
    "DependencyConnectionError",
    "InvalidConfigValue",
    "InvalidStateTransition",
    "ListenError",
    "RegistrationError",
]
