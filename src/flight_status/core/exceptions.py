"""Exception hierarchy for the service bootstrap.

Fatal errors abort startup and propagate to the entry point:

- ``ConfigUnavailable``: KV read failed or the key is missing
- ``InvalidConfigValue``: value present but not parseable as the required type
- ``ListenError``: the HTTP listener could not bind
- ``DependencyConnectionError``: queue producer or document store connect failed

``RegistrationError`` is recovered locally by the registrar: the service keeps
serving traffic without being discoverable.

Every error carries the catalog code used by
:mod:`flight_status.startup.error_catalog` to print help text.
"""

from __future__ import annotations

from typing import Any, ClassVar


class BootstrapError(Exception):
    """Bootstrap error with the stage it happened in and structured context."""

    code: ClassVar[str] = "BOOT_000"

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.details = details or {}


class ConfigUnavailable(BootstrapError):
    """The KV store could not be read or the key does not exist."""

    code = "CONFIG_001"

    def __init__(self, key: str, reason: str = "key not found") -> None:
        super().__init__(
            f"Configuration key '{key}' is unavailable: {reason}",
            stage="configuration",
            details={"key": key, "reason": reason},
        )
        self.key = key


class InvalidConfigValue(BootstrapError):
    """A configuration value cannot be coerced to the expected type."""

    code = "CONFIG_002"

    def __init__(self, key: str, value: object, expected: str) -> None:
        super().__init__(
            f"Configuration key '{key}' has invalid value {value!r} (expected {expected})",
            stage="configuration",
            details={"key": key, "value": value, "expected": expected},
        )
        self.key = key
        self.value = value
        self.expected = expected


class ListenError(BootstrapError):
    """The HTTP listener failed to bind to the resolved address and port."""

    code = "NET_001"

    def __init__(self, address: str, port: int, reason: str) -> None:
        super().__init__(
            f"Failed to listen on {address}:{port}: {reason}",
            stage="listening",
            details={"address": address, "port": port, "reason": reason},
        )
        self.address = address
        self.port = port


class DependencyConnectionError(BootstrapError):
    """A dependent connection (queue producer, document store) failed."""

    code = "DEP_001"

    def __init__(self, dependency: str, reason: str) -> None:
        super().__init__(
            f"Failed to connect {dependency}: {reason}",
            stage="dependencies",
            details={"dependency": dependency, "reason": reason},
        )
        self.dependency = dependency


class RegistrationError(BootstrapError):
    """The discovery registry rejected or failed the registration call."""

    code = "REG_001"

    def __init__(self, service_name: str, reason: str) -> None:
        super().__init__(
            f"Failed to register service '{service_name}': {reason}",
            stage="registration",
            details={"service_name": service_name, "reason": reason},
        )
        self.service_name = service_name


class InvalidStateTransition(RuntimeError):
    """Raised when the bootstrap state is asked to move backwards or out of Failed."""
