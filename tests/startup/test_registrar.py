"""Tests for discovery registration."""

from __future__ import annotations

import logging
import threading
from typing import Any

import pytest

from flight_status.core.exceptions import RegistrationError
from flight_status.ports import IServiceRegistry, RegistryCallback
from flight_status.startup.registrar import ServiceRegistrar, ServiceRegistration
from tests.fakes.bootstrap import FakeServiceRegistry


class ThreadedRegistry(IServiceRegistry):
    """Answers from a worker thread, like a blocking client library would."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error

    def register(self, options: dict[str, Any], callback: RegistryCallback) -> None:
        threading.Thread(target=callback, args=(self.error,)).start()


class TestServiceRegistration:
    def test_for_service(self) -> None:
        registration = ServiceRegistration.for_service("flight-status-service", 8080)

        assert registration.address == "flight-status-service"
        assert registration.health_check_url == "http://flight-status-service:8080/health"
        assert registration.check_interval_seconds == 10

    def test_to_options(self) -> None:
        registration = ServiceRegistration.for_service(
            "flights", 9000, check_interval_seconds=30
        )

        assert registration.to_options() == {
            "name": "flights",
            "address": "flights",
            "port": 9000,
            "check": {"http": "http://flights:9000/health", "interval": "30s"},
        }

    def test_is_immutable(self) -> None:
        registration = ServiceRegistration.for_service("flights", 9000)

        with pytest.raises(AttributeError):
            registration.port = 1  # type: ignore[misc]


class TestServiceRegistrar:
    def setup_method(self) -> None:
        self.registration = ServiceRegistration.for_service("flight-status-service", 8080)

    @pytest.mark.asyncio
    async def test_success(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = FakeServiceRegistry()
        registrar = ServiceRegistrar(registry)

        assert await registrar.register(self.registration) is True

        assert registry.registrations == [self.registration.to_options()]
        assert registrar.last_error is None
        assert "registered with the service registry" in caplog.text

    @pytest.mark.asyncio
    async def test_callback_error_is_logged_not_raised(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        registrar = ServiceRegistrar(
            FakeServiceRegistry(callback_error=ConnectionError("agent unreachable"))
        )

        assert await registrar.register(self.registration) is False

        assert isinstance(registrar.last_error, RegistrationError)
        assert registrar.last_error.service_name == "flight-status-service"
        records = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(records) == 1
        assert "agent unreachable" in records[0].getMessage()

    @pytest.mark.asyncio
    async def test_synchronous_raise_is_not_fatal(self) -> None:
        registrar = ServiceRegistrar(
            FakeServiceRegistry(raise_error=ValueError("bad options"))
        )

        assert await registrar.register(self.registration) is False
        assert "bad options" in str(registrar.last_error)

    @pytest.mark.asyncio
    async def test_callback_from_another_thread(self) -> None:
        registrar = ServiceRegistrar(ThreadedRegistry())

        assert await registrar.register(self.registration) is True

    @pytest.mark.asyncio
    async def test_error_callback_from_another_thread(self) -> None:
        registrar = ServiceRegistrar(ThreadedRegistry(OSError("refused")))

        assert await registrar.register(self.registration) is False
