"""Discovery registry registration.

Registration is attempted once, after the HTTP listener is bound, and a failure
is non-fatal: the service keeps serving traffic without being discoverable.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Any

from flight_status.core.exceptions import RegistrationError
from flight_status.ports import IServiceRegistry

logger = logging.getLogger(__name__)

HEALTH_CHECK_PATH = "/health"
DEFAULT_CHECK_INTERVAL_SECONDS = 10


@dataclass(frozen=True)
class ServiceRegistration:
    """Registration payload, built once and never mutated after sending."""

    name: str
    address: str
    port: int
    health_check_url: str
    check_interval_seconds: int = DEFAULT_CHECK_INTERVAL_SECONDS

    @classmethod
    def for_service(
        cls,
        service_name: str,
        port: int,
        *,
        check_interval_seconds: int = DEFAULT_CHECK_INTERVAL_SECONDS,
    ) -> ServiceRegistration:
        """Registration addressed by service name, with the health check on ``port``."""
        return cls(
            name=service_name,
            address=service_name,
            port=port,
            health_check_url=f"http://{service_name}:{port}{HEALTH_CHECK_PATH}",
            check_interval_seconds=check_interval_seconds,
        )

    def to_options(self) -> dict[str, Any]:
        """Registry options in the agent's registration format."""
        return {
            "name": self.name,
            "address": self.address,
            "port": self.port,
            "check": {
                "http": self.health_check_url,
                "interval": f"{self.check_interval_seconds}s",
            },
        }


class ServiceRegistrar:
    """Registers the running instance with the discovery registry."""

    def __init__(self, registry: IServiceRegistry) -> None:
        self._registry = registry
        self.last_error: RegistrationError | None = None

    async def _register_async(self, registration: ServiceRegistration) -> None:
        """Await the callback-style registry call."""
        loop = asyncio.get_running_loop()
        future: asyncio.Future[None] = loop.create_future()

        def _on_done(err: BaseException | None) -> None:
            if future.done():
                return
            if err is not None:
                future.set_exception(
                    RegistrationError(registration.name, str(err) or type(err).__name__)
                )
            else:
                future.set_result(None)

        def _callback(err: BaseException | None) -> None:
            # The registry may call back from another thread
            loop.call_soon_threadsafe(_on_done, err)

        try:
            self._registry.register(registration.to_options(), _callback)
        except Exception as e:
            raise RegistrationError(registration.name, str(e) or type(e).__name__) from e

        await future

    async def register(self, registration: ServiceRegistration) -> bool:
        """Register the instance, logging instead of raising on failure.

        Returns:
            True when the registry accepted the registration
        """
        try:
            await self._register_async(registration)
        except RegistrationError as e:
            self.last_error = e
            logger.error("Failed to register with the service registry: %s", e)  # noqa: TRY400
            return False

        logger.info("Service %s registered with the service registry", registration.name)
        return True
