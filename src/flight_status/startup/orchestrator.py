"""Bootstrap orchestrator.

Brings the service up in order:

1. resolve the listen port and address from the KV store (``Configured``)
2. bind the HTTP listener (``Listening``), connect the queue producer, then
   register with the discovery registry; concurrently resolve the document
   store address and connect to it
3. once both branches finished, ``DependenciesConnected`` and, when the
   registry accepted the instance, ``Registered``

Configuration, bind and connection failures are fatal and propagate out of
:meth:`BootstrapOrchestrator.run`. A registration failure is only logged.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import logging
from typing import TYPE_CHECKING, Any

from flight_status.clients import (
    ConsulClient,
    KafkaQueueProducer,
    MongoDocumentStore,
    UvicornListener,
)
from flight_status.startup.config_resolver import ConfigResolver
from flight_status.startup.dependencies import DependencyConnector
from flight_status.startup.progress_reporter import ProgressPhase, StartupProgressReporter
from flight_status.startup.registrar import ServiceRegistrar, ServiceRegistration
from flight_status.startup.state import BootstrapStage, BootstrapState

if TYPE_CHECKING:
    from flight_status.ports import IHttpListener
    from flight_status.startup.config_schema import ServiceSettings

logger = logging.getLogger(__name__)

PORT_KEY = "port"
ADDRESS_KEY = "address"
DOCUMENT_STORE_ADDRESS_KEY = "mongo.address"

ShutdownHook = Callable[[], Awaitable[None]]


class BootstrapOrchestrator:
    """Runs the bootstrap sequence and owns the process-wide bootstrap state."""

    def __init__(
        self,
        *,
        settings: ServiceSettings,
        resolver: ConfigResolver,
        connector: DependencyConnector,
        registrar: ServiceRegistrar,
        listener: IHttpListener,
        reporter: StartupProgressReporter | None = None,
        shutdown_hooks: list[ShutdownHook] | None = None,
    ) -> None:
        self.settings = settings
        self.resolver = resolver
        self.connector = connector
        self.registrar = registrar
        self.listener = listener
        self.reporter = reporter or StartupProgressReporter()
        self._shutdown_hooks = shutdown_hooks or []

        self.state = BootstrapState()
        self.address: str | None = None
        self.port: int | None = None
        self.registered = False

    @property
    def is_ready(self) -> bool:
        return self.state.is_ready

    async def run(self) -> BootstrapState:
        """Run the bootstrap sequence once.

        Returns:
            The final bootstrap state

        Raises:
            BootstrapError: On any fatal failure, after the state moved to failed
        """
        self.reporter.start_startup(self.settings.service_name)
        try:
            await self._run()
        except Exception as e:
            if not self.state.is_failed:
                self.state.fail(str(e))
            self.reporter.report_startup_complete(success=False, message=str(e))
            logger.debug("Startup summary: %s", self.reporter.get_startup_summary())
            raise

        message = "Registered" if self.registered else "Serving without registration"
        self.reporter.report_startup_complete(success=True, message=message)
        logger.debug("Startup summary: %s", self.reporter.get_startup_summary())
        return self.state

    async def _run(self) -> None:
        address, port = await self._resolve_listen_config()
        self.state.advance(BootstrapStage.CONFIGURED)

        self.reporter.start_phase(
            ProgressPhase.CONNECTING_DEPENDENCIES, f"{address}:{port}"
        )
        await self._run_concurrently(
            self._listen_and_register(address, port),
            self._connect_document_store(),
        )

        self.state.advance(BootstrapStage.DEPENDENCIES_CONNECTED)
        if self.registered:
            self.state.advance(BootstrapStage.REGISTERED)

    async def _resolve_listen_config(self) -> tuple[str, int]:
        self.reporter.start_phase(
            ProgressPhase.RESOLVING_CONFIG, self.resolver.key_path("")
        )

        step = self.reporter.start_step("Listen port")
        try:
            port = await self.resolver.resolve_port(PORT_KEY)
        except Exception as e:
            self.reporter.fail_step(step, "Port unavailable", e)
            raise
        self.reporter.complete_step(step, str(port))

        step = self.reporter.start_step("Listen address")
        try:
            address = await self.resolver.resolve_str(ADDRESS_KEY)
        except Exception as e:
            self.reporter.fail_step(step, "Address unavailable", e)
            raise
        self.reporter.complete_step(step, address)

        self.address = address
        self.port = port
        return address, port

    async def _run_concurrently(self, *branches: Awaitable[Any]) -> None:
        """Await every branch; on the first failure cancel the rest and re-raise."""
        tasks = [asyncio.ensure_future(branch) for branch in branches]
        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        for task in tasks:
            error = None if task.cancelled() else task.exception()
            if error is not None:
                raise error

    async def _listen_and_register(self, address: str, port: int) -> None:
        step = self.reporter.start_step("HTTP listener", f"{address}:{port}")
        try:
            await self.listener.start(address, port)
        except Exception as e:
            self.reporter.fail_step(step, "Bind failed", e)
            raise
        self.state.advance(BootstrapStage.LISTENING)
        # Port 0 binds an ephemeral port; register the one actually serving
        port = self.listener.bound_port or port
        self.port = port
        self.reporter.complete_step(step, f"Accepting connections on port {port}")

        step = self.reporter.start_step("Queue producer")
        try:
            await self.connector.connect_queue_producer()
        except Exception as e:
            self.reporter.fail_step(step, "Connection failed", e)
            raise
        self.reporter.complete_step(step, "Connected")

        logger.info("%s listening on %s:%s", self.settings.service_name, address, port)

        step = self.reporter.start_step("Service registration")
        registration = ServiceRegistration.for_service(
            self.settings.service_name,
            port,
            check_interval_seconds=self.settings.registry_check_interval_seconds,
        )
        self.registered = await self.registrar.register(registration)
        if self.registered:
            self.reporter.complete_step(step, registration.health_check_url)
        else:
            self.reporter.warn_step(step, str(self.registrar.last_error))

    async def _connect_document_store(self) -> None:
        step = self.reporter.start_step("Document store")
        try:
            address = await self.resolver.resolve_str(DOCUMENT_STORE_ADDRESS_KEY)
            await self.connector.connect_document_store(address)
        except Exception as e:
            self.reporter.fail_step(step, "Connection failed", e)
            raise
        self.reporter.complete_step(step, "Connected")

    async def serve_forever(self) -> None:
        """Block until the listener exits."""
        wait_closed = getattr(self.listener, "wait_closed", None)
        if wait_closed is not None:
            await wait_closed()

    async def shutdown(self) -> None:
        """Stop the listener and release every connection that was opened."""
        await self.listener.stop()
        await self.connector.close()
        for hook in self._shutdown_hooks:
            await hook()


def build_orchestrator(
    settings: ServiceSettings,
    app: Any,
    *,
    reporter: StartupProgressReporter | None = None,
) -> BootstrapOrchestrator:
    """Wire the orchestrator with the Consul, Kafka, MongoDB and uvicorn adapters."""
    consul = ConsulClient(
        settings.consul_url,
        token=settings.consul_token,
        timeout=settings.consul_timeout_seconds,
    )
    connector = DependencyConnector(
        KafkaQueueProducer(settings.kafka_broker_list, client_id=settings.kafka_client_id),
        MongoDocumentStore(),
        socket_timeout_ms=settings.document_store_socket_timeout_ms,
    )
    return BootstrapOrchestrator(
        settings=settings,
        resolver=ConfigResolver(consul, settings.service_name, settings.environment),
        connector=connector,
        registrar=ServiceRegistrar(consul),
        listener=UvicornListener(app, log_level=settings.log_level.value.lower()),
        reporter=reporter,
        shutdown_hooks=[consul.aclose],
    )
