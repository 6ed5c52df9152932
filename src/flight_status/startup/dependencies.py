"""Connections to the services the flight status service depends on.

Both connections are awaited independently and, once established, held here as
shared resources for the rest of the process. There is no retry: a failure is
raised to the orchestrator as :class:`DependencyConnectionError`.
"""

from __future__ import annotations

import logging

from prometheus_client import Counter

from flight_status.core.decorators import log_execution
from flight_status.core.exceptions import DependencyConnectionError
from flight_status.ports import IDocumentStore, IQueueProducer

logger = logging.getLogger(__name__)

DOCUMENT_STORE_SOCKET_TIMEOUT_MS = 30000

QUEUE_PRODUCER = "queue_producer"
DOCUMENT_STORE = "document_store"

dependency_connection_counter = Counter(
    "dependency_connection_total",
    "Total number of dependency connection attempts",
    ["dependency", "status"],
)


class DependencyConnector:
    """Establishes the queue producer and document-store connections."""

    def __init__(
        self,
        queue_producer: IQueueProducer,
        document_store: IDocumentStore,
        *,
        socket_timeout_ms: int = DOCUMENT_STORE_SOCKET_TIMEOUT_MS,
    ) -> None:
        self._queue_producer = queue_producer
        self._document_store = document_store
        self.socket_timeout_ms = socket_timeout_ms
        self.producer_connected = False
        self.document_store_connected = False

    @property
    def producer(self) -> IQueueProducer:
        return self._queue_producer

    @property
    def document_store(self) -> IDocumentStore:
        return self._document_store

    @log_execution(level=logging.DEBUG)
    async def connect_queue_producer(self) -> IQueueProducer:
        """Connect the message-queue producer.

        Raises:
            DependencyConnectionError: If the producer cannot connect
        """
        try:
            await self._queue_producer.connect_producer()
        except Exception as e:
            dependency_connection_counter.labels(
                dependency=QUEUE_PRODUCER, status="error"
            ).inc()
            raise DependencyConnectionError(QUEUE_PRODUCER, str(e) or type(e).__name__) from e

        self.producer_connected = True
        dependency_connection_counter.labels(
            dependency=QUEUE_PRODUCER, status="success"
        ).inc()
        logger.info("Queue producer connected")
        return self._queue_producer

    @log_execution(level=logging.DEBUG)
    async def connect_document_store(self, address: str) -> IDocumentStore:
        """Connect to the document store at ``address``.

        Raises:
            DependencyConnectionError: If the connection cannot be established
        """
        try:
            await self._document_store.connect(
                address, socket_timeout_ms=self.socket_timeout_ms
            )
        except Exception as e:
            dependency_connection_counter.labels(
                dependency=DOCUMENT_STORE, status="error"
            ).inc()
            raise DependencyConnectionError(DOCUMENT_STORE, str(e) or type(e).__name__) from e

        self.document_store_connected = True
        dependency_connection_counter.labels(
            dependency=DOCUMENT_STORE, status="success"
        ).inc()
        logger.info("Document store connected")
        return self._document_store

    async def close(self) -> None:
        """Close whatever connections were established."""
        if self.producer_connected:
            await self._queue_producer.close()
            self.producer_connected = False
        if self.document_store_connected:
            await self._document_store.close()
            self.document_store_connected = False
