"""Tests for dependency connections."""

from __future__ import annotations

from prometheus_client import REGISTRY
import pytest

from flight_status.core.exceptions import DependencyConnectionError
from flight_status.startup.dependencies import (
    DOCUMENT_STORE,
    QUEUE_PRODUCER,
    DependencyConnector,
)
from tests.fakes.bootstrap import FakeDocumentStore, FakeQueueProducer


def counter_value(dependency: str, status: str) -> float:
    value = REGISTRY.get_sample_value(
        "dependency_connection_total", {"dependency": dependency, "status": status}
    )
    return value or 0.0


class TestDependencyConnector:
    def setup_method(self) -> None:
        self.producer = FakeQueueProducer()
        self.document_store = FakeDocumentStore()
        self.connector = DependencyConnector(self.producer, self.document_store)

    @pytest.mark.asyncio
    async def test_connect_queue_producer(self) -> None:
        before = counter_value(QUEUE_PRODUCER, "success")

        producer = await self.connector.connect_queue_producer()

        assert producer is self.producer
        assert self.connector.producer_connected is True
        assert counter_value(QUEUE_PRODUCER, "success") == before + 1

    @pytest.mark.asyncio
    async def test_connect_queue_producer_failure(self) -> None:
        cause = ConnectionError("no brokers available")
        connector = DependencyConnector(FakeQueueProducer(error=cause), self.document_store)
        before = counter_value(QUEUE_PRODUCER, "error")

        with pytest.raises(DependencyConnectionError) as exc_info:
            await connector.connect_queue_producer()

        assert exc_info.value.dependency == QUEUE_PRODUCER
        assert exc_info.value.__cause__ is cause
        assert connector.producer_connected is False
        assert counter_value(QUEUE_PRODUCER, "error") == before + 1

    @pytest.mark.asyncio
    async def test_connect_document_store_uses_socket_timeout(self) -> None:
        await self.connector.connect_document_store("mongodb://mongo:27017")

        assert self.document_store.address == "mongodb://mongo:27017"
        assert self.document_store.socket_timeout_ms == 30000
        assert self.connector.document_store_connected is True

    @pytest.mark.asyncio
    async def test_custom_socket_timeout(self) -> None:
        connector = DependencyConnector(
            self.producer, self.document_store, socket_timeout_ms=5000
        )

        await connector.connect_document_store("mongodb://mongo:27017")

        assert self.document_store.socket_timeout_ms == 5000

    @pytest.mark.asyncio
    async def test_connect_document_store_failure(self) -> None:
        connector = DependencyConnector(
            self.producer, FakeDocumentStore(error=RuntimeError())
        )

        with pytest.raises(DependencyConnectionError) as exc_info:
            await connector.connect_document_store("mongodb://mongo:27017")

        assert exc_info.value.dependency == DOCUMENT_STORE
        assert "RuntimeError" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_close_only_connected(self) -> None:
        await self.connector.connect_queue_producer()

        await self.connector.close()

        assert self.producer.closed is True
        assert self.document_store.closed is False
        assert self.connector.producer_connected is False
