"""Dependency port interfaces for the message queue and the document store."""

from abc import ABC, abstractmethod


class IQueueProducer(ABC):
    """Interface for the message-queue producer client."""

    @abstractmethod
    async def connect_producer(self) -> None:
        """Connect the producer.

        Resolves once the producer is connected to the brokers and raises the
        client library error otherwise.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the producer connection."""


class IDocumentStore(ABC):
    """Interface for the document-store client."""

    @abstractmethod
    async def connect(self, address: str, *, socket_timeout_ms: int) -> None:
        """Connect to the document store.

        Args:
            address: Connection string resolved from configuration
            socket_timeout_ms: Idle socket timeout applied once connected
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the document-store connection."""
