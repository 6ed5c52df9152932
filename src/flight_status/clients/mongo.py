"""MongoDB document-store adapter."""

from __future__ import annotations

import logging
from typing import Any

from pymongo import AsyncMongoClient

from flight_status.ports import IDocumentStore

logger = logging.getLogger(__name__)


class MongoDocumentStore(IDocumentStore):
    """Document store backed by pymongo's ``AsyncMongoClient``.

    The client connects lazily, so :meth:`connect` issues a ``ping`` to make
    the connection attempt observable.
    """

    def __init__(self) -> None:
        self._client: AsyncMongoClient[dict[str, Any]] | None = None

    @property
    def client(self) -> AsyncMongoClient[dict[str, Any]] | None:
        return self._client

    async def connect(self, address: str, *, socket_timeout_ms: int) -> None:
        client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(
            address, socketTimeoutMS=socket_timeout_ms
        )
        try:
            await client.admin.command("ping")
        except Exception:
            await client.close()
            raise
        self._client = client
        logger.debug("MongoDB ping succeeded")

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
