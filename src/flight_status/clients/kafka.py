"""Kafka producer adapter."""

from __future__ import annotations

import logging

from aiokafka import AIOKafkaProducer

from flight_status.ports import IQueueProducer

logger = logging.getLogger(__name__)


class KafkaQueueProducer(IQueueProducer):
    """Queue producer backed by ``AIOKafkaProducer``.

    The producer object is created lazily in :meth:`connect_producer` so it is
    bound to the running event loop.
    """

    def __init__(self, brokers: list[str], *, client_id: str) -> None:
        self.brokers = brokers
        self.client_id = client_id
        self._producer: AIOKafkaProducer | None = None

    @property
    def producer(self) -> AIOKafkaProducer | None:
        return self._producer

    async def connect_producer(self) -> None:
        producer = AIOKafkaProducer(
            bootstrap_servers=",".join(self.brokers),
            client_id=self.client_id,
        )
        try:
            await producer.start()
        except Exception:
            await producer.stop()
            raise
        self._producer = producer
        logger.debug("Kafka producer started against %s", self.brokers)

    async def close(self) -> None:
        if self._producer is not None:
            await self._producer.stop()
            self._producer = None
