"""Adapters binding the ports to Consul, Kafka, MongoDB and uvicorn."""

from flight_status.clients.consul import ConsulClient
from flight_status.clients.kafka import KafkaQueueProducer
from flight_status.clients.listener import UvicornListener
from flight_status.clients.mongo import MongoDocumentStore

__all__ = [
    "ConsulClient",
    "KafkaQueueProducer",
    "MongoDocumentStore",
    "UvicornListener",
]
