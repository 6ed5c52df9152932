"""Ports layer - interfaces the bootstrap core depends on.

Concrete adapters live in :mod:`flight_status.clients`; tests substitute
in-memory fakes.
"""

from flight_status.ports.config_ports import IKeyValueStore, KVRecord
from flight_status.ports.dependency_ports import IDocumentStore, IQueueProducer
from flight_status.ports.registry_ports import IServiceRegistry, RegistryCallback
from flight_status.ports.server_ports import IHttpListener

__all__ = [
    "IDocumentStore",
    "IHttpListener",
    "IKeyValueStore",
    "IQueueProducer",
    "IServiceRegistry",
    "KVRecord",
    "RegistryCallback",
]
