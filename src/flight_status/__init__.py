"""Flight Status Service - bootstrap, dynamic configuration and HTTP surface.

Resolves runtime configuration from Consul KV, connects the Kafka producer and the
MongoDB document store, serves the FastAPI application and registers the instance
with the Consul agent.
"""

__version__ = "0.1.0"
__author__ = "Flight Star Team"

__all__ = [
    "__author__",
    "__version__",
]
