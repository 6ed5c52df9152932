"""Configuration port interfaces.

The bootstrap core reads runtime configuration through this abstraction, not
through a concrete KV client.
"""

from abc import ABC, abstractmethod
from typing import Any

KVRecord = dict[str, Any]


class IKeyValueStore(ABC):
    """Interface for a distributed key-value configuration store."""

    @abstractmethod
    async def get(self, path: str) -> KVRecord | None:
        """Read one key.

        Args:
            path: Full key path, e.g. ``config/flight-status-service/dev/port``

        Returns:
            A record whose ``"Value"`` entry holds the string or number stored
            under the key, or None when the key does not exist

        Raises:
            Exception: Transport failures are raised by the implementation
        """
