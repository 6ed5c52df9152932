"""Service registry port interface.

The registry client keeps the callback-style contract of discovery agents:
``register(options, callback)`` returns immediately and later invokes the
callback with ``None`` on success or the error on failure.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

RegistryCallback = Callable[[BaseException | None], None]


class IServiceRegistry(ABC):
    """Interface for the discovery registry agent."""

    @abstractmethod
    def register(self, options: dict[str, Any], callback: RegistryCallback) -> None:
        """Register a service instance.

        Args:
            options: Registration options (name, address, port, check)
            callback: Invoked exactly once with None or the failure
        """
