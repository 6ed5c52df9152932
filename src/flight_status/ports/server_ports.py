"""HTTP listener port interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IHttpListener(ABC):
    """Interface for the HTTP server that accepts connections for the app."""

    @property
    @abstractmethod
    def is_bound(self) -> bool:
        """Whether the listener socket is bound and accepting connections."""

    @property
    @abstractmethod
    def bound_port(self) -> int | None:
        """Port the socket is bound to, or None before a successful start.

        Differs from the requested port when port 0 asked for an ephemeral one.
        """

    @abstractmethod
    async def start(self, address: str, port: int) -> None:
        """Bind to ``address:port`` and start serving.

        Returns once the server accepts connections.

        Raises:
            ListenError: If the socket cannot be bound or the server fails to start
        """

    @abstractmethod
    async def stop(self) -> None:
        """Stop serving and release the socket."""
