"""HTTP listener backed by uvicorn.

The socket is bound before uvicorn is started so that bind failures surface as
:class:`ListenError` from :meth:`UvicornListener.start` instead of a log line
and ``sys.exit`` inside the server task.
"""

from __future__ import annotations

import asyncio
import logging
import socket
from typing import Any

import uvicorn

from flight_status.core.exceptions import ListenError
from flight_status.ports import IHttpListener

logger = logging.getLogger(__name__)

STARTUP_POLL_INTERVAL = 0.01


class UvicornListener(IHttpListener):
    """Serves an ASGI app with uvicorn on a pre-bound socket."""

    def __init__(self, app: Any, *, log_level: str | None = None) -> None:
        self._app = app
        self._log_level = log_level
        self._server: uvicorn.Server | None = None
        self._task: asyncio.Task[None] | None = None
        self.address: str | None = None
        self.port: int | None = None

    @property
    def is_bound(self) -> bool:
        return self._server is not None and self._server.started

    @property
    def bound_port(self) -> int | None:
        return self.port if self.is_bound else None

    @staticmethod
    def _bind(address: str, port: int) -> socket.socket:
        family = socket.AF_INET6 if ":" in address else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((address, port))
        except OSError as e:
            sock.close()
            raise ListenError(address, port, e.strerror or str(e)) from e
        sock.set_inheritable(True)
        return sock

    async def start(self, address: str, port: int) -> None:
        """Bind ``address:port`` and return once uvicorn accepts connections.

        Raises:
            ListenError: If the bind fails or the server stops during startup
        """
        sock = self._bind(address, port)
        self.address = address
        self.port = sock.getsockname()[1]

        config = uvicorn.Config(
            self._app,
            host=address,
            port=self.port,
            log_config=None,
            log_level=self._log_level,
        )
        server = uvicorn.Server(config)
        self._server = server
        self._task = asyncio.create_task(server.serve(sockets=[sock]))

        try:
            while not server.started:
                if self._task.done():
                    sock.close()
                    error = None if self._task.cancelled() else self._task.exception()
                    self._server = None
                    self._task = None
                    reason = str(error) if error else "server stopped during startup"
                    raise ListenError(address, port, reason)
                await asyncio.sleep(STARTUP_POLL_INTERVAL)
        except asyncio.CancelledError:
            server.should_exit = True
            raise

        logger.debug("uvicorn serving on %s:%s", address, self.port)

    async def wait_closed(self) -> None:
        """Wait until the server exits (signal or :meth:`stop`)."""
        if self._task is not None:
            await self._task

    async def stop(self) -> None:
        if self._server is None or self._task is None:
            return
        self._server.should_exit = True
        await self._task
        self._server = None
        self._task = None
