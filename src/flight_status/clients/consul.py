"""Consul HTTP API client.

Implements both the KV read used for dynamic configuration and the agent
service registration used for discovery, over a single ``httpx.AsyncClient``.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any

import httpx

from flight_status.ports import IKeyValueStore, IServiceRegistry, KVRecord, RegistryCallback

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Consul-Token"


class ConsulClient(IKeyValueStore, IServiceRegistry):
    """Async Consul agent client."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str = "",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {TOKEN_HEADER: token} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self._pending: set[asyncio.Task[None]] = set()

    async def get(self, path: str) -> KVRecord | None:
        """Read ``path`` from the KV store.

        Raises:
            httpx.HTTPError: On transport errors and non-404 error responses
        """
        response = await self._client.get(f"/v1/kv/{path.lstrip('/')}")
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("KV key %s not found", path)
            return None
        response.raise_for_status()

        entries = response.json()
        if not entries:
            return None
        entry = entries[0]

        raw = entry.get("Value")
        value = base64.b64decode(raw).decode("utf-8") if raw is not None else None
        return {"Key": entry.get("Key", path), "Value": value}

    def register(self, options: dict[str, Any], callback: RegistryCallback) -> None:
        """Schedule an agent registration and report the outcome to ``callback``."""
        task = asyncio.get_running_loop().create_task(
            self._register(options, callback)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _register(self, options: dict[str, Any], callback: RegistryCallback) -> None:
        try:
            response = await self._client.put(
                "/v1/agent/service/register", json=self._registration_body(options)
            )
            response.raise_for_status()
        except asyncio.CancelledError:
            callback(ConnectionAbortedError("registration cancelled before completion"))
            raise
        except Exception as e:
            # Every outcome reaches the callback exactly once
            callback(e)
            return
        callback(None)

    @staticmethod
    def _registration_body(options: dict[str, Any]) -> dict[str, Any]:
        body: dict[str, Any] = {
            "Name": options["name"],
            "Address": options.get("address", ""),
            "Port": options["port"],
        }
        check = options.get("check")
        if check:
            body["Check"] = {"HTTP": check["http"], "Interval": check["interval"]}
        return body

    async def aclose(self) -> None:
        """Cancel registrations still in flight, then close the HTTP client."""
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        await self._client.aclose()
