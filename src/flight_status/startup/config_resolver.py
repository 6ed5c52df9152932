"""Dynamic configuration resolution from the KV store.

Keys are namespaced as ``config/{service_name}/{environment}/{suffix}``. Every
call is an independent round-trip: nothing is cached.
"""

from __future__ import annotations

import logging

from flight_status.core.exceptions import ConfigUnavailable, InvalidConfigValue
from flight_status.ports import IKeyValueStore
from flight_status.startup.config_schema import Environment

logger = logging.getLogger(__name__)

Scalar = str | int | float


class ConfigResolver:
    """Reads typed configuration values for one service and environment."""

    def __init__(
        self,
        kv_store: IKeyValueStore,
        service_name: str,
        environment: Environment,
    ) -> None:
        self._kv_store = kv_store
        self.service_name = service_name
        self.environment = environment

    @property
    def prefix(self) -> str:
        return f"config/{self.service_name}"

    def key_path(self, suffix: str) -> str:
        """Full KV path for an environment-scoped key suffix."""
        return f"{self.prefix}/{self.environment.value}/{suffix}"

    async def resolve(self, suffix: str) -> Scalar:
        """Fetch the raw scalar stored under ``suffix``.

        Raises:
            ConfigUnavailable: If the read fails or the key is missing
        """
        path = self.key_path(suffix)
        try:
            record = await self._kv_store.get(path)
        except ConfigUnavailable:
            raise
        except Exception as e:
            raise ConfigUnavailable(path, f"KV read failed: {e!s}") from e

        if record is None or record.get("Value") is None:
            raise ConfigUnavailable(path)

        value: Scalar = record["Value"]
        logger.debug("Resolved %s", path)
        return value

    async def resolve_str(self, suffix: str) -> str:
        """Fetch a string value.

        Raises:
            ConfigUnavailable: If the read fails or the key is missing
            InvalidConfigValue: If the value is blank
        """
        value = str(await self.resolve(suffix)).strip()
        if not value:
            raise InvalidConfigValue(self.key_path(suffix), value, "non-empty string")
        return value

    async def resolve_int(self, suffix: str) -> int:
        """Fetch a base-10 integer value.

        Raises:
            ConfigUnavailable: If the read fails or the key is missing
            InvalidConfigValue: If the value is not an integer
        """
        value = await self.resolve(suffix)
        if isinstance(value, bool):
            raise InvalidConfigValue(self.key_path(suffix), value, "integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if value.is_integer():
                return int(value)
            raise InvalidConfigValue(self.key_path(suffix), value, "integer")

        try:
            return int(str(value).strip(), 10)
        except ValueError as e:
            raise InvalidConfigValue(self.key_path(suffix), value, "integer") from e

    async def resolve_port(self, suffix: str = "port") -> int:
        """Fetch a TCP port number (0-65535)."""
        port = await self.resolve_int(suffix)
        if not 0 <= port <= 65535:  # noqa: PLR2004
            raise InvalidConfigValue(self.key_path(suffix), port, "TCP port 0-65535")
        return port
