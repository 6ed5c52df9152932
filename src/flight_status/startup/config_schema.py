"""Local process settings for the flight status service.

These settings come from environment variables (or a ``.env`` file) and only
describe how to reach the infrastructure. Runtime values such as the listen
port, the listen address and the document-store address are resolved from the
KV store by :class:`flight_status.startup.config_resolver.ConfigResolver`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any
from urllib.parse import urlparse

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_MARKER = "dev"


class Environment(StrEnum):
    """Deployment environment, selected once per process."""

    DEV = "dev"
    PROD = "prod"

    @classmethod
    def from_value(cls, value: object) -> Environment:
        """Select the environment from a raw variable value.

        Only the exact marker ``dev`` (surrounding whitespace ignored) selects
        dev; anything else, including an unset variable, selects prod.
        """
        if str(value).strip() == DEV_MARKER:
            return cls.DEV
        return cls.PROD


class LogLevel(StrEnum):
    """Valid log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ServiceSettings(BaseSettings):
    """Settings for reaching the KV store, the brokers and the registry."""

    environment: Environment = Field(
        default=Environment.PROD,
        description="Deployment environment (dev or prod)",
        alias="ENVIRONMENT",
    )
    service_name: str = Field(
        default="flight-status-service",
        description="Service name used for KV namespacing and registration",
        min_length=1,
        alias="SERVICE_NAME",
    )
    debug: bool = Field(default=False, description="Enable debug mode", alias="DEBUG")
    log_level: LogLevel = Field(
        default=LogLevel.INFO, description="Logging level", alias="LOG_LEVEL"
    )

    # Consul
    consul_dev_url: str = Field(
        default="http://localhost:8500",
        description="Consul agent URL used in dev",
        alias="CONSUL_DEV_URL",
    )
    consul_prod_url: str = Field(
        default="http://consul:8500",
        description="Consul agent URL used in prod",
        alias="CONSUL_PROD_URL",
    )
    consul_token: str = Field(
        default="",
        description="Consul ACL token",
        alias="CONSUL_TOKEN",
        repr=False,
    )
    consul_timeout_seconds: float | None = Field(
        default=None,
        description="HTTP timeout for Consul calls (unset means no timeout)",
        gt=0,
        alias="CONSUL_TIMEOUT_SECONDS",
    )
    registry_check_interval_seconds: int = Field(
        default=10,
        description="Interval at which the registry polls /health",
        gt=0,
        alias="REGISTRY_CHECK_INTERVAL_SECONDS",
    )

    # Kafka
    kafka_brokers: str = Field(
        default="localhost:9092",
        description="Comma-separated Kafka bootstrap servers",
        min_length=1,
        alias="KAFKA_BROKERS",
    )
    kafka_client_id: str = Field(
        default="flight-status-service",
        description="Kafka client id",
        alias="KAFKA_CLIENT_ID",
    )

    # Document store
    document_store_socket_timeout_ms: int = Field(
        default=30000,
        description="Socket idle timeout of the document-store connection",
        gt=0,
        alias="DOCUMENT_STORE_SOCKET_TIMEOUT_MS",
    )

    # HTTP
    max_request_size: int = Field(
        default=1024 * 1024,  # 1MB
        description="Maximum JSON request body size in bytes",
        gt=0,
        alias="MAX_REQUEST_SIZE",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("environment", mode="before")
    @classmethod
    def select_environment(cls, v: Any) -> Environment:
        """Default every value other than the dev marker to prod."""
        if isinstance(v, Environment):
            return v
        return Environment.from_value(v)

    @field_validator("consul_dev_url", "consul_prod_url")
    @classmethod
    def validate_consul_url(cls, v: str) -> str:
        """Validate Consul agent URL."""
        parsed = urlparse(v)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            msg = f"Invalid Consul URL: {v}"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("kafka_brokers")
    @classmethod
    def validate_kafka_brokers(cls, v: str) -> str:
        """Validate the broker list is not blank."""
        if not [b for b in v.split(",") if b.strip()]:
            msg = "KAFKA_BROKERS must list at least one broker"
            raise ValueError(msg)
        return v

    def is_dev(self) -> bool:
        """Check if running in dev."""
        return self.environment == Environment.DEV

    @property
    def consul_url(self) -> str:
        """Consul agent URL for the selected environment."""
        if self.is_dev():
            return self.consul_dev_url
        return self.consul_prod_url

    @property
    def kafka_broker_list(self) -> list[str]:
        """Kafka bootstrap servers as a list."""
        return [b.strip() for b in self.kafka_brokers.split(",") if b.strip()]

    def get_startup_summary(self) -> dict[str, Any]:
        """Get startup configuration summary."""
        return {
            "environment": self.environment.value,
            "service_name": self.service_name,
            "consul_url": self.consul_url,
            "kafka_brokers": self.kafka_broker_list,
            "log_level": self.log_level.value,
        }

    @classmethod
    def validate_from_env(cls) -> tuple[ServiceSettings | None, list[str]]:
        """Validate settings from environment variables.

        Returns:
            Tuple of (settings, errors). Settings is None if validation fails.
        """
        try:
            return cls(), []
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field_path = ".".join(str(loc) for loc in error["loc"])
                errors.append(f"{field_path}: {error['msg']}")
            return None, errors
