"""Startup error catalog.

Maps each bootstrap error code to a description, its usual causes and the
steps that fix it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ErrorCategory(StrEnum):
    """Error categories for organization."""

    CONFIGURATION = "configuration"
    NETWORKING = "networking"
    DEPENDENCIES = "dependencies"
    REGISTRATION = "registration"


class ErrorSeverity(StrEnum):
    """Error severity levels."""

    CRITICAL = "critical"  # Prevents startup
    HIGH = "high"  # Major functionality affected
    MEDIUM = "medium"  # Some functionality affected
    LOW = "low"  # Minor issues or warnings


@dataclass
class ErrorSolution:
    """Suggested solution for an error."""

    description: str
    steps: list[str]
    documentation_links: list[str] = field(default_factory=list)


@dataclass
class StartupErrorInfo:
    """Error information shown to the operator."""

    code: str
    title: str
    description: str
    category: ErrorCategory
    severity: ErrorSeverity
    solutions: list[ErrorSolution]
    common_causes: list[str]
    related_errors: list[str] = field(default_factory=list)


class StartupErrorCatalog:
    """Catalog of startup errors with solutions."""

    def __init__(self) -> None:
        self.errors: dict[str, StartupErrorInfo] = self._build_error_catalog()

    def _build_error_catalog(self) -> dict[str, StartupErrorInfo]:
        errors = {}

        errors["CONFIG_001"] = StartupErrorInfo(
            code="CONFIG_001",
            title="Configuration Key Unavailable",
            description="A required key could not be read from the Consul KV store.",
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            common_causes=[
                "Key not created under config/<service>/<environment>/",
                "ENVIRONMENT selects the wrong namespace (only 'dev' selects dev)",
                "Consul agent unreachable or ACL token rejected",
            ],
            solutions=[
                ErrorSolution(
                    description="Create the missing key",
                    steps=[
                        "Check the key path in the error message",
                        "consul kv put <path> <value>",
                        "Restart the service",
                    ],
                ),
                ErrorSolution(
                    description="Check the Consul connection",
                    steps=[
                        "Verify CONSUL_DEV_URL / CONSUL_PROD_URL",
                        "Verify CONSUL_TOKEN has read access to the config/ prefix",
                    ],
                ),
            ],
            related_errors=["CONFIG_002"],
        )

        errors["CONFIG_002"] = StartupErrorInfo(
            code="CONFIG_002",
            title="Invalid Configuration Value",
            description="A KV value exists but cannot be used as the required type.",
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            common_causes=[
                "Port stored as non-numeric text",
                "Port outside 0-65535",
                "Blank address value",
            ],
            solutions=[
                ErrorSolution(
                    description="Fix the stored value",
                    steps=[
                        "Check the error message for the key and the invalid value",
                        "Update the value in the KV store",
                        "Restart the service",
                    ],
                ),
            ],
            related_errors=["CONFIG_001"],
        )

        errors["NET_001"] = StartupErrorInfo(
            code="NET_001",
            title="Listener Bind Failed",
            description="The HTTP server could not listen on the configured address and port.",
            category=ErrorCategory.NETWORKING,
            severity=ErrorSeverity.CRITICAL,
            common_causes=[
                "Port already in use by another process",
                "Address not assigned to any local interface",
                "Privileged port without the required permissions",
            ],
            solutions=[
                ErrorSolution(
                    description="Free the port or change the configuration",
                    steps=[
                        "Find the process holding the port (lsof -i :<port>)",
                        "Or change the port/address keys in the KV store",
                    ],
                ),
            ],
        )

        errors["DEP_001"] = StartupErrorInfo(
            code="DEP_001",
            title="Dependency Connection Failed",
            description="The Kafka producer or the MongoDB client failed to connect.",
            category=ErrorCategory.DEPENDENCIES,
            severity=ErrorSeverity.CRITICAL,
            common_causes=[
                "Kafka brokers unreachable (KAFKA_BROKERS)",
                "Wrong mongo.address in the KV store",
                "Database authentication failure",
            ],
            solutions=[
                ErrorSolution(
                    description="Verify the dependency is reachable",
                    steps=[
                        "Check which dependency is named in the error message",
                        "Verify network connectivity from the service host",
                        "Check the credentials in the connection string",
                    ],
                ),
            ],
        )

        errors["REG_001"] = StartupErrorInfo(
            code="REG_001",
            title="Service Registration Failed",
            description="The Consul agent rejected the service registration.",
            category=ErrorCategory.REGISTRATION,
            severity=ErrorSeverity.MEDIUM,
            common_causes=[
                "Consul agent unreachable",
                "ACL token without service:write",
            ],
            solutions=[
                ErrorSolution(
                    description="The service keeps running but is not discoverable",
                    steps=[
                        "Fix the Consul agent or token",
                        "Restart the service to register again",
                    ],
                ),
            ],
        )

        return errors

    def get_error_info(self, error_code: str) -> StartupErrorInfo | None:
        return self.errors.get(error_code)

    def suggest_error_code(self, error_message: str) -> str | None:
        """Suggest error code based on error message content."""
        error_message_lower = error_message.lower()

        if "register" in error_message_lower:
            return "REG_001"
        if "address already in use" in error_message_lower or "listen" in error_message_lower:
            return "NET_001"
        if "invalid value" in error_message_lower:
            return "CONFIG_002"
        if "configuration key" in error_message_lower or "kv" in error_message_lower:
            return "CONFIG_001"
        if (
            "kafka" in error_message_lower
            or "mongo" in error_message_lower
            or "failed to connect" in error_message_lower
        ):
            return "DEP_001"
        return None

    def format_error_help(
        self, error_code: str, context: dict[str, str] | None = None
    ) -> str:
        """Format error help message."""
        error_info = self.get_error_info(error_code)
        if not error_info:
            return f"Unknown error code: {error_code}"

        lines: list[str] = []
        lines.extend(
            (
                f"🚨 {error_info.title} ({error_info.code})",
                "=" * 60,
                "",
                f"📝 Description: {error_info.description}",
                f"📊 Severity: {error_info.severity.value.upper()}",
                f"🏷️  Category: {error_info.category.value.title()}",
                "",
            )
        )

        if error_info.common_causes:
            lines.append("🔍 Common Causes:")
            lines.extend(f"  • {cause}" for cause in error_info.common_causes)
            lines.append("")

        if error_info.solutions:
            lines.append("💡 Solutions:")
            for i, solution in enumerate(error_info.solutions, 1):
                lines.append(f"\n  {i}. {solution.description}")
                lines.extend(f"     • {step}" for step in solution.steps)

        if context:
            lines.extend(("", "🔧 Context:"))
            for key, value in context.items():
                lines.append(f"  • {key}: {value}")

        if error_info.related_errors:
            lines.extend(("", "🔗 Related Errors:"))
            for related_code in error_info.related_errors:
                related_error = self.get_error_info(related_code)
                if related_error:
                    lines.append(f"  • {related_code}: {related_error.title}")

        return "\n".join(lines)


error_catalog = StartupErrorCatalog()
