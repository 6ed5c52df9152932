"""Service bootstrap.

Resolves runtime configuration from Consul, connects Kafka and MongoDB, binds
the HTTP listener and registers the instance for discovery.
"""

from __future__ import annotations

from flight_status.startup.config_resolver import ConfigResolver
from flight_status.startup.config_schema import Environment, ServiceSettings
from flight_status.startup.dependencies import DependencyConnector
from flight_status.startup.orchestrator import BootstrapOrchestrator, build_orchestrator
from flight_status.startup.progress_reporter import StartupProgressReporter
from flight_status.startup.registrar import ServiceRegistrar, ServiceRegistration
from flight_status.startup.state import BootstrapStage, BootstrapState

__all__ = [
    "BootstrapOrchestrator",
    "BootstrapStage",
    "BootstrapState",
    "ConfigResolver",
    "DependencyConnector",
    "Environment",
    "ServiceRegistrar",
    "ServiceRegistration",
    "ServiceSettings",
    "StartupProgressReporter",
    "build_orchestrator",
]
