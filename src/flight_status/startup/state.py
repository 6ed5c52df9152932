"""Explicit bootstrap state machine.

Stages advance strictly forward in the order
``UNCONFIGURED < CONFIGURED < LISTENING < DEPENDENCIES_CONNECTED < REGISTERED``.
``FAILED`` can be entered from any non-terminal stage and is terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
import logging
import time

from flight_status.core.exceptions import InvalidStateTransition

logger = logging.getLogger(__name__)


class BootstrapStage(IntEnum):
    """Ordered bootstrap stages."""

    UNCONFIGURED = 0
    CONFIGURED = 1
    LISTENING = 2
    DEPENDENCIES_CONNECTED = 3
    REGISTERED = 4
    FAILED = 99

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class StageTransition:
    """One recorded transition."""

    stage: BootstrapStage
    at: float
    reason: str | None = None


@dataclass
class BootstrapState:
    """Process-wide bootstrap state, advanced only by the orchestrator."""

    stage: BootstrapStage = BootstrapStage.UNCONFIGURED
    failure_reason: str | None = None
    history: list[StageTransition] = field(
        default_factory=lambda: [StageTransition(BootstrapStage.UNCONFIGURED, time.time())]
    )

    @property
    def is_failed(self) -> bool:
        return self.stage == BootstrapStage.FAILED

    @property
    def is_ready(self) -> bool:
        """True once every dependency is connected, registered or not."""
        return not self.is_failed and self.stage >= BootstrapStage.DEPENDENCIES_CONNECTED

    def at_least(self, stage: BootstrapStage) -> bool:
        return not self.is_failed and self.stage >= stage

    @property
    def stages(self) -> list[BootstrapStage]:
        """Visited stages in order."""
        return [t.stage for t in self.history]

    def advance(self, stage: BootstrapStage) -> None:
        """Move forward to ``stage``.

        Raises:
            InvalidStateTransition: If the state is failed, ``stage`` is FAILED
                (use :meth:`fail`), or ``stage`` is not after the current one
        """
        if self.is_failed:
            msg = f"Cannot advance to {stage.label}: bootstrap already failed"
            raise InvalidStateTransition(msg)
        if stage == BootstrapStage.FAILED:
            msg = "Use fail() to enter the failed stage"
            raise InvalidStateTransition(msg)
        if stage <= self.stage:
            msg = f"Cannot move from {self.stage.label} to {stage.label}"
            raise InvalidStateTransition(msg)

        self.stage = stage
        self.history.append(StageTransition(stage, time.time()))
        logger.debug("Bootstrap stage: %s", stage.label)

    def fail(self, reason: str) -> None:
        """Enter the terminal failed stage.

        Raises:
            InvalidStateTransition: If the state already failed
        """
        if self.is_failed:
            msg = f"Bootstrap already failed: {self.failure_reason}"
            raise InvalidStateTransition(msg)

        logger.debug("Bootstrap failed at %s: %s", self.stage.label, reason)
        self.stage = BootstrapStage.FAILED
        self.failure_reason = reason
        self.history.append(StageTransition(BootstrapStage.FAILED, time.time(), reason))
