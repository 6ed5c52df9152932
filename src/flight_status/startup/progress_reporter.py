"""Console progress for the bootstrap sequence.

Each phase and step is printed as it happens and mirrored to the log, so an
operator watching the container sees where startup stopped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
import sys
import time
from typing import Any, TextIO

logger = logging.getLogger(__name__)

RULE = "=" * 60

ANSI = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "cyan": "\033[36m",
    "gray": "\033[90m",
}


class ProgressPhase(StrEnum):
    """Startup progress phases."""

    INITIALIZING = "initializing"
    RESOLVING_CONFIG = "resolving_config"
    CONNECTING_DEPENDENCIES = "connecting_dependencies"
    READY = "ready"
    FAILED = "failed"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


class StepStatus(StrEnum):
    RUNNING = "running"
    COMPLETED = "completed"
    WARNED = "warned"
    FAILED = "failed"


# Marker and color per status; warned steps still count as done
STATUS_STYLE = {
    StepStatus.RUNNING: ("..", "gray"),
    StepStatus.COMPLETED: ("ok", "green"),
    StepStatus.WARNED: ("!!", "yellow"),
    StepStatus.FAILED: ("xx", "red"),
}


@dataclass
class ProgressStep:
    """One timed bootstrap step."""

    name: str
    phase: ProgressPhase
    started_at: float
    status: StepStatus = StepStatus.RUNNING
    message: str = ""
    finished_at: float | None = None
    error: BaseException | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at) * 1000

    @property
    def is_done(self) -> bool:
        return self.status in (StepStatus.COMPLETED, StepStatus.WARNED)

    def finish(
        self, status: StepStatus, message: str, error: BaseException | None = None
    ) -> None:
        self.status = status
        self.message = message
        self.error = error
        self.finished_at = time.monotonic()


class StartupProgressReporter:
    """Prints bootstrap phases and steps to a stream."""

    def __init__(
        self, output: TextIO | None = None, *, enable_colors: bool = True
    ) -> None:
        self.output = output or sys.stdout
        isatty = getattr(self.output, "isatty", None)
        self.enable_colors = enable_colors and isatty is not None and isatty()
        self.colors = ANSI if self.enable_colors else dict.fromkeys(ANSI, "")
        self.steps: list[ProgressStep] = []
        self.current_phase = ProgressPhase.INITIALIZING
        self.started_at = time.monotonic()
        self.finished_at: float | None = None

    def _paint(self, text: str, color: str) -> str:
        return f"{self.colors[color]}{text}{self.colors['reset']}"

    def _emit(self, line: str) -> None:
        print(line, file=self.output, flush=True)

    def _emit_step(self, step: ProgressStep, detail: str) -> None:
        marker, color = STATUS_STYLE[step.status]
        line = f"  [{marker}] {self._paint(step.name, color)}"
        if detail:
            line += f": {detail}"
        if step.duration_ms > 0:
            line += " " + self._paint(f"({step.duration_ms:.0f}ms)", "gray")
        self._emit(line)

    def start_startup(self, app_name: str) -> None:
        self.started_at = time.monotonic()
        self._emit(f"\n{self._paint('Starting', 'bold')} {self._paint(app_name, 'cyan')}")
        self._emit(self._paint(RULE, "gray"))

    def start_phase(self, phase: ProgressPhase, message: str = "") -> None:
        self.current_phase = phase
        line = self._paint(phase.display_name, "bold")
        if message:
            line += f": {message}"
        self._emit(f"\n{line}")
        logger.info("Startup phase: %s", phase.display_name)

    def start_step(self, name: str, message: str = "") -> ProgressStep:
        step = ProgressStep(name=name, phase=self.current_phase, started_at=time.monotonic())
        self.steps.append(step)
        self._emit_step(step, self._paint(message, "gray") if message else "")
        return step

    def complete_step(self, step: ProgressStep, message: str = "") -> None:
        step.finish(StepStatus.COMPLETED, message)
        self._emit_step(step, message)
        logger.info("Completed: %s in %.0fms", step.name, step.duration_ms)

    def warn_step(self, step: ProgressStep, message: str) -> None:
        """Finish a step whose failure does not stop startup."""
        step.finish(StepStatus.WARNED, message)
        self._emit_step(step, self._paint(message, "yellow"))
        logger.warning("Step degraded: %s - %s", step.name, message)

    def fail_step(
        self, step: ProgressStep, message: str, error: BaseException | None = None
    ) -> None:
        step.finish(StepStatus.FAILED, message, error)
        self._emit_step(step, self._paint(message, "red"))
        if error is not None:
            self._emit(f"       {self._paint('Error:', 'red')} {error}")
        logger.error("Step failed: %s - %s", step.name, message)

    def report_startup_complete(self, *, success: bool = True, message: str = "") -> None:
        self.finished_at = time.monotonic()
        elapsed = (self.finished_at - self.started_at) * 1000
        self.current_phase = ProgressPhase.READY if success else ProgressPhase.FAILED

        title = (
            self._paint("Startup Complete", "green")
            if success
            else self._paint("Startup Failed", "red")
        )
        line = f"{title} ({elapsed:.0f}ms)"
        if message:
            line += f": {message}"
        self._emit(f"\n{line}")
        self._emit(f"{self._paint(RULE, 'gray')}\n")

        if success:
            logger.info("Startup completed successfully in %.0fms", elapsed)
        else:
            logger.error("Startup failed after %.0fms: %s", elapsed, message)

    def get_startup_summary(self) -> dict[str, Any]:
        elapsed = 0.0
        if self.finished_at is not None:
            elapsed = (self.finished_at - self.started_at) * 1000
        failed = [s.name for s in self.steps if s.status == StepStatus.FAILED]
        warned = [s.name for s in self.steps if s.status == StepStatus.WARNED]
        return {
            "total_duration_ms": elapsed,
            "total_steps": len(self.steps),
            "completed_steps": sum(1 for s in self.steps if s.is_done),
            "failed_steps": failed,
            "warned_steps": warned,
            "final_phase": self.current_phase.value,
            "success": not failed and self.current_phase == ProgressPhase.READY,
        }
