"""Tests for startup progress reporting."""

from __future__ import annotations

import io

from flight_status.startup.progress_reporter import (
    ProgressPhase,
    StartupProgressReporter,
    StepStatus,
)


class TestStartupProgressReporter:
    def setup_method(self) -> None:
        self.output = io.StringIO()
        self.reporter = StartupProgressReporter(self.output, enable_colors=False)

    def test_colors_disabled_for_non_tty(self) -> None:
        reporter = StartupProgressReporter(io.StringIO())

        assert reporter.enable_colors is False
        assert reporter.colors["red"] == ""

    def test_successful_startup_summary(self) -> None:
        self.reporter.start_startup("flight-status-service")
        self.reporter.start_phase(ProgressPhase.RESOLVING_CONFIG)
        step = self.reporter.start_step("Listen port")
        self.reporter.complete_step(step, "8080")
        self.reporter.report_startup_complete(success=True)

        summary = self.reporter.get_startup_summary()
        assert summary["success"] is True
        assert summary["total_steps"] == 1
        assert summary["completed_steps"] == 1
        assert summary["final_phase"] == "ready"
        assert step.phase == ProgressPhase.RESOLVING_CONFIG
        assert step.status == StepStatus.COMPLETED
        assert step.finished_at is not None

        output = self.output.getvalue()
        assert "Starting flight-status-service" in output
        assert "Resolving Config" in output
        assert "[ok] Listen port: 8080" in output

    def test_failed_step(self) -> None:
        self.reporter.start_startup("flight-status-service")
        step = self.reporter.start_step("Document store")
        self.reporter.fail_step(step, "Connection failed", ConnectionError("auth failed"))
        self.reporter.report_startup_complete(success=False, message="auth failed")

        summary = self.reporter.get_startup_summary()
        assert summary["success"] is False
        assert summary["failed_steps"] == ["Document store"]
        assert summary["final_phase"] == "failed"
        assert isinstance(step.error, ConnectionError)
        assert "[xx] Document store: Connection failed" in self.output.getvalue()
        assert "Error: auth failed" in self.output.getvalue()
        assert "Startup Failed" in self.output.getvalue()

    def test_warned_step_counts_as_completed(self) -> None:
        step = self.reporter.start_step("Service registration")
        self.reporter.warn_step(step, "agent unreachable")
        self.reporter.report_startup_complete(success=True)

        summary = self.reporter.get_startup_summary()
        assert summary["success"] is True
        assert summary["completed_steps"] == 1
        assert summary["warned_steps"] == ["Service registration"]
        assert "[!!] Service registration: agent unreachable" in self.output.getvalue()

    def test_summary_before_completion_has_no_duration(self) -> None:
        self.reporter.start_step("Listen port")

        summary = self.reporter.get_startup_summary()
        assert summary["total_duration_ms"] == 0.0
        assert summary["completed_steps"] == 0
        assert summary["success"] is False
