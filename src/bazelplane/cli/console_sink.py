"""Reporting sink that renders run events on the terminal."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from bazelplane.core.progress import status

if TYPE_CHECKING:
    from bazelplane.testing.coverage.models import FileCoverageRecord
    from bazelplane.testing.models import RunSummary, TestTarget


def _format_duration(seconds: float) -> str:
    return f"{seconds:.1f}s"


class ConsoleSink:
    """Stream test output to ``out`` and status lines to the shared console.

    Coverage records are kept (per target) for the final summary instead of
    being printed one by one.
    """

    def __init__(self, *, out: TextIO | None = None, show_output: bool = True) -> None:
        self._out = out or sys.stdout
        self._show_output = show_output
        self.coverage: dict[str | None, list[FileCoverageRecord]] = {}

    def on_enqueued(self, target: TestTarget) -> None:
        pass

    def on_started(self, target: TestTarget) -> None:
        status(f"Running {target.label}", style="none")

    def on_output(self, target: TestTarget | None, text: str) -> None:
        if self._show_output:
            self._out.write(text)
            self._out.flush()

    def on_passed(self, target: TestTarget, duration: float) -> None:
        status(f"{target.label} passed ({_format_duration(duration)})", style="success")

    def on_failed(self, target: TestTarget, message: str, duration: float) -> None:
        status(f"{target.label} {message} ({_format_duration(duration)})", style="error")

    def on_errored(self, target: TestTarget, message: str, duration: float) -> None:
        status(f"{target.label}: {message}", style="warning")

    def on_cancelled(self, target: TestTarget) -> None:
        status(f"{target.label} cancelled", style="skipped")

    def on_coverage(self, target: TestTarget | None, record: FileCoverageRecord) -> None:
        key = target.target_id if target else None
        self.coverage.setdefault(key, []).append(record)

    def on_run_finished(self, summary: RunSummary) -> None:
        pass
