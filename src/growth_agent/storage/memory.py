"""In-memory report store for tests and local runs."""

from __future__ import annotations

import threading

from growth_agent.orchestration.models import Report


class InMemoryReportStore:
    """Dict-backed store; copies on the way in and out so callers never share state."""

    def __init__(self) -> None:
        self._reports: dict[str, Report] = {}
        self._lock = threading.Lock()

    def migrate(self) -> None:
        return None

    def load(self, report_id: str) -> Report | None:
        with self._lock:
            report = self._reports.get(report_id)
        return report.model_copy(deep=True) if report else None

    def save(self, report: Report) -> None:
        with self._lock:
            self._reports[report.report_id] = report.model_copy(deep=True)
