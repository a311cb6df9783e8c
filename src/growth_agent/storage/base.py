"""Storage interface for growth plan reports."""

from __future__ import annotations

from typing import Protocol

from growth_agent.orchestration.models import Report


class ReportStore(Protocol):
    def migrate(self) -> None: ...

    def load(self, report_id: str) -> Report | None: ...

    def save(self, report: Report) -> None: ...
