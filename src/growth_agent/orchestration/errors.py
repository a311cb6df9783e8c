"""Caller-visible failures of the orchestration service.

Agent-level failures never show up here; they are recorded inside the report.
"""

from __future__ import annotations


class GrowthAgentError(Exception):
    """Base class for named orchestration failures."""


class UnknownTaskError(GrowthAgentError):
    def __init__(self, task_name: str, known: list[str]) -> None:
        self.task_name = task_name
        self.known = known
        super().__init__(f"Unknown agent '{task_name}'. Valid agents: {', '.join(known)}")


class MissingInputError(GrowthAgentError):
    def __init__(self, report_id: str) -> None:
        self.report_id = report_id
        super().__init__(
            f"Report {report_id} does not contain a transcript. "
            "It was created before transcript storage was enabled; re-process the episode."
        )


class ReportNotFoundError(GrowthAgentError):
    def __init__(self, report_id: str) -> None:
        self.report_id = report_id
        super().__init__(f"Report {report_id} not found")


class TranscriptValidationError(GrowthAgentError, ValueError):
    """Transcript rejected before any agent runs."""
