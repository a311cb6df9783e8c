"""Pydantic records produced by the orchestration core.

Terms used in this file:
- Outcome: what one agent run produced, success or failure, never both.
- Slot: one entry of ``Report.task_results``; ``None`` means the stored state
  of that agent is failed.
- Tally: counts derived from the slots.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

FailureKind = Literal["timeout", "invalid_output", "generator_error"]


class TaskOutcome(BaseModel):
    """Result of one task runner invocation."""

    model_config = ConfigDict(frozen=True)

    task_name: str
    succeeded: bool
    payload: dict[str, Any] | None = None
    failure_reason: str | None = None
    failure_kind: FailureKind | None = None
    elapsed_ms: float
    resource_usage: dict[str, int | float] = Field(default_factory=dict)
    started_at: datetime
    finished_at: datetime

    @model_validator(mode="after")
    def _exactly_one_of_payload_or_reason(self) -> TaskOutcome:
        if self.succeeded:
            if self.payload is None or self.failure_reason is not None:
                raise ValueError("succeeded outcome needs a payload and no failure_reason")
        elif self.payload is not None or not self.failure_reason:
            raise ValueError("failed outcome needs a failure_reason and no payload")
        return self


class TaskError(BaseModel):
    """One entry of the report error list."""

    task_name: str
    reason: str
    timestamp: datetime


class Tally(BaseModel):
    succeeded: int
    failed: int
    total: int


class RerunRecord(BaseModel):
    """Audit row appended for every re-run, successful or not."""

    task_name: str
    succeeded: bool
    reason: str | None = None
    elapsed_ms: float
    timestamp: datetime


class Report(BaseModel):
    """Aggregated growth plan, the persisted artifact."""

    report_id: str
    created_at: datetime
    updated_at: datetime
    episode_id: str
    # How the transcript arrived, e.g. direct upload.
    source: str | None = None
    # Character length of the retained input.
    input_fingerprint: int
    # None on legacy reports stored before transcripts were retained.
    input_echo: str | None = None
    total_elapsed_ms: float
    task_results: dict[str, dict[str, Any] | None]
    task_errors: list[TaskError] = Field(default_factory=list)
    tally: Tally
    reruns: list[RerunRecord] = Field(default_factory=list)


class RerunResult(BaseModel):
    """Stored report after a re-run plus the fresh outcome of that run."""

    report: Report
    outcome: TaskOutcome
