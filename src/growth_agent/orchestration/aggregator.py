"""Assemble per-agent outcomes into one growth plan report."""

from __future__ import annotations

import time
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from growth_agent.orchestration.models import Report, TaskError, TaskOutcome, Tally

DEFAULT_SOURCE = "direct_transcript_upload"


def new_report_id() -> str:
    return f"rprt_{int(time.time() * 1000)}_{uuid4().hex[:9]}"


def compute_tally(task_results: dict[str, dict[str, Any] | None]) -> Tally:
    succeeded = sum(1 for payload in task_results.values() if payload is not None)
    total = len(task_results)
    return Tally(succeeded=succeeded, failed=total - succeeded, total=total)


def assemble(
    transcript: str,
    outcomes: list[TaskOutcome],
    *,
    total_elapsed_ms: float,
    episode_id: str | None = None,
    source: str | None = DEFAULT_SOURCE,
) -> Report:
    """Build a report with one slot per outcome.

    A report where every agent failed is still a well-formed report.
    """
    now = datetime.now(tz=UTC)
    task_results: dict[str, dict[str, Any] | None] = {}
    task_errors: list[TaskError] = []
    for outcome in outcomes:
        if outcome.task_name in task_results:
            raise ValueError(f"Duplicate outcome for agent '{outcome.task_name}'")
        if outcome.succeeded:
            task_results[outcome.task_name] = outcome.payload
            continue
        task_results[outcome.task_name] = None
        task_errors.append(
            TaskError(
                task_name=outcome.task_name,
                reason=outcome.failure_reason or "Unknown error",
                timestamp=outcome.finished_at,
            )
        )

    return Report(
        report_id=new_report_id(),
        created_at=now,
        updated_at=now,
        episode_id=episode_id or f"episode-{int(now.timestamp() * 1000)}",
        source=source,
        input_fingerprint=len(transcript),
        input_echo=transcript,
        total_elapsed_ms=total_elapsed_ms,
        task_results=task_results,
        task_errors=task_errors,
        tally=compute_tally(task_results),
    )
