"""Re-execute one agent of an existing report and merge it into that report."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from growth_agent.agents.registry import TaskSpec
from growth_agent.orchestration.aggregator import compute_tally
from growth_agent.orchestration.errors import MissingInputError, UnknownTaskError
from growth_agent.orchestration.models import (
    Report,
    RerunRecord,
    RerunResult,
    TaskError,
    TaskOutcome,
)
from growth_agent.orchestration.runner import TaskRunner

logger = logging.getLogger(__name__)


class RerunController:
    """Selective re-run: exactly one slot of the report may change.

    On failure the stored slot is kept as it was. A stale success beats an
    empty slot, and ``task_errors`` keeps describing stored slots only, so a
    failed re-run over a successful slot is reported through the returned
    outcome and the re-run log instead of the error list.
    """

    def __init__(self, runner: TaskRunner) -> None:
        self.runner = runner

    def rerun(self, report: Report, task_name: str, registry: dict[str, TaskSpec]) -> RerunResult:
        spec = registry.get(task_name)
        if spec is None:
            raise UnknownTaskError(task_name, list(registry))
        if not report.input_echo:
            raise MissingInputError(report.report_id)

        logger.info(
            "agent_rerun event=start report_id=%s agent=%s transcript_chars=%d",
            report.report_id,
            task_name,
            len(report.input_echo),
        )
        outcome = self.runner.run(spec, report.input_echo)
        merge_outcome(report, outcome)
        logger.info(
            "agent_rerun event=completed report_id=%s agent=%s status=%s tally=%s",
            report.report_id,
            task_name,
            "succeeded" if outcome.succeeded else "failed",
            report.tally.model_dump(),
        )
        return RerunResult(report=report, outcome=outcome)


def merge_outcome(report: Report, outcome: TaskOutcome) -> None:
    """Write one fresh outcome into ``report`` in place."""
    name = outcome.task_name
    if name not in report.task_results:
        raise UnknownTaskError(name, list(report.task_results))

    if outcome.succeeded:
        report.task_results[name] = outcome.payload
        report.task_errors = [error for error in report.task_errors if error.task_name != name]
    elif report.task_results[name] is None:
        report.task_errors = [error for error in report.task_errors if error.task_name != name]
        report.task_errors.append(
            TaskError(
                task_name=name,
                reason=outcome.failure_reason or "Unknown error",
                timestamp=outcome.finished_at,
            )
        )

    report.tally = compute_tally(report.task_results)
    report.reruns.append(
        RerunRecord(
            task_name=name,
            succeeded=outcome.succeeded,
            reason=outcome.failure_reason,
            elapsed_ms=outcome.elapsed_ms,
            timestamp=outcome.finished_at,
        )
    )
    report.updated_at = datetime.now(tz=UTC)
