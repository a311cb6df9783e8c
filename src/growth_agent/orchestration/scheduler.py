"""Concurrent fan-out of every registered agent over one transcript."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from growth_agent.agents.registry import TaskSpec
from growth_agent.orchestration.models import TaskOutcome
from growth_agent.orchestration.runner import TaskRunner

logger = logging.getLogger(__name__)


class FanOutScheduler:
    """Join-all scheduler: every agent reaches a terminal state before returning.

    Outcomes come back in registry order regardless of completion order. The
    runner never raises for agent failures, so one agent cannot cancel or
    corrupt a sibling; anything that does escape is a defect and propagates.
    """

    def __init__(self, runner: TaskRunner, *, max_workers: int | None = None) -> None:
        self.runner = runner
        self.max_workers = max_workers

    def run_all(self, registry: dict[str, TaskSpec], transcript: str) -> list[TaskOutcome]:
        specs = list(registry.values())
        if not specs:
            return []

        workers = len(specs) if self.max_workers is None else min(self.max_workers, len(specs))
        logger.info(
            "fan_out event=start agents=%s workers=%d transcript_chars=%d",
            ",".join(spec.name for spec in specs),
            workers,
            len(transcript),
        )
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fan-out") as pool:
            futures: list[Future[TaskOutcome]] = [
                pool.submit(self.runner.run, spec, transcript) for spec in specs
            ]
            outcomes = [future.result() for future in futures]

        succeeded = sum(1 for outcome in outcomes if outcome.succeeded)
        logger.info(
            "fan_out event=completed succeeded=%d failed=%d total=%d",
            succeeded,
            len(outcomes) - succeeded,
            len(outcomes),
        )
        return outcomes
