"""Entry points of the orchestration core: generate a report, re-run one agent."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from growth_agent.agents.registry import TaskSpec
from growth_agent.orchestration.aggregator import DEFAULT_SOURCE, assemble
from growth_agent.orchestration.errors import ReportNotFoundError, UnknownTaskError
from growth_agent.orchestration.models import Report, RerunResult
from growth_agent.orchestration.rerun import RerunController
from growth_agent.orchestration.runner import TaskRunner
from growth_agent.orchestration.scheduler import FanOutScheduler

if TYPE_CHECKING:
    from growth_agent.storage.base import ReportStore

logger = logging.getLogger(__name__)


@dataclass
class _ReportLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


class GrowthPlanService:
    """Wires registry, runner, scheduler, re-run controller and store together.

    Re-runs against the same report id are serialized with a per-report lock
    held across load, run and save, so two re-runs of different agents on one
    report cannot overwrite each other. A lock entry lives only while some
    caller holds or waits for it. The lock is per process; deployments with
    several workers sharing one store need serialization in the store.
    """

    def __init__(
        self,
        *,
        registry: dict[str, TaskSpec],
        runner: TaskRunner,
        store: ReportStore,
        scheduler: FanOutScheduler | None = None,
    ) -> None:
        self.registry = registry
        self.runner = runner
        self.store = store
        self.scheduler = scheduler or FanOutScheduler(runner)
        self.rerun_controller = RerunController(runner)
        self._report_locks: dict[str, _ReportLock] = {}
        self._report_locks_guard = threading.Lock()

    def generate(
        self,
        transcript: str,
        *,
        episode_id: str | None = None,
        source: str | None = DEFAULT_SOURCE,
    ) -> Report:
        """Run every agent and persist the assembled report.

        Agent failures are recorded inside the report; only store errors raise.
        """
        transcript = transcript.strip()
        started_perf = time.perf_counter()
        outcomes = self.scheduler.run_all(self.registry, transcript)
        report = assemble(
            transcript,
            outcomes,
            total_elapsed_ms=round((time.perf_counter() - started_perf) * 1000.0, 2),
            episode_id=episode_id,
            source=source,
        )
        self.store.save(report)
        logger.info(
            "report event=created report_id=%s episode_id=%s succeeded=%d failed=%d "
            "total=%d elapsed_ms=%.2f",
            report.report_id,
            report.episode_id,
            report.tally.succeeded,
            report.tally.failed,
            report.tally.total,
            report.total_elapsed_ms,
        )
        return report

    def get_report(self, report_id: str) -> Report:
        report = self.store.load(report_id)
        if report is None:
            raise ReportNotFoundError(report_id)
        return report

    def rerun_task(self, report_id: str, task_name: str) -> RerunResult:
        """Re-run one agent of a stored report and persist the merged report."""
        if task_name not in self.registry:
            raise UnknownTaskError(task_name, list(self.registry))

        with self._report_lock(report_id):
            report = self.get_report(report_id)
            result = self.rerun_controller.rerun(report, task_name, self.registry)
            self.store.save(result.report)
        return result

    @contextmanager
    def _report_lock(self, report_id: str) -> Iterator[None]:
        with self._report_locks_guard:
            entry = self._report_locks.get(report_id)
            if entry is None:
                entry = self._report_locks[report_id] = _ReportLock()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._report_locks_guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._report_locks[report_id]
