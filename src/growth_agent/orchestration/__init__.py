"""Fan-out orchestration of growth plan agents."""

from growth_agent.orchestration.aggregator import assemble, compute_tally
from growth_agent.orchestration.errors import (
    GrowthAgentError,
    MissingInputError,
    ReportNotFoundError,
    TranscriptValidationError,
    UnknownTaskError,
)
from growth_agent.orchestration.models import (
    Report,
    RerunRecord,
    RerunResult,
    TaskError,
    TaskOutcome,
    Tally,
)
from growth_agent.orchestration.rerun import RerunController
from growth_agent.orchestration.runner import TaskRunner
from growth_agent.orchestration.scheduler import FanOutScheduler
from growth_agent.orchestration.service import GrowthPlanService

__all__ = [
    "FanOutScheduler",
    "GrowthAgentError",
    "GrowthPlanService",
    "MissingInputError",
    "Report",
    "ReportNotFoundError",
    "RerunController",
    "RerunRecord",
    "RerunResult",
    "Tally",
    "TaskError",
    "TaskOutcome",
    "TaskRunner",
    "TranscriptValidationError",
    "UnknownTaskError",
    "assemble",
    "compute_tally",
]
