"""Report storage backends."""

from growth_agent.storage.base import ReportStore
from growth_agent.storage.memory import InMemoryReportStore
from growth_agent.storage.postgres import PostgresReportStore

__all__ = [
    "InMemoryReportStore",
    "PostgresReportStore",
    "ReportStore",
]
