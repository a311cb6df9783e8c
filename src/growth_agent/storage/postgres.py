"""PostgreSQL storage backend for growth plan reports.

Terms:
- Migration: creating tables/indexes before normal reads and writes.
- JSONB: PostgreSQL JSON type; the whole report lives in one JSONB column.
- Upsert: INSERT ... ON CONFLICT DO UPDATE, used so save() covers both new
  reports and re-run updates.
"""

from __future__ import annotations

import threading
from typing import Any

from growth_agent.orchestration.models import Report


class PostgresReportStore:
    """Thread-safe PostgreSQL-backed report store."""

    def __init__(self, database_url: str) -> None:
        if not database_url:
            raise ValueError("database_url is required")
        self.database_url = database_url
        self._lock = threading.Lock()
        self._psycopg, self._dict_row, self._json_wrapper = self._load_psycopg()
        self.migrate()

    def migrate(self) -> None:
        """Create the reports table and indexes if they do not already exist."""
        with self._lock, self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS reports (
                    report_id TEXT PRIMARY KEY,
                    episode_id TEXT NOT NULL,
                    report_json JSONB NOT NULL,
                    created_at TIMESTAMPTZ NOT NULL,
                    updated_at TIMESTAMPTZ NOT NULL
                )
                """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_reports_updated_at
                ON reports(updated_at DESC)
                """)
            conn.commit()

    def load(self, report_id: str) -> Report | None:
        with self._lock, self._connect() as conn:
            row = conn.execute(
                "SELECT report_json FROM reports WHERE report_id = %s",
                (report_id,),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_report(row)

    def save(self, report: Report) -> None:
        with self._lock, self._connect() as conn:
            conn.execute(
                """
                INSERT INTO reports (
                    report_id,
                    episode_id,
                    report_json,
                    created_at,
                    updated_at
                ) VALUES (%s, %s, %s, %s, %s)
                ON CONFLICT (report_id) DO UPDATE
                SET report_json = EXCLUDED.report_json,
                    updated_at = EXCLUDED.updated_at
                """,
                (
                    report.report_id,
                    report.episode_id,
                    self._json_wrapper(report.model_dump(mode="json")),
                    report.created_at,
                    report.updated_at,
                ),
            )
            conn.commit()

    def _connect(self) -> Any:
        """Open a psycopg connection that yields dict-like rows."""
        return self._psycopg.connect(self.database_url, row_factory=self._dict_row)

    @staticmethod
    def _load_psycopg() -> tuple[Any, Any, Any]:
        """Import psycopg and helpers with a friendly install hint on failure."""
        try:
            import psycopg
            from psycopg.rows import dict_row
            from psycopg.types.json import Json
        except ImportError as exc:  # pragma: no cover - exercised only without dependency
            raise RuntimeError(
                "PostgreSQL backend requires psycopg. Install with: "
                'python -m pip install "psycopg[binary]>=3.2,<4.0"'
            ) from exc
        return psycopg, dict_row, Json

    @staticmethod
    def _row_to_report(row: Any) -> Report:
        raw = row["report_json"]
        if isinstance(raw, (str, bytes)):
            return Report.model_validate_json(raw)
        return Report.model_validate(raw)
