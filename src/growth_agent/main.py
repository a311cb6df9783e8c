"""FastAPI application wiring for the growth plan service.

Terms used in this file:
- Application factory: ``create_app`` builds a fresh, fully configured app,
  which lets each test inject its own store and generator.
- app.state: shared runtime objects (settings, registry, service).
- Lifespan: startup hook; the service is built there, or lazily on the first
  request when the hook did not run.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from growth_agent.agents.registry import TaskSpec, build_registry
from growth_agent.config.settings import Settings, get_settings
from growth_agent.llm import Generator, build_generator
from growth_agent.orchestration.errors import (
    MissingInputError,
    ReportNotFoundError,
    TranscriptValidationError,
    UnknownTaskError,
)
from growth_agent.orchestration.models import Report
from growth_agent.orchestration.runner import TaskRunner
from growth_agent.orchestration.scheduler import FanOutScheduler
from growth_agent.orchestration.service import GrowthPlanService
from growth_agent.storage.base import ReportStore
from growth_agent.storage.postgres import PostgresReportStore
from growth_agent.validation import validate_transcript

logger = logging.getLogger(__name__)


class CreateReportRequest(BaseModel):
    """Request body for POST /reports."""

    transcript: str = Field(min_length=1)
    episode_id: str | None = None


class RerunRequest(BaseModel):
    """Request body for POST /reports/{report_id}/rerun."""

    agent_name: str = Field(min_length=1)


class RerunResponse(BaseModel):
    """Fresh re-run outcome alongside the report as stored afterwards."""

    agent_name: str
    succeeded: bool
    failure_reason: str | None = None
    elapsed_ms: float
    resource_usage: dict[str, int | float] = Field(default_factory=dict)
    report: Report


def _ensure_runtime_state(
    app: FastAPI,
    *,
    settings: Settings,
    registry: dict[str, TaskSpec],
    storage_override: ReportStore | None,
    generator_override: Generator | None,
) -> None:
    if hasattr(app.state, "service"):
        return

    database_url = settings.resolved_database_url()
    if storage_override is None and not database_url:
        raise RuntimeError(
            "Missing database URL. Set GROWTH_AGENT_DATABASE_URL "
            "or DATABASE_URL before starting the app."
        )
    generator = generator_override
    if generator is None:
        generator = build_generator(settings)
    if generator is None:
        raise RuntimeError(
            "No generator is configured. "
            "Set OPENAI_API_KEY and GROWTH_AGENT_LLM_PROVIDER=openai."
        )

    store = storage_override
    if store is None:
        store = PostgresReportStore(database_url)
    runner = TaskRunner(generator)
    app.state.service = GrowthPlanService(
        registry=registry,
        runner=runner,
        store=store,
        scheduler=FanOutScheduler(runner, max_workers=settings.max_parallel_agents),
    )


def create_app(
    *,
    settings_override: Settings | None = None,
    storage: ReportStore | None = None,
    generator: Generator | None = None,
) -> FastAPI:
    settings = settings_override or get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    registry = build_registry(
        model=settings.llm_model or None,
        timeout_override_s=settings.agent_timeout_s,
    )

    def _ensure(target: FastAPI) -> None:
        _ensure_runtime_state(
            target,
            settings=settings,
            registry=registry,
            storage_override=storage,
            generator_override=generator,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _ensure(app)
        yield

    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.registry = registry

    # Keep test paths reliable when lifespan is not executed by the client.
    if storage is not None and generator is not None:
        _ensure(app)

    def _get_service(request: Request) -> GrowthPlanService:
        _ensure(request.app)
        return request.app.state.service

    @app.get("/health")
    @app.get("/healthz")
    @app.get("/live")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/agents")
    def list_agents() -> dict[str, list[dict[str, Any]]]:
        return {
            "agents": [
                {
                    "name": spec.name,
                    "timeout_s": spec.timeout_s,
                    "model": spec.model_parameters.model,
                }
                for spec in registry.values()
            ]
        }

    @app.post("/reports", response_model=Report)
    def create_report(payload: CreateReportRequest, request: Request) -> Report:
        service = _get_service(request)
        try:
            transcript = validate_transcript(payload.transcript, settings)
        except TranscriptValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        logger.info(
            "report event=generate_requested transcript_chars=%d episode_id=%s",
            len(transcript),
            payload.episode_id,
        )
        return service.generate(transcript, episode_id=payload.episode_id)

    @app.get("/reports/{report_id}", response_model=Report)
    def get_report(report_id: str, request: Request) -> Report:
        service = _get_service(request)
        try:
            return service.get_report(report_id)
        except ReportNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Report not found") from exc

    @app.post("/reports/{report_id}/rerun", response_model=RerunResponse)
    def rerun_agent(report_id: str, payload: RerunRequest, request: Request) -> RerunResponse:
        service = _get_service(request)
        try:
            result = service.rerun_task(report_id, payload.agent_name)
        except UnknownTaskError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except ReportNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Report not found") from exc
        except MissingInputError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

        outcome = result.outcome
        return RerunResponse(
            agent_name=outcome.task_name,
            succeeded=outcome.succeeded,
            failure_reason=outcome.failure_reason,
            elapsed_ms=outcome.elapsed_ms,
            resource_usage=outcome.resource_usage,
            report=result.report,
        )

    return app


# Module-level app for `uvicorn growth_agent.main:app`.
app = create_app()
