"""Single-agent execution with a timeout budget and uniform outcome packaging."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ValidationError

from growth_agent.agents.prompts import render_prompt
from growth_agent.agents.registry import TaskSpec
from growth_agent.llm import Generation, Generator
from growth_agent.orchestration.models import FailureKind, TaskOutcome

logger = logging.getLogger(__name__)

TIMEOUT_REASON = "timeout"


class TaskRunner:
    """Run one agent against a transcript; failures come back as values."""

    def __init__(self, generator: Generator) -> None:
        self.generator = generator

    def run(self, spec: TaskSpec, transcript: str) -> TaskOutcome:
        started_at = _utc_now()
        started_perf = time.perf_counter()
        prompt = render_prompt(spec.prompt_template, transcript)

        # Not a context manager: leaving `with` would join a timed-out call.
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"agent-{spec.name}")
        try:
            future = pool.submit(self._generate, spec, prompt)
            try:
                generation: Generation = future.result(timeout=spec.timeout_s)
            except TimeoutError:
                logger.warning(
                    "agent_run event=timeout agent=%s timeout_s=%.2f",
                    spec.name,
                    spec.timeout_s,
                )
                return self._failed(
                    spec, TIMEOUT_REASON, "timeout", started_at=started_at, started_perf=started_perf
                )
            except ValidationError as exc:
                return self._failed(
                    spec,
                    _validation_reason(exc),
                    "invalid_output",
                    started_at=started_at,
                    started_perf=started_perf,
                )
            except Exception as exc:  # noqa: BLE001
                return self._failed(
                    spec,
                    str(exc) or type(exc).__name__,
                    "generator_error",
                    started_at=started_at,
                    started_perf=started_perf,
                )
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        try:
            payload = _validated_payload(spec.output_model, generation.payload)
        except ValidationError as exc:
            return self._failed(
                spec,
                _validation_reason(exc),
                "invalid_output",
                started_at=started_at,
                started_perf=started_perf,
            )
        except Exception as exc:  # noqa: BLE001
            return self._failed(
                spec,
                f"unusable generation: {exc}",
                "generator_error",
                started_at=started_at,
                started_perf=started_perf,
            )

        try:
            outcome = TaskOutcome(
                task_name=spec.name,
                succeeded=True,
                payload=payload,
                elapsed_ms=_duration_ms(started_perf),
                resource_usage=dict(generation.usage),
                started_at=started_at,
                finished_at=_utc_now(),
            )
        except Exception as exc:  # noqa: BLE001
            return self._failed(
                spec,
                f"unusable resource usage: {exc}",
                "generator_error",
                started_at=started_at,
                started_perf=started_perf,
            )

        logger.info(
            "agent_run event=completed agent=%s status=succeeded elapsed_ms=%.2f usage=%s",
            spec.name,
            outcome.elapsed_ms,
            outcome.resource_usage,
        )
        return outcome

    def _generate(self, spec: TaskSpec, prompt: str) -> Generation:
        return self.generator.generate(
            prompt=prompt,
            response_model=spec.output_model,
            parameters=spec.model_parameters,
            timeout_s=spec.timeout_s,
        )

    @staticmethod
    def _failed(
        spec: TaskSpec,
        reason: str,
        kind: FailureKind,
        *,
        started_at: datetime,
        started_perf: float,
    ) -> TaskOutcome:
        elapsed_ms = _duration_ms(started_perf)
        logger.warning(
            "agent_run event=completed agent=%s status=failed kind=%s elapsed_ms=%.2f reason=%s",
            spec.name,
            kind,
            elapsed_ms,
            reason,
        )
        return TaskOutcome(
            task_name=spec.name,
            succeeded=False,
            failure_reason=reason,
            failure_kind=kind,
            elapsed_ms=elapsed_ms,
            started_at=started_at,
            finished_at=_utc_now(),
        )


def _validated_payload(output_model: type[BaseModel], raw: Any) -> dict[str, Any]:
    if isinstance(raw, BaseModel):
        raw = raw.model_dump()
    return output_model.model_validate(raw).model_dump(mode="json")


def _validation_reason(exc: ValidationError) -> str:
    return f"output failed schema validation: {exc.error_count()} error(s): {exc}"


def _duration_ms(started_at: float) -> float:
    return round((time.perf_counter() - started_at) * 1000.0, 2)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)
