"""Static table of growth plan agents."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from pydantic import BaseModel

from growth_agent.agents.prompts import (
    AMPLIFY_PROMPT,
    HOOK_PROMPT,
    INSIGHT_PROMPT,
    PULSE_PROMPT,
    SPOTLIGHT_PROMPT,
    build_prompt_template,
)
from growth_agent.agents.schemas import (
    AmplifyOutput,
    HookOutput,
    InsightOutput,
    PulseOutput,
    SpotlightOutput,
)

DEFAULT_MODEL = "gpt-5"

ReasoningEffort = Literal["minimal", "low", "medium", "high"]
Verbosity = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class ModelParameters:
    """Passed through to the generator untouched."""

    model: str = DEFAULT_MODEL
    temperature: float | None = None
    reasoning_effort: ReasoningEffort | None = None
    verbosity: Verbosity | None = None
    max_tokens: int | None = None


@dataclass(frozen=True)
class TaskSpec:
    name: str
    display_name: str
    prompt_template: str
    output_model: type[BaseModel]
    timeout_s: float
    model_parameters: ModelParameters


def _spec(
    name: str,
    *,
    prompt: str,
    output_model: type[BaseModel],
    timeout_s: float,
    temperature: float,
    reasoning_effort: ReasoningEffort,
    verbosity: Verbosity,
    max_tokens: int,
) -> TaskSpec:
    display_name = name.capitalize()
    return TaskSpec(
        name=name,
        display_name=display_name,
        prompt_template=build_prompt_template(display_name, prompt),
        output_model=output_model,
        timeout_s=timeout_s,
        model_parameters=ModelParameters(
            temperature=temperature,
            reasoning_effort=reasoning_effort,
            verbosity=verbosity,
            max_tokens=max_tokens,
        ),
    )


_DEFAULT_SPECS: tuple[TaskSpec, ...] = (
    _spec(
        "insight",
        prompt=INSIGHT_PROMPT,
        output_model=InsightOutput,
        timeout_s=45.0,
        temperature=0.7,
        reasoning_effort="medium",
        verbosity="medium",
        max_tokens=2000,
    ),
    _spec(
        "hook",
        prompt=HOOK_PROMPT,
        output_model=HookOutput,
        timeout_s=40.0,
        temperature=0.7,
        reasoning_effort="medium",
        verbosity="low",
        max_tokens=1000,
    ),
    _spec(
        "spotlight",
        prompt=SPOTLIGHT_PROMPT,
        output_model=SpotlightOutput,
        timeout_s=40.0,
        temperature=0.6,
        reasoning_effort="low",
        verbosity="low",
        max_tokens=1500,
    ),
    _spec(
        "amplify",
        prompt=AMPLIFY_PROMPT,
        output_model=AmplifyOutput,
        timeout_s=60.0,
        temperature=0.5,
        reasoning_effort="high",
        verbosity="medium",
        max_tokens=2500,
    ),
    _spec(
        "pulse",
        prompt=PULSE_PROMPT,
        output_model=PulseOutput,
        timeout_s=45.0,
        temperature=0.6,
        reasoning_effort="medium",
        verbosity="low",
        max_tokens=1500,
    ),
)


def build_registry(
    *,
    model: str | None = None,
    timeout_override_s: float | None = None,
) -> dict[str, TaskSpec]:
    """Return a fresh ordered registry, optionally overriding model and timeouts."""
    registry: dict[str, TaskSpec] = {}
    for spec in _DEFAULT_SPECS:
        if model:
            spec = replace(spec, model_parameters=replace(spec.model_parameters, model=model))
        if timeout_override_s is not None:
            spec = replace(spec, timeout_s=timeout_override_s)
        registry[spec.name] = spec
    return registry


def list_agents() -> list[str]:
    return [spec.name for spec in _DEFAULT_SPECS]
