"""Agent definitions: output schemas, prompts, and the task registry."""

from growth_agent.agents.prompts import render_prompt
from growth_agent.agents.registry import (
    ModelParameters,
    TaskSpec,
    build_registry,
    list_agents,
)

__all__ = [
    "ModelParameters",
    "TaskSpec",
    "build_registry",
    "list_agents",
    "render_prompt",
]
