"""Structured-completion contract and the OpenAI chat completions adapter."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar
from urllib import error, request

from pydantic import BaseModel

from growth_agent.agents.registry import ModelParameters
from growth_agent.config.settings import Settings

TModel = TypeVar("TModel", bound=BaseModel)
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Generation:
    """One structured completion plus informational token counters."""

    payload: BaseModel
    usage: dict[str, int | float] = field(default_factory=dict)


class Generator(Protocol):
    """Interface for schema-validated completions.

    Implementations raise on any failure (transport, malformed output,
    schema mismatch); the task runner turns those into failed outcomes.
    """

    def generate(
        self,
        *,
        prompt: str,
        response_model: type[TModel],
        parameters: ModelParameters,
        timeout_s: float,
    ) -> Generation: ...


class OpenAIChatCompletionsAdapter:
    """Small OpenAI adapter using the chat completions REST API."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        max_retries: int = 0,
        backoff_s: float = 0.2,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.max_retries = max(0, max_retries)
        self.backoff_s = max(0.0, backoff_s)

    def generate(
        self,
        *,
        prompt: str,
        response_model: type[TModel],
        parameters: ModelParameters,
        timeout_s: float,
    ) -> Generation:
        payload = self._request_body(
            prompt=prompt,
            response_model=response_model,
            parameters=parameters,
        )
        response_json = self._request_with_retry(payload, timeout_s=timeout_s)
        content = self._extract_content(response_json)
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ValueError("OpenAI response content was not valid JSON") from exc
        return Generation(
            payload=response_model.model_validate(parsed),
            usage=self._extract_usage(response_json),
        )

    @staticmethod
    def _request_body(
        *,
        prompt: str,
        response_model: type[BaseModel],
        parameters: ModelParameters,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": parameters.model,
            "messages": [{"role": "user", "content": prompt}],
            "response_format": {
                "type": "json_schema",
                "json_schema": {
                    "name": response_model.__name__.lower(),
                    # `strict=True` requires every property to be listed as
                    # required, which optional fields like `semantic_note` break.
                    "strict": False,
                    "schema": response_model.model_json_schema(),
                },
            },
        }
        if parameters.temperature is not None:
            body["temperature"] = parameters.temperature
        if parameters.max_tokens is not None:
            body["max_completion_tokens"] = parameters.max_tokens
        if parameters.reasoning_effort is not None:
            body["reasoning_effort"] = parameters.reasoning_effort
        if parameters.verbosity is not None:
            body["verbosity"] = parameters.verbosity
        return body

    def _request_with_retry(self, payload: dict[str, Any], timeout_s: float) -> dict[str, Any]:
        last_error: Exception | None = None
        for attempt in range(self.max_retries + 1):
            try:
                return self._request(payload, timeout_s=timeout_s)
            except (TimeoutError, ValueError, error.URLError, error.HTTPError) as exc:
                last_error = exc
                logger.warning(
                    "OpenAI request failed attempt=%d/%d model=%s reason=%s",
                    attempt + 1,
                    self.max_retries + 1,
                    payload.get("model"),
                    exc,
                )
                if attempt < self.max_retries and self.backoff_s > 0:
                    time.sleep(self.backoff_s)
        if last_error is None:
            raise RuntimeError("LLM request failed with unknown error")
        raise last_error

    def _request(self, payload: dict[str, Any], timeout_s: float) -> dict[str, Any]:
        url = f"{self.base_url}/chat/completions"
        raw_payload = json.dumps(payload).encode("utf-8")
        req = request.Request(
            url=url,
            data=raw_payload,
            method="POST",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )
        try:
            with request.urlopen(req, timeout=timeout_s) as response:
                body = response.read().decode("utf-8")
        except error.HTTPError as exc:
            raw_error = exc.read().decode("utf-8", errors="replace")
            raise error.HTTPError(
                exc.url,
                exc.code,
                f"OpenAI API request failed: {raw_error[:400]}",
                exc.headers,
                exc.fp,
            ) from exc
        return json.loads(body)

    @staticmethod
    def _extract_content(response_json: dict[str, Any]) -> str:
        choices = response_json.get("choices", [])
        if not choices:
            raise ValueError("OpenAI response did not contain choices")

        message = choices[0].get("message", {})
        refusal = message.get("refusal")
        if isinstance(refusal, str) and refusal.strip():
            raise ValueError(f"OpenAI refused the request: {refusal.strip()}")
        content = message.get("content", "")
        if isinstance(content, str) and content.strip():
            return content
        if isinstance(content, list):
            text_segments: list[str] = []
            for item in content:
                if isinstance(item, dict):
                    text = item.get("text")
                    if isinstance(text, str):
                        text_segments.append(text)
            merged = "".join(text_segments).strip()
            if merged:
                return merged
        raise ValueError("No content returned from OpenAI")

    @staticmethod
    def _extract_usage(response_json: dict[str, Any]) -> dict[str, int]:
        usage = response_json.get("usage")
        if not isinstance(usage, dict):
            return {}
        return {
            "input_tokens": int(usage.get("prompt_tokens") or 0),
            "output_tokens": int(usage.get("completion_tokens") or 0),
        }


def build_generator(settings: Settings) -> Generator | None:
    if settings.llm_provider.lower().strip() != "openai":
        return None

    api_key = settings.resolved_openai_api_key()
    if not api_key:
        return None

    return OpenAIChatCompletionsAdapter(
        api_key=api_key,
        base_url=settings.llm_base_url,
        max_retries=settings.llm_max_retries,
        backoff_s=settings.llm_backoff_s,
    )
