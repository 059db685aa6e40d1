from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from openai import APIError, AuthenticationError, OpenAI
from pydantic import BaseModel, ValidationError

from ..config import LlmSettings, get_settings
from ..errors import AIServiceError, AINotConfiguredError, InvalidCredentialsError
from . import prompts
from .schemas import AmendmentSummary, PerformanceStats, Quiz

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


class TutorClient:
    """Single-shot calls to an OpenAI-compatible chat completions API.

    Nothing here retries; every failure is raised as :class:`AIServiceError`.
    """

    def __init__(self, settings: Optional[LlmSettings] = None, *, client: Optional[OpenAI] = None) -> None:
        self.settings = settings or get_settings().llm
        self._client = client

    def _ensure_client(self) -> OpenAI:
        if self._client is not None:
            return self._client
        if not self.settings.is_configured:
            missing = ", ".join(self.settings.missing_env_vars)
            raise AINotConfiguredError(f"AI service is not configured. Missing: {missing}")
        self._client = OpenAI(
            api_key=self.settings.api_key,
            base_url=self.settings.base_url,
            timeout=self.settings.timeout_seconds,
            max_retries=0,
        )
        return self._client

    def _complete(self, action: str, messages: List[Dict[str, str]], *, json_mode: bool = False) -> str:
        client = self._ensure_client()
        options: Dict[str, Any] = {}
        if json_mode:
            options["response_format"] = {"type": "json_object"}
        try:
            completion = client.chat.completions.create(
                model=self.settings.model,
                messages=messages,
                **options,
            )
        except AuthenticationError as exc:
            logger.error("AI service rejected the API key during %s", action)
            raise InvalidCredentialsError(
                "AI service connection failed: The API Key is not valid. Please check your environment configuration."
            ) from exc
        except APIError as exc:
            logger.error("AI service error in %s: %s", action, exc)
            raise AIServiceError(f"Failed to {action}: {exc}") from exc

        text = (completion.choices[0].message.content or "").strip() if completion.choices else ""
        if not text:
            raise AIServiceError(f"Failed to {action}: Received an empty response from the AI service.")
        return text

    def _complete_json(self, action: str, prompt: str, model: Type[_M]) -> _M:
        text = self._complete(action, [{"role": "user", "content": prompt}], json_mode=True)
        try:
            payload = json.loads(_strip_fences(text))
        except json.JSONDecodeError as exc:
            raise AIServiceError(f"Failed to {action}: AI returned invalid JSON.") from exc
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            logger.error("AI payload for %s failed validation: %s", action, exc)
            raise AIServiceError(f"Failed to {action}: AI returned an invalid data structure.") from exc

    def ask(self, prompt: str) -> str:
        return self._complete(
            "connect to AI service",
            [
                {"role": "system", "content": prompts.TUTOR_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )

    def solve_problem(self, question: str) -> str:
        text = self._complete(
            "get AI solution",
            [
                {"role": "system", "content": prompts.SOLUTION_SYSTEM_PROMPT},
                {"role": "user", "content": prompts.SOLUTION_PROMPT_TEMPLATE.format(question=question)},
            ],
        )
        return text.replace("$", "")

    def generate_quiz(self) -> Quiz:
        return self._complete_json("generate daily quiz", prompts.QUIZ_PROMPT, Quiz)

    def summarize_amendments(self, subject: str, topic: str) -> AmendmentSummary:
        prompt = prompts.AMENDMENT_PROMPT_TEMPLATE.format(subject=subject, topic=topic)
        return self._complete_json("generate amendments", prompt, AmendmentSummary)

    def section_summary(self, query: str) -> str:
        return self._complete(
            "fetch summary",
            [
                {"role": "system", "content": prompts.SECTION_SYSTEM_PROMPT},
                {"role": "user", "content": query},
            ],
        )

    def performance_insights(self, stats: PerformanceStats) -> str:
        return self._complete(
            "get AI insights",
            [
                {"role": "system", "content": prompts.INSIGHTS_SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": prompts.INSIGHTS_PROMPT_TEMPLATE.format(stats=stats.model_dump_json(indent=2)),
                },
            ],
        )

    def balance_equation(self, equation: str) -> str:
        text = self._complete(
            "balance equation with AI",
            [
                {"role": "system", "content": prompts.EQUATION_SYSTEM_PROMPT},
                {"role": "user", "content": prompts.EQUATION_PROMPT_TEMPLATE.format(equation=equation)},
            ],
        )
        return text.replace("`", "").strip()


def _strip_fences(text: str) -> str:
    # Some models wrap JSON in a markdown fence even in JSON mode.
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.strip("`")
        if stripped.lower().startswith("json"):
            stripped = stripped[4:]
    return stripped.strip()
