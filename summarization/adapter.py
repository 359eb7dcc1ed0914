"""Model adapters used by the clinical note summarizer.

Each adapter turns one prompt into one completion string. The OpenAI adapter
talks to any OpenAI-compatible chat endpoint; the mock adapter answers with a
canned Spanish summary so the pipeline runs without network access.
"""

import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class BaseLLMAdapter(ABC):
    """Single-prompt completion interface."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Return the model's completion text for ``prompt``."""


class OpenAILLMAdapter(BaseLLMAdapter):
    """Chat-completions adapter for OpenAI-compatible endpoints.

    The client never retries and gives up after ``timeout_seconds``; a slow
    or failing call surfaces as an SDK exception to the caller.
    """

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        max_tokens: int = 500,
        temperature: float = 0.1,
        timeout_seconds: float = 30.0,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        """Build the SDK client.

        Args:
            model: Chat model name sent with every request.
            max_tokens: Completion length cap.
            temperature: Sampling temperature; kept low for factual summaries.
            timeout_seconds: Per-request deadline enforced by the SDK.
            api_key: Explicit key; OPENAI_API_KEY is read when omitted.
            base_url: Alternative endpoint for OpenAI-compatible servers.
        """
        self._client = self._build_client(
            api_key=api_key or os.environ.get("OPENAI_API_KEY", ""),
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )
        self._request: Dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "stream": False,
        }

    @staticmethod
    def _build_client(api_key: str, base_url: Optional[str], timeout_seconds: float) -> Any:
        from openai import OpenAI

        options: Dict[str, Any] = {
            "api_key": api_key,
            "timeout": timeout_seconds,
            "max_retries": 0,
        }
        if base_url:
            options["base_url"] = base_url
        return OpenAI(**options)

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` as a single user message.

        Returns:
            The first choice's text, or an empty string when the model sent
            no content.
        """
        response = self._client.chat.completions.create(
            messages=[{"role": "user", "content": prompt}],
            **self._request,
        )
        return response.choices[0].message.content or ""


_CANNED_SUMMARY = (
    "Diagnóstico principal: no determinado (respuesta de prueba). "
    "Síntomas clave: ver nota original. "
    "Tratamiento: sin cambios. "
    "Seguimiento: control habitual."
)


class MockLLMAdapter(BaseLLMAdapter):
    """Offline adapter with a fixed answer; keeps every prompt it receives."""

    def __init__(self, response: str = _CANNED_SUMMARY) -> None:
        self._response = response
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._response
