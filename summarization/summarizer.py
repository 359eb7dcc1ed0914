"""Clinical note summarization gateway.

Wraps an LLM adapter behind the ``summarize(content) -> str`` contract the
ingestion pipeline calls. Errors from the adapter propagate; the caller
decides how to degrade.
"""

import logging
from typing import Optional, Protocol

from summarization.adapter import BaseLLMAdapter, MockLLMAdapter, OpenAILLMAdapter
from summarization.prompt_builder import SummaryPromptBuilder

logger = logging.getLogger(__name__)

INSUFFICIENT_CONTENT_SUMMARY = "Contenido insuficiente para generar resumen"
EMPTY_RESPONSE_SUMMARY = "No se pudo generar resumen"


class SummarizationGateway(Protocol):
    """Anything that can turn cleaned note content into a summary."""

    def summarize(self, content: str) -> str:
        ...


class ClinicalNoteSummarizer:
    """Summarizes cleaned note content through an LLM adapter.

    Content shorter than ``min_content_chars`` is not sent to the model.
    """

    def __init__(
        self,
        adapter: BaseLLMAdapter,
        prompt_builder: Optional[SummaryPromptBuilder] = None,
        min_content_chars: int = 50,
    ) -> None:
        self._adapter = adapter
        self._prompt_builder = prompt_builder or SummaryPromptBuilder()
        self._min_content_chars = min_content_chars

    def summarize(self, content: str) -> str:
        """Return a short executive summary of one note.

        Args:
            content: Cleaned note content.

        Returns:
            Summary text, or a fixed placeholder when the content is too
            short or the model answers with nothing.
        """
        if not content or len(content) < self._min_content_chars:
            return INSUFFICIENT_CONTENT_SUMMARY

        raw = self._adapter.generate(self._prompt_builder.build_prompt(content))
        summary = raw.strip()
        if not summary:
            logger.info("Summarizer returned empty text; using placeholder")
            return EMPTY_RESPONSE_SUMMARY
        return summary


def build_summarizer(
    adapter_name: str = "openai",
    model: str = "gpt-4o-mini",
    max_tokens: int = 500,
    temperature: float = 0.1,
    timeout_seconds: float = 30.0,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    min_content_chars: int = 50,
) -> ClinicalNoteSummarizer:
    """Instantiate the summarizer for the selected adapter.

    adapter_name=mock   -> MockLLMAdapter  (testing, no API key required)
    adapter_name=openai -> OpenAILLMAdapter (default)
    """
    adapter: BaseLLMAdapter
    if adapter_name.strip().lower() == "mock":
        adapter = MockLLMAdapter()
    else:
        adapter = OpenAILLMAdapter(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            timeout_seconds=timeout_seconds,
            api_key=api_key,
            base_url=base_url,
        )
    return ClinicalNoteSummarizer(adapter, min_content_chars=min_content_chars)
