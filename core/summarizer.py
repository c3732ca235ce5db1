"""
Summarizer — asks the remote language model for a same-language summary.
"""

from __future__ import annotations

import logging

from utils.llm_providers import BaseLLMProvider
from utils.schemas import SummaryResult

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = (
    "Summarize the following text in the same language as the input. "
    "If the input is English, the summary MUST be in English. "
    "Review always and ensure response it's in language of input:"
    "\n\n{text}\n\nSummary:"
)


class SummarizationError(Exception):
    """The provider failed or produced no usable summary."""


class Summarizer:
    def __init__(
        self,
        llm_provider: BaseLLMProvider,
        model: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 1024,
    ):
        self.llm = llm_provider
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def summarize(self, text: str) -> SummaryResult:
        """
        Summarize ``text``.

        Raises ``SummarizationError`` when the provider fails or replies with
        nothing. The caller decides what the client sees.
        """
        prompt = SUMMARY_PROMPT.format(text=text)
        logger.debug("[Summarizer] Prompt: %s", prompt[:500])
        try:
            reply = await self.llm.generate(
                prompt,
                temperature=self.temperature,
                model=self.model,
                max_tokens=self.max_tokens,
            )
        except Exception as exc:
            logger.error("LLM provider error: %s", exc, exc_info=True)
            raise SummarizationError(f"provider call failed: {exc}") from exc

        summary = reply.strip() if isinstance(reply, str) else ""
        if not summary:
            logger.error("LLM provider returned an empty or invalid response.")
            raise SummarizationError("empty reply")

        logger.info("[Summarizer] %d chars -> %d chars", len(text), len(summary))
        return SummaryResult(original_text=text, summary=summary)
