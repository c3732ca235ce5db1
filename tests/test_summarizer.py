"""
Tests for the Summarizer.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from core.summarizer import SUMMARY_PROMPT, SummarizationError, Summarizer


def _provider(reply=None, side_effect=None):
    provider = MagicMock()
    provider.generate = AsyncMock(return_value=reply, side_effect=side_effect)
    return provider


class TestSummarizer:
    @pytest.mark.asyncio
    async def test_summarize(self):
        provider = _provider(reply="  Hello to everyone.  \n")
        summarizer = Summarizer(provider, model="gpt-4o-mini", temperature=0.1)

        result = await summarizer.summarize("hello world")

        assert result.original_text == "hello world"
        assert result.summary == "Hello to everyone."
        prompt = provider.generate.await_args.args[0]
        assert prompt == SUMMARY_PROMPT.format(text="hello world")
        assert provider.generate.await_args.kwargs["model"] == "gpt-4o-mini"
        assert provider.generate.await_args.kwargs["temperature"] == 0.1

    def test_prompt_asks_for_same_language(self):
        assert "same language as the input" in SUMMARY_PROMPT
        assert SUMMARY_PROMPT.endswith("Summary:")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["", "   \n", None])
    async def test_empty_reply(self, reply):
        summarizer = Summarizer(_provider(reply=reply))
        with pytest.raises(SummarizationError, match="empty reply"):
            await summarizer.summarize("hello world")

    @pytest.mark.asyncio
    async def test_provider_error_is_chained(self):
        cause = RuntimeError("quota exceeded")
        summarizer = Summarizer(_provider(side_effect=cause))
        with pytest.raises(SummarizationError) as exc_info:
            await summarizer.summarize("hello world")
        assert exc_info.value.__cause__ is cause

    def test_serializes_with_camel_case_key(self):
        from utils.schemas import SummaryResult

        result = SummaryResult(original_text="t", summary="s")
        assert result.model_dump(by_alias=True) == {"originalText": "t", "summary": "s"}
