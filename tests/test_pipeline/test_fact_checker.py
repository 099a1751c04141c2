"""Tests for the analysis prompt and automated fact-checking."""

from __future__ import annotations

from blog_fact_checker.clients.llm_client import LLMResponse
from blog_fact_checker.pipeline.fact_checker import (
    ANALYSIS_SYSTEM,
    FactChecker,
    build_analysis_prompt,
    build_prompt_for_post,
)


class TestBuildAnalysisPrompt:
    def test_contains_format_sections(self):
        prompt = build_analysis_prompt("My Post", "Body text")
        assert "MUST FIX (high priority):" in prompt
        assert "SHOULD FIX (medium priority):" in prompt
        assert "CONSIDER (low priority):" in prompt
        assert "Blog Title: My Post" in prompt
        assert "Blog Content:\nBody text" in prompt

    def test_braces_in_content_are_kept(self):
        prompt = build_analysis_prompt("T", "code like {x} and {}")
        assert "code like {x} and {}" in prompt

    def test_prompt_for_post_uses_plain_text(self, sample_post):
        prompt = build_prompt_for_post(sample_post)
        assert "Blog Title: Pricing Update" in prompt
        assert "The Pro plan costs $29 per month." in prompt
        assert "<p>" not in prompt


class TestFactChecker:
    async def test_analyze_returns_reply_text(self, mock_llm_client, sample_reply):
        mock_llm_client.generate.return_value = LLMResponse(
            text=sample_reply, input_tokens=10, output_tokens=20
        )
        checker = FactChecker(llm=mock_llm_client)

        reply = await checker.analyze("prompt text")

        assert reply == sample_reply
        mock_llm_client.generate.assert_called_once_with(
            prompt="prompt text",
            system=ANALYSIS_SYSTEM,
        )

    async def test_analyze_post_builds_prompt(self, mock_llm_client, sample_post):
        checker = FactChecker(llm=mock_llm_client)
        await checker.analyze_post(sample_post)

        sent = mock_llm_client.generate.call_args.kwargs["prompt"]
        assert "Blog Title: Pricing Update" in sent
