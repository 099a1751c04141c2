"""Fact-check prompt and optional automated analysis through Claude."""

from __future__ import annotations

import logging

from blog_fact_checker.clients.llm_client import LLMClient
from blog_fact_checker.models.blog import BlogPost
from blog_fact_checker.utils.html_text import extract_plain_text

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = """\
Please fact-check the following blog post and provide corrections in this format:

MUST FIX (high priority):
1. [Description] - Change "[original text]" to "[corrected text]" because [reason]

SHOULD FIX (medium priority):
1. [Description] - Change "[original text]" to "[corrected text]" because [reason]

CONSIDER (low priority):
1. [Description] - Change "[original text]" to "[corrected text]" because [reason]

Blog Title: {title}

Blog Content:
{content}

Please analyze for:
- Factual errors
- Outdated information
- Grammar and spelling issues
- Clarity and readability improvements
- Style consistency"""

ANALYSIS_SYSTEM = """\
You are a meticulous fact-checker and copy editor for a company blog.
Quote the original text exactly as it appears in the post so it can be found
and replaced automatically. Only list changes you are confident about."""


def build_analysis_prompt(title: str, plain_text: str) -> str:
    """Prompt asking for corrections in the MUST FIX / SHOULD FIX / CONSIDER format."""
    # str.replace, not format: post text may contain braces
    return ANALYSIS_PROMPT.replace("{title}", title).replace("{content}", plain_text)


def build_prompt_for_post(post: BlogPost) -> str:
    return build_analysis_prompt(post.name, extract_plain_text(post.content))


class FactChecker:
    """Run the analysis prompt through Claude instead of a manual chat session."""

    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def analyze(self, prompt: str) -> str:
        """Return the assistant's raw reply to ``prompt``."""
        logger.info("Requesting fact-check analysis (%d chars of prompt)", len(prompt))
        response = await self.llm.generate(prompt=prompt, system=ANALYSIS_SYSTEM)
        return response.text

    async def analyze_post(self, post: BlogPost) -> str:
        return await self.analyze(build_prompt_for_post(post))
