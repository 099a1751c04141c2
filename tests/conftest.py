"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from blog_fact_checker.clients.llm_client import LLMClient, LLMResponse
from blog_fact_checker.models.blog import BlogPost
from blog_fact_checker.models.suggestion import Suggestion


@pytest.fixture
def sample_reply() -> str:
    return """Here is my fact-check of the post.

MUST FIX (high priority):
1. Wrong price - Change "$29" to "$59" because the pricing table shows $59
2. Incorrect founding year - Change "founded in 2015" to "founded in 2016" because the About page says 2016

SHOULD FIX (medium priority):
1. "recieve" should be "receive" (spelling)

CONSIDER (low priority):
1. Tone is a bit casual - "super awesome" -> "excellent"

Let me know if you need anything else!
"""


@pytest.fixture
def sample_html() -> str:
    return (
        "<h2>Pricing</h2>"
        "<p>The Pro plan costs $29 per month. Our company was founded in 2015.</p>"
        '<p>You will recieve a <a href="/features">super awesome</a> dashboard.</p>'
    )


@pytest.fixture
def sample_post(sample_html) -> BlogPost:
    return BlogPost(
        id="item-123",
        slug="pricing-update",
        name="Pricing Update",
        content=sample_html,
        field_data={"slug": "pricing-update", "name": "Pricing Update", "post-body": sample_html},
        is_draft=False,
    )


@pytest.fixture
def price_suggestion() -> Suggestion:
    return Suggestion(
        original="$29",
        suggested="$59",
        reason="pricing table shows $59",
        severity="high",
        type="factual",
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="", input_tokens=100, output_tokens=50)
    )
    return client
