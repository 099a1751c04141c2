"""Persisted state of a single fact-check review."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from blog_fact_checker.models.blog import BlogPost
from blog_fact_checker.models.suggestion import Suggestion


class ReviewSession(BaseModel):
    """Everything the workflow needs between CLI steps."""

    post: BlogPost
    prompt: str = ""
    response_text: str = ""  # assistant reply as pasted or fetched
    suggestions: list[Suggestion] = []
    selected_ids: list[str] = []
    content: str = ""  # current annotated / edited HTML
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def selected(self) -> list[Suggestion]:
        wanted = set(self.selected_ids)
        return [s for s in self.suggestions if s.id in wanted]
