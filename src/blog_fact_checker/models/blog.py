"""Pydantic model for a Webflow blog post."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BlogPost(BaseModel):
    id: str
    slug: str
    name: str
    content: str = ""  # HTML body of the post
    field_data: dict = Field(default_factory=dict)  # raw Webflow fieldData
    is_draft: bool = False
