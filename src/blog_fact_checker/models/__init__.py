"""Data models for the fact-check workflow."""

from blog_fact_checker.models.blog import BlogPost
from blog_fact_checker.models.session import ReviewSession
from blog_fact_checker.models.suggestion import (
    SEVERITY_LABELS,
    Severity,
    Suggestion,
    SuggestionType,
)

__all__ = [
    "BlogPost",
    "ReviewSession",
    "SEVERITY_LABELS",
    "Severity",
    "Suggestion",
    "SuggestionType",
]
