"""Public entry points of the suggestion parser and document patcher."""

from blog_fact_checker.editor.highlighter import (
    apply_suggestion,
    apply_suggestions,
    count_annotations,
    strip_annotations,
)
from blog_fact_checker.parsers.suggestion_parser import (
    parse_suggestions,
    validate_suggestions,
)
from blog_fact_checker.utils.html_text import extract_plain_text

__all__ = [
    "apply_suggestion",
    "apply_suggestions",
    "count_annotations",
    "extract_plain_text",
    "parse_suggestions",
    "strip_annotations",
    "validate_suggestions",
]
