"""Escaping and plain-text helpers for blog HTML."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

# Entity forms must stay stable: annotated documents already in Webflow use them
_HTML_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
})

_REGEX_METACHARS = re.compile(r"[.*+?^${}()|\[\]\\]")


def escape_html(text: str) -> str:
    """Map ``& < > " '`` to their entity forms."""
    return text.translate(_HTML_ESCAPES)


def escape_regex(text: str) -> str:
    """Backslash-escape regex metacharacters so ``text`` matches literally."""
    return _REGEX_METACHARS.sub(r"\\\g<0>", text)


def extract_text_content(html_content: str) -> str:
    """Return the visible text of an HTML fragment with entities decoded."""
    if not html_content:
        return ""
    return BeautifulSoup(html_content, "html.parser").get_text()


# Name used by the workflow layer
extract_plain_text = extract_text_content


def get_preview_text(html_content: str, max_length: int = 200) -> str:
    """Plain text of ``html_content`` cut to ``max_length`` characters plus '...'."""
    text = extract_text_content(html_content)
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
