"""Apply accepted suggestions to blog HTML as highlighted edits.

Each replacement is wrapped in a marker span that keeps the displaced text::

    <span class="highlight-change" data-original="$29">$59</span>

Markers are only for in-editor highlighting; ``strip_annotations`` turns an
annotated document back into publishable HTML.

Matching works on ranges of the input document. Tags and existing markers are
claimed up front and every accepted match claims its own range, so a later
(shorter) suggestion can never land inside a tag attribute, inside an earlier
replacement, or across one.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator

from blog_fact_checker.models.suggestion import Suggestion
from blog_fact_checker.utils.html_text import escape_html, escape_regex

logger = logging.getLogger(__name__)

HIGHLIGHT_CLASS = "highlight-change"

_MARKER_OPEN = f'<span class="{HIGHLIGHT_CLASS}"'
_MARKER_OPEN_RE = re.compile(rf'<span class="{HIGHLIGHT_CLASS}"[^>]*>')
_SPAN_TOKEN_RE = re.compile(r"<span\b[^>]*>|</span>")
# A bare "<" in text ("x < 5") is not a tag.
_TAG_RE = re.compile(r"<[A-Za-z/!?][^>]*>")

Span = tuple[int, int]


def build_marker(suggestion: Suggestion) -> str:
    """Marker span carrying the escaped replacement and the escaped original."""
    return (
        f'<span class="{HIGHLIGHT_CLASS}" data-original="{escape_html(suggestion.original)}">'
        f"{escape_html(suggestion.suggested)}</span>"
    )


def _overlaps(span: Span, claimed: Iterable[Span]) -> bool:
    start, end = span
    return any(start < c_end and c_start < end for c_start, c_end in claimed)


def _closing_tag(document: str, pos: int) -> Span | None:
    """Span of the ``</span>`` balancing a span opened just before ``pos``."""
    depth = 1
    for m in _SPAN_TOKEN_RE.finditer(document, pos):
        depth += -1 if m.group() == "</span>" else 1
        if depth == 0:
            return m.span()
    return None


def _marker_spans(document: str, pos: int = 0) -> Iterator[tuple[Span, Span]]:
    """Yield ``(opening, closing)`` tag spans of each balanced marker, outermost first."""
    while True:
        opening = _MARKER_OPEN_RE.search(document, pos)
        if opening is None:
            return
        closing = _closing_tag(document, opening.end())
        if closing is None:
            pos = opening.end()
            continue
        yield opening.span(), closing
        pos = closing[1]


def _protected_spans(document: str) -> list[Span]:
    spans = [(opening[0], closing[1]) for opening, closing in _marker_spans(document)]
    spans.extend(m.span() for m in _TAG_RE.finditer(document))
    return spans


def _find_matches(document: str, suggestion: Suggestion, claimed: list[Span]) -> list[Span]:
    """Unclaimed occurrences of the suggestion's original text.

    Case-sensitive first; the case-insensitive pass only runs when the first
    one produced nothing.
    """
    pattern = escape_regex(escape_html(suggestion.original))
    for flags in (0, re.IGNORECASE):
        spans = [
            m.span()
            for m in re.finditer(pattern, document, flags)
            if not _overlaps(m.span(), claimed)
        ]
        if spans:
            if flags:
                logger.debug("Case-insensitive match for %r", suggestion.original)
            return spans
    return []


def _splice(document: str, replacements: list[tuple[int, int, str]]) -> str:
    parts: list[str] = []
    cursor = 0
    for start, end, fragment in sorted(replacements):
        parts.append(document[cursor:start])
        parts.append(fragment)
        cursor = end
    parts.append(document[cursor:])
    return "".join(parts)


def apply_suggestions(document: str, suggestions: Iterable[Suggestion]) -> str:
    """Wrap every occurrence of each suggestion's original text in a marker.

    Suggestions are applied longest ``original`` first. A suggestion whose
    text is not found (exactly or ignoring case) is skipped; nothing here
    raises for a miss.
    """
    ordered = sorted(suggestions, key=lambda s: len(s.original), reverse=True)
    claimed = _protected_spans(document)
    replacements: list[tuple[int, int, str]] = []

    for suggestion in ordered:
        if not suggestion.original or not suggestion.suggested:
            continue
        spans = _find_matches(document, suggestion, claimed)
        if not spans:
            logger.warning("Original text not found, skipping: %r", suggestion.original)
            continue
        marker = build_marker(suggestion)
        claimed.extend(spans)
        replacements.extend((start, end, marker) for start, end in spans)

    return _splice(document, replacements)


def apply_suggestion(document: str, suggestion: Suggestion) -> str:
    """Apply a single suggestion; returns ``document`` unchanged on a miss."""
    return apply_suggestions(document, [suggestion])


def strip_annotations(document: str) -> str:
    """Unwrap every marker, keeping its inner markup. Idempotent.

    Inner spans (styling added while editing, or a nested marker) are kept
    or unwrapped in turn. A marker with no balancing ``</span>`` is left as is.
    """
    pos = 0
    while True:
        found = next(_marker_spans(document, pos), None)
        if found is None:
            return document
        (open_start, open_end), (close_start, close_end) = found
        document = (
            document[:open_start]
            + document[open_end:close_start]
            + document[close_end:]
        )
        pos = open_start


def count_annotations(document: str) -> int:
    return document.count(_MARKER_OPEN)
