"""Parse free-form fact-check replies into structured suggestions.

The assistant is asked to answer in a fixed format::

    MUST FIX (high priority):
    1. Wrong price - Change "$29" to "$59" because the pricing table shows $59

but nothing enforces it, so extraction is best-effort: section headers set the
severity for the lines below them, each remaining line is tried against an
ordered list of matchers, and lines nothing recognises are dropped.
"""

from __future__ import annotations

import logging
import re
from functools import reduce
from typing import Callable, NamedTuple

from blog_fact_checker.models.suggestion import Severity, Suggestion, SuggestionType

logger = logging.getLogger(__name__)

MIN_LINE_LENGTH = 5

# Checked in order; a header naming several tiers takes the most urgent one.
SEVERITY_KEYWORDS: tuple[tuple[Severity, tuple[str, ...]], ...] = (
    ("high", ("MUST FIX", "CRITICAL", "HIGH PRIORITY")),
    ("medium", ("SHOULD FIX", "MEDIUM PRIORITY", "IMPORTANT")),
    ("low", ("CONSIDER", "LOW PRIORITY", "MINOR")),
)

TYPE_KEYWORDS: tuple[tuple[SuggestionType, tuple[str, ...]], ...] = (
    ("factual", ("factual", "incorrect", "wrong")),
    ("grammar", ("grammar", "spelling", "typo")),
    ("clarity", ("clarity", "confusing", "unclear")),
    ("style", ("style", "tone")),
)

_HEADER_RE = re.compile(
    r"^[#*_\s]*(MUST FIX|SHOULD FIX|CONSIDER|HIGH PRIORITY|MEDIUM PRIORITY"
    r"|LOW PRIORITY|CRITICAL|IMPORTANT|MINOR)\b",
    re.IGNORECASE,
)
_MARKERS_ONLY_RE = re.compile(r"^[\d.\-*()•]+$")
_LEADING_MARKERS_RE = re.compile(r"^[\d.\-*()•]+\s*")
_CURLY_QUOTES = str.maketrans({"“": '"', "”": '"'})

# Fragment building blocks shared by the matchers
_Q = r"[\"']"
_FRAG = r"([^\"']+)"
_DASH = r"[-–—]"

_CHANGE_TO_RE = re.compile(
    rf"change\s+{_Q}{_FRAG}{_Q}\s+to\s+{_Q}{_FRAG}{_Q}\s*(?:because|{_DASH})\s*(.+)",
    re.IGNORECASE,
)
_QUOTED_TO_RE = re.compile(
    rf"{_Q}{_FRAG}{_Q}\s+to\s+{_Q}{_FRAG}{_Q}\s*{_DASH}\s*(.+)",
    re.IGNORECASE,
)
_SHOULD_BE_RE = re.compile(
    rf"{_Q}{_FRAG}{_Q}\s+should\s+be\s+{_Q}{_FRAG}{_Q}\s*(?:\((.+)\))?",
    re.IGNORECASE,
)
_REASON_ARROW_RE = re.compile(
    rf"(.+?)\s*{_DASH}\s*{_Q}{_FRAG}{_Q}\s*(?:->|→|to)\s*{_Q}{_FRAG}{_Q}",
    re.IGNORECASE,
)
_QUOTED_FRAGMENT_RE = re.compile(rf"{_Q}{_FRAG}{_Q}")


class Extraction(NamedTuple):
    original: str
    suggested: str
    reason: str


class _ParseState(NamedTuple):
    severity: Severity
    header: str
    suggestions: tuple[Suggestion, ...]


def _match_change_to(line: str) -> Extraction | None:
    """Change "A" to "B" because reason / Change "A" to "B" - reason"""
    m = _CHANGE_TO_RE.search(line)
    if m:
        return Extraction(m.group(1), m.group(2), m.group(3))
    return None


def _match_quoted_to(line: str) -> Extraction | None:
    """ "A" to "B" - reason"""
    m = _QUOTED_TO_RE.search(line)
    if m:
        return Extraction(m.group(1), m.group(2), m.group(3))
    return None


def _match_should_be(line: str) -> Extraction | None:
    """ "A" should be "B" (reason)"""
    m = _SHOULD_BE_RE.search(line)
    if m:
        return Extraction(m.group(1), m.group(2), m.group(3) or "")
    return None


def _match_reason_arrow(line: str) -> Extraction | None:
    """reason - "A" -> "B" """
    m = _REASON_ARROW_RE.search(line)
    if m:
        return Extraction(m.group(2), m.group(3), m.group(1))
    return None


def _match_quoted_pair(line: str) -> Extraction | None:
    """Fallback: first two quoted fragments, rest of the line as the reason.

    Misfires on lines that quote something unrelated (a product name next to
    the correction); there is no way to tell the two apart here.
    """
    fragments = _QUOTED_FRAGMENT_RE.findall(line)
    if len(fragments) < 2:
        return None
    reason = _QUOTED_FRAGMENT_RE.sub("", line)
    return Extraction(fragments[0], fragments[1], reason)


MATCHERS: tuple[Callable[[str], Extraction | None], ...] = (
    _match_change_to,
    _match_quoted_to,
    _match_should_be,
    _match_reason_arrow,
    _match_quoted_pair,
)


def extract_fragments(line: str) -> Extraction | None:
    """Run the matchers in priority order; the first hit wins."""
    for matcher in MATCHERS:
        result = matcher(line)
        if result is not None:
            return Extraction(*(part.strip() for part in result))
    return None


def determine_severity(text: str) -> Severity:
    upper = text.upper()
    for severity, keywords in SEVERITY_KEYWORDS:
        if any(k in upper for k in keywords):
            return severity
    return "medium"


def infer_type(text: str) -> SuggestionType:
    lower = text.lower()
    for suggestion_type, keywords in TYPE_KEYWORDS:
        if any(k in lower for k in keywords):
            return suggestion_type
    return "other"


def is_section_header(line: str) -> bool:
    """Section headers start with a severity term and carry no quoted edit."""
    if not _HEADER_RE.match(line):
        return False
    return len(_QUOTED_FRAGMENT_RE.findall(line)) < 2


def normalize_line(line: str) -> str:
    """Drop enumeration markers and straighten typographic double quotes."""
    line = _LEADING_MARKERS_RE.sub("", line.strip())
    return line.translate(_CURLY_QUOTES)


def _consume_line(state: _ParseState, raw_line: str) -> _ParseState:
    line = raw_line.strip()
    if not line:
        return state

    if is_section_header(line):
        return state._replace(severity=determine_severity(line), header=line)

    if _MARKERS_ONLY_RE.match(line):
        return state

    cleaned = normalize_line(line)
    if len(cleaned) < MIN_LINE_LENGTH:
        return state

    extraction = extract_fragments(cleaned)
    if extraction is None or not extraction.original or not extraction.suggested:
        return state

    suggestion_type = infer_type(cleaned)
    if suggestion_type == "other" and state.header:
        suggestion_type = infer_type(state.header)

    # "CONSIDER: change ..." carries its own tier; the section's stays in force.
    inline_header = _HEADER_RE.match(line)
    severity = determine_severity(inline_header.group(1)) if inline_header else state.severity

    suggestion = Suggestion(
        original=extraction.original,
        suggested=extraction.suggested,
        reason=extraction.reason,
        severity=severity,
        type=suggestion_type,
    )
    logger.debug(
        "Parsed %s/%s suggestion: %r -> %r",
        suggestion.severity, suggestion.type, suggestion.original, suggestion.suggested,
    )
    return state._replace(suggestions=state.suggestions + (suggestion,))


def parse_suggestions(raw_text: str) -> list[Suggestion]:
    """Parse an assistant reply into suggestions, in reply order.

    Returns an empty list for empty input or when no line is recognised.
    """
    if not raw_text or not isinstance(raw_text, str):
        return []

    lines = raw_text.splitlines()
    final = reduce(_consume_line, lines, _ParseState("medium", "", ()))
    if not final.suggestions:
        logger.warning("No suggestions recognised in %d lines of input", len(lines))
    else:
        logger.info("Parsed %d suggestions from %d lines", len(final.suggestions), len(lines))
    return list(final.suggestions)


def validate_suggestions(suggestions: list[Suggestion]) -> list[Suggestion]:
    """Keep suggestions with a non-empty original and a different replacement."""
    return [
        s for s in suggestions
        if s.original and s.suggested and s.original != s.suggested
    ]
