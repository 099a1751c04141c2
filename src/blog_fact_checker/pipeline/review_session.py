"""Review workflow: reply text -> selected suggestions -> annotated -> final HTML."""

from __future__ import annotations

import logging
from pathlib import Path

from blog_fact_checker.editor.highlighter import (
    apply_suggestions,
    count_annotations,
    strip_annotations,
)
from blog_fact_checker.models.blog import BlogPost
from blog_fact_checker.models.session import ReviewSession
from blog_fact_checker.models.suggestion import Severity, Suggestion
from blog_fact_checker.parsers.suggestion_parser import (
    parse_suggestions,
    validate_suggestions,
)
from blog_fact_checker.pipeline.fact_checker import build_prompt_for_post

logger = logging.getLogger(__name__)


class NoSuggestionsError(ValueError):
    """The reply contained no usable suggestions; the user should retry."""

    def __init__(self) -> None:
        super().__init__(
            "No valid suggestions found in the response. Please make sure the "
            "assistant provided corrections in the requested format."
        )


class NoSelectionError(ValueError):
    def __init__(self) -> None:
        super().__init__("Please select at least one suggestion to apply")


class ReviewWorkflow:
    """Drive one post through the parse / select / apply / strip steps."""

    def __init__(self, session: ReviewSession):
        self.session = session

    @classmethod
    def start(cls, post: BlogPost) -> ReviewWorkflow:
        session = ReviewSession(
            post=post,
            prompt=build_prompt_for_post(post),
            content=post.content,
        )
        return cls(session)

    @classmethod
    def load(cls, path: str | Path) -> ReviewWorkflow:
        data = Path(path).read_text(encoding="utf-8")
        return cls(ReviewSession.model_validate_json(data))

    def save(self, path: str | Path) -> Path:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(self.session.model_dump_json(indent=2), encoding="utf-8")
        return p

    @property
    def suggestions(self) -> list[Suggestion]:
        return self.session.suggestions

    def load_response(self, raw_text: str) -> list[Suggestion]:
        """Parse and validate an assistant reply; selects everything by default.

        Raises NoSuggestionsError when nothing survives validation.
        """
        suggestions = validate_suggestions(parse_suggestions(raw_text))
        if not suggestions:
            raise NoSuggestionsError()
        self.session = self.session.model_copy(update={
            "response_text": raw_text,
            "suggestions": suggestions,
            "selected_ids": [s.id for s in suggestions],
        })
        logger.info("Loaded %d suggestions for %r", len(suggestions), self.session.post.name)
        return suggestions

    def select(self, ids: list[str]) -> list[Suggestion]:
        """Select suggestions by id; unknown ids are ignored."""
        known = {s.id for s in self.suggestions}
        self.session.selected_ids = [i for i in ids if i in known]
        return self.session.selected

    def select_by_index(self, indexes: list[int]) -> list[Suggestion]:
        """Select by 1-based position in the suggestion list."""
        ids = [
            self.suggestions[i - 1].id
            for i in indexes
            if 1 <= i <= len(self.suggestions)
        ]
        return self.select(ids)

    def select_by_severity(self, minimum: Severity) -> list[Suggestion]:
        return self.select([s.id for s in self.suggestions if s.meets_severity(minimum)])

    def apply(self) -> str:
        """Annotate the original post content with the selected suggestions."""
        selected = self.session.selected
        if not selected:
            raise NoSelectionError()
        annotated = apply_suggestions(self.session.post.content, selected)
        self.session.content = annotated
        applied = count_annotations(annotated)
        logger.info("Applied %d selected suggestions (%d highlights)", len(selected), applied)
        return annotated

    def set_content(self, content: str) -> None:
        """Replace the working content, e.g. after manual edits."""
        self.session.content = content

    @property
    def change_count(self) -> int:
        return count_annotations(self.session.content)

    @property
    def has_changes(self) -> bool:
        return self.change_count > 0

    def finalize(self) -> str:
        """Publishable HTML with every highlight removed."""
        return strip_annotations(self.session.content)
