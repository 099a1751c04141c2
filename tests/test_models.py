"""Tests for Pydantic data models."""

import pytest
from pydantic import ValidationError

from blog_fact_checker.models.blog import BlogPost
from blog_fact_checker.models.session import ReviewSession
from blog_fact_checker.models.suggestion import Suggestion


class TestSuggestion:
    def test_defaults(self):
        s = Suggestion(original="a", suggested="b")
        assert s.reason == ""
        assert s.severity == "medium"
        assert s.type == "other"
        assert s.id

    def test_ids_are_unique(self):
        assert Suggestion(original="a", suggested="b").id != Suggestion(original="a", suggested="b").id

    def test_frozen(self, price_suggestion):
        with pytest.raises(ValidationError):
            price_suggestion.original = "changed"

    def test_rejects_unknown_severity(self):
        with pytest.raises(ValidationError):
            Suggestion(original="a", suggested="b", severity="urgent")

    def test_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            Suggestion(original="a", suggested="b", type="legal")

    def test_display_helpers(self, price_suggestion):
        assert price_suggestion.severity_label == "High Priority"
        assert price_suggestion.severity_color == "red"

    @pytest.mark.parametrize(
        "severity, minimum, expected",
        [
            ("high", "low", True),
            ("medium", "medium", True),
            ("low", "medium", False),
            ("medium", "high", False),
        ],
    )
    def test_meets_severity(self, severity, minimum, expected):
        s = Suggestion(original="a", suggested="b", severity=severity)
        assert s.meets_severity(minimum) is expected

    def test_serialization(self, price_suggestion):
        restored = Suggestion(**price_suggestion.model_dump())
        assert restored == price_suggestion


class TestBlogPost:
    def test_create_minimal(self):
        post = BlogPost(id="1", slug="hello", name="Hello")
        assert post.content == ""
        assert post.field_data == {}
        assert post.is_draft is False


class TestReviewSession:
    def test_selected_follows_suggestion_order(self, sample_post):
        a = Suggestion(original="a", suggested="b")
        c = Suggestion(original="c", suggested="d")
        session = ReviewSession(post=sample_post, suggestions=[a, c], selected_ids=[c.id, a.id])
        assert session.selected == [a, c]

    def test_json_round_trip(self, sample_post, price_suggestion):
        session = ReviewSession(
            post=sample_post,
            suggestions=[price_suggestion],
            selected_ids=[price_suggestion.id],
        )
        restored = ReviewSession.model_validate_json(session.model_dump_json())
        assert restored.suggestions == [price_suggestion]
        assert restored.post == sample_post
