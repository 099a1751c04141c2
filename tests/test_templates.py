"""Tests for highlighted preview rendering."""

from blog_fact_checker.editor.highlighter import apply_suggestion
from blog_fact_checker.templates.renderer import render_preview, save_html


class TestRenderPreview:
    def test_embeds_content_unescaped(self, price_suggestion):
        annotated = apply_suggestion("<p>The Price is $29</p>", price_suggestion)
        html = render_preview(annotated, title="Pricing")
        assert annotated in html
        assert ".highlight-change" in html
        assert "1 highlighted change " in html

    def test_title_is_escaped(self):
        html = render_preview("<p>x</p>", title="<script>")
        assert "<title>&lt;script&gt;</title>" in html

    def test_plural_count(self):
        html = render_preview("<p>nothing</p>")
        assert "0 highlighted changes" in html


class TestSaveHtml:
    def test_creates_parent_dirs(self, tmp_path):
        path = save_html("<html></html>", tmp_path / "a" / "b" / "preview.html")
        assert path.read_text(encoding="utf-8") == "<html></html>"
