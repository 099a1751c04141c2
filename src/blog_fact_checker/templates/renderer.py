"""Render annotated post HTML into a standalone highlighted preview page."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from blog_fact_checker.editor.highlighter import HIGHLIGHT_CLASS, count_annotations

TEMPLATES_DIR = Path(__file__).parent


def render_preview(content: str, title: str = "Preview") -> str:
    """Wrap annotated HTML in a page that styles the highlight markers."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
    )
    template = env.get_template("preview.html")
    return template.render(
        content=content,
        title=title,
        highlight_class=HIGHLIGHT_CLASS,
        change_count=count_annotations(content),
    )


def save_html(html_content: str, output_path: str | Path) -> Path:
    """Save HTML content to file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html_content, encoding="utf-8")
    return path
