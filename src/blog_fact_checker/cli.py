"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
import webbrowser
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from blog_fact_checker.clients.llm_client import EmptyReplyError, LLMClient
from blog_fact_checker.clients.webflow_client import WebflowClient, WebflowError
from blog_fact_checker.config import AppConfig, load_config
from blog_fact_checker.models.suggestion import Suggestion
from blog_fact_checker.pipeline.fact_checker import FactChecker
from blog_fact_checker.pipeline.review_session import (
    NoSelectionError,
    NoSuggestionsError,
    ReviewWorkflow,
)
from blog_fact_checker.storage.credential_store import CredentialStore
from blog_fact_checker.templates.renderer import render_preview, save_html
from blog_fact_checker.utils.html_text import get_preview_text

app = typer.Typer(
    name="blog-fact-checker",
    help="Fact-check Webflow blog posts and publish highlighted corrections",
    no_args_is_help=True,
)
console = Console()

SESSION_FILE = "session.json"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _webflow_client(config: AppConfig) -> WebflowClient:
    creds = CredentialStore(config.credentials.resolved_db_path).get()
    return WebflowClient(
        creds.api_token,
        creds.collection_id,
        api_base=config.webflow.api_base,
        timeout=config.webflow.timeout,
    )


def _load_workflow(session: Path) -> ReviewWorkflow:
    if session.is_dir():
        session = session / SESSION_FILE
    if not session.exists():
        _fail(f"Session file not found: {session}")
    return ReviewWorkflow.load(session)


def _session_path(session: Path) -> Path:
    return session / SESSION_FILE if session.is_dir() else session


def _suggestion_table(suggestions: list[Suggestion], selected: set[str]) -> Table:
    table = Table(title="Suggestions", show_lines=True)
    table.add_column("#", justify="right")
    table.add_column("Apply", justify="center")
    table.add_column("Priority")
    table.add_column("Type")
    table.add_column("Original")
    table.add_column("Suggested")
    table.add_column("Reason", style="dim")
    for i, s in enumerate(suggestions, 1):
        table.add_row(
            str(i),
            "[green]✓[/green]" if s.id in selected else "",
            f"[{s.severity_color}]{s.severity_label}[/{s.severity_color}]",
            s.type,
            f"[red]{s.original}[/red]",
            f"[green]{s.suggested}[/green]",
            s.reason,
        )
    return table


def _parse_indexes(select: str) -> list[int]:
    try:
        return [int(part) for part in select.replace(" ", "").split(",") if part]
    except ValueError:
        _fail(f"--select expects comma-separated numbers, got {select!r}")
        return []


@app.command()
def settings(
    token: str = typer.Option(None, "--token", help="Webflow API token"),
    collection: str = typer.Option(None, "--collection", help="Webflow blog collection ID"),
    clear: bool = typer.Option(False, "--clear", help="Delete stored credentials"),
) -> None:
    """Webflow credentials: save with --token/--collection, or show current."""
    config = load_config()
    store = CredentialStore(config.credentials.resolved_db_path)

    if clear:
        deleted = store.clear()
        console.print(f"[green]Removed {deleted} stored values.[/green]")
        return

    if token or collection:
        if not (token and collection):
            _fail("Both --token and --collection are required.")
        store.save(token, collection)
        console.print("[green]Credentials saved.[/green]")

    creds = store.get()
    console.print(Panel(
        f"API token: {creds.masked_token}\n"
        f"Collection ID: {creds.collection_id or '(not set)'}",
        title="Webflow credentials",
    ))


@app.command()
def fetch(
    url: str = typer.Argument(help="Published URL of the blog post"),
    output: Path = typer.Option(None, "--output", "-o", help="Session directory"),
) -> None:
    """Fetch a post and write the fact-check prompt."""
    config = load_config()
    try:
        client = _webflow_client(config)
        with console.status("Fetching post from Webflow..."):
            post = asyncio.run(
                client.fetch_blog_by_url(url, content_field=config.webflow.content_field)
            )
    except (WebflowError, ValueError) as exc:
        _fail(str(exc))

    workflow = ReviewWorkflow.start(post)
    out_dir = output or config.editor.resolved_output_dir / post.slug
    session_path = workflow.save(out_dir / SESSION_FILE)
    prompt_path = out_dir / "prompt.txt"
    prompt_path.write_text(workflow.session.prompt, encoding="utf-8")

    console.print(Panel(
        f"[bold]{post.name}[/bold]{' [dim](draft)[/dim]' if post.is_draft else ''}\n"
        f"{get_preview_text(post.content, config.editor.preview_length)}",
        title="Post",
    ))
    console.print(f"[green]Session: {session_path}[/green]")
    console.print(f"[green]Prompt: {prompt_path}[/green]")
    console.print(
        "[dim]Paste the prompt into Claude, save the reply to a file, then run "
        f"`blog-fact-checker review {out_dir} --response reply.txt`.[/dim]"
    )


@app.command()
def analyze(
    session: Path = typer.Argument(help="Session file or directory"),
) -> None:
    """Run the prompt through the Claude API and store the reply."""
    config = load_config()
    workflow = _load_workflow(session)

    llm = LLMClient.from_config(config.llm)
    checker = FactChecker(llm)
    try:
        with console.status("Waiting for Claude..."):
            reply = asyncio.run(checker.analyze(workflow.session.prompt))
    except EmptyReplyError as exc:
        _fail(str(exc))

    reply_path = _session_path(session).parent / "reply.txt"
    reply_path.write_text(reply, encoding="utf-8")
    usage = llm.get_token_summary()
    console.print(f"[green]Reply saved: {reply_path}[/green]")
    console.print(f"[dim]Tokens: {usage['input']} in / {usage['output']} out[/dim]")


@app.command()
def review(
    session: Path = typer.Argument(help="Session file or directory"),
    response: Path = typer.Option(..., "--response", "-r", help="File with the assistant's reply"),
    select: str = typer.Option(None, "--select", "-s", help="Suggestion numbers to apply, e.g. 1,3,4"),
    min_severity: str = typer.Option(
        None, "--min-severity", help="Apply only suggestions at or above: high, medium, low"
    ),
) -> None:
    """Parse the reply, choose suggestions, and write the highlighted HTML."""
    if not response.exists():
        _fail(f"Reply file not found: {response}")
    if min_severity and min_severity not in ("high", "medium", "low"):
        _fail("--min-severity must be one of: high, medium, low")

    workflow = _load_workflow(session)
    try:
        workflow.load_response(response.read_text(encoding="utf-8"))
    except NoSuggestionsError as exc:
        _fail(str(exc))

    if select:
        workflow.select_by_index(_parse_indexes(select))
    elif min_severity:
        workflow.select_by_severity(min_severity)

    console.print(_suggestion_table(workflow.suggestions, set(workflow.session.selected_ids)))

    try:
        annotated = workflow.apply()
    except NoSelectionError as exc:
        _fail(str(exc))

    session_path = workflow.save(_session_path(session))
    out_dir = session_path.parent
    annotated_path = out_dir / "annotated.html"
    annotated_path.write_text(annotated, encoding="utf-8")
    save_html(render_preview(annotated, title=workflow.session.post.name), out_dir / "preview.html")

    selected = len(workflow.session.selected_ids)
    if workflow.has_changes:
        console.print(
            f"[green]{workflow.change_count} highlights from {selected} selected suggestions: "
            f"{annotated_path}[/green]"
        )
    else:
        console.print(
            "[yellow]None of the selected suggestions matched the post text.[/yellow]"
        )
    console.print(
        "[dim]Edit annotated.html if needed, then run "
        f"`blog-fact-checker publish {out_dir} --content {annotated_path}`.[/dim]"
    )


@app.command()
def preview(
    session: Path = typer.Argument(help="Session file or directory"),
    content: Path = typer.Option(None, "--content", help="Edited HTML to preview instead"),
) -> None:
    """Open the highlighted changes in a browser."""
    workflow = _load_workflow(session)
    if content is not None:
        if not content.exists():
            _fail(f"File not found: {content}")
        workflow.set_content(content.read_text(encoding="utf-8"))

    html_path = save_html(
        render_preview(workflow.session.content, title=workflow.session.post.name),
        _session_path(session).parent / "preview.html",
    )
    console.print(f"[green]Preview: {html_path}[/green]")
    webbrowser.open(html_path.resolve().as_uri())


@app.command()
def publish(
    session: Path = typer.Argument(help="Session file or directory"),
    content: Path = typer.Option(None, "--content", help="Edited annotated HTML to publish"),
    no_publish: bool = typer.Option(False, "--no-publish", help="Update the item but leave it unpublished"),
) -> None:
    """Remove highlights, update the post in Webflow, and publish it."""
    config = load_config()
    workflow = _load_workflow(session)
    if content is not None:
        if not content.exists():
            _fail(f"File not found: {content}")
        workflow.set_content(content.read_text(encoding="utf-8"))

    if not workflow.has_changes and workflow.session.content == workflow.session.post.content:
        _fail("No changes to publish. Run `review` first.")

    final = workflow.finalize()
    final_path = _session_path(session).parent / "final.html"
    final_path.write_text(final, encoding="utf-8")

    post = workflow.session.post
    try:
        client = _webflow_client(config)
        with console.status("Updating post in Webflow..."):
            asyncio.run(client.update_blog_post(post.id, final, config.webflow.content_field))
            if not no_publish:
                asyncio.run(client.publish_blog_post(post.id))
    except WebflowError as exc:
        _fail(str(exc))

    workflow.set_content(final)
    workflow.save(_session_path(session))
    status = "updated" if no_publish else "updated and published"
    console.print(Panel(
        f"[bold]{post.name}[/bold] {status}.\nFinal HTML: {final_path}",
        title="Done",
        border_style="green",
    ))


if __name__ == "__main__":
    app()
