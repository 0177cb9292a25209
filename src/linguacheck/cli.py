"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from linguacheck.cache.result_cache import ResultCache
from linguacheck.clients.llm_client import LLMClient
from linguacheck.config import AppConfig, load_config
from linguacheck.editor.segmenter import segment_text
from linguacheck.errors import DocumentParseError
from linguacheck.logging.usage_store import UsageStore
from linguacheck.models.correction import FlaggedWord
from linguacheck.models.language import Language, Tone
from linguacheck.parsers.document_parser import parse_document
from linguacheck.pipeline.content_checker import ContentChecker
from linguacheck.pipeline.content_suggester import ContentSuggester
from linguacheck.pipeline.document_session import DocumentSession
from linguacheck.pipeline.orchestrator import Notice, RequestStatus, SuggestionOrchestrator

app = typer.Typer(
    name="linguacheck",
    help="AI grammar checking and content suggestions (English, Hindi, Gujarati)",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_notice(notice: Notice) -> None:
    color = "red" if notice.level == "error" else "yellow"
    console.print(f"[{color}]{notice.title}: {notice.message}[/{color}]")


def _read_input(text: str | None, file: Path | None) -> str:
    if text is not None:
        return text
    if file is None:
        console.print("[red]Pass --text or a file path.[/red]")
        raise typer.Exit(1)
    try:
        return parse_document(file)
    except DocumentParseError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e


def _build_llm(config: AppConfig) -> LLMClient:
    return LLMClient(
        timeout=config.llm.timeout,
        model=config.llm.model,
        max_tokens=config.llm.max_tokens,
        max_retries=config.llm.max_retries,
    )


def _build_orchestrator(config: AppConfig, use_cache: bool) -> SuggestionOrchestrator:
    llm = _build_llm(config)
    cache = None
    if use_cache and config.cache.enabled:
        cache = ResultCache(db_path=config.cache.resolved_db_path, ttl_days=config.cache.ttl_days)
    usage = UsageStore(config.usage.resolved_db_path) if config.usage.enabled else None
    return SuggestionOrchestrator(
        ContentChecker(llm, model=config.llm.model),
        ContentSuggester(llm, model=config.llm.model),
        min_words=config.suggestions.min_words,
        quiet_period=config.suggestions.quiet_period_seconds,
        cache=cache,
        usage_store=usage,
        session_id="cli",
        on_notice=_print_notice,
    )


def _highlight(text: str, flags: list[FlaggedWord]) -> str:
    """Rich markup with every flagged segment underlined."""
    parts = []
    for segment in segment_text(text, flags):
        if segment.has_suggestions:
            parts.append(f"[bold yellow underline]{escape(segment.text)}[/bold yellow underline]")
        else:
            parts.append(escape(segment.text))
    return "".join(parts)


@app.command()
def check(
    file: Path = typer.Argument(None, help="Text, Markdown, DOCX or PDF file to check"),
    text: str = typer.Option(None, "--text", help="Check this text instead of a file"),
    language: Language = typer.Option(Language.ENGLISH, "--language", "-l"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Always call the AI backend"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Check grammar and spelling, then show the corrected text and flagged words."""
    _setup_logging(verbose)
    content = _read_input(text, file)
    orchestrator = _build_orchestrator(load_config(), use_cache=not no_cache)

    with console.status("Checking..."):
        state = asyncio.run(orchestrator.check_grammar(content, language))
    if state.result is None:
        raise typer.Exit(1)

    result = state.result
    console.print(Panel(_highlight(content, result.suggestions), title="Your text"))
    console.print(Panel(escape(result.corrected_content), title="Corrected"))

    if result.suggestions:
        table = Table(title="Suggestions")
        table.add_column("Word", style="bold yellow")
        table.add_column("Suggestions")
        for flag in result.suggestions:
            table.add_row(escape(flag.word), escape(", ".join(flag.suggestions) or "-"))
        console.print(table)
    elif state.status is RequestStatus.RESOLVED:
        console.print("[green]No issues found.[/green]")


@app.command()
def suggest(
    file: Path = typer.Argument(None, help="File with the text to enhance"),
    text: str = typer.Option(None, "--text", help="Enhance this text instead of a file"),
    language: Language = typer.Option(Language.ENGLISH, "--language", "-l"),
    tone: Tone = typer.Option(None, "--tone", "-t", help="Style/tone of the suggestions"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Always call the AI backend"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Generate enhanced versions of the text, best first."""
    _setup_logging(verbose)
    content = _read_input(text, file)
    orchestrator = _build_orchestrator(load_config(), use_cache=not no_cache)

    with console.status("Generating suggestions..."):
        state = asyncio.run(orchestrator.suggest_content(content, language, tone))
    if state.result is None or not state.result.suggestions:
        raise typer.Exit(1)

    for i, suggestion in enumerate(state.result.suggestions, start=1):
        console.print(Panel(escape(suggestion), title=f"Suggestion {i}"))


@app.command()
def document(
    file: Path = typer.Argument(help="Document to review paragraph by paragraph"),
    language: Language = typer.Option(Language.ENGLISH, "--language", "-l"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the corrected document here"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Check every paragraph of a document, one paragraph at a time."""
    _setup_logging(verbose)
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)

    config = load_config()
    if file.stat().st_size > config.document.max_upload_bytes:
        console.print(f"[red]File is larger than {config.document.max_upload_mb}MB.[/red]")
        raise typer.Exit(1)
    extracted = _read_input(None, file)

    llm = _build_llm(config)
    session = DocumentSession.from_text(
        extracted,
        ContentChecker(llm, model=config.llm.model),
        language,
        on_notice=_print_notice,
    )
    if not session.paragraphs:
        console.print("[yellow]No paragraphs found in the document.[/yellow]")
        raise typer.Exit(1)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task(f"Checking {len(session.paragraphs)} paragraphs...", total=None)
        asyncio.run(session.check_all())
        progress.update(task, description="Done")

    table = Table(title=f"{file.name}: {session.checked_count}/{len(session.paragraphs)} checked")
    table.add_column("#", justify="right")
    table.add_column("Paragraph")
    table.add_column("Issues", justify="right")
    for item in session.paragraphs:
        if item.error:
            issues = "[red]failed[/red]"
        else:
            issues = str(len(item.check_result.suggestions)) if item.check_result else "-"
        preview = item.original_text if len(item.original_text) <= 60 else item.original_text[:57] + "..."
        table.add_row(item.id.removeprefix("para_"), escape(preview), issues)
    console.print(table)

    if output is not None:
        for item in session.paragraphs:
            session.apply_correction(item.id)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(session.combined_text() + "\n", encoding="utf-8")
        console.print(f"[green]Corrected document saved: {output}[/green]")


@app.command("cache-clear")
def cache_clear() -> None:
    """Delete every cached check result."""
    config = load_config()
    cache = ResultCache(db_path=config.cache.resolved_db_path, ttl_days=config.cache.ttl_days)
    removed = cache.clear()
    console.print(f"[green]Removed {removed} cached results.[/green]")


@app.command()
def usage() -> None:
    """Show this month's usage statistics."""
    config = load_config()
    stats = UsageStore(config.usage.resolved_db_path).get_monthly_stats()
    avg = stats["avg_elapsed_seconds"]
    console.print(
        Panel(
            f"Checks: {stats['total_checks']} "
            f"(grammar {stats['grammar_checks']}, suggestions {stats['suggestion_checks']})\n"
            f"Words: {stats['total_words']} | "
            f"Avg time: {avg if avg is not None else '-'}s | "
            f"Success: {stats['success_rate']:.0f}% | "
            f"Stale discarded: {stats['stale_discarded']}",
            title=f"Usage {stats['month']}",
        )
    )


if __name__ == "__main__":
    app()
