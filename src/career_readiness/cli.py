"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from career_readiness.cache.market_cache import MarketIntelCache
from career_readiness.clients.llm_client import LLMClient
from career_readiness.clients.search_client import SearchClient
from career_readiness.config import load_config
from career_readiness.errors import ValidationError
from career_readiness.logging.usage_store import UsageStore
from career_readiness.models.profile import ParsedProfile
from career_readiness.parsers.document_parser import extract_document_text
from career_readiness.pipeline.answer_normalizer import normalize_answers, validate_answers
from career_readiness.pipeline.orchestrator import AnalysisOrchestrator

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="career-readiness",
    help="Career readiness analysis: skill gaps, readiness score, week-one plan",
    no_args_is_help=True,
)
console = Console()


def _read_json(path: Path, label: str) -> dict:
    if not path.exists():
        console.print(f"[red]{label} file not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]{label} file is not valid JSON: {e}[/red]")
        raise typer.Exit(1)
    if not isinstance(data, dict):
        console.print(f"[red]{label} file must contain a JSON object[/red]")
        raise typer.Exit(1)
    return data


def _document_text(path: Path | None) -> str | None:
    if path is None:
        return None
    if not path.exists():
        console.print(f"[red]Document not found: {path}[/red]")
        raise typer.Exit(1)
    text = extract_document_text(path.read_bytes(), path.name)
    if not text:
        console.print(f"[yellow]No text extracted from {path.name}[/yellow]")
    return text or None


@app.command()
def analyze(
    answers_file: Path = typer.Argument(help="Assessment answers JSON file"),
    profile: Path = typer.Option(None, "--profile", "-p", help="Parsed profile JSON file"),
    resume_file: Path = typer.Option(None, "--resume-file", help="Resume document (PDF/DOCX/TXT/MD)"),
    linkedin_file: Path = typer.Option(None, "--linkedin-file", help="LinkedIn export document"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the result JSON here"),
    narrative: bool = typer.Option(False, "--narrative", help="Also write a coaching narrative"),
    strict: bool = typer.Option(False, "--strict", help="Fail on role/company count violations"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Skip the market intelligence cache"),
    session: str = typer.Option("cli", "--session", help="Session id recorded in usage logs"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Run a full readiness analysis and print the summary."""
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)
    config = load_config()

    answers = normalize_answers(_read_json(answers_file, "Answers"))
    try:
        validate_answers(answers)
    except ValidationError as e:
        if strict:
            console.print(f"[red]Invalid answers: {e}[/red]")
            raise typer.Exit(1)
        console.print(f"[yellow]Warning: {e}[/yellow]")

    parsed = ParsedProfile.model_validate(_read_json(profile, "Profile")) if profile else ParsedProfile()
    resume_text = _document_text(resume_file)
    linkedin_text = _document_text(linkedin_file)
    if resume_text or linkedin_text:
        parsed = parsed.model_copy(
            update={
                "resume_raw_text": resume_text or parsed.resume_raw_text,
                "linkedin_raw_text": linkedin_text or parsed.linkedin_raw_text,
            }
        )

    cache = None
    if not no_cache:
        cache = MarketIntelCache(db_path=config.cache.resolved_db_path, ttl_days=config.cache.ttl_days)

    llm = LLMClient(timeout=config.llm.timeout, model=config.llm.model, max_retries=config.llm.max_retries)
    search = SearchClient(search_depth=config.search.search_depth)
    if not search.has_credentials:
        console.print("[yellow]TAVILY_API_KEY not set; market intelligence will be skipped.[/yellow]")
    orchestrator = AnalysisOrchestrator.from_config(llm, search, config, cache=cache)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Analyzing...", total=None)

        def on_phase(phase: str, detail: str) -> None:
            progress.update(task, description=detail)

        run = asyncio.run(
            orchestrator.run(
                answers,
                parsed,
                include_narrative=narrative or config.analysis.include_narrative,
                on_phase=on_phase,
            )
        )

    result = run.result
    tokens = llm.get_token_summary()
    searches = search.get_search_count()
    try:
        UsageStore(config.usage.resolved_db_path).record_run(
            run,
            answers,
            token_summary=tokens,
            search_count=searches,
            session_id=session,
        )
    except Exception:
        logger.exception("Failed to save usage log")

    payload = json.dumps(result.to_json_dict(), indent=2, ensure_ascii=False)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload, encoding="utf-8")
        console.print(f"[green]Result saved: {output}[/green]")

    if result.ai_failed:
        console.print(Panel(f"[yellow]{result.ai_failure_reason}[/yellow]", title="Analysis pending"))
        return

    scores = result.readiness_score
    skills = result.skill_match_data
    b = scores.breakdown
    color = "green" if scores.overall >= 70 else "yellow"
    console.print(
        Panel(
            f"[bold {color}]Readiness: {scores.overall}/100[/bold {color}]\n"
            f"Resume {b.resume} | LinkedIn {b.linkedin} | Skills {b.skills_match} | "
            f"Network {b.network} | Experience {b.experience}\n"
            f"Skill match: {skills.match_percentage}% "
            f"({'ATS pass' if skills.ats_pass else 'ATS risk'})\n"
            f"Elapsed: {run.elapsed_seconds:.1f}s",
            title="Readiness",
        )
    )
    insights = result.ai_insights
    console.print(f"\n[bold]Primary gap:[/bold] {insights.primary_gap}")
    console.print(f"[bold]Quick win:[/bold] {insights.quick_win}")
    if skills.missing_critical_skills:
        console.print("\n[yellow]Missing critical skills:[/yellow]")
        for skill in skills.missing_critical_skills:
            console.print(f"  - {skill.name}")
    if run.metadata.get("market_degraded"):
        console.print("[dim]Market intelligence unavailable for this run.[/dim]")
    if output is None and verbose:
        console.print(payload)


@app.command("extract-text")
def extract_text(
    file: Path = typer.Argument(help="PDF, DOCX, TXT or MD document"),
    output: Path = typer.Option(None, "--output", "-o", help="Write text here instead of stdout"),
) -> None:
    """Extract plain text from a resume or LinkedIn export."""
    text = _document_text(file)
    if not text:
        raise typer.Exit(1)
    if output is None:
        console.print(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    console.print(f"[green]Text saved: {output} ({len(text)} chars)[/green]")


@app.command("cache-clear")
def cache_clear() -> None:
    """Delete all cached market intelligence."""
    config = load_config()
    cache = MarketIntelCache(db_path=config.cache.resolved_db_path, ttl_days=config.cache.ttl_days)
    count = cache.clear()
    console.print(f"[green]Cleared {count} cached entries.[/green]")


@app.command("cache-stats")
def cache_stats() -> None:
    """Show market intelligence cache statistics."""
    config = load_config()
    cache = MarketIntelCache(db_path=config.cache.resolved_db_path, ttl_days=config.cache.ttl_days)
    stats = cache.stats()
    console.print(
        f"Total: {stats['total']} | Active: {stats['active']} | Expired: {stats['expired']}"
    )


@app.command()
def usage(
    limit: int = typer.Option(10, "--limit", "-n", help="Number of recent runs to list"),
    session: str = typer.Option(None, "--session", help="Only runs from this session"),
) -> None:
    """Show this month's usage and recent analysis runs."""
    config = load_config()
    store = UsageStore(config.usage.resolved_db_path)
    stats = store.get_monthly_stats()
    avg = stats["avg_readiness_score"]
    console.print(
        Panel(
            f"Runs: {stats['total_runs']} (failed: {stats['failed_runs']}, "
            f"success rate {stats['success_rate']:.0f}%)\n"
            f"Tokens: {stats['total_input_tokens']} in / {stats['total_output_tokens']} out | "
            f"Searches: {stats['total_searches']}\n"
            f"Cost: ${stats['total_cost_usd']:.4f} this month, ${store.get_total_cost():.4f} total\n"
            f"Average readiness: {avg if avg is not None else '-'}",
            title=f"Usage {stats['month']}",
        )
    )

    logs = store.get_logs(session_id=session, limit=limit)
    if not logs:
        return
    table = Table(title="Recent runs")
    table.add_column("When")
    table.add_column("Role")
    table.add_column("Score", justify="right")
    table.add_column("Cost", justify="right")
    table.add_column("Status")
    for log in logs:
        status = "pending" if log.ai_failed else ("degraded" if log.market_degraded else "ok")
        table.add_row(
            log.timestamp.strftime("%Y-%m-%d %H:%M"),
            log.target_role or "-",
            str(log.overall_score) if log.overall_score is not None else "-",
            f"${log.estimated_cost_usd:.4f}",
            status,
        )
    console.print(table)


if __name__ == "__main__":
    app()
