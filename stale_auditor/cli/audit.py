"""CLI commands for auditing stale issues."""

import asyncio
import json
import logging
import time

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import AuditSettings
from ..errors import MaintainerFetchError
from ..github_client.client import GitHubClient
from ..runner import AuditSummary, run_audit
from ..staleness.models import ErrorVerdict, StalenessVerdict
from ..staleness.service import IssueStateService
from .options import (
    CONCURRENCY_OPTION,
    ISSUE_NUMBER_OPTION,
    JSON_OPTION,
    MODEL_OPTION,
    OWNER_OPTION,
    REPO_OPTION,
    SINGLE_ISSUE_ARGUMENT,
    TOKEN_OPTION,
    VERBOSE_OPTION,
)

console = Console()


def configure_logging(verbose: bool) -> None:
    """Route log records through rich, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )
    # Keep HTTP client chatter out of the audit log
    logging.getLogger("httpx").setLevel(logging.WARNING)


def load_settings(**overrides: object) -> AuditSettings:
    """Load settings and validate what is needed for GitHub access."""
    try:
        settings = AuditSettings.from_env(**overrides)
        settings.validate_for_network()
    except ValueError as e:
        console.print(f"❌ [red]Error: {e}[/red]")
        raise typer.Exit(1)
    return settings


def print_summary(summary: AuditSummary, elapsed: float) -> None:
    table = Table(title="Stale Audit Summary")
    table.add_column("Issue", style="cyan")
    table.add_column("Duration", style="green")
    table.add_column("API calls", style="green")
    table.add_column("Outcome", style="yellow")

    for stats in summary.issues:
        outcome = (
            f"[red]{stats.error}[/red]" if stats.error else (stats.decision or "")
        )
        table.add_row(
            f"#{stats.issue_number}",
            f"{stats.duration:.2f}s",
            str(stats.api_calls),
            outcome,
        )

    console.print(table)
    console.print(
        f"[blue]Processed {summary.processed} issues "
        f"({summary.failed} failed), {summary.total_api_calls} API calls, "
        f"{summary.average_seconds:.2f}s per issue on average.[/blue]"
    )
    console.print(f"[blue]Full audit finished in {elapsed / 60:.2f} minutes.[/blue]")


def run(
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    issue_number: list[int] | None = ISSUE_NUMBER_OPTION,
    model: str | None = MODEL_OPTION,
    concurrency: int | None = CONCURRENCY_OPTION,
    token: str | None = TOKEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Audit open issues and let the agent label, alert or close them.

    Without --issue-number, every open issue older than the stale threshold
    is audited.

    Examples:
        # Audit every candidate issue
        stale-auditor run --owner myorg --repo myrepo

        # Audit two specific issues with a different model
        stale-auditor run -o myorg -r myrepo -i 12 -i 34 -m openai:gpt-4o-mini
    """
    configure_logging(verbose)
    settings = load_settings(
        owner=owner,
        repo=repo,
        llm_model_name=model,
        concurrency_limit=concurrency,
        github_token=token,
    )

    start = time.perf_counter()
    try:
        summary = asyncio.run(
            run_audit(settings, issue_numbers=list(issue_number or []) or None)
        )
    except MaintainerFetchError as e:
        console.print(f"❌ [red]FATAL: {e}[/red]")
        raise typer.Exit(1)

    print_summary(summary, time.perf_counter() - start)


def print_verdict(issue_number: int, verdict: StalenessVerdict) -> None:
    table = Table(title=f"Issue #{issue_number}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    for name, value in verdict.model_dump(mode="json").items():
        if isinstance(value, float):
            value = f"{value:.2f}"
        elif isinstance(value, list):
            value = ", ".join(value) or "-"
        table.add_row(name, str(value) if value is not None else "-")

    console.print(table)


def state(
    issue_number: int = SINGLE_ISSUE_ARGUMENT,
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    token: str | None = TOKEN_OPTION,
    as_json: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the staleness verdict of one issue without running the agent."""
    configure_logging(verbose)
    settings = load_settings(owner=owner, repo=repo, github_token=token)

    service = IssueStateService(GitHubClient(settings.github_token or ""), settings)
    try:
        verdict = asyncio.run(service.evaluate(issue_number))
    except MaintainerFetchError as e:
        console.print(f"❌ [red]FATAL: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(verdict.model_dump(mode="json")))
    elif isinstance(verdict, ErrorVerdict):
        console.print(f"❌ [red]{verdict.message}[/red]")
    else:
        print_verdict(issue_number, verdict)

    if isinstance(verdict, ErrorVerdict):
        raise typer.Exit(1)
