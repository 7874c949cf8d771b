"""Standardized CLI option definitions for consistent shorthand mappings.

Option defaults are None so that unset options fall back to environment
configuration (see ``AuditSettings.from_env``).
"""

import typer

OWNER_OPTION = typer.Option(
    None, "--owner", "-o", help="Repository owner (defaults to OWNER env var)"
)

REPO_OPTION = typer.Option(
    None, "--repo", "-r", help="Repository name (defaults to REPO env var)"
)

ISSUE_NUMBER_OPTION = typer.Option(
    None,
    "--issue-number",
    "-i",
    help="Audit only this issue (can be used multiple times)",
)

SINGLE_ISSUE_ARGUMENT = typer.Argument(..., help="Issue number to evaluate")

MODEL_OPTION = typer.Option(
    None,
    "--model",
    "-m",
    help="AI model to use (defaults to LLM_MODEL_NAME env var)",
)

CONCURRENCY_OPTION = typer.Option(
    None, "--concurrency", help="Number of issues audited concurrently"
)

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

JSON_OPTION = typer.Option(False, "--json", help="Print the verdict as JSON")

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
