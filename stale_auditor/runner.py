"""Batch driver running the audit agent over candidate issues."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from .actions import GitHubIssueActions
from .ai.agents import AuditDeps, stale_audit_agent
from .config import AuditSettings
from .context import AuditRunContext
from .errors import MaintainerFetchError
from .github_client.client import GitHubClient
from .staleness.service import IssueStateService

logger = logging.getLogger(__name__)

# Decision text is truncated to this many characters in the log
DECISION_PREVIEW_CHARS = 150


@dataclass
class IssueRunStats:
    """Timing and cost of auditing one issue."""

    issue_number: int
    duration: float
    api_calls: int
    decision: str | None = None
    error: str | None = None


@dataclass
class AuditSummary:
    """Totals for a complete audit run."""

    search_api_calls: int = 0
    issues: list[IssueRunStats] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.issues)

    @property
    def failed(self) -> int:
        return sum(1 for stats in self.issues if stats.error)

    @property
    def total_api_calls(self) -> int:
        return self.search_api_calls + sum(stats.api_calls for stats in self.issues)

    @property
    def average_seconds(self) -> float:
        if not self.issues:
            return 0.0
        return sum(stats.duration for stats in self.issues) / len(self.issues)


def chunked(items: list[int], size: int) -> list[list[int]]:
    """Split items into consecutive chunks of at most ``size`` elements."""
    return [items[i : i + size] for i in range(0, len(items), size)]


async def audit_issue(
    deps: AuditDeps,
    issue_number: int,
    context: AuditRunContext,
    model: str | None = None,
) -> IssueRunStats:
    """Let the agent audit one issue.

    Any failure other than a maintainer fetch failure is logged and recorded
    on the returned stats. API calls are counted as the counter delta, which
    is approximate while sibling issues run concurrently.

    Raises:
        MaintainerFetchError: If maintainers cannot be verified
    """
    start = time.perf_counter()
    start_calls = context.api_calls.count
    decision = None
    error = None

    logger.info(f"Processing Issue #{issue_number}...")
    try:
        result = await stale_audit_agent.run(
            f"Audit Issue #{issue_number}.",
            deps=deps,
            model=model or deps.settings.llm_model_name,
        )
        decision = result.output
        if decision:
            preview = decision[:DECISION_PREVIEW_CHARS].replace("\n", " ")
            logger.info(f"#{issue_number} Decision: {preview}...")
    except MaintainerFetchError:
        raise
    except Exception as e:
        logger.error(f"Error processing issue #{issue_number}: {e}", exc_info=True)
        error = str(e)

    duration = time.perf_counter() - start
    api_calls = context.api_calls.count - start_calls
    logger.info(
        f"Issue #{issue_number} finished in {duration:.2f}s "
        f"with ~{api_calls} API calls."
    )
    return IssueRunStats(
        issue_number=issue_number,
        duration=duration,
        api_calls=api_calls,
        decision=decision,
        error=error,
    )


async def run_audit(
    settings: AuditSettings,
    model: str | None = None,
    issue_numbers: list[int] | None = None,
    client: GitHubClient | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> AuditSummary:
    """Audit all candidate issues of the configured repository.

    Candidates are open issues older than the stale threshold unless
    ``issue_numbers`` is given. Issues are processed in chunks of
    ``settings.concurrency_limit`` with a pause between chunks.

    Args:
        settings: Auditor settings
        model: PydanticAI model override
        issue_numbers: Explicit issues to audit instead of searching
        client: GitHub client (built from settings when omitted)
        sleep: Awaitable used for the pause between chunks

    Returns:
        AuditSummary of the run

    Raises:
        MaintainerFetchError: If maintainers cannot be verified
    """
    if client is None:
        context = AuditRunContext()
        client = GitHubClient(settings.github_token or "", counter=context.api_calls)
    else:
        context = AuditRunContext(api_calls=client.counter)

    deps = AuditDeps(
        settings=settings,
        state_service=IssueStateService(client, settings, context),
        issue_actions=GitHubIssueActions(client, settings.owner, settings.repo),
    )

    logger.info(f"--- Starting stale audit for {settings.repository} ---")
    logger.info(f"Concurrency level set to {settings.concurrency_limit}")

    if issue_numbers is None:
        issue_numbers = await client.find_old_open_issue_numbers(
            settings.owner, settings.repo, settings.stale_threshold_days
        )

    summary = AuditSummary(search_api_calls=context.api_calls.count)
    if not issue_numbers:
        logger.info("No issues matched the criteria. Run finished.")
        return summary

    logger.info(
        f"Found {len(issue_numbers)} issues to process "
        f"(initial search used {summary.search_api_calls} API calls)."
    )

    chunks = chunked(issue_numbers, settings.concurrency_limit)
    for chunk_index, chunk in enumerate(chunks, 1):
        logger.info(f"--- Starting chunk {chunk_index}: issues {chunk} ---")

        results = await asyncio.gather(
            *(audit_issue(deps, number, context, model) for number in chunk)
        )
        summary.issues.extend(results)

        logger.info(
            f"--- Finished chunk {chunk_index}. "
            f"Progress: {summary.processed}/{len(issue_numbers)} ---"
        )

        if chunk_index < len(chunks):
            logger.debug(
                f"Sleeping for {settings.sleep_between_chunks}s "
                "to respect rate limits..."
            )
            await sleep(settings.sleep_between_chunks)

    logger.info("--- Stale audit run finished ---")
    logger.info(f"Processed {summary.processed} issues ({summary.failed} failed).")
    logger.info(f"Total API calls made this run: {summary.total_api_calls}")
    logger.info(
        f"Average processing time per issue: {summary.average_seconds:.2f} seconds."
    )
    return summary
