"""PydanticAI agent that audits one issue at a time through tools."""

from dataclasses import dataclass
from typing import Any

from pydantic_ai import Agent, RunContext

from .. import actions
from ..actions import IssueActions
from ..config import AuditSettings
from ..staleness.service import IssueStateService
from .prompts import STALE_AUDIT_PROMPT


@dataclass
class AuditDeps:
    """Dependencies injected into every tool call of one audit run."""

    settings: AuditSettings
    state_service: IssueStateService
    issue_actions: IssueActions


def render_audit_prompt(settings: AuditSettings) -> str:
    """Fill the audit prompt template from the run settings."""
    return STALE_AUDIT_PROMPT.format(
        OWNER=settings.owner,
        REPO=settings.repo,
        STALE_LABEL_NAME=settings.stale_label_name,
        REQUEST_CLARIFICATION_LABEL=settings.request_clarification_label,
        stale_threshold_days=f"{settings.stale_threshold_days:g}",
        close_threshold_days=f"{settings.close_threshold_days:g}",
    )


# Model is supplied at run time (e.g. 'google-gla:gemini-2.5-flash')
stale_audit_agent = Agent(
    deps_type=AuditDeps,
    name="repository_auditor_agent",
    retries=2,
)


@stale_audit_agent.instructions
def audit_instructions(ctx: RunContext[AuditDeps]) -> str:
    return render_audit_prompt(ctx.deps.settings)


@stale_audit_agent.tool
async def get_issue_state(
    ctx: RunContext[AuditDeps], item_number: int
) -> dict[str, Any]:
    """Retrieve the comprehensive state of a GitHub issue.

    Includes who acted last, idle days, staleness and whether maintainers
    need an alert about a silent description edit.

    Args:
        item_number: The GitHub issue number to analyze.
    """
    verdict = await ctx.deps.state_service.evaluate(item_number)
    return verdict.model_dump(mode="json")


@stale_audit_agent.tool
async def add_label_to_issue(
    ctx: RunContext[AuditDeps], item_number: int, label_name: str
) -> dict[str, Any]:
    """Add a label to a GitHub issue.

    Args:
        item_number: The GitHub issue number to which the label should be added.
        label_name: The name of the label to add.
    """
    return await actions.add_label_to_issue(
        ctx.deps.issue_actions, item_number, label_name
    )


@stale_audit_agent.tool
async def remove_label_from_issue(
    ctx: RunContext[AuditDeps], item_number: int, label_name: str
) -> dict[str, Any]:
    """Remove a label from a GitHub issue.

    Args:
        item_number: The GitHub issue number from which the label should be removed.
        label_name: The name of the label to remove.
    """
    return await actions.remove_label_from_issue(
        ctx.deps.issue_actions, item_number, label_name
    )


@stale_audit_agent.tool
async def add_stale_label_and_comment(
    ctx: RunContext[AuditDeps], item_number: int
) -> dict[str, Any]:
    """Mark a GitHub issue as stale with a comment and label.

    Args:
        item_number: The GitHub issue number to mark as stale.
    """
    return await actions.add_stale_label_and_comment(
        ctx.deps.issue_actions, item_number, ctx.deps.settings
    )


@stale_audit_agent.tool
async def alert_maintainer_of_edit(
    ctx: RunContext[AuditDeps], item_number: int
) -> dict[str, Any]:
    """Post a comment alerting maintainers of a silent description update.

    Args:
        item_number: The GitHub issue number to alert maintainers about.
    """
    return await actions.alert_maintainer_of_edit(ctx.deps.issue_actions, item_number)


@stale_audit_agent.tool
async def close_as_stale(
    ctx: RunContext[AuditDeps], item_number: int
) -> dict[str, Any]:
    """Close a GitHub issue that has been marked as stale.

    Args:
        item_number: The GitHub issue number to close as stale.
    """
    return await actions.close_as_stale(
        ctx.deps.issue_actions, item_number, ctx.deps.settings
    )
