"""Side-effecting issue actions used by the audit agent.

The agent never talks to GitHub directly. It goes through an
``IssueActions`` implementation, which lets the tool logic run against a
fake in tests.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from .config import BOT_ALERT_SIGNATURE, AuditSettings
from .errors import StaleAuditorError
from .github_client.client import GitHubClient
from .staleness.models import error_response

logger = logging.getLogger(__name__)

SUCCESS: dict[str, Any] = {"status": "success"}


@dataclass
class ActionResult:
    """Outcome of a single issue action."""

    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "ActionResult":
        return cls(success=True)

    @classmethod
    def failed(cls, error: str) -> "ActionResult":
        return cls(success=False, error=error)


class IssueActions(Protocol):
    """Capability for mutating issues in the audited repository."""

    async def add_label(self, issue_number: int, label: str) -> ActionResult: ...

    async def remove_label(self, issue_number: int, label: str) -> ActionResult: ...

    async def post_comment(self, issue_number: int, body: str) -> ActionResult: ...

    async def close(self, issue_number: int) -> ActionResult: ...


class GitHubIssueActions:
    """IssueActions backed by the GitHub REST API."""

    def __init__(self, client: GitHubClient, owner: str, repo: str):
        self.client = client
        self.owner = owner
        self.repo = repo

    async def add_label(self, issue_number: int, label: str) -> ActionResult:
        try:
            await self.client.add_label(self.owner, self.repo, issue_number, label)
        except StaleAuditorError as e:
            return ActionResult.failed(str(e))
        return ActionResult.ok()

    async def remove_label(self, issue_number: int, label: str) -> ActionResult:
        try:
            await self.client.remove_label(self.owner, self.repo, issue_number, label)
        except StaleAuditorError as e:
            return ActionResult.failed(str(e))
        return ActionResult.ok()

    async def post_comment(self, issue_number: int, body: str) -> ActionResult:
        try:
            await self.client.add_comment(self.owner, self.repo, issue_number, body)
        except StaleAuditorError as e:
            return ActionResult.failed(str(e))
        return ActionResult.ok()

    async def close(self, issue_number: int) -> ActionResult:
        try:
            await self.client.close_issue(self.owner, self.repo, issue_number)
        except StaleAuditorError as e:
            return ActionResult.failed(str(e))
        return ActionResult.ok()


def format_days(hours: float) -> str:
    """Format a duration in hours as a day count.

    Examples:
        168 -> "7"
        12  -> "0.5"
    """
    days = hours / 24
    if days == int(days):
        return str(int(days))
    return f"{days:.1f}"


def stale_notice(settings: AuditSettings) -> str:
    stale_days = format_days(settings.stale_hours_threshold)
    close_days = format_days(settings.close_hours_after_stale_threshold)
    return (
        "This issue has been automatically marked as stale because it has not "
        f"had recent activity for {stale_days} days after a maintainer requested "
        "clarification. It will be closed if no further activity occurs within "
        f"{close_days} days."
    )


def close_notice(settings: AuditSettings) -> str:
    close_days = format_days(settings.close_hours_after_stale_threshold)
    return (
        "This has been automatically closed because it has been marked as stale "
        f"for over {close_days} days."
    )


def alert_notice() -> str:
    return f"{BOT_ALERT_SIGNATURE}. Maintainers, please review."


async def add_label_to_issue(
    actions: IssueActions, issue_number: int, label_name: str
) -> dict[str, Any]:
    """Add a label to an issue and report the outcome."""
    result = await actions.add_label(issue_number, label_name)
    if not result.success:
        return error_response(f"Error adding label: {result.error}")
    return dict(SUCCESS)


async def remove_label_from_issue(
    actions: IssueActions, issue_number: int, label_name: str
) -> dict[str, Any]:
    """Remove a label from an issue and report the outcome."""
    result = await actions.remove_label(issue_number, label_name)
    if not result.success:
        return error_response(f"Error removing label: {result.error}")
    return dict(SUCCESS)


async def add_stale_label_and_comment(
    actions: IssueActions, issue_number: int, settings: AuditSettings
) -> dict[str, Any]:
    """Mark an issue as stale: explain why in a comment, then apply the label.

    Args:
        actions: Issue action capability
        issue_number: Issue to mark
        settings: Settings providing the label name and thresholds

    Returns:
        Success envelope, or error envelope naming the failed step
    """
    result = await actions.post_comment(issue_number, stale_notice(settings))
    if result.success:
        result = await actions.add_label(issue_number, settings.stale_label_name)

    if not result.success:
        return error_response(f"Error marking issue as stale: {result.error}")

    logger.info(f"#{issue_number}: Marked as stale.")
    return dict(SUCCESS)


async def alert_maintainer_of_edit(
    actions: IssueActions, issue_number: int
) -> dict[str, Any]:
    """Post the silent-edit alert comment.

    The comment carries the bot alert signature, so later runs see it and
    do not alert again for the same edit.
    """
    result = await actions.post_comment(issue_number, alert_notice())
    if not result.success:
        return error_response(f"Error posting alert: {result.error}")

    logger.info(f"#{issue_number}: Alerted maintainers of silent edit.")
    return dict(SUCCESS)


async def close_as_stale(
    actions: IssueActions, issue_number: int, settings: AuditSettings
) -> dict[str, Any]:
    """Close a stale issue after posting the closure comment.

    Args:
        actions: Issue action capability
        issue_number: Issue to close
        settings: Settings providing the close threshold

    Returns:
        Success envelope, or error envelope naming the failed step
    """
    result = await actions.post_comment(issue_number, close_notice(settings))
    if result.success:
        result = await actions.close(issue_number)

    if not result.success:
        return error_response(f"Error closing issue: {result.error}")

    logger.info(f"#{issue_number}: Closed as stale.")
    return dict(SUCCESS)
