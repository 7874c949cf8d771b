"""Test configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from stale_auditor.actions import ActionResult
from stale_auditor.config import BOT_ALERT_SIGNATURE, AuditSettings
from stale_auditor.github_client.models import RawIssue

T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def iso(dt: datetime) -> str:
    """Format a datetime the way GitHub GraphQL does."""
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class FakeIssueActions:
    """In-memory IssueActions recording every call."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.fail_on = fail_on or set()

    def _result(self, name: str) -> ActionResult:
        if name in self.fail_on:
            return ActionResult.failed(f"{name} refused")
        return ActionResult.ok()

    async def add_label(self, issue_number: int, label: str) -> ActionResult:
        self.calls.append(("add_label", issue_number, label))
        return self._result("add_label")

    async def remove_label(self, issue_number: int, label: str) -> ActionResult:
        self.calls.append(("remove_label", issue_number, label))
        return self._result("remove_label")

    async def post_comment(self, issue_number: int, body: str) -> ActionResult:
        self.calls.append(("post_comment", issue_number, body))
        return self._result("post_comment")

    async def close(self, issue_number: int) -> ActionResult:
        self.calls.append(("close", issue_number))
        return self._result("close")


@pytest.fixture
def settings() -> AuditSettings:
    """Settings for a test repository with default thresholds."""
    return AuditSettings(
        github_token="test_token",
        owner="test-org",
        repo="test-repo",
        stale_label_name="stale",
        request_clarification_label="request clarification",
        stale_hours_threshold=168,
        close_hours_after_stale_threshold=168,
        bot_name="adk-bot",
    )


@pytest.fixture
def make_issue() -> Callable[..., RawIssue]:
    """Factory building a RawIssue from GraphQL-shaped node lists."""

    def _make_issue(
        author: str | None = "alice",
        created_at: datetime = T0,
        labels: list[str] | None = None,
        comments: list[dict[str, Any] | None] | None = None,
        edits: list[dict[str, Any] | None] | None = None,
        timeline: list[dict[str, Any] | None] | None = None,
    ) -> RawIssue:
        return RawIssue.model_validate(
            {
                "author": {"login": author} if author else None,
                "createdAt": iso(created_at),
                "labels": {"nodes": [{"name": name} for name in labels or []]},
                "comments": {"nodes": comments or []},
                "userContentEdits": {"nodes": edits or []},
                "timelineItems": {"nodes": timeline or []},
            }
        )

    return _make_issue


def comment_node(
    login: str | None,
    created_at: datetime,
    body: str = "a comment",
    last_edited_at: datetime | None = None,
) -> dict[str, Any]:
    return {
        "author": {"login": login} if login else None,
        "body": body,
        "createdAt": iso(created_at),
        "lastEditedAt": iso(last_edited_at) if last_edited_at else None,
    }


def alert_node(created_at: datetime, login: str = "adk-bot") -> dict[str, Any]:
    return comment_node(
        login, created_at, body=f"{BOT_ALERT_SIGNATURE}. Maintainers, please review."
    )


def edit_node(login: str | None, edited_at: datetime) -> dict[str, Any]:
    return {
        "editor": {"login": login} if login else None,
        "editedAt": iso(edited_at),
    }


def timeline_node(
    typename: str,
    login: str | None,
    created_at: datetime,
    label: str | None = None,
) -> dict[str, Any]:
    node: dict[str, Any] = {
        "__typename": typename,
        "createdAt": iso(created_at),
        "actor": {"login": login} if login else None,
    }
    if label is not None:
        node["label"] = {"name": label}
    return node


@pytest.fixture
def fake_actions() -> FakeIssueActions:
    """Issue actions that succeed and record calls."""
    return FakeIssueActions()


@pytest.fixture
def mock_client() -> Mock:
    """GitHubClient stand-in with async methods."""
    client = Mock()
    client.get_maintainers = AsyncMock(return_value=["bob", "carol"])
    client.fetch_issue_feed = AsyncMock()
    client.find_old_open_issue_numbers = AsyncMock(return_value=[])
    return client


class NodeBuilders:
    """GraphQL node builders exposed to tests through the ``nodes`` fixture."""

    comment = staticmethod(comment_node)
    alert = staticmethod(alert_node)
    edit = staticmethod(edit_node)
    timeline = staticmethod(timeline_node)


@pytest.fixture
def nodes() -> type[NodeBuilders]:
    """Builders for raw comment, edit and timeline nodes."""
    return NodeBuilders


@pytest.fixture
def t0() -> datetime:
    """Creation time of test issues."""
    return T0


@pytest.fixture
def failing_actions() -> Callable[..., FakeIssueActions]:
    """Factory for issue actions that refuse the named operations."""

    def _failing(*names: str) -> FakeIssueActions:
        return FakeIssueActions(fail_on=set(names))

    return _failing
