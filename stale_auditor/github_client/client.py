"""GitHub API client using PyGitHub for REST and httpx for GraphQL."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
from github import Auth, Github
from requests.exceptions import RequestException
from github.GithubException import GithubException, UnknownObjectException
from github.Issue import Issue
from github.Repository import Repository

from ..config import GITHUB_BASE_URL
from ..context import ApiCallCounter
from ..errors import GraphQLError, IssueNotFoundError, TransportError
from .models import RawIssue
from .queries import ISSUE_FEED_QUERY

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 100
REQUEST_TIMEOUT = 60.0


def build_old_issue_query(owner: str, repo: str, cutoff: datetime) -> str:
    """Build a search query for open issues created before a cutoff.

    Args:
        owner: Repository owner
        repo: Repository name
        cutoff: Only issues created strictly before this instant match

    Returns:
        GitHub search query string

    Example:
        >>> build_old_issue_query("o", "r", datetime(2024, 1, 8, tzinfo=timezone.utc))
        'repo:o/r is:issue state:open created:<2024-01-08T00:00:00Z'
    """
    cutoff_str = cutoff.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return f"repo:{owner}/{repo} is:issue state:open created:<{cutoff_str}"


class GitHubClient:
    """Async facade over the GitHub REST and GraphQL APIs.

    Blocking PyGitHub calls run in worker threads so that several issues can
    be audited concurrently on one event loop. Every outbound request is
    recorded on the shared ``ApiCallCounter``.
    """

    def __init__(
        self,
        token: str,
        counter: ApiCallCounter | None = None,
        base_url: str = GITHUB_BASE_URL,
    ):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token
            counter: Counter incremented for every request made
            base_url: API root, without trailing slash
        """
        if not token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.token = token
        self.base_url = base_url
        self.counter = counter or ApiCallCounter()
        self.github = Github(
            auth=Auth.Token(token),
            base_url=base_url,
            timeout=int(REQUEST_TIMEOUT),
            per_page=SEARCH_PAGE_SIZE,
        )
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github.v3+json",
        }

    def _get_repository(self, owner: str, repo: str) -> Repository:
        # Lazy repositories do not hit the API until an attribute is needed
        return self.github.get_repo(f"{owner}/{repo}", lazy=True)

    def _get_issue(self, owner: str, repo: str, issue_number: int) -> Issue:
        self.counter.increment()
        try:
            return self._get_repository(owner, repo).get_issue(issue_number)
        except UnknownObjectException:
            raise IssueNotFoundError(issue_number)

    async def _run_blocking(self, description: str, func: Any, *args: Any) -> Any:
        """Run a PyGitHub call in a thread, translating its failures."""
        try:
            return await asyncio.to_thread(func, *args)
        except (IssueNotFoundError, TransportError):
            raise
        except (GithubException, RequestException) as e:
            logger.error(f"{description} failed: {e}")
            raise TransportError(f"{description} failed: {e}") from e

    # --- Maintainers ---

    def _list_push_collaborators(self, owner: str, repo: str) -> list[str]:
        repository = self._get_repository(owner, repo)
        logins = []
        for index, user in enumerate(
            repository.get_collaborators(permission="push")
        ):
            if index % SEARCH_PAGE_SIZE == 0:
                self.counter.increment()
            logins.append(user.login)
        if not logins:
            # An empty listing still costs one request
            self.counter.increment()
        return logins

    async def get_maintainers(self, owner: str, repo: str) -> list[str]:
        """Get logins of collaborators with push access.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            List of maintainer logins

        Raises:
            TransportError: If the collaborator listing fails
        """
        return await self._run_blocking(
            f"Listing collaborators of {owner}/{repo}",
            self._list_push_collaborators,
            owner,
            repo,
        )

    # --- Issue feed ---

    async def fetch_issue_feed(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        comment_limit: int,
        edit_limit: int,
        timeline_limit: int,
    ) -> RawIssue:
        """Fetch comments, edits and timeline events of an issue in one query.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Issue number
            comment_limit: Number of most recent comments to fetch
            edit_limit: Number of most recent description edits to fetch
            timeline_limit: Number of most recent timeline events to fetch

        Returns:
            Parsed issue feed

        Raises:
            IssueNotFoundError: If the issue does not exist
            GraphQLError: If the response carries GraphQL errors
            TransportError: On HTTP or network failures
        """
        variables = {
            "owner": owner,
            "name": repo,
            "number": issue_number,
            "commentLimit": comment_limit,
            "editLimit": edit_limit,
            "timelineLimit": timeline_limit,
        }

        self.counter.increment()
        try:
            async with httpx.AsyncClient(
                headers=self.headers, timeout=REQUEST_TIMEOUT
            ) as client:
                response = await client.post(
                    f"{self.base_url}/graphql",
                    json={"query": ISSUE_FEED_QUERY, "variables": variables},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"GraphQL request failed for issue #{issue_number}: {e}")
            raise TransportError(
                f"HTTP {e.response.status_code} from GraphQL endpoint"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"GraphQL request failed for issue #{issue_number}: {e}")
            raise TransportError(f"GraphQL request failed: {e}") from e

        errors = payload.get("errors")
        if errors:
            raise GraphQLError(errors[0].get("message", "unknown error"), errors)

        issue = ((payload.get("data") or {}).get("repository") or {}).get("issue")
        if not issue:
            raise IssueNotFoundError(issue_number)

        return RawIssue.model_validate(issue)

    # --- Search ---

    def _search_issue_numbers(self, query: str) -> list[int]:
        numbers = []
        try:
            for index, item in enumerate(self.github.search_issues(query)):
                if index % SEARCH_PAGE_SIZE == 0:
                    self.counter.increment()
                # Search results include pull requests
                if item.pull_request is None:
                    numbers.append(item.number)
        except (GithubException, RequestException) as e:
            logger.error(f"GitHub search failed after {len(numbers)} results: {e}")
        return numbers

    async def find_old_open_issue_numbers(
        self,
        owner: str,
        repo: str,
        days_old: float,
        now: datetime | None = None,
    ) -> list[int]:
        """Find open issues created more than ``days_old`` days ago.

        Filtering happens server-side through the search ``created:<`` syntax.
        A failure part-way through pagination is logged and the numbers
        collected so far are returned.

        Args:
            owner: Repository owner
            repo: Repository name
            days_old: Minimum issue age in days
            now: Reference time (defaults to the current UTC time)

        Returns:
            Issue numbers, pull requests excluded
        """
        now = now or datetime.now(timezone.utc)
        query = build_old_issue_query(owner, repo, now - timedelta(days=days_old))
        logger.info(f"Searching for issues with query: {query}")

        numbers = await asyncio.to_thread(self._search_issue_numbers, query)
        logger.info(f"Found {len(numbers)} candidate issues.")
        return numbers

    # --- Mutations ---

    def _add_label(self, owner: str, repo: str, issue_number: int, label: str) -> None:
        issue = self._get_issue(owner, repo, issue_number)
        self.counter.increment()
        issue.add_to_labels(label)

    def _remove_label(
        self, owner: str, repo: str, issue_number: int, label: str
    ) -> None:
        issue = self._get_issue(owner, repo, issue_number)
        self.counter.increment()
        issue.remove_from_labels(label)

    def _create_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> None:
        issue = self._get_issue(owner, repo, issue_number)
        self.counter.increment()
        issue.create_comment(body)

    def _close_issue(self, owner: str, repo: str, issue_number: int) -> None:
        issue = self._get_issue(owner, repo, issue_number)
        self.counter.increment()
        issue.edit(state="closed")

    async def add_label(
        self, owner: str, repo: str, issue_number: int, label: str
    ) -> None:
        """Add a label to an issue."""
        logger.debug(f"Adding label '{label}' to issue #{issue_number}.")
        await self._run_blocking(
            f"Adding label to #{issue_number}",
            self._add_label,
            owner,
            repo,
            issue_number,
            label,
        )

    async def remove_label(
        self, owner: str, repo: str, issue_number: int, label: str
    ) -> None:
        """Remove a label from an issue."""
        logger.debug(f"Removing label '{label}' from issue #{issue_number}.")
        await self._run_blocking(
            f"Removing label from #{issue_number}",
            self._remove_label,
            owner,
            repo,
            issue_number,
            label,
        )

    async def add_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> None:
        """Post a comment on an issue."""
        await self._run_blocking(
            f"Commenting on #{issue_number}",
            self._create_comment,
            owner,
            repo,
            issue_number,
            body,
        )

    async def close_issue(self, owner: str, repo: str, issue_number: int) -> None:
        """Close an issue."""
        await self._run_blocking(
            f"Closing #{issue_number}",
            self._close_issue,
            owner,
            repo,
            issue_number,
        )
