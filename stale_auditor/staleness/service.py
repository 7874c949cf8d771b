"""Per-issue state analysis combining fetch, replay and evaluation."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from ..config import AuditSettings
from ..context import AuditRunContext
from ..errors import MaintainerFetchError, RequestError
from ..github_client.client import GitHubClient
from ..history.events import ActorRole, EventKind
from ..history.replay import replay_history_to_find_state
from ..history.timeline import build_history_timeline
from .evaluator import evaluate_staleness
from .models import ErrorVerdict, StalenessVerdict

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "unknown"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class IssueStateService:
    """Computes the staleness verdict of issues in one repository.

    One service instance lives for one audit run. The maintainer list is
    fetched on first use and cached on the run context.
    """

    def __init__(
        self,
        client: GitHubClient,
        settings: AuditSettings,
        context: AuditRunContext | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the service.

        Args:
            client: GitHub client used for all reads
            settings: Auditor settings
            context: Run state holding the maintainer cache
            clock: Source of the evaluation time
        """
        self.client = client
        self.settings = settings
        self.context = context or AuditRunContext()
        self.clock = clock

    async def get_cached_maintainers(self) -> tuple[str, ...]:
        """Get the repository maintainers, fetching them once per run.

        Returns:
            Logins with push access

        Raises:
            MaintainerFetchError: If the maintainers cannot be verified
        """
        if self.context.has_maintainers:
            return self.context.maintainers

        logger.info("Initializing maintainers cache...")
        try:
            logins = await self.client.get_maintainers(
                self.settings.owner, self.settings.repo
            )
        except Exception as e:
            logger.critical(
                f"Failed to verify repository maintainers: {e}", exc_info=True
            )
            raise MaintainerFetchError(
                "Maintainer verification failed. Processing aborted."
            ) from e

        maintainers = self.context.cache_maintainers(logins)
        logger.info(f"Cached {len(maintainers)} maintainers.")
        return maintainers

    async def evaluate(self, issue_number: int) -> StalenessVerdict | ErrorVerdict:
        """Analyze the complete state of one issue.

        Failures of this issue are returned as an ErrorVerdict so sibling
        analyses keep running. Only a maintainer fetch failure is raised.

        Args:
            issue_number: Issue number to analyze

        Returns:
            StalenessVerdict, or ErrorVerdict describing the failure

        Raises:
            MaintainerFetchError: If the maintainers cannot be verified
        """
        maintainers = await self.get_cached_maintainers()

        try:
            raw_issue = await self.client.fetch_issue_feed(
                self.settings.owner,
                self.settings.repo,
                issue_number,
                comment_limit=self.settings.graphql_comment_limit,
                edit_limit=self.settings.graphql_edit_limit,
                timeline_limit=self.settings.graphql_timeline_limit,
            )

            issue_author = raw_issue.author_login or UNKNOWN_AUTHOR
            labels = raw_issue.label_names

            history, label_applications, last_bot_alert = build_history_timeline(
                raw_issue, self.settings
            )
            state = replay_history_to_find_state(history, maintainers, issue_author)

            verdict = evaluate_staleness(
                state,
                label_applications,
                last_bot_alert,
                labels,
                self.clock(),
                settings=self.settings,
                maintainers=maintainers,
                issue_author=issue_author,
            )
        except RequestError as e:
            return ErrorVerdict(message=f"Network Error: {e}")
        except Exception as e:
            logger.error(
                f"Unexpected error analyzing #{issue_number}: {e}", exc_info=True
            )
            return ErrorVerdict(message=f"Analysis Error: {e}")

        if (
            state.last_action_type == EventKind.EDITED_DESCRIPTION
            and state.last_action_role != ActorRole.MAINTAINER
        ):
            if verdict.maintainer_alert_needed:
                logger.info(f"#{issue_number}: Silent edit detected. Alert needed.")
            else:
                logger.info(
                    f"#{issue_number}: Silent edit detected, but bot already alerted."
                )

        logger.debug(
            f"#{issue_number} VERDICT: Role={verdict.last_action_role.value}, "
            f"Idle={verdict.days_since_activity:.2f}d"
        )
        return verdict
