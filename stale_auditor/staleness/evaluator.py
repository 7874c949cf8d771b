"""Staleness evaluation of a replayed issue state."""

from collections.abc import Collection
from datetime import datetime, timedelta

from ..config import AuditSettings
from ..history.events import ActorRole, EventKind, ReplayedState
from .models import StalenessVerdict

ONE_DAY = timedelta(days=1)


def elapsed_days(since: datetime, now: datetime) -> float:
    """Fractional days between two instants, unrounded."""
    return (now - since) / ONE_DAY


def is_alert_needed(state: ReplayedState, last_bot_alert: datetime | None) -> bool:
    """Decide whether maintainers must be told about a silent edit.

    Only a description edit by the author or another non-maintainer user
    qualifies. An alert posted after that edit suppresses a repeat; the
    check is recomputed from the comment feed on every run.
    """
    if state.last_action_role not in (ActorRole.AUTHOR, ActorRole.OTHER_USER):
        return False
    if state.last_action_type != EventKind.EDITED_DESCRIPTION:
        return False
    if last_bot_alert is not None and last_bot_alert > state.last_activity_time:
        return False
    return True


def evaluate_staleness(
    state: ReplayedState,
    label_applications: list[datetime],
    last_bot_alert: datetime | None,
    current_labels: list[str],
    now: datetime,
    *,
    settings: AuditSettings,
    maintainers: Collection[str],
    issue_author: str,
) -> StalenessVerdict:
    """Combine the replayed state with the current time and thresholds.

    Args:
        state: Replayed state of the issue
        label_applications: Times the stale label was applied
        last_bot_alert: Time of the latest silent-edit alert, if any
        current_labels: Labels currently on the issue
        now: Evaluation time
        settings: Settings providing the stale label and thresholds
        maintainers: Logins with push access
        issue_author: Login of the issue author

    Returns:
        StalenessVerdict for the decision-maker
    """
    days_since_activity = elapsed_days(state.last_activity_time, now)

    is_stale = settings.stale_label_name in current_labels
    days_since_stale_label = 0.0
    # The label can be present without a captured application event when
    # the timeline tail was truncated
    if is_stale and label_applications:
        days_since_stale_label = elapsed_days(max(label_applications), now)

    alert_needed = is_alert_needed(state, last_bot_alert)

    return StalenessVerdict(
        last_action_role=state.last_action_role,
        last_action_type=state.last_action_type,
        last_actor_name=state.last_actor_name,
        maintainer_alert_needed=alert_needed,
        is_stale=is_stale,
        days_since_activity=days_since_activity,
        days_since_stale_label=days_since_stale_label,
        last_comment_text=state.last_comment_text,
        current_labels=list(current_labels),
        stale_threshold_days=settings.stale_threshold_days,
        close_threshold_days=settings.close_threshold_days,
        maintainers=list(maintainers),
        issue_author=issue_author,
    )
