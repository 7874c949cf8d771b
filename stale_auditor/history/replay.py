"""Replay of an issue timeline into its last-known state."""

from collections.abc import Collection
from datetime import datetime, timezone

from .events import ActorRole, CommentedEvent, EventKind, HistoryEvent, ReplayedState

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def classify_actor(
    actor: str | None, maintainers: Collection[str], issue_author: str | None
) -> ActorRole:
    """Map an actor to exactly one role.

    The author check wins over maintainership, so a maintainer reporting
    their own issue acts as the author. Unknown actors are other users.
    """
    if actor is not None and actor == issue_author:
        return ActorRole.AUTHOR
    if actor is not None and actor in maintainers:
        return ActorRole.MAINTAINER
    return ActorRole.OTHER_USER


def replay_history_to_find_state(
    history: list[HistoryEvent],
    maintainers: Collection[str],
    issue_author: str | None,
) -> ReplayedState:
    """Replay a chronologically sorted history to find the last state.

    Every event overwrites the running state, so the result reflects the
    last event only. The comment text survives only when that last event is
    itself a comment.

    Args:
        history: Events sorted by time
        maintainers: Logins with push access
        issue_author: Login of the issue author

    Returns:
        ReplayedState of the final event (defaults for an empty history)
    """
    last_action_role = ActorRole.AUTHOR
    last_activity_time = EPOCH
    last_action_type = EventKind.CREATED
    last_comment_text: str | None = None
    last_actor_name = issue_author

    for event in history:
        last_action_role = classify_actor(event.actor, maintainers, issue_author)
        last_activity_time = event.time
        last_action_type = event.kind
        last_actor_name = event.actor

        if isinstance(event, CommentedEvent):
            last_comment_text = event.text
        else:
            last_comment_text = None

    return ReplayedState(
        last_action_role=last_action_role,
        last_activity_time=last_activity_time,
        last_action_type=last_action_type,
        last_comment_text=last_comment_text,
        last_actor_name=last_actor_name,
    )
