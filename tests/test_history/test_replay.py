"""Tests for history replay and actor classification."""

from datetime import timedelta

import pytest

from stale_auditor.history.events import (
    ActorRole,
    CommentedEvent,
    CreatedEvent,
    EditedDescriptionEvent,
    EventKind,
    RenamedTitleEvent,
)
from stale_auditor.history.replay import (
    EPOCH,
    classify_actor,
    replay_history_to_find_state,
)

MAINTAINERS = ("bob", "carol")


class TestClassifyActor:
    """Test role assignment."""

    @pytest.mark.parametrize(
        "actor,expected",
        [
            ("alice", ActorRole.AUTHOR),
            ("bob", ActorRole.MAINTAINER),
            ("dave", ActorRole.OTHER_USER),
            (None, ActorRole.OTHER_USER),
        ],
    )
    def test_roles(self, actor, expected) -> None:
        assert classify_actor(actor, MAINTAINERS, "alice") == expected

    def test_author_wins_over_maintainer(self) -> None:
        """Test that a maintainer acting on their own issue is the author."""
        assert classify_actor("bob", MAINTAINERS, "bob") == ActorRole.AUTHOR

    def test_unknown_author_never_matches(self) -> None:
        assert classify_actor(None, MAINTAINERS, None) == ActorRole.OTHER_USER


class TestReplayHistory:
    """Test the single-pass state replay."""

    def test_empty_history_defaults(self) -> None:
        state = replay_history_to_find_state([], MAINTAINERS, "alice")

        assert state.last_action_role == ActorRole.AUTHOR
        assert state.last_activity_time == EPOCH
        assert state.last_action_type == EventKind.CREATED
        assert state.last_comment_text is None
        assert state.last_actor_name == "alice"

    def test_created_only(self, t0) -> None:
        history = [CreatedEvent(actor="alice", time=t0)]

        state = replay_history_to_find_state(history, MAINTAINERS, "alice")

        assert state.last_action_role == ActorRole.AUTHOR
        assert state.last_activity_time == t0
        assert state.last_action_type == EventKind.CREATED
        assert state.last_actor_name == "alice"

    def test_last_event_wins(self, t0) -> None:
        """Test that the final state reflects only the last event."""
        history = [
            CreatedEvent(actor="alice", time=t0),
            CommentedEvent(
                actor="bob", time=t0 + timedelta(days=1), text="Need logs"
            ),
            CommentedEvent(
                actor="dave", time=t0 + timedelta(days=2), text="Same here"
            ),
        ]

        state = replay_history_to_find_state(history, MAINTAINERS, "alice")

        assert state.last_action_role == ActorRole.OTHER_USER
        assert state.last_actor_name == "dave"
        assert state.last_comment_text == "Same here"
        assert state.last_activity_time == t0 + timedelta(days=2)

    def test_comment_text_cleared_by_later_non_comment(self, t0) -> None:
        """Test that text does not leak past a later edit."""
        history = [
            CreatedEvent(actor="alice", time=t0),
            CommentedEvent(actor="bob", time=t0 + timedelta(days=1), text="Logs?"),
            EditedDescriptionEvent(actor="alice", time=t0 + timedelta(days=2)),
        ]

        state = replay_history_to_find_state(history, MAINTAINERS, "alice")

        assert state.last_action_type == EventKind.EDITED_DESCRIPTION
        assert state.last_comment_text is None
        assert state.last_action_role == ActorRole.AUTHOR

    def test_maintainer_rename(self, t0) -> None:
        history = [
            CreatedEvent(actor="alice", time=t0),
            RenamedTitleEvent(actor="carol", time=t0 + timedelta(hours=5)),
        ]

        state = replay_history_to_find_state(history, MAINTAINERS, "alice")

        assert state.last_action_role == ActorRole.MAINTAINER
        assert state.last_action_type == EventKind.RENAMED_TITLE

    def test_is_deterministic(self, t0) -> None:
        history = [
            CreatedEvent(actor="alice", time=t0),
            CommentedEvent(actor="bob", time=t0 + timedelta(days=1), text="x"),
        ]

        first = replay_history_to_find_state(history, MAINTAINERS, "alice")
        second = replay_history_to_find_state(history, MAINTAINERS, "alice")

        assert first == second
