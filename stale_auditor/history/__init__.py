"""Issue history reconstruction."""

from .events import (
    ActorRole,
    CommentedEvent,
    CreatedEvent,
    EditedDescriptionEvent,
    EventKind,
    HistoryEvent,
    RenamedTitleEvent,
    ReopenedEvent,
    ReplayedState,
)
from .normalizer import NormalizedFeed, normalize_issue_feed
from .replay import classify_actor, replay_history_to_find_state
from .timeline import build_history_timeline, build_timeline

__all__ = [
    # Events
    "ActorRole",
    "CommentedEvent",
    "CreatedEvent",
    "EditedDescriptionEvent",
    "EventKind",
    "HistoryEvent",
    "RenamedTitleEvent",
    "ReopenedEvent",
    "ReplayedState",
    # Pipeline
    "NormalizedFeed",
    "normalize_issue_feed",
    "build_timeline",
    "build_history_timeline",
    "classify_actor",
    "replay_history_to_find_state",
]
