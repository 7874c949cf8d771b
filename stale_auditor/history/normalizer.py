"""Conversion of the raw GitHub issue feed into typed history events."""

from dataclasses import dataclass, field
from datetime import datetime

from ..config import BOT_ALERT_SIGNATURE, BOT_SUFFIX, AuditSettings
from ..github_client.models import RawActor, RawIssue
from .events import (
    CommentedEvent,
    CreatedEvent,
    EditedDescriptionEvent,
    HistoryEvent,
    RenamedTitleEvent,
    ReopenedEvent,
)

LABELED_EVENT = "LabeledEvent"
RENAMED_TITLE_EVENT = "RenamedTitleEvent"
REOPENED_EVENT = "ReopenedEvent"


@dataclass
class NormalizedFeed:
    """Events of one issue plus the side channels pulled out of the feed.

    ``events`` is in ingestion order: creation, comments, description edits,
    then timeline items.
    """

    events: list[HistoryEvent] = field(default_factory=list)
    label_applications: list[datetime] = field(default_factory=list)
    last_bot_alert: datetime | None = None


def is_human_actor(actor: RawActor | None, bot_name: str) -> bool:
    """Check whether an actor counts as human activity.

    Args:
        actor: Actor reference from the feed, possibly missing
        bot_name: Login the automation itself posts as

    Returns:
        False for missing actors, the automation and any ``[bot]`` account
    """
    if actor is None or not actor.login:
        return False
    return actor.login != bot_name and not actor.login.endswith(BOT_SUFFIX)


def normalize_issue_feed(issue: RawIssue, settings: AuditSettings) -> NormalizedFeed:
    """Normalize comments, edits and timeline items into history events.

    Comments carrying the bot alert signature are never activity; only the
    latest of their creation times is kept. Edited comments are placed at
    their last edit time. Labeled events only feed the stale-label log.

    Args:
        issue: Raw issue feed
        settings: Settings providing the stale label and the bot login

    Returns:
        NormalizedFeed with unsorted events and side channels
    """
    feed = NormalizedFeed()
    feed.events.append(CreatedEvent(actor=issue.author_login, time=issue.created_at))

    for comment in issue.comments.nodes:
        if comment is None:
            continue

        if BOT_ALERT_SIGNATURE in comment.body:
            if feed.last_bot_alert is None or comment.created_at > feed.last_bot_alert:
                feed.last_bot_alert = comment.created_at
            continue

        if is_human_actor(comment.author, settings.bot_name):
            feed.events.append(
                CommentedEvent(
                    actor=comment.author.login,
                    time=comment.last_edited_at or comment.created_at,
                    text=comment.body,
                )
            )

    for edit in issue.user_content_edits.nodes:
        if edit is None:
            continue
        if is_human_actor(edit.editor, settings.bot_name):
            feed.events.append(
                EditedDescriptionEvent(actor=edit.editor.login, time=edit.edited_at)
            )

    for item in issue.timeline_items.nodes:
        if item is None:
            continue

        if item.typename == LABELED_EVENT:
            if item.label and item.label.name == settings.stale_label_name:
                feed.label_applications.append(item.created_at)
            continue

        if not is_human_actor(item.actor, settings.bot_name):
            continue

        if item.typename == RENAMED_TITLE_EVENT:
            feed.events.append(
                RenamedTitleEvent(actor=item.actor.login, time=item.created_at)
            )
        elif item.typename == REOPENED_EVENT:
            feed.events.append(
                ReopenedEvent(actor=item.actor.login, time=item.created_at)
            )

    return feed
