"""Chronological timeline construction."""

from datetime import datetime

from ..config import AuditSettings
from ..github_client.models import RawIssue
from .events import HistoryEvent
from .normalizer import normalize_issue_feed


def build_timeline(events: list[HistoryEvent]) -> list[HistoryEvent]:
    """Sort events by time.

    The sort is stable, so events sharing a timestamp keep their ingestion
    order. The creation event takes part in the sort like any other event.
    """
    return sorted(events, key=lambda event: event.time)


def build_history_timeline(
    issue: RawIssue, settings: AuditSettings
) -> tuple[list[HistoryEvent], list[datetime], datetime | None]:
    """Parse a raw issue feed into a normalized, chronological history.

    Args:
        issue: Raw issue feed
        settings: Auditor settings

    Returns:
        Tuple of (history, stale label application times, last bot alert time)
    """
    feed = normalize_issue_feed(issue, settings)
    return build_timeline(feed.events), feed.label_applications, feed.last_bot_alert
