"""GitHub client package for API interaction."""

from .client import GitHubClient, build_old_issue_query
from .models import (
    RawActor,
    RawComment,
    RawContentEdit,
    RawIssue,
    RawLabel,
    RawTimelineItem,
)

__all__ = [
    "GitHubClient",
    "RawActor",
    "RawComment",
    "RawContentEdit",
    "RawIssue",
    "RawLabel",
    "RawTimelineItem",
    "build_old_issue_query",
]
