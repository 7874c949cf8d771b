"""Pydantic models for the GitHub issue feed.

These models map directly to the GraphQL v4 response of the combined issue
query in ``queries.py``. Field aliases follow GraphQL's camelCase names.
API Reference: https://docs.github.com/en/graphql/reference/objects#issue
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GraphQLModel(BaseModel):
    """Base model accepting both GraphQL aliases and Python field names."""

    model_config = ConfigDict(populate_by_name=True)


class RawActor(GraphQLModel):
    """Actor reference (user, bot or mannequin)."""

    login: str = Field(..., description="GitHub login of the actor")


class RawLabel(GraphQLModel):
    """Label reference."""

    name: str = Field(..., description="Name of the label")


class RawComment(GraphQLModel):
    """Issue comment.

    Maps to GraphQL IssueComment.
    API Reference: https://docs.github.com/en/graphql/reference/objects#issuecomment
    """

    author: RawActor | None = Field(
        None, description="Comment author, absent for deleted accounts"
    )
    body: str = Field("", description="Markdown body of the comment")
    created_at: datetime = Field(
        ..., alias="createdAt", description="Timestamp of comment creation"
    )
    last_edited_at: datetime | None = Field(
        None, alias="lastEditedAt", description="Timestamp of the last edit"
    )


class RawContentEdit(GraphQLModel):
    """Edit of the issue description.

    Maps to GraphQL UserContentEdit.
    API Reference: https://docs.github.com/en/graphql/reference/objects#usercontentedit
    """

    editor: RawActor | None = Field(None, description="Actor who made the edit")
    edited_at: datetime = Field(
        ..., alias="editedAt", description="Timestamp of the edit"
    )


class RawTimelineItem(GraphQLModel):
    """Labeled, renamed-title or reopened timeline event."""

    typename: str = Field(
        ...,
        alias="__typename",
        description="'LabeledEvent', 'RenamedTitleEvent' or 'ReopenedEvent'",
    )
    created_at: datetime = Field(
        ..., alias="createdAt", description="Timestamp of the event"
    )
    actor: RawActor | None = Field(None, description="Actor who caused the event")
    label: RawLabel | None = Field(None, description="Label for LabeledEvent")


class RawCommentConnection(GraphQLModel):
    nodes: list[RawComment | None] = Field(default_factory=list)


class RawContentEditConnection(GraphQLModel):
    nodes: list[RawContentEdit | None] = Field(default_factory=list)


class RawTimelineConnection(GraphQLModel):
    nodes: list[RawTimelineItem | None] = Field(default_factory=list)


class RawLabelConnection(GraphQLModel):
    nodes: list[RawLabel | None] = Field(default_factory=list)


class RawIssue(GraphQLModel):
    """Issue returned by the combined issue query.

    Each connection holds only the most recent N nodes (bounded by the
    configured limits) and may contain null entries.
    """

    author: RawActor | None = Field(None, description="Creator of the issue")
    created_at: datetime = Field(
        ..., alias="createdAt", description="Timestamp of issue creation"
    )
    labels: RawLabelConnection = Field(default_factory=RawLabelConnection)
    comments: RawCommentConnection = Field(default_factory=RawCommentConnection)
    user_content_edits: RawContentEditConnection = Field(
        default_factory=RawContentEditConnection, alias="userContentEdits"
    )
    timeline_items: RawTimelineConnection = Field(
        default_factory=RawTimelineConnection, alias="timelineItems"
    )

    @field_validator(
        "labels", "comments", "user_content_edits", "timeline_items", mode="before"
    )
    @classmethod
    def _null_connection_as_empty(cls, value: Any) -> Any:
        # GraphQL returns null for connections the token cannot read
        if value is None:
            return {"nodes": []}
        if isinstance(value, dict) and value.get("nodes") is None:
            return {**value, "nodes": []}
        return value

    @property
    def author_login(self) -> str | None:
        return self.author.login if self.author else None

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels.nodes if label is not None]
