"""Typed history events and the replayed issue state."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class EventKind(str, Enum):
    """Kinds of activity that make up an issue's history."""

    CREATED = "created"
    COMMENTED = "commented"
    EDITED_DESCRIPTION = "edited_description"
    RENAMED_TITLE = "renamed_title"
    REOPENED = "reopened"


class ActorRole(str, Enum):
    """Relationship of an actor to the issue."""

    AUTHOR = "author"
    MAINTAINER = "maintainer"
    OTHER_USER = "other_user"


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    actor: str | None = Field(None, description="Login of the acting user")
    time: datetime = Field(..., description="When the activity happened")


class CreatedEvent(_Event):
    kind: Literal[EventKind.CREATED] = EventKind.CREATED


class CommentedEvent(_Event):
    kind: Literal[EventKind.COMMENTED] = EventKind.COMMENTED
    text: str = Field("", description="Comment body")


class EditedDescriptionEvent(_Event):
    kind: Literal[EventKind.EDITED_DESCRIPTION] = EventKind.EDITED_DESCRIPTION


class RenamedTitleEvent(_Event):
    kind: Literal[EventKind.RENAMED_TITLE] = EventKind.RENAMED_TITLE


class ReopenedEvent(_Event):
    kind: Literal[EventKind.REOPENED] = EventKind.REOPENED


HistoryEvent = Annotated[
    Union[
        CreatedEvent,
        CommentedEvent,
        EditedDescriptionEvent,
        RenamedTitleEvent,
        ReopenedEvent,
    ],
    Field(discriminator="kind"),
]


class ReplayedState(BaseModel):
    """Last-known state of an issue, derived from its full timeline."""

    model_config = ConfigDict(frozen=True)

    last_action_role: ActorRole = Field(
        ..., description="Role of whoever acted last"
    )
    last_activity_time: datetime = Field(..., description="Time of the last event")
    last_action_type: EventKind = Field(..., description="Kind of the last event")
    last_comment_text: str | None = Field(
        None, description="Body of the last event, only when it was a comment"
    )
    last_actor_name: str | None = Field(None, description="Login of the last actor")
