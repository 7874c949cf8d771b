"""Verdict models returned to the audit agent."""

from typing import Literal

from pydantic import BaseModel, Field

from ..history.events import ActorRole, EventKind


class StalenessVerdict(BaseModel):
    """Facts the decision-maker needs to choose an action for one issue."""

    status: Literal["success"] = "success"
    last_action_role: ActorRole = Field(..., description="Role of the last actor")
    last_action_type: EventKind = Field(..., description="Kind of the last event")
    last_actor_name: str | None = Field(None, description="Login of the last actor")
    maintainer_alert_needed: bool = Field(
        ..., description="Whether a silent description edit needs an alert"
    )
    is_stale: bool = Field(..., description="Whether the stale label is present")
    days_since_activity: float = Field(..., description="Idle time in days")
    days_since_stale_label: float = Field(
        0.0, description="Days since the stale label was last applied"
    )
    last_comment_text: str | None = Field(
        None, description="Body of the last event when it was a comment"
    )
    current_labels: list[str] = Field(default_factory=list)
    stale_threshold_days: float = Field(..., description="Configured stale threshold")
    close_threshold_days: float = Field(..., description="Configured close threshold")
    maintainers: list[str] = Field(default_factory=list)
    issue_author: str = Field(..., description="Login of the issue author")


class ErrorVerdict(BaseModel):
    """Failure report with the same envelope shape as a verdict."""

    status: Literal["error"] = "error"
    message: str = Field(..., description="Human-readable failure description")


def error_response(message: str) -> dict[str, str]:
    """Build the error envelope returned by agent tools."""
    return ErrorVerdict(message=message).model_dump()
