"""Configuration for the stale issue auditor.

Settings are read from environment variables (optionally via a local .env
file) and validated with pydantic. CLI options override individual values
through the keyword arguments of ``AuditSettings.from_env``.
"""

import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

GITHUB_BASE_URL = "https://api.github.com"

# Logins ending with this suffix belong to GitHub Apps and are never activity
BOT_SUFFIX = "[bot]"

# Marker embedded in alert comments so they can be recognized on re-read
BOT_ALERT_SIGNATURE = "**Notification:** The author has updated the issue description"

# Environment variable name -> settings field
ENV_FIELDS = {
    "GITHUB_TOKEN": "github_token",
    "OWNER": "owner",
    "REPO": "repo",
    "LLM_MODEL_NAME": "llm_model_name",
    "STALE_LABEL_NAME": "stale_label_name",
    "REQUEST_CLARIFICATION_LABEL": "request_clarification_label",
    "STALE_HOURS_THRESHOLD": "stale_hours_threshold",
    "CLOSE_HOURS_AFTER_STALE_THRESHOLD": "close_hours_after_stale_threshold",
    "CONCURRENCY_LIMIT": "concurrency_limit",
    "GRAPHQL_COMMENT_LIMIT": "graphql_comment_limit",
    "GRAPHQL_EDIT_LIMIT": "graphql_edit_limit",
    "GRAPHQL_TIMELINE_LIMIT": "graphql_timeline_limit",
    "SLEEP_BETWEEN_CHUNKS": "sleep_between_chunks",
    "BOT_NAME": "bot_name",
}


class AuditSettings(BaseModel):
    """Runtime configuration for one audit run."""

    github_token: str | None = Field(None, description="GitHub API token")
    owner: str = Field("", description="Repository owner (user or organization)")
    repo: str = Field("", description="Repository name")
    llm_model_name: str = Field(
        "google-gla:gemini-2.5-flash",
        description="PydanticAI model identifier used by the audit agent",
    )
    stale_label_name: str = Field("stale", description="Label marking stale issues")
    request_clarification_label: str = Field(
        "request clarification",
        description="Label maintainers apply when waiting on the author",
    )
    stale_hours_threshold: float = Field(
        168.0,
        gt=0,
        description="Hours of inactivity after a maintainer request before "
        "an issue is marked stale",
    )
    close_hours_after_stale_threshold: float = Field(
        168.0,
        gt=0,
        description="Hours an issue stays stale before it is closed",
    )
    concurrency_limit: int = Field(
        3, ge=1, description="Number of issues processed concurrently"
    )
    graphql_comment_limit: int = Field(
        30, ge=1, description="Most recent comments fetched per issue"
    )
    graphql_edit_limit: int = Field(
        10, ge=1, description="Most recent description edits fetched per issue"
    )
    graphql_timeline_limit: int = Field(
        20,
        ge=1,
        description="Most recent label/rename/reopen events fetched per issue",
    )
    sleep_between_chunks: float = Field(
        1.5, ge=0, description="Seconds to wait between chunks of issues"
    )
    bot_name: str = Field("adk-bot", description="Login the automation posts as")

    @property
    def stale_threshold_days(self) -> float:
        return self.stale_hours_threshold / 24

    @property
    def close_threshold_days(self) -> float:
        return self.close_hours_after_stale_threshold / 24

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_env(cls, **overrides: Any) -> "AuditSettings":
        """Build settings from environment variables.

        Loads a ``.env`` file from the working directory first (values there
        take precedence over the inherited environment), then applies any
        non-None keyword overrides.

        Args:
            **overrides: Field values that replace the environment values

        Returns:
            Validated settings

        Raises:
            ValueError: If any value fails validation
        """
        load_dotenv(override=True)

        values: dict[str, Any] = {}
        for env_name, field_name in ENV_FIELDS.items():
            raw = os.getenv(env_name)
            if raw is not None and raw != "":
                values[field_name] = raw

        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as e:
            raise ValueError(f"Invalid auditor configuration:\n{e}") from e

    def validate_for_network(self) -> None:
        """Validate that settings needed to talk to GitHub are present."""
        missing = []
        if not self.github_token:
            missing.append("GITHUB_TOKEN")
        if not self.owner:
            missing.append("OWNER")
        if not self.repo:
            missing.append("REPO")

        if missing:
            raise ValueError(
                f"Environment variables required for auditing: {', '.join(missing)}"
            )
