"""Application settings and configuration.

This module defines all configuration options for the Dodel feed service.
Settings are loaded from environment variables with sensible defaults.
"""

from datetime import timedelta
from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VotePolicy(str, Enum):
    """How the store treats a second vote by the same user on the same post."""

    OVERWRITE = "overwrite"  # newest vote supersedes the earlier one
    STRICT = "strict"  # repeat votes are rejected


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Dodel", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Snapshot persistence
    snapshot_path: str = Field(default="dodel.json", alias="SNAPSHOT_PATH")
    snapshot_allow_missing: bool = Field(default=True, alias="SNAPSHOT_ALLOW_MISSING")
    checkpoint_interval_seconds: float = Field(
        default=0.0,
        ge=0.0,
        alias="CHECKPOINT_INTERVAL_SECONDS",
    )

    # Voting and feed behaviour
    vote_policy: VotePolicy = Field(default=VotePolicy.OVERWRITE, alias="VOTE_POLICY")
    feed_limit: int = Field(default=30, ge=1, alias="FEED_LIMIT")
    feed_max_age_hours: float = Field(default=24.0, gt=0.0, alias="FEED_MAX_AGE_HOURS")
    feed_min_rank: float = Field(default=-5.0, alias="FEED_MIN_RANK")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def feed_max_age(self) -> timedelta:
        """Return the feed age cut-off as a timedelta."""
        return timedelta(hours=self.feed_max_age_hours)

    @property
    def snapshot_file(self) -> Path:
        """Return the snapshot location as a path."""
        return Path(self.snapshot_path)


settings = Settings()
