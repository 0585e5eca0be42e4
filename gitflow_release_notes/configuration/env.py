"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from gitflow_release_notes.utils.constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_INTEGRATION_BRANCH,
    DEFAULT_PULL_REQUEST_LIMIT,
    DEFAULT_TAG_LIMIT,
    DEFAULT_TAG_PREFIX,
)


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    REPO: str | None = None

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None

    # GitHub App settings
    GITHUB_APP_ID: int | None = None
    GITHUB_APP_PRIVATE_KEY_PATH: Path | None = None

    # Changelog settings
    TAG_PREFIX: str = DEFAULT_TAG_PREFIX
    INTEGRATION_BRANCH: str = DEFAULT_INTEGRATION_BRANCH
    TAG_LIMIT: int = DEFAULT_TAG_LIMIT
    PULL_REQUEST_LIMIT: int = DEFAULT_PULL_REQUEST_LIMIT

    # Slack settings
    SLACK_WEBHOOK_URL: str | None = None
    SLACK_CHANNEL: str | None = None
    SLACK_ICON_URL: str | None = None


def get_settings() -> Settings:
    """Load settings from the environment and the .env file."""
    return Settings()
