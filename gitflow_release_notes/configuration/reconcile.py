"""Reconcile GitHub authentication and command line configuration."""

from pathlib import Path

from gitflow_release_notes.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    InvalidVersionRangeError,
    SlackConfigurationError,
)
from gitflow_release_notes.configuration.models import GitHubAuthenticationType
from gitflow_release_notes.utils.constants import VERSION_RANGE_SEPARATOR


async def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If both PAT and App configurations are defined,
            or the App configuration is incomplete.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used. NONE
        means the public API is used without credentials.
    """
    if github_pat_token and (github_app_id or github_app_private_key_path):
        raise GitHubAuthenticationConfigurationUndefinedError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if github_app_id and github_app_private_key_path:
        return GitHubAuthenticationType.APP
    elif github_app_id:
        raise GitHubAuthenticationConfigurationUndefinedError(
            "Incomplete GitHub App configuration - missing GitHub App private key path "
            "(command line option github_app_private_key_path, environment variable GITHUB_APP_PRIVATE_KEY_PATH)"
        )
    elif github_app_private_key_path:
        raise GitHubAuthenticationConfigurationUndefinedError(
            "Incomplete GitHub App configuration - missing GitHub App ID (command line option github_app_id, environment variable GITHUB_APP_ID)"
        )
    return GitHubAuthenticationType.NONE


def parse_version_range(value: str) -> tuple[str, str]:
    """Split a 'base..head' argument. A single version is both base and head."""
    parts = value.split(VERSION_RANGE_SEPARATOR)
    if len(parts) == 1 and parts[0].strip():
        return parts[0].strip(), parts[0].strip()
    if len(parts) == 2 and all(part.strip() for part in parts):
        return parts[0].strip(), parts[1].strip()
    raise InvalidVersionRangeError(value)


def validate_slack_configuration(slack_channel: str | None, slack_webhook_url: str | None) -> None:
    """Ensure a Slack channel is only given together with a webhook URL."""
    if slack_channel and not slack_webhook_url:
        raise SlackConfigurationError("--slack-webhook is needed to post to slack")
