"""Unit tests for configuration reconciliation."""

from pathlib import Path

import pytest

from gitflow_release_notes.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    InvalidVersionRangeError,
    SlackConfigurationError,
)
from gitflow_release_notes.configuration.models import GitHubAuthenticationType, PublishOptions
from gitflow_release_notes.configuration.reconcile import (
    parse_version_range,
    validate_github_authentication_configuration,
    validate_slack_configuration,
)


@pytest.mark.asyncio
async def test_valid_pat_authentication() -> None:
    """Test that PAT authentication is validated correctly."""
    # When
    auth_type = await validate_github_authentication_configuration(
        github_pat_token="test-token",
        github_app_id=None,
        github_app_private_key_path=None,
    )

    # Then
    assert auth_type == GitHubAuthenticationType.PAT


@pytest.mark.asyncio
async def test_valid_app_authentication() -> None:
    """Test that GitHub App authentication is validated correctly."""
    # When
    auth_type = await validate_github_authentication_configuration(
        github_pat_token=None,
        github_app_id=12345,
        github_app_private_key_path=Path("/path/to/key.pem"),
    )

    # Then
    assert auth_type == GitHubAuthenticationType.APP


@pytest.mark.asyncio
async def test_no_authentication() -> None:
    """Without credentials the public API is used."""
    auth_type = await validate_github_authentication_configuration(
        github_pat_token=None,
        github_app_id=None,
        github_app_private_key_path=None,
    )

    assert auth_type == GitHubAuthenticationType.NONE


@pytest.mark.asyncio
async def test_both_auth_methods_error() -> None:
    """Test that error is raised when both PAT and App authentication are provided."""
    # When/Then
    with pytest.raises(GitHubAuthenticationConfigurationUndefinedError) as exc_info:
        await validate_github_authentication_configuration(
            github_pat_token="test-token",
            github_app_id=12345,
            github_app_private_key_path=Path("/path/to/key.pem"),
        )

    assert "Both PAT and GitHub App configurations are defined" in str(exc_info.value)


@pytest.mark.asyncio
async def test_incomplete_app_configuration_missing_key() -> None:
    """An App ID without a private key is rejected."""
    with pytest.raises(GitHubAuthenticationConfigurationUndefinedError) as exc_info:
        await validate_github_authentication_configuration(
            github_pat_token=None,
            github_app_id=12345,
            github_app_private_key_path=None,
        )

    assert "missing GitHub App private key path" in str(exc_info.value)


@pytest.mark.asyncio
async def test_incomplete_app_configuration_missing_id() -> None:
    """A private key without an App ID is rejected."""
    with pytest.raises(GitHubAuthenticationConfigurationUndefinedError) as exc_info:
        await validate_github_authentication_configuration(
            github_pat_token=None,
            github_app_id=None,
            github_app_private_key_path=Path("/path/to/key.pem"),
        )

    assert "missing GitHub App ID" in str(exc_info.value)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("v1.0.0..v1.2.0", ("v1.0.0", "v1.2.0")),
        ("v1.2.0", ("v1.2.0", "v1.2.0")),
        (" v1.0.0 .. v1.2.0 ", ("v1.0.0", "v1.2.0")),
    ],
)
def test_parse_version_range(value: str, expected: tuple[str, str]) -> None:
    """Ranges split on '..' and a single version is its own range."""
    assert parse_version_range(value) == expected


@pytest.mark.parametrize("value", ["", "v1.0.0..", "..v1.2.0", "v1..v2..v3"])
def test_parse_version_range_invalid(value: str) -> None:
    """Malformed ranges are rejected."""
    with pytest.raises(InvalidVersionRangeError):
        parse_version_range(value)


def test_validate_slack_configuration_requires_webhook() -> None:
    """A channel without a webhook is rejected."""
    with pytest.raises(SlackConfigurationError):
        validate_slack_configuration("#releases", None)


def test_validate_slack_configuration_valid() -> None:
    """A channel with a webhook, or no channel at all, is accepted."""
    validate_slack_configuration("#releases", "https://hooks.slack.com/services/x")
    validate_slack_configuration(None, None)


def test_publish_options_print_markdown_by_default() -> None:
    """Changelogs are printed only when no target was requested."""
    assert PublishOptions().print_markdown is True
    assert PublishOptions(save_markdown=True).print_markdown is False
    assert PublishOptions(slack_channel="#releases", slack_webhook_url="https://hooks.slack.com/services/x").print_markdown is False
    assert PublishOptions(slack_channel="#releases").post_to_slack is False
