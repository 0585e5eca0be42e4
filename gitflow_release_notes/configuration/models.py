"""Configuration models for the changelog CLI."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gitflow_release_notes.utils.constants import (
    DEFAULT_INTEGRATION_BRANCH,
    DEFAULT_PULL_REQUEST_LIMIT,
    DEFAULT_TAG_LIMIT,
    DEFAULT_TAG_PREFIX,
)


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    APP = "app"
    NONE = "none"


@dataclass
class ChangelogOptions:
    """Tunable inputs of the release windowing algorithm.

    ``tag_limit`` and ``pull_request_limit`` bound how much history is
    fetched. Tags older than the tag limit cannot be release boundaries and
    pull requests older than the pull request limit are not attributed.
    """

    tag_prefix: str = DEFAULT_TAG_PREFIX
    integration_branch: str = DEFAULT_INTEGRATION_BRANCH
    tag_limit: int = DEFAULT_TAG_LIMIT
    pull_request_limit: int = DEFAULT_PULL_REQUEST_LIMIT


@dataclass
class PublishOptions:
    """Where generated changelogs are sent."""

    push_to_github: bool = False
    overwrite: bool = False
    save_markdown: bool = False
    output_dir: Path = Path(".")
    slack_channel: str | None = None
    slack_webhook_url: str | None = None
    slack_icon_url: str | None = None

    @property
    def post_to_slack(self) -> bool:
        """Whether a Slack message should be posted for every release."""
        return bool(self.slack_channel and self.slack_webhook_url)

    @property
    def print_markdown(self) -> bool:
        """Changelogs are printed when no other target was requested."""
        return not (self.push_to_github or self.save_markdown or self.post_to_slack)
