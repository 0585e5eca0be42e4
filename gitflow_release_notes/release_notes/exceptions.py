"""Custom exceptions for the release notes module."""

from typing import Any


class ChangelogError(Exception):
    """Base class for errors raised while generating changelogs."""

    pass


class InvalidVersionError(ChangelogError):
    """Raised when a requested base or head version cannot be parsed."""

    def __init__(self, value: str) -> None:
        """Initializes the exception with the offending version string."""
        super().__init__(f"Invalid version '{value}'. Expected a semantic version such as v1.2.3")
        self.value = value


class EmptyTagListError(ChangelogError):
    """Raised when the repository has no tags to build releases from."""

    pass


class MissingBoundaryCommitError(ChangelogError):
    """Raised when a tag's target commit is not part of the fetched commit range.

    Release windows are computed with a single cursor, so a missing boundary
    shifts every window after it. No partial result is ever returned.
    """

    def __init__(self, tag_name: str, target_commit_sha: str, consumed: int) -> None:
        """Initializes the exception with the tag whose boundary was not found."""
        super().__init__(
            f"Could not find the commit {target_commit_sha} for tag {tag_name} after scanning {consumed} commit(s). "
            "Is the original tag commit deleted or rewritten?"
        )
        self.tag_name = tag_name
        self.target_commit_sha = target_commit_sha
        self.consumed = consumed


class SlackWebhookError(ChangelogError):
    """Raised when Slack rejects a webhook message."""

    def __init__(self, status_code: int, response_body: Any = None) -> None:
        """Initializes the exception with the HTTP status returned by Slack."""
        super().__init__(f"Slack webhook returned status code {status_code}")
        self.status_code = status_code
        self.response_body = response_body
