"""Contains exceptions raised when reconciling application configuration."""


class GitHubAuthenticationConfigurationUndefinedError(Exception):
    """Raised when the GitHub authentication configuration is ambiguous or incomplete."""

    pass


class InvalidVersionRangeError(Exception):
    """Raised when a version range argument is not 'base..head' or a single version."""

    def __init__(self, value: str) -> None:
        """Initializes the exception with the offending argument."""
        super().__init__(f"Bad version range '{value}'. Expected 'base..head' (e.g. v1.0.0..v1.2.0) or a single version.")
        self.value = value


class SlackConfigurationError(Exception):
    """Raised when a Slack channel is given without a webhook URL."""

    pass
