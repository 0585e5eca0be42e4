"""Shared constants used across the application."""

# This file is intended to hold shared constants.

# GitHub Constants
# ----------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub API URL. Override for GitHub Enterprise Server."""

DEFAULT_GITHUB_HOST = "github.com"
"""Host used to build release page URLs."""

DEFAULT_TAG_LIMIT = 100
"""Number of most recent tags fetched. Older tags cannot be used as release boundaries."""

DEFAULT_PULL_REQUEST_LIMIT = 100
"""Number of most recently updated pull requests fetched. Older pull requests are not attributed."""

GITHUB_MAX_PER_PAGE = 100
"""Largest page size accepted by the GitHub REST API."""

# Gitflow Constants
# -----------------

DEFAULT_TAG_PREFIX = "v"
"""Prefix stripped from tag names before parsing them as versions."""

DEFAULT_INTEGRATION_BRANCH = "develop"
"""Branch that feature, bugfix and hotfix pull requests are merged into."""

VERSION_RANGE_SEPARATOR = ".."
"""Separator between base and head in a version range argument (e.g. v1.0.0..v1.2.0)."""

# Release Notes Constants
# -----------------------

SECTION_TITLES = {
    "feature": "Features",
    "bugfix": "Bug fixes",
    "hotfix": "Hotfixes",
    "other": "Other",
}
"""Heading used for each changelog category."""

MARKDOWN_RELEASE_NOTES_TEMPLATE = """\
{% for section in sections -%}
## {{ section.title }}:
{% for pr in section.pull_requests -%}
#### [#{{ pr.number }}]({{ pr.html_url }}): {{ pr.title }}
{{ pr.body }}

{% endfor -%}
{% endfor -%}
"""
"""Jinja2 template for the Markdown changelog of a single release."""

# Slack Constants
# ---------------

SLACK_USERNAME = "Release Notes"
"""Username shown on Slack release note messages."""

SLACK_SECTION_COLORS = {
    "feature": "#315cfd",
    "bugfix": "#d80f5c",
    "hotfix": "#d80f5c",
    "other": "#2a284f",
}
"""Attachment color for each changelog category."""

SLACK_SECTION_DIVIDER = "──────"
"""Line printed at the top of each Slack attachment."""

SLACK_WEBHOOK_TIMEOUT = 10.0
"""Timeout in seconds for posting to a Slack webhook."""
