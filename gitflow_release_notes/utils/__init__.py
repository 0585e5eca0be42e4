"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_INTEGRATION_BRANCH,
    DEFAULT_TAG_PREFIX,
    SECTION_TITLES,
    VERSION_RANGE_SEPARATOR,
)
from .retry import retry_on_rate_limit

__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_INTEGRATION_BRANCH",
    "DEFAULT_TAG_PREFIX",
    "SECTION_TITLES",
    "VERSION_RANGE_SEPARATOR",
    "retry_on_rate_limit",
]
