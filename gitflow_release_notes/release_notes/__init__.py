"""Release notes generation module."""

from .attributor import AttributionReport, attribute_pull_requests, build_pull_request_map, check_attribution_coverage
from .exceptions import ChangelogError, EmptyTagListError, InvalidVersionError, MissingBoundaryCommitError, SlackWebhookError
from .generator import ChangelogGenerator
from .gitflow import classify, classify_branch, clean_title, group_by_category
from .markdown import MarkdownRenderer
from .models import Category, Commit, PublishResult, PublishStatus, PullRequest, Release, RepositoryRef, Tag, VersionedTag
from .partitioner import partition_commits
from .publisher import ReleasePublisher
from .versions import VersionIndex, parse_tag_name, parse_version_bound

__all__ = [
    "Category",
    "Commit",
    "PullRequest",
    "Release",
    "RepositoryRef",
    "Tag",
    "VersionedTag",
    "PublishResult",
    "PublishStatus",
    "ChangelogError",
    "EmptyTagListError",
    "InvalidVersionError",
    "MissingBoundaryCommitError",
    "SlackWebhookError",
    "VersionIndex",
    "parse_tag_name",
    "parse_version_bound",
    "partition_commits",
    "AttributionReport",
    "attribute_pull_requests",
    "build_pull_request_map",
    "check_attribution_coverage",
    "classify",
    "classify_branch",
    "clean_title",
    "group_by_category",
    "ChangelogGenerator",
    "MarkdownRenderer",
    "ReleasePublisher",
]
