"""Attribute commits in release windows to the pull requests that merged them."""

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import structlog

from gitflow_release_notes.release_notes.models import Commit, PullRequest, Release

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass
class AttributionReport:
    """Summary of an attribution pass over a list of releases."""

    attributed: int = 0
    unattributed_commit_shas: list[str] = field(default_factory=list)


def build_pull_request_map(pull_requests: Iterable[PullRequest]) -> dict[str, PullRequest]:
    """Map merge commit SHAs to the pull requests that produced them.

    Pull requests closed without merging are skipped, even though GitHub
    reports a test merge commit for them.
    """
    pull_request_map: dict[str, PullRequest] = {}
    for pull_request in pull_requests:
        if pull_request.merged_at is None or not pull_request.merge_commit_sha:
            continue
        if pull_request.merge_commit_sha in pull_request_map:
            logger.warning(
                "Merge commit claimed by more than one pull request, keeping the first",
                merge_commit_sha=pull_request.merge_commit_sha,
                kept=pull_request_map[pull_request.merge_commit_sha].number,
                ignored=pull_request.number,
            )
            continue
        pull_request_map[pull_request.merge_commit_sha] = pull_request
    return pull_request_map


def attribute_pull_requests(releases: Sequence[Release], pull_request_map: dict[str, PullRequest]) -> AttributionReport:
    """Append the pull request of each commit to its release, in commit order.

    Commits without a matching pull request are direct commits and contribute
    nothing. Each merge commit lives in exactly one window, so a pull request
    is never attributed to two releases.
    """
    report = AttributionReport()
    for release in releases:
        for commit in release.commits:
            pull_request = pull_request_map.get(commit.sha)
            if pull_request is None:
                report.unattributed_commit_shas.append(commit.sha)
                continue
            release.pull_requests.append(pull_request)
            report.attributed += 1
        logger.debug("Attributed pull requests to release", tag=release.tag_name, pull_request_count=len(release.pull_requests))

    if report.unattributed_commit_shas:
        logger.warning(
            "Commits without a pull request are left out of the changelogs",
            attributed=report.attributed,
            unattributed=len(report.unattributed_commit_shas),
            commit_shas=report.unattributed_commit_shas,
        )
    else:
        logger.info("Attributed commits to pull requests", attributed=report.attributed)
    return report


def check_attribution_coverage(pull_requests: Sequence[PullRequest], commits: Sequence[Commit], page_limit: int) -> bool:
    """Warn when the fetched pull requests may not cover the commit window.

    ``pull_requests`` is the fetched page of closed pull requests, merged or
    not, so a full page is detected even when some of them were never merged.
    If the oldest visible merge happened after the oldest commit in the
    window, older pull requests may be invisible and their commits will show
    up as direct commits. Returns True when coverage looks complete.
    """
    merged = [pull_request for pull_request in pull_requests if pull_request.merged_at is not None]
    if not merged:
        if commits:
            logger.warning("No merged pull requests were found, changelogs will be empty", commit_count=len(commits))
        return not commits

    numbers = sorted(pull_request.number for pull_request in merged)
    logger.warning("Only pull requests in the fetched range will be added to changelogs", oldest=numbers[0], newest=numbers[-1])

    oldest_merge = min(pull_request.merged_at for pull_request in merged if pull_request.merged_at is not None)
    commit_dates = [commit.author_date for commit in commits if commit.author_date is not None]
    if commit_dates and oldest_merge > min(commit_dates):
        logger.warning(
            "Oldest fetched pull request is newer than the oldest commit, some pull requests may not be attributed",
            page_limit=page_limit,
            page_full=len(pull_requests) >= page_limit,
            oldest_merged_at=oldest_merge.isoformat(),
            oldest_commit_date=min(commit_dates).isoformat(),
        )
        return False
    return True
