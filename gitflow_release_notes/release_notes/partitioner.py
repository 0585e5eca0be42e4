"""Split a linear commit list into one window per tag."""

from typing import Sequence

import structlog

from gitflow_release_notes.release_notes.exceptions import MissingBoundaryCommitError
from gitflow_release_notes.release_notes.models import Commit, Release, RepositoryRef, Tag

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def partition_commits(tags: Sequence[Tag], commits: Sequence[Commit], repository: RepositoryRef) -> list[Release]:
    """Assign every commit to the release of the first tag at or after it.

    ``tags`` must be ordered oldest first. Each tag consumes commits from the
    cursor up to and including its target commit. The commit order of the
    compare endpoint is never trusted on its own: a tag whose target commit is
    not found before the list runs out raises MissingBoundaryCommitError.

    Commits after the last tag's target belong to no release and are only
    reported in the log.
    """
    releases: list[Release] = []
    cursor = 0
    for tag in tags:
        window: list[Commit] = []
        found = False
        while cursor < len(commits):
            commit = commits[cursor]
            window.append(commit)
            cursor += 1
            if commit.sha == tag.target_commit_sha:
                found = True
                break
        if not found:
            logger.error(
                "Tag target commit is missing from the fetched commits",
                tag=tag.name,
                target_commit_sha=tag.target_commit_sha,
                commit_count=len(commits),
            )
            raise MissingBoundaryCommitError(tag.name, tag.target_commit_sha, len(window))
        logger.debug("Partitioned release window", tag=tag.name, commit_count=len(window))
        releases.append(Release(tag=tag, repository=repository, commits=window))

    trailing = len(commits) - cursor
    if trailing:
        logger.warning(
            "Commits after the last tag are not part of any release",
            last_tag=tags[-1].name if tags else None,
            trailing_commit_count=trailing,
        )
    return releases
