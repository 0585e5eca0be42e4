"""Main release notes generation orchestration."""

import structlog
from semver import Version

from gitflow_release_notes.configuration.models import ChangelogOptions
from gitflow_release_notes.github.abc import GitHubClientBase
from gitflow_release_notes.release_notes.attributor import attribute_pull_requests, build_pull_request_map, check_attribution_coverage
from gitflow_release_notes.release_notes.exceptions import EmptyTagListError
from gitflow_release_notes.release_notes.models import Commit, Release, RepositoryRef
from gitflow_release_notes.release_notes.partitioner import partition_commits
from gitflow_release_notes.release_notes.versions import VersionIndex, parse_version_bound

logger = structlog.get_logger(__name__)


class ChangelogGenerator:
    """Builds the releases between two versions from one snapshot of repository data.

    The base is exclusive and the head inclusive: asking for v1.0.0..v1.2.0
    produces releases for every tag after v1.0.0 up to and including v1.2.0.
    Commits are fetched from the tag before the base, so the base tag's own
    window is verified like every other window before it is dropped.

    IMPORTANT: all data is fetched before windowing starts. Any error raised
    while building windows aborts the whole run and no release is returned.
    """

    def __init__(self, adapter: GitHubClientBase, repository: RepositoryRef, options: ChangelogOptions | None = None) -> None:
        """Initialize with a GitHub adapter and the windowing options."""
        self.adapter = adapter
        self.repository = repository
        self.options = options or ChangelogOptions()

    async def generate(self, base: str, head: str) -> list[Release]:
        """Generate the releases after ``base`` up to and including ``head``.

        Args:
            base: Version or tag name the changelog starts after (e.g. v1.0.0)
            head: Version or tag name of the newest release (e.g. v1.2.0)

        Returns:
            Releases ordered oldest first, each with its commits and pull requests
        """
        base_version = parse_version_bound(base, self.options.tag_prefix)
        head_version = parse_version_bound(head, self.options.tag_prefix)
        log = logger.bind(repo=self.repository.full_name, base=base, head=head)

        tags = await self.adapter.list_tags(limit=self.options.tag_limit)
        if not tags:
            raise EmptyTagListError(f"No tags found in {self.repository.full_name}")
        index = VersionIndex.from_tags(tags, self.options.tag_prefix)
        log.info("Indexed tags", tag_count=len(tags), versioned_tag_count=len(index), skipped=[tag.name for tag in index.skipped_tags])

        effective_base = index.resolve_effective_base(base_version)
        included = index.between(effective_base, head_version)
        if not included:
            log.info("No tags between base and head")
            return []

        commits = await self._fetch_commits(index, base, effective_base, head, head_version)
        windows = partition_commits([versioned_tag.tag for versioned_tag in included], commits, self.repository)

        # Exclusive base: the base tag's window was only needed to anchor the cursor.
        # A single version (base == head) asks for that release alone.
        releases = [
            release for release, versioned_tag in zip(windows, included) if base_version == head_version or versioned_tag.version != base_version
        ]
        if not releases:
            log.info("No releases after the base tag")
            return []

        pull_requests = await self.adapter.list_closed_pull_requests(self.options.integration_branch, limit=self.options.pull_request_limit)
        check_attribution_coverage(pull_requests, [commit for release in releases for commit in release.commits], self.options.pull_request_limit)
        attribute_pull_requests(releases, build_pull_request_map(pull_requests))
        log.info("Generated releases", releases=[release.tag_name for release in releases])
        return releases

    async def _fetch_commits(self, index: VersionIndex, base: str, effective_base: Version | None, head: str, head_version: Version) -> list[Commit]:
        """Fetch the flat commit list from the effective base up to head."""
        head_tag = index.find(head_version)
        head_ref = head_tag.name if head_tag else head
        if effective_base is None:
            # The base is the oldest tag, so the window starts at the first commit
            return await self.adapter.list_commits(head_ref)
        base_tag = index.find(effective_base)
        base_ref = base_tag.name if base_tag else base
        return await self.adapter.compare_commits(base_ref, head_ref)
