"""Orchestrates changelog generation and publishing for the CLI."""

import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from gitflow_release_notes.configuration.models import ChangelogOptions, GitHubAuthenticationType, PublishOptions
from gitflow_release_notes.github.adapter import GitHubKitAdapter
from gitflow_release_notes.release_notes.generator import ChangelogGenerator
from gitflow_release_notes.release_notes.markdown import MarkdownRenderer
from gitflow_release_notes.release_notes.models import PublishResult, PublishStatus, Release
from gitflow_release_notes.release_notes.publisher import ReleasePublisher

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass
class ChangelogWorkflowResult:
    """Contains results of the changelog workflow."""

    releases: list[Release]
    publish_results: list[PublishResult] = field(default_factory=list)
    rendered: dict[str, str] = field(default_factory=dict)

    @property
    def errors(self) -> list[PublishResult]:
        """Publish results that failed."""
        return [result for result in self.publish_results if result.status is PublishStatus.ERROR]


async def run_changelog_workflow(
    repo: str,
    github_auth_type: GitHubAuthenticationType,
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_api_url: str,
    base: str,
    head: str,
    changelog_options: ChangelogOptions,
    publish_options: PublishOptions,
) -> ChangelogWorkflowResult:
    """Generate the releases between base and head, then publish each one.

    Generation errors propagate. Publish errors are collected per release.
    """
    adapter = await GitHubKitAdapter.create(
        repo=repo,
        github_auth_type=github_auth_type,
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_api_url=github_api_url,
    )
    return await run_changelog_workflow_with_adapter(adapter, base, head, changelog_options, publish_options)


async def run_changelog_workflow_with_adapter(
    adapter: GitHubKitAdapter,
    base: str,
    head: str,
    changelog_options: ChangelogOptions,
    publish_options: PublishOptions,
) -> ChangelogWorkflowResult:
    """Run the changelog workflow against an already-created adapter."""
    start_time = time.time()
    generator = ChangelogGenerator(adapter, adapter.repository, changelog_options)
    releases = await generator.generate(base, head)
    logger.info("Generated releases", release_count=len(releases), duration=round(time.time() - start_time, 2))

    result = ChangelogWorkflowResult(releases=releases)
    renderer = MarkdownRenderer()
    if publish_options.print_markdown:
        result.rendered = {release.tag_name: renderer.render(release) for release in releases}
        return result

    publisher = ReleasePublisher(adapter, publish_options, renderer=renderer)
    result.publish_results = await publisher.publish_all(releases)
    if result.errors:
        logger.error("Some releases could not be published", failed=[f"{error.tag_name} ({error.target})" for error in result.errors])
    return result
