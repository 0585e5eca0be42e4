"""Publish generated releases to GitHub, Slack and local files."""

from typing import Awaitable

import structlog
from structlog.contextvars import bound_contextvars

from gitflow_release_notes.configuration.models import PublishOptions
from gitflow_release_notes.github.abc import GitHubClientBase
from gitflow_release_notes.release_notes.markdown import MarkdownRenderer
from gitflow_release_notes.release_notes.models import PublishResult, PublishStatus, Release
from gitflow_release_notes.release_notes.slack import SlackWebhookClient, build_slack_message

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class ReleasePublisher:
    """Sends each release to every requested target.

    Failures are isolated per release and target: one failed push never stops
    the remaining releases from being published.
    """

    def __init__(
        self,
        adapter: GitHubClientBase,
        options: PublishOptions,
        renderer: MarkdownRenderer | None = None,
        slack_client: SlackWebhookClient | None = None,
    ) -> None:
        """Initialize with the GitHub adapter and publish options."""
        self.adapter = adapter
        self.options = options
        self.renderer = renderer or MarkdownRenderer()
        if slack_client is None and options.post_to_slack and options.slack_webhook_url:
            slack_client = SlackWebhookClient(options.slack_webhook_url)
        self.slack_client = slack_client

    async def push_to_github(self, release: Release, overwrite: bool = False) -> PublishResult:
        """Push a release to GitHub. An existing release is only replaced when overwrite is set."""
        body = self.renderer.render(release)
        existing = await self.adapter.get_release_by_tag(release.tag_name)
        if existing is None:
            logger.info("Pushing release to GitHub", release=release.tag_name)
            await self.adapter.create_release(release.tag_name, body)
            return PublishResult(tag_name=release.tag_name, target="github", status=PublishStatus.CREATED)
        if overwrite:
            logger.warning("Overwriting release in GitHub", release=release.tag_name)
            await self.adapter.delete_release(existing.id)
            await self.adapter.create_release(release.tag_name, body)
            return PublishResult(tag_name=release.tag_name, target="github", status=PublishStatus.OVERWRITTEN)
        logger.warning("Skipping push of existing release. Use --overwrite to ignore", release=release.tag_name)
        return PublishResult(tag_name=release.tag_name, target="github", status=PublishStatus.SKIPPED, detail="release already exists")

    async def push_to_slack(self, release: Release) -> PublishResult:
        """Post the release notes of a release to the configured Slack channel."""
        if self.slack_client is None or not self.options.slack_channel:
            raise ValueError("Slack is not configured")
        logger.info("Pushing release to Slack", release=release.tag_name, channel=self.options.slack_channel)
        message = build_slack_message(release, self.options.slack_channel, self.options.slack_icon_url)
        await self.slack_client.post(message)
        return PublishResult(tag_name=release.tag_name, target="slack", status=PublishStatus.POSTED)

    def save_markdown(self, release: Release) -> PublishResult:
        """Write the changelog of a release to the output directory."""
        path = self.renderer.write(release, self.options.output_dir)
        return PublishResult(tag_name=release.tag_name, target="file", status=PublishStatus.WRITTEN, detail=str(path))

    async def publish(self, release: Release) -> list[PublishResult]:
        """Publish one release to every requested target."""
        results: list[PublishResult] = []
        with bound_contextvars(release=release.tag_name):
            if self.options.push_to_github:
                results.append(await self._isolate("github", release, self.push_to_github(release, self.options.overwrite)))
            if self.options.post_to_slack:
                results.append(await self._isolate("slack", release, self.push_to_slack(release)))
            if self.options.save_markdown:
                try:
                    results.append(self.save_markdown(release))
                except OSError as exc:
                    logger.error("Could not write changelog file", error=str(exc))
                    results.append(PublishResult(tag_name=release.tag_name, target="file", status=PublishStatus.ERROR, detail=str(exc)))
        return results

    async def publish_all(self, releases: list[Release]) -> list[PublishResult]:
        """Publish every release, oldest first."""
        results: list[PublishResult] = []
        for release in releases:
            results.extend(await self.publish(release))
        return results

    async def _isolate(self, target: str, release: Release, operation: Awaitable[PublishResult]) -> PublishResult:
        """Await a publish operation, turning its failure into an error result."""
        try:
            return await operation
        except Exception as exc:
            logger.exception(f"Could not push release to {target}")
            return PublishResult(tag_name=release.tag_name, target=target, status=PublishStatus.ERROR, detail=str(exc))
