"""Unit tests for the changelog workflow driver."""

from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from gitflow_release_notes.configuration.models import ChangelogOptions, PublishOptions
from gitflow_release_notes.release_notes.driver import run_changelog_workflow_with_adapter
from gitflow_release_notes.release_notes.models import Commit, PublishStatus, PullRequest, RepositoryRef, Tag


@pytest.fixture
def adapter() -> AsyncMock:
    """An adapter serving two releases with one feature pull request each."""
    mock_adapter = AsyncMock()
    mock_adapter.repository = RepositoryRef(owner="octo", name="app")
    mock_adapter.list_tags.return_value = [Tag(name="v1.1.0", target_commit_sha="c2"), Tag(name="v1.0.0", target_commit_sha="c1")]
    mock_adapter.list_commits.return_value = [Commit(sha="c1"), Commit(sha="c2")]
    mock_adapter.list_closed_pull_requests.return_value = [
        PullRequest(
            number=7,
            title="feature/search",
            html_url="https://github.com/octo/app/pull/7",
            head_ref="feature/search",
            merge_commit_sha="c2",
            merged_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
    ]
    mock_adapter.get_release_by_tag.return_value = None
    return mock_adapter


@pytest.mark.asyncio
async def test_workflow_renders_markdown_without_targets(adapter: AsyncMock) -> None:
    """Without publish targets the changelogs are only rendered."""
    result = await run_changelog_workflow_with_adapter(adapter, "v1.0.0", "v1.1.0", ChangelogOptions(), PublishOptions())

    assert [release.tag_name for release in result.releases] == ["v1.1.0"]
    assert result.rendered["v1.1.0"].startswith("## Features:\n#### [#7](https://github.com/octo/app/pull/7): Search\n")
    assert result.publish_results == []
    adapter.create_release.assert_not_awaited()


@pytest.mark.asyncio
async def test_workflow_publishes_to_targets(adapter: AsyncMock, tmp_path: Path) -> None:
    """Requested targets receive every generated release."""
    options = PublishOptions(push_to_github=True, save_markdown=True, output_dir=tmp_path)

    result = await run_changelog_workflow_with_adapter(adapter, "v1.0.0", "v1.1.0", ChangelogOptions(), options)

    assert [publish_result.status for publish_result in result.publish_results] == [PublishStatus.CREATED, PublishStatus.WRITTEN]
    assert result.errors == []
    assert result.rendered == {}
    assert (tmp_path / "v1_1_0.md").exists()


@pytest.mark.asyncio
async def test_workflow_collects_publish_errors(adapter: AsyncMock) -> None:
    """Failed pushes are reported instead of raised."""
    adapter.create_release.side_effect = RuntimeError("forbidden")

    result = await run_changelog_workflow_with_adapter(adapter, "v1.0.0", "v1.1.0", ChangelogOptions(), PublishOptions(push_to_github=True))

    assert len(result.errors) == 1
    assert result.errors[0].detail == "forbidden"
