"""Unit tests for release notes data models."""

import pytest

from gitflow_release_notes.release_notes.models import Category, Commit, PullRequest, Release, RepositoryRef, Tag


def test_repository_ref_parse() -> None:
    """'owner/repo' is split into owner and name."""
    repository = RepositoryRef.parse("franzwilhelm/gitflow-release-notes")
    assert repository.owner == "franzwilhelm"
    assert repository.name == "gitflow-release-notes"
    assert repository.full_name == "franzwilhelm/gitflow-release-notes"


@pytest.mark.parametrize("value", ["no-slash", "too/many/parts", "/missing-owner", ""])
def test_repository_ref_parse_invalid(value: str) -> None:
    """Anything but exactly one owner and one name is rejected."""
    with pytest.raises(ValueError) as exc_info:
        RepositoryRef.parse(value)
    assert "Invalid repository format" in str(exc_info.value)


def test_release_names_and_urls() -> None:
    """File names and URLs are derived from the tag name."""
    release = Release(tag=Tag(name="v1.2.3", target_commit_sha="abc"), repository=RepositoryRef(owner="octo", name="app"))

    assert release.tag_name == "v1.2.3"
    assert release.canonical_name == "v1_2_3"
    assert release.filename() == "v1_2_3.md"
    assert release.github_url() == "https://github.com/octo/app/releases/tag/v1.2.3"
    assert release.github_url(host="github.example.com") == "https://github.example.com/octo/app/releases/tag/v1.2.3"


def test_release_sections_drop_omitted() -> None:
    """Release branch merges are not part of the sections."""
    release = Release(
        tag=Tag(name="v1.2.3", target_commit_sha="abc"),
        repository=RepositoryRef(owner="octo", name="app"),
        pull_requests=[
            PullRequest(number=1, title="a", html_url="https://github.com/octo/app/pull/1", head_ref="release/1.2.3"),
            PullRequest(number=2, title="b", html_url="https://github.com/octo/app/pull/2", head_ref="bugfix/b"),
        ],
    )

    assert [(category, pull_request.number) for category, pull_request in release.sections()] == [(Category.BUGFIX, 2)]


def test_commit_from_github_without_author() -> None:
    """Missing commit metadata falls back to empty values."""
    commit = Commit.from_github({"sha": "abc", "commit": {"message": "fix", "author": None}})
    assert commit.sha == "abc"
    assert commit.message == "fix"
    assert commit.author_date is None
