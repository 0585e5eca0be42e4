"""Data models for release notes generation."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from semver import Version

from gitflow_release_notes.utils.constants import DEFAULT_GITHUB_HOST


class Category(str, Enum):
    """Changelog section a pull request belongs to."""

    FEATURE = "feature"
    BUGFIX = "bugfix"
    HOTFIX = "hotfix"
    OMITTED = "omitted"
    OTHER = "other"


class PublishStatus(str, Enum):
    """Outcome of publishing a single release."""

    CREATED = "created"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"
    POSTED = "posted"
    WRITTEN = "written"
    ERROR = "error"


class RepositoryRef(BaseModel):
    """Owner and name of a GitHub repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        """Return the repository name with the owner included."""
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, value: str) -> "RepositoryRef":
        """Parse an 'owner/repo' string."""
        parts = value.strip("/").split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError("Invalid repository format. Example: franzwilhelm/gitflow-release-notes")
        return cls(owner=parts[0], name=parts[1])


class Tag(BaseModel):
    """A git tag and the commit it points to."""

    model_config = ConfigDict(frozen=True)

    name: str
    target_commit_sha: str


class Commit(BaseModel):
    """A commit returned by the compare endpoint."""

    model_config = ConfigDict(frozen=True)

    sha: str
    message: str = ""
    author_date: datetime | None = None

    @classmethod
    def from_github(cls, data: dict[str, Any]) -> "Commit":
        """Build a commit from the raw commit JSON returned by GitHub."""
        git_commit = data.get("commit") or {}
        author = git_commit.get("author") or {}
        return cls(sha=data["sha"], message=git_commit.get("message") or "", author_date=author.get("date"))


class PullRequest(BaseModel):
    """A closed pull request and the commit its merge produced."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    body: str = ""
    html_url: str
    head_ref: str = ""
    merge_commit_sha: str | None = None
    merged_at: datetime | None = None

    @classmethod
    def from_github(cls, pull_request: Any) -> "PullRequest":
        """Build a pull request from a githubkit pull request model."""
        head = getattr(pull_request, "head", None)
        return cls(
            number=pull_request.number,
            title=pull_request.title or "",
            body=pull_request.body or "",
            html_url=pull_request.html_url,
            head_ref=getattr(head, "ref", None) or "",
            merge_commit_sha=pull_request.merge_commit_sha or None,
            merged_at=pull_request.merged_at,
        )


class VersionedTag(BaseModel):
    """A tag whose name parsed as a version."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tag: Tag
    version: Version
    prefix: str = ""

    @property
    def name(self) -> str:
        """Return the raw tag name."""
        return self.tag.name


class Release(BaseModel):
    """Commits and merged pull requests between a tag and the tag before it.

    The tag of the release is the one to create release notes for. Its target
    commit is always the last entry of ``commits``.
    """

    tag: Tag
    repository: RepositoryRef
    commits: list[Commit] = Field(default_factory=list)
    pull_requests: list[PullRequest] = Field(default_factory=list)

    @property
    def tag_name(self) -> str:
        """Return the git tag for the release."""
        return self.tag.name

    @property
    def canonical_name(self) -> str:
        """Return the tag name with dots replaced, e.g. 'v1.2.3' becomes 'v1_2_3'."""
        return self.tag_name.replace(".", "_")

    def filename(self, extension: str = "md") -> str:
        """Return an appropriate filename based on the git tag of the release."""
        return f"{self.canonical_name}.{extension}"

    def github_url(self, host: str = DEFAULT_GITHUB_HOST) -> str:
        """Return the URL of the release page on GitHub."""
        return f"https://{host}/{self.repository.full_name}/releases/tag/{self.tag_name}"

    def sections(self) -> list[tuple[Category, PullRequest]]:
        """Return the classified pull requests of the release, omitted ones removed."""
        from gitflow_release_notes.release_notes.gitflow import classify

        classified = [(classify(pull_request), pull_request) for pull_request in self.pull_requests]
        return [(category, pull_request) for category, pull_request in classified if category is not Category.OMITTED]


class PublishResult(BaseModel):
    """Result of publishing a release to one target."""

    tag_name: str
    target: str
    status: PublishStatus
    detail: str | None = None
