"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any

from gitflow_release_notes.release_notes.models import Commit, PullRequest, Tag


class GitHubClientBase(ABC):
    """Operations the changelog generator needs from a source-control host."""

    # Tag Operations
    @abstractmethod
    async def list_tags(self, limit: int = 100) -> list[Tag]:
        """List the most recent tags of the repository."""
        pass

    # Commit Operations
    @abstractmethod
    async def compare_commits(self, base: str, head: str) -> list[Commit]:
        """List the commits reachable from head but not from base."""
        pass

    @abstractmethod
    async def list_commits(self, sha: str, limit: int | None = None) -> list[Commit]:
        """List the commits reachable from a ref, oldest first."""
        pass

    # Pull Request Operations
    @abstractmethod
    async def list_closed_pull_requests(self, base_branch: str, limit: int = 100) -> list[PullRequest]:
        """List the most recently updated closed pull requests targeting a branch, merged or not."""
        pass

    # Release Operations
    @abstractmethod
    async def get_release_by_tag(self, tag_name: str) -> Any | None:
        """Get the release for a tag, or None if there is none."""
        pass

    @abstractmethod
    async def create_release(self, tag_name: str, body: str) -> Any:
        """Create a release for an existing tag."""
        pass

    @abstractmethod
    async def delete_release(self, release_id: int) -> None:
        """Delete a release."""
        pass
