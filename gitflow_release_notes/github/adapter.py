"""GitHub client adapter for the githubkit library."""

from functools import wraps
from pathlib import Path
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import PullRequestSimple, Release
from githubkit.versions.latest.models import Tag as GitHubTag

from gitflow_release_notes.configuration.models import GitHubAuthenticationType
from gitflow_release_notes.release_notes.models import Commit, PullRequest, RepositoryRef, Tag
from gitflow_release_notes.utils.constants import DEFAULT_GITHUB_API_URL, GITHUB_MAX_PER_PAGE
from gitflow_release_notes.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])
T = TypeVar("T")


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code == 422:
                try:
                    error_data = exc.response.json()
                except Exception:
                    error_data = {}
                message = error_data.get("message", "Unprocessable Entity")
                errors = error_data.get("errors", [])
                logger.error("GitHub 422 Unprocessable Entity", function=func.__name__, message=message, errors=errors, status_code=422)
                raise ValueError(f"GitHub 422 error in {func.__name__}: {message} | errors: {errors}") from exc
            raise

    return wrapper  # type: ignore


async def _collect_pages(fetch_page: Callable[[int, int], Awaitable[list[T]]], limit: int | None) -> list[T]:
    """Fetch pages until the API runs out of items or ``limit`` items are collected."""
    per_page = GITHUB_MAX_PER_PAGE if limit is None else min(limit, GITHUB_MAX_PER_PAGE)
    items: list[T] = []
    page = 1
    while limit is None or len(items) < limit:
        batch = await fetch_page(page, per_page)
        if not batch:
            break
        items.extend(batch)
        if len(batch) < per_page:
            break
        page += 1
    return items if limit is None else items[:limit]


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library.

    The adapter is constructed explicitly and passed to whoever needs it, so
    several repositories or hosts can be used in one process.
    """

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @property
    def repository(self) -> RepositoryRef:
        """The repository this adapter reads from."""
        return RepositoryRef(owner=self.owner, name=self.repo_name)

    @classmethod
    async def create(
        cls,
        repo: str,
        github_auth_type: GitHubAuthenticationType,
        github_pat_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Path | None = None,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_auth_type: Type of authentication (PAT, APP or NONE)
            github_pat_token: Personal access token (required for PAT auth)
            github_app_id: GitHub App ID (required for APP auth)
            github_app_private_key_path: Path to private key file (required for APP auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance
        """
        repository = RepositoryRef.parse(repo)
        logger.info("Creating client for GitHub instance and repository", github_api_url=github_api_url, owner=repository.owner, repo_name=repository.name)
        client = await get_github_client(
            repository=repository,
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_api_url=github_api_url,
        )
        return cls(client, repository.owner, repository.name)

    # Tag Operations
    @retry_on_rate_limit()
    async def list_tags(self, limit: int = 100) -> list[Tag]:
        """List the most recent tags with the commit each one points to."""
        logger.info(f"Fetching the latest {limit} tags", owner=self.owner, repo=self.repo_name)

        async def _fetch_page(page: int, per_page: int) -> list[GitHubTag]:
            response: Response[list[GitHubTag]] = await self.client.rest.repos.async_list_tags(
                owner=self.owner, repo=self.repo_name, per_page=per_page, page=page
            )
            return response.parsed_data

        github_tags = await _collect_pages(_fetch_page, limit)
        tags = [Tag(name=github_tag.name, target_commit_sha=github_tag.commit.sha) for github_tag in github_tags]
        if len(tags) >= limit:
            logger.warning("Tag limit reached, older tags will not generate changelogs", limit=limit, oldest_fetched=tags[-1].name)
        return tags

    # Commit Operations
    @handle_github_422
    @retry_on_rate_limit()
    async def compare_commits(self, base: str, head: str) -> list[Commit]:
        """Return all commits between two tags or hashes, in the order GitHub lists them."""
        logger.info("Fetching all commits between refs", base=base, head=head)

        async def _fetch_page(page: int, per_page: int) -> list[dict[str, Any]]:
            response = await self.client.rest.repos.async_compare_commits(
                owner=self.owner, repo=self.repo_name, basehead=f"{base}...{head}", per_page=per_page, page=page
            )
            # Raw JSON, the commit models do not validate every verification payload
            return response.json().get("commits", [])

        raw_commits = await _collect_pages(_fetch_page, None)
        logger.info("Fetched commits between refs", base=base, head=head, commit_count=len(raw_commits))
        return [Commit.from_github(raw_commit) for raw_commit in raw_commits]

    @retry_on_rate_limit()
    async def list_commits(self, sha: str, limit: int | None = None) -> list[Commit]:
        """List commits reachable from a ref, oldest first."""
        logger.info("Fetching commit history", sha=sha, limit=limit)

        async def _fetch_page(page: int, per_page: int) -> list[dict[str, Any]]:
            response = await self.client.rest.repos.async_list_commits(owner=self.owner, repo=self.repo_name, sha=sha, per_page=per_page, page=page)
            return response.json()

        raw_commits = await _collect_pages(_fetch_page, limit)
        # The commits endpoint lists newest first
        return [Commit.from_github(raw_commit) for raw_commit in reversed(raw_commits)]

    # Pull Request Operations
    @retry_on_rate_limit()
    async def list_closed_pull_requests(self, base_branch: str, limit: int = 100) -> list[PullRequest]:
        """List the most recently updated closed pull requests targeting a branch, merged or not."""
        logger.info(f"Fetching latest {limit} pull requests", base_branch=base_branch)

        async def _fetch_page(page: int, per_page: int) -> list[PullRequestSimple]:
            response: Response[list[PullRequestSimple]] = await self.client.rest.pulls.async_list(
                owner=self.owner,
                repo=self.repo_name,
                state="closed",
                base=base_branch,
                sort="updated",
                direction="desc",
                per_page=per_page,
                page=page,
            )
            return response.parsed_data

        closed = [PullRequest.from_github(pull_request) for pull_request in await _collect_pages(_fetch_page, limit)]
        logger.debug("Fetched pull requests", closed=len(closed), merged=sum(pull_request.merged_at is not None for pull_request in closed))
        return closed

    # Release Operations
    @retry_on_rate_limit()
    async def get_release_by_tag(self, tag_name: str) -> Release | None:
        """Get the release for a tag, or None if the tag has no release yet."""
        try:
            response: Response[Release] = await self.client.rest.repos.async_get_release_by_tag(owner=self.owner, repo=self.repo_name, tag=tag_name)
        except RequestFailed as exc:
            if exc.response.status_code == 404:
                return None
            raise
        return response.parsed_data

    @handle_github_422
    @retry_on_rate_limit()
    async def create_release(self, tag_name: str, body: str) -> Release:
        """Create a release named after an existing tag."""
        response: Response[Release] = await self.client.rest.repos.async_create_release(
            owner=self.owner, repo=self.repo_name, tag_name=tag_name, name=tag_name, body=body
        )
        return response.parsed_data

    @retry_on_rate_limit()
    async def delete_release(self, release_id: int) -> None:
        """Delete a release. The tag itself is kept."""
        await self.client.rest.repos.async_delete_release(owner=self.owner, repo=self.repo_name, release_id=release_id)
