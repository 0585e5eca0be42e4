# This file is intended to hold the setup for the authenticated githubkit client.

"""Sets up the authenticated githubkit client."""

from pathlib import Path
from typing import TypeAlias

import structlog
from githubkit import GitHub
from githubkit.auth import (
    AppAuthStrategy,
    AppInstallationAuthStrategy,
    TokenAuthStrategy,
    UnauthAuthStrategy,
)

from gitflow_release_notes.configuration.models import GitHubAuthenticationType
from gitflow_release_notes.release_notes.models import RepositoryRef

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

GitHubClient: TypeAlias = GitHub[AppInstallationAuthStrategy] | GitHub[TokenAuthStrategy] | GitHub[UnauthAuthStrategy]


async def get_github_app_client(
    repository: RepositoryRef,
    github_app_id: int,
    github_app_private_key_path: Path,
    github_api_url: str,
) -> GitHub[AppInstallationAuthStrategy]:
    """Returns a client authenticated as the GitHub App installation on the repository."""
    try:
        private_key = Path(github_app_private_key_path).read_text(encoding="utf-8")
        app_client = GitHub(auth=AppAuthStrategy(app_id=github_app_id, private_key=private_key), base_url=github_api_url, http_cache=False)
        response = await app_client.rest.apps.async_get_repo_installation(owner=repository.owner, repo=repository.name)
        return app_client.with_auth(app_client.auth.as_installation(response.parsed_data.id))
    except Exception as e:
        raise ValueError(f"Failed to get GitHub App installation for {repository.full_name}: {e}") from e


async def get_github_client(
    repository: RepositoryRef,
    github_auth_type: GitHubAuthenticationType,
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_api_url: str,
) -> GitHubClient:
    """Returns a GitHub client for the configured authentication type.

    Supports custom base URL for GitHub Enterprise Server (GHES). Without any
    authentication only public repositories can be read and rate limits are low.
    """
    # Disable HTTP caching to always get fresh data
    if github_auth_type == GitHubAuthenticationType.APP:
        if not (github_app_id and github_app_private_key_path):
            raise RuntimeError("GitHub App authentication requires app_id and private_key_path in config.")
        return await get_github_app_client(repository, github_app_id, github_app_private_key_path, github_api_url)
    if github_auth_type == GitHubAuthenticationType.PAT:
        if not github_pat_token:
            raise RuntimeError("GitHub PAT authentication requires github_pat_token in config.")
        return GitHub(auth=TokenAuthStrategy(github_pat_token), base_url=github_api_url, http_cache=False)
    logger.warning("No GitHub token configured, using GitHub client without auth")
    return GitHub(auth=UnauthAuthStrategy(), base_url=github_api_url, http_cache=False)
