"""Integration tests for the CLI."""

import os
import subprocess
import sys
from pathlib import Path

import pytest


def run_cli(args: list[str], env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    """Helper to run the CLI as a subprocess and capture output.

    Args:
        args: List of command line arguments to pass to the CLI.
        env: Environment for the subprocess. Defaults to the current environment.

    Returns:
        subprocess.CompletedProcess: The result of running the CLI command.
    """
    complete_command = [sys.executable, "-m", "gitflow_release_notes.configuration.cli", *args]
    print(f"Running command: {' '.join(complete_command)}")
    result = subprocess.run(
        complete_command,
        capture_output=True,
        text=True,
        env=env if env is not None else os.environ.copy(),
    )
    print(f"Command result: {result.returncode}")
    print(f"Command stdout: {result.stdout}")
    print(f"Command stderr: {result.stderr}")
    return result


def offline_environment() -> dict[str, str]:
    """Environment without any GitHub or Slack configuration."""
    ignored = {"REPO", "GITHUB_PAT_TOKEN", "GITHUB_APP_ID", "GITHUB_APP_PRIVATE_KEY_PATH", "SLACK_CHANNEL", "SLACK_WEBHOOK_URL"}
    return {key: value for key, value in os.environ.items() if key not in ignored}


def test_no_version_range_provided() -> None:
    """Test that the CLI exits with an error if no version range is provided."""
    result = run_cli(["repo", "octo/app", "changelog"], env=offline_environment())
    assert result.returncode != 0
    assert "Missing argument 'VERSION_RANGE'" in result.stderr


def test_malformed_version_range() -> None:
    """Test that the CLI exits with an error if the version range is malformed."""
    result = run_cli(["repo", "octo/app", "changelog", "v1..v2..v3"], env=offline_environment())
    assert result.returncode == 1
    assert "Bad version range" in result.stderr


def test_slack_channel_without_webhook() -> None:
    """Test that the CLI refuses to post to Slack without a webhook."""
    result = run_cli(["repo", "octo/app", "changelog", "v1.0.0", "--slack-channel", "#releases"], env=offline_environment())
    assert result.returncode == 1
    assert "--slack-webhook is needed to post to slack" in result.stderr


def test_incomplete_app_configuration() -> None:
    """Test that a GitHub App ID without a private key is rejected."""
    result = run_cli(["repo", "octo/app", "--github-app-id", "1", "changelog", "v1.0.0"], env=offline_environment())
    assert result.returncode == 1
    assert "Incomplete GitHub App configuration" in result.stderr


def test_generate_changelog_against_github(tmp_path: Path) -> None:
    """Generate and save changelogs for a real repository."""
    repo = os.getenv("REPO")
    version_range = os.getenv("VERSION_RANGE")
    if not repo or not version_range:
        pytest.skip("REPO and VERSION_RANGE must be set to run against GitHub")

    result = run_cli(["repo", repo, "changelog", version_range, "--save", "--output-dir", str(tmp_path)])

    assert result.returncode == 0
    assert list(tmp_path.glob("*.md")), "No changelog files were written"
