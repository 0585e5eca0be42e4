"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import sys
from pathlib import Path

import click
import typer
from dotenv import load_dotenv
from githubkit.exception import RequestFailed
from typer import Argument, Option
from typer.core import TyperGroup
from typing_extensions import Annotated

from gitflow_release_notes.configuration.env import get_settings
from gitflow_release_notes.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    InvalidVersionRangeError,
    SlackConfigurationError,
)
from gitflow_release_notes.configuration.models import ChangelogOptions, PublishOptions
from gitflow_release_notes.configuration.reconcile import (
    parse_version_range,
    validate_github_authentication_configuration,
    validate_slack_configuration,
)
from gitflow_release_notes.release_notes.driver import run_changelog_workflow
from gitflow_release_notes.release_notes.exceptions import ChangelogError
from gitflow_release_notes.utils.constants import DEFAULT_GITHUB_API_URL
from gitflow_release_notes.utils.log_config import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Automatically generate release notes based on pull requests.")


class RepoGroup(TyperGroup):
    """Group that accepts its own options on either side of the OWNER/REPO argument.

    ``repo octo/app --debug changelog v1.2.0`` is parsed like
    ``repo --debug octo/app changelog v1.2.0``. Options after the subcommand
    name still belong to the subcommand.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        return super().parse_args(ctx, self._hoist_group_options(ctx, args))

    def _hoist_group_options(self, ctx: click.Context, args: list[str]) -> list[str]:
        takes_value: dict[str, bool] = {}
        for param in self.get_params(ctx):
            if isinstance(param, click.Option):
                for name in [*param.opts, *param.secondary_opts]:
                    takes_value[name] = not (param.is_flag or param.count)

        def option_length(index: int) -> int:
            name, has_value, _ = args[index].partition("=")
            return 2 if takes_value.get(name) and not has_value else 1

        leading: list[str] = []
        index = 0
        while index < len(args) and args[index].startswith("-"):
            length = option_length(index)
            leading.extend(args[index : index + length])
            index += length
        if index >= len(args):
            return args

        repo = args[index]
        index += 1
        while index < len(args) and args[index].partition("=")[0] in takes_value:
            length = option_length(index)
            leading.extend(args[index : index + length])
            index += length
        return [*leading, repo, *args[index:]]


repo_app = typer.Typer(cls=RepoGroup, help="Repository-related commands")


def repo_callback(
    ctx: typer.Context,
    repo: Annotated[str, Argument(envvar="REPO", help="GitHub repository ref with owner. Example: franzwilhelm/gitflow-release-notes")],
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = DEFAULT_GITHUB_API_URL,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Set the repository for the current context."""
    configure_logging(debug)
    ctx.ensure_object(dict)
    ctx.obj["repo"] = repo
    ctx.obj["github_api_url"] = github_api_url
    ctx.obj["github_pat_token"] = github_pat_token
    ctx.obj["github_app_id"] = github_app_id
    ctx.obj["github_app_private_key_path"] = github_app_private_key_path
    try:
        ctx.obj["github_auth_type"] = asyncio.run(
            validate_github_authentication_configuration(
                github_pat_token=github_pat_token,
                github_app_id=github_app_id,
                github_app_private_key_path=github_app_private_key_path,
            )
        )
    except GitHubAuthenticationConfigurationUndefinedError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


repo_app.callback()(repo_callback)


@repo_app.command(name="changelog")
def changelog_cli(
    ctx: typer.Context,
    version_range: Annotated[str, Argument(help="Tag or tag range to generate changelogs for, e.g. v1.2.0 or v1.0.0..v1.2.0.")],
    push: Annotated[bool, Option("--push", help="Push changelog to Github instead of saving it locally.")] = False,
    overwrite: Annotated[bool, Option("--overwrite", help="Overwrite existing releases in Github if necessary.")] = False,
    save: Annotated[bool, Option("--save", "-s", help="Save the release notes to files.")] = False,
    output_dir: Annotated[Path, Option("--output-dir", help="Directory the release notes files are saved to.")] = Path("."),
    slack_channel: Annotated[str | None, Option("--slack-channel", "-c", envvar="SLACK_CHANNEL", help="Post release notes to a slack channel.")] = None,
    slack_webhook: Annotated[str | None, Option("--slack-webhook", "-w", envvar="SLACK_WEBHOOK_URL", help="A slack webhook URL.")] = None,
    slack_icon: Annotated[
        str | None, Option("--slack-icon", "-i", envvar="SLACK_ICON_URL", help="A URL containing the icon which will appear in the slack message.")
    ] = None,
    tag_prefix: Annotated[str | None, Option(help="Prefix stripped from tag names before parsing versions.")] = None,
    integration_branch: Annotated[str | None, Option(help="Branch that pull requests are merged into.")] = None,
    tag_limit: Annotated[int | None, Option(min=1, help="Number of most recent tags to fetch.")] = None,
    pull_request_limit: Annotated[int | None, Option(min=1, help="Number of most recent pull requests to fetch.")] = None,
) -> None:
    """Generates changelogs for the specified tag or tag range."""
    settings = get_settings()
    try:
        base, head = parse_version_range(version_range)
        validate_slack_configuration(slack_channel, slack_webhook)
    except (InvalidVersionRangeError, SlackConfigurationError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    if base == head:
        typer.echo(f"Generating changelog for {head}", err=True)
    else:
        typer.echo(f"Generating changelog for tags between {base} and {head}", err=True)

    changelog_options = ChangelogOptions(
        tag_prefix=tag_prefix if tag_prefix is not None else settings.TAG_PREFIX,
        integration_branch=integration_branch or settings.INTEGRATION_BRANCH,
        tag_limit=tag_limit or settings.TAG_LIMIT,
        pull_request_limit=pull_request_limit or settings.PULL_REQUEST_LIMIT,
    )
    publish_options = PublishOptions(
        push_to_github=push,
        overwrite=overwrite,
        save_markdown=save,
        output_dir=output_dir,
        slack_channel=slack_channel,
        slack_webhook_url=slack_webhook,
        slack_icon_url=slack_icon,
    )

    try:
        result = asyncio.run(
            run_changelog_workflow(
                repo=ctx.obj["repo"],
                github_auth_type=ctx.obj["github_auth_type"],
                github_pat_token=ctx.obj["github_pat_token"],
                github_app_id=ctx.obj["github_app_id"],
                github_app_private_key_path=ctx.obj["github_app_private_key_path"],
                github_api_url=ctx.obj["github_api_url"],
                base=base,
                head=head,
                changelog_options=changelog_options,
                publish_options=publish_options,
            )
        )
    except (ChangelogError, ValueError) as exc:
        typer.echo(f"Could not generate releases: {exc}", err=True)
        raise typer.Exit(1) from exc
    except RequestFailed as exc:
        typer.echo(f"Could not generate releases: GitHub responded with status {exc.response.status_code}", err=True)
        raise typer.Exit(1) from exc

    if not result.releases:
        typer.echo("No releases found in the requested range.", err=True)

    for tag_name, markdown in result.rendered.items():
        typer.echo(f"# {tag_name}\n")
        typer.echo(markdown)

    for publish_result in result.publish_results:
        detail = f" ({publish_result.detail})" if publish_result.detail else ""
        typer.echo(f"{publish_result.tag_name} -> {publish_result.target}: {publish_result.status.value}{detail}", err=True)

    if result.errors:
        typer.echo(f"{len(result.errors)} release(s) could not be published.", err=True)
        sys.exit(1)


# --- Register the repo_app as a sub-app of the main Typer app ---
typer_app.add_typer(repo_app, name="repo")


if __name__ == "__main__":
    typer_app()
