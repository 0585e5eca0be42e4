"""Markdown rendering of release notes."""

from pathlib import Path

import jinja2
import structlog

from gitflow_release_notes.release_notes.gitflow import clean_title, group_by_category
from gitflow_release_notes.release_notes.models import Release
from gitflow_release_notes.utils.constants import MARKDOWN_RELEASE_NOTES_TEMPLATE, SECTION_TITLES
from gitflow_release_notes.utils.templates import construct_jinja2_template_from_string, render_template

logger = structlog.get_logger(__name__)


class MarkdownRenderer:
    """Renders a release as a Markdown changelog."""

    def __init__(self, template: jinja2.Template | None = None) -> None:
        """Initialize with an optional custom template."""
        self.template = template or construct_jinja2_template_from_string(MARKDOWN_RELEASE_NOTES_TEMPLATE)

    def render(self, release: Release) -> str:
        """Render the changelog of a release. Empty sections are left out."""
        sections = [
            {
                "title": SECTION_TITLES[category.value],
                "pull_requests": [
                    {
                        "number": pull_request.number,
                        "html_url": pull_request.html_url,
                        "title": clean_title(pull_request.title),
                        "body": pull_request.body,
                    }
                    for pull_request in pull_requests
                ],
            }
            for category, pull_requests in group_by_category(release.sections()).items()
        ]
        return render_template(self.template, {"tag_name": release.tag_name, "sections": sections})

    def write(self, release: Release, directory: Path) -> Path:
        """Write the changelog of a release to '<directory>/<v1_2_3>.md'."""
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / release.filename("md")
        path.write_text(self.render(release), encoding="utf-8")
        logger.info("Wrote changelog", release=release.tag_name, path=str(path))
        return path
