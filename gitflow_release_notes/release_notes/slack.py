"""Slack webhook messages for release notes."""

import httpx
import structlog
from markdown_it import MarkdownIt
from markdown_it.token import Token
from pydantic import BaseModel, Field

from gitflow_release_notes.release_notes.exceptions import SlackWebhookError
from gitflow_release_notes.release_notes.gitflow import clean_title, group_by_category
from gitflow_release_notes.release_notes.models import Category, PullRequest, Release
from gitflow_release_notes.utils.constants import (
    SECTION_TITLES,
    SLACK_SECTION_COLORS,
    SLACK_SECTION_DIVIDER,
    SLACK_USERNAME,
    SLACK_WEBHOOK_TIMEOUT,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

_MARKDOWN = MarkdownIt("commonmark").enable("strikethrough")
_SLACK_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;"})
_INLINE_MARKUP = {
    "strong_open": "*",
    "strong_close": "*",
    "em_open": "_",
    "em_close": "_",
    "s_open": "~",
    "s_close": "~",
}
_BLOCK_STARTS = {"paragraph_open", "heading_open", "bullet_list_open", "ordered_list_open", "blockquote_open", "fence", "code_block", "hr"}


def markdown_to_slack(text: str) -> str:
    """Convert GitHub Markdown to Slack mrkdwn.

    The text is parsed as CommonMark, so markup inside code spans and code
    blocks is left untouched. Raw HTML, such as comments left behind by pull
    request templates, is dropped.
    """
    return _SlackRenderer().render(_MARKDOWN.parse(text))


def _escape(text: str) -> str:
    return text.translate(_SLACK_ESCAPES)


def _render_inline(tokens: list[Token]) -> str:
    parts: list[str] = []
    links: list[tuple[str, int]] = []
    for token in tokens:
        if token.type == "text":
            parts.append(_escape(token.content))
        elif token.type in ("softbreak", "hardbreak"):
            parts.append("\n")
        elif token.type in _INLINE_MARKUP:
            parts.append(_INLINE_MARKUP[token.type])
        elif token.type == "code_inline":
            parts.append(f"`{_escape(token.content)}`")
        elif token.type == "link_open":
            links.append((str(token.attrGet("href")), len(parts)))
        elif token.type == "link_close":
            href, start = links.pop()
            label = "".join(parts[start:])
            del parts[start:]
            parts.append(f"<{href}>" if label in ("", href) else f"<{href}|{label}>")
        elif token.type == "image":
            parts.append(f"<{token.attrGet('src')}|{_escape(token.content) or 'image'}>")
    return "".join(parts)


class _SlackRenderer:
    """Writes markdown-it block tokens as Slack mrkdwn lines."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        # None for a bullet list, otherwise the next item number
        self.lists: list[int | None] = []
        self.marker: str | None = None
        self.quote_depth = 0
        self.in_heading = False

    def render(self, tokens: list[Token]) -> str:
        for token in tokens:
            if token.level == 0 and token.type in _BLOCK_STARTS and self.lines:
                self.lines.append("")
            handler = getattr(self, f"_{token.type}", None)
            if handler is not None:
                handler(token)
        return "\n".join(self.lines).strip("\n")

    def _write(self, text: str) -> None:
        quote = "> " * self.quote_depth
        indent = "    " * max(len(self.lists) - 1, 0)
        continuation = quote + (indent + "  " if self.lists else "")
        first = continuation if self.marker is None else quote + indent + self.marker
        self.marker = None
        lines = text.split("\n")
        self.lines.append(first + lines[0])
        self.lines.extend(continuation + line for line in lines[1:])

    def _inline(self, token: Token) -> None:
        text = _render_inline(token.children or [])
        self._write(f"*{text}*" if self.in_heading else text)

    def _heading_open(self, token: Token) -> None:
        self.in_heading = True

    def _heading_close(self, token: Token) -> None:
        self.in_heading = False

    def _bullet_list_open(self, token: Token) -> None:
        self.lists.append(None)

    def _ordered_list_open(self, token: Token) -> None:
        self.lists.append(int(token.attrGet("start") or 1))

    def _bullet_list_close(self, token: Token) -> None:
        self.lists.pop()

    _ordered_list_close = _bullet_list_close

    def _list_item_open(self, token: Token) -> None:
        number = self.lists[-1]
        if number is None:
            self.marker = "• "
        else:
            self.marker = f"{number}. "
            self.lists[-1] = number + 1

    def _blockquote_open(self, token: Token) -> None:
        self.quote_depth += 1

    def _blockquote_close(self, token: Token) -> None:
        self.quote_depth -= 1

    def _fence(self, token: Token) -> None:
        code = _escape(token.content.rstrip("\n"))
        self._write(f"```\n{code}\n```")

    _code_block = _fence

    def _hr(self, token: Token) -> None:
        self._write(SLACK_SECTION_DIVIDER)


class SlackAttachment(BaseModel):
    """A colored block of pull requests in a Slack message."""

    color: str | None = None
    title: str | None = None
    title_link: str | None = None
    pretext: str | None = None
    text: str = ""
    footer: str | None = None
    mrkdwn_in: list[str] = Field(default_factory=list)

    def use_pull_requests(self, pull_requests: list[PullRequest]) -> None:
        """Format pull requests into the attachment text."""
        self.text += f"{SLACK_SECTION_DIVIDER}\n"
        for pull_request in pull_requests:
            self.text += f"<{pull_request.html_url}|#{pull_request.number}>: _*{clean_title(pull_request.title)}*_\n"
            if pull_request.body:
                self.text += f"{markdown_to_slack(pull_request.body)}\n"
            self.text += "\n"
        self.mrkdwn_in = ["text"]


class SlackWebhookMessage(BaseModel):
    """The JSON payload posted to a Slack incoming webhook."""

    channel: str
    username: str | None = None
    icon_url: str | None = None
    text: str | None = None
    attachments: list[SlackAttachment] = Field(default_factory=list)


def build_slack_message(release: Release, channel: str, icon_url: str | None = None) -> SlackWebhookMessage:
    """Build the Slack message announcing a release."""
    attachments: list[SlackAttachment] = []
    for category, pull_requests in group_by_category(release.sections()).items():
        # The catch-all section is shown without a heading
        title = None if category is Category.OTHER else SECTION_TITLES[category.value]
        attachment = SlackAttachment(title=title, color=SLACK_SECTION_COLORS[category.value])
        attachment.use_pull_requests(pull_requests)
        attachments.append(attachment)

    return SlackWebhookMessage(
        channel=channel,
        username=SLACK_USERNAME,
        icon_url=icon_url or None,
        text=f"New release: <{release.github_url()}|{release.repository.name}@{release.tag_name}> :tada:",
        attachments=attachments,
    )


class SlackWebhookClient:
    """Posts messages to a Slack incoming webhook."""

    def __init__(self, webhook_url: str, timeout: float = SLACK_WEBHOOK_TIMEOUT, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialize with the webhook URL."""
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.transport = transport

    async def post(self, message: SlackWebhookMessage) -> None:
        """Post a message, raising SlackWebhookError on a non-200 response."""
        payload = message.model_dump(mode="json", exclude_none=True)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(self.webhook_url, json=payload)
        if response.status_code != httpx.codes.OK:
            logger.error("Slack webhook rejected message", channel=message.channel, status_code=response.status_code, body=response.text)
            raise SlackWebhookError(response.status_code, response.text)
        logger.info("Posted release notes to Slack", channel=message.channel)
