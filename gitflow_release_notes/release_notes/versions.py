"""Version parsing and ordering of repository tags."""

from typing import Iterable

import structlog
from semver import Version

from gitflow_release_notes.release_notes.exceptions import InvalidVersionError
from gitflow_release_notes.release_notes.models import Tag, VersionedTag
from gitflow_release_notes.utils.constants import DEFAULT_TAG_PREFIX

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def parse_tag_name(name: str, prefix: str = DEFAULT_TAG_PREFIX) -> tuple[Version, str] | None:
    """Parse a tag name as a version after stripping the fixed prefix.

    Versions follow Semantic Versioning 2.0.0 precedence. Missing minor and
    patch parts default to zero, so ``v1.2`` is ``1.2.0``. Returns the parsed
    version and the prefix that was stripped, or None when the name is not a
    version. Tags without the prefix are parsed as-is.
    """
    stripped = ""
    if prefix and name.startswith(prefix):
        stripped = prefix
    try:
        return Version.parse(name[len(stripped) :], optional_minor_and_patch=True), stripped
    except ValueError:
        return None


def parse_version_bound(value: str, prefix: str = DEFAULT_TAG_PREFIX) -> Version:
    """Parse a user-supplied base or head version."""
    parsed = parse_tag_name(value.strip(), prefix)
    if parsed is None:
        raise InvalidVersionError(value)
    return parsed[0]


class VersionIndex:
    """Tags ordered by version, oldest first.

    Tags that do not parse as a version are kept in ``raw_tags`` but can never
    be used as release boundaries. Tags with identical versions keep their
    fetch order; which one wins is undefined, so a warning is logged.
    """

    def __init__(self, tags: list[VersionedTag], raw_tags: list[Tag]) -> None:
        """Initialize with already-parsed tags in ascending version order."""
        self.tags = tags
        self.raw_tags = raw_tags

    @classmethod
    def from_tags(cls, tags: Iterable[Tag], prefix: str = DEFAULT_TAG_PREFIX) -> "VersionIndex":
        """Build the index from tags in any order."""
        raw_tags = list(tags)
        versioned: list[VersionedTag] = []
        for tag in raw_tags:
            parsed = parse_tag_name(tag.name, prefix)
            if parsed is None:
                logger.debug("Skipping tag that is not a version", tag=tag.name)
                continue
            version, stripped = parsed
            versioned.append(VersionedTag(tag=tag, version=version, prefix=stripped))

        # sorted() is stable, so duplicates stay in fetch order
        versioned = sorted(versioned, key=lambda versioned_tag: versioned_tag.version)
        for previous, current in zip(versioned, versioned[1:]):
            if previous.version == current.version:
                logger.warning(
                    "Multiple tags share the same version, ordering between them is undefined",
                    version=str(current.version),
                    tags=[previous.name, current.name],
                )
        return cls(versioned, raw_tags)

    @property
    def skipped_tags(self) -> list[Tag]:
        """Tags whose name could not be parsed as a version."""
        indexed = {versioned_tag.name for versioned_tag in self.tags}
        return [tag for tag in self.raw_tags if tag.name not in indexed]

    def __len__(self) -> int:
        return len(self.tags)

    def find(self, version: Version) -> VersionedTag | None:
        """Return the first tag with exactly the given version."""
        for versioned_tag in self.tags:
            if versioned_tag.version == version:
                return versioned_tag
        return None

    def resolve_effective_base(self, base: Version) -> Version | None:
        """Resolve the version the commit window is fetched from.

        When a tag equal to ``base`` exists, the effective base is the tag
        immediately preceding it, so that the base tag's own window can be
        fetched and verified. None means the base tag is the oldest tag and
        the window starts at the beginning of history. A base that matches no
        tag is returned unchanged.
        """
        for index, versioned_tag in enumerate(self.tags):
            if versioned_tag.version == base:
                if index == 0:
                    return None
                return self.tags[index - 1].version
        return base

    def between(self, base: Version | None, head: Version) -> list[VersionedTag]:
        """Return tags with ``base < version <= head``, oldest first."""
        return [versioned_tag for versioned_tag in self.tags if (base is None or base < versioned_tag.version) and versioned_tag.version <= head]
