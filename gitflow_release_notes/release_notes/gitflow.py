"""Gitflow branch naming conventions used to sort pull requests into changelog sections."""

from typing import Iterable

from gitflow_release_notes.release_notes.models import Category, PullRequest

FEATURE = "feature"
"""Branch name prefix for gitflow feature branches."""

BUGFIX = "bugfix"
"""Branch name prefix for gitflow bugfix branches."""

HOTFIX = "hotfix"
"""Branch name prefix for gitflow hotfix branches."""

RELEASE = "release"
"""Branch name prefix for gitflow release branches."""

GITFLOW_PREFIXES = (FEATURE, BUGFIX, HOTFIX, RELEASE)

_PREFIX_CATEGORIES = {
    FEATURE: Category.FEATURE,
    BUGFIX: Category.BUGFIX,
    HOTFIX: Category.HOTFIX,
    RELEASE: Category.OMITTED,
}

SECTION_ORDER = (Category.FEATURE, Category.BUGFIX, Category.HOTFIX, Category.OTHER)
"""Order in which changelog sections are rendered."""

_SEPARATOR_TABLE = str.maketrans({"-": " ", "_": " "})


def classify_branch(head_ref: str) -> Category:
    """Classify a branch name by the part before its first '/'.

    The comparison is case-sensitive. Release branches are omitted from
    changelogs and anything unrecognised, including names without a '/', is
    Other.
    """
    prefix, separator, _ = head_ref.partition("/")
    if not separator:
        return Category.OTHER
    return _PREFIX_CATEGORIES.get(prefix, Category.OTHER)


def classify(pull_request: PullRequest) -> Category:
    """Classify a pull request by its source branch."""
    return classify_branch(pull_request.head_ref)


def clean_title(title: str) -> str:
    """Remove gitflow prefixes from a pull request title.

    Example input: Feature/new_logIN-pages
    Example output: New Login Pages
    """
    cleaned = title.lower()
    stripped = False
    while True:
        for prefix in GITFLOW_PREFIXES:
            if cleaned.startswith(f"{prefix}/"):
                cleaned = cleaned[len(prefix) + 1 :]
                stripped = True
                break
        else:
            break
    if stripped:
        cleaned = cleaned.translate(_SEPARATOR_TABLE)
    return cleaned.title()


def group_by_category(sections: Iterable[tuple[Category, PullRequest]]) -> dict[Category, list[PullRequest]]:
    """Group classified pull requests into changelog sections, keeping their order.

    Takes the pairs produced by ``Release.sections()``. Only non-empty
    sections are returned, in SECTION_ORDER.
    """
    groups: dict[Category, list[PullRequest]] = {category: [] for category in SECTION_ORDER}
    for category, pull_request in sections:
        if category in groups:
            groups[category].append(pull_request)
    return {category: members for category, members in groups.items() if members}
