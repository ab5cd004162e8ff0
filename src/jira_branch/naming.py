"""Branch naming utilities.

Pure functions for turning a Jira issue into a git branch name and for
finding existing branches that belong to an issue. No I/O.
"""

import re

from jira_branch.jira.types import Issue

MAX_BRANCH_NAME_LENGTH = 60

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify_summary(summary: str) -> str:
    """Lowercase summary and collapse every non-alphanumeric run into a single `-`.

    Examples:
        >>> slugify_summary("Fix login bug!!")
        'fix-login-bug'
        >>> slugify_summary("🔥🔥🔥")
        ''
    """
    return _NON_SLUG_RE.sub("-", summary.lower()).strip("-")


def synthesize_branch_name(issue: Issue) -> str:
    """Derive a git branch name from an issue key and summary.

    Format: {key}-{slug}, lower-cased, at most MAX_BRANCH_NAME_LENGTH characters.

    - The key is only lower-cased, never rewritten
    - The slug keeps `[a-z0-9]` runs separated by single `-`
    - An empty slug (no alphanumerics in the summary) yields just the key
    - Truncation cuts the slug, never the key, and strips a trailing `-`

    A key that is already longer than the limit is returned whole.

    Args:
        issue: Issue to name a branch after

    Returns:
        Branch name, never empty

    Examples:
        >>> synthesize_branch_name(Issue(key="ABC-123", summary="Fix login bug!!"))
        'abc-123-fix-login-bug'
        >>> synthesize_branch_name(Issue(key="OPS-7", summary="🔥🔥🔥"))
        'ops-7'
    """
    key = issue.key.lower()
    slug = slugify_summary(issue.summary)
    if not slug:
        return key

    room = MAX_BRANCH_NAME_LENGTH - len(key) - 1
    if len(slug) > room:
        slug = slug[: max(room, 0)].rstrip("-")
    if not slug:
        return key
    return f"{key}-{slug}"


def matching_branches(branches: list[str], issue: Issue) -> list[str]:
    """Filter local branches down to those created for an issue.

    A branch matches when it equals the lower-cased key or starts with
    `{key}-`. Comparison ignores case. Input order is preserved.

    Examples:
        >>> matching_branches(["main", "abc-1-x", "abc-12-y", "ABC-1"], Issue("ABC-1", "x"))
        ['abc-1-x', 'ABC-1']
    """
    key = issue.key.lower()
    prefix = f"{key}-"
    return [
        branch
        for branch in branches
        if branch.lower() == key or branch.lower().startswith(prefix)
    ]
