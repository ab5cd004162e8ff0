"""Pure filtering logic for the issue browser."""

from jira_branch.jira.types import Issue


def filter_issues(issues: list[Issue], query: str) -> list[Issue]:
    """Filter issues by query matching their key and summary.

    Case-insensitive substring matching against "{key} {summary}", so a
    query may span both (e.g., "123 fix" matches ABC-123 "Fix login").

    Args:
        issues: Issues to filter, in display order
        query: Search query string

    Returns:
        Matching issues in their original relative order.
        Returns all issues if query is empty.
    """
    if not query:
        return issues

    query_lower = query.lower()
    return [issue for issue in issues if query_lower in f"{issue.key} {issue.summary}".lower()]
