"""Tests for filter_issues logic."""

from jira_branch.jira.fake import make_issue
from jira_branch.tui.filtering.logic import filter_issues


def test_filter_by_summary_substring() -> None:
    """Filters issues by summary substring match."""
    issues = [
        make_issue("ABC-1", "Add user authentication"),
        make_issue("ABC-2", "Fix login bug"),
        make_issue("ABC-3", "Refactor database"),
    ]
    result = filter_issues(issues, "login")
    assert [issue.key for issue in result] == ["ABC-2"]


def test_filter_by_key() -> None:
    """Filters issues by key substring."""
    issues = [
        make_issue("ABC-123", "Plan A"),
        make_issue("OPS-456", "Plan B"),
        make_issue("ABC-789", "Plan C"),
    ]
    result = filter_issues(issues, "ops")
    assert [issue.key for issue in result] == ["OPS-456"]


def test_empty_query_returns_all() -> None:
    """Empty query returns the same list unchanged."""
    issues = [
        make_issue("ABC-1", "Plan A"),
        make_issue("ABC-2", "Plan B"),
        make_issue("ABC-3", "Plan C"),
    ]
    result = filter_issues(issues, "")
    assert result == issues


def test_case_insensitive_summary_match() -> None:
    """Summary matching is case-insensitive."""
    issues = [
        make_issue("ABC-1", "Add USER Authentication"),
        make_issue("ABC-2", "Fix Login Bug"),
    ]
    result = filter_issues(issues, "authentication")
    assert [issue.key for issue in result] == ["ABC-1"]


def test_case_insensitive_query() -> None:
    """Query case doesn't matter."""
    issues = [make_issue("abc-1", "Add user authentication")]
    assert len(filter_issues(issues, "USER")) == 1
    assert len(filter_issues(issues, "ABC")) == 1


def test_no_matches_returns_empty() -> None:
    """No matches returns empty list."""
    issues = [make_issue("ABC-1", "Plan A"), make_issue("ABC-2", "Plan B")]
    assert filter_issues(issues, "nonexistent") == []


def test_partial_key_number_match() -> None:
    """Partial issue number matches every key containing it."""
    issues = [
        make_issue("ABC-123", "Plan A"),
        make_issue("ABC-456", "Plan B"),
        make_issue("ABC-1234", "Plan C"),
    ]
    result = filter_issues(issues, "12")
    assert [issue.key for issue in result] == ["ABC-123", "ABC-1234"]


def test_multiple_matches_preserve_order() -> None:
    """Multiple matches preserve original order."""
    issues = [
        make_issue("ABC-3", "Third feature"),
        make_issue("ABC-1", "First feature"),
        make_issue("ABC-2", "Second feature"),
    ]
    result = filter_issues(issues, "feature")
    assert [issue.key for issue in result] == ["ABC-3", "ABC-1", "ABC-2"]


def test_longer_query_narrows_result() -> None:
    """Extending a query only ever removes issues, keeping the rest in order."""
    issues = [
        make_issue("ABC-1", "Fix broken login"),
        make_issue("ABC-2", "Log rotation"),
        make_issue("ABC-3", "Login page redesign"),
        make_issue("ABC-4", "Unrelated"),
    ]
    previous = filter_issues(issues, "")
    for query in ["l", "lo", "log", "logi", "login", "login "]:
        current = filter_issues(issues, query)
        assert all(issue in previous for issue in current)
        assert current == [issue for issue in previous if issue in current]
        previous = current
    assert [issue.key for issue in previous] == ["ABC-3"]


def test_query_can_span_key_and_summary() -> None:
    """Key and summary are matched as one "{key} {summary}" string."""
    issues = [
        make_issue("ABC-123", "Fix login"),
        make_issue("ABC-124", "Fix logout"),
        make_issue("ABC-125", "Refactor fix helpers"),
    ]
    result = filter_issues(issues, "123 fix")
    assert [issue.key for issue in result] == ["ABC-123"]


def test_query_does_not_match_without_separator() -> None:
    """Key and summary are joined by a single space, nothing else."""
    issues = [make_issue("ABC-1", "Fix")]
    assert filter_issues(issues, "1fix") == []
    assert filter_issues(issues, "1 fix") == issues
