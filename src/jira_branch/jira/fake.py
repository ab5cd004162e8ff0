"""Fake Jira search gateway for testing.

FakeJiraSearch serves canned pages without any network access and records
every call for test assertions.
"""

from jira_branch.jira.abc import JiraSearch
from jira_branch.jira.types import Issue, IssuePage, RemoteError


class FakeJiraSearch(JiraSearch):
    """In-memory fake that returns pre-configured pages.

    Pages are chained by cursor: page N is returned with cursor "N+1" unless
    it is the last page. The first request (cursor None) gets page 0.
    """

    def __init__(
        self,
        *,
        pages: list[list[Issue]] | None = None,
        error: RemoteError | None = None,
        error_on_page: int | None = None,
        host: str = "https://jira.example.com",
    ) -> None:
        """Create FakeJiraSearch with canned pages.

        Args:
            pages: Issues per page, in order. None or [] means a single empty page.
            error: Error to raise instead of returning a page
            error_on_page: Page index that raises `error`; None raises on every call
            host: Base URL used by issue_url()
        """
        self._pages = pages if pages else [[]]
        self._error = error
        self._error_on_page = error_on_page
        self._host = host
        self._calls: list[tuple[str | None, str | None]] = []

    def search(self, *, query: str | None, cursor: str | None) -> IssuePage:
        self._calls.append((query, cursor))
        index = 0 if cursor is None else int(cursor)

        if self._error is not None and self._error_on_page in (None, index):
            raise self._error

        issues = tuple(self._pages[index])
        next_cursor = str(index + 1) if index + 1 < len(self._pages) else None
        return IssuePage(issues=issues, cursor=next_cursor)

    def issue_url(self, key: str) -> str:
        return f"{self._host}/browse/{key}"

    @property
    def calls(self) -> list[tuple[str | None, str | None]]:
        """(query, cursor) pairs passed to search(), in call order.

        This property is for test assertions only.
        """
        return self._calls


def make_issue(key: str, summary: str = "Some issue") -> Issue:
    """Create an Issue with a default summary for tests."""
    return Issue(key=key, summary=summary)
