"""Abstract interface for Jira issue search.

The search gateway is the only place that talks to Jira. Implementations
(real, fake) must report remote and authentication failures as RemoteError
rather than returning empty pages.
"""

from abc import ABC, abstractmethod

from jira_branch.jira.types import IssuePage


class JiraSearch(ABC):
    """Abstract interface for paginated Jira issue search."""

    @abstractmethod
    def search(self, *, query: str | None, cursor: str | None) -> IssuePage:
        """Fetch one page of issues.

        Args:
            query: JQL to run, or None for the gateway's default JQL
            cursor: Continuation token from the previous page, None for the first page

        Returns:
            IssuePage with issues in server order and the next cursor

        Raises:
            RemoteError: If the request fails or is not authorized
        """
        ...

    @abstractmethod
    def issue_url(self, key: str) -> str:
        """Get the browser URL for an issue.

        Args:
            key: Issue key (e.g., "ABC-123")

        Returns:
            Permalink to the issue in the Jira web UI
        """
        ...
