"""Paginated issue fetching on top of the search gateway."""

import logging
import threading
from collections.abc import Iterator

from jira_branch.jira.abc import JiraSearch
from jira_branch.jira.types import Issue

logger = logging.getLogger(__name__)


class IssueFetcher:
    """Walks search result pages and yields issues in server order."""

    def __init__(self, search: JiraSearch) -> None:
        self._search = search

    def fetch_issues(
        self, search_terms: str | None, *, cancelled: threading.Event | None = None
    ) -> Iterator[Issue]:
        """Lazily yield every issue matching search_terms.

        Each call starts a fresh query from the first page. Iteration stops at
        the first page without a cursor or without issues. Issues keep the
        server's ordering; nothing is re-sorted.

        Callers that need all-or-nothing results should collect the iterator
        inside a single try block, so a failure discards the partial set.

        Args:
            search_terms: JQL to run, or None for the gateway's default
            cancelled: When set, no further page is requested

        Raises:
            RemoteError: If any page request fails
        """
        cursor: str | None = None
        page_count = 0
        while True:
            if cancelled is not None and cancelled.is_set():
                logger.debug("Fetch cancelled after %d page(s)", page_count)
                return
            page = self._search.search(query=search_terms, cursor=cursor)
            page_count += 1
            yield from page.issues

            if not page.issues or page.cursor is None:
                logger.debug("Fetch finished after %d page(s)", page_count)
                return
            cursor = page.cursor
