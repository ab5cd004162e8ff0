"""Production Jira search gateway using the REST API."""

import base64
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from jira_branch.config import JiraConfig
from jira_branch.jira.abc import JiraSearch
from jira_branch.jira.types import Issue, IssuePage, RemoteError

logger = logging.getLogger(__name__)

SEARCH_PATH = "/rest/api/3/search/jql"
DEFAULT_PAGE_SIZE = 50
DEFAULT_TIMEOUT_SECONDS = 30.0
MISSING_SUMMARY = "No summary given"


class RealJiraSearch(JiraSearch):
    """Jira Cloud search via `GET /rest/api/3/search/jql`.

    Pagination uses the endpoint's `nextPageToken`, passed through as the
    opaque page cursor.
    """

    def __init__(
        self,
        config: JiraConfig,
        *,
        default_jql: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize with connection settings.

        Args:
            config: Host and credentials
            default_jql: JQL used when search() is called with query=None
            page_size: maxResults sent with each request
            timeout: Socket timeout in seconds
        """
        self._config = config
        self._default_jql = default_jql
        self._page_size = page_size
        self._timeout = timeout

    def search(self, *, query: str | None, cursor: str | None) -> IssuePage:
        jql = query if query is not None else self._default_jql
        params = {"jql": jql, "fields": "summary", "maxResults": str(self._page_size)}
        if cursor is not None:
            params["nextPageToken"] = cursor

        url = f"{self._config.host}{SEARCH_PATH}?{urllib.parse.urlencode(params)}"
        logger.debug("Searching Jira: jql=%r cursor=%r", jql, cursor)

        data = self._get_json(url)
        page = _parse_page(data)
        logger.debug("Received %d issue(s), more=%s", len(page.issues), page.cursor is not None)
        return page

    @property
    def default_jql(self) -> str:
        return self._default_jql

    def issue_url(self, key: str) -> str:
        return f"{self._config.host}/browse/{key}"

    def _get_json(self, url: str) -> dict[str, Any]:
        """Perform an authenticated GET and decode the JSON body."""
        credentials = f"{self._config.user}:{self._config.token}".encode()
        request = urllib.request.Request(
            url,
            headers={
                "Authorization": f"Basic {base64.b64encode(credentials).decode('ascii')}",
                "Accept": "application/json",
            },
        )

        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                body = response.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            kind = "auth" if e.code in (401, 403) else "http"
            detail = e.read().decode("utf-8", errors="replace") if e.fp else ""
            message = f"HTTP {e.code}: {detail or e.reason}"
            raise RemoteError(kind=kind, message=message) from e
        except urllib.error.URLError as e:
            raise RemoteError(kind="transport", message=str(e.reason)) from e
        except OSError as e:
            raise RemoteError(kind="transport", message=str(e)) from e

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise RemoteError(kind="protocol", message=f"Invalid JSON response: {e}") from e
        if not isinstance(data, dict):
            raise RemoteError(kind="protocol", message="Expected a JSON object")
        return data


def _parse_page(data: dict[str, Any]) -> IssuePage:
    """Convert a search response body into an IssuePage."""
    raw_issues = data.get("issues", [])
    if not isinstance(raw_issues, list):
        raise RemoteError(kind="protocol", message="'issues' is not a list")

    issues: list[Issue] = []
    for raw in raw_issues:
        if not isinstance(raw, dict):
            raise RemoteError(kind="protocol", message="Issue entry is not an object")
        key = raw.get("key")
        if not key:
            raise RemoteError(kind="protocol", message="Issue without a key in response")
        fields = raw.get("fields") or {}
        if not isinstance(fields, dict):
            raise RemoteError(kind="protocol", message=f"Fields of {key} are not an object")
        summary = fields.get("summary") or MISSING_SUMMARY
        issues.append(Issue(key=str(key), summary=str(summary)))

    token = data.get("nextPageToken")
    cursor = None if data.get("isLast", False) or not token else str(token)
    return IssuePage(issues=tuple(issues), cursor=cursor)
