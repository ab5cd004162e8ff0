"""Data types for the Jira issue search gateway."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Issue:
    """A Jira issue as shown in the browser.

    Attributes:
        key: Project-prefixed ticket identifier (e.g., "ABC-123")
        summary: Free-text issue title
    """

    key: str
    summary: str


@dataclass(frozen=True)
class IssuePage:
    """One page of search results.

    Attributes:
        issues: Issues in server-returned order
        cursor: Opaque continuation token, None when no more pages exist
    """

    issues: tuple[Issue, ...]
    cursor: str | None


class RemoteError(Exception):
    """Error from the Jira search API (transport, authentication, or protocol).

    Attributes:
        kind: Short failure category ("auth", "http", "transport", "protocol")
        message: Human-readable description of the failure
    """

    def __init__(self, *, kind: str, message: str) -> None:
        super().__init__(f"Jira request failed ({kind}): {message}")
        self.kind = kind
        self.message = message
