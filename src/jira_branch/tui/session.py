"""Browser session state machine.

BrowserSession owns everything one run of the issue browser mutates: the
fetched issue set, the live query, the cursor and the lifecycle state. It has
no terminal dependencies, so a scripted key sequence can drive it in tests and
the Textual app only forwards keys and draws `render()`.

Lifecycle:

    LOADING -> BROWSING -> SELECTED | CANCELLED
    LOADING -> FAILED | CANCELLED

SELECTED, CANCELLED and FAILED are terminal. BROWSING never returns to
LOADING: filtering runs over the already-fetched set.
"""

from dataclasses import dataclass
from enum import Enum

from jira_branch.jira.fetcher import IssueFetcher
from jira_branch.jira.types import Issue, RemoteError
from jira_branch.tui.filtering.logic import filter_issues


class SessionState(Enum):
    """Lifecycle state of a browser session."""

    LOADING = "loading"
    BROWSING = "browsing"
    SELECTED = "selected"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.SELECTED, SessionState.CANCELLED, SessionState.FAILED)


@dataclass(frozen=True)
class FrameRow:
    """One visible issue line."""

    key: str
    summary: str
    highlighted: bool


@dataclass(frozen=True)
class Frame:
    """Everything the screen shows, derived from session state.

    Attributes:
        state: Session state at render time
        query: Current query text
        rows: Filtered issues in display order
        message: Status line text (counts, errors, hints)
    """

    state: SessionState
    query: str
    rows: tuple[FrameRow, ...]
    message: str


@dataclass(frozen=True)
class SessionOutcome:
    """Final result of a session.

    Attributes:
        state: Terminal state (or LOADING/BROWSING if the app exited early)
        issue: Selected issue when state is SELECTED
        error: Fetch error when state is FAILED
    """

    state: SessionState
    issue: Issue | None
    error: RemoteError | None


class BrowserSession:
    """State machine for one issue-browsing run."""

    def __init__(self, initial_query: str = "") -> None:
        """Create a session in the LOADING state.

        Args:
            initial_query: Query text pre-seeded from the command line
        """
        self._state = SessionState.LOADING
        self._issues: list[Issue] = []
        self._query = initial_query
        self._view: list[Issue] = []
        self._cursor: int | None = None
        self._selected: Issue | None = None
        self._error: RemoteError | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def query(self) -> str:
        return self._query

    @property
    def issues(self) -> list[Issue]:
        return self._issues

    @property
    def view(self) -> list[Issue]:
        """Issues matching the current query, in fetch order."""
        return self._view

    @property
    def cursor(self) -> int | None:
        """Index into view, or None when nothing can be selected."""
        return self._cursor

    @property
    def error(self) -> RemoteError | None:
        return self._error

    def current_issue(self) -> Issue | None:
        """Issue under the cursor, or None."""
        if self._cursor is None:
            return None
        return self._view[self._cursor]

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def finish_loading(self, issues: list[Issue]) -> None:
        """Enter BROWSING with the complete fetched issue set.

        Ignored unless the session is still LOADING (a cancel may have won).
        """
        if self._state != SessionState.LOADING:
            return
        self._issues = list(issues)
        self._state = SessionState.BROWSING
        self._cursor = 0
        self._refilter()

    def fail_loading(self, error: RemoteError) -> None:
        """Enter FAILED with the fetch error. Ignored unless LOADING."""
        if self._state != SessionState.LOADING:
            return
        self._issues = []
        self._view = []
        self._cursor = None
        self._error = error
        self._state = SessionState.FAILED

    def load(self, fetcher: IssueFetcher, search_terms: str | None) -> None:
        """Fetch all issues synchronously and move to BROWSING or FAILED.

        Partial results from a fetch that fails midway are discarded.
        """
        try:
            issues = list(fetcher.fetch_issues(search_terms))
        except RemoteError as e:
            self.fail_loading(e)
            return
        self.finish_loading(issues)

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------

    def type_character(self, character: str) -> None:
        if self._state != SessionState.BROWSING:
            return
        self._query += character
        self._refilter()

    def backspace(self) -> None:
        if self._state != SessionState.BROWSING or not self._query:
            return
        self._query = self._query[:-1]
        self._refilter()

    def clear_query(self) -> None:
        if self._state != SessionState.BROWSING or not self._query:
            return
        self._query = ""
        self._refilter()

    def move_up(self) -> None:
        if self._state != SessionState.BROWSING or self._cursor is None:
            return
        self._cursor = max(self._cursor - 1, 0)

    def move_down(self) -> None:
        if self._state != SessionState.BROWSING or self._cursor is None:
            return
        self._cursor = min(self._cursor + 1, len(self._view) - 1)

    def confirm(self) -> None:
        """Select the issue under the cursor. No-op when the view is empty."""
        if self._state != SessionState.BROWSING:
            return
        issue = self.current_issue()
        if issue is None:
            return
        self._selected = issue
        self._state = SessionState.SELECTED

    def cancel(self) -> None:
        """Abort the session from LOADING or BROWSING."""
        if self._state.is_terminal:
            return
        self._state = SessionState.CANCELLED

    def handle_key(self, key: str, character: str | None = None) -> None:
        """Dispatch a key by its Textual name.

        Args:
            key: Key name (e.g., "up", "enter", "ctrl+u", "a")
            character: Printable character for the key, if any
        """
        if key == "escape":
            self.cancel()
        elif key == "up":
            self.move_up()
        elif key == "down":
            self.move_down()
        elif key == "enter":
            self.confirm()
        elif key == "backspace":
            self.backspace()
        elif key == "ctrl+u":
            self.clear_query()
        elif character and character.isprintable():
            self.type_character(character)

    def _refilter(self) -> None:
        """Recompute the view and clamp the cursor into it."""
        self._view = filter_issues(self._issues, self._query)
        if not self._view:
            self._cursor = None
        elif self._cursor is None:
            self._cursor = 0
        else:
            self._cursor = min(self._cursor, len(self._view) - 1)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self) -> Frame:
        """Project the current state into a Frame."""
        rows = tuple(
            FrameRow(key=issue.key, summary=issue.summary, highlighted=index == self._cursor)
            for index, issue in enumerate(self._view)
        )
        return Frame(state=self._state, query=self._query, rows=rows, message=self._message())

    def outcome(self) -> SessionOutcome:
        return SessionOutcome(state=self._state, issue=self._selected, error=self._error)

    def _message(self) -> str:
        if self._state == SessionState.LOADING:
            return "Loading issues from Jira..."
        if self._state == SessionState.FAILED:
            assert self._error is not None
            return f"Error: {self._error}"
        if self._state == SessionState.CANCELLED:
            return "Cancelled"
        if self._state == SessionState.SELECTED:
            assert self._selected is not None
            return f"Selected {self._selected.key}"
        if not self._issues:
            return "No issues found"
        if not self._view:
            return f"No matches for {self._query!r} (0/{len(self._issues)})"
        return f"{len(self._view)}/{len(self._issues)} issues"
