"""Main Textual application for the interactive issue browser."""

import asyncio
import logging
import threading

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import Label

from jira_branch.browser import BrowserLauncher
from jira_branch.jira.abc import JiraSearch
from jira_branch.jira.fetcher import IssueFetcher
from jira_branch.jira.types import Issue, RemoteError
from jira_branch.tui.session import BrowserSession, SessionOutcome, SessionState
from jira_branch.tui.widgets.issue_table import IssueDataTable
from jira_branch.tui.widgets.status_bar import StatusBar

logger = logging.getLogger(__name__)

BROWSING_HINT = "type to filter  ↑/↓ move  enter select  ctrl+u clear  ctrl+o open  esc quit"
LOADING_HINT = "esc cancel"
FAILED_HINT = "r retry  q/esc quit"


class IssueBrowserApp(App[SessionOutcome]):
    """Interactive TUI for picking a Jira issue.

    Keys are forwarded to a BrowserSession; the screen is redrawn from
    `session.render()` after every key. The app exits with the session's
    outcome once an issue is selected, the user cancels, or the user quits
    from the error screen.
    """

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    #query-line {
        height: 1;
        padding: 0 1;
        background: $boost;
    }

    #loading-message {
        padding: 1 2;
    }

    #main-container {
        height: 1fr;
    }
    """

    def __init__(
        self,
        *,
        search: JiraSearch,
        browser: BrowserLauncher,
        search_terms: str | None,
        initial_query: str,
    ) -> None:
        """Initialize the browser app.

        Args:
            search: Jira search gateway
            browser: Launcher used to open issues in the web UI
            search_terms: JQL to fetch, or None for the gateway default
            initial_query: Filter text pre-seeded from the command line
        """
        super().__init__()
        self._search = search
        self._fetcher = IssueFetcher(search)
        self._browser = browser
        self._search_terms = search_terms
        self._initial_query = initial_query
        self._session = BrowserSession(initial_query=initial_query)
        self._fetch_count = 0
        self._fetch_cancelled = threading.Event()

    @property
    def session(self) -> BrowserSession:
        """Current session (replaced on retry)."""
        return self._session

    @property
    def search_terms(self) -> str | None:
        return self._search_terms

    @property
    def fetch_count(self) -> int:
        """Number of fetches started, including retries."""
        return self._fetch_count

    def compose(self) -> ComposeResult:
        """Create the application layout."""
        yield Label("", id="query-line")
        with Container(id="main-container"):
            yield Label("Loading issues from Jira...", id="loading-message")
            yield IssueDataTable()
        yield StatusBar()

    def on_mount(self) -> None:
        """Start the first fetch after mounting."""
        self._table = self.query_one(IssueDataTable)
        self._status_bar = self.query_one(StatusBar)
        self._query_line = self.query_one("#query-line", Label)
        self._loading_label = self.query_one("#loading-message", Label)
        self._start_session()

    def on_unmount(self) -> None:
        """Stop any in-flight fetch when the app shuts down."""
        self._fetch_cancelled.set()

    def _start_session(self) -> None:
        """Begin a fresh session and fetch issues for it."""
        self._session = BrowserSession(initial_query=self._initial_query)
        self._fetch_cancelled = threading.Event()
        self._fetch_count += 1
        self._redraw()
        self.run_worker(self._load_issues(self._session, self._fetch_cancelled), exclusive=True)

    async def _load_issues(self, session: BrowserSession, cancelled: threading.Event) -> None:
        """Fetch issues in a background thread and hand them to the session."""
        loop = asyncio.get_running_loop()
        try:
            issues = await loop.run_in_executor(None, self._collect_issues, cancelled)
        except RemoteError as e:
            logger.debug("Fetch failed: %s", e)
            session.fail_loading(e)
        else:
            session.finish_loading(issues)

        # A retry may have replaced the session while this fetch was running
        if session is self._session and not self._exit_pending():
            self._redraw()

    def _collect_issues(self, cancelled: threading.Event) -> list[Issue]:
        return list(self._fetcher.fetch_issues(self._search_terms, cancelled=cancelled))

    def _exit_pending(self) -> bool:
        return self._session.state in (SessionState.SELECTED, SessionState.CANCELLED)

    def on_key(self, event: events.Key) -> None:
        """Route every key through the session."""
        event.stop()
        event.prevent_default()
        session = self._session

        if session.state == SessionState.FAILED:
            if event.key == "r":
                self._start_session()
            elif event.key in ("q", "escape"):
                self.exit(session.outcome())
            return

        if event.key == "ctrl+o":
            self._open_current_issue()
            return

        session.handle_key(event.key, event.character)
        if session.state in (SessionState.SELECTED, SessionState.CANCELLED):
            # The background fetch stops before its next page request
            self._fetch_cancelled.set()
            self.exit(session.outcome())
            return
        self._redraw()

    def _open_current_issue(self) -> None:
        """Open the highlighted issue in the web browser."""
        issue = self._session.current_issue()
        if issue is None:
            return
        self._browser.launch(self._search.issue_url(issue.key))
        self._status_bar.set_message(f"Opened {issue.key} in browser")

    def _redraw(self) -> None:
        """Project the session frame onto the widgets."""
        frame = self._session.render()

        query_text = Text("filter> ", style="bold")
        query_text.append(frame.query)
        self._query_line.update(query_text)

        loading = frame.state == SessionState.LOADING
        self._loading_label.display = loading
        self._table.display = not loading
        self._table.show_frame(frame)

        self._status_bar.set_message(frame.message)
        if frame.state == SessionState.LOADING:
            self._status_bar.set_hint(LOADING_HINT)
        elif frame.state == SessionState.FAILED:
            self._status_bar.set_hint(FAILED_HINT)
        else:
            self._status_bar.set_hint(BROWSING_HINT)
